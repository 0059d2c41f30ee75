from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class NewSchool(BaseModel):
    """A validated school record that has not been stored yet."""

    name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class School(BaseModel):
    """A school record as read back from the store.

    Coordinates are not bounds-checked here: stored values are used as-is.
    """

    id: int
    name: str
    address: str
    latitude: float
    longitude: float
    created_at: Optional[datetime] = None


class RankedSchool(BaseModel):
    school: School
    distance_km: float = Field(..., ge=0, description="Distance from the reference point, rounded to 2 decimals")
