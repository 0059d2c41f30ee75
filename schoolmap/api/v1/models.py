from typing import List, Optional
from pydantic import BaseModel, Field


# Response Models
class SchoolData(BaseModel):
    id: int
    name: str
    address: str
    latitude: float
    longitude: float


class SchoolWithDistance(BaseModel):
    id: int
    name: str
    address: str
    latitude: Optional[float] = Field(None, description="Stored latitude, null when not a finite number")
    longitude: Optional[float] = Field(None, description="Stored longitude, null when not a finite number")
    distance_km: float = Field(..., description="Distance from the user location in kilometers")


class UserLocation(BaseModel):
    latitude: float
    longitude: float


class ErrorResponse(BaseModel):
    success: bool = False
    message: str


class AddSchoolResponse(BaseModel):
    success: bool = True
    message: str = "School added successfully"
    data: SchoolData


class ListSchoolsResponse(BaseModel):
    success: bool = True
    message: str = "Schools fetched and sorted by proximity"
    user_location: UserLocation
    count: int
    data: List[SchoolWithDistance]


class HealthResponse(BaseModel):
    success: bool = True
    message: str = "School Management API is running"
    timestamp: str
    database: Optional[bool] = None
