from typing import Any, Dict, Optional
import logging
import math
from fastapi import APIRouter, Body, Depends, HTTPException, Query

from schoolmap.api.dependencies import get_school_service
from schoolmap.api.v1.models import (
    AddSchoolResponse,
    ErrorResponse,
    ListSchoolsResponse,
    SchoolData,
    SchoolWithDistance,
    UserLocation,
)
from schoolmap.core.validation import ValidationError
from schoolmap.repositories.base import StorageError
from schoolmap.services.schools import SchoolService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["schools"])

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


def _finite_or_none(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


@router.post("/addSchool", response_model=AddSchoolResponse, status_code=201, responses=ERROR_RESPONSES)
def add_school(
    payload: Optional[Dict[str, Any]] = Body(
        None,
        description="School fields: name, address, latitude, longitude",
        examples=[{"name": "ABC School", "address": "1 Main St", "latitude": 40.7589, "longitude": -73.9851}],
    ),
    school_service: SchoolService = Depends(get_school_service),
):
    """Validate and store a new school."""
    try:
        school = school_service.add_school(payload or {})
    except ValidationError as e:
        logger.warning(f"Rejected school submission: field={e.field} reason={e.reason}")
        raise HTTPException(status_code=400, detail=e.message)
    except StorageError:
        raise HTTPException(status_code=500, detail="Failed to add school to database")

    return AddSchoolResponse(
        data=SchoolData(
            id=school.id,
            name=school.name,
            address=school.address,
            latitude=school.latitude,
            longitude=school.longitude,
        )
    )


@router.get("/listSchools", response_model=ListSchoolsResponse, responses=ERROR_RESPONSES)
def list_schools(
    latitude: Optional[str] = Query(None, description="User latitude (WGS84)"),
    longitude: Optional[str] = Query(None, description="User longitude (WGS84)"),
    school_service: SchoolService = Depends(get_school_service),
):
    """List every school sorted by distance from the given location."""
    try:
        reference, ranked = school_service.list_schools(latitude, longitude)
    except ValidationError as e:
        logger.warning(f"Rejected school listing: field={e.field} reason={e.reason}")
        raise HTTPException(status_code=400, detail=e.message)
    except StorageError:
        raise HTTPException(status_code=500, detail="Failed to fetch schools from database")

    data = [
        SchoolWithDistance(
            id=item.school.id,
            name=item.school.name,
            address=item.school.address,
            latitude=_finite_or_none(item.school.latitude),
            longitude=_finite_or_none(item.school.longitude),
            distance_km=item.distance_km,
        )
        for item in ranked
    ]
    return ListSchoolsResponse(
        user_location=UserLocation(latitude=reference.latitude, longitude=reference.longitude),
        count=len(data),
        data=data,
    )
