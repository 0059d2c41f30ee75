from typing import Any, List, Mapping, Tuple
import logging

from schoolmap.core.proximity import rank_by_proximity
from schoolmap.core.validation import validate_coordinate, validate_new_school
from schoolmap.models.location import Coordinate
from schoolmap.models.school import RankedSchool, School
from schoolmap.repositories.base import SchoolRepository

logger = logging.getLogger(__name__)


class SchoolService:
    """Service for adding schools and listing them by proximity."""

    def __init__(self, repository: SchoolRepository):
        self.repository = repository

    def add_school(self, payload: Mapping[str, Any]) -> School:
        """Validate and store a school.

        Raises ValidationError for bad input and StorageError if the store fails.
        """
        new_school = validate_new_school(payload)
        school_id = self.repository.insert(new_school)
        logger.info(f"School added: id={school_id}, name='{new_school.name}'")
        return School(id=school_id, **new_school.model_dump())

    def list_schools(self, latitude: Any, longitude: Any) -> Tuple[Coordinate, List[RankedSchool]]:
        """Return the reference point and every stored school ranked by distance to it."""
        reference = validate_coordinate(latitude, longitude)
        schools = self.repository.fetch_all()
        ranked = rank_by_proximity(schools, reference)
        logger.info(
            f"Ranked {len(ranked)} schools from ({reference.latitude}, {reference.longitude})"
        )
        return reference, ranked
