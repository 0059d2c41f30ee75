from functools import lru_cache
from fastapi import Depends

from schoolmap.core.settings import get_settings
from schoolmap.repositories.base import SchoolRepository
from schoolmap.repositories.sql import SqlSchoolRepository
from schoolmap.services.schools import SchoolService


@lru_cache()
def get_school_repository() -> SchoolRepository:
    """Get the shared SqlSchoolRepository instance."""
    return SqlSchoolRepository(url=get_settings().database_url)


def get_school_service(
    repository: SchoolRepository = Depends(get_school_repository),
) -> SchoolService:
    """Get SchoolService instance."""
    return SchoolService(repository=repository)
