from __future__ import annotations

from typing import List

import pytest

from schoolmap.core.validation import ValidationError
from schoolmap.models.school import NewSchool, School
from schoolmap.repositories.base import SchoolRepository
from schoolmap.services.schools import SchoolService


class InMemorySchoolRepository(SchoolRepository):
    def __init__(self) -> None:
        self.rows: List[School] = []

    def ensure_schema(self) -> None:
        pass

    def insert(self, school: NewSchool) -> int:
        school_id = len(self.rows) + 1
        self.rows.append(School(id=school_id, **school.model_dump()))
        return school_id

    def fetch_all(self) -> List[School]:
        return list(self.rows)

    def ping(self) -> bool:
        return True


def test_add_school_stores_trimmed_record() -> None:
    repo = InMemorySchoolRepository()
    service = SchoolService(repository=repo)

    school = service.add_school(
        {"name": "  ABC School  ", "address": " 5 Elm St ", "latitude": "40.75", "longitude": "-73.98"}
    )

    assert school.id == 1
    assert school.name == "ABC School"
    assert repo.rows[0].name == "ABC School"
    assert repo.rows[0].address == "5 Elm St"
    assert repo.rows[0].latitude == 40.75


def test_invalid_school_is_not_stored() -> None:
    repo = InMemorySchoolRepository()
    service = SchoolService(repository=repo)

    with pytest.raises(ValidationError) as excinfo:
        service.add_school({"name": "X", "address": "Y", "latitude": "200", "longitude": "0"})

    assert excinfo.value.field == "latitude"
    assert repo.rows == []


def test_list_schools_ranks_by_distance() -> None:
    repo = InMemorySchoolRepository()
    service = SchoolService(repository=repo)
    service.add_school({"name": "Far", "address": "A", "latitude": 48.8566, "longitude": 2.3522})
    service.add_school({"name": "Near", "address": "B", "latitude": 40.7500, "longitude": -73.9800})

    reference, ranked = service.list_schools("40.7589", "-73.9851")

    assert reference.latitude == 40.7589
    assert [item.school.name for item in ranked] == ["Near", "Far"]
    assert ranked[0].distance_km == 1.08


def test_list_schools_rejects_bad_reference_before_reading_store() -> None:
    class ExplodingRepository(InMemorySchoolRepository):
        def fetch_all(self) -> List[School]:
            raise AssertionError("store should not be read")

    service = SchoolService(repository=ExplodingRepository())
    with pytest.raises(ValidationError):
        service.list_schools(None, None)
