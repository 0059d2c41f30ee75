from __future__ import annotations

from datetime import datetime

import pytest
import sqlalchemy as sa

from schoolmap.models.school import NewSchool
from schoolmap.repositories.base import StorageError
from schoolmap.repositories.sql import SqlSchoolRepository, schools_table


def _new_school(name: str, latitude: float = 10.0, longitude: float = 20.0) -> NewSchool:
    return NewSchool(name=name, address=f"{name} Road", latitude=latitude, longitude=longitude)


def test_insert_assigns_increasing_ids(repository: SqlSchoolRepository) -> None:
    first = repository.insert(_new_school("Alpha"))
    second = repository.insert(_new_school("Beta"))
    assert isinstance(first, int)
    assert second > first


def test_fetch_all_returns_rows_in_id_order(repository: SqlSchoolRepository) -> None:
    ids = [repository.insert(_new_school(name, latitude=i, longitude=-i)) for i, name in enumerate(["A", "B", "C"])]

    schools = repository.fetch_all()

    assert [school.id for school in schools] == ids
    assert [school.name for school in schools] == ["A", "B", "C"]
    assert schools[2].latitude == 2.0
    assert schools[2].longitude == -2.0
    assert all(isinstance(school.created_at, datetime) for school in schools)


def test_fetch_all_on_empty_table(repository: SqlSchoolRepository) -> None:
    assert repository.fetch_all() == []


def test_ensure_schema_is_idempotent(repository: SqlSchoolRepository) -> None:
    repository.insert(_new_school("Kept"))
    repository.ensure_schema()
    assert len(repository.fetch_all()) == 1


def test_ping(repository: SqlSchoolRepository) -> None:
    assert repository.ping() is True


def test_missing_table_raises_storage_error() -> None:
    repo = SqlSchoolRepository(url="sqlite://")
    try:
        with pytest.raises(StorageError):
            repo.fetch_all()
        with pytest.raises(StorageError):
            repo.insert(_new_school("Orphan"))
    finally:
        repo.close()


def test_repository_accepts_existing_engine() -> None:
    engine = sa.create_engine("sqlite://")
    repo = SqlSchoolRepository(engine=engine)
    repo.ensure_schema()
    assert sa.inspect(engine).has_table(schools_table.name)
    repo.close()


def test_repository_requires_url_or_engine() -> None:
    with pytest.raises(ValueError):
        SqlSchoolRepository()
