from typing import List, Optional
import logging

import sqlalchemy as sa
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from schoolmap.models.school import NewSchool, School
from schoolmap.repositories.base import SchoolRepository, StorageError

logger = logging.getLogger(__name__)

metadata = sa.MetaData()

schools_table = sa.Table(
    "schools",
    metadata,
    sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
    sa.Column("name", sa.String(255), nullable=False),
    sa.Column("address", sa.String(500), nullable=False),
    sa.Column("latitude", sa.Float, nullable=False),
    sa.Column("longitude", sa.Float, nullable=False),
    sa.Column("created_at", sa.TIMESTAMP, server_default=sa.func.current_timestamp()),
)


def create_db_engine(url: str) -> Engine:
    """Build an engine for ``url``.

    In-memory SQLite gets a single shared connection so every thread sees the
    same database.
    """
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"):
            options["poolclass"] = StaticPool
        return sa.create_engine(url, **options)
    return sa.create_engine(url, pool_pre_ping=True)


class SqlSchoolRepository(SchoolRepository):
    """School store backed by a relational database through SQLAlchemy."""

    def __init__(self, url: Optional[str] = None, engine: Optional[Engine] = None):
        if engine is None and url is None:
            raise ValueError("Either url or engine must be provided")
        self.engine = engine if engine is not None else create_db_engine(url)

    def ensure_schema(self) -> None:
        try:
            metadata.create_all(self.engine, tables=[schools_table])
            logger.info("Schools table is ready")
        except SQLAlchemyError as e:
            logger.error(f"Error creating schools table: {e}", exc_info=True)
            raise StorageError(f"Failed to create schools table: {e}") from e

    def insert(self, school: NewSchool) -> int:
        statement = schools_table.insert().values(
            name=school.name,
            address=school.address,
            latitude=school.latitude,
            longitude=school.longitude,
        )
        try:
            with self.engine.begin() as conn:
                result = conn.execute(statement)
                school_id = result.inserted_primary_key[0]
        except SQLAlchemyError as e:
            logger.error(f"Error adding school '{school.name}': {e}", exc_info=True)
            raise StorageError(f"Failed to insert school: {e}") from e
        logger.info(f"Stored school id={school_id} name='{school.name}'")
        return int(school_id)

    def fetch_all(self) -> List[School]:
        statement = sa.select(schools_table).order_by(schools_table.c.id)
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(statement).mappings().all()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching schools: {e}", exc_info=True)
            raise StorageError(f"Failed to fetch schools: {e}") from e
        return [School(**dict(row)) for row in rows]

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(sa.text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning(f"Database ping failed: {e}")
            return False

    def close(self) -> None:
        logger.info("Closing database connections")
        self.engine.dispose()
