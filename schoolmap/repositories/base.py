from abc import ABC, abstractmethod
from typing import List

from schoolmap.models.school import NewSchool, School


class StorageError(Exception):
    """Base class for record store errors."""
    pass


class SchoolRepository(ABC):
    """Base class for school record stores."""

    @abstractmethod
    def ensure_schema(self) -> None:
        """Create the backing table if it does not exist."""
        pass

    @abstractmethod
    def insert(self, school: NewSchool) -> int:
        """Persist a validated school and return its assigned id."""
        pass

    @abstractmethod
    def fetch_all(self) -> List[School]:
        """Return every stored school, ordered by id."""
        pass

    @abstractmethod
    def ping(self) -> bool:
        """Check that the store is reachable."""
        pass

    def close(self) -> None:
        """Release any held resources."""
        pass
