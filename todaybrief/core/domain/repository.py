"""Base repository interface."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class BaseRepository(ABC, Generic[T]):
    """Common operations shared by every repository."""

    @abstractmethod
    async def get_by_id(self, entity_id: int) -> T | None:
        """Return the entity or None."""
        pass

    @abstractmethod
    async def create(self, entity: T) -> T:
        """Insert the entity and return it with its generated id."""
        pass
