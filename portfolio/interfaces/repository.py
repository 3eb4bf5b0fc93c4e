"""Base repository interface for the content data layer.

This module provides the generic repository contract that every content
repository implements, whatever its backing store. All operations are
awaitable and report their outcome through a ``DataResult`` envelope instead
of raising.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, List, Mapping, Optional, Sequence, Tuple, TypeVar, Union

from portfolio.models.common import (
    DataResult,
    FilterParams,
    PaginatedResponse,
    PaginationParams,
)

# Generic type variable for entity types
T = TypeVar("T")

UpdateItem = Union[Tuple[str, Mapping[str, Any]], Mapping[str, Any]]


class IRepository(ABC, Generic[T]):
    """Abstract base class for repository pattern implementation.

    Implement this interface for specific entity types and storage mechanisms,
    or wrap an implementation to add behavior around it.

    Type Parameters:
        T: The type of entity this repository manages

    Example:
        ```python
        repo = ProjectRepository()
        result = await repo.get_by_id("1")
        if result.error:
            render_error(result.error)
        else:
            render(result.data)
        ```
    """

    @abstractmethod
    async def get_all(self, params: Optional[PaginationParams] = None) -> DataResult[List[T]]:
        """Retrieve all entities, optionally sorted and sliced to one page.

        Args:
            params: Optional page, limit and sort options

        Returns:
            Envelope holding the entities. An out-of-range page yields an
            empty list, not an error.
        """
        pass

    @abstractmethod
    async def get_paginated(self, params: PaginationParams) -> DataResult[PaginatedResponse[T]]:
        """Retrieve one page of entities together with page information.

        Args:
            params: Page, limit and sort options

        Returns:
            Envelope holding the page data and total/has_next/has_prev details
        """
        pass

    @abstractmethod
    async def get_by_id(self, id: str) -> DataResult[Optional[T]]:
        """Retrieve a single entity by its identifier.

        Args:
            id: The unique identifier of the entity

        Returns:
            Envelope holding the entity, or None when absent (not an error)
        """
        pass

    @abstractmethod
    async def get_by_ids(self, ids: Sequence[str]) -> DataResult[List[T]]:
        """Retrieve the entities whose ids are in ``ids``, in collection order."""
        pass

    @abstractmethod
    async def create(self, data: Mapping[str, Any]) -> DataResult[T]:
        """Add a new entity built from create input.

        Args:
            data: Entity fields without id and timestamps

        Returns:
            Envelope holding the created entity, or a VALIDATION_ERROR
        """
        pass

    @abstractmethod
    async def create_many(self, items: Sequence[Mapping[str, Any]]) -> DataResult[List[T]]:
        """Create several entities; nothing is committed if any item fails."""
        pass

    @abstractmethod
    async def update(self, id: str, updates: Mapping[str, Any]) -> DataResult[T]:
        """Merge partial updates into an existing entity.

        Args:
            id: The unique identifier of the entity to update
            updates: Partial create input

        Returns:
            Envelope holding the updated entity, or NOT_FOUND/VALIDATION_ERROR
        """
        pass

    @abstractmethod
    async def update_many(self, items: Sequence[UpdateItem]) -> DataResult[List[T]]:
        """Apply several updates; nothing is committed if any item fails.

        Each item is an ``(id, updates)`` pair or a ``{"id": ..., "data": ...}``
        mapping.
        """
        pass

    @abstractmethod
    async def delete(self, id: str) -> DataResult[bool]:
        """Delete an entity.

        Returns:
            Envelope holding True, or False with a NOT_FOUND error
        """
        pass

    @abstractmethod
    async def delete_many(self, ids: Sequence[str]) -> DataResult[bool]:
        """Delete several entities; nothing is committed if any id is missing."""
        pass

    @abstractmethod
    async def search(self, query: str, params: Optional[PaginationParams] = None) -> DataResult[List[T]]:
        """Case-insensitive substring search over the entity's text fields."""
        pass

    @abstractmethod
    async def filter(
        self,
        filters: FilterParams,
        params: Optional[PaginationParams] = None,
    ) -> DataResult[List[T]]:
        """Return entities matching every key of ``filters``."""
        pass

    @abstractmethod
    async def exists(self, id: str) -> DataResult[bool]:
        """Check if an entity exists in the repository."""
        pass

    @abstractmethod
    async def count(self, filters: Optional[FilterParams] = None) -> DataResult[int]:
        """Count all entities, or those matching ``filters``."""
        pass
