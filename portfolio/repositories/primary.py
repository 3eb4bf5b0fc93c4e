"""Base for content types that normally hold a single record."""

from typing import Any, Generic, Mapping, Optional, TypeVar

from portfolio.models.common import BaseEntity, DataResult, PaginationParams
from portfolio.repositories.base import EntityRepository
from portfolio.repositories.decorators import composite

T = TypeVar("T", bound=BaseEntity)

FIRST_RECORD = PaginationParams(page=1, limit=1)


class PrimaryContentRepository(EntityRepository[T], Generic[T]):
    """Repository whose first record is the one the site displays.

    Contact and about content are stored as collections like every other
    entity, but callers usually want only the primary (first) record.

    Both helpers are written against the public repository operations, so
    when reached through a caching or auditing decorator they run on the
    decorator and its cache and audit trail see the change.
    """

    @composite
    async def get_primary(self) -> DataResult[Optional[T]]:
        result = await self.get_all(FIRST_RECORD)
        if result.error:
            return DataResult.failure(result.error)
        return DataResult.success(result.data[0] if result.data else None)

    @composite
    async def update_primary(self, updates: Mapping[str, Any]) -> DataResult[T]:
        """Update the primary record, creating it from ``updates`` if none exists."""
        primary = await self.get_primary()
        if primary.error:
            return primary
        if primary.data is None:
            return await self.create(updates)
        return await self.update(primary.data.id, updates)
