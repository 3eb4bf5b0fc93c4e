"""Repository decorators adding caching and auditing around any repository.

Each decorator implements ``IRepository`` by delegating to the repository it
wraps, adds its concern on the way through, and forwards every other
attribute (entity-specific queries such as ``get_featured``) untouched::

    repo = AuditingRepository(
        CachingRepository(ProjectRepository(store), InMemoryCache(), ttl=300),
        sink=LoggingAuditSink(),
        entity_type="project",
    )
"""

import logging
import types
from typing import Any, Callable, Generic, List, Mapping, Optional, Sequence, TypeVar

from portfolio.exceptions import PortfolioException
from portfolio.interfaces.audit import IAuditSink
from portfolio.interfaces.cache import ICache
from portfolio.interfaces.repository import IRepository, UpdateItem
from portfolio.models.common import (
    DataResult,
    FilterParams,
    PaginatedResponse,
    PaginationParams,
)
from portfolio.models.events import Operation, RepositoryContext, RepositoryEvent
from portfolio.repositories.base import split_update_item

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TTL_SECONDS = 300


def cache_key(entity_id: str) -> str:
    return f"entity:{entity_id}"


def composite(func: Callable) -> Callable:
    """Mark a repository method built only from public ``IRepository`` operations.

    A decorator forwarding such a method rebinds it to itself, so the
    operations it calls pass through the decorator stack instead of going
    straight to the wrapped repository.
    """
    func.__repository_composite__ = True
    return func


class RepositoryDecorator(IRepository[T], Generic[T]):
    """Pass-through repository; subclasses override the operations they extend."""

    def __init__(self, inner: IRepository[T]):
        self._inner = inner

    @property
    def inner(self) -> IRepository[T]:
        return self._inner

    def __getattr__(self, name: str) -> Any:
        # Only called for attributes not found on the decorator itself
        inner = self.__dict__.get("_inner")
        if inner is None:
            raise AttributeError(name)
        attr = getattr(inner, name)
        func = getattr(attr, "__func__", None)
        if getattr(func, "__repository_composite__", False):
            return types.MethodType(func, self)
        return attr

    async def get_all(self, params: Optional[PaginationParams] = None) -> DataResult[List[T]]:
        return await self._inner.get_all(params)

    async def get_paginated(self, params: PaginationParams) -> DataResult[PaginatedResponse[T]]:
        return await self._inner.get_paginated(params)

    async def get_by_id(self, id: str) -> DataResult[Optional[T]]:
        return await self._inner.get_by_id(id)

    async def get_by_ids(self, ids: Sequence[str]) -> DataResult[List[T]]:
        return await self._inner.get_by_ids(ids)

    async def create(self, data: Mapping[str, Any]) -> DataResult[T]:
        return await self._inner.create(data)

    async def create_many(self, items: Sequence[Mapping[str, Any]]) -> DataResult[List[T]]:
        return await self._inner.create_many(items)

    async def update(self, id: str, updates: Mapping[str, Any]) -> DataResult[T]:
        return await self._inner.update(id, updates)

    async def update_many(self, items: Sequence[UpdateItem]) -> DataResult[List[T]]:
        return await self._inner.update_many(items)

    async def delete(self, id: str) -> DataResult[bool]:
        return await self._inner.delete(id)

    async def delete_many(self, ids: Sequence[str]) -> DataResult[bool]:
        return await self._inner.delete_many(ids)

    async def search(self, query: str, params: Optional[PaginationParams] = None) -> DataResult[List[T]]:
        return await self._inner.search(query, params)

    async def filter(
        self,
        filters: FilterParams,
        params: Optional[PaginationParams] = None,
    ) -> DataResult[List[T]]:
        return await self._inner.filter(filters, params)

    async def exists(self, id: str) -> DataResult[bool]:
        return await self._inner.exists(id)

    async def count(self, filters: Optional[FilterParams] = None) -> DataResult[int]:
        return await self._inner.count(filters)


class CachingRepository(RepositoryDecorator[T]):
    """
    Cache-first ``get_by_id`` with write-through on mutations.

    Entities are cached under ``entity:<id>``. Successful creates and
    updates re-cache the entity; successful deletes evict it. Cache failures
    are logged and treated as misses, never surfaced to the caller.
    """

    def __init__(self, inner: IRepository[T], cache: ICache, ttl: float = DEFAULT_TTL_SECONDS):
        super().__init__(inner)
        self.cache = cache
        self.ttl = ttl

    async def _cache_get(self, id: str) -> Optional[T]:
        try:
            return await self.cache.get(cache_key(id))
        except Exception:
            logger.warning(f"Cache read failed for {cache_key(id)}", exc_info=True)
            return None

    async def _cache_put(self, entities: Sequence[Any]) -> None:
        for entity in entities:
            try:
                await self.cache.set(cache_key(entity.id), entity, self.ttl)
            except Exception:
                logger.warning(f"Cache write failed for {cache_key(entity.id)}", exc_info=True)

    async def _cache_evict(self, ids: Sequence[str]) -> None:
        for id in ids:
            try:
                await self.cache.delete(cache_key(id))
            except Exception:
                logger.warning(f"Cache eviction failed for {cache_key(id)}", exc_info=True)

    async def get_by_id(self, id: str) -> DataResult[Optional[T]]:
        cached = await self._cache_get(id)
        if cached is not None:
            return DataResult.success(cached)

        result = await self._inner.get_by_id(id)
        if result.ok and result.data is not None:
            await self._cache_put([result.data])
        return result

    async def create(self, data: Mapping[str, Any]) -> DataResult[T]:
        result = await self._inner.create(data)
        if result.ok:
            await self._cache_put([result.data])
        return result

    async def create_many(self, items: Sequence[Mapping[str, Any]]) -> DataResult[List[T]]:
        result = await self._inner.create_many(items)
        if result.ok:
            await self._cache_put(result.data)
        return result

    async def update(self, id: str, updates: Mapping[str, Any]) -> DataResult[T]:
        result = await self._inner.update(id, updates)
        if result.ok:
            await self._cache_put([result.data])
        return result

    async def update_many(self, items: Sequence[UpdateItem]) -> DataResult[List[T]]:
        result = await self._inner.update_many(items)
        if result.ok:
            await self._cache_put(result.data)
        return result

    async def delete(self, id: str) -> DataResult[bool]:
        result = await self._inner.delete(id)
        if result.ok:
            await self._cache_evict([id])
        return result

    async def delete_many(self, ids: Sequence[str]) -> DataResult[bool]:
        result = await self._inner.delete_many(ids)
        if result.ok:
            await self._cache_evict(ids)
        return result


class AuditingRepository(RepositoryDecorator[T]):
    """
    Records a ``RepositoryEvent`` for every successful entity operation.

    Events:
        read: ``get_by_id`` that found the entity
        create: ``after`` is the new entity
        update: ``before`` and ``after`` snapshots
        delete: ``before`` is the removed entity

    Failed operations record nothing. A sink that raises is logged and does
    not affect the operation's result.
    """

    def __init__(
        self,
        inner: IRepository[T],
        sink: IAuditSink,
        entity_type: str,
        source: Optional[str] = None,
    ):
        super().__init__(inner)
        self.sink = sink
        self.entity_type = entity_type
        self.source = source

    def _record(
        self,
        operation: Operation,
        entity_id: str,
        before: Optional[Any] = None,
        after: Optional[Any] = None,
    ) -> None:
        event = RepositoryEvent(
            entity_type=self.entity_type,
            entity_id=entity_id,
            operation=operation,
            before=before,
            after=after,
            context=RepositoryContext(source=self.source),
        )
        try:
            self.sink.record(event)
        except Exception:
            logger.exception(f"Audit sink failed to record {operation} on {self.entity_type}/{entity_id}")

    async def _snapshot(self, id: str) -> Optional[T]:
        result = await self._inner.get_by_id(id)
        return result.data if result.ok else None

    async def get_by_id(self, id: str) -> DataResult[Optional[T]]:
        result = await self._inner.get_by_id(id)
        if result.ok and result.data is not None:
            self._record("read", id, after=result.data)
        return result

    async def create(self, data: Mapping[str, Any]) -> DataResult[T]:
        result = await self._inner.create(data)
        if result.ok:
            self._record("create", result.data.id, after=result.data)
        return result

    async def create_many(self, items: Sequence[Mapping[str, Any]]) -> DataResult[List[T]]:
        result = await self._inner.create_many(items)
        if result.ok:
            for entity in result.data:
                self._record("create", entity.id, after=entity)
        return result

    async def update(self, id: str, updates: Mapping[str, Any]) -> DataResult[T]:
        before = await self._snapshot(id)
        result = await self._inner.update(id, updates)
        if result.ok:
            self._record("update", id, before=before, after=result.data)
        return result

    async def update_many(self, items: Sequence[UpdateItem]) -> DataResult[List[T]]:
        before = {}
        for item in items:
            try:
                id, _ = split_update_item(item)
            except PortfolioException:
                continue
            if id not in before:
                before[id] = await self._snapshot(id)

        result = await self._inner.update_many(items)
        if result.ok:
            for entity in result.data:
                self._record("update", entity.id, before=before.get(entity.id), after=entity)
        return result

    async def delete(self, id: str) -> DataResult[bool]:
        before = await self._snapshot(id)
        result = await self._inner.delete(id)
        if result.ok:
            self._record("delete", id, before=before)
        return result

    async def delete_many(self, ids: Sequence[str]) -> DataResult[bool]:
        found = await self._inner.get_by_ids(ids)
        before = {e.id: e for e in (found.data or [])}
        result = await self._inner.delete_many(ids)
        if result.ok:
            for id in ids:
                self._record("delete", id, before=before.get(id))
        return result
