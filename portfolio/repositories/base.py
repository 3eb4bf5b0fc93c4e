"""Generic repository engine for content entities.

``EntityRepository`` implements the full ``IRepository`` contract over one
in-memory collection. What differs per entity type is injected rather than
overridden: the entity model, a store the collection is loaded from and saved
to, an optional validator, and the field accessor map used for sorting,
filtering and searching.

Concurrency model:
    The collection is an immutable tuple. Reads work on whatever tuple is
    current. Mutations hold a per-repository asyncio.Lock, build a new
    tuple, hand it to the store, and swap it in only after the store accepted
    it. Concurrent creates therefore cannot lose each other's writes, and a
    failed save leaves the collection untouched.
"""

import asyncio
import logging
import math
import uuid
from datetime import datetime, timedelta
from typing import (
    Any,
    Awaitable,
    Callable,
    Generic,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
)

from pydantic import BaseModel, ValidationError

from portfolio.config.repository_config import DEFAULT_REPOSITORY_CONFIG, RepositoryConfig
from portfolio.exceptions import (
    BatchItemException,
    EntityNotFoundException,
    RECOVERABLE_CODES,
    PortfolioException,
    ValidationException,
    to_data_error,
)
from portfolio.interfaces.repository import IRepository, UpdateItem
from portfolio.interfaces.store import IStore
from portfolio.interfaces.validator import IValidator
from portfolio.models.common import (
    BaseEntity,
    DataResult,
    FilterParams,
    PageInfo,
    PaginatedResponse,
    PaginationParams,
    ValidationOutcome,
    utc_now,
)
from portfolio.repositories.fields import (
    SEARCHABLE_FIELDS,
    FieldMap,
    attribute_accessors,
    build_predicate,
    build_search_predicate,
    paginate,
    sort_entities,
)
from portfolio.validation.schema_validator import IMMUTABLE_FIELDS, issues_from_error

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseEntity)
R = TypeVar("R")

VALIDATION_FAILED = "Validation failed"


def new_entity_id() -> str:
    return str(uuid.uuid4())


def split_update_item(item: UpdateItem) -> Tuple[str, Mapping[str, Any]]:
    """Normalize an ``(id, updates)`` pair or ``{"id", "data"}`` mapping."""
    if isinstance(item, Mapping):
        if "id" not in item:
            raise ValidationException("Update item is missing 'id'", details={"item": dict(item)})
        return item["id"], item.get("data") or {}
    if isinstance(item, (tuple, list)) and len(item) == 2:
        return item[0], item[1]
    raise ValidationException(
        "Update item must be an (id, updates) pair or an {'id', 'data'} mapping",
        details={"item": repr(item)},
    )


class EntityRepository(IRepository[T], Generic[T]):
    """In-memory repository over one entity collection.

    The collection is loaded from the store on the first data-touching call.
    A load failure is logged and leaves an empty collection; it is never
    reported to the caller that triggered it.

    Attributes:
        entity_type: Registry name of the entity ("project", ...)
        model: Pydantic model of the stored entity
        config: Behavior flags (validation gates; caching and audit are
            applied by decorators)

    Example:
        >>> repo = EntityRepository(Project, InMemoryStore(seed))
        >>> result = await repo.create({"title": "Portfolio", "description": "Site"})
        >>> result.data.id
        '5b0c...'
    """

    entity_type: str = "entity"

    def __init__(
        self,
        model: Type[T],
        store: IStore[T],
        validator: Optional[IValidator[T]] = None,
        config: Optional[RepositoryConfig] = None,
        field_map: Optional[FieldMap] = None,
        search_fields: Sequence[str] = SEARCHABLE_FIELDS,
        entity_type: Optional[str] = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_entity_id,
    ):
        self.model = model
        self.store = store
        self.validator = validator
        self.config = config or DEFAULT_REPOSITORY_CONFIG
        self.field_map: FieldMap = field_map or attribute_accessors(*model.model_fields)
        self.search_fields = tuple(search_fields)
        if entity_type is not None:
            self.entity_type = entity_type
        self._clock = clock
        self._id_factory = id_factory

        self._entities: Tuple[T, ...] = ()
        self._loaded = False
        self._load_lock = asyncio.Lock()
        self._mutation_lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Loading and result boundary
    # ------------------------------------------------------------------

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    async def _ensure_loaded(self) -> Tuple[T, ...]:
        """Load the collection once and return the current snapshot."""
        if self._loaded:
            return self._entities

        async with self._load_lock:
            if not self._loaded:
                try:
                    self._entities = tuple(await self.store.load())
                    logger.debug(f"Loaded {len(self._entities)} {self.entity_type} entities")
                except Exception:
                    logger.warning(
                        f"Failed to load {self.entity_type} data, continuing with an empty collection",
                        exc_info=True,
                    )
                    self._entities = ()
                self._loaded = True

        return self._entities

    async def _run(
        self,
        operation: str,
        action: Callable[[], Awaitable[R]],
        failure_data: Any = None,
    ) -> DataResult[R]:
        """Run one operation and convert any exception into an envelope."""
        try:
            return DataResult.success(await action())
        except PortfolioException as e:
            if e.error_code not in RECOVERABLE_CODES:
                logger.error(f"{self.entity_type}.{operation} failed: {e.message}")
            return DataResult.failure(to_data_error(e), data=failure_data)
        except Exception as e:
            logger.exception(f"Unexpected error in {self.entity_type}.{operation}")
            return DataResult.failure(to_data_error(e), data=failure_data)

    async def _commit(self, entities: Sequence[T]) -> None:
        """Persist a new snapshot, then make it current.

        Must be called with the mutation lock held.
        """
        snapshot = tuple(entities)
        await self.store.save(list(snapshot))
        self._entities = snapshot

    # ------------------------------------------------------------------
    # Entity construction
    # ------------------------------------------------------------------

    async def _check(
        self,
        enabled: bool,
        check: Optional[Callable[[Mapping[str, Any]], Awaitable[ValidationOutcome]]],
        data: Mapping[str, Any],
    ) -> None:
        if not enabled or check is None:
            return
        outcome = await check(data)
        if not outcome.is_valid:
            raise ValidationException(
                VALIDATION_FAILED,
                details=[issue.to_dict() for issue in outcome.errors],
            )

    async def _check_create(self, data: Mapping[str, Any]) -> None:
        check = self.validator.validate_create if self.validator else None
        await self._check(self.config.validate_on_create, check, data)

    async def _check_update(self, updates: Mapping[str, Any]) -> None:
        check = self.validator.validate_update if self.validator else None
        await self._check(self.config.validate_on_update, check, updates)

    def _validate_model(self, payload: Mapping[str, Any]) -> T:
        try:
            return self.model.model_validate(payload)
        except ValidationError as e:
            raise ValidationException(
                VALIDATION_FAILED,
                details=[issue.to_dict() for issue in issues_from_error(e)],
            ) from e

    def _next_timestamp(self, previous: Optional[datetime] = None) -> datetime:
        """Current time, nudged forward so it is strictly after ``previous``."""
        now = self._clock()
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        return now

    def _build_new(self, data: Mapping[str, Any]) -> T:
        if isinstance(data, BaseModel):
            data = data.model_dump()
        payload = {k: v for k, v in data.items() if k not in IMMUTABLE_FIELDS}
        now = self._next_timestamp()
        payload.update(id=self._id_factory(), created_at=now, updated_at=now)
        return self._validate_model(payload)

    def _merge(self, existing: T, updates: Mapping[str, Any]) -> T:
        if isinstance(updates, BaseModel):
            updates = updates.model_dump(exclude_unset=True)
        changes = {k: v for k, v in updates.items() if k not in IMMUTABLE_FIELDS}
        merged = {**existing.model_dump(), **changes}
        merged.update(
            id=existing.id,
            created_at=existing.created_at,
            updated_at=self._next_timestamp(existing.updated_at),
        )
        return self._validate_model(merged)

    @staticmethod
    def _index_of(entities: Sequence[T], id: str) -> int:
        for index, entity in enumerate(entities):
            if entity.id == id:
                return index
        raise EntityNotFoundException(id)

    def _page(self, items: Sequence[T], params: Optional[PaginationParams], sort: bool = True) -> List[T]:
        if params is None:
            return list(items)
        if sort:
            items = sort_entities(items, self.field_map, params.sort_by, params.sort_order)
        return paginate(items, params.page, params.limit)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_all(self, params: Optional[PaginationParams] = None) -> DataResult[List[T]]:
        async def action() -> List[T]:
            return self._page(await self._ensure_loaded(), params)

        return await self._run("get_all", action)

    async def get_paginated(self, params: PaginationParams) -> DataResult[PaginatedResponse[T]]:
        async def action() -> PaginatedResponse[T]:
            entities = await self._ensure_loaded()
            total = len(entities)
            total_pages = math.ceil(total / params.limit)
            return PaginatedResponse(
                data=self._page(entities, params),
                pagination=PageInfo(
                    page=params.page,
                    limit=params.limit,
                    total=total,
                    total_pages=total_pages,
                    has_next=params.page < total_pages,
                    has_prev=params.page > 1,
                ),
            )

        return await self._run("get_paginated", action)

    async def get_by_id(self, id: str) -> DataResult[Optional[T]]:
        async def action() -> Optional[T]:
            for entity in await self._ensure_loaded():
                if entity.id == id:
                    return entity
            return None

        return await self._run("get_by_id", action)

    async def get_by_ids(self, ids: Sequence[str]) -> DataResult[List[T]]:
        async def action() -> List[T]:
            wanted = set(ids)
            return [e for e in await self._ensure_loaded() if e.id in wanted]

        return await self._run("get_by_ids", action)

    async def search(self, query: str, params: Optional[PaginationParams] = None) -> DataResult[List[T]]:
        async def action() -> List[T]:
            matches = build_search_predicate(self.field_map, query, self.search_fields)
            found = [e for e in await self._ensure_loaded() if matches(e)]
            return self._page(found, params, sort=False)

        return await self._run("search", action)

    async def filter(
        self,
        filters: FilterParams,
        params: Optional[PaginationParams] = None,
    ) -> DataResult[List[T]]:
        async def action() -> List[T]:
            return self._page(self._filtered(await self._ensure_loaded(), filters), params)

        return await self._run("filter", action)

    def _filtered(self, entities: Sequence[T], filters: FilterParams) -> List[T]:
        predicate = build_predicate(self.field_map, filters)
        return [e for e in entities if predicate(e)]

    async def exists(self, id: str) -> DataResult[bool]:
        async def action() -> bool:
            return any(e.id == id for e in await self._ensure_loaded())

        return await self._run("exists", action)

    async def count(self, filters: Optional[FilterParams] = None) -> DataResult[int]:
        async def action() -> int:
            entities = await self._ensure_loaded()
            if filters:
                return len(self._filtered(entities, filters))
            return len(entities)

        return await self._run("count", action)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create(self, data: Mapping[str, Any]) -> DataResult[T]:
        async def action() -> T:
            await self._check_create(data)
            await self._ensure_loaded()
            async with self._mutation_lock:
                entity = self._build_new(data)
                await self._commit(self._entities + (entity,))
            logger.debug(f"Created {self.entity_type} {entity.id}")
            return entity

        return await self._run("create", action)

    async def create_many(self, items: Sequence[Mapping[str, Any]]) -> DataResult[List[T]]:
        async def action() -> List[T]:
            await self._ensure_loaded()
            async with self._mutation_lock:
                working = list(self._entities)
                created = []
                for index, data in enumerate(items):
                    try:
                        await self._check_create(data)
                        entity = self._build_new(data)
                    except PortfolioException as e:
                        raise BatchItemException(index, e) from e
                    working.append(entity)
                    created.append(entity)
                await self._commit(working)
            logger.debug(f"Created {len(created)} {self.entity_type} entities")
            return created

        return await self._run("create_many", action)

    async def update(self, id: str, updates: Mapping[str, Any]) -> DataResult[T]:
        async def action() -> T:
            await self._check_update(updates)
            await self._ensure_loaded()
            async with self._mutation_lock:
                working = list(self._entities)
                index = self._index_of(working, id)
                updated = self._merge(working[index], updates)
                working[index] = updated
                await self._commit(working)
            logger.debug(f"Updated {self.entity_type} {id}")
            return updated

        return await self._run("update", action)

    async def update_many(self, items: Sequence[UpdateItem]) -> DataResult[List[T]]:
        async def action() -> List[T]:
            await self._ensure_loaded()
            async with self._mutation_lock:
                working = list(self._entities)
                updated = []
                for index, item in enumerate(items):
                    try:
                        id, updates = split_update_item(item)
                        await self._check_update(updates)
                        position = self._index_of(working, id)
                        entity = self._merge(working[position], updates)
                        working[position] = entity
                    except PortfolioException as e:
                        raise BatchItemException(index, e) from e
                    updated.append(entity)
                await self._commit(working)
            logger.debug(f"Updated {len(updated)} {self.entity_type} entities")
            return updated

        return await self._run("update_many", action)

    async def delete(self, id: str) -> DataResult[bool]:
        async def action() -> bool:
            await self._ensure_loaded()
            async with self._mutation_lock:
                working = list(self._entities)
                del working[self._index_of(working, id)]
                await self._commit(working)
            logger.debug(f"Deleted {self.entity_type} {id}")
            return True

        return await self._run("delete", action, failure_data=False)

    async def delete_many(self, ids: Sequence[str]) -> DataResult[bool]:
        async def action() -> bool:
            await self._ensure_loaded()
            async with self._mutation_lock:
                working = list(self._entities)
                for index, id in enumerate(ids):
                    try:
                        del working[self._index_of(working, id)]
                    except PortfolioException as e:
                        raise BatchItemException(index, e) from e
                await self._commit(working)
            logger.debug(f"Deleted {len(ids)} {self.entity_type} entities")
            return True

        return await self._run("delete_many", action, failure_data=False)
