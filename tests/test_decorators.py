"""
Tests for the caching and auditing repository decorators.
"""

import logging
from datetime import UTC, datetime

import pytest

from portfolio.cache.memory_cache import InMemoryCache
from portfolio.config.repository_config import RepositoryConfig
from portfolio.factories.component_factory import InMemoryComponentFactory
from portfolio.factories.repository_factory import RepositoryFactory
from portfolio.interfaces.audit import IAuditSink
from portfolio.interfaces.cache import ICache
from portfolio.interfaces.repository import IRepository
from portfolio.models.project import Project
from portfolio.repositories.audit import InMemoryAuditSink, LoggingAuditSink
from portfolio.repositories.decorators import (
    AuditingRepository,
    CachingRepository,
    RepositoryDecorator,
    cache_key,
)
from portfolio.repositories.project_repository import ProjectRepository
from portfolio.repositories.stores import InMemoryStore

T0 = datetime(2024, 1, 1, tzinfo=UTC)


class BrokenCache(ICache):
    """Cache whose every operation raises."""

    async def get(self, key):
        raise ConnectionError("cache down")

    async def set(self, key, value, ttl=300):
        raise ConnectionError("cache down")

    async def delete(self, key):
        raise ConnectionError("cache down")

    async def clear(self):
        raise ConnectionError("cache down")

    async def has(self, key):
        raise ConnectionError("cache down")

    def stats(self):
        return {"backend": "broken", "size": 0, "hits": 0, "misses": 0}


class BrokenSink(IAuditSink):
    def record(self, event):
        raise RuntimeError("sink down")


@pytest.fixture
def store():
    return InMemoryStore([
        Project(id="1", title="Alpha", description="First", featured=True, created_at=T0, updated_at=T0),
        Project(id="2", title="Beta", description="Second", created_at=T0, updated_at=T0),
    ])


@pytest.fixture
def inner(store):
    return ProjectRepository(store)


@pytest.fixture
def cache():
    return InMemoryCache()


@pytest.fixture
def sink():
    return InMemoryAuditSink()


class TestRepositoryDecorator:
    """Pass-through behavior shared by all decorators."""

    def test_is_repository(self, inner):
        assert isinstance(RepositoryDecorator(inner), IRepository)

    async def test_forwards_operations(self, inner):
        repo = RepositoryDecorator(inner)
        assert (await repo.count()).data == 2
        assert (await repo.search("alp")).data[0].id == "1"

    async def test_forwards_entity_specific_queries(self, inner, cache):
        repo = CachingRepository(inner, cache)
        result = await repo.get_featured()
        assert [p.id for p in result.data] == ["1"]

    def test_forwards_attributes_through_stack(self, inner, cache, sink):
        repo = AuditingRepository(CachingRepository(inner, cache), sink, entity_type="project")
        assert repo.entity_type == "project"
        assert repo.model is Project
        assert repo.inner.inner is inner

    def test_missing_attribute_raises(self, inner):
        with pytest.raises(AttributeError):
            RepositoryDecorator(inner).no_such_attribute


class TestCachingRepository:
    async def test_get_by_id_populates_cache(self, inner, cache):
        repo = CachingRepository(inner, cache, ttl=60)

        result = await repo.get_by_id("1")
        assert result.data.title == "Alpha"
        assert await cache.get(cache_key("1")) == result.data

    async def test_get_by_id_served_from_cache(self, inner, cache):
        repo = CachingRepository(inner, cache)
        stale = Project(id="1", title="Cached", description="From cache")
        await cache.set(cache_key("1"), stale)

        result = await repo.get_by_id("1")
        assert result.data.title == "Cached"

    async def test_missing_entity_not_cached(self, inner, cache):
        repo = CachingRepository(inner, cache)

        result = await repo.get_by_id("missing")
        assert result.ok
        assert result.data is None
        assert await cache.has(cache_key("missing")) is False

    async def test_create_writes_through(self, inner, cache):
        repo = CachingRepository(inner, cache)
        result = await repo.create({"title": "Gamma", "description": "Third"})
        assert await cache.get(cache_key(result.data.id)) == result.data

    async def test_update_refreshes_cache(self, inner, cache):
        repo = CachingRepository(inner, cache)
        await repo.get_by_id("1")
        await repo.update("1", {"title": "Alpha 2"})

        result = await repo.get_by_id("1")
        assert result.data.title == "Alpha 2"

    async def test_delete_evicts(self, inner, cache):
        repo = CachingRepository(inner, cache)
        await repo.get_by_id("1")
        await repo.delete("1")

        assert await cache.has(cache_key("1")) is False
        assert (await repo.get_by_id("1")).data is None

    async def test_delete_many_evicts(self, inner, cache):
        repo = CachingRepository(inner, cache)
        await repo.get_by_id("1")
        await repo.get_by_id("2")
        await repo.delete_many(["1", "2"])

        assert len(cache) == 0

    async def test_batch_writes_through(self, inner, cache):
        repo = CachingRepository(inner, cache)
        created = await repo.create_many([{"title": "C", "description": "c"}])
        await repo.update_many([("2", {"title": "B2"})])

        assert await cache.get(cache_key(created.data[0].id)) == created.data[0]
        assert (await cache.get(cache_key("2"))).title == "B2"

    async def test_failed_mutation_leaves_cache_alone(self, inner, cache):
        repo = CachingRepository(inner, cache)
        await repo.get_by_id("1")

        result = await repo.update("1", {"category": "spaceship"})
        assert result.error.code == "VALIDATION_ERROR"
        assert (await cache.get(cache_key("1"))).category == "web"

    async def test_cache_failures_are_not_surfaced(self, inner, caplog):
        repo = CachingRepository(inner, BrokenCache())

        with caplog.at_level(logging.WARNING):
            assert (await repo.get_by_id("1")).data.title == "Alpha"
            assert (await repo.create({"title": "C", "description": "c"})).ok
            assert (await repo.delete("2")).ok

        assert "Cache read failed" in caplog.text


class TestAuditingRepository:
    """Successful operations emit events; failures emit nothing."""

    async def test_create_event(self, inner, sink):
        repo = AuditingRepository(inner, sink, entity_type="project", source="test")
        result = await repo.create({"title": "Gamma", "description": "Third"})

        assert len(sink) == 1
        event = sink.events[0]
        assert event.operation == "create"
        assert event.entity_type == "project"
        assert event.entity_id == result.data.id
        assert event.after == result.data
        assert event.before is None
        assert event.context.source == "test"

    async def test_read_event_only_when_found(self, inner, sink):
        repo = AuditingRepository(inner, sink, entity_type="project")
        await repo.get_by_id("1")
        await repo.get_by_id("missing")

        assert sink.operations() == ["read"]
        assert sink.events[0].entity_id == "1"

    async def test_list_operations_are_not_audited(self, inner, sink):
        repo = AuditingRepository(inner, sink, entity_type="project")
        await repo.get_all()
        await repo.search("a")
        await repo.count()
        assert len(sink) == 0

    async def test_update_event_has_before_and_after(self, inner, sink):
        repo = AuditingRepository(inner, sink, entity_type="project")
        await repo.update("1", {"title": "Alpha 2"})

        event = sink.events[-1]
        assert event.operation == "update"
        assert event.before.title == "Alpha"
        assert event.after.title == "Alpha 2"

    async def test_delete_event_has_before(self, inner, sink):
        repo = AuditingRepository(inner, sink, entity_type="project")
        await repo.delete("2")

        event = sink.events[-1]
        assert event.operation == "delete"
        assert event.before.title == "Beta"
        assert event.after is None

    async def test_failed_operations_record_nothing(self, inner, sink):
        repo = AuditingRepository(inner, sink, entity_type="project")
        await repo.create({"title": ""})
        await repo.update("missing", {"title": "X"})
        await repo.delete("missing")
        await repo.delete_many(["1", "missing"])

        assert len(sink) == 0

    async def test_batch_events(self, inner, sink):
        repo = AuditingRepository(inner, sink, entity_type="project")
        await repo.create_many([{"title": "C", "description": "c"}, {"title": "D", "description": "d"}])
        await repo.update_many([{"id": "1", "data": {"title": "A2"}}])
        await repo.delete_many(["2"])

        assert sink.operations() == ["create", "create", "update", "delete"]
        assert sink.for_entity("1")[0].before.title == "Alpha"
        assert sink.for_entity("2")[0].before.title == "Beta"

    async def test_sink_failure_does_not_affect_result(self, inner, caplog):
        repo = AuditingRepository(inner, BrokenSink(), entity_type="project")

        with caplog.at_level(logging.ERROR):
            result = await repo.create({"title": "Gamma", "description": "Third"})

        assert result.ok
        assert (await inner.count()).data == 3
        assert "Audit sink failed" in caplog.text

    async def test_read_audited_on_cache_hit(self, inner, cache, sink):
        repo = AuditingRepository(CachingRepository(inner, cache), sink, entity_type="project")
        await repo.get_by_id("1")
        await repo.get_by_id("1")

        assert sink.operations() == ["read", "read"]
        assert cache.stats()["hits"] == 1


class TestAuditSinks:
    def test_in_memory_sink_clear(self, sink):
        from portfolio.models.events import RepositoryEvent

        sink.record(RepositoryEvent(entity_type="project", entity_id="1", operation="read"))
        assert len(sink) == 1
        sink.clear()
        assert len(sink) == 0

    def test_logging_sink(self, caplog):
        from portfolio.models.events import RepositoryEvent

        event = RepositoryEvent(entity_type="project", entity_id="7", operation="delete")
        with caplog.at_level(logging.INFO, logger="portfolio.audit"):
            LoggingAuditSink().record(event)

        assert "[AUDIT] delete project/7" in caplog.text
        assert caplog.records[-1].audit_event is event


class TestPrimaryContentThroughDecorators:
    """Primary-record helpers run on the outermost decorator."""

    @pytest.fixture
    def stack(self):
        cache = InMemoryCache()
        sink = InMemoryAuditSink()
        factory = RepositoryFactory(
            InMemoryComponentFactory(
                {"contact": [{"id": "c1", "name": "Ron"}]},
                cache=cache,
                audit_sink=sink,
            )
        )
        repo = factory.create("contact", RepositoryConfig(cache_enabled=True, enable_audit_log=True))
        return repo, cache, sink

    async def test_update_primary_refreshes_cache(self, stack):
        repo, cache, sink = stack
        assert (await repo.get_by_id("c1")).data.name == "Ron"

        result = await repo.update_primary({"name": "Changed"})

        assert result.ok
        assert (await cache.get(cache_key("c1"))).name == "Changed"
        assert (await repo.get_by_id("c1")).data.name == "Changed"
        assert (await repo.get_primary()).data.name == "Changed"

    async def test_update_primary_is_audited(self, stack):
        repo, _, sink = stack
        await repo.update_primary({"name": "Changed"})

        assert sink.operations() == ["update"]
        event = sink.events[0]
        assert event.entity_id == "c1"
        assert event.before.name == "Ron"
        assert event.after.name == "Changed"

    async def test_update_primary_creates_through_stack(self):
        cache = InMemoryCache()
        sink = InMemoryAuditSink()
        factory = RepositoryFactory(InMemoryComponentFactory(cache=cache, audit_sink=sink))
        repo = factory.create("contact", RepositoryConfig(cache_enabled=True, enable_audit_log=True))

        result = await repo.update_primary({"name": "Jane"})

        assert result.ok
        assert sink.operations() == ["create"]
        assert (await cache.get(cache_key(result.data.id))).name == "Jane"

    async def test_helpers_bound_to_outermost_decorator(self, stack):
        repo, _, _ = stack
        assert isinstance(repo, AuditingRepository)
        assert repo.update_primary.__self__ is repo
        assert repo.get_primary.__self__ is repo
