"""
Tests for factory pattern implementation.
Tests ComponentFactory, RepositoryFactory, and their integrations.
"""

from pathlib import Path

import pytest

from portfolio.cache.disk_cache import PersistentCache
from portfolio.cache.memory_cache import InMemoryCache
from portfolio.config.repository_config import RepositoryConfig
from portfolio.exceptions import UnknownEntityTypeException
from portfolio.factories.component_factory import (
    ComponentFactory,
    DefaultComponentFactory,
    InMemoryComponentFactory,
)
from portfolio.factories.repository_factory import (
    RepositoryFactory,
    create_repository,
    get_repository_factory,
    reset_repository_factory,
)
from portfolio.models.project import Project
from portfolio.repositories.audit import InMemoryAuditSink, LoggingAuditSink
from portfolio.repositories.decorators import AuditingRepository, CachingRepository
from portfolio.repositories.project_repository import ProjectRepository
from portfolio.repositories.stores import InMemoryStore, JsonFileStore
from portfolio.repositories.technology_repository import TechnologyRepository
from portfolio.settings import Settings


# Fixtures

@pytest.fixture
def seed():
    """Seed data for the in-memory component factory."""
    return {
        "project": [
            {"id": "1", "title": "Alpha", "description": "First", "featured": True},
            Project(id="2", title="Beta", description="Second"),
        ],
    }


@pytest.fixture
def component_factory(seed):
    return InMemoryComponentFactory(seed)


@pytest.fixture
def factory(component_factory):
    return RepositoryFactory(component_factory)


@pytest.fixture(autouse=True)
def reset_singleton():
    """Reset the factory singleton before and after each test."""
    reset_repository_factory()
    yield
    reset_repository_factory()


# ComponentFactory Tests

class TestDefaultComponentFactory:
    """Tests for DefaultComponentFactory."""

    def test_is_component_factory(self):
        assert isinstance(DefaultComponentFactory(Settings()), ComponentFactory)

    def test_create_store_uses_content_dir(self, tmp_path):
        factory = DefaultComponentFactory(Settings(content_dir=str(tmp_path)))
        store = factory.create_store("project", Project)

        assert isinstance(store, JsonFileStore)
        assert store.path == tmp_path.resolve() / "projects.json"

    def test_create_cache_disabled(self):
        factory = DefaultComponentFactory(Settings())
        assert factory.create_cache("project", RepositoryConfig(cache_enabled=False)) is None

    def test_create_memory_cache(self):
        factory = DefaultComponentFactory(Settings(cache_backend="memory"))
        cache = factory.create_cache("project", RepositoryConfig(cache_enabled=True))
        assert isinstance(cache, InMemoryCache)

    def test_create_disk_cache(self, tmp_path):
        settings = Settings(cache_backend="disk", cache_directory=str(tmp_path))
        cache = DefaultComponentFactory(settings).create_cache("project", RepositoryConfig(cache_enabled=True))
        try:
            assert isinstance(cache, PersistentCache)
            directory = Path(cache.stats()["directory"])
            assert directory.parent == tmp_path
            assert directory.name.startswith("project-")
        finally:
            cache.close()

    async def test_disk_caches_do_not_share_entries(self, tmp_path):
        factory = DefaultComponentFactory(Settings(cache_backend="disk", cache_directory=str(tmp_path)))
        config = RepositoryConfig(cache_enabled=True)
        first = factory.create_cache("project", config)
        second = factory.create_cache("project", config)
        try:
            await first.set("entity:1", "cached")
            assert first.stats()["directory"] != second.stats()["directory"]
            assert await second.get("entity:1") is None
        finally:
            first.close()
            second.close()

    def test_create_audit_sink(self):
        factory = DefaultComponentFactory(Settings())
        assert factory.create_audit_sink("project", RepositoryConfig()) is None
        sink = factory.create_audit_sink("project", RepositoryConfig(enable_audit_log=True))
        assert isinstance(sink, LoggingAuditSink)


class TestInMemoryComponentFactory:
    """Tests for InMemoryComponentFactory."""

    async def test_store_holds_seed(self, component_factory):
        store = component_factory.create_store("project", Project)

        assert isinstance(store, InMemoryStore)
        assert [p.id for p in await store.load()] == ["1", "2"]
        assert component_factory.stores["project"] is store

    async def test_unseeded_type_is_empty(self, component_factory):
        store = component_factory.create_store("technology", Project)
        assert await store.load() == []

    def test_provided_cache_is_shared(self):
        cache = InMemoryCache()
        factory = InMemoryComponentFactory(cache=cache)
        assert factory.create_cache("project", RepositoryConfig(cache_enabled=True)) is cache

    def test_explicit_none_cache(self):
        factory = InMemoryComponentFactory(cache=None)
        assert factory.create_cache("project", RepositoryConfig(cache_enabled=True)) is None

    def test_default_sink_is_recorded(self, component_factory):
        sink = component_factory.create_audit_sink("project", RepositoryConfig(enable_audit_log=True))
        assert isinstance(sink, InMemoryAuditSink)
        assert component_factory.sinks["project"] is sink


# RepositoryFactory Tests

class TestRepositoryFactory:
    """Tests for RepositoryFactory."""

    def test_create_plain_repository(self, factory):
        repo = factory.create("project")
        assert isinstance(repo, ProjectRepository)

    def test_create_is_case_insensitive(self, factory):
        assert factory.create("Project") is factory.create("project")

    def test_memoized_per_config(self, factory):
        config = RepositoryConfig(cache_enabled=True)

        assert factory.create("project") is factory.create("project")
        assert factory.create("project", config) is factory.create("project", RepositoryConfig(cache_enabled=True))
        assert factory.create("project", config) is not factory.create("project")
        assert len(factory) == 2

    def test_clear(self, factory):
        first = factory.create("project")
        factory.clear()
        assert factory.create("project") is not first

    def test_unknown_entity_type(self, factory):
        with pytest.raises(UnknownEntityTypeException) as exc_info:
            factory.create("blogpost")
        assert exc_info.value.entity_type == "blogpost"
        assert "blogpost" in str(exc_info.value)

    def test_caching_decorator(self, factory):
        repo = factory.create("project", RepositoryConfig(cache_enabled=True, cache_ttl=60))
        assert isinstance(repo, CachingRepository)
        assert repo.ttl == 60
        assert isinstance(repo.inner, ProjectRepository)

    def test_caching_skipped_when_no_cache(self):
        factory = RepositoryFactory(InMemoryComponentFactory(cache=None))
        repo = factory.create("project", RepositoryConfig(cache_enabled=True))
        assert isinstance(repo, ProjectRepository)

    def test_audit_wraps_cache(self, factory):
        config = RepositoryConfig(cache_enabled=True, enable_audit_log=True)
        repo = factory.create("project", config)

        assert isinstance(repo, AuditingRepository)
        assert repo.entity_type == "project"
        assert isinstance(repo.inner, CachingRepository)

    def test_default_config(self, component_factory):
        factory = RepositoryFactory(component_factory, default_config=RepositoryConfig(enable_audit_log=True))
        assert isinstance(factory.create("project"), AuditingRepository)

    def test_entity_types(self, factory):
        assert factory.entity_types() == ["project", "technology", "contact", "about"]
        assert factory.supports("ABOUT")
        assert not factory.supports("blogpost")

    def test_typed_shortcuts(self, factory):
        assert isinstance(factory.create_project_repository(), ProjectRepository)
        assert isinstance(factory.create_technology_repository(), TechnologyRepository)
        assert factory.create_contact_repository().entity_type == "contact"
        assert factory.create_about_repository().entity_type == "about"

    async def test_repository_reads_seed(self, factory):
        repo = factory.create("project")
        result = await repo.get_featured()
        assert [p.id for p in result.data] == ["1"]

    async def test_audit_events_through_factory(self, factory, component_factory):
        repo = factory.create("project", RepositoryConfig(enable_audit_log=True))
        await repo.create({"title": "Gamma", "description": "Third"})
        await repo.get_by_id("1")

        assert component_factory.sinks["project"].operations() == ["create", "read"]

    async def test_configs_get_independent_repositories(self, factory):
        plain = factory.create("project")
        cached = factory.create("project", RepositoryConfig(cache_enabled=True))

        await plain.create({"title": "Gamma", "description": "Third"})
        assert (await cached.count()).data == 2


class TestFactorySingleton:
    def test_singleton(self):
        assert get_repository_factory() is get_repository_factory()

    def test_first_call_arguments_win(self):
        component_factory = InMemoryComponentFactory()
        factory = get_repository_factory(component_factory)
        assert get_repository_factory(InMemoryComponentFactory()) is factory
        assert factory.component_factory is component_factory

    def test_reset(self):
        first = get_repository_factory()
        reset_repository_factory()
        assert get_repository_factory() is not first

    def test_create_repository(self, seed):
        get_repository_factory(InMemoryComponentFactory(seed))
        assert isinstance(create_repository("technology"), TechnologyRepository)


class TestDiskCachedRepositories:
    """Repositories built with the disk cache backend."""

    @pytest.fixture
    def settings(self, tmp_path):
        return Settings(
            content_dir=str(tmp_path / "content"),
            cache_enabled=True,
            cache_backend="disk",
            cache_directory=str(tmp_path / "cache"),
        )

    @staticmethod
    def build(settings):
        factory = RepositoryFactory(
            component_factory=DefaultComponentFactory(settings),
            default_config=RepositoryConfig.from_settings(settings),
        )
        return factory.create("technology")

    async def test_restart_does_not_serve_stale_entries(self, settings):
        first = self.build(settings)
        created = await first.create({"name": "Zig", "category": "language"})
        assert created.ok
        assert (await first.get_by_id(created.data.id)).data.name == "Zig"

        restarted = self.build(settings)
        try:
            assert (await restarted.exists(created.data.id)).data is False
            assert (await restarted.get_by_id(created.data.id)).data is None
            assert (await restarted.count()).data == 0
        finally:
            first.cache.close()
            restarted.cache.close()

    async def test_cache_serves_entities_within_one_repository(self, settings):
        repo = self.build(settings)
        try:
            created = await repo.create({"name": "Zig", "category": "language"})
            assert await repo.cache.has(f"entity:{created.data.id}")
            assert (await repo.get_by_id(created.data.id)).data == created.data
        finally:
            repo.cache.close()
