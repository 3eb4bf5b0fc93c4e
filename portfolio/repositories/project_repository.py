"""Repository for portfolio projects."""

from operator import attrgetter
from typing import List, Optional

from portfolio.config.repository_config import RepositoryConfig
from portfolio.interfaces.store import IStore
from portfolio.interfaces.validator import IValidator
from portfolio.models.common import DataResult
from portfolio.models.project import Project
from portfolio.repositories.base import EntityRepository
from portfolio.repositories.fields import FieldMap, attribute_accessors
from portfolio.validation.entity_validators import ProjectValidator

PROJECT_FIELDS: FieldMap = {
    **attribute_accessors(
        "id",
        "title",
        "description",
        "short_description",
        "category",
        "status",
        "content",
        "technologies",
        "tags",
        "start_date",
        "end_date",
        "featured",
        "priority",
        "order",
        "visible",
        "created_at",
        "updated_at",
    ),
    "technology_count": lambda project: len(project.technologies),
    "image_count": lambda project: len(project.images),
}

PROJECT_SEARCH_FIELDS = ("title", "description", "content")


def _display_rank(project: Project):
    return (
        project.order if project.order is not None else 0,
        project.priority if project.priority is not None else 0,
    )


class ProjectRepository(EntityRepository[Project]):
    entity_type = "project"

    def __init__(
        self,
        store: IStore[Project],
        validator: Optional[IValidator[Project]] = None,
        config: Optional[RepositoryConfig] = None,
        **kwargs,
    ):
        super().__init__(
            Project,
            store,
            validator=validator if validator is not None else ProjectValidator(),
            config=config,
            field_map=PROJECT_FIELDS,
            search_fields=PROJECT_SEARCH_FIELDS,
            **kwargs,
        )

    async def get_featured(self) -> DataResult[List[Project]]:
        """Featured, visible projects ordered by ``order`` then ``priority``."""
        async def action() -> List[Project]:
            featured = [p for p in await self._ensure_loaded() if p.featured and p.visible]
            return sorted(featured, key=_display_rank)

        return await self._run("get_featured", action)

    async def get_by_category(self, category: str) -> DataResult[List[Project]]:
        async def action() -> List[Project]:
            return [p for p in await self._ensure_loaded() if p.category == category]

        return await self._run("get_by_category", action)

    async def get_by_technology(self, technology: str) -> DataResult[List[Project]]:
        """Projects listing ``technology`` (case-insensitive)."""
        async def action() -> List[Project]:
            wanted = technology.lower()
            return [
                p for p in await self._ensure_loaded()
                if any(t.lower() == wanted for t in p.technologies)
            ]

        return await self._run("get_by_technology", action)

    async def get_visible(self) -> DataResult[List[Project]]:
        async def action() -> List[Project]:
            return sorted(
                (p for p in await self._ensure_loaded() if p.visible),
                key=attrgetter("title"),
            )

        return await self._run("get_visible", action)
