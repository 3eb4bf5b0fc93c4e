"""Repository for technologies and skill statistics."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from portfolio.config.repository_config import RepositoryConfig
from portfolio.interfaces.store import IStore
from portfolio.interfaces.validator import IValidator
from portfolio.models.common import DataResult
from portfolio.models.technology import Technology
from portfolio.repositories.base import EntityRepository
from portfolio.repositories.fields import FieldMap, attribute_accessors
from portfolio.validation.entity_validators import TechnologyValidator

PROFICIENCY_RANK = {"beginner": 0, "intermediate": 1, "advanced": 2, "expert": 3}

# Display order of categories when technologies are grouped
CATEGORY_ORDER = {
    "language": 1,
    "frontend": 2,
    "backend": 3,
    "database": 4,
    "mobile": 5,
    "desktop": 6,
    "devops": 7,
    "cloud": 8,
    "testing": 9,
    "design": 10,
    "framework": 11,
    "library": 12,
    "tool": 13,
    "other": 14,
}

TECHNOLOGY_FIELDS: FieldMap = {
    **attribute_accessors(
        "id",
        "name",
        "display_name",
        "description",
        "category",
        "proficiency",
        "learning_status",
        "version",
        "featured",
        "order",
        "visible",
        "tags",
        "created_at",
        "updated_at",
    ),
    "proficiency_rank": lambda tech: PROFICIENCY_RANK[tech.proficiency],
}

TECHNOLOGY_SEARCH_FIELDS = ("name", "description")


@dataclass
class TechnologyStatistics:
    total: int
    by_category: Dict[str, int] = field(default_factory=dict)
    by_proficiency: Dict[str, int] = field(default_factory=dict)
    by_learning_status: Dict[str, int] = field(default_factory=dict)
    featured: int = 0


@dataclass
class SkillGroup:
    category: str
    name: str
    order: int
    technologies: List[Technology]


class TechnologyRepository(EntityRepository[Technology]):
    entity_type = "technology"

    def __init__(
        self,
        store: IStore[Technology],
        validator: Optional[IValidator[Technology]] = None,
        config: Optional[RepositoryConfig] = None,
        **kwargs,
    ):
        super().__init__(
            Technology,
            store,
            validator=validator if validator is not None else TechnologyValidator(),
            config=config,
            field_map=TECHNOLOGY_FIELDS,
            search_fields=TECHNOLOGY_SEARCH_FIELDS,
            **kwargs,
        )

    async def get_by_category(self, category: str) -> DataResult[List[Technology]]:
        async def action() -> List[Technology]:
            return [t for t in await self._ensure_loaded() if t.category == category]

        return await self._run("get_by_category", action)

    async def get_featured(self) -> DataResult[List[Technology]]:
        async def action() -> List[Technology]:
            featured = [t for t in await self._ensure_loaded() if t.featured and t.visible]
            return sorted(featured, key=lambda t: t.order or 0)

        return await self._run("get_featured", action)

    async def get_by_proficiency(self, proficiency: str) -> DataResult[List[Technology]]:
        async def action() -> List[Technology]:
            return [t for t in await self._ensure_loaded() if t.proficiency == proficiency]

        return await self._run("get_by_proficiency", action)

    async def get_statistics(self) -> DataResult[TechnologyStatistics]:
        """Counts by category, proficiency and learning status."""
        async def action() -> TechnologyStatistics:
            technologies = await self._ensure_loaded()
            return TechnologyStatistics(
                total=len(technologies),
                by_category=dict(Counter(t.category for t in technologies)),
                by_proficiency=dict(Counter(t.proficiency for t in technologies)),
                by_learning_status=dict(Counter(t.learning_status for t in technologies)),
                featured=sum(1 for t in technologies if t.featured),
            )

        return await self._run("get_statistics", action)

    async def get_skill_groups(self) -> DataResult[List[SkillGroup]]:
        """Technologies grouped by category, groups in display order, names A-Z."""
        async def action() -> List[SkillGroup]:
            groups: Dict[str, List[Technology]] = {}
            for tech in await self._ensure_loaded():
                groups.setdefault(tech.category, []).append(tech)

            skill_groups = [
                SkillGroup(
                    category=category,
                    name=category.capitalize(),
                    order=CATEGORY_ORDER.get(category, 99),
                    technologies=sorted(members, key=lambda t: t.name.lower()),
                )
                for category, members in groups.items()
            ]
            return sorted(skill_groups, key=lambda g: g.order)

        return await self._run("get_skill_groups", action)
