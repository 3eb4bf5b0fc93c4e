"""Repository for the about section: bio, skills, experience, education."""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from portfolio.config.repository_config import RepositoryConfig
from portfolio.interfaces.store import IStore
from portfolio.interfaces.validator import IValidator
from portfolio.models.about import AboutContent, Education, Experience, Skill
from portfolio.models.common import DataResult
from portfolio.repositories.fields import FieldMap, attribute_accessors
from portfolio.repositories.primary import PrimaryContentRepository
from portfolio.validation.entity_validators import AboutValidator

ABOUT_FIELDS: FieldMap = {
    **attribute_accessors(
        "id",
        "name",
        "title",
        "bio",
        "content",
        "interests",
        "current_focus",
        "visible",
        "created_at",
        "updated_at",
    ),
    "skill_names": lambda about: [skill.name for skill in about.skills],
}

ABOUT_SEARCH_FIELDS = ("name", "title", "content")

UNCATEGORIZED = "other"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _sort_date(value: Optional[datetime]) -> datetime:
    """Missing dates sort as the epoch; naive dates are treated as UTC."""
    if value is None:
        return _EPOCH
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class AboutRepository(PrimaryContentRepository[AboutContent]):
    entity_type = "about"

    def __init__(
        self,
        store: IStore[AboutContent],
        validator: Optional[IValidator[AboutContent]] = None,
        config: Optional[RepositoryConfig] = None,
        **kwargs,
    ):
        super().__init__(
            AboutContent,
            store,
            validator=validator if validator is not None else AboutValidator(),
            config=config,
            field_map=ABOUT_FIELDS,
            search_fields=ABOUT_SEARCH_FIELDS,
            **kwargs,
        )

    async def _primary(self) -> Optional[AboutContent]:
        entities = await self._ensure_loaded()
        return entities[0] if entities else None

    async def get_skills_by_category(self) -> DataResult[Dict[str, List[Skill]]]:
        async def action() -> Dict[str, List[Skill]]:
            about = await self._primary()
            grouped: Dict[str, List[Skill]] = {}
            if about is None:
                return grouped
            for skill in about.skills:
                grouped.setdefault(skill.category or UNCATEGORIZED, []).append(skill)
            return grouped

        return await self._run("get_skills_by_category", action)

    async def get_experience_timeline(self) -> DataResult[List[Experience]]:
        """Experience entries, most recent start date first."""
        async def action() -> List[Experience]:
            about = await self._primary()
            if about is None:
                return []
            return sorted(about.experience, key=lambda e: _sort_date(e.start_date), reverse=True)

        return await self._run("get_experience_timeline", action)

    async def get_education(self) -> DataResult[List[Education]]:
        """Education entries, most recent graduation (or end) date first."""
        async def action() -> List[Education]:
            about = await self._primary()
            if about is None:
                return []
            return sorted(
                about.education,
                key=lambda e: _sort_date(e.graduation_date or e.end_date),
                reverse=True,
            )

        return await self._run("get_education", action)
