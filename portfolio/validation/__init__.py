"""Input validation for repository mutations."""

from portfolio.validation.schema_validator import (
    IMMUTABLE_FIELDS,
    SchemaValidator,
    issues_from_error,
)
from portfolio.validation.entity_validators import (
    AboutValidator,
    ContactValidator,
    ProjectValidator,
    TechnologyValidator,
)

__all__ = [
    "IMMUTABLE_FIELDS",
    "SchemaValidator",
    "issues_from_error",
    "ProjectValidator",
    "TechnologyValidator",
    "ContactValidator",
    "AboutValidator",
]
