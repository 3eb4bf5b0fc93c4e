"""Pydantic-backed validator for repository input.

A ``SchemaValidator`` pairs a create schema (the fields a caller may supply)
with the full entity model, and reports pydantic errors as
``ValidationIssue`` records instead of raising.
"""

import logging
from typing import Annotated, Any, Dict, Generic, List, Mapping, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from portfolio.interfaces.validator import IValidator
from portfolio.models.common import ValidationIssue, ValidationOutcome

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

# Keys the repository owns; callers may send them but they are never validated.
IMMUTABLE_FIELDS = frozenset({"id", "created_at", "updated_at"})


def issues_from_error(exc: ValidationError, prefix: str = "") -> List[ValidationIssue]:
    """Convert a pydantic ValidationError into validation issues.

    Args:
        exc: The pydantic error
        prefix: Field name prepended to every location (used for
                single-field checks whose locations are relative)
    """
    issues = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        if prefix:
            loc.insert(0, prefix)
        issues.append(
            ValidationIssue(
                type=err["type"],
                message=err["msg"],
                field=".".join(loc) or None,
            )
        )
    return issues


class SchemaValidator(IValidator[T], Generic[T]):
    """Validator driven by pydantic models.

    Attributes:
        create_schema: Model of the create input (entity fields minus id and
            timestamps)
        entity_schema: Model of the full stored entity

    Example:
        >>> validator = SchemaValidator(ProjectData, Project)
        >>> outcome = await validator.validate_create({"title": ""})
        >>> outcome.is_valid
        False
    """

    def __init__(self, create_schema: Type[BaseModel], entity_schema: Type[T]):
        self.create_schema = create_schema
        self.entity_schema = entity_schema
        self._field_adapters: Dict[str, TypeAdapter] = {}

    def _adapter_for(self, name: str) -> TypeAdapter:
        """Build (once) a TypeAdapter checking a single create field."""
        adapter = self._field_adapters.get(name)
        if adapter is None:
            info = self.create_schema.model_fields[name]
            if info.metadata:
                annotation = Annotated[(info.annotation, *info.metadata)]
            else:
                annotation = info.annotation
            adapter = TypeAdapter(annotation)
            self._field_adapters[name] = adapter
        return adapter

    async def validate(self, entity: T) -> ValidationOutcome:
        data = entity.model_dump() if isinstance(entity, BaseModel) else entity
        try:
            self.entity_schema.model_validate(data)
        except ValidationError as e:
            return ValidationOutcome.failed(issues_from_error(e))
        return ValidationOutcome.passed()

    async def validate_create(self, data: Mapping[str, Any]) -> ValidationOutcome:
        payload = {k: v for k, v in data.items() if k not in IMMUTABLE_FIELDS}
        try:
            self.create_schema.model_validate(payload)
        except ValidationError as e:
            issues = issues_from_error(e)
            logger.debug(f"{self.entity_schema.__name__} create input rejected: {len(issues)} issue(s)")
            return ValidationOutcome.failed(issues)
        return ValidationOutcome.passed()

    async def validate_update(self, data: Mapping[str, Any]) -> ValidationOutcome:
        """Validate each supplied field on its own.

        Cross-field rules (such as date ordering) are checked when the
        repository rebuilds the merged entity.
        """
        issues: List[ValidationIssue] = []
        fields = self.create_schema.model_fields

        for name, value in data.items():
            if name in IMMUTABLE_FIELDS:
                continue
            if name not in fields:
                issues.append(
                    ValidationIssue(
                        type="extra_forbidden",
                        message="Extra inputs are not permitted",
                        field=name,
                    )
                )
                continue
            try:
                self._adapter_for(name).validate_python(value)
            except ValidationError as e:
                issues.extend(issues_from_error(e, prefix=name))

        if issues:
            return ValidationOutcome.failed(issues)
        return ValidationOutcome.passed()
