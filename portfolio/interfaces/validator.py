"""
Validator interface consulted by repositories before mutations.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Mapping, TypeVar

from portfolio.models.common import ValidationOutcome

T = TypeVar("T")


class IValidator(ABC, Generic[T]):
    """
    Abstract interface for entity validators.

    The repository calls ``validate_create`` before a create and
    ``validate_update`` before an update, each only when the matching
    configuration flag is on. Any reported error stops the mutation.
    """

    @abstractmethod
    async def validate(self, entity: T) -> ValidationOutcome:
        """Validate a complete entity."""
        pass

    @abstractmethod
    async def validate_create(self, data: Mapping[str, Any]) -> ValidationOutcome:
        """Validate create input (entity fields without id and timestamps)."""
        pass

    @abstractmethod
    async def validate_update(self, data: Mapping[str, Any]) -> ValidationOutcome:
        """Validate partial update input."""
        pass
