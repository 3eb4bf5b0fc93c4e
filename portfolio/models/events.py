"""Audit events emitted by repository operations."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal, Optional

from portfolio.models.common import utc_now

Operation = Literal["create", "read", "update", "delete"]


@dataclass(frozen=True)
class RepositoryContext:
    timestamp: datetime = field(default_factory=utc_now)
    request_id: Optional[str] = None
    source: Optional[str] = None


@dataclass(frozen=True)
class RepositoryEvent:
    """One audited operation on one entity.

    Attributes:
        entity_type: Registry name of the repository ("project", ...)
        entity_id: Id of the entity the operation touched
        operation: create, read, update or delete
        before: Snapshot before the operation (update, delete)
        after: Snapshot after the operation (create, update)
    """

    entity_type: str
    entity_id: str
    operation: Operation
    before: Optional[Any] = None
    after: Optional[Any] = None
    context: RepositoryContext = field(default_factory=RepositoryContext)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = field(default_factory=utc_now)
