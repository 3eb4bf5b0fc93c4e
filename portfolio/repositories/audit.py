"""Audit sinks receiving repository events."""

import logging
from typing import List, Optional

from portfolio.interfaces.audit import IAuditSink
from portfolio.models.events import RepositoryEvent

AUDIT_LOGGER_NAME = "portfolio.audit"


class LoggingAuditSink(IAuditSink):
    """Writes each event as one log record."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        self._logger = logger or logging.getLogger(AUDIT_LOGGER_NAME)
        self._level = level

    def record(self, event: RepositoryEvent) -> None:
        self._logger.log(
            self._level,
            f"[AUDIT] {event.operation} {event.entity_type}/{event.entity_id}",
            extra={"audit_event": event},
        )


class InMemoryAuditSink(IAuditSink):
    """Keeps events in order for later inspection."""

    def __init__(self):
        self.events: List[RepositoryEvent] = []

    def record(self, event: RepositoryEvent) -> None:
        self.events.append(event)

    def for_entity(self, entity_id: str) -> List[RepositoryEvent]:
        return [e for e in self.events if e.entity_id == entity_id]

    def operations(self) -> List[str]:
        return [e.operation for e in self.events]

    def clear(self) -> None:
        self.events.clear()

    def __len__(self) -> int:
        return len(self.events)
