"""
Audit sink interface receiving repository events.
"""

from abc import ABC, abstractmethod

from portfolio.models.events import RepositoryEvent


class IAuditSink(ABC):
    """
    Abstract interface for audit event sinks.

    Implementations:
        - LoggingAuditSink: writes events to a logger
        - InMemoryAuditSink: keeps events in a list for inspection
    """

    @abstractmethod
    def record(self, event: RepositoryEvent) -> None:
        """Record one repository event."""
        pass
