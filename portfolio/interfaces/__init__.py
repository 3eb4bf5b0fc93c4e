"""
Interface definitions for the portfolio data layer.

This module provides abstract base classes (ABCs) that define the contracts
for the major components in the system. Using interfaces enables:
- Better testability through in-memory implementations
- Decorators that wrap any implementation of the same contract
- Dependency injection of stores, validators and sinks

Available Interfaces:
    IRepository: Generic CRUD/query contract
    ICache: TTL cache backend
    IStore: Backing source of a repository's collection
    IValidator: Create/update input validation
    IAuditSink: Destination for audit events
"""

from portfolio.interfaces.repository import IRepository, UpdateItem
from portfolio.interfaces.cache import ICache
from portfolio.interfaces.store import IStore
from portfolio.interfaces.validator import IValidator
from portfolio.interfaces.audit import IAuditSink

__all__ = [
    "IRepository",
    "UpdateItem",
    "ICache",
    "IStore",
    "IValidator",
    "IAuditSink",
]
