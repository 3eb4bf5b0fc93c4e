"""
Custom exception hierarchy for the portfolio data layer.

Provides structured errors carrying the error codes reported in result
envelopes. Repository operations convert these into ``DataResult`` errors at
their boundary; only registry misconfiguration is raised to callers.
"""

from typing import Any, Optional

from portfolio.models.common import DataError

UNKNOWN_ERROR = "UNKNOWN_ERROR"


class PortfolioException(Exception):
    """Base exception for all data layer errors"""
    error_code: str = UNKNOWN_ERROR

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_data_error(self) -> DataError:
        return DataError(code=self.error_code, message=self.message, details=self.details)


class ValidationException(PortfolioException):
    """Input failed validation"""
    error_code = "VALIDATION_ERROR"


class EntityNotFoundException(PortfolioException):
    """Id-keyed operation on an absent entity"""
    error_code = "NOT_FOUND"

    def __init__(self, entity_id: str, details: Optional[Any] = None):
        super().__init__(f"Entity with ID {entity_id} not found", details)
        self.entity_id = entity_id


class StoreException(PortfolioException):
    """Backing store could not load or save"""
    error_code = "STORE_ERROR"


class CacheException(PortfolioException):
    """Cache backend errors"""
    error_code = "CACHE_ERROR"


class UnknownEntityTypeException(PortfolioException):
    """Registry/factory asked for an entity type it does not know"""
    error_code = "UNKNOWN_ENTITY_TYPE"

    def __init__(self, entity_type: str):
        super().__init__(f"Unknown entity type: {entity_type}")
        self.entity_type = entity_type


class BatchItemException(PortfolioException):
    """One item of a batch operation failed; the batch was not committed"""

    def __init__(self, index: int, cause: PortfolioException):
        super().__init__(cause.message, details={"index": index, "error": cause.details})
        self.error_code = cause.error_code
        self.index = index
        self.cause = cause


# Codes that describe a condition the caller can act on
RECOVERABLE_CODES = frozenset({ValidationException.error_code, EntityNotFoundException.error_code})


def to_data_error(exc: BaseException) -> DataError:
    """
    Convert any exception into the error part of a result envelope.

    Portfolio exceptions that name a caller-recoverable condition keep their
    own code; everything else is reported as UNKNOWN_ERROR wrapping the
    original message.
    """
    if isinstance(exc, PortfolioException):
        if exc.error_code in RECOVERABLE_CODES:
            return exc.to_data_error()
        return DataError(
            code=UNKNOWN_ERROR,
            message=exc.message,
            details={"cause": exc.error_code, "details": exc.details},
        )
    message = str(exc) or "Unknown error occurred"
    return DataError(
        code=UNKNOWN_ERROR,
        message=message,
        details={"exception": type(exc).__name__},
    )
