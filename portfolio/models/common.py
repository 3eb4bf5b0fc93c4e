"""Common types shared by every repository: entities, paging and the result envelope."""

from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from typing import Annotated, Any, Generic, List, Literal, Mapping, Optional, Sequence, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

T = TypeVar("T")

FilterValue = Union[str, int, float, bool, Sequence[str], Sequence[int], None]
FilterParams = Mapping[str, FilterValue]

SortOrder = Literal["asc", "desc"]

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def utc_now() -> datetime:
    return datetime.now(UTC)


class BaseEntity(BaseModel):
    """Fields every stored entity carries.

    ``id`` is assigned once on creation and never changes. ``updated_at`` is
    never earlier than ``created_at``. Entities are frozen: repositories hand
    out the stored instances, and changes go through ``update``.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class PaginationParams(BaseModel):
    """Page selection and optional ordering for list operations."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)
    sort_by: Optional[str] = None
    sort_order: SortOrder = "asc"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class PageInfo:
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


@dataclass
class PaginatedResponse(Generic[T]):
    data: List[T]
    pagination: PageInfo


@dataclass(frozen=True)
class DataError:
    """Error part of a result envelope."""

    code: str
    message: str
    details: Optional[Any] = None


@dataclass
class DataResult(Generic[T]):
    """Envelope returned by every repository operation.

    On success ``error`` is None; on failure ``error`` is set and ``data``
    is None, except for ``delete`` on a missing id, which reports ``False``.
    """

    data: Optional[T] = None
    error: Optional[DataError] = None
    loading: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: T) -> "DataResult[T]":
        return cls(data=data)

    @classmethod
    def failure(cls, error: DataError, data: Optional[T] = None) -> "DataResult[T]":
        return cls(data=data, error=error)


@dataclass(frozen=True)
class ValidationIssue:
    """A single validation problem reported by a validator."""

    type: str
    message: str
    field: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ValidationOutcome:
    is_valid: bool
    errors: List[ValidationIssue] = field(default_factory=list)

    @classmethod
    def passed(cls) -> "ValidationOutcome":
        return cls(is_valid=True)

    @classmethod
    def failed(cls, errors: List[ValidationIssue]) -> "ValidationOutcome":
        return cls(is_valid=False, errors=list(errors))
