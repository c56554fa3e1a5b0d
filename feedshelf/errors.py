"""Error kinds and the Outcome result type."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Categories of failure reported by the core."""

    NOT_FOUND = "not_found"
    CONSTRAINT_VIOLATION = "constraint_violation"
    STORAGE_ENGINE_ERROR = "storage_engine_error"
    SERIALIZATION_ERROR = "serialization_error"
    FETCH_FAILED = "fetch_failed"


class NotFoundError(Exception):
    """A query returned no row where one was expected."""


class SerializationError(Exception):
    """Stored text could not be turned back into a structure."""


@dataclass(frozen=True)
class Failure:
    """Description of a failed operation."""

    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Success-or-failure result returned instead of raising."""

    ok: bool
    value: Optional[T] = None
    error: Optional[Failure] = None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Outcome[T]":
        return cls(ok=False, error=Failure(kind=kind, message=message))

    @property
    def kind(self) -> Optional[ErrorKind]:
        """Error kind of a failed outcome, None on success."""
        return self.error.kind if self.error else None

    @property
    def message(self) -> str:
        return self.error.message if self.error else ""
