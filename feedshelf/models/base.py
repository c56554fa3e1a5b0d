"""Base model class and text-column helpers for stored models."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from ..errors import SerializationError


class ValueModel(BaseModel):
    """Base model for all stored values. Instances are immutable."""

    model_config = ConfigDict(frozen=True, from_attributes=True)


def dump_json_column(adapter: TypeAdapter, value: Any) -> Optional[str]:
    """Serialize a nested value for a TEXT column. Absent and empty values become NULL."""
    if value is None or value == []:
        return None
    return adapter.dump_json(value).decode("utf-8")


def load_json_column(adapter: TypeAdapter, text: Optional[str], column: str) -> Any:
    """Inverse of dump_json_column. NULL comes back as None."""
    if text is None:
        return None
    try:
        return adapter.validate_json(text)
    except ValidationError as e:
        raise SerializationError(f"Malformed value in column {column!r}: {e}") from e


def dump_timestamp(value: Optional[datetime]) -> Optional[str]:
    """ISO-8601 text for a timestamp."""
    return value.isoformat() if value else None


def load_timestamp(text: Optional[str], column: str) -> Optional[datetime]:
    """Parse ISO-8601 text written by dump_timestamp."""
    if not text:
        return None
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise SerializationError(f"Malformed timestamp in column {column!r}: {e}") from e
