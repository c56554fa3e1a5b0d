"""Collection models: named per-user groupings of entries."""

from enum import Enum
from typing import Optional

from pydantic import Field

from .base import ValueModel


class Collection(ValueModel):
    """Named grouping of entries owned by one user (e.g. "Read", "Favorites")."""

    id: Optional[int] = Field(None, description="Primary key")
    title: str = Field(..., description="Collection title, unique per user")
    user_id: int = Field(..., description="Owning user")


class CollectionEntry(ValueModel):
    """Membership of an entry in a collection."""

    entry_id: str = Field(..., description="Foreign key to entries table")
    feed_id: int = Field(..., description="Feed the entry belongs to")
    collection_id: int = Field(..., description="Foreign key to collections table")


class Membership(str, Enum):
    """Result of a membership lookup."""

    MEMBER = "member"
    NOT_MEMBER = "not_member"
    UNKNOWN = "unknown"
