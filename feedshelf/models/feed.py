"""Feed model for subscribed sources."""

from typing import Any, List, Mapping, Optional

import httpx
from pydantic import Field, TypeAdapter

from ..errors import SerializationError
from ..ingestion import derive
from ..ingestion.models import Image, RemoteFeed
from .base import ValueModel, dump_json_column, load_json_column
from .entry import Entry

_IMAGE = TypeAdapter(Image)


def _slug_for(title: Optional[str], feed_link: str) -> str:
    slug = derive.slugify(title)
    if slug:
        return slug
    try:
        host = httpx.URL(feed_link).host
    except httpx.InvalidURL:
        host = ""
    return derive.slugify(host) or derive.stable_id(feed_link)


class Feed(ValueModel):
    """Fetchable feed. Entries are attached at query time and never stored inline."""

    id: Optional[int] = Field(None, description="Primary key")
    slug: str = Field(..., description="URL-safe slug of the title")
    title: Optional[str] = Field(None, description="Feed title")
    feed_link: str = Field(..., description="Canonical feed document URL")
    site_link: Optional[str] = Field(None, description="Website the feed belongs to")
    description: Optional[str] = Field(None, description="Feed subtitle")
    logo: Optional[Image] = Field(None, description="Feed logo")
    icon: Optional[Image] = Field(None, description="Feed icon")
    entries: List[Entry] = Field(default_factory=list, exclude=True)

    @classmethod
    def from_remote(cls, feed: RemoteFeed, feed_link: str) -> "Feed":
        """Build an unsaved feed from a parsed remote document."""
        return cls(
            slug=_slug_for(feed.title, feed_link),
            title=feed.title,
            feed_link=feed_link,
            site_link=feed.link,
            description=feed.description,
            logo=feed.logo.model_copy(deep=True) if feed.logo else None,
            icon=feed.icon.model_copy(deep=True) if feed.icon else None,
        )

    def with_id(self, feed_id: int) -> "Feed":
        return self.model_copy(update={"id": feed_id})

    def with_entries(self, entries: List[Entry]) -> "Feed":
        """Copy of this feed carrying the given entries."""
        return self.model_copy(update={"entries": list(entries)})

    def normalize_entries(self, feed: RemoteFeed) -> List[Entry]:
        """Normalize the remote entries of this (saved) feed."""
        if self.id is None:
            raise ValueError("Feed must be saved before its entries are normalized")
        return [
            Entry.from_remote(
                remote_entry,
                self.id,
                feed_title=self.title,
                feed_logo=self.logo,
                feed_icon=self.icon,
            )
            for remote_entry in feed.entries
        ]

    def to_persisted(self) -> dict:
        """Row values for the feeds table."""
        return {
            "id": self.id,
            "slug": self.slug,
            "title": self.title,
            "feed_link": self.feed_link,
            "site_link": self.site_link,
            "description": self.description,
            "logo": dump_json_column(_IMAGE, self.logo),
            "icon": dump_json_column(_IMAGE, self.icon),
        }

    @classmethod
    def from_persisted(cls, row: Mapping[str, Any]) -> "Feed":
        """Rebuild a feed from a stored row."""
        row = dict(row)
        try:
            return cls(
                id=row["id"],
                slug=row["slug"],
                title=row.get("title"),
                feed_link=row["feed_link"],
                site_link=row.get("site_link"),
                description=row.get("description"),
                logo=load_json_column(_IMAGE, row.get("logo"), "logo"),
                icon=load_json_column(_IMAGE, row.get("icon"), "icon"),
            )
        except KeyError as e:
            raise SerializationError(f"Feed row is missing column {e}") from e
