"""Entry model: one normalized article belonging to a feed."""

from datetime import datetime
from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from ..errors import SerializationError
from ..ingestion import derive
from ..ingestion.models import Image, MediaObject, RemoteEntry
from .base import (
    ValueModel,
    dump_json_column,
    dump_timestamp,
    load_json_column,
    load_timestamp,
)


class Author(ValueModel):
    """Entry author."""

    name: Optional[str] = None
    uri: Optional[str] = None
    email: Optional[str] = None


class Content(ValueModel):
    """Entry body with its content type."""

    content_type: str = Field(..., description="MIME type of the body")
    body: Optional[str] = Field(None, description="Body text or markup")


_AUTHORS = TypeAdapter(List[Author])
_CONTENT = TypeAdapter(Content)
_STRINGS = TypeAdapter(List[str])
_MEDIA = TypeAdapter(List[MediaObject])
_IMAGE = TypeAdapter(Image)


class PersistedEntry(BaseModel):
    """Flat row shape of an entry; nested values are JSON text."""

    model_config = ConfigDict(extra="ignore")

    id: str
    remote_id: Optional[str] = None
    feed_id: int
    title: Optional[str] = None
    updated_at: Optional[str] = None
    published_at: Optional[str] = None
    authors: Optional[str] = None
    content: Optional[str] = None
    links: Optional[str] = None
    summary: Optional[str] = None
    categories: Optional[str] = None
    media: Optional[str] = None
    feed_title: Optional[str] = None
    feed_logo: Optional[str] = None
    feed_icon: Optional[str] = None
    read: bool = False
    slug: Optional[str] = None
    featured_image: Optional[str] = None


class Entry(ValueModel):
    """Normalized feed entry."""

    id: str = Field(..., description="Hash of the remote native id")
    remote_id: Optional[str] = Field(None, description="Native id from the feed document")
    feed_id: int = Field(..., description="Owning feed")
    title: Optional[str] = Field(None, description="Entry title")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")
    published_at: Optional[datetime] = Field(None, description="Publication timestamp")
    authors: List[Author] = Field(default_factory=list, description="Authors in feed order")
    content: Optional[Content] = Field(None, description="Entry body")
    links: List[str] = Field(default_factory=list, description="Link URLs in feed order")
    summary: Optional[str] = Field(None, description="Derived summary text")
    categories: List[str] = Field(default_factory=list, description="Category terms")
    media: Optional[List[MediaObject]] = Field(None, description="Media attachments")
    feed_title: Optional[str] = Field(None, description="Feed title at ingestion time")
    feed_logo: Optional[Image] = Field(None, description="Feed logo at ingestion time")
    feed_icon: Optional[Image] = Field(None, description="Feed icon at ingestion time")
    read: bool = Field(False, description="Whether the entry has been read")
    slug: str = Field("", description="URL-safe slug of the title")
    featured_image: Optional[str] = Field(None, description="First image of the body")

    def with_read(self, read: bool) -> "Entry":
        """Copy of this entry with the given read state."""
        return self.model_copy(update={"read": read})

    @property
    def sort_key(self) -> float:
        """Publication time as a timestamp; entries without one sort first."""
        if self.published_at is None:
            return float("-inf")
        return self.published_at.timestamp()

    @classmethod
    def from_remote(
        cls,
        entry: RemoteEntry,
        feed_id: int,
        feed_title: Optional[str] = None,
        feed_logo: Optional[Image] = None,
        feed_icon: Optional[Image] = None,
    ) -> "Entry":
        """Normalize a parsed remote entry."""
        entry_id = derive.stable_id(entry.id)
        title = entry.title.content if entry.title else None
        links = [link.href for link in entry.links]
        origin = derive.link_origin(links[0]) if links else None

        content = None
        if entry.content is not None:
            content = Content(
                content_type=entry.content.content_type,
                body=entry.content.body,
            )

        return cls(
            id=entry_id,
            remote_id=entry.id,
            feed_id=feed_id,
            title=title,
            updated_at=entry.updated,
            published_at=derive.derive_published(entry),
            authors=[
                Author(name=a.name, uri=a.uri, email=a.email) for a in entry.authors
            ],
            content=content,
            links=links,
            summary=derive.derive_summary(entry),
            categories=[c.term for c in entry.categories],
            media=[m.model_copy(deep=True) for m in entry.media] or None,
            feed_title=feed_title,
            feed_logo=feed_logo.model_copy(deep=True) if feed_logo else None,
            feed_icon=feed_icon.model_copy(deep=True) if feed_icon else None,
            slug=derive.slugify(title) or entry_id,
            featured_image=derive.derive_featured_image(entry.content, origin),
        )

    def to_persisted(self) -> PersistedEntry:
        """Flatten to the stored row shape."""
        return PersistedEntry(
            id=self.id,
            remote_id=self.remote_id,
            feed_id=self.feed_id,
            title=self.title,
            updated_at=dump_timestamp(self.updated_at),
            published_at=dump_timestamp(self.published_at),
            authors=dump_json_column(_AUTHORS, self.authors),
            content=dump_json_column(_CONTENT, self.content),
            links=dump_json_column(_STRINGS, self.links),
            summary=self.summary,
            categories=dump_json_column(_STRINGS, self.categories),
            media=dump_json_column(_MEDIA, self.media),
            feed_title=self.feed_title,
            feed_logo=dump_json_column(_IMAGE, self.feed_logo),
            feed_icon=dump_json_column(_IMAGE, self.feed_icon),
            read=self.read,
            slug=self.slug,
            featured_image=self.featured_image,
        )

    @classmethod
    def from_persisted(cls, record: Union[PersistedEntry, Mapping[str, Any]]) -> "Entry":
        """Rebuild an entry from a stored row.

        Raises:
            SerializationError: if a text column does not hold a valid value.
        """
        if not isinstance(record, PersistedEntry):
            try:
                record = PersistedEntry.model_validate(dict(record))
            except ValidationError as e:
                raise SerializationError(f"Malformed entry row: {e}") from e

        return cls(
            id=record.id,
            remote_id=record.remote_id,
            feed_id=record.feed_id,
            title=record.title,
            updated_at=load_timestamp(record.updated_at, "updated_at"),
            published_at=load_timestamp(record.published_at, "published_at"),
            authors=load_json_column(_AUTHORS, record.authors, "authors") or [],
            content=load_json_column(_CONTENT, record.content, "content"),
            links=load_json_column(_STRINGS, record.links, "links") or [],
            summary=record.summary,
            categories=load_json_column(_STRINGS, record.categories, "categories") or [],
            media=load_json_column(_MEDIA, record.media, "media"),
            feed_title=record.feed_title,
            feed_logo=load_json_column(_IMAGE, record.feed_logo, "feed_logo"),
            feed_icon=load_json_column(_IMAGE, record.feed_icon, "feed_icon"),
            read=record.read,
            slug=record.slug or record.id,
            featured_image=record.featured_image,
        )
