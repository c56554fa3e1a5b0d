"""Data models for fetched remote feeds."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class RemoteText(BaseModel):
    """Text construct with its declared content type."""

    content: str = Field(..., description="Text value")
    content_type: str = Field("text/plain", description="MIME type of the text")


class RemoteContent(BaseModel):
    """Entry body."""

    content_type: str = Field("text/html", description="MIME type of the body")
    body: Optional[str] = Field(None, description="Body text or markup")


class RemotePerson(BaseModel):
    """Author or contributor."""

    name: Optional[str] = Field(None, description="Display name")
    uri: Optional[str] = Field(None, description="Homepage")
    email: Optional[str] = Field(None, description="Email address")


class RemoteLink(BaseModel):
    """Link element."""

    href: str = Field(..., description="Link target")
    rel: Optional[str] = Field(None, description="Link relation")
    media_type: Optional[str] = Field(None, description="MIME type of the target")


class RemoteCategory(BaseModel):
    """Category or tag."""

    term: str = Field(..., description="Category term")
    label: Optional[str] = Field(None, description="Human readable label")


class MediaObject(BaseModel):
    """Media RSS / enclosure attachment."""

    url: Optional[str] = Field(None, description="Media URL")
    content_type: Optional[str] = Field(None, description="MIME type")
    medium: Optional[str] = Field(None, description="image, video, audio...")
    title: Optional[str] = Field(None, description="Media title")
    description: Optional[str] = Field(None, description="Media description")
    thumbnail: Optional[str] = Field(None, description="Thumbnail URL")
    width: Optional[int] = Field(None, description="Width in pixels")
    height: Optional[int] = Field(None, description="Height in pixels")


class Image(BaseModel):
    """Feed logo or icon."""

    uri: str = Field(..., description="Image URL")
    title: Optional[str] = Field(None, description="Image title")
    link: Optional[str] = Field(None, description="Link the image points to")
    width: Optional[int] = Field(None, description="Width in pixels")
    height: Optional[int] = Field(None, description="Height in pixels")
    description: Optional[str] = Field(None, description="Alternative text")


class RemoteEntry(BaseModel):
    """Entry as delivered by the feed parser."""

    id: str = Field(..., description="Native entry id (guid / atom:id)")
    title: Optional[RemoteText] = Field(None, description="Entry title")
    published: Optional[datetime] = Field(None, description="Publication timestamp")
    updated: Optional[datetime] = Field(None, description="Last update timestamp")
    authors: List[RemotePerson] = Field(default_factory=list, description="Authors")
    summary: Optional[RemoteText] = Field(None, description="Explicit summary")
    content: Optional[RemoteContent] = Field(None, description="Entry body")
    links: List[RemoteLink] = Field(default_factory=list, description="Entry links")
    categories: List[RemoteCategory] = Field(default_factory=list, description="Categories")
    media: List[MediaObject] = Field(default_factory=list, description="Media attachments")


class RemoteFeed(BaseModel):
    """Feed document as delivered by the feed parser."""

    title: Optional[str] = Field(None, description="Feed title")
    link: Optional[str] = Field(None, description="Website link")
    description: Optional[str] = Field(None, description="Feed subtitle/description")
    logo: Optional[Image] = Field(None, description="Feed logo")
    icon: Optional[Image] = Field(None, description="Feed icon")
    entries: List[RemoteEntry] = Field(default_factory=list, description="Feed entries")
