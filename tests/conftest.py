"""Shared fixtures: in-memory database, remote entry factories and a mock feed server."""

from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Dict, List, Optional, Tuple

import httpx
import pytest

from feedshelf.db import Stores, init_database, open_database
from feedshelf.ingestion import (
    RemoteContent,
    RemoteEntry,
    RemoteLink,
    RemoteText,
    RSSFetcher,
)
from feedshelf.models import Entry, Feed


@pytest.fixture
def conn():
    conn = open_database(":memory:")
    init_database(conn)
    yield conn
    conn.close()


@pytest.fixture
def stores(conn):
    return Stores.from_connection(conn)


def make_remote_entry(
    native_id: str = "urn:entry:1",
    title: Optional[str] = "Hello World",
    published: Optional[datetime] = None,
    updated: Optional[datetime] = None,
    body: Optional[str] = None,
    content_type: str = "text/html",
    link: Optional[str] = "https://example.com/post/1",
    summary: Optional[RemoteText] = None,
) -> RemoteEntry:
    return RemoteEntry(
        id=native_id,
        title=RemoteText(content=title) if title is not None else None,
        published=published,
        updated=updated,
        summary=summary,
        content=RemoteContent(content_type=content_type, body=body) if body is not None else None,
        links=[RemoteLink(href=link)] if link else [],
    )


def make_entry(
    feed_id: int,
    native_id: str = "urn:entry:1",
    feed_title: Optional[str] = None,
    **kwargs,
) -> Entry:
    return Entry.from_remote(
        make_remote_entry(native_id=native_id, **kwargs),
        feed_id,
        feed_title=feed_title,
    )


@pytest.fixture
def feed(stores) -> Feed:
    """A stored feed."""
    result = stores.feeds.create(
        Feed(slug="example", title="Example", feed_link="https://example.com/feed.xml")
    )
    assert result.ok, result.message
    return result.value


@pytest.fixture
def other_feed(stores) -> Feed:
    result = stores.feeds.create(
        Feed(slug="other", title="Other", feed_link="https://other.example.org/atom.xml")
    )
    assert result.ok, result.message
    return result.value


def rss_document(
    title: str,
    items: List[Tuple[str, str, datetime]],
    link: str = "https://example.com/",
) -> str:
    """RSS 2.0 document with one <item> per (guid, title, published)."""
    rendered = "".join(
        f"""
        <item>
          <guid>{guid}</guid>
          <title>{item_title}</title>
          <link>{guid}</link>
          <pubDate>{format_datetime(published)}</pubDate>
          <description>&lt;p&gt;About {item_title}&lt;/p&gt;</description>
        </item>"""
        for guid, item_title, published in items
    )
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>{title}</title>
    <link>{link}</link>
    <description>{title} posts</description>{rendered}
  </channel>
</rss>
"""


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class FeedServer:
    """Mock HTTP transport serving canned feed documents by URL."""

    def __init__(self) -> None:
        self.documents: Dict[str, Tuple[int, str]] = {}
        self.requests: List[str] = []

    def serve(self, url: str, body: str, status: int = 200) -> None:
        self.documents[url] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        status, body = self.documents.get(url, (404, "not found"))
        return httpx.Response(status, text=body)

    def fetcher(self) -> RSSFetcher:
        return RSSFetcher(timeout=5.0, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def feed_server() -> FeedServer:
    return FeedServer()
