"""RSS/Atom feed fetcher and feedparser mapping."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import feedparser
import httpx

from ..errors import ErrorKind, Outcome
from .models import (
    Image,
    MediaObject,
    RemoteCategory,
    RemoteContent,
    RemoteEntry,
    RemoteFeed,
    RemoteLink,
    RemotePerson,
    RemoteText,
)

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "feedshelf/1.0 (+https://github.com/feedshelf/feedshelf)"


def _to_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _to_datetime(parsed_time: Any) -> Optional[datetime]:
    """Convert feedparser's UTC time tuple."""
    if not parsed_time:
        return None
    try:
        return datetime(*parsed_time[:6], tzinfo=timezone.utc)
    except (TypeError, ValueError):
        return None


def _text(detail: Optional[Dict[str, Any]]) -> Optional[RemoteText]:
    if not detail or detail.get("value") is None:
        return None
    return RemoteText(
        content=detail["value"],
        content_type=detail.get("type") or "text/plain",
    )


def _image(data: Any) -> Optional[Image]:
    if not data:
        return None
    if isinstance(data, str):
        return Image(uri=data)
    href = data.get("href") or data.get("url")
    if not href:
        return None
    return Image(
        uri=href,
        title=data.get("title"),
        link=data.get("link"),
        width=_to_int(data.get("width")),
        height=_to_int(data.get("height")),
        description=data.get("description"),
    )


def _media(entry: Dict[str, Any]) -> List[MediaObject]:
    thumbnails = [t.get("url") for t in entry.get("media_thumbnail", []) if t.get("url")]
    thumbnail = thumbnails[0] if thumbnails else None
    media = []

    for item in entry.get("media_content", []):
        media.append(
            MediaObject(
                url=item.get("url"),
                content_type=item.get("type"),
                medium=item.get("medium"),
                title=item.get("title"),
                thumbnail=thumbnail,
                width=_to_int(item.get("width")),
                height=_to_int(item.get("height")),
            )
        )

    for enclosure in entry.get("enclosures", []):
        href = enclosure.get("href")
        if href and not any(m.url == href for m in media):
            media.append(MediaObject(url=href, content_type=enclosure.get("type")))

    if not media and thumbnail:
        media.append(MediaObject(thumbnail=thumbnail, medium="image"))

    return media


def _entry(data: Dict[str, Any]) -> Optional[RemoteEntry]:
    native_id = data.get("id") or data.get("link") or data.get("title")
    if not native_id:
        return None

    content = None
    content_list = data.get("content") or []
    if content_list:
        content = RemoteContent(
            content_type=content_list[0].get("type") or "text/html",
            body=content_list[0].get("value"),
        )

    return RemoteEntry(
        id=native_id,
        title=_text(data.get("title_detail")),
        published=_to_datetime(data.get("published_parsed")),
        updated=_to_datetime(data.get("updated_parsed")),
        authors=[
            RemotePerson(name=a.get("name"), uri=a.get("href"), email=a.get("email"))
            for a in data.get("authors", [])
            if a
        ],
        summary=_text(data.get("summary_detail")),
        content=content,
        links=[
            RemoteLink(href=link["href"], rel=link.get("rel"), media_type=link.get("type"))
            for link in data.get("links", [])
            if link.get("href") and link.get("rel", "alternate") != "enclosure"
        ],
        categories=[
            RemoteCategory(term=tag["term"], label=tag.get("label"))
            for tag in data.get("tags", [])
            if tag.get("term")
        ],
        media=_media(data),
    )


def parse_feed_document(document: str) -> RemoteFeed:
    """
    Parse an RSS or Atom document.

    Raises:
        ValueError: if the document is not a feed
    """
    parsed = feedparser.parse(document)
    feed_info = parsed.get("feed", {})

    if not parsed.entries and not feed_info.get("title"):
        if parsed.bozo:
            raise ValueError(f"Invalid feed document: {parsed.get('bozo_exception')}")
        if not parsed.get("version"):
            raise ValueError("Document is not an RSS or Atom feed")

    entries = []
    for data in parsed.entries:
        entry = _entry(data)
        if entry is None:
            logger.warning("Skipping feed entry without an id, link or title")
            continue
        entries.append(entry)

    return RemoteFeed(
        title=feed_info.get("title"),
        link=feed_info.get("link"),
        description=feed_info.get("subtitle") or feed_info.get("description"),
        logo=_image(feed_info.get("image")) or _image(feed_info.get("logo")),
        icon=_image(feed_info.get("icon")),
        entries=entries,
    )


class RSSFetcher:
    """Fetch and parse remote feeds."""

    def __init__(
        self,
        timeout: float = 20.0,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize RSS fetcher."""
        self.timeout = timeout
        self.user_agent = user_agent
        self.transport = transport

    async def fetch_feed(self, url: str) -> Outcome[RemoteFeed]:
        """Fetch and parse a single feed."""
        headers = {
            "User-Agent": self.user_agent,
            "Accept": "application/rss+xml, application/atom+xml, application/xml;q=0.9, */*;q=0.8",
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                headers=headers,
                transport=self.transport,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
                feed = parse_feed_document(response.text)
        except httpx.InvalidURL as e:
            return Outcome.failure(ErrorKind.FETCH_FAILED, f"Invalid feed URL {url}: {e}")
        except httpx.TimeoutException:
            logger.warning("Timed out fetching %s after %.1fs", url, self.timeout)
            return Outcome.failure(ErrorKind.FETCH_FAILED, f"Request timed out: {url}")
        except httpx.HTTPStatusError as e:
            return Outcome.failure(
                ErrorKind.FETCH_FAILED,
                f"HTTP {e.response.status_code} fetching {url}",
            )
        except httpx.HTTPError as e:
            return Outcome.failure(ErrorKind.FETCH_FAILED, f"HTTP error fetching {url}: {e}")
        except ValueError as e:
            return Outcome.failure(ErrorKind.FETCH_FAILED, f"{url}: {e}")

        logger.debug("Fetched %s with %d entries", url, len(feed.entries))
        return Outcome.success(feed)

    def fetch_feed_sync(self, url: str) -> Outcome[RemoteFeed]:
        """Synchronous wrapper for fetch_feed."""
        return asyncio.run(self.fetch_feed(url))
