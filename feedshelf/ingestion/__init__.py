"""Remote feed fetching and entry derivation."""

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
from .rss_fetcher import RSSFetcher, parse_feed_document

__all__ = [
    "Image",
    "MediaObject",
    "RSSFetcher",
    "RemoteCategory",
    "RemoteContent",
    "RemoteEntry",
    "RemoteFeed",
    "RemoteLink",
    "RemotePerson",
    "RemoteText",
    "parse_feed_document",
]
