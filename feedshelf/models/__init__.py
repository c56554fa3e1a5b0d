"""Data models for the feed reader."""

from .collection import Collection, CollectionEntry, Membership
from .entry import Author, Content, Entry, PersistedEntry
from .feed import Feed
from .subscription import Subscription

__all__ = [
    "Author",
    "Collection",
    "CollectionEntry",
    "Content",
    "Entry",
    "Feed",
    "Membership",
    "PersistedEntry",
    "Subscription",
]
