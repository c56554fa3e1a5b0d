"""SQLite storage for feeds, entries, subscriptions and collections."""

from .collections import CollectionStore
from .connection import get_connection, open_database
from .entries import EntryStore
from .feeds import FeedStore
from .init import init_database, validate_connection
from .stores import Stores
from .subscriptions import SubscriptionStore

__all__ = [
    "CollectionStore",
    "EntryStore",
    "FeedStore",
    "Stores",
    "SubscriptionStore",
    "get_connection",
    "init_database",
    "open_database",
    "validate_connection",
]
