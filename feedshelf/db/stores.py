"""Bundle of stores sharing one connection."""

import sqlite3
from dataclasses import dataclass

from .collections import CollectionStore
from .entries import EntryStore
from .feeds import FeedStore
from .subscriptions import SubscriptionStore


@dataclass
class Stores:
    """All stores, built once from an explicitly opened connection."""

    entries: EntryStore
    feeds: FeedStore
    subscriptions: SubscriptionStore
    collections: CollectionStore

    @classmethod
    def from_connection(cls, conn: sqlite3.Connection) -> "Stores":
        return cls(
            entries=EntryStore(conn),
            feeds=FeedStore(conn),
            subscriptions=SubscriptionStore(conn),
            collections=CollectionStore(conn),
        )
