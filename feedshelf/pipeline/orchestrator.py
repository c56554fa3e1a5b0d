"""Refresh orchestration: fetch subscribed feeds and assemble the post list."""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from ..db import Stores
from ..errors import ErrorKind, Outcome
from ..ingestion import RSSFetcher
from ..models import Entry, Feed
from .subscriptions import READ_COLLECTION

logger = logging.getLogger(__name__)


@dataclass
class FeedRefresh:
    """Result of refreshing one subscribed feed."""

    feed_id: int
    title: Optional[str] = None
    start_time: Optional[float] = None
    end_time: Optional[float] = None
    success: bool = False
    fetched: int = 0
    stored: int = 0
    error: Optional[str] = None

    def start(self) -> None:
        self.start_time = time.time()

    def complete(self, fetched: int, stored: int) -> None:
        self.end_time = time.time()
        self.success = True
        self.fetched = fetched
        self.stored = stored

    def fail(self, error: str) -> None:
        self.end_time = time.time()
        self.success = False
        self.error = error

    @property
    def duration(self) -> float:
        """Refresh duration in seconds."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


@dataclass
class RefreshReport:
    """Combined post list plus what went wrong along the way."""

    posts: List[Entry] = field(default_factory=list)
    feeds: List[FeedRefresh] = field(default_factory=list)
    notices: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.notices


def newest_first(entries: List[Entry]) -> List[Entry]:
    """Sort by descending publication time; undated entries go last."""
    return sorted(entries, key=lambda entry: entry.sort_key, reverse=True)


class ReaderOrchestrator:
    """Reader workflows over the stores for one user at a time."""

    def __init__(
        self,
        stores: Stores,
        fetcher: RSSFetcher,
        read_collection: str = READ_COLLECTION,
    ) -> None:
        self.stores = stores
        self.fetcher = fetcher
        self.read_collection = read_collection

    def _with_read_state(self, entries: List[Entry], user_id: int) -> List[Entry]:
        collections = self.stores.collections
        return [
            entry.with_read(
                collections.is_entry_in_collection(entry.id, user_id, self.read_collection)
            )
            for entry in entries
        ]

    async def _refresh_feed(self, feed: Feed, refresh: FeedRefresh) -> None:
        """Fetch one feed and upsert its entries; failures are recorded on ``refresh``."""
        remote = await self.fetcher.fetch_feed(feed.feed_link)
        if not remote.ok:
            refresh.fail(remote.message)
            return

        entries = feed.normalize_entries(remote.value)
        stored = 0
        for entry in entries:
            result = self.stores.entries.upsert(entry)
            if result.ok:
                stored += 1
            else:
                logger.warning("Failed to save entry %s: %s", entry.title or entry.id, result.message)
        refresh.complete(fetched=len(entries), stored=stored)

    async def refresh_all(self, user_id: int, fetch: bool = True) -> RefreshReport:
        """
        Refresh every subscribed feed in turn and return all posts, newest first.

        A feed that cannot be loaded, fetched or read back adds a notice and is
        skipped; the remaining feeds are still processed. When a fetch fails
        the entries already stored for that feed are still listed.
        """
        report = RefreshReport()

        subscriptions = self.stores.subscriptions.get_subscriptions_by_user_id(user_id)
        if not subscriptions.ok:
            report.notices.append("There was a problem getting your subscriptions.")
            logger.error("Loading subscriptions for user %s failed: %s", user_id, subscriptions.message)
            return report

        posts: List[Entry] = []
        for subscription in subscriptions.value:
            refresh = FeedRefresh(feed_id=subscription.feed_id)
            report.feeds.append(refresh)
            refresh.start()

            feed = self.stores.feeds.find_by_id(subscription.feed_id)
            if not feed.ok:
                refresh.fail(feed.message)
                report.notices.append("There was an error retrieving your subscribed feeds.")
                continue
            refresh.title = feed.value.title

            if fetch:
                await self._refresh_feed(feed.value, refresh)
                if not refresh.success:
                    report.notices.append(f"There was an error updating {feed.value.title or feed.value.feed_link}.")
            else:
                refresh.complete(fetched=0, stored=0)

            entries = self.stores.entries.find_by_feed_id(feed.value.id)
            if not entries.ok:
                report.notices.append(f"There was a problem getting the entries of {feed.value.title}.")
                continue
            posts.extend(self._with_read_state(entries.value, user_id))

        report.posts = newest_first(posts)
        logger.info(
            "Refreshed %d feeds for user %s: %d posts, %d notices",
            len(report.feeds), user_id, len(report.posts), len(report.notices),
        )
        return report

    def feed_page(self, user_id: int, slug: str) -> Outcome[Feed]:
        """Feed with its entries (read state applied), newest first."""
        feed = self.stores.feeds.find_by_slug(slug)
        if not feed.ok:
            return feed

        entries = self.stores.entries.find_by_feed_id(feed.value.id)
        if not entries.ok:
            return entries

        return Outcome.success(
            feed.value.with_entries(newest_first(self._with_read_state(entries.value, user_id)))
        )

    def get_entry(self, user_id: int, entry_id: str) -> Outcome[Entry]:
        entry = self.stores.entries.find_by_id(entry_id)
        if not entry.ok:
            return entry
        return Outcome.success(self._with_read_state([entry.value], user_id)[0])

    def mark_read(self, user_id: int, entry_id: str) -> Outcome[Entry]:
        """
        Put an entry in the user's read collection and set its read flag.

        The two writes are independent; if the second fails the membership stays.
        """
        entry = self.stores.entries.find_by_id(entry_id)
        if not entry.ok:
            return entry

        collection = self.stores.collections.ensure(user_id, self.read_collection)
        if not collection.ok:
            return collection

        added = self.stores.collections.add_entry(entry.value.id, entry.value.feed_id, collection.value.id)
        if not added.ok:
            return added

        return self.stores.entries.update(entry.value.with_read(True))

    def mark_unread(self, user_id: int, entry_id: str) -> Outcome[Entry]:
        """Remove an entry from the user's read collection and clear its read flag."""
        entry = self.stores.entries.find_by_id(entry_id)
        if not entry.ok:
            return entry

        removed = self.stores.collections.remove_entry_by_collection_title(
            entry.value.id, user_id, self.read_collection
        )
        if not removed.ok and removed.kind is not ErrorKind.NOT_FOUND:
            return removed

        return self.stores.entries.update(entry.value.with_read(False))
