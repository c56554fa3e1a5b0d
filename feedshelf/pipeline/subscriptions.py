"""Subscribe and unsubscribe workflows."""

import logging

from ..db import Stores
from ..errors import ErrorKind, Outcome
from ..ingestion import RSSFetcher
from ..models import Feed

logger = logging.getLogger(__name__)

READ_COLLECTION = "Read"


class SubscriptionService:
    """Create and remove subscriptions, storing new feeds and their entries."""

    def __init__(
        self,
        stores: Stores,
        fetcher: RSSFetcher,
        read_collection: str = READ_COLLECTION,
    ) -> None:
        self.stores = stores
        self.fetcher = fetcher
        self.read_collection = read_collection

    async def save_remote_feed(self, url: str) -> Outcome[Feed]:
        """Fetch a feed that is not stored yet and persist it with its entries."""
        remote = await self.fetcher.fetch_feed(url)
        if not remote.ok:
            return remote

        created = self.stores.feeds.create(Feed.from_remote(remote.value, url))
        if not created.ok:
            return created
        feed = created.value

        saved = []
        for entry in feed.normalize_entries(remote.value):
            result = self.stores.entries.upsert(entry)
            if not result.ok:
                logger.warning("Failed to save entry %s: %s", entry.title or entry.id, result.message)
                continue
            saved.append(result.value)

        logger.info("Stored feed %s with %d entries", feed.feed_link, len(saved))
        return Outcome.success(feed.with_entries(saved))

    async def subscribe(self, user_id: int, url: str) -> Outcome[Feed]:
        """
        Subscribe a user to the feed at ``url``.

        A feed seen for the first time is fetched and stored before the
        subscription is created. The user's read collection is created lazily.
        """
        stored = self.stores.feeds.find_by_url(url)
        if stored.ok:
            feed = stored.value
        elif stored.kind is ErrorKind.NOT_FOUND:
            created = await self.save_remote_feed(url)
            if not created.ok:
                return created
            feed = created.value
        else:
            return stored

        subscription = self.stores.subscriptions.create(user_id, feed.id)
        if not subscription.ok:
            return subscription

        collection = self.stores.collections.ensure(user_id, self.read_collection)
        if not collection.ok:
            logger.warning("Could not create %r collection for user %s: %s",
                           self.read_collection, user_id, collection.message)

        return Outcome.success(feed)

    def unsubscribe(self, user_id: int, feed_id: int) -> Outcome[bool]:
        """Remove a subscription and the user's collection memberships for that feed. The feed stays."""
        cleared = self.stores.collections.remove_entries_by_feed_id(user_id, feed_id)
        if not cleared.ok:
            return cleared
        return self.stores.subscriptions.delete(user_id, feed_id)
