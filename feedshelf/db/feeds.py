"""Feed storage."""

from typing import Any, Dict, List, Mapping

from ..errors import NotFoundError
from ..models import Feed
from .base import BaseStore, returns_outcome


class FeedStore(BaseStore[Feed]):
    """Persist subscribed feeds."""

    table = "feeds"

    def _to_row(self, feed: Feed) -> Dict[str, Any]:
        return feed.to_persisted()

    def _from_row(self, row: Mapping[str, Any]) -> Feed:
        return Feed.from_persisted(row)

    def _unique_slug(self, slug: str) -> str:
        """Return ``slug`` or the first free ``slug-N`` variant."""
        taken = {
            row["slug"]
            for row in self._fetch_all(
                "SELECT slug FROM feeds WHERE slug = :slug OR slug LIKE :pattern",
                {"slug": slug, "pattern": f"{slug}-%"},
            )
        }
        candidate = slug
        suffix = 2
        while candidate in taken:
            candidate = f"{slug}-{suffix}"
            suffix += 1
        return candidate

    @returns_outcome("Error saving feed")
    def create(self, feed: Feed) -> Feed:
        """Insert a feed and return it with its id (and a unique slug)."""
        row = self._to_row(feed)
        row.pop("id")
        row["slug"] = self._unique_slug(row["slug"])
        stored = self._insert_row(row)
        if stored is None:
            raise NotFoundError(f"insert of feed {feed.feed_link} returned no row")
        return self._from_row(stored).with_entries(feed.entries)

    @returns_outcome("Error updating feed")
    def update(self, feed: Feed) -> Feed:
        if feed.id is None:
            raise NotFoundError("feed has no id")
        stored = self._update_row(self._to_row(feed))
        if stored is None:
            raise NotFoundError(f"no feed with id {feed.id}")
        return self._from_row(stored).with_entries(feed.entries)

    def _find_one(self, column: str, value: Any) -> Feed:
        row = self._fetch_one(
            f"SELECT * FROM feeds WHERE {column} = :value",
            {"value": value},
        )
        if row is None:
            raise NotFoundError(f"no feed with {column} {value!r}")
        return self._from_row(row)

    @returns_outcome("Error getting feed by slug")
    def find_by_slug(self, slug: str) -> Feed:
        return self._find_one("slug", slug)

    @returns_outcome("Error getting feed by url")
    def find_by_url(self, feed_link: str) -> Feed:
        """Look up a feed by its canonical feed URL."""
        return self._find_one("feed_link", feed_link)

    @returns_outcome("Error retrieving feeds")
    def find_all(self) -> List[Feed]:
        return [self._from_row(row) for row in self._fetch_all("SELECT * FROM feeds ORDER BY title")]

    @returns_outcome("Error retrieving subscribed feeds")
    def find_by_user_id(self, user_id: int) -> List[Feed]:
        """Feeds the user is subscribed to."""
        rows = self._fetch_all(
            """
            SELECT f.*
            FROM feeds f
            JOIN subscriptions s ON s.feed_id = f.id
            WHERE s.user_id = :user_id
            ORDER BY f.title
            """,
            {"user_id": user_id},
        )
        return [self._from_row(row) for row in rows]
