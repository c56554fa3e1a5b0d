"""Collection and collection membership storage."""

from typing import Any, Dict, List, Mapping

from ..errors import ErrorKind, NotFoundError, Outcome
from ..models import Collection, CollectionEntry, Membership
from .base import BaseStore, returns_outcome


class CollectionStore(BaseStore[Collection]):
    """
    Manage per-user collections and their entry memberships.

    Read state is modeled as membership in a collection titled "Read".
    """

    table = "collections"

    def _to_row(self, collection: Collection) -> Dict[str, Any]:
        return collection.model_dump()

    def _from_row(self, row: Mapping[str, Any]) -> Collection:
        return Collection.model_validate(dict(row))

    @returns_outcome("Could not create collection")
    def create(self, collection: Collection) -> Collection:
        """Insert a collection. A second collection with the same user and title is a constraint violation."""
        row = self._insert_row({"title": collection.title, "user_id": collection.user_id})
        if row is None:
            raise NotFoundError(f"insert of collection {collection.title!r} returned no row")
        return self._from_row(row)

    @returns_outcome("Error updating collection")
    def update(self, collection: Collection) -> Collection:
        if collection.id is None:
            raise NotFoundError(f"collection {collection.title!r} has no id")
        row = self._update_row(self._to_row(collection))
        if row is None:
            raise NotFoundError(f"no collection with id {collection.id}")
        return self._from_row(row)

    @returns_outcome("Error getting collection")
    def ensure(self, user_id: int, title: str) -> Collection:
        """Return the user's collection with this title, creating it if needed."""
        self.conn.execute(
            "INSERT OR IGNORE INTO collections (title, user_id) VALUES (:title, :user_id)",
            {"title": title, "user_id": user_id},
        )
        return self._get_by_title(user_id, title)

    def _get_by_title(self, user_id: int, title: str) -> Collection:
        row = self._fetch_one(
            "SELECT * FROM collections WHERE user_id = :user_id AND title = :title",
            {"user_id": user_id, "title": title},
        )
        if row is None:
            raise NotFoundError(f"could not find collection titled {title!r}")
        return self._from_row(row)

    @returns_outcome("Error getting collection by title")
    def find_by_title(self, title: str, user_id: int) -> Collection:
        return self._get_by_title(user_id, title)

    @returns_outcome("Error getting user collection")
    def find_user_collection_by_title(self, user_id: int, title: str) -> Collection:
        return self._get_by_title(user_id, title)

    @returns_outcome("Error getting collections for user")
    def find_collections_by_user_id(self, user_id: int) -> List[Collection]:
        rows = self._fetch_all(
            "SELECT * FROM collections WHERE user_id = :user_id ORDER BY title",
            {"user_id": user_id},
        )
        return [self._from_row(row) for row in rows]

    @returns_outcome("Collection entry error")
    def add_entry(self, entry_id: str, feed_id: int, collection_id: int) -> CollectionEntry:
        """Add an entry to a collection. Adding an existing membership is a no-op."""
        self.conn.execute(
            """
            INSERT OR IGNORE INTO collection_entries (entry_id, feed_id, collection_id)
            VALUES (:entry_id, :feed_id, :collection_id)
            """,
            {"entry_id": entry_id, "feed_id": feed_id, "collection_id": collection_id},
        )
        return CollectionEntry(entry_id=entry_id, feed_id=feed_id, collection_id=collection_id)

    def add_entry_by_title(
        self,
        entry_id: str,
        user_id: int,
        feed_id: int,
        title: str,
    ) -> Outcome[CollectionEntry]:
        """Add an entry to the user's collection with the given title."""
        collection = self.find_user_collection_by_title(user_id, title)
        if not collection.ok:
            return collection
        return self.add_entry(entry_id, feed_id, collection.value.id)

    @returns_outcome("Error removing entry from collections")
    def remove_entry(self, entry_id: str) -> int:
        """Remove an entry from every collection. Returns the number of memberships removed."""
        cursor = self.conn.execute(
            "DELETE FROM collection_entries WHERE entry_id = :entry_id",
            {"entry_id": entry_id},
        )
        return cursor.rowcount

    @returns_outcome("Error removing entry from collection")
    def remove_entry_by_collection_id(self, entry_id: str, collection_id: int) -> bool:
        row = self._fetch_one(
            """
            DELETE FROM collection_entries
            WHERE entry_id = :entry_id AND collection_id = :collection_id
            RETURNING entry_id
            """,
            {"entry_id": entry_id, "collection_id": collection_id},
        )
        if row is None:
            raise NotFoundError(f"entry {entry_id} is not in collection {collection_id}")
        return True

    def remove_entry_by_collection_title(
        self,
        entry_id: str,
        user_id: int,
        title: str,
    ) -> Outcome[bool]:
        collection = self.find_user_collection_by_title(user_id, title)
        if not collection.ok:
            return collection
        return self.remove_entry_by_collection_id(entry_id, collection.value.id)

    @returns_outcome("Error removing feed entries from collections")
    def remove_entries_by_feed_id(self, user_id: int, feed_id: int) -> int:
        """Clear the memberships of one feed's entries across all of the user's collections."""
        cursor = self.conn.execute(
            """
            DELETE FROM collection_entries
            WHERE feed_id = :feed_id
              AND collection_id IN (SELECT id FROM collections WHERE user_id = :user_id)
            """,
            {"user_id": user_id, "feed_id": feed_id},
        )
        return cursor.rowcount

    @returns_outcome("Error getting collection entry ids")
    def get_entry_ids(self, collection_id: int) -> List[str]:
        rows = self._fetch_all(
            "SELECT entry_id FROM collection_entries WHERE collection_id = :collection_id",
            {"collection_id": collection_id},
        )
        return [row["entry_id"] for row in rows]

    def membership(self, entry_id: str, user_id: int, title: str) -> Membership:
        """
        Whether an entry is in the user's collection.

        A missing collection means the entry is not a member; any other
        lookup failure is reported as UNKNOWN.
        """
        lookup = self._membership(entry_id, user_id, title)
        if lookup.kind is ErrorKind.NOT_FOUND:
            return Membership.NOT_MEMBER
        if not lookup.ok:
            return Membership.UNKNOWN
        return Membership.MEMBER if lookup.value else Membership.NOT_MEMBER

    @returns_outcome("Error checking collection membership")
    def _membership(self, entry_id: str, user_id: int, title: str) -> bool:
        collection = self._get_by_title(user_id, title)
        row = self._fetch_one(
            """
            SELECT entry_id FROM collection_entries
            WHERE collection_id = :collection_id AND entry_id = :entry_id
            """,
            {"collection_id": collection.id, "entry_id": entry_id},
        )
        return row is not None

    def is_entry_in_collection(self, entry_id: str, user_id: int, title: str) -> bool:
        """Membership check for list rendering. Any lookup failure counts as not a member."""
        return self.membership(entry_id, user_id, title) is Membership.MEMBER
