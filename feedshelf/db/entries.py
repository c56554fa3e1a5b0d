"""Entry storage."""

from typing import Any, Dict, List, Literal, Mapping

from ..errors import NotFoundError
from ..models import Entry
from .base import BaseStore, returns_outcome

# Columns refreshed when a re-fetched entry already exists; read state is kept.
_CONTENT_COLUMNS = (
    "remote_id",
    "feed_id",
    "title",
    "updated_at",
    "published_at",
    "authors",
    "content",
    "links",
    "summary",
    "categories",
    "media",
    "feed_title",
    "feed_logo",
    "feed_icon",
    "slug",
    "featured_image",
)


class EntryStore(BaseStore[Entry]):
    """Persist normalized entries."""

    table = "entries"

    def _to_row(self, entry: Entry) -> Dict[str, Any]:
        return entry.to_persisted().model_dump()

    def _from_row(self, row: Mapping[str, Any]) -> Entry:
        return Entry.from_persisted(row)

    @returns_outcome("Error saving entry")
    def create(self, entry: Entry) -> str:
        """Insert a new entry and return its id."""
        row = self._insert_row(self._to_row(entry))
        if row is None:
            raise NotFoundError(f"insert of entry {entry.id} returned no row")
        return row["id"]

    @returns_outcome("Error saving entry")
    def upsert(self, entry: Entry) -> Entry:
        """Insert an entry or refresh the content of the stored one, keeping its read state."""
        row = self._to_row(entry)
        columns = ", ".join(row)
        placeholders = ", ".join(f":{column}" for column in row)
        updates = ", ".join(f"{column} = excluded.{column}" for column in _CONTENT_COLUMNS)
        stored = self._fetch_one(
            f"""
            INSERT INTO entries ({columns}) VALUES ({placeholders})
            ON CONFLICT (id) DO UPDATE SET {updates}
            RETURNING *
            """,
            row,
        )
        return self._from_row(stored)

    @returns_outcome("Failed to update entry")
    def update(self, entry: Entry) -> Entry:
        """Replace every stored field of an existing entry."""
        row = self._update_row(self._to_row(entry))
        if row is None:
            raise NotFoundError(f"no entry with id {entry.id!r}")
        return self._from_row(row)

    @returns_outcome("Error retrieving entries for feed")
    def find_by_feed_id(self, feed_id: int) -> List[Entry]:
        rows = self._fetch_all(
            "SELECT * FROM entries WHERE feed_id = :feed_id",
            {"feed_id": feed_id},
        )
        return [self._from_row(row) for row in rows]

    @returns_outcome("Error retrieving entries")
    def find_all(self) -> List[Entry]:
        return [self._from_row(row) for row in self._fetch_all("SELECT * FROM entries")]

    @returns_outcome("Error retrieving entries by status")
    def find_by_status(self, status: Literal["read", "unread"]) -> List[Entry]:
        """Entries whose read flag matches ``status``."""
        rows = self._fetch_all(
            "SELECT * FROM entries WHERE read = :read",
            {"read": 1 if status == "read" else 0},
        )
        return [self._from_row(row) for row in rows]

    @returns_outcome("Error retrieving collection entries")
    def find_by_collection_id(self, collection_id: int) -> List[Entry]:
        rows = self._fetch_all(
            """
            SELECT e.*
            FROM entries e
            JOIN collection_entries ce ON ce.entry_id = e.id
            WHERE ce.collection_id = :collection_id
            """,
            {"collection_id": collection_id},
        )
        return [self._from_row(row) for row in rows]
