"""Shared store plumbing: exception-to-Outcome translation and generic row access."""

import functools
import logging
import sqlite3
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, TypeVar

from pydantic import ValidationError

from ..errors import ErrorKind, NotFoundError, Outcome, SerializationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


def returns_outcome(action: str) -> Callable:
    """
    Wrap a store method so it returns an Outcome instead of raising.

    The wrapped method returns its plain value on success. NotFoundError,
    SerializationError (or a ValidationError while rebuilding a model), sqlite3
    errors and integers too large to bind (OverflowError) become failure
    outcomes whose message starts with ``action``.
    """

    def decorator(func: Callable) -> Callable[..., Outcome]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Outcome:
            try:
                return Outcome.success(func(*args, **kwargs))
            except NotFoundError as e:
                return Outcome.failure(ErrorKind.NOT_FOUND, f"{action}: {e}")
            except (SerializationError, ValidationError) as e:
                logger.error("%s: %s", action, e)
                return Outcome.failure(ErrorKind.SERIALIZATION_ERROR, f"{action}: {e}")
            except sqlite3.IntegrityError as e:
                return Outcome.failure(ErrorKind.CONSTRAINT_VIOLATION, f"{action}: {e}")
            except (sqlite3.Error, OverflowError) as e:
                logger.error("%s: %s", action, e)
                return Outcome.failure(ErrorKind.STORAGE_ENGINE_ERROR, f"{action}: {e}")

        return wrapper

    return decorator


class BaseStore(Generic[ModelT]):
    """
    Generic store over one table.

    Subclasses name the table and primary key and provide the row mapping
    in both directions.
    """

    table: str = ""
    key: str = "id"

    def __init__(self, conn: sqlite3.Connection) -> None:
        """Initialize store with an open connection."""
        self.conn = conn

    def _to_row(self, model: ModelT) -> Dict[str, Any]:
        raise NotImplementedError

    def _from_row(self, row: Mapping[str, Any]) -> ModelT:
        raise NotImplementedError

    def _fetch_one(self, sql: str, params: Mapping[str, Any]) -> Optional[sqlite3.Row]:
        rows = self.conn.execute(sql, params).fetchall()
        return rows[0] if rows else None

    def _fetch_all(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> List[sqlite3.Row]:
        return self.conn.execute(sql, params or {}).fetchall()

    def _insert_row(self, row: Dict[str, Any], or_clause: str = "") -> Optional[sqlite3.Row]:
        columns = ", ".join(row)
        placeholders = ", ".join(f":{column}" for column in row)
        verb = f"INSERT {or_clause} INTO" if or_clause else "INSERT INTO"
        return self._fetch_one(
            f"{verb} {self.table} ({columns}) VALUES ({placeholders}) RETURNING *",
            row,
        )

    def _update_row(self, row: Dict[str, Any]) -> Optional[sqlite3.Row]:
        assignments = ", ".join(
            f"{column} = :{column}" for column in row if column != self.key
        )
        return self._fetch_one(
            f"UPDATE {self.table} SET {assignments} WHERE {self.key} = :{self.key} RETURNING *",
            row,
        )

    @returns_outcome("Error getting row")
    def find_by_id(self, key: Any) -> ModelT:
        """Look up one row by primary key."""
        row = self._fetch_one(
            f"SELECT * FROM {self.table} WHERE {self.key} = :key",
            {"key": key},
        )
        if row is None:
            raise NotFoundError(f"no {self.table} row with {self.key} {key!r}")
        return self._from_row(row)

    @returns_outcome("Error deleting row")
    def delete(self, key: Any) -> bool:
        """Delete one row by primary key."""
        row = self._fetch_one(
            f"DELETE FROM {self.table} WHERE {self.key} = :key RETURNING {self.key}",
            {"key": key},
        )
        if row is None:
            raise NotFoundError(f"no {self.table} row with {self.key} {key!r}")
        return True
