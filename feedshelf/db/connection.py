"""Database connection management."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Union

MEMORY_DATABASE = ":memory:"


def open_database(path: Union[str, Path]) -> sqlite3.Connection:
    """
    Open a SQLite connection for the stores.

    The connection runs in autocommit mode so every statement is atomic on
    its own. Rows come back as sqlite3.Row and foreign keys are enforced.
    """
    if str(path) != MEMORY_DATABASE:
        Path(path).expanduser().parent.mkdir(parents=True, exist_ok=True)
        path = Path(path).expanduser()

    conn = sqlite3.connect(path, isolation_level=None)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_connection(path: Union[str, Path]) -> Generator[sqlite3.Connection, None, None]:
    """Open a connection and close it when the block exits."""
    conn = open_database(path)
    try:
        yield conn
    finally:
        conn.close()
