"""Database initialization and schema management."""

import logging
import sqlite3

logger = logging.getLogger(__name__)


SCHEMA_SQL = """
-- Feeds table
CREATE TABLE IF NOT EXISTS feeds (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    slug TEXT NOT NULL,
    title TEXT,
    feed_link TEXT NOT NULL UNIQUE,
    site_link TEXT,
    description TEXT,
    logo TEXT,
    icon TEXT,
    created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
);

-- Entries table; nested values are JSON text
CREATE TABLE IF NOT EXISTS entries (
    id TEXT PRIMARY KEY,
    remote_id TEXT,
    feed_id INTEGER NOT NULL REFERENCES feeds(id) ON DELETE CASCADE,
    title TEXT,
    updated_at TEXT,
    published_at TEXT,
    authors TEXT,
    content TEXT,
    links TEXT,
    summary TEXT,
    categories TEXT,
    media TEXT,
    feed_title TEXT,
    feed_logo TEXT,
    feed_icon TEXT,
    read BOOLEAN NOT NULL DEFAULT 0,
    slug TEXT,
    featured_image TEXT
);

-- Subscriptions link table
CREATE TABLE IF NOT EXISTS subscriptions (
    user_id INTEGER NOT NULL,
    feed_id INTEGER NOT NULL REFERENCES feeds(id) ON DELETE CASCADE,
    created_at TEXT,
    PRIMARY KEY (user_id, feed_id)
);

-- Collections table
CREATE TABLE IF NOT EXISTS collections (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    user_id INTEGER NOT NULL,
    UNIQUE (user_id, title)
);

-- Collection membership table
CREATE TABLE IF NOT EXISTS collection_entries (
    entry_id TEXT NOT NULL REFERENCES entries(id) ON DELETE CASCADE,
    feed_id INTEGER NOT NULL,
    collection_id INTEGER NOT NULL REFERENCES collections(id) ON DELETE CASCADE,
    UNIQUE (entry_id, feed_id, collection_id)
);

-- Create indexes
CREATE UNIQUE INDEX IF NOT EXISTS idx_feeds_slug ON feeds(slug);
CREATE INDEX IF NOT EXISTS idx_entries_feed_id ON entries(feed_id);
CREATE INDEX IF NOT EXISTS idx_entries_published_at ON entries(published_at);
CREATE INDEX IF NOT EXISTS idx_subscriptions_user_id ON subscriptions(user_id);
CREATE INDEX IF NOT EXISTS idx_collections_user_id ON collections(user_id);
CREATE INDEX IF NOT EXISTS idx_collection_entries_collection_id ON collection_entries(collection_id);
CREATE INDEX IF NOT EXISTS idx_collection_entries_feed_id ON collection_entries(feed_id);
"""


def validate_connection(conn: sqlite3.Connection) -> bool:
    """Validate database connection."""
    try:
        row = conn.execute("SELECT 1 AS ok").fetchone()
        return row is not None and row["ok"] == 1
    except sqlite3.Error as e:
        logger.error("Database connection failed: %s", e)
        return False


def init_database(conn: sqlite3.Connection) -> None:
    """Initialize database schema."""
    try:
        conn.executescript(SCHEMA_SQL)
        logger.info("Database schema initialized")
    except sqlite3.Error as e:
        logger.error("Failed to initialize database schema: %s", e)
        raise
