"""SQLite schema creation and migration for menu-sync."""

import sqlite3

SCHEMA_VERSION = 1

_SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS pages (
    id INTEGER PRIMARY KEY,
    title TEXT NOT NULL DEFAULT '',
    parent_id INTEGER,
    order_key INTEGER NOT NULL DEFAULT 0,
    status TEXT NOT NULL DEFAULT 'draft'
);

CREATE TABLE IF NOT EXISTS menus (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE
);

CREATE TABLE IF NOT EXISTS menu_items (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    menu_id INTEGER NOT NULL,
    title TEXT NOT NULL DEFAULT '',
    object_id INTEGER NOT NULL,
    object_type TEXT NOT NULL DEFAULT 'page',
    item_type TEXT NOT NULL DEFAULT 'post_type',
    status TEXT NOT NULL DEFAULT 'publish',
    position INTEGER NOT NULL DEFAULT 0,
    parent_item_id INTEGER,
    FOREIGN KEY (menu_id) REFERENCES menus(id)
);

CREATE INDEX IF NOT EXISTS idx_menu_items_menu ON menu_items(menu_id, position);
CREATE INDEX IF NOT EXISTS idx_pages_parent ON pages(parent_id);

CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value BLOB NOT NULL
);
"""


def create_schema(conn: sqlite3.Connection) -> None:
    """Create all tables and indexes."""
    conn.executescript(_SCHEMA_SQL)
    set_metadata(conn, "schema_version", str(SCHEMA_VERSION))


def get_schema_version(conn: sqlite3.Connection) -> int | None:
    """Return the current schema version, or None if metadata table doesn't exist."""
    try:
        value = get_metadata(conn, "schema_version")
    except sqlite3.OperationalError:
        return None
    return int(value) if value is not None else None


def migrate_schema(conn: sqlite3.Connection) -> None:
    """Create or migrate the database schema to the latest version."""
    version = get_schema_version(conn)
    if version is None:
        create_schema(conn)


def get_metadata(conn: sqlite3.Connection, key: str) -> str | None:
    """Return a metadata value as text, or None if the key is absent."""
    raw = get_metadata_bytes(conn, key)
    return raw.decode("utf-8") if raw is not None else None


def set_metadata(conn: sqlite3.Connection, key: str, value: str) -> None:
    set_metadata_bytes(conn, key, value.encode("utf-8"))


def get_metadata_bytes(conn: sqlite3.Connection, key: str) -> bytes | None:
    row = conn.execute("SELECT value FROM metadata WHERE key = ?", (key,)).fetchone()
    if row is None:
        return None
    value = row[0]
    # Rows written by hand through the sqlite3 shell come back as text.
    return value.encode("utf-8") if isinstance(value, str) else bytes(value)


def set_metadata_bytes(conn: sqlite3.Connection, key: str, value: bytes) -> None:
    conn.execute(
        "INSERT OR REPLACE INTO metadata (key, value) VALUES (?, ?)",
        (key, value),
    )
    conn.commit()
