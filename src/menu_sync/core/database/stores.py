"""SQLite-backed page, menu and state stores."""

import sqlite3

from loguru import logger

from menu_sync.core.database.schema import get_metadata_bytes, set_metadata_bytes
from menu_sync.models.node import MenuItem, PageStatus, SourceNode


def _row_to_node(row: tuple[int, str, int | None, int, str]) -> SourceNode:
    page_id, title, parent_id, order_key, status = row
    return SourceNode(
        id=page_id,
        title=title,
        parent_id=parent_id or None,
        order_key=order_key,
        status=PageStatus.parse(status),
    )


class SqlitePageStore:
    """Pages kept in the ``pages`` table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def list_published_nodes(self) -> list[SourceNode]:
        """Return published pages ordered by id, like the host's post listing."""
        rows = self.conn.execute(
            "SELECT id, title, parent_id, order_key, status FROM pages "
            "WHERE status = ? ORDER BY id",
            (PageStatus.PUBLISHED.value,),
        ).fetchall()
        return [_row_to_node(r) for r in rows]

    def get_node(self, page_id: int) -> SourceNode | None:
        row = self.conn.execute(
            "SELECT id, title, parent_id, order_key, status FROM pages WHERE id = ?",
            (page_id,),
        ).fetchone()
        return _row_to_node(row) if row else None

    def save_node(self, node: SourceNode) -> bool:
        """Insert or replace a page. Returns True if it did not exist before."""
        is_new = self.get_node(node.id) is None
        self.conn.execute(
            "INSERT OR REPLACE INTO pages (id, title, parent_id, order_key, status) "
            "VALUES (?, ?, ?, ?, ?)",
            (node.id, node.title, node.parent_id, node.order_key, node.status.value),
        )
        self.conn.commit()
        return is_new


class SqliteMenuStore:
    """Menus and their items kept in the ``menus`` and ``menu_items`` tables."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def exists(self, name: str) -> bool:
        row = self.conn.execute("SELECT 1 FROM menus WHERE name = ?", (name,)).fetchone()
        return row is not None

    def create(self, name: str) -> int:
        cursor = self.conn.execute("INSERT INTO menus (name) VALUES (?)", (name,))
        self.conn.commit()
        return int(cursor.lastrowid)  # type: ignore[arg-type]

    def get_menu_id(self, name: str) -> int | None:
        row = self.conn.execute("SELECT id FROM menus WHERE name = ?", (name,)).fetchone()
        return row[0] if row else None

    def upsert_item(
        self,
        menu_id: int,
        item_id: int | None,
        *,
        title: str,
        object_id: int,
        position: int,
    ) -> int:
        if item_id is not None:
            cursor = self.conn.execute(
                "UPDATE menu_items SET title = ?, object_id = ?, position = ? WHERE id = ?",
                (title, object_id, position, item_id),
            )
            self.conn.commit()
            if not cursor.rowcount:
                logger.warning("Menu item {} for page {} no longer exists", item_id, object_id)
            return item_id

        cursor = self.conn.execute(
            "INSERT INTO menu_items (menu_id, title, object_id, position) VALUES (?, ?, ?, ?)",
            (menu_id, title, object_id, position),
        )
        self.conn.commit()
        return int(cursor.lastrowid)  # type: ignore[arg-type]

    def set_parent(self, item_id: int, parent_item_id: int | None) -> None:
        self.conn.execute(
            "UPDATE menu_items SET parent_item_id = ? WHERE id = ?",
            (parent_item_id, item_id),
        )
        self.conn.commit()

    def list_items(self, menu_id: int) -> list[MenuItem]:
        rows = self.conn.execute(
            "SELECT id, menu_id, title, object_id, parent_item_id, position, "
            "object_type, item_type, status FROM menu_items "
            "WHERE menu_id = ? ORDER BY position, id",
            (menu_id,),
        ).fetchall()
        return [
            MenuItem(
                id=r[0], menu_id=r[1], title=r[2], object_id=r[3], parent_item_id=r[4],
                position=r[5], object_type=r[6], item_type=r[7], status=r[8],
            )
            for r in rows
        ]


class SqliteStateStore:
    """Durable key-value state in the ``metadata`` table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def get(self, key: str) -> bytes | None:
        return get_metadata_bytes(self.conn, key)

    def set(self, key: str, value: bytes) -> None:
        set_metadata_bytes(self.conn, key, value)
