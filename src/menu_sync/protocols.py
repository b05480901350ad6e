"""Protocols for the stores the sync engine depends on."""

from typing import Protocol, runtime_checkable

from menu_sync.models.node import SourceNode


@runtime_checkable
class PageStoreProtocol(Protocol):
    """Protocol for the source of pages."""

    def list_published_nodes(self) -> list[SourceNode]:
        """Return all published pages in traversal order."""
        ...

    def get_node(self, page_id: int) -> SourceNode | None:
        """Return a single page (any status), or None if it does not exist."""
        ...


@runtime_checkable
class MenuStoreProtocol(Protocol):
    """Protocol for the store holding the derived menu."""

    def exists(self, name: str) -> bool:
        """Check whether a menu with this name exists."""
        ...

    def create(self, name: str) -> int:
        """Create a named menu and return its id."""
        ...

    def upsert_item(
        self,
        menu_id: int,
        item_id: int | None,
        *,
        title: str,
        object_id: int,
        position: int,
    ) -> int:
        """Create a menu item (item_id None) or update an existing one. Returns its id."""
        ...

    def set_parent(self, item_id: int, parent_item_id: int | None) -> None:
        """Point a menu item at its parent item, or at no parent."""
        ...


@runtime_checkable
class StateStoreProtocol(Protocol):
    """Protocol for durable key-value state."""

    def get(self, key: str) -> bytes | None:
        """Return the stored value, or None if the key is absent."""
        ...

    def set(self, key: str, value: bytes) -> None:
        """Store a value under a key, replacing any previous value."""
        ...
