"""Keep the synced menu in step with the page tree."""

from collections.abc import Iterable

from loguru import logger

from menu_sync.core.identity_map import IdentityMap
from menu_sync.models.node import SourceNode, SyncOutcome, SyncResult
from menu_sync.protocols import MenuStoreProtocol


class MenuSyncEngine:
    """Create and link menu items for published pages.

    Pages are processed in the order they are given. A page whose parent has
    not been mapped yet (parent unpublished, or listed after the child) is
    linked to no parent. Nothing is retried or reordered; the next event for
    that page fixes the link once the parent is mapped.
    """

    def __init__(self, menu_store: MenuStoreProtocol) -> None:
        self._menu_store = menu_store

    def full_sync(
        self,
        nodes: Iterable[SourceNode],
        menu_id: int,
        identity_map: IdentityMap | None = None,
    ) -> SyncResult:
        """Mirror every published page into the menu.

        Args:
            nodes: Pages in traversal order.
            menu_id: Menu to write items into.
            identity_map: Existing associations. Not mutated; a fresh map is
                used when None.

        Returns:
            SyncResult carrying the finished map. The caller persists it.
        """
        result_map = identity_map.copy() if identity_map is not None else IdentityMap()
        created: list[int] = []
        updated: list[int] = []
        unresolved: list[int] = []

        for node in nodes:
            if not node.is_published:
                logger.debug("Skipping unpublished page {} ({})", node.id, node.status.value)
                continue

            item_id, is_new = self._upsert(node, menu_id, result_map)
            (created if is_new else updated).append(node.id)

            if not self._link_parent(node, item_id, result_map):
                unresolved.append(node.id)

        logger.info(
            "Full sync of menu {}: {} created, {} refreshed, {} unresolved parents",
            menu_id, len(created), len(updated), len(unresolved),
        )
        return SyncResult(
            outcome=SyncOutcome.FULL_SYNC,
            identity_map=result_map,
            created=tuple(created),
            updated=tuple(updated),
            unresolved_parents=tuple(unresolved),
        )

    def incremental_sync(
        self,
        node: SourceNode,
        menu_id: int | None,
        identity_map: IdentityMap | None,
    ) -> SyncResult:
        """Apply a single page change to the menu.

        Does nothing when the page is not published or when the menu id or
        identity map could not be loaded (bootstrap never ran). In those cases
        the given identity_map is returned as-is.
        """
        if not node.is_published:
            logger.debug("Page {} is {}, not syncing", node.id, node.status.value)
            return SyncResult(SyncOutcome.SKIPPED_UNPUBLISHED, identity_map)
        if menu_id is None:
            logger.debug("No synced menu, ignoring page {}", node.id)
            return SyncResult(SyncOutcome.SKIPPED_NO_STRUCTURE, identity_map)
        if identity_map is None:
            logger.debug("No identity map, ignoring page {}", node.id)
            return SyncResult(SyncOutcome.SKIPPED_NO_IDENTITY_MAP, identity_map)

        item_id = identity_map.lookup(node.id)
        if item_id is not None:
            # Title changes follow the store's own update path; only position
            # and parentage are rewritten here.
            self._menu_store.upsert_item(
                menu_id, item_id, title=node.title, object_id=node.id, position=node.order_key
            )
            linked = self._link_parent(node, item_id, identity_map)
            logger.debug("Updated menu item {} for page {}", item_id, node.id)
            return SyncResult(
                outcome=SyncOutcome.UPDATED,
                identity_map=identity_map,
                updated=(node.id,),
                unresolved_parents=() if linked else (node.id,),
            )

        result_map = identity_map.copy()
        item_id, _ = self._upsert(node, menu_id, result_map)
        linked = self._link_parent(node, item_id, result_map)
        logger.info("Created menu item {} for page {} ({!r})", item_id, node.id, node.title)
        return SyncResult(
            outcome=SyncOutcome.CREATED,
            identity_map=result_map,
            created=(node.id,),
            unresolved_parents=() if linked else (node.id,),
        )

    def _upsert(
        self, node: SourceNode, menu_id: int, identity_map: IdentityMap
    ) -> tuple[int, bool]:
        """Create or refresh the item for node. Returns (item_id, created)."""
        existing = identity_map.lookup(node.id)
        item_id = self._menu_store.upsert_item(
            menu_id, existing, title=node.title, object_id=node.id, position=node.order_key
        )
        if existing is None:
            identity_map.insert(node.id, item_id)
            return item_id, True
        return existing, False

    def _link_parent(self, node: SourceNode, item_id: int, identity_map: IdentityMap) -> bool:
        """Write the parent link for item_id. Returns False if the parent was unresolved."""
        if node.is_root:
            self._menu_store.set_parent(item_id, None)
            return True

        parent_item_id = identity_map.lookup(node.parent_id)
        if parent_item_id is None:
            logger.debug(
                "Parent page {} of page {} has no menu item, leaving it unparented",
                node.parent_id, node.id,
            )
        self._menu_store.set_parent(item_id, parent_item_id)
        return parent_item_id is not None
