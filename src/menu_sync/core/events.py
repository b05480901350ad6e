"""Turn page lifecycle events into incremental menu syncs."""

from enum import Enum

from loguru import logger

from menu_sync.config import IDENTITY_MAP_KEY, MENU_ID_KEY
from menu_sync.core.identity_map import IdentityMap, IdentityMapError
from menu_sync.core.sync.engine import MenuSyncEngine
from menu_sync.models.node import SyncOutcome, SyncResult
from menu_sync.protocols import MenuStoreProtocol, PageStoreProtocol, StateStoreProtocol


class PageEvent(str, Enum):
    """Lifecycle notifications that trigger a sync."""

    CREATED = "created"
    UPDATED = "updated"
    PUBLISHED = "published"


def load_menu_id(state: StateStoreProtocol) -> int | None:
    """Read the synced menu id from durable state."""
    raw = state.get(MENU_ID_KEY)
    if raw is None:
        return None
    try:
        return int(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        logger.warning("Stored menu id {!r} is not an integer, ignoring it", raw)
        return None


def load_identity_map(state: StateStoreProtocol) -> IdentityMap | None:
    """Read the identity map from durable state."""
    raw = state.get(IDENTITY_MAP_KEY)
    if raw is None:
        return None
    try:
        return IdentityMap.deserialize(raw)
    except IdentityMapError as e:
        logger.warning("Stored identity map is unreadable, ignoring it: {}", e)
        return None


def persist_state(
    state: StateStoreProtocol,
    *,
    menu_id: int | None = None,
    identity_map: IdentityMap | None = None,
) -> None:
    """Write the menu id and/or identity map back to durable state."""
    if menu_id is not None:
        state.set(MENU_ID_KEY, str(menu_id).encode("utf-8"))
    if identity_map is not None:
        state.set(IDENTITY_MAP_KEY, identity_map.serialize())


class PageEventHandler:
    """Apply one page event to the synced menu.

    State is loaded fresh on every call. Two events handled at the same time
    can both read the same map and the later write wins, dropping the other
    association; the next event for the dropped page creates a second item.
    """

    def __init__(
        self,
        page_store: PageStoreProtocol,
        menu_store: MenuStoreProtocol,
        state: StateStoreProtocol,
    ) -> None:
        self._page_store = page_store
        self._state = state
        self._engine = MenuSyncEngine(menu_store)

    def load_state(self) -> tuple[int | None, IdentityMap | None]:
        return load_menu_id(self._state), load_identity_map(self._state)

    def handle(self, page_id: int, event: PageEvent = PageEvent.UPDATED) -> SyncResult:
        """Sync a single page after it was created, updated or published."""
        node = self._page_store.get_node(page_id)
        if node is None:
            logger.debug("Page {} not found for {} event", page_id, event.value)
            return SyncResult(SyncOutcome.SKIPPED_UNKNOWN_PAGE, None)

        menu_id, identity_map = self.load_state()
        result = self._engine.incremental_sync(node, menu_id, identity_map)

        if result.changed:
            persist_state(self._state, identity_map=result.identity_map)
        logger.debug("Page {} {} event: {}", page_id, event.value, result.outcome.value)
        return result
