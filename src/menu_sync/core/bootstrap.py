"""First-run creation of the synced menu."""

from loguru import logger

from menu_sync.config import MENU_NAME
from menu_sync.core.events import load_menu_id, persist_state
from menu_sync.core.sync.engine import MenuSyncEngine
from menu_sync.models.node import BootstrapResult
from menu_sync.protocols import MenuStoreProtocol, PageStoreProtocol, StateStoreProtocol


def ensure_structure_exists(
    page_store: PageStoreProtocol,
    menu_store: MenuStoreProtocol,
    state: StateStoreProtocol,
    *,
    menu_name: str = MENU_NAME,
) -> BootstrapResult:
    """Create and populate the synced menu unless it already exists.

    Safe to call on every startup: when the menu is found nothing is written.

    Args:
        page_store: Source of published pages.
        menu_store: Store holding menus and menu items.
        state: Durable state receiving the menu id and identity map.
        menu_name: Name the synced menu is looked up and created under.

    Returns:
        BootstrapResult; ``created`` is False when the menu already existed, and
        ``menu_id`` is then the id recorded in state (None if state was lost).
    """
    if menu_store.exists(menu_name):
        menu_id = load_menu_id(state)
        logger.debug("Menu {!r} already exists (id {}), nothing to bootstrap", menu_name, menu_id)
        return BootstrapResult(menu_id=menu_id, created=False)

    menu_id = menu_store.create(menu_name)
    logger.info("Created menu {!r} (id {})", menu_name, menu_id)

    engine = MenuSyncEngine(menu_store)
    result = engine.full_sync(page_store.list_published_nodes(), menu_id)

    persist_state(state, menu_id=menu_id, identity_map=result.identity_map)
    return BootstrapResult(menu_id=menu_id, created=True, sync=result)
