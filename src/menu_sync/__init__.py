"""Keep a navigation menu in sync with a page tree."""

from menu_sync.core.bootstrap import ensure_structure_exists
from menu_sync.core.events import PageEvent, PageEventHandler
from menu_sync.core.identity_map import IdentityMap, IdentityMapError
from menu_sync.core.sync.engine import MenuSyncEngine
from menu_sync.models.node import MenuItem, PageStatus, SourceNode, SyncOutcome, SyncResult

__all__ = [
    "IdentityMap",
    "IdentityMapError",
    "MenuItem",
    "MenuSyncEngine",
    "PageEvent",
    "PageEventHandler",
    "PageStatus",
    "SourceNode",
    "SyncOutcome",
    "SyncResult",
    "ensure_structure_exists",
]
