"""Import pages from a JSON export into the page store."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from loguru import logger

from menu_sync.core.database.stores import SqlitePageStore
from menu_sync.core.events import PageEvent
from menu_sync.models.node import PageStatus, SourceNode

# Field names as exported by the host platform, keyed by our field name.
_HOST_FIELDS = {
    "id": "ID",
    "title": "post_title",
    "parent_id": "post_parent",
    "order_key": "menu_order",
    "status": "post_status",
}


@dataclass(frozen=True)
class ImportStats:
    """Summary of an import operation."""

    pages_created: int
    pages_updated: int
    events: tuple[tuple[int, PageEvent], ...]


def _field(raw: dict[str, Any], name: str, default: Any = None) -> Any:
    if name in raw:
        return raw[name]
    return raw.get(_HOST_FIELDS[name], default)


def parse_page(raw: dict[str, Any]) -> SourceNode:
    """Parse a single page object.

    Accepts both our own field names and the host platform's export names
    (``ID``, ``post_title``, ``post_parent``, ``menu_order``, ``post_status``).
    """
    if not isinstance(raw, dict):
        msg = f"Page must be a JSON object, got {raw!r}"
        raise ValueError(msg)
    page_id = _field(raw, "id")
    if page_id is None:
        msg = f"Page without id: {raw!r}"
        raise ValueError(msg)
    parent_id = _field(raw, "parent_id")
    return SourceNode(
        id=int(page_id),
        title=str(_field(raw, "title", "")),
        parent_id=int(parent_id or 0) or None,
        order_key=int(_field(raw, "order_key", 0)),
        status=PageStatus.parse(_field(raw, "status", PageStatus.PUBLISHED.value)),
    )


def load_pages_file(path: Path) -> list[SourceNode]:
    """Read a JSON file holding a list of page objects (or ``{"pages": [...]}``)."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("pages")
    if not isinstance(data, list):
        msg = f"Expected a list of pages in {path}"
        raise ValueError(msg)
    return [parse_page(raw) for raw in data]


def import_pages(page_store: SqlitePageStore, nodes: list[SourceNode]) -> ImportStats:
    """Save pages and report which lifecycle event each one should fire.

    Pages that are new get a CREATED event, pages that already existed get
    UPDATED, and previously unpublished pages that are now published get
    PUBLISHED.
    """
    created = 0
    updated = 0
    events: list[tuple[int, PageEvent]] = []

    for node in nodes:
        previous = page_store.get_node(node.id)
        page_store.save_node(node)
        if previous is None:
            created += 1
            events.append((node.id, PageEvent.CREATED))
        else:
            updated += 1
            if node.is_published and not previous.is_published:
                events.append((node.id, PageEvent.PUBLISHED))
            else:
                events.append((node.id, PageEvent.UPDATED))

    logger.info("Import complete: {} created, {} updated", created, updated)
    return ImportStats(pages_created=created, pages_updated=updated, events=tuple(events))
