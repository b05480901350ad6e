"""Tests for importing pages from JSON."""

import json
import sqlite3
from pathlib import Path

import pytest

from menu_sync.core.database.stores import SqlitePageStore
from menu_sync.core.events import PageEvent
from menu_sync.core.importer.loader import import_pages, load_pages_file, parse_page
from menu_sync.models.node import PageStatus, SourceNode


def test_parse_page_with_own_field_names() -> None:
    node = parse_page(
        {"id": 3, "title": "Team", "parent_id": 2, "order_key": 1, "status": "draft"}
    )
    assert node == SourceNode(
        id=3, title="Team", parent_id=2, order_key=1, status=PageStatus.DRAFT
    )


def test_parse_page_with_host_export_names() -> None:
    node = parse_page(
        {"ID": "7", "post_title": "Blog", "post_parent": 0, "menu_order": "2",
         "post_status": "publish"}
    )
    assert node == SourceNode(id=7, title="Blog", parent_id=None, order_key=2)


def test_parse_page_defaults_to_published_root() -> None:
    assert parse_page({"id": 1}) == SourceNode(id=1, title="", parent_id=None)


def test_parse_page_without_id_raises() -> None:
    with pytest.raises(ValueError, match="without id"):
        parse_page({"title": "Nameless"})


def test_load_pages_file_accepts_list_and_wrapped(tmp_path: Path) -> None:
    listed = tmp_path / "list.json"
    listed.write_text(json.dumps([{"id": 1}, {"id": 2, "parent_id": 1}]))
    wrapped = tmp_path / "wrapped.json"
    wrapped.write_text(json.dumps({"pages": [{"id": 1}]}))

    assert [n.id for n in load_pages_file(listed)] == [1, 2]
    assert [n.id for n in load_pages_file(wrapped)] == [1]


def test_load_pages_file_rejects_other_shapes(tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"nodes": []}))
    with pytest.raises(ValueError, match="Expected a list"):
        load_pages_file(bad)


def test_import_pages_reports_events(conn: sqlite3.Connection) -> None:
    pages = SqlitePageStore(conn)
    pages.save_node(SourceNode(id=1, title="Home", parent_id=None))
    pages.save_node(SourceNode(id=2, title="About", parent_id=1, status=PageStatus.DRAFT))

    stats = import_pages(
        pages,
        [
            SourceNode(id=1, title="Home page", parent_id=None),
            SourceNode(id=2, title="About", parent_id=1),
            SourceNode(id=3, title="Team", parent_id=2),
        ],
    )

    assert stats.pages_created == 1
    assert stats.pages_updated == 2
    assert stats.events == (
        (1, PageEvent.UPDATED),
        (2, PageEvent.PUBLISHED),
        (3, PageEvent.CREATED),
    )
    node = pages.get_node(1)
    assert node is not None
    assert node.title == "Home page"


def test_parse_page_rejects_non_objects() -> None:
    with pytest.raises(ValueError, match="JSON object"):
        parse_page([1, 2])  # type: ignore[arg-type]
