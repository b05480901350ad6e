"""Shared test fixtures."""

import sqlite3
from collections.abc import Iterator

import pytest

from menu_sync.core.database.schema import create_schema
from tests.unit.fakes import SITE_PAGES, FakeMenuStore, FakePageStore, FakeStateStore


@pytest.fixture
def page_store() -> FakePageStore:
    return FakePageStore(SITE_PAGES)


@pytest.fixture
def menu_store() -> FakeMenuStore:
    return FakeMenuStore()


@pytest.fixture
def state() -> FakeStateStore:
    return FakeStateStore()


@pytest.fixture
def conn() -> Iterator[sqlite3.Connection]:
    """Return an in-memory DB with the schema created."""
    conn = sqlite3.connect(":memory:")
    create_schema(conn)
    yield conn
    conn.close()
