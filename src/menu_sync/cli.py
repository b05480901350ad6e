"""CLI for menu-sync (bootstrap, page import and page events)."""

import sqlite3
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from menu_sync.config import DATABASE_FILENAME, MENU_NAME, resolve_data_directory
from menu_sync.core.bootstrap import ensure_structure_exists
from menu_sync.core.database.schema import migrate_schema
from menu_sync.core.database.stores import SqliteMenuStore, SqlitePageStore, SqliteStateStore
from menu_sync.core.events import PageEvent, PageEventHandler, load_identity_map, load_menu_id
from menu_sync.core.importer.loader import import_pages, load_pages_file
from menu_sync.logging_config import configure_logging
from menu_sync.models.node import PageStatus, SourceNode

app = typer.Typer(help="Keep a navigation menu in sync with a page tree.")

_DEFAULT_DATA_DIR = resolve_data_directory()

DataDirOption = Annotated[
    Path | None,
    typer.Option("--data-dir", "-d", help="Directory holding the menu-sync database"),
]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _open_db(data_dir: Path | None) -> sqlite3.Connection:
    """Open (creating if needed) the database and bring its schema up to date."""
    dst = data_dir or _DEFAULT_DATA_DIR
    dst.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(dst / DATABASE_FILENAME))
    migrate_schema(conn)
    return conn


def _handler(conn: sqlite3.Connection) -> PageEventHandler:
    return PageEventHandler(
        SqlitePageStore(conn), SqliteMenuStore(conn), SqliteStateStore(conn)
    )


@app.command()
def init(data_dir: DataDirOption = None) -> None:
    """Create the synced menu from all published pages, unless it exists."""
    conn = _open_db(data_dir)
    try:
        result = ensure_structure_exists(
            SqlitePageStore(conn), SqliteMenuStore(conn), SqliteStateStore(conn)
        )
        if result.created and result.sync is not None:
            typer.echo(
                f"Created menu '{MENU_NAME}' (id={result.menu_id}) "
                f"with {len(result.sync.created)} items"
            )
        else:
            typer.echo(f"Menu '{MENU_NAME}' already exists")
    finally:
        conn.close()


@app.command(name="import")
def import_cmd(
    pages_file: Path = typer.Argument(..., help="JSON file with a list of pages"),
    data_dir: DataDirOption = None,
) -> None:
    """Import pages and sync each of them into the menu."""
    if not pages_file.exists():
        logger.error("Pages file not found: {}", pages_file)
        raise typer.Exit(1)

    try:
        nodes = load_pages_file(pages_file)
    except (ValueError, TypeError) as e:
        logger.error("Cannot read pages from {}: {}", pages_file, e)
        raise typer.Exit(1) from e

    conn = _open_db(data_dir)
    try:
        stats = import_pages(SqlitePageStore(conn), nodes)
        handler = _handler(conn)
        synced = 0
        for page_id, event in stats.events:
            if not handler.handle(page_id, event).outcome.is_noop:
                synced += 1
        typer.echo(
            f"Imported {stats.pages_created} new and {stats.pages_updated} existing pages, "
            f"synced {synced} menu items"
        )
    finally:
        conn.close()


@app.command(name="save-page")
def save_page(
    page_id: int = typer.Argument(..., help="Page id"),
    title: Annotated[
        str | None, typer.Option("--title", "-t", help="Page title")
    ] = None,
    parent: Annotated[
        int | None,
        typer.Option("--parent", "-p", help="Parent page id (0 for none)"),
    ] = None,
    order: Annotated[
        int | None, typer.Option("--order", "-o", help="Sibling order key")
    ] = None,
    status: Annotated[
        str | None, typer.Option("--status", "-s", help="publish, draft or other")
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """Create or update one page and fire its lifecycle event.

    Options left out keep the stored page's values. A new page defaults to a
    published root page with order 0.
    """
    conn = _open_db(data_dir)
    try:
        page_store = SqlitePageStore(conn)
        stored = page_store.get_node(page_id)
        previous = stored or SourceNode(id=page_id, title="", parent_id=None)
        node = SourceNode(
            id=page_id,
            title=previous.title if title is None else title,
            parent_id=previous.parent_id if parent is None else parent or None,
            order_key=previous.order_key if order is None else order,
            status=previous.status if status is None else PageStatus.parse(status),
        )
        page_store.save_node(node)
        if stored is None:
            event = PageEvent.CREATED
        elif node.is_published and not stored.is_published:
            event = PageEvent.PUBLISHED
        else:
            event = PageEvent.UPDATED
        result = _handler(conn).handle(page_id, event)
        typer.echo(f"Page {page_id} {event.value}: {result.outcome.value}")
    finally:
        conn.close()


@app.command()
def status(data_dir: DataDirOption = None) -> None:
    """Show the synced menu id and how many pages are mapped."""
    conn = _open_db(data_dir)
    try:
        state = SqliteStateStore(conn)
        menu_id = load_menu_id(state)
        identity_map = load_identity_map(state)
        if menu_id is None or identity_map is None:
            typer.echo("Menu not initialized. Run 'init' first.")
            raise typer.Exit(1)
        items = SqliteMenuStore(conn).list_items(menu_id)
        typer.echo(f"Menu '{MENU_NAME}' id={menu_id}")
        typer.echo(f"  {len(identity_map)} pages mapped, {len(items)} menu items")
    finally:
        conn.close()
