"""Configuration constants for menu-sync."""

from pathlib import Path

# Name of the menu kept in step with the page tree.
MENU_NAME: str = "Synced Menu"

# Durable state keys.
MENU_ID_KEY: str = "menu_sync_menu_id"
IDENTITY_MAP_KEY: str = "menu_sync_identity_map"

# Directory with the database. First directory which is found is used.
DATA_DIRECTORIES: list[Path] = [
    Path("~/.local/share/menu-sync").expanduser(),
    Path("~/.menu-sync").expanduser(),
    Path("~/.config/menu-sync").expanduser(),
]

DATABASE_FILENAME: str = "menu-sync.db"


def resolve_data_directory() -> Path:
    """Return the first existing data directory, or the first candidate if none exist."""
    for candidate in DATA_DIRECTORIES:
        if candidate.is_dir():
            return candidate
    return DATA_DIRECTORIES[0]
