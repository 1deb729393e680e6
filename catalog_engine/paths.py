"""
Filesystem path policy for booklist runtime data.

This module is the single choke point for deciding where booklist reads and
writes its catalog database and GUI settings.

- Runtime data lives under a booklist "data root".
- The catalog database is `<data_root>/catalog.sqlite`.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final

DATA_ROOT_ENV: Final[str] = "BOOKLIST_DATA_ROOT"
CATALOG_DB_NAME: Final[str] = "catalog.sqlite"


class DataRootError(RuntimeError):
    """Raised when a data root override is unusable."""


def default_data_root() -> Path:
    """
    Resolve the default booklist data root.

    Preference order:
    1) %BOOKLIST_DATA_ROOT% if set
    2) %LOCALAPPDATA%\\booklist
    3) %APPDATA%\\booklist (Roaming)
    4) ~/.booklist
    """
    override = os.environ.get(DATA_ROOT_ENV)
    if override:
        return Path(override)

    local = os.environ.get("LOCALAPPDATA")
    if local:
        return Path(local) / "booklist"

    roaming = os.environ.get("APPDATA")
    if roaming:
        return Path(roaming) / "booklist"

    return Path.home() / ".booklist"


def resolve_data_root(data_root: Path | None = None) -> Path:
    """
    Return the absolute data root, preferring an explicit override.

    Raises
    ------
    DataRootError
        If the resolved path exists and is not a directory.
    """
    root = (data_root or default_data_root()).expanduser().resolve()
    if root.exists() and not root.is_dir():
        raise DataRootError(f"Data root is not a directory: {root}")
    return root


def catalog_db_path(data_root: Path | None = None) -> Path:
    """Return the canonical path of the catalog SQLite database."""
    return resolve_data_root(data_root) / CATALOG_DB_NAME
