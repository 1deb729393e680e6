from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from catalog_engine.controller.crud import DeletePolicy
from catalog_engine.paths import default_data_root

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


@dataclass(frozen=True, slots=True)
class GuiSettings:
    """
    Persisted GUI settings.

    Notes
    -----
    `delete_mode` picks the controller variant: "soft" flags Authors as
    deleted, "hard" removes them.
    """

    data_root: Path | None
    delete_mode: str  # "soft" | "hard"
    log_level: str  # "DEBUG" | "INFO" | "WARNING" | "ERROR"

    @staticmethod
    def defaults() -> "GuiSettings":
        return GuiSettings(
            data_root=None,
            delete_mode=DeletePolicy.SOFT.value,
            log_level="INFO",
        )


def _settings_path(data_root: Path | None) -> Path:
    root = default_data_root() if data_root is None else data_root
    return root / "gui_settings.json"


def load_gui_settings(*, data_root: Path | None) -> GuiSettings:
    """
    Load GUI settings from disk.

    Parameters
    ----------
    data_root:
        Booklist data root. If None, the default is used.

    Returns
    -------
    GuiSettings
        Loaded settings, or defaults if missing/unreadable.
    """
    path = _settings_path(data_root)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return GuiSettings.defaults()
    except OSError as exc:
        logger.warning("Could not read %s: %s", path, exc)
        return GuiSettings.defaults()

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.warning("Ignoring malformed %s: %s", path, exc)
        return GuiSettings.defaults()
    if not isinstance(payload, dict):
        return GuiSettings.defaults()

    data_root_val = payload.get("data_root")
    data_root_path = (
        Path(data_root_val) if isinstance(data_root_val, str) and data_root_val.strip() else None
    )

    delete_mode = payload.get("delete_mode", DeletePolicy.SOFT.value)
    if delete_mode not in {p.value for p in DeletePolicy}:
        delete_mode = DeletePolicy.SOFT.value

    log_level = str(payload.get("log_level", "INFO")).upper()
    if log_level not in _LOG_LEVELS:
        log_level = "INFO"

    return GuiSettings(
        data_root=data_root_path,
        delete_mode=str(delete_mode),
        log_level=log_level,
    )


def save_gui_settings(*, data_root: Path | None, settings: GuiSettings) -> None:
    """
    Save GUI settings to disk.

    Parameters
    ----------
    data_root:
        Booklist data root. If None, the default is used.
    settings:
        Settings to persist.
    """
    path = _settings_path(data_root)
    path.parent.mkdir(parents=True, exist_ok=True)

    payload = {
        "data_root": str(settings.data_root) if settings.data_root is not None else None,
        "delete_mode": settings.delete_mode,
        "log_level": settings.log_level,
    }
    path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
