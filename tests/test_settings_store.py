from __future__ import annotations

from pathlib import Path

from gui.settings_store import GuiSettings, load_gui_settings, save_gui_settings


def test_missing_settings_file_yields_defaults(tmp_path: Path) -> None:
    assert load_gui_settings(data_root=tmp_path) == GuiSettings.defaults()


def test_settings_roundtrip(tmp_path: Path) -> None:
    settings = GuiSettings(data_root=tmp_path / "elsewhere", delete_mode="hard", log_level="DEBUG")
    save_gui_settings(data_root=tmp_path, settings=settings)

    assert load_gui_settings(data_root=tmp_path) == settings


def test_malformed_settings_fall_back_to_defaults(tmp_path: Path) -> None:
    (tmp_path / "gui_settings.json").write_text("{not json", encoding="utf-8")

    assert load_gui_settings(data_root=tmp_path) == GuiSettings.defaults()


def test_unknown_values_are_replaced_individually(tmp_path: Path) -> None:
    (tmp_path / "gui_settings.json").write_text(
        '{"delete_mode": "archive", "log_level": "debug"}', encoding="utf-8"
    )

    loaded = load_gui_settings(data_root=tmp_path)
    assert loaded.delete_mode == "soft"
    assert loaded.log_level == "DEBUG"
    assert loaded.data_root is None
