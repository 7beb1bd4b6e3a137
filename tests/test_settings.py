"""Tests for settings.py: TOML persistence, defaults and value validation."""
from __future__ import annotations

import pytest

from settings import AppSettings, SettingsManager


def _write(tmp_path, text: str) -> SettingsManager:
    (tmp_path / "settings.toml").write_text(text, encoding="utf-8")
    return SettingsManager(settings_dir=tmp_path)


# ─────────────────────────────────────────────────────────
# Loading
# ─────────────────────────────────────────────────────────


class TestLoad:
    def test_missing_file_gives_defaults(self, tmp_path):
        mgr = SettingsManager(settings_dir=tmp_path)
        assert mgr.settings == AppSettings()
        assert not mgr.get_settings_path().exists()

    def test_corrupted_file_gives_defaults(self, tmp_path):
        mgr = _write(tmp_path, "this is [not toml\n")
        assert mgr.settings == AppSettings()

    def test_partial_file_keeps_other_defaults(self, tmp_path):
        mgr = _write(tmp_path, "[canvas.grid]\nsize = 25\n")
        assert mgr.settings.canvas.grid.size == 25
        assert mgr.settings.canvas.grid.snap_to_grid is True
        assert mgr.settings.general.window_width == 1200

    @pytest.mark.parametrize("raw,expected", [("0.1", 0.25), ("10", 4.0), ("1.5", 1.5)])
    def test_zoom_clamped(self, tmp_path, raw, expected):
        mgr = _write(tmp_path, f"[canvas.view]\nzoom_factor = {raw}\n")
        assert mgr.settings.canvas.view.zoom_factor == pytest.approx(expected)

    def test_grid_size_clamped(self, tmp_path):
        mgr = _write(tmp_path, "[canvas.grid]\nsize = 0\n")
        assert mgr.settings.canvas.grid.size == 1

    def test_render_spacing_minimum(self, tmp_path):
        mgr = _write(tmp_path, "[canvas.grid]\nrender_spacing = 0\n")
        assert mgr.settings.canvas.grid.render_spacing == 2

    def test_wrong_types_fall_back(self, tmp_path):
        mgr = _write(tmp_path, (
            "[canvas.grid]\n"
            "size = \"big\"\n"
            "snap_to_grid = 1\n"
            "[editor.font]\n"
            "family = 12\n"
            "size = true\n"
        ))
        assert mgr.settings.canvas.grid.size == 10
        assert mgr.settings.canvas.grid.snap_to_grid is True
        assert mgr.settings.editor.font.family == "Consolas"
        assert mgr.settings.editor.font.size == 10

    def test_section_of_wrong_type_ignored(self, tmp_path):
        mgr = _write(tmp_path, "general = 5\n")
        assert mgr.settings.general.window_width == 1200


# ─────────────────────────────────────────────────────────
# Saving
# ─────────────────────────────────────────────────────────


class TestSave:
    def test_round_trip(self, tmp_path):
        mgr = SettingsManager(settings_dir=tmp_path)
        mgr.settings.canvas.grid.size = 20
        mgr.settings.canvas.view.zoom_factor = 2.0
        mgr.settings.canvas.view.show_rulers = True
        mgr.settings.editor.syntax.keyword_bold = False
        mgr.settings.project.project_name = "Shop"
        mgr.settings.debug.log_file = "/tmp/trace.log"
        mgr.save()

        again = SettingsManager(settings_dir=tmp_path)
        assert again.settings == mgr.settings

    def test_save_creates_directory(self, tmp_path):
        target = tmp_path / "nested" / "dir"
        mgr = SettingsManager(settings_dir=target)
        mgr.save()
        assert (target / "settings.toml").exists()

    def test_ensure_file_complete_creates_file(self, tmp_path):
        mgr = SettingsManager(settings_dir=tmp_path)
        mgr.ensure_file_complete()
        assert mgr.get_settings_path().exists()

    def test_to_toml_has_all_sections(self, tmp_path):
        text = SettingsManager(settings_dir=tmp_path).to_toml()
        for header in ("[general]", "[editor.font]", "[editor.syntax]", "[canvas.grid]",
                       "[canvas.view]", "[canvas.handles]", "[canvas.selection]",
                       "[project]", "[debug]"):
            assert header in text
