"""
settings.py

Persistent settings management for Screen Designer.

Handles cross-platform settings storage using TOML format with platformdirs
for proper user config directory detection.

Settings file location:
    - Windows: %APPDATA%/screendesigner/settings.toml
    - macOS: ~/Library/Application Support/screendesigner/settings.toml
    - Linux: ~/.config/screendesigner/settings.toml

Default values are documented in comments throughout this file.
If settings.toml is corrupted, these defaults will be used.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

# TOML reading - use tomllib for Python 3.11+, tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

from models import DEFAULT_GRID_SIZE, RENDER_GRID_SPACING, clamp_grid_size, clamp_zoom

APP_NAME = "screendesigner"

logger = logging.getLogger(__name__)

# Global settings manager instance (singleton)
_settings_manager: Optional["SettingsManager"] = None


def get_settings() -> "SettingsManager":
    """Get the global settings manager instance.

    Returns:
        The singleton SettingsManager instance.
    """
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
    return _settings_manager


# =============================================================================
# General Settings
# =============================================================================

@dataclass
class GeneralSettings:
    """Main window settings.

    Defaults:
        window_width: 1200
        window_height: 800
    """
    window_width: int = 1200   # Default: 1200 pixels
    window_height: int = 800   # Default: 800 pixels


# =============================================================================
# Editor Settings
# =============================================================================

@dataclass
class EditorFontSettings:
    """Generated-code viewer font settings.

    Defaults:
        family: "Consolas"
        size: 10
    """
    family: str = "Consolas"  # Default: "Consolas"
    size: int = 10            # Default: 10 points


@dataclass
class EditorSyntaxSettings:
    """Python syntax highlighting colors for the code viewer.

    Defaults:
        keyword_color: "#D35400"
        keyword_bold: True
        string_color: "#27AE60"
        number_color: "#8E44AD"
        comment_color: "#7F8C8D"
        class_color: "#2E86C1"
    """
    keyword_color: str = "#D35400"   # Default: orange
    keyword_bold: bool = True        # Default: True
    string_color: str = "#27AE60"    # Default: green
    number_color: str = "#8E44AD"    # Default: purple
    comment_color: str = "#7F8C8D"   # Default: gray
    class_color: str = "#2E86C1"     # Default: blue


@dataclass
class EditorSettings:
    """All code-viewer settings."""
    font: EditorFontSettings = field(default_factory=EditorFontSettings)
    syntax: EditorSyntaxSettings = field(default_factory=EditorSyntaxSettings)


# =============================================================================
# Canvas Settings
# =============================================================================

@dataclass
class CanvasGridSettings:
    """Grid settings.

    ``size`` is the snap grid used when moving and resizing.
    ``render_spacing`` is the spacing of the drawn background grid and is
    independent of ``size``.

    Defaults:
        size: 10
        snap_to_grid: True
        show_grid: True
        render_spacing: 10
        color: "#E6E6E6"
    """
    size: int = DEFAULT_GRID_SIZE             # Default: 10 canvas units
    snap_to_grid: bool = True                 # Default: True
    show_grid: bool = True                    # Default: True
    render_spacing: int = RENDER_GRID_SPACING # Default: 10 pixels
    color: str = "#E6E6E6"                    # Default: light gray


@dataclass
class CanvasViewSettings:
    """Zoom and ruler settings.

    Defaults:
        zoom_factor: 1.0
        show_rulers: False
    """
    zoom_factor: float = 1.0    # Default: 1.0 (100%), clamped to [0.25, 4.0]
    show_rulers: bool = False   # Default: False


@dataclass
class CanvasHandleSettings:
    """Resize handle appearance.

    Defaults:
        border_color: "#0000FF"
        fill_color: "#FFFFFF"
    """
    border_color: str = "#0000FF"     # Default: blue
    fill_color: str = "#FFFFFF"       # Default: white


@dataclass
class CanvasSelectionSettings:
    """Selection appearance settings.

    Defaults:
        outline_color: "#0000FF"
    """
    outline_color: str = "#0000FF"  # Default: blue


@dataclass
class CanvasSettings:
    """All canvas-related settings."""
    grid: CanvasGridSettings = field(default_factory=CanvasGridSettings)
    view: CanvasViewSettings = field(default_factory=CanvasViewSettings)
    handles: CanvasHandleSettings = field(default_factory=CanvasHandleSettings)
    selection: CanvasSelectionSettings = field(default_factory=CanvasSelectionSettings)


# =============================================================================
# Project Settings
# =============================================================================

@dataclass
class ProjectDefaults:
    """Defaults used when creating a new project.

    Defaults:
        project_name: "Untitled Project"
        screen_name: "Main Screen"
        target_resolution: "1920x1080"
    """
    project_name: str = "Untitled Project"   # Default: "Untitled Project"
    screen_name: str = "Main Screen"         # Default: "Main Screen"
    target_resolution: str = "1920x1080"     # Default: "1920x1080"


# =============================================================================
# Debug Settings
# =============================================================================

@dataclass
class DebugSettings:
    """Trace logging settings.

    Defaults:
        trace: False
        trace_paint: False
        log_file: ""
    """
    trace: bool = False        # Default: False
    trace_paint: bool = False  # Default: False (very verbose)
    log_file: str = ""         # Default: "" (stderr only)


# =============================================================================
# Main App Settings
# =============================================================================

@dataclass
class AppSettings:
    """Application settings with default values.

    Attributes:
        general: Main window settings.
        editor: Code viewer settings.
        canvas: Canvas grid, view, handle and selection settings.
        project: New-project defaults.
        debug: Trace logging settings.
    """
    general: GeneralSettings = field(default_factory=GeneralSettings)
    editor: EditorSettings = field(default_factory=EditorSettings)
    canvas: CanvasSettings = field(default_factory=CanvasSettings)
    project: ProjectDefaults = field(default_factory=ProjectDefaults)
    debug: DebugSettings = field(default_factory=DebugSettings)


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return int(value)


def _as_float(value: Any, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value)


def _as_bool(value: Any, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _as_str(value: Any, default: str) -> str:
    return value if isinstance(value, str) else default


# =============================================================================
# Settings Manager
# =============================================================================

class SettingsManager:
    """Manages loading, saving, and accessing application settings.

    Settings are stored in a TOML file at the platform-appropriate location.
    If the settings file doesn't exist, defaults are used and the file is
    created on first save.

    Args:
        app_name: Application name used for the config directory.
        settings_dir: Explicit directory, overriding the platform location.
    """

    def __init__(self, app_name: str = APP_NAME, settings_dir: Optional[Path] = None):
        if settings_dir is None:
            settings_dir = Path(platformdirs.user_config_dir(app_name))
        self.settings_dir = Path(settings_dir)
        self.settings_file = self.settings_dir / "settings.toml"
        self.settings = self.load()
        self._needs_save = not self.settings_file.exists()  # Save if file didn't exist

    def ensure_file_complete(self) -> None:
        """Ensure settings file exists with all sections. Call once at startup."""
        if self._needs_save or not self.settings_file.exists():
            self.save()
            self._needs_save = False

    def load(self) -> AppSettings:
        """Load settings from the TOML file.

        Returns:
            AppSettings instance with values from file or defaults if file
            doesn't exist or is invalid.
        """
        if not self.settings_file.exists():
            return AppSettings()

        try:
            with open(self.settings_file, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", self.settings_file, e)
            return AppSettings()

        return self._parse_toml(data)

    def _parse_toml(self, data: Dict[str, Any]) -> AppSettings:
        """Parse TOML data into AppSettings.

        Values of the wrong type fall back to their defaults; zoom and grid
        size are clamped to their valid ranges.

        Args:
            data: Parsed TOML dictionary.

        Returns:
            AppSettings instance populated from TOML data.
        """
        settings = AppSettings()

        def section(parent: Dict[str, Any], name: str) -> Dict[str, Any]:
            value = parent.get(name, {})
            return value if isinstance(value, dict) else {}

        # General section
        general = section(data, "general")
        g = settings.general
        g.window_width = _as_int(general.get("window_width"), g.window_width)
        g.window_height = _as_int(general.get("window_height"), g.window_height)

        # Editor section
        editor = section(data, "editor")
        font = section(editor, "font")
        settings.editor.font.family = _as_str(font.get("family"), settings.editor.font.family)
        settings.editor.font.size = _as_int(font.get("size"), settings.editor.font.size)
        syn = section(editor, "syntax")
        sx = settings.editor.syntax
        sx.keyword_color = _as_str(syn.get("keyword_color"), sx.keyword_color)
        sx.keyword_bold = _as_bool(syn.get("keyword_bold"), sx.keyword_bold)
        sx.string_color = _as_str(syn.get("string_color"), sx.string_color)
        sx.number_color = _as_str(syn.get("number_color"), sx.number_color)
        sx.comment_color = _as_str(syn.get("comment_color"), sx.comment_color)
        sx.class_color = _as_str(syn.get("class_color"), sx.class_color)

        # Canvas section
        canvas = section(data, "canvas")
        grid = section(canvas, "grid")
        gr = settings.canvas.grid
        gr.size = clamp_grid_size(_as_int(grid.get("size"), gr.size))
        gr.snap_to_grid = _as_bool(grid.get("snap_to_grid"), gr.snap_to_grid)
        gr.show_grid = _as_bool(grid.get("show_grid"), gr.show_grid)
        gr.render_spacing = max(2, _as_int(grid.get("render_spacing"), gr.render_spacing))
        gr.color = _as_str(grid.get("color"), gr.color)
        view = section(canvas, "view")
        vw = settings.canvas.view
        vw.zoom_factor = clamp_zoom(_as_float(view.get("zoom_factor"), vw.zoom_factor))
        vw.show_rulers = _as_bool(view.get("show_rulers"), vw.show_rulers)
        h = section(canvas, "handles")
        settings.canvas.handles.border_color = _as_str(h.get("border_color"), settings.canvas.handles.border_color)
        settings.canvas.handles.fill_color = _as_str(h.get("fill_color"), settings.canvas.handles.fill_color)
        sel = section(canvas, "selection")
        settings.canvas.selection.outline_color = _as_str(sel.get("outline_color"), settings.canvas.selection.outline_color)

        # Project section
        project = section(data, "project")
        p = settings.project
        p.project_name = _as_str(project.get("project_name"), p.project_name)
        p.screen_name = _as_str(project.get("screen_name"), p.screen_name)
        p.target_resolution = _as_str(project.get("target_resolution"), p.target_resolution)

        # Debug section
        debug = section(data, "debug")
        d = settings.debug
        d.trace = _as_bool(debug.get("trace"), d.trace)
        d.trace_paint = _as_bool(debug.get("trace_paint"), d.trace_paint)
        d.log_file = _as_str(debug.get("log_file"), d.log_file)

        return settings

    def save(self) -> None:
        """Save current settings to the TOML file.

        Creates the settings directory if it doesn't exist.
        """
        # Ensure directory exists
        self.settings_dir.mkdir(parents=True, exist_ok=True)

        # Convert settings to TOML structure
        data = self._to_toml_dict()

        with open(self.settings_file, "wb") as f:
            tomli_w.dump(data, f)
        logger.debug("Saved settings to %s", self.settings_file)

    def _to_toml_dict(self) -> Dict[str, Any]:
        """Convert settings to a TOML-compatible dictionary structure.

        Returns:
            Dictionary organized by TOML sections.
        """
        s = self.settings
        return {
            "general": {
                "window_width": s.general.window_width,
                "window_height": s.general.window_height,
            },
            "editor": {
                "font": {
                    "family": s.editor.font.family,
                    "size": s.editor.font.size,
                },
                "syntax": {
                    "keyword_color": s.editor.syntax.keyword_color,
                    "keyword_bold": s.editor.syntax.keyword_bold,
                    "string_color": s.editor.syntax.string_color,
                    "number_color": s.editor.syntax.number_color,
                    "comment_color": s.editor.syntax.comment_color,
                    "class_color": s.editor.syntax.class_color,
                },
            },
            "canvas": {
                "grid": {
                    "size": s.canvas.grid.size,
                    "snap_to_grid": s.canvas.grid.snap_to_grid,
                    "show_grid": s.canvas.grid.show_grid,
                    "render_spacing": s.canvas.grid.render_spacing,
                    "color": s.canvas.grid.color,
                },
                "view": {
                    "zoom_factor": s.canvas.view.zoom_factor,
                    "show_rulers": s.canvas.view.show_rulers,
                },
                "handles": {
                    "border_color": s.canvas.handles.border_color,
                    "fill_color": s.canvas.handles.fill_color,
                },
                "selection": {
                    "outline_color": s.canvas.selection.outline_color,
                },
            },
            "project": {
                "project_name": s.project.project_name,
                "screen_name": s.project.screen_name,
                "target_resolution": s.project.target_resolution,
            },
            "debug": {
                "trace": s.debug.trace,
                "trace_paint": s.debug.trace_paint,
                "log_file": s.debug.log_file,
            },
        }

    def to_toml(self) -> str:
        """Convert current settings to a TOML-formatted string.

        Returns:
            TOML representation of the current settings.
        """
        data = self._to_toml_dict()
        return tomli_w.dumps(data)

    def get_settings_path(self) -> Path:
        """Get the path to the settings file.

        Returns:
            Path object pointing to the settings file location.
        """
        return self.settings_file
