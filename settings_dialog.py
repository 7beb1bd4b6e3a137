"""
settings_dialog.py

Settings dialog for Screen Designer.
Organizes settings into tabs: Canvas, Editor, Project and Debug.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from PyQt6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QHBoxLayout,
    QTabWidget,
    QWidget,
    QGroupBox,
    QFormLayout,
    QSpinBox,
    QDoubleSpinBox,
    QLineEdit,
    QCheckBox,
    QPushButton,
    QDialogButtonBox,
    QColorDialog,
    QFileDialog,
    QFontComboBox,
)
from PyQt6.QtGui import QColor, QFont

from models import MAX_ZOOM, MIN_ZOOM, ZOOM_STEP
from canvas.painter import invalidate_render_settings
import debug_trace

if TYPE_CHECKING:
    from settings import SettingsManager


class ColorButton(QPushButton):
    """A button that displays and allows selection of a color."""

    def __init__(self, color: str = "#000000", parent=None):
        super().__init__(parent)
        self._color = color
        self._update_style()
        self.clicked.connect(self._pick_color)
        self.setFixedWidth(80)

    def _update_style(self):
        """Update button appearance to show current color."""
        # Determine text color based on luminance
        qc = QColor(self._color)
        luminance = 0.299 * qc.red() + 0.587 * qc.green() + 0.114 * qc.blue()
        text_color = "#000000" if luminance > 128 else "#FFFFFF"
        self.setStyleSheet(
            f"background-color: {self._color}; color: {text_color}; "
            f"border: 1px solid #888; padding: 2px 8px;"
        )
        self.setText(self._color)

    def _pick_color(self):
        color = QColorDialog.getColor(QColor(self._color), self, "Select Color")
        if color.isValid():
            self._color = color.name().upper()
            self._update_style()

    def color(self) -> str:
        """Get current color as hex string."""
        return self._color

    def setColor(self, color: str):
        """Set current color from hex string."""
        self._color = color
        self._update_style()


class SettingsDialog(QDialog):
    """
    Settings dialog with tabbed organization.

    Tabs:
    - Canvas: Grid, view, handle and selection colors
    - Editor: Code viewer font and syntax colors
    - Project: Defaults for new projects
    - Debug: Trace logging

    OK and Apply write the settings file; Cancel restores the values the
    dialog was opened with.
    """

    def __init__(self, settings_manager: "SettingsManager", parent=None):
        super().__init__(parent)
        self.settings_manager = settings_manager
        self.setWindowTitle("Screen Designer Settings")
        self.setMinimumSize(520, 440)

        # Store original settings for cancel
        self._original_settings = copy.deepcopy(settings_manager.settings)

        self._setup_ui()
        self._load_settings()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)

        self.tabs = QTabWidget()
        layout.addWidget(self.tabs)

        self.tabs.addTab(self._create_canvas_tab(), "Canvas")
        self.tabs.addTab(self._create_editor_tab(), "Editor")
        self.tabs.addTab(self._create_project_tab(), "Project")
        self.tabs.addTab(self._create_debug_tab(), "Debug")

        button_box = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok |
            QDialogButtonBox.StandardButton.Cancel |
            QDialogButtonBox.StandardButton.Apply |
            QDialogButtonBox.StandardButton.RestoreDefaults
        )
        button_box.accepted.connect(self._on_ok)
        button_box.rejected.connect(self._on_cancel)
        button_box.button(QDialogButtonBox.StandardButton.Apply).clicked.connect(self._on_apply)
        button_box.button(QDialogButtonBox.StandardButton.RestoreDefaults).clicked.connect(self._on_restore_defaults)
        layout.addWidget(button_box)

    # =========================================================================
    # Canvas Tab
    # =========================================================================

    def _create_canvas_tab(self) -> QWidget:
        widget = QWidget()
        layout = QVBoxLayout(widget)

        grid_group = QGroupBox("Grid")
        grid_layout = QFormLayout(grid_group)

        self.grid_size = QSpinBox()
        self.grid_size.setRange(1, 200)
        grid_layout.addRow("Snap Grid Size:", self.grid_size)

        self.grid_snap = QCheckBox("Snap to grid when moving and resizing")
        grid_layout.addRow("", self.grid_snap)

        self.grid_show = QCheckBox("Draw background grid")
        grid_layout.addRow("", self.grid_show)

        self.grid_render_spacing = QSpinBox()
        self.grid_render_spacing.setRange(2, 200)
        grid_layout.addRow("Drawn Grid Spacing:", self.grid_render_spacing)

        self.grid_color = ColorButton()
        grid_layout.addRow("Grid Color:", self.grid_color)

        layout.addWidget(grid_group)

        view_group = QGroupBox("View")
        view_layout = QFormLayout(view_group)

        self.view_zoom = QDoubleSpinBox()
        self.view_zoom.setRange(MIN_ZOOM, MAX_ZOOM)
        self.view_zoom.setSingleStep(ZOOM_STEP)
        self.view_zoom.setDecimals(2)
        view_layout.addRow("Zoom Factor:", self.view_zoom)

        self.view_rulers = QCheckBox("Show rulers")
        view_layout.addRow("", self.view_rulers)

        layout.addWidget(view_group)

        colors_group = QGroupBox("Selection")
        colors_layout = QFormLayout(colors_group)

        self.selection_color = ColorButton()
        colors_layout.addRow("Selection Outline:", self.selection_color)

        self.handle_border = ColorButton()
        colors_layout.addRow("Handle Border:", self.handle_border)

        self.handle_fill = ColorButton()
        colors_layout.addRow("Handle Fill:", self.handle_fill)

        layout.addWidget(colors_group)
        layout.addStretch()
        return widget

    # =========================================================================
    # Editor Tab
    # =========================================================================

    def _create_editor_tab(self) -> QWidget:
        widget = QWidget()
        layout = QVBoxLayout(widget)

        font_group = QGroupBox("Font")
        font_layout = QFormLayout(font_group)

        self.editor_font_family = QFontComboBox()
        self.editor_font_family.setFontFilters(QFontComboBox.FontFilter.MonospacedFonts)
        font_layout.addRow("Family:", self.editor_font_family)

        self.editor_font_size = QSpinBox()
        self.editor_font_size.setRange(6, 48)
        font_layout.addRow("Size:", self.editor_font_size)

        layout.addWidget(font_group)

        syntax_group = QGroupBox("Syntax Highlighting")
        syntax_layout = QFormLayout(syntax_group)

        self.syntax_keyword_color = ColorButton()
        self.syntax_keyword_bold = QCheckBox("Bold")
        kw_row = QHBoxLayout()
        kw_row.addWidget(self.syntax_keyword_color)
        kw_row.addWidget(self.syntax_keyword_bold)
        kw_row.addStretch()
        syntax_layout.addRow("Keywords:", kw_row)

        self.syntax_string_color = ColorButton()
        syntax_layout.addRow("Strings:", self.syntax_string_color)

        self.syntax_number_color = ColorButton()
        syntax_layout.addRow("Numbers:", self.syntax_number_color)

        self.syntax_comment_color = ColorButton()
        syntax_layout.addRow("Comments:", self.syntax_comment_color)

        self.syntax_class_color = ColorButton()
        syntax_layout.addRow("Classes:", self.syntax_class_color)

        layout.addWidget(syntax_group)
        layout.addStretch()
        return widget

    # =========================================================================
    # Project Tab
    # =========================================================================

    def _create_project_tab(self) -> QWidget:
        widget = QWidget()
        layout = QVBoxLayout(widget)

        group = QGroupBox("New Project Defaults")
        form = QFormLayout(group)

        self.project_name = QLineEdit()
        form.addRow("Project Name:", self.project_name)

        self.project_screen_name = QLineEdit()
        form.addRow("First Screen Name:", self.project_screen_name)

        self.project_resolution = QLineEdit()
        self.project_resolution.setPlaceholderText("e.g. 1920x1080")
        form.addRow("Target Resolution:", self.project_resolution)

        layout.addWidget(group)
        layout.addStretch()
        return widget

    # =========================================================================
    # Debug Tab
    # =========================================================================

    def _create_debug_tab(self) -> QWidget:
        widget = QWidget()
        layout = QVBoxLayout(widget)

        group = QGroupBox("Trace Logging")
        form = QFormLayout(group)

        self.debug_trace = QCheckBox("Enable trace output")
        form.addRow("", self.debug_trace)

        self.debug_trace_paint = QCheckBox("Include paint events (verbose)")
        form.addRow("", self.debug_trace_paint)

        self.debug_log_file = QLineEdit()
        self.debug_log_file.setPlaceholderText("stderr only")
        browse_btn = QPushButton("Browse...")
        browse_btn.clicked.connect(self._browse_log_file)
        row = QHBoxLayout()
        row.addWidget(self.debug_log_file)
        row.addWidget(browse_btn)
        form.addRow("Log File:", row)

        layout.addWidget(group)
        layout.addStretch()
        return widget

    def _browse_log_file(self):
        path, _ = QFileDialog.getSaveFileName(
            self, "Trace Log File", self.debug_log_file.text(), "Log Files (*.log);;All Files (*)"
        )
        if path:
            self.debug_log_file.setText(path)

    # =========================================================================
    # Load / Save
    # =========================================================================

    def _load_settings(self):
        """Populate widgets from the current settings."""
        s = self.settings_manager.settings

        # Canvas
        self.grid_size.setValue(s.canvas.grid.size)
        self.grid_snap.setChecked(s.canvas.grid.snap_to_grid)
        self.grid_show.setChecked(s.canvas.grid.show_grid)
        self.grid_render_spacing.setValue(s.canvas.grid.render_spacing)
        self.grid_color.setColor(s.canvas.grid.color)
        self.view_zoom.setValue(s.canvas.view.zoom_factor)
        self.view_rulers.setChecked(s.canvas.view.show_rulers)
        self.selection_color.setColor(s.canvas.selection.outline_color)
        self.handle_border.setColor(s.canvas.handles.border_color)
        self.handle_fill.setColor(s.canvas.handles.fill_color)

        # Editor
        self.editor_font_family.setCurrentFont(QFont(s.editor.font.family))
        self.editor_font_size.setValue(s.editor.font.size)
        self.syntax_keyword_color.setColor(s.editor.syntax.keyword_color)
        self.syntax_keyword_bold.setChecked(s.editor.syntax.keyword_bold)
        self.syntax_string_color.setColor(s.editor.syntax.string_color)
        self.syntax_number_color.setColor(s.editor.syntax.number_color)
        self.syntax_comment_color.setColor(s.editor.syntax.comment_color)
        self.syntax_class_color.setColor(s.editor.syntax.class_color)

        # Project
        self.project_name.setText(s.project.project_name)
        self.project_screen_name.setText(s.project.screen_name)
        self.project_resolution.setText(s.project.target_resolution)

        # Debug
        self.debug_trace.setChecked(s.debug.trace)
        self.debug_trace_paint.setChecked(s.debug.trace_paint)
        self.debug_log_file.setText(s.debug.log_file)

    def _apply_to_settings(self):
        """Copy widget values into the settings object (without saving)."""
        s = self.settings_manager.settings

        s.canvas.grid.size = self.grid_size.value()
        s.canvas.grid.snap_to_grid = self.grid_snap.isChecked()
        s.canvas.grid.show_grid = self.grid_show.isChecked()
        s.canvas.grid.render_spacing = self.grid_render_spacing.value()
        s.canvas.grid.color = self.grid_color.color()
        s.canvas.view.zoom_factor = self.view_zoom.value()
        s.canvas.view.show_rulers = self.view_rulers.isChecked()
        s.canvas.selection.outline_color = self.selection_color.color()
        s.canvas.handles.border_color = self.handle_border.color()
        s.canvas.handles.fill_color = self.handle_fill.color()

        s.editor.font.family = self.editor_font_family.currentFont().family()
        s.editor.font.size = self.editor_font_size.value()
        s.editor.syntax.keyword_color = self.syntax_keyword_color.color()
        s.editor.syntax.keyword_bold = self.syntax_keyword_bold.isChecked()
        s.editor.syntax.string_color = self.syntax_string_color.color()
        s.editor.syntax.number_color = self.syntax_number_color.color()
        s.editor.syntax.comment_color = self.syntax_comment_color.color()
        s.editor.syntax.class_color = self.syntax_class_color.color()

        s.project.project_name = self.project_name.text().strip() or s.project.project_name
        s.project.screen_name = self.project_screen_name.text().strip() or s.project.screen_name
        s.project.target_resolution = self.project_resolution.text().strip()

        s.debug.trace = self.debug_trace.isChecked()
        s.debug.trace_paint = self.debug_trace_paint.isChecked()
        s.debug.log_file = self.debug_log_file.text().strip()

    def _save_settings(self):
        """Write widget values to disk and refresh everything that caches them."""
        self._apply_to_settings()
        self.settings_manager.save()
        invalidate_render_settings()
        debug_trace.configure_from_settings(self.settings_manager.settings)

    def _on_ok(self):
        """Handle OK button - save and close."""
        self._save_settings()
        self.accept()

    def _on_cancel(self):
        """Handle Cancel button - restore original settings and close."""
        self.settings_manager.settings = copy.deepcopy(self._original_settings)
        invalidate_render_settings()
        self.reject()

    def _on_apply(self):
        """Handle Apply button - save without closing."""
        self._save_settings()
        # Update snapshot so Cancel won't undo applied changes
        self._original_settings = copy.deepcopy(self.settings_manager.settings)

    def _on_restore_defaults(self):
        """Reset the widgets to default values; nothing is saved until OK or Apply."""
        from settings import AppSettings

        current = self.settings_manager.settings
        self.settings_manager.settings = AppSettings()
        try:
            self._load_settings()
        finally:
            self.settings_manager.settings = current
