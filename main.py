"""
main.py

Screen Designer - Main Application

PyQt6 visual form designer with:
- Drag-and-drop component palette
- Zoomable, pannable design canvas with grid snapping
- Multiple screens per project
- Context-sensitive property editing
- PyQt6 code generation and live preview

Usage:
    python main.py

Dependencies:
    pip install PyQt6 platformdirs tomli-w
"""

from __future__ import annotations

import sys
import traceback

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction, QActionGroup, QKeySequence
from PyQt6.QtWidgets import (
    QApplication,
    QDialog,
    QDockWidget,
    QInputDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QScrollArea,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from models import InteractionMode
from canvas import DesignCanvas
from canvas.geometry import canvas_to_screen
from canvas.painter import zoom_label
from codegen import build_preview, class_name_for, generate_code
from editor import CodeViewDialog
from palette import ComponentPalette
from project import AddScreenDialog, DesignProject, DesignScreen, ProjectContext, ProjectError, ScreenTabs
from properties import PropertyPanel
from settings import SettingsManager, get_settings
from settings_dialog import SettingsDialog
from help_dialog import HelpDialog, show_about_dialog
from debug_trace import configure_from_settings, trace, trace_exception, close_log

# Where a palette click (rather than a drag) places the new component
CLICK_DROP_POSITION = (20, 20)


class MainWindow(QMainWindow):
    """Main application window for Screen Designer.

    Args:
        settings_manager: The SettingsManager instance for application settings.
    """

    def __init__(self, settings_manager: SettingsManager):
        super().__init__()
        self.settings_manager = settings_manager
        s = settings_manager.settings

        self.context = ProjectContext(s.project.project_name, s.project.screen_name, {
            "targetResolution": s.project.target_resolution,
            "gridSize": s.canvas.grid.size,
            "snapToGrid": s.canvas.grid.snap_to_grid,
        })
        self._preview = None  # keep the preview window alive

        # Canvas inside a scroll area; its minimum size follows the zoom
        self.canvas = DesignCanvas()
        self.scroll = QScrollArea()
        self.scroll.setWidget(self.canvas)
        self.scroll.setWidgetResizable(True)
        self.scroll.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)

        self.tabs = ScreenTabs()

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        layout.addWidget(self.tabs)
        layout.addWidget(self.scroll, 1)
        self.setCentralWidget(central)

        # Palette dock (left)
        self.palette = ComponentPalette()
        palette_dock = QDockWidget("Components", self)
        palette_dock.setObjectName("PaletteDock")
        palette_dock.setWidget(self.palette)
        self.addDockWidget(Qt.DockWidgetArea.LeftDockWidgetArea, palette_dock)

        # Property dock (right)
        self.props = PropertyPanel()
        props_dock = QDockWidget("Properties", self)
        props_dock.setObjectName("PropertiesDock")
        props_dock.setWidget(self.props)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, props_dock)

        self._build_menus()
        self._build_toolbar()
        self._build_status_bar()

        # Connect signals
        self.canvas.selectionChanged.connect(self.props.set_component)
        self.canvas.propertiesRefreshRequested.connect(self.props.refresh)
        self.canvas.modeChanged.connect(self._on_mode_changed)
        self.props.componentChanged.connect(lambda _c: self.canvas.controller.refresh())
        self.palette.kindActivated.connect(self._on_palette_clicked)
        self.tabs.screenActivated.connect(self._on_screen_activated)
        self.context.add_listener(self._on_project_changed)

        # The zoom label is polled rather than driven by every zoom change
        self._zoom_timer = QTimer(self)
        self._zoom_timer.setInterval(100)
        self._zoom_timer.timeout.connect(self._update_zoom_label)
        self._zoom_timer.start()

        self._apply_canvas_settings()
        self._on_project_changed(self.context.project)
        self.statusBar().showMessage("Drag a component from the palette onto the canvas.", 5000)

    # ----------------------------
    # UI construction
    # ----------------------------

    def _build_menus(self):
        """Build the application menu bar."""
        menubar = self.menuBar()
        c = self.canvas.controller

        # File menu
        file_menu = menubar.addMenu("&File")

        new_act = QAction("New Project", self)
        new_act.setShortcut(QKeySequence.StandardKey.New)
        new_act.triggered.connect(self.new_project)
        file_menu.addAction(new_act)

        file_menu.addSeparator()

        exit_act = QAction("E&xit", self)
        exit_act.setShortcut(QKeySequence.StandardKey.Quit)
        exit_act.triggered.connect(self.close)
        file_menu.addAction(exit_act)

        # Edit menu
        edit_menu = menubar.addMenu("&Edit")

        dup_act = QAction("Duplicate", self)
        dup_act.setShortcut(QKeySequence("Ctrl+D"))
        dup_act.triggered.connect(self.duplicate_selected)
        edit_menu.addAction(dup_act)

        delete_act = QAction("Delete", self)
        delete_act.setShortcut(QKeySequence(Qt.Key.Key_Delete))
        delete_act.triggered.connect(self.delete_selected)
        edit_menu.addAction(delete_act)

        edit_menu.addSeparator()

        settings_act = QAction("Settings...", self)
        settings_act.triggered.connect(self.show_settings_dialog)
        edit_menu.addAction(settings_act)

        # View menu
        view_menu = menubar.addMenu("&View")

        self.zoom_in_act = QAction("Zoom In", self)
        self.zoom_in_act.setShortcut(QKeySequence.StandardKey.ZoomIn)
        self.zoom_in_act.triggered.connect(lambda: c.zoom_in())
        view_menu.addAction(self.zoom_in_act)

        self.zoom_out_act = QAction("Zoom Out", self)
        self.zoom_out_act.setShortcut(QKeySequence.StandardKey.ZoomOut)
        self.zoom_out_act.triggered.connect(lambda: c.zoom_out())
        view_menu.addAction(self.zoom_out_act)

        actual_act = QAction("Actual Size", self)
        actual_act.setShortcut(QKeySequence("Ctrl+0"))
        actual_act.triggered.connect(c.reset_zoom)
        view_menu.addAction(actual_act)

        self.fit_act = QAction("Fit to Window", self)
        self.fit_act.triggered.connect(self.fit_to_window)
        view_menu.addAction(self.fit_act)

        view_menu.addSeparator()

        self.show_grid_act = QAction("Show Grid", self)
        self.show_grid_act.setCheckable(True)
        self.show_grid_act.toggled.connect(self._on_show_grid_toggled)
        view_menu.addAction(self.show_grid_act)

        self.snap_act = QAction("Snap to Grid", self)
        self.snap_act.setCheckable(True)
        self.snap_act.toggled.connect(self._on_snap_toggled)
        view_menu.addAction(self.snap_act)

        self.rulers_act = QAction("Show Rulers", self)
        self.rulers_act.setCheckable(True)
        self.rulers_act.toggled.connect(c.set_show_rulers)
        view_menu.addAction(self.rulers_act)

        grid_size_act = QAction("Grid Size...", self)
        grid_size_act.triggered.connect(self._ask_grid_size)
        view_menu.addAction(grid_size_act)

        # Project menu
        project_menu = menubar.addMenu("&Project")

        add_screen_act = QAction("Add Screen...", self)
        add_screen_act.triggered.connect(self.add_screen)
        project_menu.addAction(add_screen_act)

        dup_screen_act = QAction("Duplicate Screen", self)
        dup_screen_act.triggered.connect(self.duplicate_screen)
        project_menu.addAction(dup_screen_act)

        rename_screen_act = QAction("Rename Screen...", self)
        rename_screen_act.triggered.connect(self.rename_screen)
        project_menu.addAction(rename_screen_act)

        remove_screen_act = QAction("Remove Screen", self)
        remove_screen_act.triggered.connect(self.remove_screen)
        project_menu.addAction(remove_screen_act)

        # Tools menu
        tools_menu = menubar.addMenu("&Tools")

        gen_act = QAction("Generate Code", self)
        gen_act.setShortcut(QKeySequence(Qt.Key.Key_F5))
        gen_act.triggered.connect(self.show_generated_code)
        tools_menu.addAction(gen_act)

        preview_act = QAction("Preview", self)
        preview_act.setShortcut(QKeySequence(Qt.Key.Key_F6))
        preview_act.triggered.connect(self.show_preview)
        tools_menu.addAction(preview_act)

        # Help menu
        help_menu = menubar.addMenu("&Help")

        help_contents_act = QAction("Help Contents", self)
        help_contents_act.setShortcut(QKeySequence(Qt.Key.Key_F1))
        help_contents_act.triggered.connect(lambda: self._show_help_dialog())
        help_menu.addAction(help_contents_act)

        shortcuts_act = QAction("Keyboard Shortcuts", self)
        shortcuts_act.triggered.connect(lambda: self._show_help_dialog(tab=2))
        help_menu.addAction(shortcuts_act)

        help_menu.addSeparator()

        about_act = QAction("About Screen Designer", self)
        about_act.triggered.connect(lambda: show_about_dialog(self))
        help_menu.addAction(about_act)

    def _build_toolbar(self):
        """Build the mode and zoom toolbar."""
        tb = QToolBar("Tools")
        tb.setObjectName("ToolsToolbar")
        self.addToolBar(tb)

        group = QActionGroup(self)
        group.setExclusive(True)

        self.act_select = QAction("Selection", self)
        self.act_select.setCheckable(True)
        self.act_select.setChecked(True)
        self.act_select.setToolTip("Select, move, and resize components (Space toggles)")
        self.act_select.triggered.connect(lambda: self.canvas.set_mode(InteractionMode.SELECTION))
        group.addAction(self.act_select)
        tb.addAction(self.act_select)

        self.act_pan = QAction("Pan", self)
        self.act_pan.setCheckable(True)
        self.act_pan.setToolTip("Drag to pan the canvas (Space toggles)")
        self.act_pan.triggered.connect(lambda: self.canvas.set_mode(InteractionMode.PAN))
        group.addAction(self.act_pan)
        tb.addAction(self.act_pan)

        tb.addSeparator()

        zoom_out_tb = QAction("-", self)
        zoom_out_tb.setToolTip("Zoom Out")
        zoom_out_tb.triggered.connect(lambda: self.canvas.controller.zoom_out())
        tb.addAction(zoom_out_tb)

        self.zoom_label = QLabel()
        self.zoom_label.setMinimumWidth(50)
        self.zoom_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        tb.addWidget(self.zoom_label)

        zoom_in_tb = QAction("+", self)
        zoom_in_tb.setToolTip("Zoom In")
        zoom_in_tb.triggered.connect(lambda: self.canvas.controller.zoom_in())
        tb.addAction(zoom_in_tb)

        tb.addAction(self.fit_act)

    def _build_status_bar(self):
        self.grid_label = QLabel()
        self.snap_label = QLabel()
        self.resolution_label = QLabel()
        self.statusBar().addPermanentWidget(self.resolution_label)
        self.statusBar().addPermanentWidget(self.grid_label)
        self.statusBar().addPermanentWidget(self.snap_label)

    def _update_status_labels(self):
        view = self.canvas.view_state
        self.grid_label.setText(f"Grid: {view.grid_size}")
        self.snap_label.setText(f"Snap: {'On' if view.snap_to_grid else 'Off'}")
        w, h = self.context.project.target_resolution
        self.resolution_label.setText(f"Target: {w}x{h}")

    def _update_zoom_label(self):
        text = zoom_label(self.canvas.controller.zoom_factor)
        # Strip the "Zoom: " prefix used by the on-canvas overlay
        self.zoom_label.setText(text.split(": ", 1)[-1])

    # ----------------------------
    # Settings <-> canvas configuration
    # ----------------------------

    def _apply_canvas_settings(self):
        """Push the canvas configuration surface from settings into the controller."""
        cs = self.settings_manager.settings.canvas
        self.canvas.controller.configure(
            zoom_factor=cs.view.zoom_factor,
            grid_size=cs.grid.size,
            snap_to_grid=cs.grid.snap_to_grid,
            show_grid=cs.grid.show_grid,
            show_rulers=cs.view.show_rulers,
        )
        view = self.canvas.view_state
        for act, value in (
            (self.show_grid_act, view.show_grid),
            (self.snap_act, view.snap_to_grid),
            (self.rulers_act, view.show_rulers),
        ):
            act.blockSignals(True)
            act.setChecked(value)
            act.blockSignals(False)
        self._update_status_labels()
        self._update_zoom_label()

    def _store_canvas_settings(self):
        """Write the controller's configuration surface back into settings."""
        cs = self.settings_manager.settings.canvas
        view = self.canvas.view_state
        cs.view.zoom_factor = view.zoom_factor
        cs.view.show_rulers = view.show_rulers
        cs.grid.size = view.grid_size
        cs.grid.snap_to_grid = view.snap_to_grid
        cs.grid.show_grid = view.show_grid
        g = self.settings_manager.settings.general
        g.window_width = self.width()
        g.window_height = self.height()

    def _apply_project_grid(self, project: DesignProject):
        """Use the project's own snap grid on the canvas."""
        view = self.canvas.view_state
        self.canvas.controller.set_grid_size(project.settings.get("gridSize", view.grid_size))
        self.canvas.controller.set_snap_to_grid(bool(project.settings.get("snapToGrid", view.snap_to_grid)))
        self.snap_act.blockSignals(True)
        self.snap_act.setChecked(self.canvas.view_state.snap_to_grid)
        self.snap_act.blockSignals(False)
        self._update_status_labels()

    def _store_project_grid(self):
        view = self.canvas.view_state
        self.context.project.settings["gridSize"] = view.grid_size
        self.context.project.settings["snapToGrid"] = view.snap_to_grid

    def _on_show_grid_toggled(self, checked: bool):
        self.canvas.controller.set_show_grid(checked)

    def _on_snap_toggled(self, checked: bool):
        self.canvas.controller.set_snap_to_grid(checked)
        self._store_project_grid()
        self._update_status_labels()

    def _ask_grid_size(self):
        current = self.canvas.view_state.grid_size
        size, ok = QInputDialog.getInt(self, "Grid Size", "Snap grid size:", current, 1, 200)
        if ok:
            self.canvas.controller.set_grid_size(size)
            self._store_project_grid()
            self._update_status_labels()

    def show_settings_dialog(self):
        """Show the settings dialog and re-apply canvas settings on OK."""
        self._store_canvas_settings()
        dialog = SettingsDialog(self.settings_manager, self)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            self._apply_canvas_settings()
            self._store_project_grid()
            self.canvas.update()
            self.statusBar().showMessage("Settings saved.", 3000)

    # ----------------------------
    # Mode / zoom
    # ----------------------------

    def _on_mode_changed(self, mode: InteractionMode):
        self.act_select.setChecked(mode == InteractionMode.SELECTION)
        self.act_pan.setChecked(mode == InteractionMode.PAN)
        self.statusBar().showMessage(f"{mode.name.title()} mode", 2000)

    def fit_to_window(self):
        viewport = self.scroll.viewport().size()
        self.canvas.controller.fit_to_window(viewport.width(), viewport.height())

    # ----------------------------
    # Components
    # ----------------------------

    def _on_palette_clicked(self, kind):
        sx, sy = canvas_to_screen(*CLICK_DROP_POSITION, self.canvas.view_state)
        if self.canvas.controller.drop_component(kind, sx, sy) is not None:
            self.canvas.setFocus()

    def duplicate_selected(self):
        if self.canvas.controller.duplicate_selected() is None:
            self.statusBar().showMessage("Nothing selected to duplicate.", 2000)

    def delete_selected(self):
        if not self.canvas.controller.delete_selected():
            self.statusBar().showMessage("Nothing selected to delete.", 2000)

    # ----------------------------
    # Project / screens
    # ----------------------------

    def _on_project_changed(self, project: DesignProject):
        """Rebuild the tabs and show the active screen."""
        trace(f"project changed: {project.name!r} ({len(project.screens)} screens)", "MAIN")
        self.tabs.set_project(project)
        self.canvas.set_screen(project.active_screen)
        self._apply_project_grid(project)
        self._update_title()

    def _on_screen_activated(self, screen: DesignScreen):
        try:
            self.context.set_active_screen(screen)
        except ProjectError as e:
            QMessageBox.warning(self, "Screen", str(e))
            return
        self.canvas.set_screen(screen)
        self._update_title()

    def _update_title(self):
        project = self.context.project
        screen = project.active_screen
        suffix = f" - {screen.name}" if screen is not None else ""
        self.setWindowTitle(f"Screen Designer - {project.name}{suffix}")

    def new_project(self):
        reply = QMessageBox.question(
            self, "New Project", "Discard the current project and start a new one?",
        )
        if reply == QMessageBox.StandardButton.Yes:
            self.context.new_project()

    def add_screen(self):
        project = self.context.project
        dialog = AddScreenDialog(project.unique_screen_name("Screen"), self)
        if dialog.exec() != QDialog.DialogCode.Accepted:
            return
        try:
            screen = project.create_screen(dialog.screen_name(), dialog.screen_type(), dialog.description())
        except ProjectError as e:
            QMessageBox.warning(self, "Add Screen", str(e))
            return
        project.active_screen = screen
        self.context.notify()

    def duplicate_screen(self):
        project = self.context.project
        screen = project.active_screen
        if screen is None:
            return
        copy = screen.duplicate(project.unique_screen_name(f"{screen.name} Copy"))
        try:
            project.add_screen(copy)
        except ProjectError as e:
            QMessageBox.warning(self, "Duplicate Screen", str(e))
            return
        project.active_screen = copy
        self.context.notify()

    def rename_screen(self):
        project = self.context.project
        screen = project.active_screen
        if screen is None:
            return
        name, ok = QInputDialog.getText(self, "Rename Screen", "New name:", text=screen.name)
        if not ok:
            return
        try:
            project.rename_screen(screen, name)
        except ProjectError as e:
            QMessageBox.warning(self, "Rename Screen", str(e))
            return
        self.context.notify()

    def remove_screen(self):
        project = self.context.project
        screen = project.active_screen
        if screen is None:
            return
        try:
            project.remove_screen(screen)
        except ProjectError as e:
            QMessageBox.warning(self, "Remove Screen", str(e))
            return
        self.context.notify()

    # ----------------------------
    # Code generation / preview
    # ----------------------------

    def _screen_size(self, screen: DesignScreen):
        return int(screen.get_setting("width", 800)), int(screen.get_setting("height", 600))

    def show_generated_code(self):
        screen = self.context.active_screen
        if screen is None:
            return
        width, height = self._screen_size(screen)
        class_name = class_name_for(screen.name)
        code = generate_code(screen.components, class_name, screen.name, width, height)
        dialog = CodeViewDialog(
            code, f"Generated Code - {screen.name}", f"{class_name.lower()}.py", self
        )
        dialog.exec()

    def show_preview(self):
        screen = self.context.active_screen
        if screen is None:
            return
        width, height = self._screen_size(screen)
        self._preview = build_preview(screen.components, f"Preview - {screen.name}", width, height)
        self._preview.show()

    def _show_help_dialog(self, tab: int = 0):
        """Show the help dialog, optionally opening to a specific tab.

        Args:
            tab: Index of the tab to show (0=Quick Start, 1=Canvas, 2=Shortcuts).
        """
        dialog = HelpDialog(self, initial_tab=tab)
        dialog.exec()

    def closeEvent(self, event):
        self._store_canvas_settings()
        super().closeEvent(event)


def main():
    """Application entry point."""
    sys.excepthook = excepthook
    app = QApplication(sys.argv)

    # Load settings (use singleton to ensure single instance)
    settings_manager = get_settings()
    configure_from_settings(settings_manager.settings)
    trace("Application starting", "MAIN")

    # Ensure settings file has all sections
    settings_manager.ensure_file_complete()

    # Save settings on application quit
    def save_on_quit():
        trace("Saving settings on quit", "MAIN")
        try:
            settings_manager.save()
        except OSError:
            trace_exception("Could not save settings")
        close_log()

    app.aboutToQuit.connect(save_on_quit)

    trace("Creating MainWindow", "MAIN")
    g = settings_manager.settings.general
    w = MainWindow(settings_manager)
    w.resize(g.window_width, g.window_height)
    w.show()
    trace("Entering event loop", "MAIN")
    sys.exit(app.exec())


def excepthook(exc_type, exc_value, exc_tb):
    """Trace uncaught exceptions before handing them to the default hook."""
    trace("UNCAUGHT EXCEPTION:", "CRASH")
    trace("".join(traceback.format_exception(exc_type, exc_value, exc_tb)), "CRASH")
    close_log()
    sys.__excepthook__(exc_type, exc_value, exc_tb)


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        trace(f"FATAL: {type(e).__name__}: {e}", "CRASH")
        trace_exception("Fatal exception")
        close_log()
        raise
