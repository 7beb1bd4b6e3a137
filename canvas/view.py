"""
canvas/view.py

Design canvas widget: routes Qt mouse, wheel, key and drop events to the
``CanvasController`` and paints with ``render_canvas``.
"""

from __future__ import annotations

from typing import List, Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QPainter
from PyQt6.QtWidgets import QSizePolicy, QWidget

from debug_trace import trace
from models import KIND_MIME_TYPE, InteractionMode, PlacedComponent, resolve_kind_alias
from canvas.controller import CanvasController, Key, PointerButton
from canvas.geometry import CanvasViewState, canvas_extent
from canvas.painter import render_canvas


_CURSORS = {
    "arrow": Qt.CursorShape.ArrowCursor,
    "move": Qt.CursorShape.SizeAllCursor,
    "size_fdiag": Qt.CursorShape.SizeFDiagCursor,
    "size_bdiag": Qt.CursorShape.SizeBDiagCursor,
    "size_ver": Qt.CursorShape.SizeVerCursor,
    "size_hor": Qt.CursorShape.SizeHorCursor,
}

_KEYS = {
    Qt.Key.Key_Space: Key.SPACE,
    Qt.Key.Key_Delete: Key.DELETE,
    Qt.Key.Key_Left: Key.LEFT,
    Qt.Key.Key_Right: Key.RIGHT,
    Qt.Key.Key_Up: Key.UP,
    Qt.Key.Key_Down: Key.DOWN,
}

_BUTTONS = {
    Qt.MouseButton.LeftButton: PointerButton.LEFT,
    Qt.MouseButton.MiddleButton: PointerButton.MIDDLE,
    Qt.MouseButton.RightButton: PointerButton.RIGHT,
}


class DesignCanvas(QWidget):
    """
    Canvas widget for placing and arranging components of one screen.

    Interaction:
    - Selection mode: click to select, drag to move, drag a handle to resize,
      arrows nudge, Delete removes
    - Pan mode: drag or arrows pan the view
    - Space toggles the mode; Ctrl + wheel zooms toward the cursor
    - Palette items can be dropped anywhere on the canvas
    """

    selectionChanged = pyqtSignal(object)   # PlacedComponent or None
    propertiesRefreshRequested = pyqtSignal()
    modeChanged = pyqtSignal(object)        # InteractionMode
    zoomChanged = pyqtSignal(float)

    def __init__(self, parent=None, controller: Optional[CanvasController] = None):
        super().__init__(parent)
        self.controller = controller or CanvasController()
        self.setAcceptDrops(True)
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setAutoFillBackground(False)

        c = self.controller
        c.set_selection_changed_callback(self.selectionChanged.emit)
        c.set_properties_refresh_callback(self.propertiesRefreshRequested.emit)
        c.set_mode_changed_callback(self.modeChanged.emit)
        c.set_view_changed_callback(self.update)
        c.set_zoom_changed_callback(self._on_zoom_changed)
        c.set_cursor_changed_callback(self._apply_cursor)

        self._apply_cursor("arrow")
        self._on_zoom_changed(c.zoom_factor)

    # ----------------------------
    # Convenience pass-throughs
    # ----------------------------

    @property
    def view_state(self) -> CanvasViewState:
        return self.controller.current_view_state()

    def set_screen(self, screen) -> None:
        self.controller.set_screen(screen)

    def components(self) -> List[PlacedComponent]:
        return self.controller.current_components()

    def selected_component(self) -> Optional[PlacedComponent]:
        return self.controller.selected_component()

    def set_mode(self, mode: InteractionMode) -> None:
        self.controller.set_mode(mode)

    def _apply_cursor(self, name: str) -> None:
        self.setCursor(_CURSORS.get(name, Qt.CursorShape.ArrowCursor))

    def _on_zoom_changed(self, zoom: float) -> None:
        w, h = canvas_extent(zoom)
        self.setMinimumSize(w, h)
        self.updateGeometry()
        self.zoomChanged.emit(zoom)

    # ----------------------------
    # Painting
    # ----------------------------

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            render_canvas(
                painter,
                self.width(),
                self.height(),
                self.controller.current_view_state(),
                self.controller.current_components(),
            )
        finally:
            painter.end()

    # ----------------------------
    # Mouse
    # ----------------------------

    def mousePressEvent(self, event):
        self.setFocus(Qt.FocusReason.MouseFocusReason)
        button = _BUTTONS.get(event.button(), PointerButton.LEFT)
        pos = event.position()
        self.controller.pointer_press(pos.x(), pos.y(), button)
        event.accept()

    def mouseMoveEvent(self, event):
        pos = event.position()
        buttons = event.buttons()
        if buttons == Qt.MouseButton.NoButton:
            self.controller.pointer_move(pos.x(), pos.y())
            return
        button = PointerButton.LEFT if buttons & Qt.MouseButton.LeftButton else PointerButton.RIGHT
        self.controller.pointer_drag(pos.x(), pos.y(), button)
        event.accept()

    def mouseReleaseEvent(self, event):
        pos = event.position()
        self.controller.pointer_release(pos.x(), pos.y(), _BUTTONS.get(event.button(), PointerButton.LEFT))
        event.accept()

    def wheelEvent(self, event):
        """Ctrl + wheel zooms toward the cursor; plain wheel scrolls the enclosing area."""
        pos = event.position()
        ctrl = bool(event.modifiers() & Qt.KeyboardModifier.ControlModifier)
        if self.controller.wheel(pos.x(), pos.y(), event.angleDelta().y(), ctrl):
            event.accept()
        else:
            event.ignore()

    # ----------------------------
    # Keyboard
    # ----------------------------

    def keyPressEvent(self, event):
        key = _KEYS.get(event.key())
        if key == Key.SPACE and event.isAutoRepeat():
            event.accept()
            return
        if key is not None and self.controller.key_press(key):
            event.accept()
            return
        super().keyPressEvent(event)

    # ----------------------------
    # Drag and drop from the palette
    # ----------------------------

    def dragEnterEvent(self, event):
        if event.mimeData().hasFormat(KIND_MIME_TYPE):
            event.acceptProposedAction()
            return
        event.ignore()

    def dragMoveEvent(self, event):
        if event.mimeData().hasFormat(KIND_MIME_TYPE):
            event.acceptProposedAction()
            return
        event.ignore()

    def dropEvent(self, event):
        mime = event.mimeData()
        if not mime.hasFormat(KIND_MIME_TYPE):
            event.ignore()
            return
        name = bytes(mime.data(KIND_MIME_TYPE)).decode("utf-8", errors="replace")
        if resolve_kind_alias(name) is None:
            trace(f"rejecting drop of unknown kind {name!r}", "CANVAS")
            event.ignore()
            return
        pos = event.position()
        if self.controller.drop_component(name, pos.x(), pos.y()) is None:
            event.ignore()
            return
        self.setFocus(Qt.FocusReason.OtherFocusReason)
        event.acceptProposedAction()
