"""
palette/panel.py

Component palette: one draggable entry per component kind.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import QByteArray, QMimeData, QPoint, Qt, pyqtSignal
from PyQt6.QtGui import QDrag
from PyQt6.QtWidgets import QApplication, QLabel, QPushButton, QVBoxLayout, QWidget

from models import KIND_MIME_TYPE, ComponentKind


def make_kind_mime(kind: ComponentKind) -> QMimeData:
    """Mime payload carrying the kind's display name."""
    mime = QMimeData()
    mime.setData(KIND_MIME_TYPE, QByteArray(kind.display_name.encode("utf-8")))
    mime.setText(kind.display_name)
    return mime


class PaletteButton(QPushButton):
    """Palette entry that starts a drag once the pointer moves far enough."""

    def __init__(self, kind: ComponentKind, parent=None):
        super().__init__(kind.display_name, parent)
        self.kind = kind
        self._press_pos: Optional[QPoint] = None
        self.setToolTip(f"Drag onto the canvas to add a {kind.display_name}")
        self.setCursor(Qt.CursorShape.OpenHandCursor)

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self._press_pos = event.position().toPoint()
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if self._press_pos is None or not (event.buttons() & Qt.MouseButton.LeftButton):
            return super().mouseMoveEvent(event)
        if (event.position().toPoint() - self._press_pos).manhattanLength() < QApplication.startDragDistance():
            return
        self._press_pos = None
        self.setDown(False)

        drag = QDrag(self)
        drag.setMimeData(make_kind_mime(self.kind))
        drag.setPixmap(self.grab())
        drag.exec(Qt.DropAction.CopyAction)

    def mouseReleaseEvent(self, event):
        self._press_pos = None
        super().mouseReleaseEvent(event)


class ComponentPalette(QWidget):
    """
    Vertical list of component kinds to drag onto the canvas.

    Clicking an entry (without dragging) emits ``kindActivated``; the main
    window uses it to drop the kind at the canvas origin.
    """

    kindActivated = pyqtSignal(object)  # ComponentKind

    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        header = QLabel("Components")
        header.setStyleSheet("font-weight: bold;")
        layout.addWidget(header)

        self.buttons = {}
        for kind in ComponentKind:
            btn = PaletteButton(kind)
            btn.clicked.connect(lambda _checked=False, k=kind: self.kindActivated.emit(k))
            layout.addWidget(btn)
            self.buttons[kind] = btn
        layout.addStretch(1)
