"""
codegen/preview.py

Live preview: a window built from real PyQt6 widgets at the designed
geometry.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence

from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QGroupBox,
    QLabel,
    QLineEdit,
    QListWidget,
    QPushButton,
    QTextEdit,
    QWidget,
)

from models import ComponentKind, PlacedComponent
from codegen.generator import COMBO_ITEMS, LIST_ITEMS, TEXT_AREA_COLUMNS, variable_name


def create_widget(comp: PlacedComponent, parent: QWidget) -> QWidget:
    """Instantiate and configure the real widget for one component."""
    kind = comp.kind
    if kind == ComponentKind.BUTTON:
        w = QPushButton(comp.text, parent)
    elif kind == ComponentKind.LABEL:
        w = QLabel(comp.text, parent)
    elif kind == ComponentKind.TEXT_FIELD:
        w = QLineEdit(comp.text, parent)
        w.setReadOnly(not comp.editable)
    elif kind == ComponentKind.CHECK_BOX:
        w = QCheckBox(comp.text, parent)
        w.setChecked(comp.selected)
    elif kind == ComponentKind.PANEL:
        w = QGroupBox(comp.text, parent)
        w.setAutoFillBackground(True)
    elif kind == ComponentKind.COMBO_BOX:
        w = QComboBox(parent)
        w.addItems(COMBO_ITEMS)
    elif kind == ComponentKind.LIST:
        w = QListWidget(parent)
        w.addItems(LIST_ITEMS)
    else:
        w = QTextEdit(parent)
        w.setPlainText(comp.text)
        w.setLineWrapMode(QTextEdit.LineWrapMode.FixedColumnWidth)
        w.setLineWrapColumnOrWidth(TEXT_AREA_COLUMNS)

    bg = tuple(comp.background_color)
    if bg != comp.spec.background:
        r, g, b = bg
        w.setStyleSheet(f"background-color: rgb({r}, {g}, {b});")

    w.setEnabled(comp.enabled)
    w.setVisible(comp.visible)
    x, y, width, height = comp.bounds.as_tuple()
    w.setGeometry(x, y, width, height)
    return w


class PreviewWindow(QWidget):
    """Top-level window showing real widgets for a screen's components.

    Widgets are also reachable by their generated variable names through
    ``widgets``.
    """

    def __init__(self, components: Sequence[PlacedComponent], title: str = "Form Preview",
                 width: int = 800, height: int = 600, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setWindowTitle(title)
        self.resize(width, height)
        self.widgets: Dict[str, QWidget] = {}
        for i, comp in enumerate(components):
            self.widgets[variable_name(comp, i)] = create_widget(comp, self)


def build_preview(components: Sequence[PlacedComponent], title: str = "Form Preview",
                  width: int = 800, height: int = 600) -> PreviewWindow:
    """Build (but do not show) a preview window for *components*."""
    return PreviewWindow(components, title, width, height)
