"""
properties/dock.py

Property panel widget for editing the selected component.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QCheckBox,
    QColorDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QSpinBox,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from models import MIN_SIZE, PlacedComponent
from utils import qcolor_to_rgb, rgb_to_qcolor

COORD_RANGE = 10000


class PropertyPanel(QWidget):
    """
    Property panel for the component selected on the canvas.

    Shows type, text, geometry, background color, visible/enabled and the
    kind-specific editable/selected/columns fields.  Edits are written
    straight into the component and ``componentChanged`` is emitted so the
    canvas can repaint.
    """

    componentChanged = pyqtSignal(object)  # PlacedComponent

    def __init__(self, parent=None):
        super().__init__(parent)
        self._component: Optional[PlacedComponent] = None
        self._updating = False

        self._build_ui()
        self._connect_signals()
        self.set_component(None)

    def _build_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)

        self.stack = QStackedWidget()
        layout.addWidget(self.stack)

        # === Placeholder page ===
        self.placeholder = QLabel("Select a component")
        self.placeholder.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.placeholder.setStyleSheet("color: #888;")
        self.stack.addWidget(self.placeholder)

        # === Editor page ===
        editor = QWidget()
        form = QFormLayout(editor)

        self.kind_label = QLabel("-")
        self.text_edit = QLineEdit()

        self.x_spin = QSpinBox()
        self.y_spin = QSpinBox()
        for spin in (self.x_spin, self.y_spin):
            spin.setRange(-COORD_RANGE, COORD_RANGE)
        self.width_spin = QSpinBox()
        self.height_spin = QSpinBox()
        for spin in (self.width_spin, self.height_spin):
            spin.setRange(MIN_SIZE, COORD_RANGE)

        self.color_btn = QPushButton("Choose...")
        self.color_preview = QLabel()
        self.color_preview.setFixedSize(24, 16)
        color_row = QWidget()
        color_layout = QHBoxLayout(color_row)
        color_layout.setContentsMargins(0, 0, 0, 0)
        color_layout.addWidget(self.color_preview)
        color_layout.addWidget(self.color_btn)
        color_layout.addStretch(1)

        self.visible_check = QCheckBox()
        self.enabled_check = QCheckBox()
        self.editable_check = QCheckBox()
        self.selected_check = QCheckBox()
        self.columns_spin = QSpinBox()
        self.columns_spin.setRange(1, 200)

        form.addRow("Type:", self.kind_label)
        form.addRow("Text:", self.text_edit)
        form.addRow("X:", self.x_spin)
        form.addRow("Y:", self.y_spin)
        form.addRow("Width:", self.width_spin)
        form.addRow("Height:", self.height_spin)
        form.addRow("Background:", color_row)
        form.addRow("Visible:", self.visible_check)
        form.addRow("Enabled:", self.enabled_check)
        form.addRow("Editable:", self.editable_check)
        form.addRow("Selected:", self.selected_check)
        form.addRow("Columns:", self.columns_spin)
        self._form = form

        self.stack.addWidget(editor)

    def _connect_signals(self):
        """Connect all widget signals to handlers."""
        self.text_edit.editingFinished.connect(self._apply_text)
        for spin in (self.x_spin, self.y_spin, self.width_spin, self.height_spin):
            spin.valueChanged.connect(self._apply_bounds)
        self.color_btn.clicked.connect(self.pick_background_color)
        self.visible_check.toggled.connect(self._apply_flags)
        self.enabled_check.toggled.connect(self._apply_flags)
        self.editable_check.toggled.connect(self._apply_flags)
        self.selected_check.toggled.connect(self._apply_flags)
        self.columns_spin.valueChanged.connect(self._apply_flags)

    # ----------------------------
    # Display
    # ----------------------------

    @property
    def component(self) -> Optional[PlacedComponent]:
        return self._component

    def _set_row_visible(self, field: QWidget, visible: bool):
        self._form.setRowVisible(field, visible)

    def _set_preview(self, color: QColor):
        self.color_preview.setStyleSheet(f"background-color: {color.name()}; border: 1px solid #444;")

    def set_component(self, component: Optional[PlacedComponent]):
        """Show *component*, or the placeholder when None."""
        self._component = component
        if component is None:
            self.stack.setCurrentIndex(0)
            return
        self.stack.setCurrentIndex(1)
        self.refresh()

    def refresh(self):
        """Re-read every field from the current component (e.g. after a drag)."""
        comp = self._component
        if comp is None:
            return
        self._updating = True
        try:
            spec = comp.spec
            self.kind_label.setText(comp.kind.display_name)
            self.text_edit.setText(comp.text)
            x, y, w, h = comp.bounds.as_tuple()
            self.x_spin.setValue(x)
            self.y_spin.setValue(y)
            self.width_spin.setValue(w)
            self.height_spin.setValue(h)
            self._set_preview(rgb_to_qcolor(comp.background_color))
            self.visible_check.setChecked(comp.visible)
            self.enabled_check.setChecked(comp.enabled)
            self.editable_check.setChecked(comp.editable)
            self.selected_check.setChecked(comp.selected)
            self.columns_spin.setValue(comp.columns)

            self._set_row_visible(self.editable_check, spec.has_editable)
            self._set_row_visible(self.selected_check, spec.has_selected)
            self._set_row_visible(self.columns_spin, spec.has_columns)
        finally:
            self._updating = False

    # ----------------------------
    # Editing
    # ----------------------------

    def _changed(self):
        self.componentChanged.emit(self._component)

    def _apply_text(self):
        if self._updating or self._component is None:
            return
        text = self.text_edit.text()
        if text != self._component.text:
            self._component.text = text
            self._changed()

    def _apply_bounds(self):
        if self._updating or self._component is None:
            return
        self._component.set_bounds(
            self.x_spin.value(),
            self.y_spin.value(),
            self.width_spin.value(),
            self.height_spin.value(),
        )
        self._changed()

    def _apply_flags(self):
        if self._updating or self._component is None:
            return
        comp = self._component
        comp.visible = self.visible_check.isChecked()
        comp.enabled = self.enabled_check.isChecked()
        comp.editable = self.editable_check.isChecked()
        comp.selected = self.selected_check.isChecked()
        comp.columns = self.columns_spin.value()
        self._changed()

    def set_background_color(self, color: QColor):
        if self._component is None or not color.isValid():
            return
        self._component.background_color = qcolor_to_rgb(color)
        self._set_preview(color)
        self._changed()

    def pick_background_color(self):
        """Pick the component background color."""
        if self._component is None:
            return
        initial = rgb_to_qcolor(self._component.background_color)
        c = QColorDialog.getColor(initial, self, "Pick Background Color")
        if c.isValid():
            self.set_background_color(c)
