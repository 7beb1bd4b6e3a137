"""
project/panel.py

Screen tab bar and the add-screen dialog.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QTabBar,
    QVBoxLayout,
)

from project.store import DesignProject, DesignScreen, ScreenType


class ScreenTabs(QTabBar):
    """
    One tab per screen of the current project.

    Emits ``screenActivated`` with the ``DesignScreen`` when the user
    switches tabs.  Rebuilding the tabs does not emit.
    """

    screenActivated = pyqtSignal(object)  # DesignScreen

    def __init__(self, parent=None):
        super().__init__(parent)
        self._project: Optional[DesignProject] = None
        self.setExpanding(False)
        self.setDocumentMode(True)
        self.currentChanged.connect(self._on_current_changed)

    def set_project(self, project: DesignProject) -> None:
        """Rebuild tabs from *project* and select its active screen."""
        self._project = project
        self.blockSignals(True)
        try:
            while self.count():
                self.removeTab(0)
            for screen in project.screens:
                idx = self.addTab(screen.name)
                self.setTabToolTip(idx, f"{screen.screen_type.display_name}: {screen.description}".rstrip(": "))
            if project.active_screen is not None:
                self.setCurrentIndex(project.screens.index(project.active_screen))
        finally:
            self.blockSignals(False)

    def screen_at(self, index: int) -> Optional[DesignScreen]:
        if self._project is None or not (0 <= index < len(self._project.screens)):
            return None
        return self._project.screens[index]

    def _on_current_changed(self, index: int) -> None:
        screen = self.screen_at(index)
        if screen is not None:
            self.screenActivated.emit(screen)


class AddScreenDialog(QDialog):
    """Ask for a new screen's name, type and description."""

    def __init__(self, default_name: str = "New Screen", parent=None):
        super().__init__(parent)
        self.setWindowTitle("Add Screen")

        self.name_edit = QLineEdit(default_name)
        self.type_combo = QComboBox()
        for st in ScreenType:
            self.type_combo.addItem(st.display_name, st)
        self.description_edit = QPlainTextEdit()
        self.description_edit.setFixedHeight(70)
        self.type_hint = QLabel()
        self.type_hint.setStyleSheet("color: #666;")

        form = QFormLayout()
        form.addRow("Name:", self.name_edit)
        form.addRow("Type:", self.type_combo)
        form.addRow("", self.type_hint)
        form.addRow("Description:", self.description_edit)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        self.ok_button = buttons.button(QDialogButtonBox.StandardButton.Ok)

        layout = QVBoxLayout(self)
        layout.addLayout(form)
        layout.addWidget(buttons)

        self.type_combo.currentIndexChanged.connect(self._update_hint)
        self.name_edit.textChanged.connect(self._update_ok)
        self._update_hint()
        self._update_ok()

    def _update_hint(self):
        self.type_hint.setText(self.screen_type().description)

    def _update_ok(self):
        self.ok_button.setEnabled(bool(self.name_edit.text().strip()))

    def screen_name(self) -> str:
        return self.name_edit.text().strip()

    def screen_type(self) -> ScreenType:
        return self.type_combo.currentData()

    def description(self) -> str:
        return self.description_edit.toPlainText().strip()
