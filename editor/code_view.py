"""
editor/code_view.py

Read-only viewer for generated source with copy and save actions.
"""

from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtGui import QFont, QGuiApplication
from PyQt6.QtWidgets import (
    QDialog,
    QFileDialog,
    QHBoxLayout,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
)

from editor.highlighter import PythonHighlighter
from settings import get_settings

logger = logging.getLogger(__name__)


class CodeViewDialog(QDialog):
    """Shows generated code with syntax highlighting."""

    def __init__(self, code: str, title: str = "Generated Code",
                 default_filename: str = "generated_form.py", parent=None):
        super().__init__(parent)
        self.setWindowTitle(title)
        self.resize(760, 600)
        self._default_filename = default_filename

        font_cfg = get_settings().settings.editor.font
        font = QFont(font_cfg.family, font_cfg.size)
        font.setStyleHint(QFont.StyleHint.Monospace)

        self.editor = QPlainTextEdit()
        self.editor.setReadOnly(True)
        self.editor.setFont(font)
        self.editor.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        self.editor.setPlainText(code)
        self.highlighter = PythonHighlighter(self.editor.document())

        self.copy_btn = QPushButton("Copy to Clipboard")
        self.save_btn = QPushButton("Save...")
        self.close_btn = QPushButton("Close")
        self.copy_btn.clicked.connect(self.copy_to_clipboard)
        self.save_btn.clicked.connect(self._on_save_clicked)
        self.close_btn.clicked.connect(self.accept)

        buttons = QHBoxLayout()
        buttons.addWidget(self.copy_btn)
        buttons.addWidget(self.save_btn)
        buttons.addStretch(1)
        buttons.addWidget(self.close_btn)

        layout = QVBoxLayout(self)
        layout.addWidget(self.editor)
        layout.addLayout(buttons)

    def code(self) -> str:
        return self.editor.toPlainText()

    def copy_to_clipboard(self):
        QGuiApplication.clipboard().setText(self.code())

    def save_to(self, path: Path) -> None:
        """Write the code to *path*.  OSError propagates to the caller."""
        Path(path).write_text(self.code(), encoding="utf-8")
        logger.info("Saved generated code to %s", path)

    def _on_save_clicked(self):
        filename, _ = QFileDialog.getSaveFileName(
            self, "Save Generated Code", self._default_filename, "Python Files (*.py);;All Files (*)"
        )
        if not filename:
            return
        try:
            self.save_to(Path(filename))
        except OSError as e:
            QMessageBox.critical(self, "Save Failed", f"Could not save {filename}:\n{e}")
