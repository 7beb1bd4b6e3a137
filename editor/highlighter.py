"""
editor/highlighter.py

Python syntax highlighter for the generated-code viewer.
"""

from __future__ import annotations

import keyword
from typing import List, Tuple

from PyQt6.QtCore import QRegularExpression
from PyQt6.QtGui import QColor, QSyntaxHighlighter, QTextCharFormat

from settings import get_settings


class PythonHighlighter(QSyntaxHighlighter):
    """
    Syntax highlighter for generated Python source.

    Highlights:
    - Keywords (orange, bold)
    - Qt class names (blue)
    - Numbers (purple)
    - String literals (green)
    - Comments (gray)

    Later rules win, so strings and comments override keywords inside them.
    """

    def __init__(self, parent):
        super().__init__(parent)

        self.rules: List[Tuple[QRegularExpression, QTextCharFormat]] = []

        # Defaults: keyword=#D35400, class=#2E86C1, number=#8E44AD, string=#27AE60, comment=#7F8C8D
        syntax = get_settings().settings.editor.syntax

        def fmt(color_hex: str, bold: bool = False, italic: bool = False) -> QTextCharFormat:
            f = QTextCharFormat()
            f.setForeground(QColor(color_hex))
            if bold:
                f.setFontWeight(700)
            if italic:
                f.setFontItalic(True)
            return f

        kw_pattern = r"\b(?:" + "|".join(keyword.kwlist) + r")\b"
        self.rules.append((QRegularExpression(kw_pattern), fmt(syntax.keyword_color, bold=syntax.keyword_bold)))

        # Qt classes and the generated class name after `class`
        self.rules.append((QRegularExpression(r"\bQ[A-Z]\w*\b"), fmt(syntax.class_color)))
        self.rules.append((QRegularExpression(r"(?<=\bclass )\w+"), fmt(syntax.class_color, bold=True)))

        self.rules.append((QRegularExpression(r"\b\d+(?:\.\d+)?\b"), fmt(syntax.number_color)))

        str_fmt = fmt(syntax.string_color)
        self.rules.append((QRegularExpression(r'"[^"\\]*(?:\\.[^"\\]*)*"'), str_fmt))
        self.rules.append((QRegularExpression(r"'[^'\\]*(?:\\.[^'\\]*)*'"), str_fmt))

        self.rules.append((QRegularExpression(r"#[^\n]*"), fmt(syntax.comment_color, italic=True)))

    def highlightBlock(self, text: str) -> None:
        """Apply highlighting rules to a block of text."""
        for regex, f in self.rules:
            it = regex.globalMatch(text)
            while it.hasNext():
                m = it.next()
                self.setFormat(m.capturedStart(), m.capturedLength(), f)
