"""Tests for utils.py color helpers."""
from __future__ import annotations

from PyQt6.QtGui import QColor

from utils import darker_rgb, hex_to_qcolor, qcolor_to_rgb, rgb_to_qcolor


class TestColorHelpers:
    def test_rgb_qcolor_round_trip(self):
        assert qcolor_to_rgb(rgb_to_qcolor((12, 34, 56))) == (12, 34, 56)

    def test_darker(self):
        assert darker_rgb((200, 100, 0)) == (140, 70, 0)

    def test_hex_with_and_without_hash(self):
        assert hex_to_qcolor("#FF8000", QColor("black")).name() == "#ff8000"
        assert hex_to_qcolor("ff8000", QColor("black")).name() == "#ff8000"

    def test_hex_with_alpha(self):
        c = hex_to_qcolor("#11223344", QColor("black"))
        assert (c.red(), c.green(), c.blue(), c.alpha()) == (0x11, 0x22, 0x33, 0x44)

    def test_bad_hex_falls_back(self):
        fallback = QColor("#E6E6E6")
        assert hex_to_qcolor("nonsense", fallback) == fallback
        assert hex_to_qcolor("", fallback) == fallback
