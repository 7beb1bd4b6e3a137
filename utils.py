"""
utils.py

Color conversion helpers for the Screen Designer application.
"""

from __future__ import annotations

from typing import Tuple

from PyQt6.QtGui import QColor

RGB = Tuple[int, int, int]


def rgb_to_qcolor(rgb: RGB, alpha: int = 255) -> QColor:
    """Convert an ``(r, g, b)`` triple to a QColor."""
    r, g, b = rgb
    return QColor(r, g, b, alpha)


def qcolor_to_rgb(c: QColor) -> RGB:
    """Convert a QColor to an ``(r, g, b)`` triple, dropping alpha."""
    return (c.red(), c.green(), c.blue())


def darker_rgb(rgb: RGB, factor: float = 0.7) -> RGB:
    """Darken a color the way a disabled widget fill is darkened.

    Args:
        rgb: Source color.
        factor: Multiplier applied to each channel.

    Returns:
        The darkened color.
    """
    return tuple(max(0, int(channel * factor)) for channel in rgb)  # type: ignore[return-value]


def hex_to_qcolor(s: str, fallback: QColor) -> QColor:
    """
    Parse a hex string to a QColor.

    Args:
        s: Hex string like "#RRGGBB" or "#RRGGBBAA"
        fallback: Color to return if parsing fails

    Returns:
        Parsed QColor or fallback
    """
    if not s:
        return QColor(fallback)
    s = s.strip().lstrip("#")
    try:
        if len(s) == 6:
            return QColor(int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))
        if len(s) == 8:
            return QColor(int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16), int(s[6:8], 16))
    except ValueError:
        pass
    return QColor(fallback)
