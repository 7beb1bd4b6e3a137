"""
palette package

Drag source listing the component kinds that can be placed on a screen.
"""

from palette.panel import ComponentPalette, PaletteButton, make_kind_mime

__all__ = ["ComponentPalette", "PaletteButton", "make_kind_mime"]
