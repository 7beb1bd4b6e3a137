"""
canvas package

Design canvas: geometry and interaction logic, render loop, and the
PyQt6 widget that hosts them.
"""

from canvas.geometry import CanvasViewState
from canvas.controller import CanvasController, Gesture, Key, PointerButton
from canvas.painter import render_canvas
from canvas.view import DesignCanvas

__all__ = [
    "CanvasViewState",
    "CanvasController",
    "Gesture",
    "Key",
    "PointerButton",
    "render_canvas",
    "DesignCanvas",
]
