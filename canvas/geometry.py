"""
canvas/geometry.py

Coordinate transforms, grid snapping, zoom stepping and hit testing for
the design canvas.

Everything here is pure: functions take a ``CanvasViewState`` and plain
numbers and return new values, so the interaction controller and the
tests can use them without a running QApplication.

Canvas space is the unscaled, unpanned space component bounds live in.
Screen space is widget pixels.  With rulers shown, a fixed inset of
``RULER_WIDTH`` pixels sits between the widget origin and the panned
canvas origin.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence, Tuple

from models import (
    BASE_CANVAS_HEIGHT,
    BASE_CANVAS_WIDTH,
    DEFAULT_GRID_SIZE,
    HANDLE_SIZE,
    MAX_ZOOM,
    MIN_SIZE,
    MIN_ZOOM,
    RULER_WIDTH,
    ZOOM_STEP,
    Bounds,
    InteractionMode,
    PlacedComponent,
    ResizeHandle,
    clamp_zoom,
)


@dataclass
class CanvasViewState:
    """Transient view and interaction state of the canvas.  Never persisted.

    Attributes:
        zoom_factor: Scale from canvas to screen, within [0.25, 4.0].
        offset_x, offset_y: Integer screen-space pan translation.
        mode: Current interaction mode.
        selected_uid: uid of the selected component, or None.  A weak
            reference into the active screen's component list.
        active_handle: Resize handle engaged by the current gesture.
        grid_size: Snap grid size, >= 1.
        snap_to_grid: Whether moves and resizes snap.
        show_grid: Whether the background grid is drawn.
        show_rulers: Whether the ruler band (and its inset) is shown.
    """
    zoom_factor: float = 1.0
    offset_x: int = 0
    offset_y: int = 0
    mode: InteractionMode = InteractionMode.SELECTION
    selected_uid: Optional[str] = None
    active_handle: ResizeHandle = ResizeHandle.NONE
    grid_size: int = DEFAULT_GRID_SIZE
    snap_to_grid: bool = True
    show_grid: bool = True
    show_rulers: bool = False

    @property
    def ruler_inset(self) -> int:
        return RULER_WIDTH if self.show_rulers else 0


# ----------------------------
# Transforms
# ----------------------------

def screen_to_canvas_f(sx: float, sy: float, view: CanvasViewState) -> Tuple[float, float]:
    """Exact (untruncated) screen to canvas mapping."""
    inset = view.ruler_inset
    return (
        (sx - view.offset_x - inset) / view.zoom_factor,
        (sy - view.offset_y - inset) / view.zoom_factor,
    )


def screen_to_canvas(sx: float, sy: float, view: CanvasViewState) -> Tuple[int, int]:
    """Map a screen point to canvas space, truncating toward zero.

    Args:
        sx, sy: Widget pixel coordinates.
        view: Current view state.

    Returns:
        Integer canvas coordinates.
    """
    cx, cy = screen_to_canvas_f(sx, sy, view)
    return int(cx), int(cy)


def canvas_to_screen(cx: float, cy: float, view: CanvasViewState) -> Tuple[float, float]:
    """Map a canvas point to screen space (inverse affine of ``screen_to_canvas``)."""
    inset = view.ruler_inset
    return (
        cx * view.zoom_factor + view.offset_x + inset,
        cy * view.zoom_factor + view.offset_y + inset,
    )


# ----------------------------
# Snapping
# ----------------------------

def snap_position(value: int, grid_size: int) -> int:
    """Snap a position down to the grid (integer division, toward zero)."""
    grid_size = max(1, int(grid_size))
    return int(value / grid_size) * grid_size


def snap_size(value: int, grid_size: int) -> int:
    """Snap a size to the nearest grid multiple.

    Sizes round to nearest while positions truncate, so a resize keeps
    roughly the width the user dragged to instead of always shrinking.
    """
    grid_size = max(1, int(grid_size))
    return int((value + grid_size // 2) / grid_size) * grid_size


# ----------------------------
# Zoom
# ----------------------------

_EPS = 1e-9


def next_zoom_in(zoom: float) -> float:
    """Next 0.25 multiple strictly above *zoom*, clamped to MAX_ZOOM."""
    steps = math.floor(zoom / ZOOM_STEP + _EPS)
    return clamp_zoom(min(MAX_ZOOM, (steps + 1) * ZOOM_STEP))


def next_zoom_out(zoom: float) -> float:
    """Next 0.25 multiple strictly below *zoom*, clamped to MIN_ZOOM."""
    steps = math.ceil(zoom / ZOOM_STEP - _EPS)
    return clamp_zoom(max(MIN_ZOOM, (steps - 1) * ZOOM_STEP))


def zoom_toward(view: CanvasViewState, sx: float, sy: float, new_zoom: float) -> Tuple[int, int]:
    """Pan offset that keeps the canvas point under ``(sx, sy)`` fixed.

    Computes ``offset' = cursor - inset - canvas_point * new_zoom`` using the
    exact canvas point, rounded to whole pixels.

    Returns:
        The new ``(offset_x, offset_y)``.
    """
    cx, cy = screen_to_canvas_f(sx, sy, view)
    inset = view.ruler_inset
    return (
        int(round(sx - inset - cx * new_zoom)),
        int(round(sy - inset - cy * new_zoom)),
    )


def fit_zoom(viewport_width: int, viewport_height: int) -> float:
    """Zoom that fits the base 800x600 canvas into a viewport with a 10% margin."""
    if viewport_width <= 0 or viewport_height <= 0:
        return 1.0
    scale = min(viewport_width / BASE_CANVAS_WIDTH, viewport_height / BASE_CANVAS_HEIGHT)
    return clamp_zoom(scale * 0.9)


def canvas_extent(zoom: float) -> Tuple[int, int]:
    """Minimum widget size for the base canvas at *zoom*."""
    return int(BASE_CANVAS_WIDTH * zoom), int(BASE_CANVAS_HEIGHT * zoom)


# ----------------------------
# Handles and hit testing
# ----------------------------

def handle_points(bounds: Bounds) -> Dict[ResizeHandle, Tuple[int, int]]:
    """Handle centers in hit-test priority order: corners, then edges."""
    x, y, w, h = bounds.as_tuple()
    return {
        ResizeHandle.NW: (x, y),
        ResizeHandle.NE: (x + w, y),
        ResizeHandle.SW: (x, y + h),
        ResizeHandle.SE: (x + w, y + h),
        ResizeHandle.N: (x + w // 2, y),
        ResizeHandle.E: (x + w, y + h // 2),
        ResizeHandle.S: (x + w // 2, y + h),
        ResizeHandle.W: (x, y + h // 2),
    }


def handle_at(bounds: Bounds, px: int, py: int, handle_size: int = HANDLE_SIZE) -> ResizeHandle:
    """Which resize handle of *bounds*, if any, contains canvas point ``(px, py)``."""
    tolerance = handle_size // 2
    for handle, (hx, hy) in handle_points(bounds).items():
        if abs(px - hx) <= tolerance and abs(py - hy) <= tolerance:
            return handle
    return ResizeHandle.NONE


def hit_test(components: Sequence[PlacedComponent], px: int, py: int) -> Optional[PlacedComponent]:
    """Topmost visible component containing canvas point ``(px, py)``.

    Later components are drawn on top, so the search runs back to front.
    """
    for comp in reversed(components):
        if comp.visible and comp.bounds.contains(px, py):
            return comp
    return None


def find_by_uid(components: Iterable[PlacedComponent], uid: Optional[str]) -> Optional[PlacedComponent]:
    if uid is None:
        return None
    for comp in components:
        if comp.uid == uid:
            return comp
    return None


# ----------------------------
# Resize
# ----------------------------

def compute_resize(
    bounds: Bounds,
    handle: ResizeHandle,
    mx: int,
    my: int,
    snap: bool = False,
    grid_size: int = DEFAULT_GRID_SIZE,
    min_size: int = MIN_SIZE,
) -> Bounds:
    """New bounds for dragging *handle* of *bounds* to canvas point ``(mx, my)``.

    The edge opposite the handle stays put.  When *snap* is set the
    position snaps down and the size rounds to the grid; the minimum size
    is applied after snapping so snapping can never produce a size below
    *min_size*.

    Args:
        bounds: Bounds before the drag step.
        handle: Engaged handle.  ``ResizeHandle.NONE`` returns *bounds*.
        mx, my: Pointer position in canvas space.
        snap: Whether snap-to-grid is enabled.
        grid_size: Snap grid size.
        min_size: Smallest allowed width and height.

    Returns:
        The replacement bounds.
    """
    if handle == ResizeHandle.NONE:
        return bounds

    x, y, w, h = bounds.as_tuple()
    right, bottom = bounds.right, bounds.bottom

    if handle in (ResizeHandle.NW, ResizeHandle.SW, ResizeHandle.W):
        x = min(mx, right - min_size)
        w = right - x
    elif handle in (ResizeHandle.NE, ResizeHandle.E, ResizeHandle.SE):
        w = max(mx - x, min_size)

    if handle in (ResizeHandle.NW, ResizeHandle.N, ResizeHandle.NE):
        y = min(my, bottom - min_size)
        h = bottom - y
    elif handle in (ResizeHandle.SW, ResizeHandle.S, ResizeHandle.SE):
        h = max(my - y, min_size)

    if snap:
        x = snap_position(x, grid_size)
        y = snap_position(y, grid_size)
        w = snap_size(w, grid_size)
        h = snap_size(h, grid_size)

    w = max(w, min_size)
    h = max(h, min_size)
    return Bounds(int(x), int(y), int(w), int(h))
