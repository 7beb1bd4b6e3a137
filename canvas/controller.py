"""
canvas/controller.py

Pointer and keyboard interaction state machine for the design canvas.

The controller owns a ``CanvasViewState`` and works on the component list
of whichever screen is active.  It has no Qt dependency: the canvas widget
translates Qt events into the ``pointer_*``, ``wheel`` and ``key_press``
calls below and listens on the callbacks to repaint and update cursors.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, List, Optional, Tuple

from debug_trace import trace
from models import (
    HANDLE_CURSORS,
    MODE_INFO,
    NUDGE_STEP,
    PAN_KEY_STEP,
    ComponentKind,
    InteractionMode,
    PlacedComponent,
    ResizeHandle,
    clamp_grid_size,
    clamp_zoom,
    resolve_kind_alias,
)
from canvas.geometry import (
    CanvasViewState,
    compute_resize,
    find_by_uid,
    fit_zoom,
    handle_at,
    hit_test,
    next_zoom_in,
    next_zoom_out,
    screen_to_canvas,
    snap_position,
    zoom_toward,
)


class Gesture(Enum):
    """Sub-state of selection mode while a pointer button is held."""
    IDLE = "idle"
    DRAGGING = "dragging"
    RESIZING = "resizing"


class PointerButton(Enum):
    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"


class Key(Enum):
    SPACE = "space"
    DELETE = "delete"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


_NUDGE = {
    Key.LEFT: (-NUDGE_STEP, 0),
    Key.RIGHT: (NUDGE_STEP, 0),
    Key.UP: (0, -NUDGE_STEP),
    Key.DOWN: (0, NUDGE_STEP),
}

# Pan keys move the content, not the viewport: Right/Down decrease the offset.
_PAN_KEYS = {
    Key.LEFT: (PAN_KEY_STEP, 0),
    Key.RIGHT: (-PAN_KEY_STEP, 0),
    Key.UP: (0, PAN_KEY_STEP),
    Key.DOWN: (0, -PAN_KEY_STEP),
}


class CanvasController:
    """
    Selection, move, resize, pan and zoom logic for one canvas.

    The screen passed to ``set_screen`` keeps ownership of its components;
    the controller only reads ``screen.components`` and calls
    ``screen.add_component`` / ``screen.remove_component``.
    """

    def __init__(self, screen=None, view: Optional[CanvasViewState] = None):
        self.view = view or CanvasViewState()
        self.gesture = Gesture.IDLE
        self._screen = None
        self._drag_offset: Optional[Tuple[int, int]] = None
        self._last_pan_point: Optional[Tuple[float, float]] = None
        self._viewport_size: Tuple[int, int] = (0, 0)

        self._on_selection_changed: Optional[Callable[[Optional[PlacedComponent]], None]] = None
        self._on_properties_refresh: Optional[Callable[[], None]] = None
        self._on_mode_changed: Optional[Callable[[InteractionMode], None]] = None
        self._on_view_changed: Optional[Callable[[], None]] = None
        self._on_zoom_changed: Optional[Callable[[float], None]] = None
        self._on_cursor_changed: Optional[Callable[[str], None]] = None

        if screen is not None:
            self.set_screen(screen)

    # ----------------------------
    # Callbacks
    # ----------------------------

    def set_selection_changed_callback(self, callback: Optional[Callable[[Optional[PlacedComponent]], None]]):
        """Set callback invoked with the new selection (or None) on every change."""
        self._on_selection_changed = callback

    def set_properties_refresh_callback(self, callback: Optional[Callable[[], None]]):
        """Set callback invoked after a drag, resize or nudge changed bounds."""
        self._on_properties_refresh = callback

    def set_mode_changed_callback(self, callback: Optional[Callable[[InteractionMode], None]]):
        self._on_mode_changed = callback

    def set_view_changed_callback(self, callback: Optional[Callable[[], None]]):
        """Set callback invoked whenever a repaint is needed."""
        self._on_view_changed = callback

    def set_zoom_changed_callback(self, callback: Optional[Callable[[float], None]]):
        self._on_zoom_changed = callback

    def set_cursor_changed_callback(self, callback: Optional[Callable[[str], None]]):
        """Set callback receiving a toolkit-neutral cursor name (see ``HANDLE_CURSORS``)."""
        self._on_cursor_changed = callback

    def _notify_selection(self) -> None:
        if self._on_selection_changed:
            self._on_selection_changed(self.selected_component())

    def _notify_refresh(self) -> None:
        if self._on_properties_refresh:
            self._on_properties_refresh()

    def _notify_view(self) -> None:
        if self._on_view_changed:
            self._on_view_changed()

    def _notify_zoom(self) -> None:
        if self._on_zoom_changed:
            self._on_zoom_changed(self.view.zoom_factor)

    def _set_cursor(self, name: str) -> None:
        if self._on_cursor_changed:
            self._on_cursor_changed(name)

    # ----------------------------
    # Screen and snapshot access
    # ----------------------------

    @property
    def screen(self):
        return self._screen

    def set_screen(self, screen) -> None:
        """Swap in the component list of *screen* (may be None) wholesale."""
        self._screen = screen
        self.gesture = Gesture.IDLE
        self.view.active_handle = ResizeHandle.NONE
        self._drag_offset = None
        if self.view.selected_uid is not None:
            self.view.selected_uid = None
            self._notify_selection()
        trace(f"set_screen {getattr(screen, 'name', None)!r}", "CANVAS")
        self._notify_view()

    def current_components(self) -> List[PlacedComponent]:
        """Read-only snapshot of the active screen's components, bottom to top."""
        if self._screen is None:
            return []
        return list(self._screen.components)

    def current_view_state(self) -> CanvasViewState:
        return self.view

    def selected_component(self) -> Optional[PlacedComponent]:
        if self._screen is None:
            return None
        return find_by_uid(self._screen.components, self.view.selected_uid)

    def select(self, component: Optional[PlacedComponent]) -> None:
        """Programmatically select *component* (or clear with None)."""
        uid = component.uid if component is not None else None
        if uid == self.view.selected_uid:
            return
        self.view.selected_uid = uid
        self._notify_selection()
        self._notify_view()

    # ----------------------------
    # Mode
    # ----------------------------

    @property
    def mode(self) -> InteractionMode:
        return self.view.mode

    def set_mode(self, mode: InteractionMode) -> None:
        """Switch interaction mode.  Entering pan mode always clears the selection."""
        self.view.mode = mode
        self.gesture = Gesture.IDLE
        self.view.active_handle = ResizeHandle.NONE
        self._drag_offset = None
        self._last_pan_point = None
        if mode == InteractionMode.PAN:
            self.view.selected_uid = None
            self._notify_selection()
        trace(f"mode -> {mode.name}", "CANVAS")
        self._set_cursor(MODE_INFO[mode].cursor)
        if self._on_mode_changed:
            self._on_mode_changed(mode)
        self._notify_view()

    def toggle_mode(self) -> None:
        if self.view.mode == InteractionMode.SELECTION:
            self.set_mode(InteractionMode.PAN)
        else:
            self.set_mode(InteractionMode.SELECTION)

    # ----------------------------
    # Zoom and pan
    # ----------------------------

    @property
    def zoom_factor(self) -> float:
        return self.view.zoom_factor

    def set_zoom_factor(self, zoom: float) -> float:
        """Set zoom to any value within range, without quantizing.

        Returns:
            The clamped zoom actually applied.
        """
        zoom = clamp_zoom(zoom)
        if zoom != self.view.zoom_factor:
            trace(f"zoom {self.view.zoom_factor:.3f} -> {zoom:.3f}", "CANVAS")
        self.view.zoom_factor = zoom
        self._notify_zoom()
        self._notify_view()
        return zoom

    def zoom_in(self) -> float:
        return self.set_zoom_factor(next_zoom_in(self.view.zoom_factor))

    def zoom_out(self) -> float:
        return self.set_zoom_factor(next_zoom_out(self.view.zoom_factor))

    def reset_pan(self) -> None:
        self.view.offset_x = 0
        self.view.offset_y = 0
        self._notify_view()

    def reset_zoom(self) -> None:
        """Actual size: zoom 1.0 and no pan."""
        self.set_zoom_factor(1.0)
        self.reset_pan()

    def set_viewport_size(self, width: int, height: int) -> None:
        """Record the size of the enclosing viewport for ``fit_to_window``."""
        self._viewport_size = (int(width), int(height))

    def fit_to_window(self, width: Optional[int] = None, height: Optional[int] = None) -> float:
        """Zoom so the base canvas fits the viewport, and reset pan."""
        if width is None or height is None:
            width, height = self._viewport_size
        zoom = self.set_zoom_factor(fit_zoom(width, height))
        self.reset_pan()
        return zoom

    def pan_by(self, dx: int, dy: int) -> None:
        self.view.offset_x += int(dx)
        self.view.offset_y += int(dy)
        self._notify_view()

    # ----------------------------
    # Configuration surface
    # ----------------------------

    def set_grid_size(self, size: int) -> None:
        self.view.grid_size = clamp_grid_size(size)
        self._notify_view()

    def set_snap_to_grid(self, enabled: bool) -> None:
        self.view.snap_to_grid = bool(enabled)

    def set_show_grid(self, enabled: bool) -> None:
        self.view.show_grid = bool(enabled)
        self._notify_view()

    def set_show_rulers(self, enabled: bool) -> None:
        self.view.show_rulers = bool(enabled)
        self._notify_view()

    def configure(
        self,
        zoom_factor: Optional[float] = None,
        grid_size: Optional[int] = None,
        snap_to_grid: Optional[bool] = None,
        show_grid: Optional[bool] = None,
        show_rulers: Optional[bool] = None,
    ) -> None:
        """Apply any subset of the configuration surface, clamping out-of-range values."""
        if grid_size is not None:
            self.set_grid_size(grid_size)
        if snap_to_grid is not None:
            self.set_snap_to_grid(snap_to_grid)
        if show_grid is not None:
            self.set_show_grid(show_grid)
        if show_rulers is not None:
            self.set_show_rulers(show_rulers)
        if zoom_factor is not None:
            self.set_zoom_factor(zoom_factor)

    # ----------------------------
    # Pointer input (screen coordinates)
    # ----------------------------

    def pointer_press(self, sx: float, sy: float, button: PointerButton = PointerButton.LEFT) -> None:
        if self.view.mode == InteractionMode.PAN:
            self._last_pan_point = (sx, sy)
            return

        px, py = screen_to_canvas(sx, sy, self.view)
        selected = self.selected_component()

        if selected is not None and selected.visible:
            handle = handle_at(selected.bounds, px, py)
            if handle != ResizeHandle.NONE:
                self.view.active_handle = handle
                self.gesture = Gesture.RESIZING
                self._set_cursor(HANDLE_CURSORS[handle])
                return

        self.view.active_handle = ResizeHandle.NONE
        self.gesture = Gesture.IDLE
        hit = hit_test(self.current_components(), px, py)
        if hit is not None:
            self._drag_offset = (px - hit.bounds.x, py - hit.bounds.y)
        else:
            self._drag_offset = None

        new_uid = hit.uid if hit is not None else None
        changed = new_uid != self.view.selected_uid
        self.view.selected_uid = new_uid
        if changed:
            self._notify_selection()
        self._notify_view()

    def pointer_drag(self, sx: float, sy: float, button: PointerButton = PointerButton.LEFT) -> None:
        if self.view.mode == InteractionMode.PAN:
            if self._last_pan_point is not None:
                lx, ly = self._last_pan_point
                self.view.offset_x += int(sx - lx)
                self.view.offset_y += int(sy - ly)
                self._last_pan_point = (sx, sy)
                self._notify_view()
            return

        selected = self.selected_component()
        if selected is None or button != PointerButton.LEFT:
            return

        px, py = screen_to_canvas(sx, sy, self.view)

        if self.gesture == Gesture.RESIZING and self.view.active_handle != ResizeHandle.NONE:
            selected.bounds = compute_resize(
                selected.bounds,
                self.view.active_handle,
                px,
                py,
                snap=self.view.snap_to_grid,
                grid_size=self.view.grid_size,
            )
        elif self._drag_offset is not None:
            self.gesture = Gesture.DRAGGING
            new_x = px - self._drag_offset[0]
            new_y = py - self._drag_offset[1]
            if self.view.snap_to_grid:
                new_x = snap_position(new_x, self.view.grid_size)
                new_y = snap_position(new_y, self.view.grid_size)
            selected.move_to(new_x, new_y)
        else:
            return

        self._notify_view()

    def pointer_release(self, sx: float = 0, sy: float = 0, button: PointerButton = PointerButton.LEFT) -> None:
        finished = self.gesture
        self.gesture = Gesture.IDLE
        self.view.active_handle = ResizeHandle.NONE
        self._drag_offset = None
        self._last_pan_point = None
        self._set_cursor(MODE_INFO[self.view.mode].cursor)
        if self.selected_component() is not None:
            if finished != Gesture.IDLE:
                trace(f"{finished.name.lower()} done -> {self.selected_component().bounds}", "CANVAS")
            self._notify_refresh()

    def pointer_move(self, sx: float, sy: float) -> None:
        """Hover without buttons: update the cursor for the handle under the pointer."""
        if self.view.mode == InteractionMode.PAN:
            self._set_cursor(MODE_INFO[InteractionMode.PAN].cursor)
            return
        selected = self.selected_component()
        if selected is None or not selected.visible:
            self._set_cursor(MODE_INFO[self.view.mode].cursor)
            return
        px, py = screen_to_canvas(sx, sy, self.view)
        self._set_cursor(HANDLE_CURSORS[handle_at(selected.bounds, px, py)])

    def wheel(self, sx: float, sy: float, delta: int, zoom_modifier: bool) -> bool:
        """Handle a wheel step.

        Args:
            sx, sy: Cursor position in screen space.
            delta: Wheel delta; positive zooms in.
            zoom_modifier: Whether the zoom modifier (Ctrl) is held.

        Returns:
            True if consumed; False means the event should go to the
            enclosing scroll area untouched.
        """
        if not zoom_modifier:
            return False
        if delta == 0:
            return True

        old_zoom = self.view.zoom_factor
        new_zoom = next_zoom_in(old_zoom) if delta > 0 else next_zoom_out(old_zoom)
        if new_zoom != old_zoom:
            self.view.offset_x, self.view.offset_y = zoom_toward(self.view, sx, sy, new_zoom)
            self.set_zoom_factor(new_zoom)
        return True

    # ----------------------------
    # Keyboard
    # ----------------------------

    def key_press(self, key: Key) -> bool:
        """Handle a key press.

        Returns:
            True if the key was consumed.
        """
        if key == Key.SPACE:
            self.toggle_mode()
            return True

        if self.view.mode == InteractionMode.PAN:
            step = _PAN_KEYS.get(key)
            if step is None:
                return False
            self.pan_by(*step)
            return True

        selected = self.selected_component()
        if selected is None:
            return False

        if key == Key.DELETE:
            self.delete_selected()
            return True

        step = _NUDGE.get(key)
        if step is None:
            return False
        selected.bounds = selected.bounds.translated(*step)
        self._notify_refresh()
        self._notify_view()
        return True

    # ----------------------------
    # Component operations
    # ----------------------------

    def drop_component(self, kind_name, sx: float, sy: float) -> Optional[PlacedComponent]:
        """Create a component of the dropped kind at a screen point and select it.

        Args:
            kind_name: A ``ComponentKind`` or any name ``resolve_kind_alias`` accepts.
            sx, sy: Drop position in screen space.

        Returns:
            The new component, or None if the kind is unknown or no screen is active.
        """
        kind = kind_name if isinstance(kind_name, ComponentKind) else resolve_kind_alias(kind_name)
        if kind is None:
            trace(f"drop ignored: unknown kind {kind_name!r}", "CANVAS")
            return None
        if self._screen is None:
            trace("drop ignored: no active screen", "CANVAS")
            return None

        px, py = screen_to_canvas(sx, sy, self.view)
        comp = PlacedComponent.create(kind, px, py)
        self._screen.add_component(comp)
        trace(f"drop {kind.name} at {px},{py}", "CANVAS")
        self.view.selected_uid = comp.uid
        self._notify_selection()
        self._notify_view()
        return comp

    def delete_selected(self) -> bool:
        selected = self.selected_component()
        if selected is None:
            return False
        self._screen.remove_component(selected)
        trace(f"delete {selected.kind.name} {selected.uid}", "CANVAS")
        self.view.selected_uid = None
        self.gesture = Gesture.IDLE
        self._drag_offset = None
        self._notify_selection()
        self._notify_view()
        return True

    def duplicate_selected(self) -> Optional[PlacedComponent]:
        """Copy the selection offset by (+20, +20) and select the copy."""
        selected = self.selected_component()
        if selected is None:
            return None
        copy = selected.duplicate()
        self._screen.add_component(copy)
        trace(f"duplicate {selected.uid} -> {copy.uid}", "CANVAS")
        self.view.selected_uid = copy.uid
        self._notify_selection()
        self._notify_view()
        return copy

    def refresh(self) -> None:
        """Request a repaint after an outside edit (e.g. the property panel)."""
        self._notify_view()
