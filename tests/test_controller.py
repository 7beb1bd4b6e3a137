"""Tests for the canvas interaction state machine (canvas/controller.py).

The controller has no Qt dependency, so these run without a QApplication.
"""
from __future__ import annotations

import pytest

from models import Bounds, ComponentKind, InteractionMode, PlacedComponent, ResizeHandle
from canvas.controller import CanvasController, Gesture, Key, PointerButton
from canvas.geometry import canvas_to_screen, screen_to_canvas
from project.store import DesignScreen


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

class Recorder:
    """Collects every callback the controller fires."""

    def __init__(self, controller: CanvasController):
        self.selections = []
        self.refreshes = 0
        self.modes = []
        self.views = 0
        self.zooms = []
        self.cursors = []
        controller.set_selection_changed_callback(self.selections.append)
        controller.set_properties_refresh_callback(self._refresh)
        controller.set_mode_changed_callback(self.modes.append)
        controller.set_view_changed_callback(self._view)
        controller.set_zoom_changed_callback(self.zooms.append)
        controller.set_cursor_changed_callback(self.cursors.append)

    def _refresh(self):
        self.refreshes += 1

    def _view(self):
        self.views += 1


@pytest.fixture()
def screen():
    return DesignScreen("Main Screen")


@pytest.fixture()
def ctl(screen):
    return CanvasController(screen)


@pytest.fixture()
def rec(ctl):
    return Recorder(ctl)


def place(screen: DesignScreen, kind=ComponentKind.BUTTON, x=50, y=50) -> PlacedComponent:
    comp = PlacedComponent.create(kind, x, y)
    screen.add_component(comp)
    return comp


# ─────────────────────────────────────────────────────────
# Drop / insertion
# ─────────────────────────────────────────────────────────


class TestDrop:
    def test_button_at_50_50(self, ctl, screen, rec):
        comp = ctl.drop_component("Button", 50, 50)
        assert comp.bounds == Bounds(50, 50, 100, 30)
        assert screen.components == [comp]
        assert ctl.selected_component() is comp
        assert rec.selections == [comp]

    def test_drop_accepts_kind_enum(self, ctl):
        comp = ctl.drop_component(ComponentKind.PANEL, 0, 0)
        assert comp.kind is ComponentKind.PANEL

    def test_drop_accepts_alias(self, ctl):
        assert ctl.drop_component("JCheckBox", 0, 0).kind is ComponentKind.CHECK_BOX

    def test_drop_converts_screen_to_canvas(self, ctl):
        ctl.set_zoom_factor(2.0)
        ctl.pan_by(10, 10)
        comp = ctl.drop_component("Label", 110, 110)
        assert (comp.bounds.x, comp.bounds.y) == (50, 50)

    def test_drop_with_rulers_subtracts_inset(self, ctl):
        ctl.set_show_rulers(True)
        comp = ctl.drop_component("Label", 70, 70)
        assert (comp.bounds.x, comp.bounds.y) == (50, 50)

    def test_unknown_kind_ignored(self, ctl, screen, rec):
        assert ctl.drop_component("Slider", 10, 10) is None
        assert screen.components == []
        assert rec.selections == []

    def test_no_screen_ignored(self):
        ctl = CanvasController()
        assert ctl.drop_component("Button", 10, 10) is None
        assert ctl.current_components() == []

    def test_dropped_component_is_on_top(self, ctl, screen):
        first = ctl.drop_component("Button", 50, 50)
        second = ctl.drop_component("Button", 50, 50)
        assert screen.components == [first, second]


# ─────────────────────────────────────────────────────────
# Selection
# ─────────────────────────────────────────────────────────


class TestSelection:
    def test_overlap_selects_last_added(self, ctl, screen):
        a = place(screen)
        b = place(screen)
        ctl.pointer_press(60, 60)
        assert ctl.selected_component() is b
        assert ctl.selected_component() is not a

    def test_miss_clears_selection(self, ctl, screen, rec):
        comp = place(screen)
        ctl.select(comp)
        ctl.pointer_press(700, 500)
        assert ctl.selected_component() is None
        assert rec.selections[-1] is None

    def test_reselecting_same_component_does_not_notify(self, ctl, screen, rec):
        place(screen)
        ctl.pointer_press(60, 60)
        ctl.pointer_release(60, 60)
        ctl.pointer_press(61, 61)
        assert len(rec.selections) == 1

    def test_hidden_component_not_selectable(self, ctl, screen):
        comp = place(screen)
        comp.visible = False
        ctl.pointer_press(60, 60)
        assert ctl.selected_component() is None

    def test_set_screen_clears_selection(self, ctl, screen, rec):
        place(screen)
        ctl.pointer_press(60, 60)
        other = DesignScreen("Other")
        ctl.set_screen(other)
        assert ctl.selected_component() is None
        assert rec.selections[-1] is None
        assert ctl.current_components() == []

    def test_current_components_is_a_snapshot(self, ctl, screen):
        place(screen)
        snapshot = ctl.current_components()
        snapshot.clear()
        assert len(screen.components) == 1


# ─────────────────────────────────────────────────────────
# Move
# ─────────────────────────────────────────────────────────


class TestMove:
    @pytest.mark.parametrize("dx,dy", [(0, 0), (13, 7), (-21, 4), (100, -45)])
    def test_drag_without_snap_moves_by_delta(self, ctl, screen, dx, dy):
        comp = place(screen, x=53, y=47)
        ctl.set_snap_to_grid(False)
        ctl.pointer_press(60, 60)
        ctl.pointer_drag(60 + dx, 60 + dy)
        assert (comp.bounds.x, comp.bounds.y) == (53 + dx, 47 + dy)
        assert comp.bounds.width == 100 and comp.bounds.height == 30

    @pytest.mark.parametrize("grid", [1, 7, 10, 25])
    def test_drag_with_snap_lands_on_grid(self, ctl, screen, grid):
        comp = place(screen)
        ctl.set_grid_size(grid)
        ctl.pointer_press(55, 55)
        ctl.pointer_drag(78, 91)
        assert comp.bounds.x % grid == 0
        assert comp.bounds.y % grid == 0

    def test_snap_floors_position(self, ctl, screen):
        comp = place(screen)
        ctl.pointer_press(55, 55)
        ctl.pointer_drag(78, 91)
        assert (comp.bounds.x, comp.bounds.y) == (70, 80)

    def test_drag_at_zoom_uses_canvas_units(self, ctl, screen):
        comp = place(screen)
        ctl.set_snap_to_grid(False)
        ctl.set_zoom_factor(2.0)
        ctl.pointer_press(110, 110)    # canvas (55, 55)
        ctl.pointer_drag(150, 130)     # canvas (75, 65)
        assert (comp.bounds.x, comp.bounds.y) == (70, 60)

    def test_drag_enters_dragging_and_release_refreshes(self, ctl, screen, rec):
        place(screen)
        ctl.pointer_press(60, 60)
        ctl.pointer_drag(70, 70)
        assert ctl.gesture == Gesture.DRAGGING
        ctl.pointer_release(70, 70)
        assert ctl.gesture == Gesture.IDLE
        assert rec.refreshes == 1

    def test_right_button_drag_ignored(self, ctl, screen):
        comp = place(screen)
        ctl.pointer_press(60, 60, PointerButton.RIGHT)
        ctl.pointer_drag(200, 200, PointerButton.RIGHT)
        assert comp.bounds == Bounds(50, 50, 100, 30)

    def test_drag_after_miss_does_nothing(self, ctl, screen):
        comp = place(screen)
        ctl.pointer_press(700, 500)
        ctl.pointer_drag(60, 60)
        assert comp.bounds == Bounds(50, 50, 100, 30)

    def test_release_without_selection_does_not_refresh(self, ctl, rec):
        ctl.pointer_press(10, 10)
        ctl.pointer_release(10, 10)
        assert rec.refreshes == 0


# ─────────────────────────────────────────────────────────
# Resize
# ─────────────────────────────────────────────────────────


class TestResize:
    def test_se_drag_past_origin_clamps_to_min(self, ctl, screen):
        comp = ctl.drop_component("Button", 50, 50)
        ctl.pointer_press(150, 80)
        assert ctl.gesture == Gesture.RESIZING
        assert ctl.view.active_handle == ResizeHandle.SE
        ctl.pointer_drag(40, 40)
        assert comp.bounds == Bounds(50, 50, 20, 20)

    def test_handle_hit_outside_bounds_keeps_selection(self, ctl, screen):
        comp = ctl.drop_component("Button", 50, 50)
        ctl.pointer_press(153, 83)
        assert ctl.selected_component() is comp
        assert ctl.gesture == Gesture.RESIZING

    def test_handle_hit_in_canvas_space_when_zoomed(self, ctl, screen):
        comp = place(screen)
        ctl.select(comp)
        ctl.set_zoom_factor(2.0)
        ctl.pointer_press(301, 161)    # canvas (150, 80): SE corner
        assert ctl.view.active_handle == ResizeHandle.SE

    def test_handles_only_for_selected(self, ctl, screen):
        place(screen)
        ctl.pointer_press(150, 80)  # would be SE, but nothing selected yet
        assert ctl.gesture == Gesture.IDLE
        assert ctl.selected_component() is None

    def test_nw_resize_with_snap(self, ctl, screen):
        comp = place(screen)
        ctl.select(comp)
        ctl.pointer_press(50, 50)
        ctl.pointer_drag(33, 27)
        # x 33 -> 30, y 27 -> 20; width 117 -> 120, height 53 -> 50
        assert comp.bounds == Bounds(30, 20, 120, 50)

    def test_release_resets_handle_and_cursor(self, ctl, screen, rec):
        comp = place(screen)
        ctl.select(comp)
        ctl.pointer_press(150, 80)
        assert rec.cursors[-1] == "size_fdiag"
        ctl.pointer_release(150, 80)
        assert ctl.view.active_handle == ResizeHandle.NONE
        assert rec.cursors[-1] == "arrow"
        assert rec.refreshes == 1

    @pytest.mark.parametrize("start", [(50, 50), (100, 50), (150, 50), (150, 65),
                                       (150, 80), (100, 80), (50, 80), (50, 65)])
    @pytest.mark.parametrize("target", [(-300, -300), (0, 0), (100, 65), (900, 900)])
    def test_no_handle_shrinks_below_min(self, ctl, screen, start, target):
        comp = place(screen)
        ctl.select(comp)
        ctl.pointer_press(*start)
        ctl.pointer_drag(*target)
        assert comp.bounds.width >= 20
        assert comp.bounds.height >= 20

    def test_hidden_selection_has_no_handles(self, ctl, screen):
        comp = ctl.drop_component("Button", 50, 50)
        comp.visible = False
        ctl.pointer_press(150, 80)
        assert ctl.gesture == Gesture.IDLE
        assert ctl.view.active_handle == ResizeHandle.NONE
        ctl.pointer_drag(250, 150)
        assert comp.bounds == Bounds(50, 50, 100, 30)

    def test_hidden_selection_hover_keeps_arrow(self, ctl, screen, rec):
        comp = ctl.drop_component("Button", 50, 50)
        comp.visible = False
        ctl.pointer_move(150, 80)
        assert rec.cursors[-1] == "arrow"


# ─────────────────────────────────────────────────────────
# Modes and pan
# ─────────────────────────────────────────────────────────


class TestModes:
    def test_space_toggles(self, ctl, rec):
        assert ctl.key_press(Key.SPACE)
        assert ctl.mode == InteractionMode.PAN
        assert ctl.key_press(Key.SPACE)
        assert ctl.mode == InteractionMode.SELECTION
        assert rec.modes == [InteractionMode.PAN, InteractionMode.SELECTION]

    @pytest.mark.parametrize("preselect", [True, False])
    def test_pan_always_clears_selection(self, ctl, screen, rec, preselect):
        comp = place(screen)
        if preselect:
            ctl.select(comp)
        ctl.set_mode(InteractionMode.PAN)
        assert ctl.selected_component() is None
        assert ctl.view.selected_uid is None
        assert rec.selections[-1] is None

    def test_pan_press_does_not_select(self, ctl, screen):
        place(screen)
        ctl.set_mode(InteractionMode.PAN)
        ctl.pointer_press(60, 60)
        assert ctl.selected_component() is None

    def test_pan_drag_translates_by_delta(self, ctl, screen):
        comp = place(screen)
        ctl.set_mode(InteractionMode.PAN)
        ctl.pointer_press(100, 100)
        ctl.pointer_drag(130, 90)
        ctl.pointer_drag(135, 95)
        assert (ctl.view.offset_x, ctl.view.offset_y) == (35, -5)
        assert comp.bounds == Bounds(50, 50, 100, 30)

    def test_pan_drag_without_press_ignored(self, ctl):
        ctl.set_mode(InteractionMode.PAN)
        ctl.pointer_drag(130, 90)
        assert (ctl.view.offset_x, ctl.view.offset_y) == (0, 0)

    def test_pan_cursor(self, ctl, rec):
        ctl.set_mode(InteractionMode.PAN)
        assert rec.cursors[-1] == "move"
        ctl.pointer_move(10, 10)
        assert rec.cursors[-1] == "move"

    def test_hover_cursor_over_handles(self, ctl, screen, rec):
        comp = place(screen)
        ctl.select(comp)
        ctl.pointer_move(150, 65)
        assert rec.cursors[-1] == "size_hor"
        ctl.pointer_move(100, 50)
        assert rec.cursors[-1] == "size_ver"
        ctl.pointer_move(80, 60)
        assert rec.cursors[-1] == "arrow"


# ─────────────────────────────────────────────────────────
# Keyboard
# ─────────────────────────────────────────────────────────


class TestKeyboard:
    @pytest.mark.parametrize("key,expected", [
        (Key.LEFT, (45, 55)), (Key.RIGHT, (65, 55)), (Key.UP, (55, 45)), (Key.DOWN, (55, 65)),
    ])
    def test_nudge_by_ten_without_snap(self, ctl, screen, rec, key, expected):
        comp = place(screen, x=55, y=55)
        ctl.select(comp)
        assert ctl.key_press(key)
        assert (comp.bounds.x, comp.bounds.y) == expected
        assert rec.refreshes == 1

    def test_arrows_without_selection_not_consumed(self, ctl, screen):
        place(screen)
        assert not ctl.key_press(Key.RIGHT)

    def test_delete_removes_and_clears(self, ctl, screen, rec):
        keep = place(screen, x=300, y=300)
        comp = place(screen)
        ctl.select(comp)
        assert ctl.key_press(Key.DELETE)
        assert screen.components == [keep]
        assert ctl.selected_component() is None
        assert rec.selections[-1] is None

    def test_delete_without_selection_not_consumed(self, ctl):
        assert not ctl.key_press(Key.DELETE)

    @pytest.mark.parametrize("key,expected", [
        (Key.LEFT, (20, 0)), (Key.RIGHT, (-20, 0)), (Key.UP, (0, 20)), (Key.DOWN, (0, -20)),
    ])
    def test_pan_keys_move_content(self, ctl, key, expected):
        ctl.set_mode(InteractionMode.PAN)
        assert ctl.key_press(key)
        assert (ctl.view.offset_x, ctl.view.offset_y) == expected

    def test_delete_in_pan_mode_not_consumed(self, ctl, screen):
        place(screen)
        ctl.set_mode(InteractionMode.PAN)
        assert not ctl.key_press(Key.DELETE)
        assert len(screen.components) == 1


# ─────────────────────────────────────────────────────────
# Zoom
# ─────────────────────────────────────────────────────────


class TestZoom:
    def test_set_zoom_clamps_low(self, ctl):
        assert ctl.set_zoom_factor(0.1) == 0.25
        assert ctl.zoom_factor == 0.25

    def test_set_zoom_clamps_high(self, ctl):
        assert ctl.set_zoom_factor(10) == 4.0

    def test_set_zoom_not_quantized(self, ctl):
        assert ctl.set_zoom_factor(1.1) == pytest.approx(1.1)

    def test_zoom_in_out_quantized(self, ctl, rec):
        ctl.set_zoom_factor(1.1)
        assert ctl.zoom_in() == 1.25
        assert ctl.zoom_out() == 1.0
        assert ctl.zoom_out() == 0.75
        assert rec.zooms[-3:] == [1.25, 1.0, 0.75]

    def test_zoom_limits(self, ctl):
        for _ in range(30):
            ctl.zoom_in()
        assert ctl.zoom_factor == 4.0
        for _ in range(30):
            ctl.zoom_out()
        assert ctl.zoom_factor == 0.25

    def test_wheel_without_modifier_is_forwarded(self, ctl):
        assert ctl.wheel(400, 300, 120, False) is False
        assert ctl.zoom_factor == 1.0

    def test_wheel_zooms_toward_cursor(self, ctl):
        assert ctl.wheel(400, 300, 120, True) is True
        assert ctl.zoom_factor == 1.25
        assert (ctl.view.offset_x, ctl.view.offset_y) == (-100, -75)

    def test_wheel_keeps_point_under_cursor(self, ctl):
        ctl.pan_by(17, -9)
        for delta in (120, 120, -120, 120, -120, -120, -120):
            before = screen_to_canvas(333, 222, ctl.view)
            ctl.wheel(333, 222, delta, True)
            sx, sy = canvas_to_screen(*before, ctl.view)
            assert abs(sx - 333) <= 1 + ctl.zoom_factor
            assert abs(sy - 222) <= 1 + ctl.zoom_factor

    def test_wheel_at_limit_keeps_offset(self, ctl):
        ctl.set_zoom_factor(4.0)
        assert ctl.wheel(400, 300, 120, True)
        assert (ctl.view.offset_x, ctl.view.offset_y) == (0, 0)

    def test_fit_to_window(self, ctl):
        ctl.pan_by(40, 40)
        assert ctl.fit_to_window(800, 600) == pytest.approx(0.9)
        assert (ctl.view.offset_x, ctl.view.offset_y) == (0, 0)

    def test_fit_uses_recorded_viewport(self, ctl):
        ctl.set_viewport_size(1600, 1200)
        assert ctl.fit_to_window() == pytest.approx(1.8)

    def test_reset_zoom(self, ctl):
        ctl.set_zoom_factor(2.5)
        ctl.pan_by(10, 20)
        ctl.reset_zoom()
        assert ctl.zoom_factor == 1.0
        assert (ctl.view.offset_x, ctl.view.offset_y) == (0, 0)


# ─────────────────────────────────────────────────────────
# Configuration surface and duplicate
# ─────────────────────────────────────────────────────────


class TestConfiguration:
    def test_configure_clamps(self, ctl):
        ctl.configure(zoom_factor=0.1, grid_size=0, snap_to_grid=False, show_grid=False, show_rulers=True)
        v = ctl.view
        assert v.zoom_factor == 0.25
        assert v.grid_size == 1
        assert (v.snap_to_grid, v.show_grid, v.show_rulers) == (False, False, True)

    def test_configure_partial(self, ctl):
        ctl.configure(grid_size=25)
        assert ctl.view.grid_size == 25
        assert ctl.view.zoom_factor == 1.0
        assert ctl.view.snap_to_grid is True


class TestDuplicate:
    def test_duplicate_selected(self, ctl, screen):
        comp = ctl.drop_component("Button", 50, 50)
        copy = ctl.duplicate_selected()
        assert copy.bounds == Bounds(70, 70, 100, 30)
        assert screen.components == [comp, copy]
        assert ctl.selected_component() is copy

    def test_duplicate_without_selection(self, ctl):
        assert ctl.duplicate_selected() is None
