"""
canvas/painter.py

Single-pass render of the design canvas onto a QPainter.

Draw order: background grid and components inside the pan/zoom
transform, then the selection outline and handles (still in canvas
space), then rulers and the mode/zoom overlays in fixed screen space.
"""

from __future__ import annotations

from typing import Optional, Sequence

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QFont, QFontMetrics, QPainter, QPen

from debug_trace import trace
from models import (
    HANDLE_SIZE,
    MODE_INFO,
    RULER_WIDTH,
    ComponentKind,
    InteractionMode,
    PlacedComponent,
)
from canvas.geometry import CanvasViewState, find_by_uid, handle_points, screen_to_canvas_f
from settings import get_settings
from utils import darker_rgb, hex_to_qcolor, rgb_to_qcolor


# =============================================================================
# Cached canvas settings - refreshed on demand, read on every paint.
# =============================================================================

class _CachedCanvasSettings:
    """Cache of the colors and spacing the render loop reads on every frame."""

    _instance = None

    def __init__(self):
        self._initialized = False
        # Default values
        self.grid_color = QColor("#E6E6E6")
        self.render_spacing = 10
        self.handle_border_color = QColor("#0000FF")
        self.handle_fill_color = QColor("#FFFFFF")
        self.selection_color = QColor("#0000FF")

    def _ensure_initialized(self):
        if self._initialized:
            return
        s = get_settings().settings.canvas
        self.grid_color = hex_to_qcolor(s.grid.color, self.grid_color)
        self.render_spacing = max(2, s.grid.render_spacing)
        self.handle_border_color = hex_to_qcolor(s.handles.border_color, self.handle_border_color)
        self.handle_fill_color = hex_to_qcolor(s.handles.fill_color, self.handle_fill_color)
        self.selection_color = hex_to_qcolor(s.selection.outline_color, self.selection_color)
        self._initialized = True

    @classmethod
    def get(cls) -> "_CachedCanvasSettings":
        if cls._instance is None:
            cls._instance = cls()
        cls._instance._ensure_initialized()
        return cls._instance

    @classmethod
    def invalidate(cls) -> None:
        """Re-read settings on the next paint (after the settings dialog saves)."""
        if cls._instance is not None:
            cls._instance._initialized = False


invalidate_render_settings = _CachedCanvasSettings.invalidate


PAN_MODE_COLOR = QColor(255, 140, 0, 200)
SELECTION_MODE_COLOR = QColor(50, 150, 50, 200)
OVERLAY_TEXT_COLOR = QColor(0, 0, 0, 150)
DISABLED_OVERLAY_COLOR = QColor(128, 128, 128, 100)
RULER_BG_COLOR = QColor(240, 240, 240)
CHECK_SIZE = 12


# ----------------------------
# Frame
# ----------------------------

def render_canvas(
    painter: QPainter,
    width: int,
    height: int,
    view: CanvasViewState,
    components: Sequence[PlacedComponent],
) -> None:
    """Draw one frame.

    Args:
        painter: Active painter on the canvas widget.
        width, height: Widget size in pixels.
        view: View state snapshot.
        components: Active screen components, bottom to top.
    """
    trace(f"render {width}x{height} zoom={view.zoom_factor:.2f} n={len(components)}", "PAINT")
    cfg = _CachedCanvasSettings.get()
    painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
    painter.fillRect(QRectF(0, 0, width, height), QColor(Qt.GlobalColor.white))

    inset = view.ruler_inset
    painter.save()
    painter.translate(view.offset_x + inset, view.offset_y + inset)
    painter.scale(view.zoom_factor, view.zoom_factor)

    if view.show_grid:
        draw_grid(painter, width, height, view, cfg.render_spacing, cfg.grid_color)

    for comp in components:
        draw_component(painter, comp)

    if view.mode == InteractionMode.SELECTION:
        selected = find_by_uid(components, view.selected_uid)
        if selected is not None and selected.visible:
            draw_selection(painter, selected, cfg)

    painter.restore()

    if view.show_rulers:
        draw_rulers(painter, width, height, view)

    draw_mode_info(painter, view.mode)
    draw_zoom_info(painter, width, view.zoom_factor)


def draw_grid(painter: QPainter, width: int, height: int, view: CanvasViewState,
              spacing: int, color: QColor) -> None:
    """Draw a fixed-spacing grid covering the visible part of the canvas.

    *spacing* is in canvas units and does not follow ``view.grid_size``.
    """
    x0, y0 = screen_to_canvas_f(0, 0, view)
    x1, y1 = screen_to_canvas_f(width, height, view)
    start_x = int(x0 // spacing) * spacing
    start_y = int(y0 // spacing) * spacing

    pen = QPen(color)
    pen.setCosmetic(True)
    painter.setPen(pen)
    x = start_x
    while x <= x1:
        painter.drawLine(QPointF(x, y0), QPointF(x, y1))
        x += spacing
    y = start_y
    while y <= y1:
        painter.drawLine(QPointF(x0, y), QPointF(x1, y))
        y += spacing


# ----------------------------
# Components
# ----------------------------

def draw_component(painter: QPainter, comp: PlacedComponent) -> None:
    if not comp.visible:
        return
    x, y, w, h = comp.bounds.as_tuple()
    rect = QRectF(x, y, w, h)

    fill = comp.background_color if comp.enabled else darker_rgb(comp.background_color)
    painter.fillRect(rect, rgb_to_qcolor(fill))
    painter.setPen(QPen(QColor(Qt.GlobalColor.black), 1))
    painter.setBrush(Qt.BrushStyle.NoBrush)
    painter.drawRect(rect)

    if comp.kind == ComponentKind.CHECK_BOX:
        _draw_check_box_glyph(painter, comp)

    if comp.text:
        _draw_text(painter, comp)

    if not comp.enabled:
        painter.fillRect(rect, DISABLED_OVERLAY_COLOR)


def _draw_check_box_glyph(painter: QPainter, comp: PlacedComponent) -> None:
    b = comp.bounds
    cx = b.x + 5
    cy = b.y + (b.height - CHECK_SIZE) // 2
    painter.fillRect(QRectF(cx, cy, CHECK_SIZE, CHECK_SIZE), QColor(Qt.GlobalColor.white))
    painter.setPen(QPen(QColor(Qt.GlobalColor.black), 1))
    painter.drawRect(QRectF(cx, cy, CHECK_SIZE, CHECK_SIZE))
    if comp.selected:
        painter.drawLine(QPointF(cx + 2, cy + 6), QPointF(cx + 5, cy + 9))
        painter.drawLine(QPointF(cx + 5, cy + 9), QPointF(cx + 10, cy + 4))


def _draw_text(painter: QPainter, comp: PlacedComponent) -> None:
    b = comp.bounds
    painter.setPen(QColor(Qt.GlobalColor.black) if comp.enabled else QColor(Qt.GlobalColor.gray))
    fm = painter.fontMetrics()
    if comp.kind == ComponentKind.CHECK_BOX:
        tx = b.x + 20
    else:
        tx = b.x + (b.width - fm.horizontalAdvance(comp.text)) // 2
    ty = b.y + (b.height + fm.ascent()) // 2
    painter.drawText(QPointF(tx, ty), comp.text)


# ----------------------------
# Selection
# ----------------------------

def draw_selection(painter: QPainter, comp: PlacedComponent, cfg: Optional[_CachedCanvasSettings] = None) -> None:
    """Outline the selection 2 units outside its bounds and draw the 8 handles."""
    cfg = cfg or _CachedCanvasSettings.get()
    b = comp.bounds
    painter.setPen(QPen(cfg.selection_color, 1))
    painter.setBrush(Qt.BrushStyle.NoBrush)
    painter.drawRect(QRectF(b.x - 2, b.y - 2, b.width + 4, b.height + 4))

    painter.setPen(QPen(cfg.handle_border_color, 1))
    painter.setBrush(QBrush(cfg.handle_fill_color))
    half = HANDLE_SIZE / 2
    for hx, hy in handle_points(b).values():
        painter.drawRect(QRectF(hx - half, hy - half, HANDLE_SIZE, HANDLE_SIZE))


# ----------------------------
# Screen-space chrome
# ----------------------------

def draw_rulers(painter: QPainter, width: int, height: int, view: CanvasViewState) -> None:
    """Top and left rulers in the inset band, labelled in canvas units."""
    painter.save()
    painter.fillRect(QRectF(0, 0, width, RULER_WIDTH), RULER_BG_COLOR)
    painter.fillRect(QRectF(0, 0, RULER_WIDTH, height), RULER_BG_COLOR)
    painter.setPen(QPen(QColor(Qt.GlobalColor.darkGray), 1))
    painter.setFont(QFont("Sans Serif", 7))

    zoom = view.zoom_factor
    # 10-unit minor ticks, labelled every 100 units
    x0, y0 = screen_to_canvas_f(RULER_WIDTH, RULER_WIDTH, view)
    x1, y1 = screen_to_canvas_f(width, height, view)

    tick = int(x0 // 10) * 10
    while tick <= x1:
        sx = tick * zoom + view.offset_x + RULER_WIDTH
        if sx >= RULER_WIDTH:
            major = tick % 100 == 0
            painter.drawLine(QPointF(sx, RULER_WIDTH), QPointF(sx, RULER_WIDTH - (10 if major else 4)))
            if major:
                painter.drawText(QPointF(sx + 2, 9), str(tick))
        tick += 10

    tick = int(y0 // 10) * 10
    while tick <= y1:
        sy = tick * zoom + view.offset_y + RULER_WIDTH
        if sy >= RULER_WIDTH:
            major = tick % 100 == 0
            painter.drawLine(QPointF(RULER_WIDTH, sy), QPointF(RULER_WIDTH - (10 if major else 4), sy))
            if major:
                painter.drawText(QPointF(1, sy - 2), str(tick))
        tick += 10

    painter.drawLine(QPointF(RULER_WIDTH, RULER_WIDTH), QPointF(width, RULER_WIDTH))
    painter.drawLine(QPointF(RULER_WIDTH, RULER_WIDTH), QPointF(RULER_WIDTH, height))
    painter.restore()


def draw_mode_info(painter: QPainter, mode: InteractionMode) -> None:
    info = MODE_INFO[mode]
    painter.save()
    title_font = QFont("Sans Serif", 12)
    title_font.setBold(True)
    painter.setFont(title_font)
    text_width = QFontMetrics(title_font).horizontalAdvance(info.display_name)

    painter.setPen(Qt.PenStyle.NoPen)
    painter.setBrush(PAN_MODE_COLOR if mode == InteractionMode.PAN else SELECTION_MODE_COLOR)
    painter.drawRoundedRect(QRectF(10, 10, text_width + 20, 25), 4, 4)
    painter.setPen(QColor(Qt.GlobalColor.white))
    painter.drawText(QPointF(20, 28), info.display_name)

    painter.setPen(OVERLAY_TEXT_COLOR)
    painter.setFont(QFont("Sans Serif", 10))
    painter.drawText(QPointF(20, 50), info.description)
    painter.restore()


def zoom_label(zoom: float) -> str:
    return f"Zoom: {zoom * 100:.0f}%"


def draw_zoom_info(painter: QPainter, width: int, zoom: float) -> None:
    text = zoom_label(zoom)
    painter.save()
    font = QFont("Sans Serif", 12)
    font.setBold(True)
    painter.setFont(font)
    text_width = QFontMetrics(font).horizontalAdvance(text)

    painter.setPen(Qt.PenStyle.NoPen)
    painter.setBrush(OVERLAY_TEXT_COLOR)
    painter.drawRoundedRect(QRectF(width - text_width - 20, 10, text_width + 15, 20), 2.5, 2.5)
    painter.setPen(QColor(Qt.GlobalColor.white))
    painter.drawText(QPointF(width - text_width - 12, 25), text)
    painter.restore()
