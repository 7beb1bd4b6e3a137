"""
models.py

Data models and constants for the Screen Designer application.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional, Tuple


RGB = Tuple[int, int, int]

LIGHT_GRAY: RGB = (192, 192, 192)
WHITE: RGB = (255, 255, 255)


# ----------------------------
# Canvas constants
# ----------------------------

MIN_SIZE = 20            # smallest width/height a component can be resized to
HANDLE_SIZE = 8          # resize handle square, canvas units
NUDGE_STEP = 10          # arrow-key move, canvas units
PAN_KEY_STEP = 20        # arrow-key pan, screen pixels
RULER_WIDTH = 20         # ruler band inset when rulers are shown
DUPLICATE_OFFSET = 20    # offset applied to duplicated components

MIN_ZOOM = 0.25
MAX_ZOOM = 4.0
ZOOM_STEP = 0.25

DEFAULT_GRID_SIZE = 10
RENDER_GRID_SPACING = 10  # background grid spacing, independent of the snap grid

BASE_CANVAS_WIDTH = 800
BASE_CANVAS_HEIGHT = 600

# Drag payload type used by the palette and accepted by the canvas
KIND_MIME_TYPE = "application/x-screendesigner-kind"


def clamp_zoom(zoom: float) -> float:
    """Clamp a requested zoom factor to ``[MIN_ZOOM, MAX_ZOOM]``.

    NaN falls back to 1.0.
    """
    zoom = float(zoom)
    if math.isnan(zoom):
        return 1.0
    return max(MIN_ZOOM, min(MAX_ZOOM, zoom))


def clamp_grid_size(size: int) -> int:
    """Clamp a grid size to at least 1."""
    return max(1, int(size))


# ----------------------------
# Component kinds
# ----------------------------

class ComponentKind(Enum):
    """Closed set of widget kinds that can be placed on a screen."""
    BUTTON = "Button"
    LABEL = "Label"
    TEXT_FIELD = "TextField"
    CHECK_BOX = "CheckBox"
    PANEL = "Panel"
    COMBO_BOX = "ComboBox"
    LIST = "List"
    TEXT_AREA = "TextArea"

    @property
    def display_name(self) -> str:
        return self.value


@dataclass(frozen=True)
class KindSpec:
    """Per-kind defaults and capability flags.

    Attributes:
        width, height: Size given to a freshly created component.
        text: Default display text.
        background: Default fill color.
        qt_class: PyQt6 widget class used by code generation and preview.
        var_prefix: Variable name prefix used by code generation.
        has_editable, has_selected, has_columns: Which kind-specific
            attributes are meaningful for this kind.
    """
    width: int
    height: int
    text: str
    background: RGB
    qt_class: str
    var_prefix: str
    has_editable: bool = False
    has_selected: bool = False
    has_columns: bool = False


KIND_SPECS: Dict[ComponentKind, KindSpec] = {
    ComponentKind.BUTTON:     KindSpec(100, 30, "Button", LIGHT_GRAY, "QPushButton", "button"),
    ComponentKind.LABEL:      KindSpec(100, 30, "Label", LIGHT_GRAY, "QLabel", "label"),
    ComponentKind.TEXT_FIELD: KindSpec(120, 25, "TextField", LIGHT_GRAY, "QLineEdit", "textfield",
                                       has_editable=True, has_columns=True),
    ComponentKind.CHECK_BOX:  KindSpec(100, 30, "CheckBox", LIGHT_GRAY, "QCheckBox", "checkbox",
                                       has_selected=True),
    ComponentKind.PANEL:      KindSpec(150, 100, "Panel", WHITE, "QGroupBox", "panel"),
    ComponentKind.COMBO_BOX:  KindSpec(100, 30, "ComboBox", LIGHT_GRAY, "QComboBox", "combobox"),
    ComponentKind.LIST:       KindSpec(100, 30, "List", LIGHT_GRAY, "QListWidget", "list"),
    ComponentKind.TEXT_AREA:  KindSpec(100, 30, "TextArea", LIGHT_GRAY, "QTextEdit", "textarea"),
}


# ----------------------------
# External name -> kind alias mapping
# ----------------------------

# Drop payloads and older palettes may name a kind by its Swing or Qt widget
# class instead of the display name.  Keys are lower-case.
KIND_ALIAS_MAP: Dict[str, ComponentKind] = {
    # ── Display names ──
    "button":      ComponentKind.BUTTON,
    "label":       ComponentKind.LABEL,
    "textfield":   ComponentKind.TEXT_FIELD,
    "checkbox":    ComponentKind.CHECK_BOX,
    "panel":       ComponentKind.PANEL,
    "combobox":    ComponentKind.COMBO_BOX,
    "list":        ComponentKind.LIST,
    "textarea":    ComponentKind.TEXT_AREA,
    # ── Swing classes ──
    "jbutton":     ComponentKind.BUTTON,
    "jlabel":      ComponentKind.LABEL,
    "jtextfield":  ComponentKind.TEXT_FIELD,
    "jcheckbox":   ComponentKind.CHECK_BOX,
    "jpanel":      ComponentKind.PANEL,
    "jcombobox":   ComponentKind.COMBO_BOX,
    "jlist":       ComponentKind.LIST,
    "jtextarea":   ComponentKind.TEXT_AREA,
    # ── Qt classes ──
    "qpushbutton": ComponentKind.BUTTON,
    "qlabel":      ComponentKind.LABEL,
    "qlineedit":   ComponentKind.TEXT_FIELD,
    "qcheckbox":   ComponentKind.CHECK_BOX,
    "qgroupbox":   ComponentKind.PANEL,
    "qframe":      ComponentKind.PANEL,
    "qcombobox":   ComponentKind.COMBO_BOX,
    "qlistwidget": ComponentKind.LIST,
    "qtextedit":   ComponentKind.TEXT_AREA,
}


def resolve_kind_alias(name: str, fallback: Optional[ComponentKind] = None) -> Optional[ComponentKind]:
    """Resolve an external widget name to a ``ComponentKind``.

    Args:
        name: Display name, enum member name, or Swing/Qt class name
            (case-insensitive, underscores ignored).
        fallback: Kind to return if nothing matches.

    Returns:
        The matching kind, or *fallback*.
    """
    if not isinstance(name, str):
        return fallback
    key = name.strip().lower().replace("_", "")
    return KIND_ALIAS_MAP.get(key, fallback)


# ----------------------------
# Bounds value type
# ----------------------------

@dataclass(frozen=True)
class Bounds:
    """Integer rectangle in canvas space.  Replaced wholesale, never mutated."""
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def contains(self, px: int, py: int) -> bool:
        """Half-open containment: the right and bottom edges are outside."""
        return self.x <= px < self.right and self.y <= py < self.bottom

    def moved_to(self, x: int, y: int) -> "Bounds":
        return replace(self, x=int(x), y=int(y))

    def resized_to(self, width: int, height: int) -> "Bounds":
        return replace(self, width=int(width), height=int(height))

    def translated(self, dx: int, dy: int) -> "Bounds":
        return replace(self, x=self.x + int(dx), y=self.y + int(dy))

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)


def _new_uid() -> str:
    return uuid.uuid4().hex[:12]


# ----------------------------
# Placed component
# ----------------------------

@dataclass(eq=False)
class PlacedComponent:
    """One design-time placeholder on a screen.

    ``editable`` and ``columns`` only matter for text fields and
    ``selected`` only for check boxes, but every component carries them.
    Identity equality: two components with identical fields are still
    different components.
    """
    kind: ComponentKind
    bounds: Bounds
    text: str = ""
    background_color: RGB = LIGHT_GRAY
    visible: bool = True
    enabled: bool = True
    editable: bool = True
    selected: bool = False
    columns: int = 10
    uid: str = field(default_factory=_new_uid)

    @classmethod
    def create(cls, kind: ComponentKind, x: int, y: int) -> "PlacedComponent":
        """Create a component of *kind* at canvas point ``(x, y)`` with kind defaults."""
        spec = KIND_SPECS[kind]
        return cls(
            kind=kind,
            bounds=Bounds(int(x), int(y), spec.width, spec.height),
            text=spec.text,
            background_color=spec.background,
        )

    @property
    def spec(self) -> KindSpec:
        return KIND_SPECS[self.kind]

    def move_to(self, x: int, y: int) -> None:
        self.bounds = self.bounds.moved_to(x, y)

    def resize_to(self, width: int, height: int) -> None:
        self.bounds = self.bounds.resized_to(width, height)

    def set_bounds(self, x: int, y: int, width: int, height: int) -> None:
        self.bounds = Bounds(int(x), int(y), int(width), int(height))

    def duplicate(self, dx: int = DUPLICATE_OFFSET, dy: int = DUPLICATE_OFFSET) -> "PlacedComponent":
        """Return a copy with a fresh uid, offset by ``(dx, dy)``."""
        return replace(self, bounds=self.bounds.translated(dx, dy), uid=_new_uid())


# ----------------------------
# Interaction modes
# ----------------------------

class InteractionMode(Enum):
    SELECTION = "selection"
    PAN = "pan"


@dataclass(frozen=True)
class ModeInfo:
    display_name: str
    description: str
    cursor: str  # toolkit-neutral cursor name, mapped to a real cursor by the view


MODE_INFO: Dict[InteractionMode, ModeInfo] = {
    InteractionMode.SELECTION: ModeInfo("Selection Mode", "Select, move, and resize components", "arrow"),
    InteractionMode.PAN:       ModeInfo("Pan Mode", "Pan around the canvas", "move"),
}


class ResizeHandle(Enum):
    NONE = "none"
    NW = "nw"
    N = "n"
    NE = "ne"
    E = "e"
    SE = "se"
    S = "s"
    SW = "sw"
    W = "w"


HANDLE_CURSORS: Dict[ResizeHandle, str] = {
    ResizeHandle.NONE: "arrow",
    ResizeHandle.NW: "size_fdiag",
    ResizeHandle.SE: "size_fdiag",
    ResizeHandle.NE: "size_bdiag",
    ResizeHandle.SW: "size_bdiag",
    ResizeHandle.N: "size_ver",
    ResizeHandle.S: "size_ver",
    ResizeHandle.E: "size_hor",
    ResizeHandle.W: "size_hor",
}
