"""
codegen/generator.py

Generate a standalone PyQt6 module that rebuilds a screen's components
with absolute geometry.
"""

from __future__ import annotations

import logging
import re
from typing import List, Sequence

from models import ComponentKind, PlacedComponent

logger = logging.getLogger(__name__)

COMBO_ITEMS = ["Option 1", "Option 2", "Option 3"]
LIST_ITEMS = ["Item 1", "Item 2", "Item 3", "Item 4"]
TEXT_AREA_COLUMNS = 20
DEFAULT_COLUMNS = 10

INDENT = "    "


def variable_name(component: PlacedComponent, index: int) -> str:
    """Variable name for the component at *index*: kind prefix plus 1-based index."""
    return f"{component.spec.var_prefix}{index + 1}"


def class_name_for(screen_name: str) -> str:
    """Turn a screen name into a valid CamelCase class name."""
    words = re.findall(r"[A-Za-z0-9]+", screen_name or "")
    name = "".join(w[:1].upper() + w[1:] for w in words)
    if not name:
        return "GeneratedForm"
    if name[0].isdigit():
        name = "Screen" + name
    return name


def _property_lines(comp: PlacedComponent, var: str) -> List[str]:
    """Statements for the non-default properties of one component."""
    target = f"self.{var}"
    lines: List[str] = []

    if comp.kind == ComponentKind.COMBO_BOX:
        lines.append(f"{target}.addItems({COMBO_ITEMS!r})")
    elif comp.kind == ComponentKind.LIST:
        lines.append(f"{target}.addItems({LIST_ITEMS!r})")
    elif comp.kind == ComponentKind.TEXT_AREA:
        lines.append(f"{target}.setLineWrapMode(QTextEdit.LineWrapMode.FixedColumnWidth)")
        lines.append(f"{target}.setLineWrapColumnOrWidth({TEXT_AREA_COLUMNS})")
        if comp.text:
            lines.append(f"{target}.setPlainText({comp.text!r})")
    elif comp.kind == ComponentKind.PANEL:
        if comp.text:
            lines.append(f"{target}.setTitle({comp.text!r})")
    elif comp.text:
        lines.append(f"{target}.setText({comp.text!r})")

    if not comp.enabled:
        lines.append(f"{target}.setEnabled(False)")
    if not comp.visible:
        lines.append(f"{target}.setVisible(False)")

    if comp.kind == ComponentKind.TEXT_FIELD and not comp.editable:
        lines.append(f"{target}.setReadOnly(True)")
    if comp.kind == ComponentKind.CHECK_BOX and comp.selected:
        lines.append(f"{target}.setChecked(True)")
    if comp.kind == ComponentKind.TEXT_FIELD and comp.columns != DEFAULT_COLUMNS:
        lines.append(
            f"{target}.setMinimumWidth({target}.fontMetrics().averageCharWidth() * {comp.columns})"
        )

    bg = tuple(comp.background_color)
    if bg != comp.spec.background:
        r, g, b = bg
        lines.append(f'{target}.setStyleSheet("background-color: rgb({r}, {g}, {b});")')
    if comp.kind == ComponentKind.PANEL:
        lines.append(f"{target}.setAutoFillBackground(True)")
    return lines


def generate_code(
    components: Sequence[PlacedComponent],
    class_name: str = "GeneratedForm",
    title: str = "Generated Form",
    width: int = 800,
    height: int = 600,
) -> str:
    """
    Generate PyQt6 source for a window holding *components*.

    Only non-default properties are emitted.  The result is a runnable
    module with a ``main()`` entry point.

    Args:
        components: Components in paint order (later ones end up on top).
        class_name: Name of the generated QWidget subclass.
        title: Window title.
        width, height: Window size.

    Returns:
        Python source code.
    """
    comps = list(components)
    qt_classes = sorted({c.spec.qt_class for c in comps} | {"QApplication", "QWidget"})

    out: List[str] = []
    out.append('"""Generated by Screen Designer."""')
    out.append("")
    out.append("import sys")
    out.append("")
    out.append("from PyQt6.QtWidgets import (")
    for name in qt_classes:
        out.append(f"{INDENT}{name},")
    out.append(")")
    out.append("")
    out.append("")
    out.append(f"class {class_name}(QWidget):")
    out.append(f"{INDENT}def __init__(self, parent=None):")
    out.append(f"{INDENT * 2}super().__init__(parent)")
    out.append(f"{INDENT * 2}self.init_components()")
    out.append(f"{INDENT * 2}self.setup_window()")
    out.append("")
    out.append(f"{INDENT}def init_components(self):")
    if not comps:
        out.append(f"{INDENT * 2}pass")
    for i, comp in enumerate(comps):
        var = variable_name(comp, i)
        x, y, w, h = comp.bounds.as_tuple()
        out.append(f"{INDENT * 2}self.{var} = {comp.spec.qt_class}(self)")
        for line in _property_lines(comp, var):
            out.append(f"{INDENT * 2}{line}")
        out.append(f"{INDENT * 2}self.{var}.setGeometry({x}, {y}, {w}, {h})")
        if i != len(comps) - 1:
            out.append("")
    out.append("")
    out.append(f"{INDENT}def setup_window(self):")
    out.append(f"{INDENT * 2}self.setWindowTitle({title!r})")
    out.append(f"{INDENT * 2}self.resize({int(width)}, {int(height)})")
    out.append("")
    out.append("")
    out.append("def main():")
    out.append(f"{INDENT}app = QApplication(sys.argv)")
    out.append(f"{INDENT}window = {class_name}()")
    out.append(f"{INDENT}window.show()")
    out.append(f"{INDENT}sys.exit(app.exec())")
    out.append("")
    out.append("")
    out.append('if __name__ == "__main__":')
    out.append(f"{INDENT}main()")
    out.append("")

    logger.debug("Generated %s with %d components", class_name, len(comps))
    return "\n".join(out)
