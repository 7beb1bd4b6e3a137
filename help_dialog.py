"""
help_dialog.py

Help system dialogs for Screen Designer.

Provides a tabbed help browser (Quick Start, Canvas, Keyboard Shortcuts)
and an About dialog.
"""

from __future__ import annotations

from PyQt6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QMessageBox,
    QTabWidget,
    QTextBrowser,
    QVBoxLayout,
)


class HelpDialog(QDialog):
    """Tabbed help dialog for Screen Designer.

    Args:
        parent: Parent widget.
        initial_tab: Index of the tab to display on open
            (0=Quick Start, 1=Canvas, 2=Keyboard Shortcuts).
    """

    def __init__(self, parent=None, initial_tab: int = 0):
        super().__init__(parent)
        self.setWindowTitle("Screen Designer Help")
        self.setMinimumSize(600, 500)
        self.resize(680, 560)

        layout = QVBoxLayout(self)

        self.tabs = QTabWidget()
        self.tabs.addTab(self._browser(_QUICK_START_HTML), "Quick Start")
        self.tabs.addTab(self._browser(_CANVAS_HTML), "Canvas")
        self.tabs.addTab(self._browser(_SHORTCUTS_HTML), "Keyboard Shortcuts")
        self.tabs.setCurrentIndex(initial_tab)
        layout.addWidget(self.tabs)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Close)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    @staticmethod
    def _browser(html: str) -> QTextBrowser:
        browser = QTextBrowser()
        browser.setOpenExternalLinks(True)
        browser.setHtml(html)
        return browser


def show_about_dialog(parent=None):
    """Show the About Screen Designer dialog.

    Args:
        parent: Parent widget for the message box.
    """
    QMessageBox.about(
        parent,
        "About Screen Designer",
        "<h2>Screen Designer</h2>"
        "<p><b>v1.0</b> &mdash; Visual Form Designer</p>"
        "<p>Lay out forms on a zoomable canvas, organise them into screens, "
        "and generate PyQt6 code or a live preview.</p>"
        "<p>Built with PyQt6.</p>",
    )


# ── Static HTML content ──────────────────────────────

_QUICK_START_HTML = """\
<h2>Quick Start</h2>

<h3>1. Place Components</h3>
<p>Drag a component from the <b>Components</b> palette onto the canvas.
The new component is selected and its properties appear in the
<b>Properties</b> panel.</p>

<h3>2. Arrange</h3>
<p>Drag a component to move it, or drag one of its eight handles to
resize it. With <b>Snap to Grid</b> on, positions and sizes follow the
grid.</p>

<h3>3. Screens</h3>
<p>Use <b>Project &rarr; Add Screen</b> to add more screens. Each tab above
the canvas is one screen with its own components.</p>

<h3>4. Generate</h3>
<ul>
  <li><b>Tools &rarr; Generate Code</b> shows PyQt6 source for the
      current screen.</li>
  <li><b>Tools &rarr; Preview</b> opens the screen built from real
      widgets.</li>
</ul>
"""

_CANVAS_HTML = """\
<h2>Canvas</h2>

<table cellpadding="6" cellspacing="0" border="1"
       style="border-collapse:collapse; width:100%;">
  <tr style="background:#f0f0f0;">
    <th>Mode</th><th>Description</th>
  </tr>
  <tr><td><b>Selection</b></td>
      <td>Select, move, and resize components. Arrow keys nudge the
          selection by 10 units.</td></tr>
  <tr><td><b>Pan</b></td>
      <td>Drag to pan around the canvas. Arrow keys pan by 20 pixels.
          Entering pan mode clears the selection.</td></tr>
</table>

<h3>Zoom</h3>
<p>Hold <b>Ctrl</b> and scroll to zoom toward the cursor in 25% steps,
from 25% to 400%. <b>Fit</b> scales the 800&times;600 canvas into the
window.</p>
"""

_SHORTCUTS_HTML = """\
<h2>Keyboard Shortcuts</h2>

<table cellpadding="6" cellspacing="0" border="1"
       style="border-collapse:collapse; width:100%;">
  <tr style="background:#f0f0f0;">
    <th>Category</th><th>Shortcut</th><th>Action</th>
  </tr>
  <tr><td rowspan="2"><b>Modes</b></td>
      <td><code>Space</code></td><td>Toggle Selection / Pan mode</td></tr>
  <tr><td><code>Arrows</code></td><td>Nudge selection, or pan in pan mode</td></tr>

  <tr><td rowspan="2"><b>Editing</b></td>
      <td><code>Delete</code></td><td>Delete selected component</td></tr>
  <tr><td><code>Ctrl+D</code></td><td>Duplicate selected component</td></tr>

  <tr><td rowspan="4"><b>View</b></td>
      <td><code>Ctrl++</code></td><td>Zoom in</td></tr>
  <tr><td><code>Ctrl+-</code></td><td>Zoom out</td></tr>
  <tr><td><code>Ctrl+0</code></td><td>Actual size</td></tr>
  <tr><td><code>Ctrl+Wheel</code></td><td>Zoom toward cursor</td></tr>

  <tr><td rowspan="2"><b>Tools</b></td>
      <td><code>F5</code></td><td>Generate code</td></tr>
  <tr><td><code>F6</code></td><td>Preview</td></tr>

  <tr><td><b>Help</b></td>
      <td><code>F1</code></td><td>Open this Help dialog</td></tr>
</table>
"""
