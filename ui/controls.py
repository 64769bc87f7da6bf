"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • mode_toolbar        – one button per editing mode + search / clear
  • result_panel        – path length and run metrics
  • pseudocode_viewer   – the BFS pseudocode for reference

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings; main.py stitches them together.
"""

from html import escape
from typing import List, Optional

from engine import Mode, RunMetrics


# label + tooltip for each mode button, in toolbar order
MODE_BUTTONS = [
    (Mode.PLACING_NODES,     "Add Node",     "Click the canvas to place nodes"),
    (Mode.CONNECTING,        "Connect",      "Click two nodes to join them"),
    (Mode.SETTING_START,     "Set Start",    "Click the node to start from"),
    (Mode.SETTING_END,       "Set End",      "Click the node to reach"),
    (Mode.TOGGLING_OBSTACLE, "Obstacle",     "Click nodes to block / unblock them"),
]


# ---------------------------------------------------------------------------
# Mode Toolbar
# ---------------------------------------------------------------------------
def mode_toolbar(active: Mode = Mode.IDLE) -> str:
    buttons = []
    for mode, label, hint in MODE_BUTTONS:
        cls = "mode-btn active" if mode is active else "mode-btn"
        buttons.append(
            f'<button class="{cls}" data-mode="{mode.value}" title="{hint}">{label}</button>'
        )

    return f"""
    <div class="panel mode-toolbar">
      <h3>Edit</h3>
      <div class="button-row">
        {''.join(buttons)}
      </div>
      <div class="button-row">
        <button id="btn-search" class="btn-primary">Start Search</button>
        <button id="btn-clear" class="btn-secondary">Clear</button>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Result Panel
# ---------------------------------------------------------------------------
def result_panel(metrics: Optional[RunMetrics] = None, message: str = "") -> str:
    length = metrics.path_length if metrics and metrics.path_found else 0
    rows = ""
    if metrics:
        status = "Found" if metrics.path_found else "Not Found"
        rows = f"""
        <table>
          <tr><td>Path:</td><td><strong>{status}</strong></td></tr>
          <tr><td>Nodes Visited:</td><td><strong>{metrics.nodes_visited}</strong></td></tr>
          <tr><td>Animation:</td><td><strong>{metrics.animation_ms / 1000:.1f} s</strong></td></tr>
        </table>
        """

    return f"""
    <div class="panel result-panel">
      <h3>Result</h3>
      <p>Path length: <strong id="length">{length}</strong></p>
      <p id="message" class="message">{escape(message)}</p>
      {rows}
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(pseudocode_lines: List[str], current_line: int = -1) -> str:
    lines = []
    for i, line in enumerate(pseudocode_lines):
        cls = "code-line active" if i == current_line else "code-line"
        lines.append(f'<div class="{cls}" data-line="{i}">{escape(line)}</div>')

    return f"""
    <div class="panel pseudocode-viewer">
      <h3>Breadth-First Search</h3>
      <pre class="pseudocode">{''.join(lines)}</pre>
    </div>
    """
