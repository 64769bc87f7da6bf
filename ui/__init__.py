"""
ui/
---
Presentation layer.

    from ui import render_canvas
    from ui import mode_toolbar, result_panel, pseudocode_viewer
"""

from ui.canvas import render_canvas, CanvasConfig, node_classes

from ui.controls import (
    mode_toolbar,
    result_panel,
    pseudocode_viewer,
)

__all__ = [
    "render_canvas",
    "CanvasConfig",
    "node_classes",
    "mode_toolbar",
    "result_panel",
    "pseudocode_viewer",
]
