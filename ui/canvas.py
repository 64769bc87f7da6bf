"""
canvas.py — SVG Graph Renderer
================================
Pure rendering function: Graph → SVG string.

Every node is drawn as `<g id="node-<id>">` and every edge as
`<line id="edge-<id>">`, so the browser can keep its own id → element
map and toggle the "visited" / "path" classes while a search animates.

Design decisions:
  - NO mutation.  The caller passes in everything it needs and gets
    back a string.
  - Role colouring is a dict lookup: NodeRole → hex colour, written as
    SVG presentation attributes.  CSS classes added later by the
    animation override them.
  - Edges are drawn first so nodes sit on top.
"""

from html import escape
from typing import Dict, Optional

import config as settings
from graph import Graph, Node, Edge, NodeRole


# ---------------------------------------------------------------------------
# Visual Config: colour palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = settings.CANVAS_WIDTH
    height: int = settings.CANVAS_HEIGHT
    bg:     str = "#0d1117"

    # node colours (role → fill)
    node_colors: Dict[str, str] = {
        "plain":    "#1c2128",   # dark grey
        "start":    "#0ea5e9",   # cyan
        "end":      "#ec4899",   # pink
        "obstacle": "#991b1b",   # dark red
    }

    # node
    node_radius:        int = 15
    node_stroke:        str = "#30363d"
    node_stroke_width:  int = 2
    selected_stroke:    str = "#f59e0b"   # pending connect source
    obstacle_stroke:    str = "#991b1b"   # start / end that is also an obstacle
    node_label_color:   str = "#e6edf3"
    node_label_size:    int = 12

    # edge
    edge_color:         str = "#30363d"
    edge_width:         int = 3


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_canvas(
    graph: Graph,
    pending_source: Optional[int] = None,
    config: CanvasConfig = CONFIG,
) -> str:
    """
    Returns an SVG string.

    Args:
        graph          : The graph to render.
        pending_source : Node picked as the first end of a new edge, if any.
        config         : Visual config.
    """
    svg_parts = [
        f'<svg id="canvas" width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg">',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
    ]

    for edge in graph.edges:
        svg_parts.append(_render_edge(graph, edge, config))

    for node in graph.nodes.values():
        svg_parts.append(_render_node(node, node.id == pending_source, config))

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


# ---------------------------------------------------------------------------
# Node Rendering
# ---------------------------------------------------------------------------
def node_classes(node: Node, selected: bool = False) -> str:
    classes = ["node", f"role-{node.role.value}"]
    if node.is_obstacle and node.role is not NodeRole.OBSTACLE:
        classes.append("obstacle")
    if selected:
        classes.append("selected")
    return " ".join(classes)


def _render_node(node: Node, selected: bool, config: CanvasConfig) -> str:
    fill = config.node_colors[node.role.value]

    stroke = config.node_stroke
    if selected:
        stroke = config.selected_stroke
    elif node.is_obstacle and node.role is not NodeRole.OBSTACLE:
        stroke = config.obstacle_stroke

    cx, cy = node.x, node.y
    parts = [
        f'<g id="node-{node.id}" class="{node_classes(node, selected)}" data-id="{node.id}">',
        f'  <circle cx="{cx}" cy="{cy}" r="{config.node_radius}" '
        f'fill="{fill}" stroke="{stroke}" stroke-width="{config.node_stroke_width}"/>',
        f'  <text x="{cx}" y="{cy + 4}" text-anchor="middle" '
        f'font-size="{config.node_label_size}" fill="{config.node_label_color}">{escape(str(node.id))}</text>',
        '</g>',
    ]
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Edge Rendering
# ---------------------------------------------------------------------------
def _render_edge(graph: Graph, edge: Edge, config: CanvasConfig) -> str:
    a = graph.get_node(edge.node_a)
    b = graph.get_node(edge.node_b)
    if not a or not b:
        return ""

    # the line stops at each circle rim; overlapping nodes keep a centre-to-centre line
    x1, y1, x2, y2 = a.x, a.y, b.x, b.y
    dist = a.distance_to(b)
    if dist > 2 * config.node_radius:
        dx = (b.x - a.x) / dist * config.node_radius
        dy = (b.y - a.y) / dist * config.node_radius
        x1, y1, x2, y2 = a.x + dx, a.y + dy, b.x - dx, b.y - dy

    return (
        f'<line id="edge-{edge.id}" class="edge" data-a="{edge.node_a}" data-b="{edge.node_b}" '
        f'x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" '
        f'stroke="{config.edge_color}" stroke-width="{config.edge_width}"/>'
    )
