"""
main.py — BFS Pathfinder Flask App
===================================
The web server that hosts the visualizer.

Routes:
  GET  /                  – main UI
  GET  /api/state         – current graph + editing mode
  POST /api/mode          – select editing mode
  POST /api/canvas/click  – node-placed event  {x, y}
  POST /api/node/click    – node-clicked event {id}
  POST /api/connect       – edge-requested event {a, b}
  POST /api/search        – run BFS, return the animation frames
  POST /api/clear         – wipe the graph

State management:
  The Workspace (graph + editing mode) is serialised into the Flask
  session after every request, so each browser edits its own graph.
  Searches are planned in one go on the server; the browser plays the
  frames back with the delay each frame carries and drops a previous
  playback as soon as a new search starts.
"""

import logging
import math
import sys
import os

from flask import Flask, render_template_string, request, jsonify, session
from werkzeug.exceptions import BadRequest

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import config
from config import SearchConfig
from algorithms import PSEUDOCODE
from graph import GraphError
from engine import Mode, Workspace
from ui import render_canvas, mode_toolbar, result_panel, pseudocode_viewer

logger = logging.getLogger(__name__)


app = Flask(__name__)
app.secret_key = config.SECRET_KEY
app.config["SEARCH_CONFIG"] = SearchConfig.from_env()


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_workspace() -> Workspace:
    """Deserialise the workspace from the session, or start an empty one."""
    return Workspace.from_dict(session.get("workspace", {}), config=app.config["SEARCH_CONFIG"])


def save_workspace(ws: Workspace) -> None:
    session["workspace"] = ws.to_dict()


def view_state(ws: Workspace) -> dict:
    """Everything the browser needs to redraw after an edit."""
    return {
        "svg":            render_canvas(ws.graph, pending_source=ws.interaction.pending_source),
        "mode":           ws.interaction.mode.value,
        "pending_source": ws.interaction.pending_source,
        "start":          ws.graph.start_id,
        "end":            ws.graph.end_id,
        "graph":          ws.graph.to_dict(),
    }


def payload() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest("Expected a JSON object")
    return data


def int_field(data: dict, key: str) -> int:
    try:
        return int(data[key])
    except (KeyError, TypeError, ValueError, OverflowError):
        raise BadRequest(f"'{key}' must be an integer")


def float_field(data: dict, key: str) -> float:
    try:
        value = float(data[key])
    except (KeyError, TypeError, ValueError):
        raise BadRequest(f"'{key}' must be a number")
    if not math.isfinite(value):
        raise BadRequest(f"'{key}' must be a finite number")
    return value


# ---------------------------------------------------------------------------
# Error Handlers
# ---------------------------------------------------------------------------
@app.errorhandler(GraphError)
def handle_graph_error(err: GraphError):
    logger.warning("rejected: %s", err)
    return jsonify({"error": str(err), "kind": type(err).__name__}), 400


@app.errorhandler(BadRequest)
def handle_bad_request(err: BadRequest):
    return jsonify({"error": err.description, "kind": "BadRequest"}), 400


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    ws = get_workspace()
    html = render_template_string(
        INDEX_TEMPLATE,
        svg=render_canvas(ws.graph, pending_source=ws.interaction.pending_source),
        toolbar=mode_toolbar(ws.interaction.mode),
        result=result_panel(),
        pseudocode=pseudocode_viewer(PSEUDOCODE),
    )
    return html


@app.route("/api/state")
def api_state():
    return jsonify(view_state(get_workspace()))


# ---------------------------------------------------------------------------
# API: Editing
# ---------------------------------------------------------------------------
@app.route("/api/mode", methods=["POST"])
def api_mode():
    data = payload()
    try:
        mode = Mode(data.get("mode"))
    except ValueError:
        raise BadRequest(f"Unknown mode: {data.get('mode')!r}")

    ws = get_workspace()
    ws.select_mode(mode)
    save_workspace(ws)
    return jsonify(view_state(ws))


@app.route("/api/canvas/click", methods=["POST"])
def api_canvas_click():
    data = payload()
    x = min(max(float_field(data, "x"), 0.0), float(config.CANVAS_WIDTH))
    y = min(max(float_field(data, "y"), 0.0), float(config.CANVAS_HEIGHT))

    ws = get_workspace()
    node_id = ws.place_node(x, y)
    save_workspace(ws)
    return jsonify({**view_state(ws), "node_id": node_id})


@app.route("/api/node/click", methods=["POST"])
def api_node_click():
    node_id = int_field(payload(), "id")

    ws = get_workspace()
    outcome = ws.click_node(node_id)
    save_workspace(ws)
    return jsonify({**view_state(ws), "outcome": outcome.to_dict()})


@app.route("/api/connect", methods=["POST"])
def api_connect():
    data = payload()
    a, b = int_field(data, "a"), int_field(data, "b")

    ws = get_workspace()
    edge = ws.connect(a, b)
    save_workspace(ws)
    return jsonify({**view_state(ws), "edge": edge.to_dict()})


@app.route("/api/clear", methods=["POST"])
def api_clear():
    ws = get_workspace()
    ws.clear()
    save_workspace(ws)
    return jsonify(view_state(ws))


# ---------------------------------------------------------------------------
# API: Search
# ---------------------------------------------------------------------------
@app.route("/api/search", methods=["POST"])
def api_search():
    # MissingEndpoints surfaces through handle_graph_error as a user prompt
    rec = get_workspace().plan_search()

    metrics = rec.metrics
    return jsonify({
        **rec.export(),
        "found":  metrics.path_found,
        "length": metrics.path_length,
        "result": result_panel(metrics, "" if metrics.path_found else "No path found!"),
    })


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>BFS Pathfinder</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
      --accent-emerald: #10b981;
      --accent-amber: #f59e0b;
      --accent-rose: #f43f5e;
    }

    body {
      font-family: -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    #sidebar {
      width: 320px;
      background: var(--bg-dark);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 20px 16px;
    }

    #main {
      flex: 1;
      display: flex;
      align-items: center;
      justify-content: center;
    }

    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 10px;
      padding: 14px;
      margin-bottom: 14px;
    }
    .panel h3 { font-size: 14px; margin-bottom: 10px; color: var(--accent-cyan); }
    .button-row { display: flex; flex-wrap: wrap; gap: 6px; margin-bottom: 8px; }

    button {
      background: var(--bg-dark);
      color: var(--text-primary);
      border: 1px solid var(--border);
      border-radius: 6px;
      padding: 6px 10px;
      cursor: pointer;
    }
    button.active { border-color: var(--accent-amber); color: var(--accent-amber); }
    .btn-primary { background: var(--accent-cyan); border-color: var(--accent-cyan); }

    .message { color: var(--accent-rose); min-height: 1em; }
    table td { padding: 2px 8px 2px 0; font-size: 13px; color: var(--text-secondary); }
    .pseudocode { font-size: 12px; color: var(--text-secondary); }

    /* animation classes — CSS wins over SVG presentation attributes */
    .node { cursor: pointer; }
    .node.visited circle { fill: #1d4ed8; }
    .node.path circle    { fill: var(--accent-emerald); }
    line.edge.path       { stroke: var(--accent-emerald); }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="toolbar">{{ toolbar|safe }}</div>
    <div id="result">{{ result|safe }}</div>
    {{ pseudocode|safe }}
  </div>
  <div id="main">
    <div id="canvas-container">{{ svg|safe }}</div>
  </div>

  <script>
    async function post(url, body) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(body || {}),
      });
      return res.json();
    }

    // ---- playback (one at a time; a new search drops the old timers) ----
    let timers = [];
    function stopPlayback() {
      timers.forEach(clearTimeout);
      timers = [];
    }

    function redraw(data) {
      stopPlayback();
      if (data.svg) document.getElementById('canvas-container').innerHTML = data.svg;
      if (data.mode) {
        document.querySelectorAll('.mode-btn').forEach(b =>
          b.classList.toggle('active', b.dataset.mode === data.mode));
      }
      if (data.error) document.getElementById('message').textContent = data.error;
    }

    function applyFrame(frame) {
      if (frame.kind === 'visited') {
        const el = document.getElementById('node-' + frame.node_id);
        if (el && !el.classList.contains('role-start') && !el.classList.contains('role-end')) {
          el.classList.add('visited');
        }
      } else if (frame.kind === 'path-node') {
        document.getElementById('node-' + frame.node_id)?.classList.add('path');
      } else if (frame.kind === 'path-edge') {
        document.querySelectorAll('line.edge').forEach(line => {
          const a = +line.dataset.a, b = +line.dataset.b;
          if ((a === frame.node_id && b === frame.other_id) ||
              (b === frame.node_id && a === frame.other_id)) {
            line.classList.add('path');
          }
        });
      } else if (frame.kind === 'result') {
        document.getElementById('length').textContent = frame.found ? frame.length : 0;
      }
    }

    function play(data) {
      stopPlayback();
      document.querySelectorAll('.visited, .path').forEach(el =>
        el.classList.remove('visited', 'path'));
      let at = 0;
      data.frames.forEach(frame => {
        timers.push(setTimeout(() => applyFrame(frame), at));
        at += frame.delay_ms;
      });
      timers.push(setTimeout(() => {
        document.getElementById('result').innerHTML = data.result;
      }, at));
    }

    // ---- mode buttons ----
    document.getElementById('toolbar').addEventListener('click', async (e) => {
      const btn = e.target.closest('.mode-btn');
      if (btn) redraw(await post('/api/mode', {mode: btn.dataset.mode}));
    });

    // ---- canvas: node click vs. empty-space click ----
    document.getElementById('canvas-container').addEventListener('click', async (e) => {
      const node = e.target.closest('.node');
      if (node) {
        redraw(await post('/api/node/click', {id: +node.dataset.id}));
        return;
      }
      const svg = document.getElementById('canvas');
      const rect = svg.getBoundingClientRect();
      redraw(await post('/api/canvas/click', {
        x: e.clientX - rect.left,
        y: e.clientY - rect.top,
      }));
    });

    document.getElementById('btn-search').addEventListener('click', async () => {
      document.getElementById('message').textContent = '';
      const data = await post('/api/search');
      if (data.error) { alert(data.error); return; }
      play(data);
    });

    document.getElementById('btn-clear').addEventListener('click', async () => {
      redraw(await post('/api/clear'));
      document.getElementById('length').textContent = 0;
    });
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    print("=" * 60)
    print("  BFS Pathfinder")
    print("  Starting Flask server...")
    print(f"  Open http://{config.HOST}:{config.PORT}")
    print("=" * 60)
    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)
