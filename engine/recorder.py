"""
recorder.py — Run Recorder & Metrics
======================================
Records a complete frame plan in one go (no pacing) and computes the
numbers the result panel shows.

Usage:
    rec = Recorder()
    rec.record(build_frames(graph, start, end), start, end)
    rec.metrics              # RunMetrics
    rec.export()             # JSON-ready dict for the browser
    rec.replay(listener)     # fire every notification synchronously

Request/response front ends (the Flask app) use this instead of the
asyncio scheduler and let the browser do the pacing.
"""

import logging
import time
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List, Optional

from engine.scheduler import Frame, FrameKind, SearchListener, dispatch

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass: what the result panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    start:         int           = 0
    end:           int           = 0
    nodes_visited: int           = 0
    path_found:    bool          = False
    path_length:   Optional[int] = None    # edges on the path; None if not found
    total_frames:  int           = 0
    animation_ms:  int           = 0       # sum of frame delays
    wall_time_ms:  float         = 0.0     # time to compute the plan


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        frames  : Every Frame of the recorded run, in order.
        metrics : Computed RunMetrics (available after record()).
    """

    def __init__(self):
        self.frames:  List[Frame]          = []
        self.metrics: Optional[RunMetrics] = None

    def record(self, frames: Iterable[Frame], start: int, end: int) -> RunMetrics:
        """Exhaust the frame plan, keep every frame, compute metrics."""
        t0 = time.monotonic()
        self.frames = list(frames)
        wall_ms = (time.monotonic() - t0) * 1000

        self.metrics = self._compute_metrics(start, end, wall_ms)
        logger.info(
            "search %d → %d: %s after %d visits",
            start, end,
            f"path of length {self.metrics.path_length}" if self.metrics.path_found else "no path",
            self.metrics.nodes_visited,
        )
        return self.metrics

    def replay(self, listener: SearchListener) -> None:
        """Fire every recorded notification immediately, in order."""
        for frame in self.frames:
            dispatch(frame, listener)

    @property
    def visit_order(self) -> List[int]:
        return [f.node_id for f in self.frames if f.kind is FrameKind.VISITED]

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "frames":  [f.to_dict() for f in self.frames],
            "metrics": asdict(self.metrics) if self.metrics else {},
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, start: int, end: int, wall_ms: float) -> RunMetrics:
        result = next((f for f in reversed(self.frames) if f.kind is FrameKind.RESULT), None)
        return RunMetrics(
            start=start,
            end=end,
            nodes_visited=len(self.visit_order),
            path_found=bool(result and result.found),
            path_length=result.length if result else None,
            total_frames=len(self.frames),
            animation_ms=sum(f.delay_ms for f in self.frames),
            wall_time_ms=round(wall_ms, 2),
        )
