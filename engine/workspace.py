"""
workspace.py — Core Facade
===========================
The one object a presentation layer talks to.  Bundles the Graph, the
interaction state machine and the animation scheduler, and exposes:

  inbound   add_node / set_start / set_end / toggle_obstacle / connect /
            clear / select_mode / place_node / click_node /
            start_search / run_search / plan_search
  outbound  the SearchListener passed in at construction

Searches always run over Graph.snapshot(), so edits made while an
animation is playing never reach the search in progress.  Starting a
new search (or clearing) cancels whatever animation is still running.
"""

import asyncio
import logging
from typing import Iterator, Optional, Tuple

from config import SearchConfig
from graph import Edge, Graph, MissingEndpoints
from engine.interaction import ClickOutcome, InteractionMachine, InteractionState, Mode
from engine.recorder import Recorder
from engine.scheduler import AnimationScheduler, Frame, SearchListener, Sleep, build_frames

logger = logging.getLogger(__name__)


class Workspace:
    """
    Attributes:
        config      : SearchConfig (visit delay, obstacle policy).
        graph       : The live, editable Graph.
        interaction : InteractionMachine bound to `graph`.
        scheduler   : AnimationScheduler that plays searches.
        listener    : Receives search notifications.
    """

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        listener: Optional[SearchListener] = None,
        sleep: Optional[Sleep] = None,
        graph: Optional[Graph] = None,
    ):
        self.config      = config or SearchConfig.from_env()
        self.graph       = graph or Graph(obstacle_policy=self.config.obstacle_policy)
        self.interaction = InteractionMachine(self.graph)
        self.scheduler   = AnimationScheduler(self.config.visit_delay_ms, sleep=sleep)
        self.listener    = listener or SearchListener()

    # ------------------------------------------------------------------
    # Graph editing
    # ------------------------------------------------------------------
    def add_node(self, x: float, y: float) -> int:
        return self.graph.add_node(x, y)

    def set_start(self, node_id: int) -> None:
        self.graph.set_start(node_id)

    def set_end(self, node_id: int) -> None:
        self.graph.set_end(node_id)

    def toggle_obstacle(self, node_id: int) -> bool:
        return self.graph.toggle_obstacle(node_id)

    def connect(self, a: int, b: int) -> Edge:
        return self.interaction.request_edge(a, b)

    def clear(self) -> None:
        self.cancel_search()
        self.graph.clear()
        self.interaction.reset()

    # ------------------------------------------------------------------
    # Interaction primitives
    # ------------------------------------------------------------------
    def select_mode(self, mode: Mode) -> None:
        self.interaction.select_mode(mode)

    def place_node(self, x: float, y: float) -> Optional[int]:
        return self.interaction.place_node(x, y)

    def click_node(self, node_id: int) -> ClickOutcome:
        return self.interaction.click_node(node_id)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def start_search(self, start: Optional[int] = None, end: Optional[int] = None) -> asyncio.Task:
        """Begin an animated search; must be called from a running event loop."""
        start, end, frames = self._prepare(start, end)
        logger.info("search %d → %d started (delay %d ms)", start, end, self.scheduler.delay_ms)
        return self.scheduler.start(frames, self.listener)

    async def run_search(self, start: Optional[int] = None, end: Optional[int] = None) -> bool:
        """Start a search and wait for it.  False if a newer search superseded it."""
        task = self.start_search(start, end)
        return await self.scheduler.wait(task)

    def plan_search(self, start: Optional[int] = None, end: Optional[int] = None) -> Recorder:
        """Compute the whole frame plan at once, without pacing."""
        start, end, frames = self._prepare(start, end)
        rec = Recorder()
        rec.record(frames, start, end)
        return rec

    def cancel_search(self) -> bool:
        return self.scheduler.cancel()

    def _prepare(self, start: Optional[int], end: Optional[int]) -> Tuple[int, int, Iterator[Frame]]:
        start = self.graph.start_id if start is None else start
        end = self.graph.end_id if end is None else end
        if start is None or end is None:
            raise MissingEndpoints(start, end)
        self.graph.require_node(start)
        self.graph.require_node(end)
        frames = build_frames(self.graph.snapshot(), start, end, self.scheduler.delay_ms)
        return start, end, frames

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "graph":       self.graph.to_dict(),
            "interaction": self.interaction.state.to_dict(),
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        config: Optional[SearchConfig] = None,
        listener: Optional[SearchListener] = None,
    ) -> "Workspace":
        config = config or SearchConfig.from_env()
        graph = Graph.from_dict(data.get("graph", {}), obstacle_policy=config.obstacle_policy)
        ws = cls(config=config, listener=listener, graph=graph)
        ws.interaction.state = InteractionState.from_dict(data.get("interaction", {}))
        return ws

    def __repr__(self) -> str:
        return f"Workspace({self.graph!r}, {self.interaction!r})"
