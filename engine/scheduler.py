"""
scheduler.py — Animation Scheduler
===================================
Turns a BFS run into a paced sequence of notifications for the
presentation layer.

Two halves:
  1. build_frames()        – lazy generator producing the frame plan:
                             VISITED per dequeued node, then PATH_EDGE /
                             PATH_NODE per hop, then a single RESULT.
  2. AnimationScheduler    – plays a frame plan on an asyncio task,
                             one frame at a time, sleeping after every
                             frame that carries a delay.

State machine:
    IDLE      →  start()   →  PLAYING
    PLAYING   →  (frames exhausted) → FINISHED
    PLAYING   →  cancel() / start() →  CANCELLED  (then PLAYING again for start)

Only one run is ever in flight: start() cancels the previous task before
creating the next, so two animations never write to the same view.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Iterator, List, Optional, Tuple

from algorithms import StepKind, TraversalResult, bfs, reconstruct_path
from config import DEFAULT_VISIT_DELAY_MS
from graph import Graph

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Frames
# ---------------------------------------------------------------------------
class FrameKind(Enum):
    VISITED   = "visited"
    PATH_EDGE = "path-edge"
    PATH_NODE = "path-node"
    RESULT    = "result"


@dataclass(frozen=True)
class Frame:
    """
    Attributes:
        kind     : Which notification this frame fires.
        node_id  : Visited / path node, or first endpoint of a path edge.
        other_id : Second endpoint of a path edge.
        found    : RESULT only.
        length   : RESULT only; hop count, None when not found.
        delay_ms : Pause after this frame before the next one.
    """

    kind:     FrameKind
    node_id:  Optional[int]  = None
    other_id: Optional[int]  = None
    found:    Optional[bool] = None
    length:   Optional[int]  = None
    delay_ms: int            = 0

    def to_dict(self) -> dict:
        return {
            "kind":     self.kind.value,
            "node_id":  self.node_id,
            "other_id": self.other_id,
            "found":    self.found,
            "length":   self.length,
            "delay_ms": self.delay_ms,
        }


def build_frames(
    graph: Graph,
    start: int,
    end: int,
    delay_ms: int = DEFAULT_VISIT_DELAY_MS,
) -> Iterator[Frame]:
    """
    Lazily yields the animation plan for one search.  Each call starts a
    fresh BFS, so the plan can be rebuilt at will.

    The caller owns `graph`; pass a snapshot if it may change while the
    plan is being consumed.
    """
    for step in bfs(graph, start, end):
        if step.kind is StepKind.DEQUEUE:
            # the end node terminates the search, no pause after it
            pause = 0 if step.node_id == end else delay_ms
            yield Frame(FrameKind.VISITED, node_id=step.node_id, delay_ms=pause)

        elif step.kind is StepKind.FOUND:
            path = reconstruct_path(TraversalResult.from_step(step, start, end))
            for node, prev in path.hops():
                yield Frame(FrameKind.PATH_EDGE, node_id=node, other_id=prev)
                if node not in (start, end):
                    yield Frame(FrameKind.PATH_NODE, node_id=node)
            yield Frame(FrameKind.RESULT, found=True, length=path.length)

        elif step.kind is StepKind.EXHAUSTED:
            yield Frame(FrameKind.RESULT, found=False)


# ---------------------------------------------------------------------------
# Listener: outbound notifications
# ---------------------------------------------------------------------------
class SearchListener:
    """Presentation-layer hooks.  Override what you need; the rest are no-ops."""

    def on_node_visited(self, node_id: int) -> None:
        pass

    def on_path_edge(self, node_a: int, node_b: int) -> None:
        pass

    def on_path_node(self, node_id: int) -> None:
        pass

    def on_search_result(self, found: bool, length: Optional[int]) -> None:
        pass


class RecordingListener(SearchListener):
    """Keeps every notification as a tuple, in arrival order."""

    def __init__(self):
        self.events: List[Tuple] = []

    def on_node_visited(self, node_id):
        self.events.append(("visited", node_id))

    def on_path_edge(self, node_a, node_b):
        self.events.append(("path-edge", node_a, node_b))

    def on_path_node(self, node_id):
        self.events.append(("path-node", node_id))

    def on_search_result(self, found, length):
        self.events.append(("result", found, length))

    @property
    def visited(self) -> List[int]:
        return [e[1] for e in self.events if e[0] == "visited"]

    @property
    def result(self) -> Optional[Tuple]:
        results = [e for e in self.events if e[0] == "result"]
        return results[-1] if results else None


def dispatch(frame: Frame, listener: SearchListener) -> None:
    """Fire the listener method matching the frame."""
    if frame.kind is FrameKind.VISITED:
        listener.on_node_visited(frame.node_id)
    elif frame.kind is FrameKind.PATH_EDGE:
        listener.on_path_edge(frame.node_id, frame.other_id)
    elif frame.kind is FrameKind.PATH_NODE:
        listener.on_path_node(frame.node_id)
    elif frame.kind is FrameKind.RESULT:
        listener.on_search_result(frame.found, frame.length)


# ---------------------------------------------------------------------------
# Scheduler
# ---------------------------------------------------------------------------
class SchedulerState(Enum):
    IDLE      = "idle"
    PLAYING   = "playing"
    FINISHED  = "finished"
    CANCELLED = "cancelled"
    FAILED    = "failed"      # a listener raised mid-run


Sleep = Callable[[float], Awaitable[None]]


class AnimationScheduler:
    """
    Attributes:
        delay_ms   : Default pause after each visited node (build_frames input).
        state      : Current SchedulerState.
        generation : Incremented by every start(); identifies the live run.
    """

    def __init__(self, delay_ms: int = DEFAULT_VISIT_DELAY_MS, sleep: Optional[Sleep] = None):
        self.delay_ms:   int            = delay_ms
        self.state:      SchedulerState = SchedulerState.IDLE
        self.generation: int            = 0
        self._sleep:     Sleep          = sleep or asyncio.sleep
        self._task:      Optional[asyncio.Task] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, frames: Iterator[Frame], listener: SearchListener) -> asyncio.Task:
        """Cancel any run in flight, then play `frames` on a new task."""
        if self.cancel():
            logger.warning("search %d superseded by a new search", self.generation)
        self.generation += 1
        self.state = SchedulerState.PLAYING
        self._task = asyncio.get_running_loop().create_task(
            self._play(frames, listener, self.generation)
        )
        return self._task

    def cancel(self) -> bool:
        """Cancel the run in flight.  Returns False if nothing was running."""
        if self._task is None or self._task.done():
            return False
        self._task.cancel()
        self.state = SchedulerState.CANCELLED
        return True

    async def wait(self, task: Optional[asyncio.Task] = None) -> bool:
        """
        Wait for `task` (default: the latest run).  Returns True if it
        played to the end, False if it was cancelled.  Listener errors
        are re-raised.
        """
        task = task or self._task
        if task is None:
            return False
        await asyncio.wait({task})
        if task.cancelled():
            return False
        task.result()
        return True

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_playing(self) -> bool:
        return self.state is SchedulerState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    async def _play(self, frames: Iterator[Frame], listener: SearchListener, generation: int) -> None:
        try:
            for frame in frames:
                logger.debug("run %d: %s", generation, frame)
                dispatch(frame, listener)
                if frame.delay_ms > 0:
                    await self._sleep(frame.delay_ms / 1000)
        except Exception as err:
            logger.warning("run %d stopped by listener error: %s", generation, err)
            if self._is_live(generation):
                self.state = SchedulerState.FAILED
            raise
        else:
            if self._is_live(generation):
                self.state = SchedulerState.FINISHED
        finally:
            close = getattr(frames, "close", None)
            if close is not None:
                close()

    def _is_live(self, generation: int) -> bool:
        return generation == self.generation and self.state is SchedulerState.PLAYING
