"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS.  Yields a TraversalStep at every meaningful event:
  1. Dequeue a node        →  DEQUEUE (the node is now visited)
  2. Enqueue a neighbour   →  ENQUEUE
  3. End node dequeued     →  FOUND  (carries the predecessor map)
  4. Queue exhausted       →  EXHAUSTED

Rules:
  - The queue and the visited set are both seeded with the start node.
    The seed is never checked against the obstacle flag.
  - Any other node is enqueued only if it is unvisited and not an
    obstacle, so obstacles never show up in the visit order or a path.
  - Neighbours are examined in edge-insertion order, which makes the
    visit order deterministic for a fixed graph.

Pseudocode lines are 0-indexed and match the PSEUDOCODE constant.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Generator, List

from graph import Graph
from algorithms.step import SearchStatus, StepKind, TraversalStep

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode: each string is one displayed line; index = pseudocode_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(graph, start, end):",                      # 0
    "    queue ← [start]",                              # 1
    "    visited ← {start}",                            # 2
    "    while queue is not empty:",                    # 3
    "        node ← queue.dequeue()",                   # 4
    "        if node == end: return FOUND",             # 5
    "        for neighbour in adj(node):",              # 6
    "            if neighbour not visited",             # 7
    "                    and not obstacle:",            # 8
    "                visited.add(neighbour)",           # 9
    "                prev[neighbour] = node",           # 10
    "                queue.enqueue(neighbour)",         # 11
    "    return NOT FOUND",                             # 12
]


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------
@dataclass
class TraversalResult:
    start:        int
    end:          int
    status:       SearchStatus
    visit_order:  List[int]      = field(default_factory=list)
    predecessors: Dict[int, int] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND

    @classmethod
    def from_step(cls, step: TraversalStep, start: int, end: int) -> "TraversalResult":
        """Build the result from the final step of a run."""
        return cls(
            start=start,
            end=end,
            status=step.status,
            visit_order=list(step.visit_order),
            predecessors=dict(step.predecessors),
        )


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bfs(graph: Graph, start: int, end: int) -> Generator[TraversalStep, None, None]:
    """
    Yields TraversalStep snapshots for every event during BFS execution.

    Raises InvalidNode (on first iteration) if start or end is unknown.
    """
    graph.require_node(start)
    graph.require_node(end)

    step_no = 0
    queue   = deque([start])
    visited = {start}
    prev:  Dict[int, int] = {}
    order: List[int]      = []

    while queue:
        node = queue.popleft()
        order.append(node)

        yield TraversalStep(
            step_number=step_no,
            kind=StepKind.DEQUEUE,
            node_id=node,
            queue=tuple(queue),
            visit_order=tuple(order),
            pseudocode_line=4,
            explanation=f"Dequeue node {node}: it was discovered earliest (FIFO).",
        )
        step_no += 1

        if node == end:
            logger.debug("bfs %d → %d: found after %d visits", start, end, len(order))
            yield TraversalStep(
                step_number=step_no,
                kind=StepKind.FOUND,
                node_id=node,
                queue=tuple(queue),
                visit_order=tuple(order),
                predecessors=dict(prev),
                pseudocode_line=5,
                explanation=f"End node {end} reached.",
            )
            return

        for nbr in graph.get_node(node).neighbors:
            if nbr in visited or graph.get_node(nbr).is_obstacle:
                continue
            visited.add(nbr)
            prev[nbr] = node
            queue.append(nbr)

            yield TraversalStep(
                step_number=step_no,
                kind=StepKind.ENQUEUE,
                node_id=nbr,
                parent_id=node,
                queue=tuple(queue),
                visit_order=tuple(order),
                pseudocode_line=11,
                explanation=f"Enqueue {nbr} (discovered from {node}).",
            )
            step_no += 1

    logger.debug("bfs %d → %d: queue exhausted after %d visits", start, end, len(order))
    yield TraversalStep(
        step_number=step_no,
        kind=StepKind.EXHAUSTED,
        visit_order=tuple(order),
        predecessors=dict(prev),
        pseudocode_line=12,
        explanation=f"Queue is empty. End node {end} is not reachable from {start}.",
    )


def traverse(graph: Graph, start: int, end: int) -> TraversalResult:
    """Run BFS to completion and collect the result."""
    last = None
    for last in bfs(graph, start, end):
        pass
    return TraversalResult.from_step(last, start, end)
