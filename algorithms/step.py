"""
step.py — Traversal Step Snapshot
==================================
The BFS generator yields one TraversalStep per meaningful event.
A step is a frozen-in-time picture of the search:

    • what just happened (dequeue / enqueue / found / exhausted)
    • which node it happened to, and who discovered it
    • the queue contents and the visitation order so far
    • which line of pseudocode is executing right now

Design decisions:
  - TraversalStep is a frozen dataclass.  The generator is the only
    writer; the scheduler and UI are pure readers.
  - Sequences are stored as tuples so a step can never be mutated
    after it has been handed out.
  - The predecessor map is only attached to final steps; it is the one
    piece of state that is expensive to copy and only needed at the end.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class StepKind(Enum):
    DEQUEUE   = "dequeue"     # node taken off the queue → it is visited
    ENQUEUE   = "enqueue"     # unseen, non-obstacle neighbour discovered
    FOUND     = "found"       # end node dequeued, search stops
    EXHAUSTED = "exhausted"   # queue empty, end unreachable


class SearchStatus(Enum):
    FOUND     = "found"
    NOT_FOUND = "not-found"


@dataclass(frozen=True)
class TraversalStep:
    """
    Attributes:
        step_number     : 0-based index of this step in the run.
        kind            : What happened.
        node_id         : Node the event is about (None for EXHAUSTED).
        parent_id       : Discovering node (ENQUEUE only).
        queue           : Queue contents after the event.
        visit_order     : Dequeue order so far.
        predecessors    : {node_id: predecessor_id}; filled on final steps only.
        pseudocode_line : 0-based index into bfs.PSEUDOCODE.
        explanation     : Human-readable description of the step.
    """

    step_number:     int
    kind:            StepKind
    node_id:         Optional[int]             = None
    parent_id:       Optional[int]             = None
    queue:           Tuple[int, ...]           = ()
    visit_order:     Tuple[int, ...]           = ()
    predecessors:    Dict[int, int]            = field(default_factory=dict)
    pseudocode_line: int                       = 0
    explanation:     str                       = ""

    @property
    def is_final(self) -> bool:
        return self.kind in (StepKind.FOUND, StepKind.EXHAUSTED)

    @property
    def status(self) -> Optional[SearchStatus]:
        if self.kind is StepKind.FOUND:
            return SearchStatus.FOUND
        if self.kind is StepKind.EXHAUSTED:
            return SearchStatus.NOT_FOUND
        return None
