"""
algorithms/
-----------
Traversal layer.

    from algorithms import bfs, traverse, reconstruct_path
"""

from algorithms.step import TraversalStep, StepKind, SearchStatus
from algorithms.bfs  import bfs, traverse, TraversalResult, PSEUDOCODE
from algorithms.path import Path, reconstruct_path

__all__ = [
    "TraversalStep",
    "StepKind",
    "SearchStatus",
    "bfs",
    "traverse",
    "TraversalResult",
    "PSEUDOCODE",
    "Path",
    "reconstruct_path",
]
