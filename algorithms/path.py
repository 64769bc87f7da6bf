"""
path.py — Path Reconstruction
==============================
Walks the predecessor map of a successful BFS from the end node back
to the start node.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from algorithms.bfs import TraversalResult
from graph.errors import NoPathFound, NoPathRecorded


@dataclass(frozen=True)
class Path:
    """
    Attributes:
        nodes  : Node ids from end back to start (reconstruction order).
        length : Number of edges on the path.
    """

    nodes:  Tuple[int, ...] = field(default_factory=tuple)
    length: int             = 0

    @property
    def start(self) -> int:
        return self.nodes[-1]

    @property
    def end(self) -> int:
        return self.nodes[0]

    def forward(self) -> List[int]:
        """Node ids from start to end."""
        return list(reversed(self.nodes))

    def hops(self) -> List[Tuple[int, int]]:
        """(node, predecessor) pairs, walking from the end."""
        return list(zip(self.nodes, self.nodes[1:]))

    def interior(self) -> List[int]:
        """Nodes strictly between end and start, end side first."""
        return list(self.nodes[1:-1])


def reconstruct_path(result: TraversalResult) -> Path:
    if not result.found:
        raise NoPathFound(result.start, result.end)

    nodes = [result.end]
    current = result.end
    while current != result.start:
        prev = result.predecessors.get(current)
        # a chain longer than the map can only mean a cycle
        if prev is None or len(nodes) > len(result.predecessors):
            raise NoPathRecorded(current)
        nodes.append(prev)
        current = prev
    return Path(nodes=tuple(nodes), length=len(nodes) - 1)
