"""
edge.py — Graph Edge
====================
An undirected link between two nodes.

Design decisions:
  - `node_a` and `node_b` are node ids, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Edges are unweighted: every hop costs one.
  - Two edges may join the same pair of nodes.  Each has its own id so
    the renderer can draw (and highlight) both.
"""

from typing import Optional, Dict, Any


class Edge:
    """
    Attributes:
        id     : Sequential integer id (insertion order).
        node_a : Id of the node the connection started from.
        node_b : Id of the other endpoint.
    """

    __slots__ = ("id", "node_a", "node_b")

    def __init__(self, edge_id: int, node_a: int, node_b: int):
        self.id:     int = edge_id
        self.node_a: int = node_a
        self.node_b: int = node_b

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def connects(self, a: int, b: int) -> bool:
        """True if this edge links a ↔ b (either orientation)."""
        return (self.node_a == a and self.node_b == b) or (self.node_a == b and self.node_b == a)

    def other_end(self, node_id: int) -> Optional[int]:
        """Given one endpoint, return the other. None if node_id isn't an endpoint."""
        if node_id == self.node_a:
            return self.node_b
        if node_id == self.node_b:
            return self.node_a
        return None

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "node_a": self.node_a, "node_b": self.node_b}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Edge":
        return cls(int(data["id"]), int(data["node_a"]), int(data["node_b"]))

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge({self.id}: {self.node_a} ↔ {self.node_b})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
