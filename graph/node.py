from enum import Enum
from typing import List, Dict, Any
import math


# ---------------------------------------------------------------------------
# Node Role: what the user designated this node as
# ---------------------------------------------------------------------------
class NodeRole(Enum):
    PLAIN     = "plain"      # ordinary node
    START     = "start"      # search origin
    END       = "end"        # search goal
    OBSTACLE  = "obstacle"   # never expanded into by BFS


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    Abstract graph vertex.  Carries no rendering handle; the presentation
    layer keeps its own id → element mapping.

    Attributes:
        id          : Sequential integer id, stable until the graph is cleared.
        x, y        : Position where the user placed the node.  Geometry only,
                      traversal never reads it.
        is_start    : Start designation (at most one node per graph).
        is_end      : End designation (at most one node per graph).
        is_obstacle : Obstacle flag.  Independent of start / end unless the
                      graph runs with the "forbid" obstacle policy.
        neighbors   : Neighbour ids in edge-insertion order, one entry per edge.
    """

    __slots__ = ("id", "x", "y", "is_start", "is_end", "is_obstacle", "neighbors")

    def __init__(self, node_id: int, x: float = 0.0, y: float = 0.0):
        self.id: int              = node_id
        self.x: float             = x
        self.y: float             = y
        self.is_start: bool       = False
        self.is_end: bool         = False
        self.is_obstacle: bool    = False
        self.neighbors: List[int] = []

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------
    @property
    def role(self) -> NodeRole:
        """Primary role.  Start / end win over the obstacle flag."""
        if self.is_start:
            return NodeRole.START
        if self.is_end:
            return NodeRole.END
        if self.is_obstacle:
            return NodeRole.OBSTACLE
        return NodeRole.PLAIN

    def flags(self) -> Dict[str, bool]:
        return {
            "is_start":    self.is_start,
            "is_end":      self.is_end,
            "is_obstacle": self.is_obstacle,
        }

    # ------------------------------------------------------------------
    # Geometry (edge drawing only)
    # ------------------------------------------------------------------
    def distance_to(self, other: "Node") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id":          self.id,
            "x":           self.x,
            "y":           self.y,
            "is_start":    self.is_start,
            "is_end":      self.is_end,
            "is_obstacle": self.is_obstacle,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Node":
        node = cls(int(data["id"]), x=data.get("x", 0.0), y=data.get("y", 0.0))
        node.is_start = data.get("is_start", False)
        node.is_end = data.get("is_end", False)
        node.is_obstacle = data.get("is_obstacle", False)
        return node

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, role={self.role.value}, pos=({self.x:.1f},{self.y:.1f}))"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
