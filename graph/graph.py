"""
graph.py — Graph Container
===========================
Single source of truth for the graph.  The interaction state machine
mutates it; searches read a snapshot of it.

Responsibilities:
  1. Node / edge creation                   (add_node, connect)
  2. Role designation                       (set_start, set_end, toggle_obstacle)
  3. Adjacency queries                      (neighbours, edges_between, …)
  4. Snapshot & serialisation round-trip    (snapshot / to_dict / from_dict)
  5. Clear                                  (back to an empty graph)

Design decisions:
  - Nodes live in a dict keyed by integer id for O(1) lookup; ids are
    handed out sequentially and only restart after clear().
  - Edges live in a list so insertion order is preserved.
  - Adjacency is kept on each Node (`neighbors`) and updated in the same
    call that appends the Edge, so the two can never drift apart.
  - Duplicate edges between the same pair are allowed, not deduplicated.
"""

import logging
from typing import Dict, List, Optional

from config import ObstaclePolicy
from graph.node import Node
from graph.edge import Edge
from graph.errors import InvalidNode, SelfConnection, RoleConflict

logger = logging.getLogger(__name__)


class Graph:
    """
    Attributes:
        nodes           : {node_id: Node}
        edges           : [Edge] in insertion order
        start_id        : id of the start node, or None
        end_id          : id of the end node, or None
        obstacle_policy : whether start / end nodes may also be obstacles
    """

    def __init__(self, obstacle_policy: ObstaclePolicy = ObstaclePolicy.PRESERVE):
        self.nodes:    Dict[int, Node] = {}
        self.edges:    List[Edge]      = []
        self.start_id: Optional[int]   = None
        self.end_id:   Optional[int]   = None
        self.obstacle_policy: ObstaclePolicy = obstacle_policy
        self._next_node_id = 0
        self._next_edge_id = 0

    # ==================================================================
    # NODES
    # ==================================================================
    def add_node(self, x: float = 0.0, y: float = 0.0) -> int:
        """Create an isolated node at (x, y) and return its id."""
        node = Node(self._next_node_id, x=x, y=y)
        self._next_node_id += 1
        self.nodes[node.id] = node
        logger.debug("added node %d at (%.1f, %.1f)", node.id, x, y)
        return node.id

    def get_node(self, node_id: int) -> Optional[Node]:
        return self.nodes.get(node_id)

    def require_node(self, node_id: int) -> Node:
        """Like get_node, but raises InvalidNode for unknown ids."""
        node = self.nodes.get(node_id)
        if node is None:
            raise InvalidNode(node_id)
        return node

    def has_node(self, node_id: int) -> bool:
        return node_id in self.nodes

    # ==================================================================
    # ROLES
    # ==================================================================
    def set_start(self, node_id: int) -> None:
        node = self.require_node(node_id)
        if node.is_obstacle and self.obstacle_policy is ObstaclePolicy.FORBID:
            raise RoleConflict(node_id, "start")

        if self.start_id is not None and self.start_id in self.nodes:
            self.nodes[self.start_id].is_start = False
        if node.is_end:
            node.is_end = False
            self.end_id = None
        node.is_start = True
        self.start_id = node_id
        logger.debug("start node is now %d", node_id)

    def set_end(self, node_id: int) -> None:
        node = self.require_node(node_id)
        if node.is_obstacle and self.obstacle_policy is ObstaclePolicy.FORBID:
            raise RoleConflict(node_id, "end")

        if self.end_id is not None and self.end_id in self.nodes:
            self.nodes[self.end_id].is_end = False
        if node.is_start:
            node.is_start = False
            self.start_id = None
        node.is_end = True
        self.end_id = node_id
        logger.debug("end node is now %d", node_id)

    def toggle_obstacle(self, node_id: int) -> bool:
        """Flip the obstacle flag and return its new value."""
        node = self.require_node(node_id)
        if (
            not node.is_obstacle
            and (node.is_start or node.is_end)
            and self.obstacle_policy is ObstaclePolicy.FORBID
        ):
            raise RoleConflict(node_id, "an obstacle")
        node.is_obstacle = not node.is_obstacle
        logger.debug("node %d obstacle=%s", node_id, node.is_obstacle)
        return node.is_obstacle

    @property
    def start(self) -> Optional[Node]:
        return self.nodes.get(self.start_id) if self.start_id is not None else None

    @property
    def end(self) -> Optional[Node]:
        return self.nodes.get(self.end_id) if self.end_id is not None else None

    # ==================================================================
    # EDGES
    # ==================================================================
    def connect(self, a: int, b: int) -> Edge:
        """Add an undirected edge a ↔ b and update both adjacency lists."""
        node_a = self.require_node(a)
        node_b = self.require_node(b)
        if a == b:
            raise SelfConnection(a)

        edge = Edge(self._next_edge_id, a, b)
        self._next_edge_id += 1
        self.edges.append(edge)
        node_a.neighbors.append(b)
        node_b.neighbors.append(a)
        logger.debug("connected %d ↔ %d (edge %d)", a, b, edge.id)
        return edge

    def edges_between(self, a: int, b: int) -> List[Edge]:
        """Every edge joining a and b (there may be duplicates)."""
        return [e for e in self.edges if e.connects(a, b)]

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: int) -> List[int]:
        """Neighbour ids in edge-insertion order."""
        return list(self.require_node(node_id).neighbors)

    def flags(self, node_id: int) -> Dict[str, bool]:
        return self.require_node(node_id).flags()

    def degree(self, node_id: int) -> int:
        return len(self.require_node(node_id).neighbors)

    # ==================================================================
    # CLEAR / SNAPSHOT
    # ==================================================================
    def clear(self) -> None:
        self.nodes.clear()
        self.edges.clear()
        self.start_id = None
        self.end_id = None
        self._next_node_id = 0
        self._next_edge_id = 0
        logger.info("graph cleared")

    def snapshot(self) -> "Graph":
        """Independent copy; later edits to self do not reach it."""
        return Graph.from_dict(self.to_dict(), obstacle_policy=self.obstacle_policy)

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "nodes":        [n.to_dict() for n in self.nodes.values()],
            "edges":        [e.to_dict() for e in self.edges],
            "start_id":     self.start_id,
            "end_id":       self.end_id,
            "next_node_id": self._next_node_id,
            "next_edge_id": self._next_edge_id,
        }

    @classmethod
    def from_dict(cls, data: dict, obstacle_policy: ObstaclePolicy = ObstaclePolicy.PRESERVE) -> "Graph":
        g = cls(obstacle_policy=obstacle_policy)
        for nd in data.get("nodes", []):
            node = Node.from_dict(nd)
            g.nodes[node.id] = node
        # replaying edges in order rebuilds adjacency in the same order
        for ed in data.get("edges", []):
            edge = Edge.from_dict(ed)
            g.edges.append(edge)
            g.nodes[edge.node_a].neighbors.append(edge.node_b)
            g.nodes[edge.node_b].neighbors.append(edge.node_a)
        g.start_id = data.get("start_id")
        g.end_id = data.get("end_id")
        g._next_node_id = data.get("next_node_id", max(g.nodes, default=-1) + 1)
        g._next_edge_id = data.get("next_edge_id", len(g.edges))
        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def node_ids(self) -> List[int]:
        return list(self.nodes.keys())

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, start={self.start_id}, end={self.end_id})"
