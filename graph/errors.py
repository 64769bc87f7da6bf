"""
errors.py — Error Kinds
========================
Every failure the core can report.  All are recoverable: the caller
(usually the presentation layer) decides how to show them.
"""

from typing import Optional


class GraphError(Exception):
    """Base class for everything the core raises."""


class InvalidNode(GraphError):
    def __init__(self, node_id):
        self.node_id = node_id
        super().__init__(f"Unknown node: {node_id!r}")


class SelfConnection(GraphError):
    def __init__(self, node_id: int):
        self.node_id = node_id
        super().__init__(f"Cannot connect node {node_id} to itself")


class MissingEndpoints(GraphError):
    def __init__(self, start: Optional[int] = None, end: Optional[int] = None):
        self.start = start
        self.end = end
        super().__init__("Please set start and end nodes!")


class NoPathFound(GraphError):
    def __init__(self, start: int, end: int):
        self.start = start
        self.end = end
        super().__init__(f"No path found from {start} to {end}")


class NoPathRecorded(GraphError):
    """Predecessor chain broke before reaching the start node."""

    def __init__(self, node_id: int):
        self.node_id = node_id
        super().__init__(f"No predecessor recorded for node {node_id}")


class RoleConflict(GraphError):
    """Start / end node and obstacle on the same node (forbid policy)."""

    def __init__(self, node_id: int, role: str):
        self.node_id = node_id
        self.role = role
        super().__init__(f"Node {node_id} cannot be {role}: start/end nodes may not be obstacles")
