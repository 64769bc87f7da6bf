"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Node, Edge, NodeRole
    from graph import GraphError, InvalidNode, SelfConnection, …
"""

from graph.node   import Node, NodeRole
from graph.edge   import Edge
from graph.graph  import Graph
from graph.errors import (
    GraphError,
    InvalidNode,
    SelfConnection,
    MissingEndpoints,
    NoPathFound,
    NoPathRecorded,
    RoleConflict,
)

__all__ = [
    "Node",       "NodeRole",
    "Edge",
    "Graph",
    "GraphError",
    "InvalidNode",
    "SelfConnection",
    "MissingEndpoints",
    "NoPathFound",
    "NoPathRecorded",
    "RoleConflict",
]
