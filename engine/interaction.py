"""
interaction.py — Editing Mode State Machine
============================================
Turns primitive UI events (node placed, node clicked, edge requested)
into Graph mutations, depending on the current editing mode.

State machine:
    any  →  select_mode(m)  →  m            (pending connect source dropped)
    CONNECTING(None)  →  click a     →  CONNECTING(a)
    CONNECTING(a)     →  click b≠a   →  connect(a, b), CONNECTING(None)
    CONNECTING(a)     →  click a     →  CONNECTING(a)       (no self-loop)

The state is an immutable InteractionState value; the machine swaps it
for a new one on every transition.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from graph import Graph, Edge

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------------
class Mode(Enum):
    IDLE              = "idle"       # clicks do nothing
    PLACING_NODES     = "place"
    SETTING_START     = "start"
    SETTING_END       = "end"
    TOGGLING_OBSTACLE = "obstacle"
    CONNECTING        = "connect"


@dataclass(frozen=True)
class InteractionState:
    mode:           Mode          = Mode.IDLE
    pending_source: Optional[int] = None   # CONNECTING only

    def to_dict(self) -> dict:
        return {"mode": self.mode.value, "pending_source": self.pending_source}

    @classmethod
    def from_dict(cls, data: dict) -> "InteractionState":
        return cls(mode=Mode(data.get("mode", "idle")), pending_source=data.get("pending_source"))


# ---------------------------------------------------------------------------
# Click outcome: what a node click ended up doing
# ---------------------------------------------------------------------------
class ClickAction(Enum):
    IGNORED         = "ignored"
    START_SET       = "start-set"
    END_SET         = "end-set"
    OBSTACLE_ON     = "obstacle-on"
    OBSTACLE_OFF    = "obstacle-off"
    SOURCE_SELECTED = "source-selected"
    CONNECTED       = "connected"


@dataclass(frozen=True)
class ClickOutcome:
    action:  ClickAction
    node_id: int
    edge:    Optional[Edge] = None

    def to_dict(self) -> dict:
        return {
            "action":  self.action.value,
            "node_id": self.node_id,
            "edge":    self.edge.to_dict() if self.edge else None,
        }


# ---------------------------------------------------------------------------
# Machine
# ---------------------------------------------------------------------------
class InteractionMachine:
    """
    Attributes:
        graph : The Graph every transition mutates.
        state : Current InteractionState.
    """

    def __init__(self, graph: Graph, state: Optional[InteractionState] = None):
        self.graph = graph
        self.state = state or InteractionState()

    @property
    def mode(self) -> Mode:
        return self.state.mode

    @property
    def pending_source(self) -> Optional[int]:
        return self.state.pending_source

    def select_mode(self, mode: Mode) -> None:
        if self.state.pending_source is not None:
            logger.debug("mode change drops pending source %d", self.state.pending_source)
        self.state = InteractionState(mode=mode)

    def reset(self) -> None:
        """Drop any pending selection; the editing mode is kept."""
        self.state = replace(self.state, pending_source=None)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def place_node(self, x: float, y: float) -> Optional[int]:
        """Canvas click.  Adds a node only while placing nodes."""
        if self.state.mode is not Mode.PLACING_NODES:
            return None
        return self.graph.add_node(x, y)

    def click_node(self, node_id: int) -> ClickOutcome:
        self.graph.require_node(node_id)
        mode = self.state.mode

        if mode is Mode.SETTING_START:
            self.graph.set_start(node_id)
            return ClickOutcome(ClickAction.START_SET, node_id)

        if mode is Mode.SETTING_END:
            self.graph.set_end(node_id)
            return ClickOutcome(ClickAction.END_SET, node_id)

        if mode is Mode.TOGGLING_OBSTACLE:
            on = self.graph.toggle_obstacle(node_id)
            return ClickOutcome(ClickAction.OBSTACLE_ON if on else ClickAction.OBSTACLE_OFF, node_id)

        if mode is Mode.CONNECTING:
            source = self.state.pending_source
            if source is None:
                self.state = replace(self.state, pending_source=node_id)
                return ClickOutcome(ClickAction.SOURCE_SELECTED, node_id)
            if source == node_id:
                return ClickOutcome(ClickAction.IGNORED, node_id)
            edge = self.graph.connect(source, node_id)
            self.state = replace(self.state, pending_source=None)
            return ClickOutcome(ClickAction.CONNECTED, node_id, edge)

        return ClickOutcome(ClickAction.IGNORED, node_id)

    def request_edge(self, a: int, b: int) -> Edge:
        """Explicit edge request from the presentation layer (any mode)."""
        return self.graph.connect(a, b)

    def __repr__(self) -> str:
        return f"InteractionMachine(mode={self.state.mode.value}, pending={self.state.pending_source})"
