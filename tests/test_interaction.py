"""
Unit tests for the editing-mode state machine.
"""

import pytest

from engine import ClickAction, InteractionMachine, InteractionState, Mode
from graph import Graph, InvalidNode


@pytest.fixture
def machine(make_graph) -> InteractionMachine:
    return InteractionMachine(make_graph(3))


class TestModes:
    """Mode selection."""

    def test_starts_idle(self):
        m = InteractionMachine(Graph())
        assert m.state == InteractionState(Mode.IDLE, None)

    def test_idle_clicks_do_nothing(self, machine):
        outcome = machine.click_node(0)
        assert outcome.action is ClickAction.IGNORED
        assert machine.place_node(5, 5) is None
        assert machine.graph.node_count() == 3

    def test_mode_switch_drops_pending_source(self, machine):
        machine.select_mode(Mode.CONNECTING)
        machine.click_node(0)
        machine.select_mode(Mode.SETTING_START)
        machine.select_mode(Mode.CONNECTING)
        assert machine.pending_source is None
        machine.click_node(1)
        assert machine.graph.edge_count() == 0

    def test_any_mode_reachable_from_any_mode(self, machine):
        for src in Mode:
            for dst in Mode:
                machine.select_mode(src)
                machine.select_mode(dst)
                assert machine.mode is dst


class TestClicks:
    """Node and canvas clicks in each mode."""

    def test_place_node(self, machine):
        machine.select_mode(Mode.PLACING_NODES)
        assert machine.place_node(100, 50) == 3
        assert machine.graph.get_node(3).x == 100

    def test_node_click_while_placing_is_ignored(self, machine):
        machine.select_mode(Mode.PLACING_NODES)
        assert machine.click_node(1).action is ClickAction.IGNORED

    def test_set_start_and_end(self, machine):
        machine.select_mode(Mode.SETTING_START)
        assert machine.click_node(0).action is ClickAction.START_SET
        machine.select_mode(Mode.SETTING_END)
        assert machine.click_node(2).action is ClickAction.END_SET
        assert (machine.graph.start_id, machine.graph.end_id) == (0, 2)

    def test_toggle_obstacle(self, machine):
        machine.select_mode(Mode.TOGGLING_OBSTACLE)
        assert machine.click_node(1).action is ClickAction.OBSTACLE_ON
        assert machine.click_node(1).action is ClickAction.OBSTACLE_OFF

    def test_unknown_node_raises_in_every_mode(self, machine):
        for mode in Mode:
            machine.select_mode(mode)
            with pytest.raises(InvalidNode):
                machine.click_node(42)


class TestConnecting:
    """Two-click edge creation."""

    def test_two_clicks_connect(self, machine):
        machine.select_mode(Mode.CONNECTING)
        first = machine.click_node(0)
        assert first.action is ClickAction.SOURCE_SELECTED
        assert machine.pending_source == 0

        second = machine.click_node(2)
        assert second.action is ClickAction.CONNECTED
        assert second.edge.connects(0, 2)
        assert machine.pending_source is None
        assert machine.mode is Mode.CONNECTING

    def test_same_node_twice_is_noop(self, machine):
        machine.select_mode(Mode.CONNECTING)
        machine.click_node(1)
        assert machine.click_node(1).action is ClickAction.IGNORED
        assert machine.graph.edge_count() == 0
        assert machine.pending_source == 1

    def test_chain_of_connections(self, machine):
        machine.select_mode(Mode.CONNECTING)
        for node_id in (0, 1, 1, 2):
            machine.click_node(node_id)
        assert machine.graph.neighbours(1) == [0, 2]

    def test_request_edge_works_in_any_mode(self, machine):
        edge = machine.request_edge(0, 1)
        assert edge.connects(1, 0)
        assert machine.mode is Mode.IDLE

    def test_state_round_trip(self, machine):
        machine.select_mode(Mode.CONNECTING)
        machine.click_node(2)
        restored = InteractionState.from_dict(machine.state.to_dict())
        assert restored == machine.state

    def test_reset_keeps_mode(self, machine):
        machine.select_mode(Mode.CONNECTING)
        machine.click_node(0)
        machine.reset()
        assert machine.state == InteractionState(Mode.CONNECTING, None)
