"""
Tests for the Workspace facade: the inbound calls and outbound
notifications a presentation layer sees.
"""

import asyncio

import pytest

from config import ObstaclePolicy, SearchConfig
from engine import Mode, SchedulerState, Workspace
from graph import InvalidNode, MissingEndpoints, RoleConflict


def build_line(ws: Workspace) -> None:
    for i in range(3):
        ws.add_node(50.0 * i, 50.0)
    ws.connect(0, 1)
    ws.connect(1, 2)
    ws.set_start(0)
    ws.set_end(2)


class TestSearch:
    """Animated searches through the facade."""

    def test_run_search_notifies_listener(self, workspace, listener, clock):
        build_line(workspace)
        assert asyncio.run(workspace.run_search()) is True
        assert listener.events == [
            ("visited", 0),
            ("visited", 1),
            ("visited", 2),
            ("path-edge", 2, 1),
            ("path-edge", 1, 0),
            ("path-node", 1),
            ("result", True, 2),
        ]
        assert clock.sleeps == [0.3, 0.3]

    def test_not_found_is_a_result_not_an_error(self, workspace, listener):
        for i in range(3):
            workspace.add_node(0, 0)
        workspace.connect(0, 1)
        workspace.set_start(0)
        workspace.set_end(2)
        assert asyncio.run(workspace.run_search()) is True
        assert listener.result == ("result", False, None)

    def test_missing_endpoints(self, workspace):
        workspace.add_node(0, 0)
        workspace.set_start(0)
        with pytest.raises(MissingEndpoints):
            workspace.plan_search()

    def test_explicit_endpoints_override_designation(self, workspace, listener):
        build_line(workspace)
        asyncio.run(workspace.run_search(2, 1))
        assert listener.visited == [2, 1]
        assert listener.result == ("result", True, 1)

    def test_unknown_explicit_endpoint(self, workspace):
        build_line(workspace)
        with pytest.raises(InvalidNode):
            workspace.plan_search(0, 9)

    def test_edits_during_animation_do_not_reach_search(self, workspace, listener):
        build_line(workspace)

        async def scenario():
            task = workspace.start_search()
            await asyncio.sleep(0)
            workspace.toggle_obstacle(1)
            workspace.connect(0, 2)
            return await workspace.scheduler.wait(task)

        assert asyncio.run(scenario()) is True
        assert listener.visited == [0, 1, 2]
        assert listener.result == ("result", True, 2)
        assert workspace.graph.get_node(1).is_obstacle

    def test_second_search_supersedes_first(self, workspace, listener):
        build_line(workspace)

        async def scenario():
            first = workspace.start_search()
            await asyncio.sleep(0)
            return first, await workspace.run_search(2, 0)

        first, finished = asyncio.run(scenario())
        assert first.cancelled() and finished
        assert [e for e in listener.events if e[0] == "result"] == [("result", True, 2)]

    def test_clear_cancels_running_search(self, workspace, listener):
        build_line(workspace)

        async def scenario():
            task = workspace.start_search()
            await asyncio.sleep(0)
            workspace.clear()
            return await workspace.scheduler.wait(task)

        assert asyncio.run(scenario()) is False
        assert workspace.scheduler.state is SchedulerState.CANCELLED
        assert listener.result is None
        assert workspace.graph.node_count() == 0


class TestPlanSearch:
    """Un-paced planning for request/response front ends."""

    def test_metrics(self, workspace):
        build_line(workspace)
        rec = workspace.plan_search()
        m = rec.metrics
        assert (m.start, m.end) == (0, 2)
        assert m.path_found and m.path_length == 2
        assert m.nodes_visited == 3
        assert m.animation_ms == 600
        assert m.total_frames == 7
        assert rec.visit_order == [0, 1, 2]

    def test_replay_matches_live_run(self, workspace, listener):
        build_line(workspace)
        asyncio.run(workspace.run_search())
        live = list(listener.events)
        listener.events.clear()
        workspace.plan_search().replay(listener)
        assert listener.events == live

    def test_export_is_json_ready(self, workspace):
        build_line(workspace)
        data = workspace.plan_search().export()
        assert data["frames"][0] == {
            "kind": "visited", "node_id": 0, "other_id": None,
            "found": None, "length": None, "delay_ms": 300,
        }
        assert data["metrics"]["path_length"] == 2

    def test_custom_delay(self, listener):
        ws = Workspace(config=SearchConfig(visit_delay_ms=20), listener=listener)
        build_line(ws)
        assert ws.plan_search().metrics.animation_ms == 40


class TestEditing:
    """Editing through the facade."""

    def test_clicks_build_a_graph(self, workspace):
        workspace.select_mode(Mode.PLACING_NODES)
        a = workspace.place_node(10, 10)
        b = workspace.place_node(90, 90)
        workspace.select_mode(Mode.CONNECTING)
        workspace.click_node(a)
        workspace.click_node(b)
        assert workspace.graph.neighbours(a) == [b]

    def test_clear_drops_selection_but_keeps_mode(self, workspace):
        workspace.add_node(0, 0)
        workspace.select_mode(Mode.CONNECTING)
        workspace.click_node(0)
        workspace.clear()
        assert workspace.interaction.mode is Mode.CONNECTING
        assert workspace.interaction.pending_source is None

    def test_placing_continues_after_clear(self, workspace):
        workspace.select_mode(Mode.PLACING_NODES)
        workspace.place_node(10, 10)
        workspace.clear()
        assert workspace.place_node(5, 5) == 0

    def test_forbid_policy_flows_through(self, listener):
        ws = Workspace(config=SearchConfig(obstacle_policy=ObstaclePolicy.FORBID), listener=listener)
        ws.add_node(0, 0)
        ws.toggle_obstacle(0)
        with pytest.raises(RoleConflict):
            ws.set_start(0)

    def test_round_trip(self, workspace, search_config):
        build_line(workspace)
        workspace.select_mode(Mode.CONNECTING)
        workspace.click_node(1)
        restored = Workspace.from_dict(workspace.to_dict(), config=search_config)
        assert restored.graph.to_dict() == workspace.graph.to_dict()
        assert restored.interaction.state == workspace.interaction.state
