"""
Unit tests for frame planning and the animation scheduler.
"""

import asyncio

import pytest

from engine import (
    AnimationScheduler,
    Frame,
    FrameKind,
    RecordingListener,
    SchedulerState,
    build_frames,
    dispatch,
)


class TestBuildFrames:
    """The frame plan for one search."""

    def test_line_plan(self, line_graph):
        frames = list(build_frames(line_graph, 0, 2, delay_ms=300))
        assert frames == [
            Frame(FrameKind.VISITED, node_id=0, delay_ms=300),
            Frame(FrameKind.VISITED, node_id=1, delay_ms=300),
            Frame(FrameKind.VISITED, node_id=2, delay_ms=0),
            Frame(FrameKind.PATH_EDGE, node_id=2, other_id=1),
            Frame(FrameKind.PATH_EDGE, node_id=1, other_id=0),
            Frame(FrameKind.PATH_NODE, node_id=1),
            Frame(FrameKind.RESULT, found=True, length=2),
        ]

    def test_not_found_plan(self, make_graph):
        frames = list(build_frames(make_graph(3, [(0, 1)]), 0, 2, delay_ms=50))
        assert [f.kind for f in frames] == [FrameKind.VISITED, FrameKind.VISITED, FrameKind.RESULT]
        assert frames[-1] == Frame(FrameKind.RESULT, found=False, length=None)
        # every visited node pauses when the end is never reached
        assert [f.delay_ms for f in frames[:2]] == [50, 50]

    def test_start_and_end_never_path_nodes(self, make_graph):
        g = make_graph(5, [(0, 1), (1, 2), (2, 3), (3, 4)])
        frames = list(build_frames(g, 0, 4))
        path_nodes = [f.node_id for f in frames if f.kind is FrameKind.PATH_NODE]
        assert path_nodes == [3, 2, 1]

    def test_direct_neighbour_has_no_path_nodes(self, triangle_graph):
        frames = list(build_frames(triangle_graph, 0, 2))
        assert [f.kind for f in frames if f.kind is not FrameKind.VISITED] == [
            FrameKind.PATH_EDGE,
            FrameKind.RESULT,
        ]

    def test_plan_is_restartable(self, line_graph):
        assert list(build_frames(line_graph, 0, 2)) == list(build_frames(line_graph, 0, 2))

    def test_plan_is_lazy(self, line_graph):
        frames = build_frames(line_graph, 0, 2)
        assert next(frames) == Frame(FrameKind.VISITED, node_id=0, delay_ms=300)


class TestDispatch:
    """Frame → listener routing."""

    def test_each_kind_reaches_its_hook(self):
        listener = RecordingListener()
        for frame in (
            Frame(FrameKind.VISITED, node_id=3),
            Frame(FrameKind.PATH_EDGE, node_id=3, other_id=1),
            Frame(FrameKind.PATH_NODE, node_id=1),
            Frame(FrameKind.RESULT, found=True, length=2),
        ):
            dispatch(frame, listener)
        assert listener.events == [
            ("visited", 3),
            ("path-edge", 3, 1),
            ("path-node", 1),
            ("result", True, 2),
        ]


class TestScheduler:
    """Paced playback on the event loop."""

    def test_plays_in_order_with_delays(self, line_graph, clock, listener):
        scheduler = AnimationScheduler(delay_ms=300, sleep=clock.sleep)

        async def scenario():
            scheduler.start(build_frames(line_graph, 0, 2, 300), listener)
            return await scheduler.wait()

        assert asyncio.run(scenario()) is True
        assert listener.visited == [0, 1, 2]
        assert listener.result == ("result", True, 2)
        assert clock.sleeps == [0.3, 0.3]
        assert scheduler.state is SchedulerState.FINISHED

    def test_new_start_supersedes_running_one(self, line_graph, clock, listener):
        scheduler = AnimationScheduler(delay_ms=300, sleep=clock.sleep)

        async def scenario():
            first = scheduler.start(build_frames(line_graph, 0, 2, 300), listener)
            await asyncio.sleep(0)
            second = scheduler.start(build_frames(line_graph, 2, 0, 300), listener)
            finished = await scheduler.wait(second)
            return first, finished

        first, finished = asyncio.run(scenario())
        assert first.cancelled()
        assert finished is True
        assert scheduler.generation == 2
        # the superseded run got as far as its first node and no further
        assert listener.events[0] == ("visited", 0)
        assert listener.visited[1:] == [2, 1, 0]
        assert [e for e in listener.events if e[0] == "result"] == [("result", True, 2)]

    def test_cancel(self, line_graph, clock, listener):
        scheduler = AnimationScheduler(sleep=clock.sleep)

        async def scenario():
            task = scheduler.start(build_frames(line_graph, 0, 2), listener)
            await asyncio.sleep(0)
            assert scheduler.cancel() is True
            return await scheduler.wait(task)

        assert asyncio.run(scenario()) is False
        assert scheduler.state is SchedulerState.CANCELLED
        assert listener.result is None

    def test_cancel_when_idle(self):
        scheduler = AnimationScheduler()
        assert scheduler.cancel() is False
        assert scheduler.state is SchedulerState.IDLE

    def test_listener_error_propagates(self, line_graph, clock):
        class Broken(RecordingListener):
            def on_path_node(self, node_id):
                raise RuntimeError("render failed")

        scheduler = AnimationScheduler(sleep=clock.sleep)

        async def scenario():
            scheduler.start(build_frames(line_graph, 0, 2), Broken())
            return await scheduler.wait()

        with pytest.raises(RuntimeError, match="render failed"):
            asyncio.run(scenario())
        assert scheduler.state is SchedulerState.FAILED
        assert not scheduler.is_playing
