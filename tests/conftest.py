"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

import asyncio
from typing import Iterable, Tuple

import pytest

from config import ObstaclePolicy, SearchConfig
from engine import RecordingListener, Workspace
from graph import Graph


class FakeClock:
    """Stands in for asyncio.sleep: records every delay and yields once."""

    def __init__(self):
        self.sleeps = []

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        await asyncio.sleep(0)


@pytest.fixture
def make_graph():
    """Factory: make_graph(n, edges, obstacles=(), policy=PRESERVE) -> Graph."""

    def _make(
        n: int,
        edges: Iterable[Tuple[int, int]] = (),
        obstacles: Iterable[int] = (),
        policy: ObstaclePolicy = ObstaclePolicy.PRESERVE,
    ) -> Graph:
        g = Graph(obstacle_policy=policy)
        for i in range(n):
            g.add_node(40.0 * i, 40.0 * i)
        for a, b in edges:
            g.connect(a, b)
        for node_id in obstacles:
            g.toggle_obstacle(node_id)
        return g

    return _make


@pytest.fixture
def line_graph(make_graph) -> Graph:
    """0 - 1 - 2"""
    return make_graph(3, [(0, 1), (1, 2)])


@pytest.fixture
def triangle_graph(make_graph) -> Graph:
    """0 - 1 - 2 plus the shortcut 0 - 2"""
    return make_graph(3, [(0, 1), (1, 2), (0, 2)])


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def search_config() -> SearchConfig:
    return SearchConfig(visit_delay_ms=300, obstacle_policy=ObstaclePolicy.PRESERVE)


@pytest.fixture
def workspace(search_config, listener, clock) -> Workspace:
    return Workspace(config=search_config, listener=listener, sleep=clock.sleep)
