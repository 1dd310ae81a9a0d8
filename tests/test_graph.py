import asyncio

import pytest

from pipeflow.graph import Graph
from pipeflow.node import Node


class _Base(Node):
    def inputs(self):
        return []

    def outputs(self):
        return []

    def name(self):
        return type(self).__name__


class Recorder(_Base):
    def __init__(self, log, label):
        self.log = log
        self.label = label

    async def run(self):
        await asyncio.sleep(0)
        self.log.append(self.label)


class Failing(_Base):
    def __init__(self, delay, error):
        self.delay = delay
        self.error = error

    async def run(self):
        await asyncio.sleep(self.delay)
        raise self.error


class Waiter(_Base):
    def __init__(self):
        self.cancelled = False

    async def run(self):
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.cancelled = True
            raise


@pytest.mark.asyncio
async def test_empty_graph_runs():
    graph = Graph()
    assert len(graph) == 0
    assert await graph.run() is None


@pytest.mark.asyncio
async def test_all_nodes_run():
    log = []
    graph = Graph()
    for label in ("a", "b", "c"):
        graph.add_node(Recorder(log, label))
    assert len(graph) == 3
    await graph.run()
    assert sorted(log) == ["a", "b", "c"]


@pytest.mark.asyncio
async def test_failure_cancels_other_nodes():
    waiter = Waiter()
    graph = Graph()
    graph.add_node(waiter)
    graph.add_node(Failing(0, ValueError("boom")))
    with pytest.raises(ValueError, match="boom"):
        await asyncio.wait_for(graph.run(), 2)
    assert waiter.cancelled is True


@pytest.mark.asyncio
async def test_first_error_wins():
    graph = Graph()
    graph.add_node(Failing(0.2, KeyError("late")))
    graph.add_node(Failing(0, ValueError("early")))
    with pytest.raises(ValueError, match="early"):
        await asyncio.wait_for(graph.run(), 2)


@pytest.mark.asyncio
async def test_outer_timeout_cancels_nodes():
    waiter = Waiter()
    graph = Graph()
    graph.add_node(waiter)
    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(graph.run(), 0.05)
    assert waiter.cancelled is True