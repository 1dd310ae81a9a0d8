"""Fluent assembly of linear pipelines."""

from __future__ import annotations

from typing import Any, Callable, Optional

from .graph import Graph
from .node import Channel, Node
from .nodes import FilterNode, MapNode


class Builder:
    """Chains nodes together, wiring each one's output to the next one's input."""

    def __init__(self) -> None:
        self._graph = Graph()
        self._prev: Optional[Node] = None
        self._buffer_size = 0

    def with_buffer_size(self, size: int) -> "Builder":
        """Set the buffer size used by nodes the builder creates itself."""
        if size < 0:
            raise ValueError("buffer size must not be negative")
        self._buffer_size = size
        return self

    def source(self, node: Node) -> "Builder":
        """Start the pipeline with a node that produces items."""
        if not isinstance(node, Node):
            raise TypeError(f"source: unsupported node type: {type(node).__name__}")
        self._graph.add_node(node)
        self._prev = node
        return self

    def pipe(self, node: Node) -> "Builder":
        """Add an intermediate node fed by the previous node's output."""
        self._connect(node, "pipe")
        self._graph.add_node(node)
        self._prev = node
        return self

    def sink(self, node: Node) -> "Builder":
        """Finish the pipeline with a node that consumes items."""
        self._connect(node, "sink")
        self._graph.add_node(node)
        self._prev = node
        return self

    def map(self, fn: Callable[[Any], Any]) -> "Builder":
        """Add a node applying ``fn`` to every item."""
        if not callable(fn):
            raise TypeError(f"map: unsupported function type: {type(fn).__name__}")
        return self.pipe(MapNode(fn, self._buffer_size))

    def filter(self, fn: Callable[[Any], bool]) -> "Builder":
        """Add a node keeping only the items for which ``fn`` is true."""
        if not callable(fn):
            raise TypeError(f"filter: unsupported function type: {type(fn).__name__}")
        return self.pipe(FilterNode(fn, self._buffer_size))

    async def run(self) -> None:
        """Run every node of the pipeline; raise the first error met."""
        await self._graph.run()

    def _previous_output(self, step: str) -> Channel:
        if self._prev is None:
            raise TypeError(f"{step}: no previous node to take input from")
        output = getattr(self._prev, "output", None)
        if not callable(output):
            raise TypeError(
                f"{step}: node {type(self._prev).__name__} has no output"
            )
        return output()

    def _connect(self, node: Node, step: str) -> None:
        if not isinstance(node, Node):
            raise TypeError(f"{step}: unsupported node type: {type(node).__name__}")
        set_input = getattr(node, "set_input", None)
        if not callable(set_input):
            raise TypeError(
                f"{step}: node {type(node).__name__} does not accept an input"
            )
        set_input(self._previous_output(step))