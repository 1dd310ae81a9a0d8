"""General-purpose nodes: a directory walker, map, filter and a printer."""

from __future__ import annotations

import logging
import os
import stat
import sys
from typing import Any, Callable, Iterator, List, Optional, TextIO

from .node import Channel, Node

log = logging.getLogger(__name__)


def _walk(root: str) -> Iterator[str]:
    """Yield every non-directory path under root in lexical order."""
    info = os.lstat(root)
    if not stat.S_ISDIR(info.st_mode):
        yield root
        return
    yield from _walk_dir(root)


def _walk_dir(path: str) -> Iterator[str]:
    for name in sorted(os.listdir(path)):
        child = os.path.normpath(os.path.join(path, name))
        info = os.lstat(child)
        if stat.S_ISDIR(info.st_mode):
            yield from _walk_dir(child)
        else:
            yield child


def _connected(node: Node, channel: Optional[Channel]) -> Channel:
    if channel is None:
        raise RuntimeError(f"{node.name()} has no input connected")
    return channel


class FileWalker(Node):
    """Source node emitting the path of every file below a root."""

    def __init__(self, root: "str | os.PathLike[str]") -> None:
        self._root = os.fspath(root)
        self._output: Channel = Channel()

    def inputs(self) -> List[Channel]:
        return []

    def outputs(self) -> List[Channel]:
        return [self._output]

    def output(self) -> Channel:
        return self._output

    def name(self) -> str:
        return "FileWalker"

    async def run(self) -> None:
        log.debug("[FileWalker] Run started")
        try:
            for path in _walk(self._root):
                await self._output.send(path)
        finally:
            self._output.close()
            log.debug("[FileWalker] Run finished")


class FilterNode(Node):
    """Passes on only the items for which ``fn`` returns true."""

    def __init__(self, fn: Callable[[Any], bool], buffer_size: int = 0) -> None:
        self._fn = fn
        self._input: Optional[Channel] = None
        self._output: Channel = Channel(buffer_size)

    def set_input(self, channel: Channel) -> None:
        log.debug("[FilterNode] SetInput called")
        self._input = channel

    def inputs(self) -> List[Channel]:
        return [] if self._input is None else [self._input]

    def outputs(self) -> List[Channel]:
        return [self._output]

    def output(self) -> Channel:
        return self._output

    def name(self) -> str:
        return "FilterNode"

    async def run(self) -> None:
        log.debug("[FilterNode] Run started")
        try:
            async for value in _connected(self, self._input):
                if self._fn(value):
                    await self._output.send(value)
        finally:
            self._output.close()
            log.debug("[FilterNode] Run finished")


class MapNode(Node):
    """Passes on ``fn(item)`` for every item it receives."""

    def __init__(self, fn: Callable[[Any], Any], buffer_size: int = 0) -> None:
        self._fn = fn
        self._input: Optional[Channel] = None
        self._output: Channel = Channel(buffer_size)

    def set_input(self, channel: Channel) -> None:
        log.debug("[MapNode] SetInput called")
        self._input = channel

    def inputs(self) -> List[Channel]:
        return [] if self._input is None else [self._input]

    def outputs(self) -> List[Channel]:
        return [self._output]

    def output(self) -> Channel:
        return self._output

    def name(self) -> str:
        return "MapNode"

    async def run(self) -> None:
        log.debug("[MapNode] Run started")
        try:
            async for value in _connected(self, self._input):
                await self._output.send(self._fn(value))
        finally:
            self._output.close()
            log.debug("[MapNode] Run finished")


class PrinterNode(Node):
    """Sink writing one line per hash result to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream
        self._input: Optional[Channel] = None

    def set_input(self, channel: Channel) -> None:
        self._input = channel

    def inputs(self) -> List[Channel]:
        return [] if self._input is None else [self._input]

    def outputs(self) -> List[Channel]:
        return []

    def name(self) -> str:
        return "PrinterNode"

    async def run(self) -> None:
        async for result in _connected(self, self._input):
            stream = self._stream if self._stream is not None else sys.stdout
            if result.error is not None:
                print(f"ERROR {result.path}: {result.error}", file=stream)
            else:
                print(f"OK {result.path}: {result.hash}", file=stream)