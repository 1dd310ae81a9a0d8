"""A node hashing files with MD5 in parallel."""

from __future__ import annotations

import asyncio
import hashlib
import logging
from dataclasses import dataclass
from typing import List, Optional, Set

from .node import Channel, Node

log = logging.getLogger(__name__)

_CHUNK = 64 * 1024


@dataclass(frozen=True)
class MD5Result:
    """The hash of one file, or the error met while reading it."""

    path: str
    hash: str = ""
    error: Optional[Exception] = None


def _md5_file(path: str) -> str:
    digest = hashlib.md5(usedforsecurity=False)
    with open(path, "rb") as handle:
        for chunk in iter(lambda: handle.read(_CHUNK), b""):
            digest.update(chunk)
    return digest.hexdigest()


class MD5Node(Node):
    """Reads paths and emits an MD5Result for each, hashing several at once."""

    def __init__(self, parallelism: int, buffer_size: int = 0) -> None:
        if parallelism < 1:
            raise ValueError("parallelism must be at least 1")
        self._parallelism = parallelism
        self._input: Optional[Channel] = None
        self._output: Channel = Channel(buffer_size)

    def set_input(self, channel: Channel) -> None:
        log.debug("[MD5Node] SetInput called")
        self._input = channel

    def inputs(self) -> List[Channel]:
        return [] if self._input is None else [self._input]

    def outputs(self) -> List[Channel]:
        return [self._output]

    def output(self) -> Channel:
        return self._output

    def name(self) -> str:
        return "MD5Node"

    async def _hash_one(self, path: str, slots: asyncio.Semaphore) -> None:
        try:
            try:
                digest = await asyncio.to_thread(_md5_file, path)
            except OSError as exc:
                result = MD5Result(path, error=exc)
            else:
                result = MD5Result(path, hash=digest)
            await self._output.send(result)
        finally:
            slots.release()

    async def run(self) -> None:
        log.debug("[MD5Node] Run started")
        tasks: Set[asyncio.Task] = set()
        try:
            if self._input is None:
                raise RuntimeError("MD5Node has no input connected")
            slots = asyncio.Semaphore(self._parallelism)
            async for path in self._input:
                await slots.acquire()
                task = asyncio.create_task(self._hash_one(path, slots))
                tasks.add(task)
                task.add_done_callback(tasks.discard)
            if tasks:
                await asyncio.gather(*tasks)
        finally:
            for task in tasks:
                task.cancel()
            if tasks:
                await asyncio.gather(*tasks, return_exceptions=True)
            self._output.close()
            log.debug("[MD5Node] Run finished")