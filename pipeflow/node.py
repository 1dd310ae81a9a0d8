"""Channels and the interface shared by every pipeline stage."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections import deque
from typing import AsyncIterator, Deque, Generic, List, TypeVar

T = TypeVar("T")


class ChannelClosed(Exception):
    """Raised when a closed channel is sent on, closed again, or drained."""


class Channel(Generic[T]):
    """An asyncio channel with a fixed buffer.

    A size of zero makes the channel unbuffered: ``send`` returns only once a
    receiver has taken the item.
    """

    def __init__(self, maxsize: int = 0) -> None:
        if maxsize < 0:
            raise ValueError("channel size must not be negative")
        self._maxsize = maxsize
        self._items: Deque[T] = deque()
        self._closed = False
        self._sent = 0
        self._received = 0
        self._waiters: List[asyncio.Future] = []

    async def _wait(self) -> None:
        future = asyncio.get_running_loop().create_future()
        self._waiters.append(future)
        try:
            await future
        finally:
            if future in self._waiters:
                self._waiters.remove(future)

    def _wake(self) -> None:
        waiters, self._waiters = self._waiters, []
        for future in waiters:
            if not future.done():
                future.set_result(None)

    async def send(self, item: T) -> None:
        """Put an item on the channel, waiting for room (or a receiver)."""
        capacity = max(self._maxsize, 1)
        while not self._closed and len(self._items) >= capacity:
            await self._wait()
        if self._closed:
            raise ChannelClosed("send on closed channel")
        self._items.append(item)
        self._sent += 1
        ticket = self._sent
        self._wake()
        if self._maxsize == 0:
            while self._received < ticket and not self._closed:
                await self._wait()

    async def receive(self) -> T:
        """Take the next item; raise ChannelClosed once closed and drained."""
        while not self._items:
            if self._closed:
                raise ChannelClosed("receive from closed channel")
            await self._wait()
        item = self._items.popleft()
        self._received += 1
        self._wake()
        return item

    def close(self) -> None:
        """Close the channel; buffered items can still be received."""
        if self._closed:
            raise ChannelClosed("close of closed channel")
        self._closed = True
        self._wake()

    async def __aiter__(self) -> AsyncIterator[T]:
        while True:
            try:
                item = await self.receive()
            except ChannelClosed:
                return
            yield item


class Node(ABC):
    """A pipeline stage reading from input channels and writing to outputs."""

    @abstractmethod
    def inputs(self) -> List[Channel]:
        """Channels this node reads from."""

    @abstractmethod
    def outputs(self) -> List[Channel]:
        """Channels this node writes to."""

    @abstractmethod
    async def run(self) -> None:
        """Process items until the input is exhausted or the task is cancelled."""

    @abstractmethod
    def name(self) -> str:
        """A short name for the node."""