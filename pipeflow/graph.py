"""Running a set of nodes together."""

from __future__ import annotations

import asyncio
from typing import List, Optional

from .node import Node


class Graph:
    """Runs every added node concurrently; the first failure stops the rest."""

    def __init__(self) -> None:
        self._nodes: List[Node] = []

    def add_node(self, node: Node) -> None:
        """Add a node to be started by ``run``."""
        self._nodes.append(node)

    def __len__(self) -> int:
        return len(self._nodes)

    async def run(self) -> None:
        """Run all nodes; raise the first error any of them raised."""
        tasks = [asyncio.create_task(node.run(), name=node.name()) for node in self._nodes]
        first_error: Optional[BaseException] = None
        pending = set(tasks)
        try:
            while pending:
                done, pending = await asyncio.wait(
                    pending, return_when=asyncio.FIRST_COMPLETED
                )
                for task in tasks:
                    if task not in done or task.cancelled():
                        continue
                    error = task.exception()
                    if error is not None and first_error is None:
                        first_error = error
                        for other in pending:
                            other.cancel()
        except asyncio.CancelledError:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        if first_error is not None:
            raise first_error