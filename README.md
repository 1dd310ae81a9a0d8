# pipeflow

Small asyncio stream-processing pipelines. Each node reads from an input
channel, does its work and writes to an output channel; a graph runs all
nodes concurrently and, on the first error, cancels the rest and raises it.

## Install

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Command line

```
pipeflow-md5 [root] [-j PARALLELISM] [-t TIMEOUT]
```

Walks `root` (default: the current directory), computes the MD5 digest of
every file, hashing `PARALLELISM` files at once (default 4), and prints one
line per file:

```
Starting pipeline...
OK path/to/file: d41d8cd98f00b204e9800998ecf8427e
ERROR path/to/other: <reason>
Pipeline completed successfully
```

Files are visited in sorted order, but with parallel hashing the result lines
may come out in any order. If the whole run takes longer than `TIMEOUT`
seconds (default 30) it prints `Pipeline failed: deadline exceeded`; any
other error (for example a root that does not exist) is printed as
`Pipeline failed: <error>`. The exit status is 0 on success and 1 on failure.

## Building a pipeline

```python
import asyncio
import sys

from pipeflow.builder import Builder
from pipeflow.md5_node import MD5Node
from pipeflow.nodes import FileWalker, PrinterNode


async def hash_tree(root: str) -> None:
    await (
        Builder()
        .with_buffer_size(64)
        .source(FileWalker(root))
        .pipe(MD5Node(4, 64))
        .sink(PrinterNode(sys.stdout))
        .run()
    )


asyncio.run(hash_tree("."))
```

`Builder.map` and `Builder.filter` insert a `MapNode` or a `FilterNode`
built from a plain function after the previous node, using the buffer size
set with `with_buffer_size`:

```python
builder = (
    Builder()
    .source(FileWalker("."))
    .filter(lambda path: path.endswith(".txt"))
    .pipe(MD5Node(4, 0))
    .sink(PrinterNode(sys.stdout))
)
```

`pipe` and `sink` connect the new node to the previous node's `output()`
through its `set_input`; a node without those methods, or a value that is
not a `Node`, raises `TypeError`.

The ready-made flow is also available as a coroutine. `PrinterNode` writes
to standard output when no stream is given:

```python
import asyncio
import sys

from pipeflow.flows import run_md5_printer

asyncio.run(run_md5_printer(".", 4, sys.stdout))
```

## Pieces

- `pipeflow.node`: `Channel`, a closable bounded async channel (size 0 means
  a send waits until the item is received), `ChannelClosed`, raised on
  sending to or closing a closed channel and on receiving from a closed,
  drained one, and the `Node` interface (`inputs`, `outputs`, `run`, `name`).
- `pipeflow.graph`: `Graph`, which runs every added node concurrently and
  raises the first error after cancelling the rest.
- `pipeflow.nodes`: `FileWalker`, `MapNode`, `FilterNode`, `PrinterNode`.
- `pipeflow.md5_node`: `MD5Node` and its `MD5Result` records (`path`,
  `hash`, `error`); a file that cannot be read gives a result with `error`
  set rather than stopping the pipeline.
- `pipeflow.builder`: `Builder`, the fluent way to wire nodes together.
- `pipeflow.flows`: `run_md5_printer` and the command's `main`.

## Limits

`Builder` assembles straight chains only: every node has at most one input
and one output channel, and there is no fan-in or fan-out between nodes.