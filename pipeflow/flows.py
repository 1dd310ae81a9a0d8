"""Ready-made pipelines and the command that hashes a directory tree."""

from __future__ import annotations

import argparse
import asyncio
import os
from typing import List, Optional, TextIO

from .builder import Builder
from .md5_node import MD5Node
from .nodes import FileWalker, PrinterNode


def _md5_pipeline(
    root: "str | os.PathLike[str]",
    parallelism: int,
    buffer_size: int,
    stream: Optional[TextIO],
) -> Builder:
    return (
        Builder()
        .with_buffer_size(buffer_size)
        .source(FileWalker(root))
        .pipe(MD5Node(parallelism, buffer_size))
        .sink(PrinterNode(stream))
    )


async def run_md5_printer(
    root: "str | os.PathLike[str]",
    parallelism: int,
    stream: Optional[TextIO] = None,
) -> None:
    """Walk ``root``, hash every file with MD5 in parallel and print each result."""
    await _md5_pipeline(root, parallelism, 64, stream).run()


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return value


def _positive_float(text: str) -> float:
    value = float(text)
    if value <= 0:
        raise argparse.ArgumentTypeError("must be greater than 0")
    return value


def main(argv: Optional[List[str]] = None) -> int:
    """Print the MD5 hash of every file below a directory."""
    parser = argparse.ArgumentParser(
        prog="pipeflow-md5", description="Print the MD5 hash of every file below a directory."
    )
    parser.add_argument("root", nargs="?", default=".", help="directory to walk")
    parser.add_argument(
        "-j", "--parallelism", type=_positive_int, default=4, help="files hashed at once"
    )
    parser.add_argument(
        "-t", "--timeout", type=_positive_float, default=30.0, help="seconds before giving up"
    )
    args = parser.parse_args(argv)

    builder = _md5_pipeline(args.root, args.parallelism, 100, None)

    async def _run() -> None:
        await asyncio.wait_for(builder.run(), args.timeout)

    print("Starting pipeline...")
    try:
        asyncio.run(_run())
    except asyncio.TimeoutError:
        print("Pipeline failed: deadline exceeded")
        return 1
    except Exception as exc:
        print(f"Pipeline failed: {exc}")
        return 1
    print("Pipeline completed successfully")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())