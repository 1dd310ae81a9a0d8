import asyncio
import hashlib
import io

import pytest

from pipeflow.graph import Graph
from pipeflow.md5_node import MD5Node, MD5Result
from pipeflow.node import Channel, ChannelClosed
from pipeflow.nodes import FileWalker, PrinterNode


async def _feed(items):
    ch = Channel(len(items))
    for item in items:
        await ch.send(item)
    ch.close()
    return ch


async def _collect(channel):
    return [item async for item in channel]


@pytest.mark.asyncio
async def test_hash_of_known_content(tmp_path):
    target = tmp_path / "hello.txt"
    target.write_bytes(b"hello")
    node = MD5Node(1, 4)
    node.set_input(await _feed([str(target)]))
    await asyncio.wait_for(node.run(), 5)
    results = await _collect(node.output())
    assert results == [MD5Result(str(target), hash="5d41402abc4b2a76b9719d911017c592")]


@pytest.mark.asyncio
async def test_missing_file_reports_error(tmp_path):
    missing = str(tmp_path / "nope")
    node = MD5Node(2, 4)
    node.set_input(await _feed([missing]))
    await asyncio.wait_for(node.run(), 5)
    (result,) = await _collect(node.output())
    assert result.path == missing
    assert result.hash == ""
    assert isinstance(result.error, FileNotFoundError)


@pytest.mark.asyncio
async def test_many_files_all_hashed(tmp_path):
    contents = {}
    for index in range(12):
        path = tmp_path / f"f{index}.dat"
        data = bytes([index]) * (index * 1000)
        path.write_bytes(data)
        contents[str(path)] = hashlib.md5(data).hexdigest()
    node = MD5Node(3, 0)
    node.set_input(await _feed(list(contents)))
    results, _ = await asyncio.wait_for(
        asyncio.gather(_collect(node.output()), node.run()), 5
    )
    assert {r.path: r.hash for r in results} == contents
    assert all(r.error is None for r in results)


@pytest.mark.asyncio
async def test_output_closed_after_run():
    node = MD5Node(2, 1)
    node.set_input(await _feed([]))
    await asyncio.wait_for(node.run(), 2)
    with pytest.raises(ChannelClosed):
        await node.output().receive()


@pytest.mark.asyncio
async def test_run_without_input_raises():
    node = MD5Node(1, 1)
    with pytest.raises(RuntimeError):
        await node.run()


def test_parallelism_must_be_positive():
    with pytest.raises(ValueError):
        MD5Node(0, 1)


def test_channels_and_name():
    node = MD5Node(2, 1)
    assert node.inputs() == []
    ch = Channel()
    node.set_input(ch)
    assert node.inputs() == [ch]
    assert node.outputs() == [node.output()]
    assert node.name() == "MD5Node"


@pytest.mark.asyncio
async def test_walker_md5_printer_graph(tmp_path):
    (tmp_path / "d").mkdir()
    files = {
        tmp_path / "one.txt": b"first",
        tmp_path / "d" / "two.txt": b"second",
        tmp_path / "d" / "three.txt": b"",
    }
    for path, data in files.items():
        path.write_bytes(data)
    buffer = io.StringIO()
    walker = FileWalker(tmp_path)
    md5 = MD5Node(2, 8)
    md5.set_input(walker.output())
    printer = PrinterNode(buffer)
    printer.set_input(md5.output())
    graph = Graph()
    for node in (walker, md5, printer):
        graph.add_node(node)
    await asyncio.wait_for(graph.run(), 5)
    expected = sorted(
        f"OK {path}: {hashlib.md5(data).hexdigest()}" for path, data in files.items()
    )
    assert sorted(buffer.getvalue().splitlines()) == expected