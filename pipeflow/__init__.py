"""Asyncio stream-processing pipelines built from channel-connected nodes."""

__version__ = "0.1.0"