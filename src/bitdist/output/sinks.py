"""Line sinks the output queue writes to.

A sink accepts one line at a time and only returns once the line has been
handed off (flushed, or acknowledged by the transport).  A failed write
raises.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol, TextIO, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class LineSink(Protocol):
    async def write_line(self, line: str) -> None:
        """Write *line* followed by a newline and wait for completion."""


class TextStreamSink:
    """Sink over a text file object such as ``sys.stdout``."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    async def write_line(self, line: str) -> None:
        self._stream.write(line + "\n")
        self._stream.flush()


class StreamWriterSink:
    """Sink over an :class:`asyncio.StreamWriter`; waits on ``drain()``."""

    def __init__(self, writer: asyncio.StreamWriter, encoding: str = "utf-8") -> None:
        self._writer = writer
        self._encoding = encoding

    async def write_line(self, line: str) -> None:
        self._writer.write((line + "\n").encode(self._encoding))
        await self._writer.drain()


class MemorySink:
    """Collect lines in memory."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    async def write_line(self, line: str) -> None:
        self.lines.append(line)

    def getvalue(self) -> str:
        return "".join(line + "\n" for line in self.lines)
