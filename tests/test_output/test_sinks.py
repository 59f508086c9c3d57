"""Tests for the line sink adapters."""

from __future__ import annotations

import io
from unittest.mock import AsyncMock, MagicMock

import pytest

from bitdist.output.sinks import LineSink, MemorySink, StreamWriterSink, TextStreamSink


class TestTextStreamSink:
    @pytest.mark.asyncio
    async def test_writes_and_flushes(self) -> None:
        stream = MagicMock()
        sink = TextStreamSink(stream)
        await sink.write_line("0 1")
        stream.write.assert_called_once_with("0 1\n")
        stream.flush.assert_called_once()

    @pytest.mark.asyncio
    async def test_string_io(self) -> None:
        buf = io.StringIO()
        sink = TextStreamSink(buf)
        await sink.write_line("a")
        await sink.write_line("b")
        assert buf.getvalue() == "a\nb\n"

    @pytest.mark.asyncio
    async def test_closed_stream_raises(self) -> None:
        buf = io.StringIO()
        buf.close()
        with pytest.raises(ValueError):
            await TextStreamSink(buf).write_line("x")


class TestStreamWriterSink:
    @pytest.mark.asyncio
    async def test_encodes_and_drains(self) -> None:
        writer = MagicMock()
        writer.drain = AsyncMock()
        await StreamWriterSink(writer).write_line("∞ 1")
        writer.write.assert_called_once_with("∞ 1\n".encode("utf-8"))
        writer.drain.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_drain_failure_propagates(self) -> None:
        writer = MagicMock()
        writer.drain = AsyncMock(side_effect=ConnectionResetError("peer gone"))
        with pytest.raises(ConnectionResetError):
            await StreamWriterSink(writer).write_line("1")


class TestMemorySink:
    @pytest.mark.asyncio
    async def test_collects_lines(self) -> None:
        sink = MemorySink()
        await sink.write_line("1 2")
        assert sink.lines == ["1 2"]
        assert sink.getvalue() == "1 2\n"

    def test_satisfies_protocol(self) -> None:
        assert isinstance(MemorySink(), LineSink)
        assert isinstance(TextStreamSink(io.StringIO()), LineSink)
