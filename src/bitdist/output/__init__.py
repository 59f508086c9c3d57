"""Ordered asynchronous output of numeric grids."""

from __future__ import annotations

from bitdist.output.formatting import NumberFormatter, format_row
from bitdist.output.queue import DrainInProgressError, OutputQueue
from bitdist.output.sinks import LineSink, MemorySink, StreamWriterSink, TextStreamSink

__all__ = [
    "DrainInProgressError",
    "LineSink",
    "MemorySink",
    "NumberFormatter",
    "OutputQueue",
    "StreamWriterSink",
    "TextStreamSink",
    "format_row",
]
