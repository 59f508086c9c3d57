"""Shared test fixtures for bitdist.

Provides in-memory, delayed and failing line sinks plus a helper that turns
a byte string into an async chunk source, so individual test modules stay
focused.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Iterable

import pytest

from bitdist.output.sinks import MemorySink

EXAMPLE_INPUT = b"2\n1 1\n0\n2 4\n00\n01\n10\n11\nfoobar"

# ---------------------------------------------------------------------------
# Sinks
# ---------------------------------------------------------------------------


class DelayedSink(MemorySink):
    """Records lines after an artificial delay; optionally logs into a shared journal."""

    def __init__(
        self,
        delay: float = 0.0,
        journal: list[tuple[str, str]] | None = None,
        name: str = "",
    ) -> None:
        super().__init__()
        self.delay = delay
        self.journal = journal
        self.name = name

    async def write_line(self, line: str) -> None:
        await asyncio.sleep(self.delay)
        self.lines.append(line)
        if self.journal is not None:
            self.journal.append((self.name, line))


class FailingSink:
    """Every write raises *error*."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error or OSError("disk full")
        self.attempts = 0

    async def write_line(self, line: str) -> None:
        self.attempts += 1
        await asyncio.sleep(0)
        raise self.error


@pytest.fixture()
def output_sink() -> MemorySink:
    return MemorySink()


@pytest.fixture()
def error_sink() -> MemorySink:
    return MemorySink()


# ---------------------------------------------------------------------------
# Sources
# ---------------------------------------------------------------------------


async def chunked(data: bytes, size: int) -> AsyncIterator[bytes]:
    """Yield *data* in *size*-byte chunks, yielding control between them."""
    for start in range(0, len(data), size):
        await asyncio.sleep(0)
        yield data[start:start + size]


def split_every(data: bytes, size: int) -> Iterable[bytes]:
    return [data[i:i + size] for i in range(0, len(data), size)]
