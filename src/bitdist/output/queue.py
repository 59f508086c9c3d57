"""Ordered asynchronous output queue.

``enqueue()`` never blocks: it appends a work item and makes sure a single
worker task is draining the queue.  The worker writes items strictly one at
a time in FIFO order, one awaited ``write_line`` per grid row, so the output
order always matches the enqueue order, even across different sinks.

A failed row write is reported to the item's error sink and the worker moves
on to the next item.  If reporting itself fails there is no channel left, so
the queue calls its ``on_fatal`` hook, which by default terminates the
process.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections import deque
from dataclasses import dataclass
from typing import Callable

from bitdist.grid.grid import Grid
from bitdist.output.formatting import NumberFormatter, ValueFormatter, format_row
from bitdist.output.sinks import LineSink

logger = logging.getLogger(__name__)

# EX_SOFTWARE from sysexits.h
EXIT_UNREPORTABLE = 70

FatalHandler = Callable[[BaseException], None]


class DrainInProgressError(RuntimeError):
    """``drain()`` was called while another ``drain()`` is still waiting."""


@dataclass
class QueueItem:
    """A grid waiting to be written to ``sink``."""

    sink: LineSink
    error_sink: LineSink
    grid: Grid


def terminate_process(exc: BaseException) -> None:
    """Default fatal handler: log and exit without cleanup."""
    logger.critical("Failed to report a write failure, terminating: %r", exc)
    os._exit(EXIT_UNREPORTABLE)


def describe_error(exc: BaseException) -> str:
    return f"{type(exc).__name__}: {exc}"


class OutputQueue:
    """Serialise grid writes through a single FIFO worker.

    Parameters
    ----------
    formatter:
        Renders one cell value.  Defaults to :class:`NumberFormatter`.
    on_fatal:
        Called with the exception when writing to an error sink fails.
    """

    def __init__(
        self,
        formatter: ValueFormatter | None = None,
        on_fatal: FatalHandler | None = None,
    ) -> None:
        self._formatter = formatter or NumberFormatter()
        self._on_fatal = on_fatal or terminate_process
        self._items: deque[QueueItem] = deque()
        self._worker: asyncio.Task[None] | None = None
        self._waiter: asyncio.Future[None] | None = None
        self.written = 0
        self.failed = 0

    # -- state --------------------------------------------------------------

    @property
    def pending(self) -> int:
        """Number of items not yet picked up by the worker."""
        return len(self._items)

    @property
    def busy(self) -> bool:
        return bool(self._items) or (
            self._worker is not None and not self._worker.done()
        )

    # -- public API ---------------------------------------------------------

    def enqueue(self, sink: LineSink, error_sink: LineSink, grid: Grid) -> None:
        """Queue *grid* for writing to *sink*.  Must run inside an event loop."""
        self._items.append(QueueItem(sink, error_sink, grid))
        logger.debug("Enqueued %r (%d pending)", grid, len(self._items))
        if self._worker is None or self._worker.done():
            loop = asyncio.get_running_loop()
            self._worker = loop.create_task(self._run(), name="bitdist-output-queue")

    async def drain(self) -> None:
        """Wait until every enqueued item has been written or reported.

        Raises
        ------
        DrainInProgressError
            Another ``drain()`` call is still waiting.
        """
        if self._waiter is not None and not self._waiter.done():
            raise DrainInProgressError("only one outstanding drain waiter at a time")
        if not self.busy:
            return

        self._waiter = asyncio.get_running_loop().create_future()
        try:
            await self._waiter
        finally:
            self._waiter = None

    # -- worker -------------------------------------------------------------

    async def _run(self) -> None:
        try:
            while self._items:
                item = self._items.popleft()
                await self._write_item(item)
        finally:
            if self._waiter is not None and not self._waiter.done():
                self._waiter.set_result(None)

    async def _write_item(self, item: QueueItem) -> None:
        try:
            for values in item.grid.rows():
                await item.sink.write_line(format_row(values, self._formatter))
        except Exception as exc:
            self.failed += 1
            logger.warning("Write of %r failed: %s", item.grid, exc)
            try:
                await item.error_sink.write_line(describe_error(exc))
            except Exception as fatal:
                self._on_fatal(fatal)
            return

        self.written += 1
        logger.debug("Wrote %r", item.grid)
