"""Pipeline orchestration: parse -> transform -> ordered output.

``GridPipeline.run`` drives the parser over an async byte source, transforms
each grid as soon as it is complete and hands it to the output queue.  It
returns only after the queue has drained.  Parse errors propagate to the
caller (after already queued grids have been written); write failures never
do, they only show up on the error sink.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable, AsyncIterator
from typing import BinaryIO

from bitdist.config.settings import Settings
from bitdist.grid.distance import GridTransformer, get_metric, make_distance_transformer
from bitdist.grid.parser import GridParseError, GridParser
from bitdist.output.formatting import NumberFormatter
from bitdist.output.queue import FatalHandler, OutputQueue
from bitdist.output.sinks import LineSink

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 65536


# ---------------------------------------------------------------------------
# Byte sources
# ---------------------------------------------------------------------------


async def iter_file_chunks(
    fileobj: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> AsyncIterator[bytes]:
    """Yield chunks from a blocking binary file, reading in a worker thread."""
    read = getattr(fileobj, "read1", fileobj.read)
    while True:
        chunk = await asyncio.to_thread(read, chunk_size)
        if not chunk:
            return
        yield chunk


async def iter_stream_chunks(
    reader: asyncio.StreamReader, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> AsyncIterator[bytes]:
    """Yield chunks from an :class:`asyncio.StreamReader` until EOF."""
    while True:
        chunk = await reader.read(chunk_size)
        if not chunk:
            return
        yield chunk


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class GridPipeline:
    """Wire a parser, a grid transformer and an output queue together."""

    def __init__(
        self,
        parser: GridParser | None = None,
        transformer: GridTransformer | None = None,
        queue: OutputQueue | None = None,
    ) -> None:
        self.parser = parser or GridParser()
        self.transformer = transformer or make_distance_transformer()
        self.queue = queue or OutputQueue()

    async def run(
        self,
        source: AsyncIterable[bytes],
        output: LineSink,
        error_output: LineSink,
    ) -> int:
        """Process *source* to completion.  Returns the number of grids."""
        self.parser.reset()
        count = 0
        try:
            async for chunk in source:
                for grid in self.parser.feed(chunk):
                    self.queue.enqueue(output, error_output, self.transformer(grid))
                    count += 1
                if self.parser.done:
                    break
            self.parser.finish()
        except GridParseError as exc:
            logger.debug("Parse failed after %d grid(s): %s", count, exc)
            await self.queue.drain()
            raise
        except Exception as exc:
            # Source or transformer failure: grids already queued are still written.
            logger.warning("Run aborted after %d grid(s): %s", count, exc)
            await self.queue.drain()
            raise

        await self.queue.drain()
        logger.info("Processed %d grid(s)", count)
        return count


def build_pipeline(
    settings: Settings,
    *,
    on_fatal: FatalHandler | None = None,
) -> GridPipeline:
    """Create a pipeline configured from *settings*."""
    queue = OutputQueue(
        formatter=NumberFormatter(settings.infinity_symbol),
        on_fatal=on_fatal,
    )
    return GridPipeline(
        parser=GridParser(),
        transformer=make_distance_transformer(get_metric(settings.metric)),
        queue=queue,
    )
