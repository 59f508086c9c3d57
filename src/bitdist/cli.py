"""bitdist CLI — Typer-based entry point.

Commands
--------
run         Read bitmaps, write their distance grids (stdin -> stdout).
version     Print the installed version.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from bitdist import __version__
from bitdist.config.settings import Settings, get_settings
from bitdist.grid.distance import METRICS
from bitdist.grid.parser import GridParseError
from bitdist.output.sinks import TextStreamSink
from bitdist.pipeline import build_pipeline, iter_file_chunks

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="bitdist",
    help="Distance-to-nearest-on-cell transform for streams of bitmaps.",
    add_completion=False,
)


def _setup_logging(verbose: bool = False, level: str = "WARNING") -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s  %(name)-24s  %(levelname)-7s  %(message)s",
        stream=sys.stderr,
    )


async def _process(settings: Settings, input_path: Optional[Path], output_path: Optional[Path]) -> int:
    pipeline = build_pipeline(settings)
    errors = TextStreamSink(sys.stderr)

    if input_path is not None:
        infile = input_path.open("rb")
    else:
        infile = sys.stdin.buffer
    if output_path is not None:
        outfile = output_path.open("w", encoding="utf-8")
    else:
        outfile = sys.stdout

    try:
        return await pipeline.run(
            iter_file_chunks(infile, settings.chunk_size),
            TextStreamSink(outfile),
            errors,
        )
    finally:
        if input_path is not None:
            infile.close()
        if output_path is not None:
            outfile.close()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def run(
    input_path: Optional[Path] = typer.Argument(
        None, exists=True, dir_okay=False, help="Input file (default: stdin)."
    ),
    output_path: Optional[Path] = typer.Option(
        None, "--output", "-o", dir_okay=False, help="Output file (default: stdout)."
    ),
    metric: Optional[str] = typer.Option(
        None, "--metric", "-m", help=f"Distance metric: {', '.join(sorted(METRICS))}."
    ),
    infinity_symbol: Optional[str] = typer.Option(
        None, "--infinity-symbol", help="Symbol for cells with no on cell."
    ),
    chunk_size: Optional[int] = typer.Option(None, "--chunk-size", min=1, help="Read size in bytes."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Transform every bitmap in the input into its distance grid."""
    base = get_settings()
    _setup_logging(verbose, base.log_level)

    overrides = {
        "metric": metric,
        "infinity_symbol": infinity_symbol,
        "chunk_size": chunk_size,
    }
    try:
        settings = Settings.model_validate(
            {**base.model_dump(), **{k: v for k, v in overrides.items() if v is not None}}
        )
    except ValueError as exc:
        typer.echo(f"Invalid option: {exc}", err=True)
        raise typer.Exit(2)

    try:
        count = asyncio.run(_process(settings, input_path, output_path))
    except GridParseError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)
    logger.debug("Done: %d grid(s)", count)


@app.command()
def version() -> None:
    """Print the installed version."""
    typer.echo(__version__)


def main() -> None:
    """Entry point for the ``bitdist`` console script.  Exits via ``SystemExit``."""
    app()
