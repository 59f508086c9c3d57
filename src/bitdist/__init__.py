"""bitdist — streaming bitmap distance transform.

Reads a text stream of binary grids, computes for every cell the distance to
the nearest "on" cell and writes the resulting grids, in input order, through
an asynchronous output queue.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
