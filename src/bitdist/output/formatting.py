"""Rendering of numeric grid values for the output stream."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any, Callable

ValueFormatter = Callable[[Any], str]

DEFAULT_INFINITY_SYMBOL = "∞"


class NumberFormatter:
    """Render numbers in canonical decimal form.

    ``+inf`` becomes ``infinity_symbol``.  Integral floats drop their
    fractional part (``2.0`` -> ``2``); any other value, ``-inf`` included,
    goes through the plain numeric branch.
    """

    def __init__(self, infinity_symbol: str = DEFAULT_INFINITY_SYMBOL) -> None:
        self.infinity_symbol = infinity_symbol

    def __call__(self, value: Any) -> str:
        if isinstance(value, bool):
            return str(int(value))
        if isinstance(value, float):
            if value == math.inf:
                return self.infinity_symbol
            if math.isfinite(value) and value.is_integer():
                return str(int(value))
            return repr(value)
        return str(value)


def format_row(values: Iterable[Any], formatter: ValueFormatter) -> str:
    """Space-join the formatted values of one grid row."""
    return " ".join(formatter(v) for v in values)
