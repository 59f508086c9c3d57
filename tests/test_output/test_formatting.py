"""Tests for numeric value rendering."""

from __future__ import annotations

import math

import numpy as np
import pytest

from bitdist.output.formatting import NumberFormatter, format_row


class TestNumberFormatter:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, "0"),
            (3, "3"),
            (2.0, "2"),
            (2.5, "2.5"),
            (0.1, "0.1"),
            (math.sqrt(2), "1.4142135623730951"),
            (math.inf, "∞"),
            (-math.inf, "-inf"),
            (True, "1"),
        ],
    )
    def test_default_rendering(self, value: object, expected: str) -> None:
        assert NumberFormatter()(value) == expected

    def test_custom_infinity_symbol(self) -> None:
        fmt = NumberFormatter("inf")
        assert fmt(math.inf) == "inf"
        assert fmt.infinity_symbol == "inf"

    def test_nan_goes_through_default_branch(self) -> None:
        assert NumberFormatter()(math.nan) == "nan"

    def test_numpy_scalars_via_tolist(self) -> None:
        values = np.array([1.0, np.inf, 0.5]).tolist()
        assert [NumberFormatter()(v) for v in values] == ["1", "∞", "0.5"]


class TestFormatRow:
    def test_space_joined(self) -> None:
        assert format_row([0.0, 1.0, math.inf], NumberFormatter()) == "0 1 ∞"

    def test_empty_row(self) -> None:
        assert format_row([], NumberFormatter()) == ""

    def test_custom_formatter(self) -> None:
        assert format_row([1, 2], lambda v: f"<{v}>") == "<1> <2>"
