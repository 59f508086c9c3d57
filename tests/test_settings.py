"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from bitdist.config.settings import Settings, get_settings, settings


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("INFINITY_SYMBOL", "METRIC", "CHUNK_SIZE", "LOG_LEVEL"):
            monkeypatch.delenv(f"BITDIST_{name}", raising=False)
        s = Settings(_env_file=None)
        assert s.infinity_symbol == "∞"
        assert s.metric == "manhattan"
        assert s.chunk_size == 65536
        assert s.log_level == "WARNING"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BITDIST_METRIC", "euclidean")
        monkeypatch.setenv("BITDIST_CHUNK_SIZE", "16")
        s = Settings(_env_file=None)
        assert s.metric == "euclidean"
        assert s.chunk_size == 16

    def test_unknown_metric_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BITDIST_METRIC", "hamming")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_empty_infinity_symbol_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, infinity_symbol="")

    def test_chunk_size_bounds(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, chunk_size=0)

    def test_singleton(self) -> None:
        assert get_settings() is settings
