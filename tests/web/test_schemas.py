"""
Tests for the request/response models.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from candle_space_web.schemas import CandleCreate, CandleRead, CandleUpdate
from candle_space_web.schemas.enums import CandleStyle


class TestCandleCreate:
    def test_defaults(self) -> None:
        candle = CandleCreate(x=1, y=2)

        assert candle.note == ""
        assert candle.country_code == ""
        assert candle.style is None

    def test_style(self) -> None:
        assert CandleCreate(x=1, y=2, style="wide").style == CandleStyle.WIDE

    @pytest.mark.parametrize("overrides", [{"x": -0.5}, {"y": 2001}, {"country_code": "X" * 9}, {"created_at": "now"}])
    def test_invalid(self, overrides) -> None:
        with pytest.raises(ValidationError):
            CandleCreate(**{"x": 1, "y": 2, **overrides})

    def test_country_code_stripped(self) -> None:
        assert CandleCreate(x=1, y=2, country_code=" PT ").country_code == "PT"


class TestCandleUpdate:
    def test_only_note_and_country(self) -> None:
        with pytest.raises(ValidationError):
            CandleUpdate(note="x", style="tall")

    def test_exclude_none(self) -> None:
        assert CandleUpdate(note="hi").model_dump(exclude_none=True) == {"note": "hi"}

    def test_note_limit(self) -> None:
        CandleUpdate(note="n" * 200)

        with pytest.raises(ValidationError):
            CandleUpdate(note="n" * 201)


class TestCandleRead:
    def test_naive_timestamp_is_utc(self) -> None:
        read = CandleRead(id=1, x=0, y=0, created_at=datetime(2024, 1, 15, 12, 0))

        assert read.created_at == datetime(2024, 1, 15, 12, 0, tzinfo=UTC)
        assert read.created_at.tzinfo is not None
