"""
Pydantic models for the Candle Space Web API.

These models are the single source of truth for request/response shapes and
carry the only validation the store performs: coordinates inside the world,
bounded note and country code, and a known style.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from candle_space_web.config import get_settings

from .enums import CandleStyle


class CandleCreate(BaseModel):
    """A candle to insert. Note and country code are normally empty at creation."""

    model_config = ConfigDict(extra="forbid")

    x: float = Field(ge=0)
    y: float = Field(ge=0)
    note: str = ""
    country_code: str = ""
    style: CandleStyle | None = None

    @model_validator(mode="after")
    def check_inside_world(self) -> CandleCreate:
        settings = get_settings()
        if self.x > settings.world_width or self.y > settings.world_height:
            msg = f"Position ({self.x}, {self.y}) outside world {settings.world_width}x{settings.world_height}"
            raise ValueError(msg)
        return self

    @field_validator("note")
    @classmethod
    def check_note_length(cls, v: str) -> str:
        limit = get_settings().max_note_length
        if len(v) > limit:
            msg = f"Note longer than {limit} characters"
            raise ValueError(msg)
        return v

    @field_validator("country_code")
    @classmethod
    def check_country_code(cls, v: str) -> str:
        v = v.strip()
        if len(v) > get_settings().max_country_code_length:
            msg = "Country code too long"
            raise ValueError(msg)
        return v


class CandleUpdate(BaseModel):
    """
    Partial update of a candle.

    Only the note and the country code can change after creation; any other
    field is rejected.
    """

    model_config = ConfigDict(extra="forbid")

    note: str | None = None
    country_code: str | None = None

    @field_validator("note")
    @classmethod
    def check_note_length(cls, v: str | None) -> str | None:
        limit = get_settings().max_note_length
        if v is not None and len(v) > limit:
            msg = f"Note longer than {limit} characters"
            raise ValueError(msg)
        return v

    @field_validator("country_code")
    @classmethod
    def check_country_code(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if len(v) > get_settings().max_country_code_length:
            msg = "Country code too long"
            raise ValueError(msg)
        return v


class CandleRead(BaseModel):
    """A stored candle as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    x: float
    y: float
    note: str = ""
    country_code: str = ""
    style: CandleStyle | None = None
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def as_utc(cls, v: datetime) -> datetime:
        """Stored timestamps are naive UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v.astimezone(UTC)
