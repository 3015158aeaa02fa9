"""Canonical input models shared across ingestion, solver and API layers."""

from __future__ import annotations

import math
from typing import List, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


Attribute = Literal["nation", "league", "club", "quality", "position"]

MAX_SQUAD_SIZE = 11


def _short_id() -> str:
    return uuid4().hex[:8]


class Player(BaseModel):
    """Player card available to the solver."""

    id: str = Field(..., min_length=1)
    name: str
    rating: int = Field(..., ge=0)
    nation: str = ""
    league: str = ""
    club: str = ""
    quality: Optional[str] = None
    positions: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class Requirement(BaseModel):
    """At least ``min_count`` squad members must share ``attribute == value``.

    ``attribute`` is kept as a plain string; values outside :data:`Attribute`
    are accepted and simply never match a player.
    """

    id: str = Field(default_factory=_short_id)
    attribute: str
    value: str
    min_count: int = 1

    model_config = ConfigDict(frozen=True)

    @property
    def is_active(self) -> bool:
        return bool(self.value.strip()) and self.min_count > 0


class SquadConfig(BaseModel):
    """Squad shape and thresholds. Out-of-range numbers are clamped, not rejected."""

    squad_size: int = MAX_SQUAD_SIZE
    min_team_rating: float = 0.0
    min_chemistry: int = 0
    search_limit: Optional[int] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("squad_size", mode="before")
    @classmethod
    def _clamp_squad_size(cls, value: object) -> int:
        try:
            size = int(float(value or 0))  # type: ignore[arg-type]
        except (TypeError, ValueError):
            size = 0
        return max(1, min(MAX_SQUAD_SIZE, size))

    @field_validator("min_team_rating", mode="before")
    @classmethod
    def _clamp_min_team_rating(cls, value: object) -> float:
        return max(0.0, float(value or 0))  # type: ignore[arg-type]

    @field_validator("min_chemistry", mode="before")
    @classmethod
    def _clamp_min_chemistry(cls, value: object) -> int:
        return max(0, math.ceil(float(value or 0)))  # type: ignore[arg-type]

    @field_validator("search_limit", mode="before")
    @classmethod
    def _clamp_search_limit(cls, value: object) -> Optional[int]:
        if value is None:
            return None
        return max(0, int(value))  # type: ignore[arg-type]

    @property
    def required_total_rating(self) -> float:
        return self.min_team_rating * self.squad_size
