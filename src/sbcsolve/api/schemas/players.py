from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from sbcsolve.models import Player


class RosterSummaryResponse(BaseModel):
    size: int
    average_rating: float
    nations: List[str] = Field(default_factory=list)
    leagues: List[str] = Field(default_factory=list)


class PlayerImportResponse(BaseModel):
    players: List[Player]
    imported: int
    duplicates_removed: int
    summary: RosterSummaryResponse
