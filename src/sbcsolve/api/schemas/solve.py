from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field

from sbcsolve.models import Player, Requirement, SquadConfig


class SolveRequest(BaseModel):
    players: List[Player]
    requirements: List[Requirement] = Field(default_factory=list)
    config: SquadConfig = Field(default_factory=SquadConfig)


class PlayerChemistryResponse(BaseModel):
    player_id: str
    total: int
    club: int
    league: int
    nation: int


class SolveStatsResponse(BaseModel):
    visited: int
    pruned_by_rating: int
    pruned_by_requirement: int


class RequirementCheckResponse(BaseModel):
    requirement_id: str
    attribute: str
    value: str
    min_count: int
    actual: int
    passed: bool


class SolveResponse(BaseModel):
    kind: Literal["success", "no-solution", "aborted"]
    reason: str | None = None
    squad: List[Player] = Field(default_factory=list)
    total_rating: int | None = None
    average_rating: float | None = None
    chemistry: int | None = None
    chemistry_details: List[PlayerChemistryResponse] = Field(default_factory=list)
    rating_surplus: float | None = None
    requirement_checks: List[RequirementCheckResponse] = Field(default_factory=list)
    summary: str | None = None
    stats: SolveStatsResponse
