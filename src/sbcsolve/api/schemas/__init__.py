"""Pydantic models for API I/O."""

from .players import PlayerImportResponse, RosterSummaryResponse
from .solve import (
    PlayerChemistryResponse,
    RequirementCheckResponse,
    SolveRequest,
    SolveResponse,
    SolveStatsResponse,
)

__all__ = [
    "PlayerChemistryResponse",
    "PlayerImportResponse",
    "RequirementCheckResponse",
    "RosterSummaryResponse",
    "SolveRequest",
    "SolveResponse",
    "SolveStatsResponse",
]
