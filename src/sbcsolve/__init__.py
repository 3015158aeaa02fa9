"""Exact squad building challenge solver."""

from sbcsolve.models import Player, Requirement, SquadConfig
from sbcsolve.solver import SolveFailure, SolveResult, SolveSuccess, solve

__all__ = [
    "Player",
    "Requirement",
    "SolveFailure",
    "SolveResult",
    "SolveSuccess",
    "SquadConfig",
    "solve",
]
