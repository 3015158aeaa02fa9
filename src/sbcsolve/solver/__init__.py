"""Exact squad-building solver for squad building challenges."""

from .chemistry import PlayerChemistry, compute_chemistry
from .keys import matches, normalize_key, normalize_player, normalize_requirement
from .results import SolveFailure, SolveResult, SolveSuccess
from .search import SolveStats
from .service import solve

__all__ = [
    "PlayerChemistry",
    "SolveFailure",
    "SolveResult",
    "SolveStats",
    "SolveSuccess",
    "compute_chemistry",
    "matches",
    "normalize_key",
    "normalize_player",
    "normalize_requirement",
    "solve",
]
