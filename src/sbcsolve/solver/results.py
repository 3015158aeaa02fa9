"""Solve outcome types. Failures are returned as values, never raised."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple, Union

from sbcsolve.models import Player

from .chemistry import PlayerChemistry
from .search import SolveStats


FailureKind = Literal["no-solution", "aborted"]


@dataclass(frozen=True)
class SolveSuccess:
    squad: Tuple[Player, ...]
    total_rating: int
    average_rating: float
    chemistry: int
    chemistry_details: Tuple[PlayerChemistry, ...]
    rating_surplus: float
    stats: SolveStats
    kind: Literal["success"] = "success"

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class SolveFailure:
    kind: FailureKind
    reason: str
    stats: SolveStats

    @property
    def ok(self) -> bool:
        return False


SolveResult = Union[SolveSuccess, SolveFailure]
