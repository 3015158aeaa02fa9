"""Branch-and-bound search over the rating-sorted player pool."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from sbcsolve.config import ChemistryRules

from .chemistry import PlayerChemistry, compute_chemistry
from .index import FeasibilityIndex
from .keys import NormalizedRequirement, SolverPlayer


@dataclass
class SolveStats:
    visited: int = 0
    pruned_by_rating: int = 0
    pruned_by_requirement: int = 0


@dataclass(frozen=True)
class Candidate:
    indices: tuple[int, ...]
    rating_sum: int
    chemistry: int
    chemistry_details: tuple[PlayerChemistry, ...]


class SquadSearch:
    """One exhaustive search. Every piece of mutable state lives on the instance.

    The include branch recurses; the exclude branch advances the loop in place,
    so the Python stack never grows past ``squad_size`` frames.
    """

    def __init__(
        self,
        players: Sequence[SolverPlayer],
        requirements: Sequence[NormalizedRequirement],
        *,
        squad_size: int,
        required_total_rating: float,
        min_chemistry: int,
        search_limit: int,
        rules: ChemistryRules,
    ) -> None:
        self.players = players
        self.index = FeasibilityIndex.build(players, requirements)
        self.needs = [req.min_count for req in requirements]
        self.squad_size = squad_size
        self.required_total_rating = required_total_rating
        self.min_chemistry = min_chemistry
        self.search_limit = search_limit
        self.rules = rules
        self.max_chemistry = rules.max_player_chemistry * squad_size

        self.stats = SolveStats()
        self.best: Optional[Candidate] = None
        self.aborted = False
        self._counts = [0] * len(requirements)
        self._selected: List[int] = []

    def run(self) -> Optional[Candidate]:
        self._explore(0, 0, 0)
        return self.best

    def _explore(self, index: int, chosen: int, rating_sum: int) -> None:
        total = self.index.size
        while True:
            if self.aborted:
                return
            self.stats.visited += 1
            if self.stats.visited > self.search_limit:
                self.aborted = True
                return

            remaining = self.squad_size - chosen
            if remaining == 0:
                self._accept(rating_sum)
                return
            if index >= total:
                return

            if total - index < remaining:
                self.stats.pruned_by_requirement += 1
                return
            if not self.index.requirements_reachable(index, remaining, self._counts, self.needs):
                self.stats.pruned_by_requirement += 1
                return
            if rating_sum + self.index.max_rating_from(index, remaining) < self.required_total_rating:
                self.stats.pruned_by_rating += 1
                return

            matched = self.index.requirement_matches[index]
            new_rating = rating_sum + self.players[index].rating
            self._selected.append(index)
            for r in matched:
                self._counts[r] += 1
            if not self._cannot_improve(new_rating, index + 1, remaining - 1) and self._branch_open(
                index + 1, remaining - 1, new_rating
            ):
                self._explore(index + 1, chosen + 1, new_rating)
            for r in matched:
                self._counts[r] -= 1
            self._selected.pop()

            if not self._branch_open(index + 1, remaining, rating_sum):
                return
            index += 1

    def _branch_open(self, start: int, slots: int, rating_sum: int) -> bool:
        if rating_sum + self.index.max_rating_from(start, slots) < self.required_total_rating:
            self.stats.pruned_by_rating += 1
            return False
        if not self.index.requirements_reachable(start, slots, self._counts, self.needs):
            self.stats.pruned_by_requirement += 1
            return False
        return True

    def _cannot_improve(self, rating_sum: int, start: int, slots: int) -> bool:
        """Every leaf below totals more than the best, or ties a best that has full chemistry."""

        if self.best is None:
            return False
        floor = rating_sum + self.index.min_rating_from(start, slots)
        if floor > self.best.rating_sum:
            return True
        return floor == self.best.rating_sum and self.best.chemistry >= self.max_chemistry

    def _accept(self, rating_sum: int) -> None:
        if rating_sum < self.required_total_rating:
            return
        if any(count < need for count, need in zip(self._counts, self.needs)):
            return
        squad = [self.players[i] for i in self._selected]
        chemistry, details = compute_chemistry(squad, self.rules)
        if chemistry < self.min_chemistry:
            return
        best = self.best
        if best is None or rating_sum < best.rating_sum or (
            rating_sum == best.rating_sum and chemistry > best.chemistry
        ):
            self.best = Candidate(
                indices=tuple(self._selected),
                rating_sum=rating_sum,
                chemistry=chemistry,
                chemistry_details=tuple(details),
            )
