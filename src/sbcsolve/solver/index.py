"""Precomputed rating prefix sums and per-requirement suffix match counts."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence

from .keys import NormalizedRequirement, SolverPlayer, matches, normalize_key


INFEASIBLE = -math.inf


def sort_pool(players: Sequence[SolverPlayer]) -> List[SolverPlayer]:
    """Rating descending, then name ascending; ties beyond that keep input order."""

    return sorted(players, key=lambda player: (-player.rating, normalize_key(player.name), player.name))


@dataclass(frozen=True)
class FeasibilityIndex:
    """Arrays indexed by sorted pool position, built once per solve.

    ``prefix_rating[i]`` sums the first ``i`` ratings, ``remaining_matches[r][i]``
    counts players in ``[i, n)`` matching requirement ``r`` and
    ``requirement_matches[i]`` lists the requirements player ``i`` satisfies.
    """

    size: int
    prefix_rating: List[int]
    remaining_matches: List[List[int]]
    requirement_matches: List[List[int]]

    @classmethod
    def build(
        cls,
        players: Sequence[SolverPlayer],
        requirements: Sequence[NormalizedRequirement],
    ) -> "FeasibilityIndex":
        total = len(players)
        prefix = [0] * (total + 1)
        for i, player in enumerate(players):
            prefix[i + 1] = prefix[i] + player.rating

        remaining = [[0] * (total + 1) for _ in requirements]
        by_player: List[List[int]] = [[] for _ in players]
        for r, requirement in enumerate(requirements):
            column = remaining[r]
            for i in range(total - 1, -1, -1):
                hit = matches(players[i], requirement)
                column[i] = column[i + 1] + (1 if hit else 0)
                if hit:
                    by_player[i].append(r)

        return cls(
            size=total,
            prefix_rating=prefix,
            remaining_matches=remaining,
            requirement_matches=by_player,
        )

    def max_rating_from(self, start: int, take: int) -> float:
        """Largest sum of ``take`` ratings drawn from ``[start, n)``, or INFEASIBLE."""

        if take <= 0:
            return 0
        if self.size - start < take:
            return INFEASIBLE
        return self.prefix_rating[start + take] - self.prefix_rating[start]

    def min_rating_from(self, start: int, take: int) -> float:
        """Smallest sum of ``take`` ratings drawn from ``[start, n)``, or INFEASIBLE."""

        if take <= 0:
            return 0
        if self.size - start < take:
            return INFEASIBLE
        return self.prefix_rating[self.size] - self.prefix_rating[self.size - take]

    def requirements_reachable(
        self,
        index: int,
        slots: int,
        counts: Sequence[int],
        needs: Sequence[int],
    ) -> bool:
        """True when every outstanding need fits in ``slots`` picks from ``[index, n)``."""

        for r, need in enumerate(needs):
            outstanding = need - counts[r]
            if outstanding > 0 and outstanding > min(slots, self.remaining_matches[r][index]):
                return False
        return True
