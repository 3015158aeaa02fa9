"""Squad chemistry from club, league and nation cluster sizes."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from sbcsolve.config import ChemistryRules

from .keys import SolverPlayer


@dataclass(frozen=True)
class PlayerChemistry:
    player_id: str
    total: int
    club: int
    league: int
    nation: int


def threshold_points(count: int, thresholds: Sequence[int]) -> int:
    """One point for every threshold the cluster size meets or exceeds."""

    return sum(1 for threshold in thresholds if count >= threshold)


def compute_chemistry(
    players: Sequence[SolverPlayer],
    rules: ChemistryRules,
) -> Tuple[int, List[PlayerChemistry]]:
    club_counts = Counter(player.club_key for player in players)
    league_counts = Counter(player.league_key for player in players)
    nation_counts = Counter(player.nation_key for player in players)

    total = 0
    breakdown: List[PlayerChemistry] = []
    for player in players:
        club = threshold_points(club_counts[player.club_key], rules.club_thresholds)
        league = threshold_points(league_counts[player.league_key], rules.league_thresholds)
        nation = threshold_points(nation_counts[player.nation_key], rules.nation_thresholds)
        chem = min(rules.max_player_chemistry, club + league + nation)
        total += chem
        breakdown.append(
            PlayerChemistry(
                player_id=player.id,
                total=chem,
                club=club,
                league=league,
                nation=nation,
            )
        )
    return total, breakdown
