"""Roster and solution summaries for display."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from statistics import fmean
from typing import Iterable, List, Sequence

from sbcsolve.config import ChemistryRules, get_rules
from sbcsolve.models import Player, Requirement
from sbcsolve.solver import SolveSuccess
from sbcsolve.solver.keys import matches, normalize_player, normalize_requirement


@dataclass(frozen=True)
class RosterSummary:
    size: int
    average_rating: float
    nations: tuple[str, ...]
    leagues: tuple[str, ...]


@dataclass(frozen=True)
class RequirementStatus:
    requirement: Requirement
    actual: int
    passed: bool


def count_top(values: Iterable[str], limit: int = 3) -> List[str]:
    """Most common values as ``"Name (count)"``; blanks count as "Unknown"."""

    tally = Counter(value or "Unknown" for value in values)
    return [f"{key} ({count})" for key, count in tally.most_common(limit)]


def summarize_roster(players: Sequence[Player]) -> RosterSummary:
    if not players:
        return RosterSummary(size=0, average_rating=0.0, nations=(), leagues=())
    return RosterSummary(
        size=len(players),
        average_rating=fmean(player.rating for player in players),
        nations=tuple(count_top(player.nation for player in players)),
        leagues=tuple(count_top(player.league for player in players)),
    )


def requirement_status(
    squad: Sequence[Player],
    requirements: Sequence[Requirement],
    *,
    rules: ChemistryRules | None = None,
) -> List[RequirementStatus]:
    """How many squad members match each requirement, using the solver's matcher."""

    rules = rules or get_rules()
    keyed = [normalize_player(player, rules) for player in squad]
    statuses: List[RequirementStatus] = []
    for requirement in requirements:
        normalized = normalize_requirement(requirement)
        actual = sum(1 for player in keyed if matches(player, normalized))
        statuses.append(
            RequirementStatus(
                requirement=requirement,
                actual=actual,
                passed=actual >= requirement.min_count,
            )
        )
    return statuses


def format_solution(result: SolveSuccess, *, rules: ChemistryRules | None = None) -> str:
    """Plain-text summary suitable for copying to a clipboard or terminal."""

    rules = rules or get_rules()
    size = len(result.squad)
    surplus = f"{result.rating_surplus:+.0f}"
    lines = [
        f"SBC solution – {size} players",
        f"Team rating: {result.average_rating:.2f} avg ({surplus} total)",
        f"Chemistry: {result.chemistry} / {size * rules.max_player_chemistry}",
        "",
    ]
    for player in result.squad:
        positions = "/".join(player.positions) or "ANY"
        lines.append(f"{player.rating} {player.name} ({player.nation}, {player.league}) – {positions}")
    return "\n".join(lines)
