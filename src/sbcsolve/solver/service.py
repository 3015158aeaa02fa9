"""Entry point that wires normalization, search and result assembly together."""

from __future__ import annotations

import logging
import time
from typing import Optional, Sequence

from sbcsolve.config import ChemistryRules, default_search_limit, get_rules
from sbcsolve.models import Player, Requirement, SquadConfig

from .index import sort_pool
from .keys import active_requirements, normalize_player
from .results import SolveFailure, SolveResult, SolveSuccess
from .search import Candidate, SolveStats, SquadSearch


logger = logging.getLogger(__name__)

EMPTY_POOL_REASON = "Add some players to your pool first."
EXHAUSTED_REASON = "No squad satisfies all requirements. Adjust inputs and try again."
ABORTED_REASON = "Search limit reached before completing. Refine your pool or requirements."


def _too_few_players_reason(pool_size: int, squad_size: int) -> str:
    return (
        f"Not enough players: the pool has {pool_size} but the squad needs {squad_size}. "
        "Add more before solving."
    )


def solve(
    players: Sequence[Player],
    requirements: Sequence[Requirement],
    config: SquadConfig,
    *,
    rules: Optional[ChemistryRules] = None,
) -> SolveResult:
    """Find the lowest-rated squad meeting every requirement and threshold.

    Among squads with the same total rating the one with the highest chemistry
    wins. A search that runs out of node budget reports ``aborted`` even when a
    provisional squad was found, since it may not be optimal.
    """

    rules = rules or get_rules()
    stats = SolveStats()
    squad_size = config.squad_size

    if not players:
        return SolveFailure(kind="no-solution", reason=EMPTY_POOL_REASON, stats=stats)
    if len(players) < squad_size:
        return SolveFailure(
            kind="no-solution",
            reason=_too_few_players_reason(len(players), squad_size),
            stats=stats,
        )

    search_limit = config.search_limit if config.search_limit is not None else default_search_limit()
    active = active_requirements(requirements)
    pool = sort_pool([normalize_player(player, rules) for player in players])
    required_total = config.required_total_rating

    logger.info(
        "Solving squad of %s from %s players (%s requirements, min rating %.2f, min chemistry %s, limit %s)",
        squad_size,
        len(pool),
        len(active),
        config.min_team_rating,
        config.min_chemistry,
        search_limit,
    )

    start_time = time.perf_counter()
    search = SquadSearch(
        pool,
        active,
        squad_size=squad_size,
        required_total_rating=required_total,
        min_chemistry=config.min_chemistry,
        search_limit=search_limit,
        rules=rules,
    )
    best = search.run()
    elapsed = time.perf_counter() - start_time
    stats = search.stats

    if search.aborted:
        logger.warning(
            "Search aborted after %s nodes (%.2fs); rating prunes %s, requirement prunes %s",
            stats.visited,
            elapsed,
            stats.pruned_by_rating,
            stats.pruned_by_requirement,
        )
        return SolveFailure(kind="aborted", reason=ABORTED_REASON, stats=stats)

    if best is None:
        logger.info("No squad found after %s nodes (%.2fs)", stats.visited, elapsed)
        return SolveFailure(kind="no-solution", reason=EXHAUSTED_REASON, stats=stats)

    logger.info(
        "Solved in %.2fs: total rating %s, chemistry %s, %s nodes visited",
        elapsed,
        best.rating_sum,
        best.chemistry,
        stats.visited,
    )
    return _assemble(best, [pool[i].source for i in best.indices], required_total, stats)


def _assemble(
    best: Candidate,
    squad: Sequence[Player],
    required_total: float,
    stats: SolveStats,
) -> SolveSuccess:
    total = best.rating_sum
    return SolveSuccess(
        squad=tuple(squad),
        total_rating=total,
        average_rating=total / len(squad),
        chemistry=best.chemistry,
        chemistry_details=best.chemistry_details,
        rating_surplus=total - required_total,
        stats=stats,
    )
