"""Command-line interface for solving a squad from a player pool file."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import List, Sequence

from sbcsolve.config_loader import SolverSession
from sbcsolve.ingest import dedupe_players, load_players
from sbcsolve.models import Requirement, SquadConfig
from sbcsolve.pool import export_squad_to_csv, format_solution, requirement_status
from sbcsolve.solver import SolveResult, SolveSuccess, solve


ATTRIBUTES = ("nation", "league", "club", "quality", "position")


def parse_requirement(text: str) -> Requirement:
    """Parse ``attribute=value[:count]`` (count defaults to 1)."""

    attribute, sep, rest = text.partition("=")
    attribute = attribute.strip().lower()
    if not sep or attribute not in ATTRIBUTES:
        raise ValueError(
            f"requirement must look like 'attribute=value[:count]' with attribute in {', '.join(ATTRIBUTES)}, got {text!r}"
        )
    value, _, count = rest.rpartition(":") if ":" in rest else (rest, "", "1")
    try:
        min_count = int(count)
    except ValueError:
        raise ValueError(f"requirement count {count!r} is not an integer") from None
    if not value.strip():
        raise ValueError(f"requirement {text!r} has no value")
    return Requirement(attribute=attribute, value=value.strip(), min_count=min_count)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Find the cheapest squad that completes a squad building challenge")
    parser.add_argument(
        "players",
        type=Path,
        nargs="?",
        default=None,
        help="Player pool file (.csv, .json, or bulk text lines 'name, rating, nation, league, club, positions')",
    )
    parser.add_argument(
        "--require",
        action="append",
        default=[],
        metavar="ATTR=VALUE[:COUNT]",
        help="Requirement such as nation=Brazil:2 or position=ST (repeatable)",
    )
    parser.add_argument("--squad-size", type=int, default=None, help="Squad size (1-11)")
    parser.add_argument("--min-rating", type=float, default=None, help="Minimum average team rating")
    parser.add_argument("--min-chemistry", type=int, default=None, help="Minimum total squad chemistry")
    parser.add_argument("--search-limit", type=int, default=None, help="Node budget before the search gives up")
    parser.add_argument("--no-dedupe", action="store_true", help="Keep duplicate players from the pool file")
    parser.add_argument("--load-session", type=Path, default=None, help="Load players/requirements/config JSON")
    parser.add_argument("--save-session", type=Path, default=None, help="Save the effective session JSON")
    parser.add_argument("--output", type=Path, default=None, help="Write the solved squad as CSV")
    parser.add_argument("--json", dest="json_path", type=Path, default=None, help="Write the raw result as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log solver progress")
    return parser.parse_args(argv)


def _result_payload(result: SolveResult) -> dict:
    payload = asdict(result)
    if isinstance(result, SolveSuccess):
        payload["squad"] = [player.model_dump() for player in result.squad]
    return payload


def _build_session(args: argparse.Namespace) -> SolverSession:
    session = SolverSession()
    if args.load_session:
        try:
            session = SolverSession.load(args.load_session)
        except (OSError, ValueError) as exc:
            raise SystemExit(f"Could not load session {args.load_session}: {exc}") from exc

    if args.players is not None:
        try:
            pool = load_players(args.players)
        except (OSError, ValueError) as exc:
            raise SystemExit(f"Could not read {args.players}: {exc}") from exc
        session.players = [*session.players, *pool]
    if not args.no_dedupe:
        session.players = dedupe_players(session.players)

    extra: List[Requirement] = []
    for raw in args.require:
        try:
            extra.append(parse_requirement(raw))
        except ValueError as exc:
            raise SystemExit(str(exc)) from exc
    session.requirements = [*session.requirements, *extra]

    overrides = {
        "squad_size": args.squad_size,
        "min_team_rating": args.min_rating,
        "min_chemistry": args.min_chemistry,
        "search_limit": args.search_limit,
    }
    config = session.config.model_dump()
    config.update({key: value for key, value in overrides.items() if value is not None})
    session.config = SquadConfig.model_validate(config)
    return session


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    session = _build_session(args)
    if args.save_session:
        session.save(args.save_session)
        print(f"Saved session to {args.save_session}")

    result = solve(session.players, session.requirements, session.config)

    if args.json_path:
        args.json_path.write_text(json.dumps(_result_payload(result), indent=2), encoding="utf-8")

    if not isinstance(result, SolveSuccess):
        print(f"No squad ready ({result.kind}): {result.reason}")
        print(
            f"Explored {result.stats.visited:,} nodes. Rating prunes: {result.stats.pruned_by_rating:,}. "
            f"Requirement prunes: {result.stats.pruned_by_requirement:,}."
        )
        return 1

    print(format_solution(result))
    statuses = requirement_status(result.squad, session.requirements)
    if statuses:
        print("")
        for status in statuses:
            req = status.requirement
            print(f"{req.attribute}: {req.value} {status.actual}/{req.min_count}")
    if args.output:
        args.output.write_text(export_squad_to_csv(result), encoding="utf-8")
        print(f"Wrote squad CSV to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
