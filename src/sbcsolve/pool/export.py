"""CSV export helpers for solved squads."""

from __future__ import annotations

import csv
from io import StringIO

from sbcsolve.solver import SolveResult, SolveSuccess


class SquadExportError(RuntimeError):
    """Raised when a solve result has no squad to export."""


EXPORT_HEADERS = (
    "id",
    "name",
    "rating",
    "nation",
    "league",
    "club",
    "quality",
    "positions",
    "chemistry",
    "club_chemistry",
    "league_chemistry",
    "nation_chemistry",
)


def export_squad_to_csv(result: SolveResult) -> str:
    """One row per squad member with its chemistry breakdown."""

    if not isinstance(result, SolveSuccess):
        raise SquadExportError(f"cannot export a {result.kind} result: {result.reason}")

    details = {detail.player_id: detail for detail in result.chemistry_details}
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_HEADERS)
    for player in result.squad:
        detail = details.get(player.id)
        writer.writerow([
            player.id,
            player.name,
            player.rating,
            player.nation,
            player.league,
            player.club,
            player.quality or "",
            "/".join(player.positions),
            detail.total if detail else "",
            detail.club if detail else "",
            detail.league if detail else "",
            detail.nation if detail else "",
        ])
    return buffer.getvalue()


__all__ = [
    "EXPORT_HEADERS",
    "SquadExportError",
    "export_squad_to_csv",
]
