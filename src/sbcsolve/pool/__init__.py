"""Squad pool utilities (summaries, requirement checks, export)."""

from .export import SquadExportError, export_squad_to_csv
from .summary import (
    RequirementStatus,
    RosterSummary,
    count_top,
    format_solution,
    requirement_status,
    summarize_roster,
)

__all__ = [
    "RequirementStatus",
    "RosterSummary",
    "SquadExportError",
    "count_top",
    "export_squad_to_csv",
    "format_solution",
    "requirement_status",
    "summarize_roster",
]
