"""REST API for the squad solver."""

from __future__ import annotations

import json
import logging

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response
from pydantic import ValidationError

from sbcsolve.api.schemas import (
    PlayerChemistryResponse,
    PlayerImportResponse,
    RequirementCheckResponse,
    RosterSummaryResponse,
    SolveRequest,
    SolveResponse,
    SolveStatsResponse,
)
from sbcsolve.ingest import dedupe_players, load_players_csv, parse_bulk_players, players_from_json
from sbcsolve.models import Player
from sbcsolve.pool import export_squad_to_csv, format_solution, requirement_status, summarize_roster
from sbcsolve.solver import SolveResult, SolveSuccess, solve


logger = logging.getLogger(__name__)

IMPORT_FORMATS = ("auto", "bulk", "csv", "json")


def _resolve_format(requested: str, filename: str | None) -> str:
    fmt = requested.lower()
    if fmt not in IMPORT_FORMATS:
        raise HTTPException(status_code=400, detail=f"Unsupported format {requested!r}")
    if fmt != "auto":
        return fmt
    name = (filename or "").lower()
    if name.endswith(".csv"):
        return "csv"
    if name.endswith(".json"):
        return "json"
    return "bulk"


def _parse_upload(text: str, fmt: str) -> list[Player]:
    try:
        if fmt == "csv":
            return load_players_csv(text)
        if fmt == "json":
            return players_from_json(json.loads(text))
        return parse_bulk_players(text)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid JSON: {exc}") from exc
    except (ValueError, ValidationError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _result_to_response(result: SolveResult, request: SolveRequest) -> SolveResponse:
    stats = SolveStatsResponse(
        visited=result.stats.visited,
        pruned_by_rating=result.stats.pruned_by_rating,
        pruned_by_requirement=result.stats.pruned_by_requirement,
    )
    if not isinstance(result, SolveSuccess):
        return SolveResponse(kind=result.kind, reason=result.reason, stats=stats)

    checks = [
        RequirementCheckResponse(
            requirement_id=status.requirement.id,
            attribute=status.requirement.attribute,
            value=status.requirement.value,
            min_count=status.requirement.min_count,
            actual=status.actual,
            passed=status.passed,
        )
        for status in requirement_status(result.squad, request.requirements)
    ]
    return SolveResponse(
        kind=result.kind,
        squad=list(result.squad),
        total_rating=result.total_rating,
        average_rating=result.average_rating,
        chemistry=result.chemistry,
        chemistry_details=[
            PlayerChemistryResponse(
                player_id=detail.player_id,
                total=detail.total,
                club=detail.club,
                league=detail.league,
                nation=detail.nation,
            )
            for detail in result.chemistry_details
        ],
        rating_surplus=result.rating_surplus,
        requirement_checks=checks,
        summary=format_solution(result),
        stats=stats,
    )


def create_app() -> FastAPI:
    app = FastAPI(title="sbcsolve")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/players/import", response_model=PlayerImportResponse)
    async def import_players(
        file: UploadFile = File(...),
        format: str = Form("auto"),
        dedupe: bool = Form(True),
    ) -> PlayerImportResponse:
        contents = await file.read()
        if not contents:
            raise HTTPException(status_code=400, detail="uploaded file is empty")
        try:
            text = contents.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise HTTPException(status_code=400, detail="uploaded file is not UTF-8 text") from exc

        fmt = _resolve_format(format, file.filename)
        parsed = _parse_upload(text, fmt)
        players = dedupe_players(parsed) if dedupe else parsed
        summary = summarize_roster(players)
        logger.info("Imported %s players (%s format, %s duplicates)", len(players), fmt, len(parsed) - len(players))
        return PlayerImportResponse(
            players=players,
            imported=len(players),
            duplicates_removed=len(parsed) - len(players),
            summary=RosterSummaryResponse(
                size=summary.size,
                average_rating=summary.average_rating,
                nations=list(summary.nations),
                leagues=list(summary.leagues),
            ),
        )

    # Plain ``def`` endpoints run in the server's thread pool, keeping the
    # CPU-bound search off the event loop.
    @app.post("/solve", response_model=SolveResponse)
    def solve_squad(request: SolveRequest) -> SolveResponse:
        result = solve(request.players, request.requirements, request.config)
        return _result_to_response(result, request)

    @app.post("/solve/export.csv")
    def export_csv(request: SolveRequest) -> Response:
        result = solve(request.players, request.requirements, request.config)
        if not isinstance(result, SolveSuccess):
            raise HTTPException(status_code=422, detail=result.reason)
        return Response(
            content=export_squad_to_csv(result),
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=squad.csv"},
        )

    return app


__all__ = ["create_app"]
