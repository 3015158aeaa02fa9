"""Helpers to load player pools from pasted text, CSV or JSON."""

from __future__ import annotations

import csv
import json
import logging
import math
import re
from io import StringIO
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Sequence
from uuid import uuid4

from pydantic import BaseModel, ValidationError

from sbcsolve.config import ChemistryRules, get_rules
from sbcsolve.models import Player


logger = logging.getLogger(__name__)

_FIELD_SPLIT = re.compile(r"[,|]")
_POSITION_SPLIT = re.compile(r"\s*/\s*|\s*,\s*")

DEFAULT_PLAYERS_MAPPING = {
    "player_id": "id",
    "name": "name",
    "rating": "rating",
    "nation": "nation",
    "league": "league",
    "club": "club",
    "quality": "quality",
    "positions": "positions",
}

_JSON_ALIASES = {
    "player_id": ("id", "playerId", "player_id"),
    "name": ("name", "commonName"),
    "rating": ("rating", "overall", "ovr"),
    "nation": ("nation", "nationName"),
    "league": ("league", "leagueName"),
    "club": ("club", "clubName", "teamName"),
    "quality": ("quality", "rarity"),
    "positions": ("positions", "possiblePositions", "position"),
}


def new_player_id() -> str:
    return uuid4().hex[:8]


def title_case(value: str) -> str:
    words = value.split(" ")
    return " ".join(word[:1].upper() + word[1:].lower() if word else "" for word in words).strip()


def split_positions(raw: str | Sequence[str] | None) -> List[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        parts = _POSITION_SPLIT.split(raw)
    else:
        parts = [str(part) for part in raw]
    return [part.strip().upper() for part in parts if part and part.strip()]


class PlayerRow(BaseModel):
    raw_id: Optional[str] = None
    raw_name: str
    raw_rating: str
    raw_nation: str = ""
    raw_league: str = ""
    raw_club: str = ""
    raw_quality: Optional[str] = None
    raw_positions: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "PlayerRow":
        def extract(key: str, *, default: Optional[str] = None) -> Optional[str]:
            column = mapping.get(key)
            if column is None:
                return default
            if "|" in column:
                parts = [(row.get(col.strip()) or "").strip() for col in column.split("|")]
                joined = " ".join(part for part in parts if part)
                return joined or default
            value = row.get(column)
            return value.strip() if value is not None else default

        return cls(
            raw_id=extract("player_id"),
            raw_name=extract("name", default="") or "",
            raw_rating=extract("rating", default="") or "",
            raw_nation=extract("nation", default="") or "",
            raw_league=extract("league", default="") or "",
            raw_club=extract("club", default="") or "",
            raw_quality=extract("quality"),
            raw_positions=extract("positions"),
        )

    def to_player(self) -> Player:
        rating = _parse_rating(self.raw_rating)
        if rating is None:
            raise ValueError(f"rating {self.raw_rating!r} for {self.raw_name!r} is not numeric")
        return Player(
            id=self.raw_id or new_player_id(),
            name=self.raw_name,
            rating=rating,
            nation=self.raw_nation,
            league=self.raw_league,
            club=self.raw_club,
            quality=self.raw_quality or None,
            positions=split_positions(self.raw_positions),
        )


def _parse_rating(raw: Any) -> Optional[int]:
    try:
        value = float(str(raw).strip())
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return max(0, int(round(value)))


def parse_bulk_players(text: str, *, rules: ChemistryRules | None = None) -> List[Player]:
    """Parse ``name, rating, nation, league, club[, positions]`` lines.

    Fields may be separated by commas or pipes. Lines that are too short or
    carry a non-numeric rating are skipped.
    """

    rules = rules or get_rules()
    players: List[Player] = []
    skipped = 0
    for line in (line.strip() for line in text.splitlines()):
        if not line:
            continue
        parts = [part.strip() for part in _FIELD_SPLIT.split(line)]
        if len(parts) < 5:
            logger.debug("Skipping short bulk line: %s", line)
            skipped += 1
            continue
        name, raw_rating, nation, league, club = parts[:5]
        rating = _parse_rating(raw_rating)
        if rating is None:
            logger.debug("Skipping bulk line with non-numeric rating: %s", line)
            skipped += 1
            continue
        players.append(
            Player(
                id=new_player_id(),
                name=title_case(name),
                rating=rating,
                nation=title_case(nation),
                league=league,
                club=title_case(club),
                quality=rules.infer_quality(rating),
                positions=split_positions(",".join(parts[5:])),
            )
        )
    if skipped:
        logger.info("Parsed %s players from bulk text (%s lines skipped)", len(players), skipped)
    return players


def load_players_csv(
    source: Path | str,
    *,
    mapping: Mapping[str, str] | None = None,
) -> List[Player]:
    """Read players from a CSV file path or CSV text."""

    mapping = mapping or DEFAULT_PLAYERS_MAPPING
    if isinstance(source, Path):
        text = source.read_text(encoding="utf-8")
    else:
        text = source
    reader = csv.DictReader(StringIO(text))
    players: List[Player] = []
    for line_no, row in enumerate(reader, start=2):
        parsed = PlayerRow.from_mapping(row, mapping)
        try:
            players.append(parsed.to_player())
        except (ValueError, ValidationError) as exc:
            raise ValueError(f"line {line_no}: {exc}") from exc
    logger.info("Loaded %s players from CSV", len(players))
    return players


def _pick(entry: Mapping[str, Any], field: str) -> Any:
    for alias in _JSON_ALIASES[field]:
        if alias in entry and entry[alias] is not None:
            return entry[alias]
    return None


def players_from_json(data: Any) -> List[Player]:
    """Build players from a decoded JSON list (or ``{"players": [...]}``)."""

    if isinstance(data, Mapping):
        data = data.get("players", [])
    if not isinstance(data, list):
        raise ValueError("expected a list of player objects")
    players: List[Player] = []
    for position, entry in enumerate(data):
        if not isinstance(entry, Mapping):
            raise ValueError(f"entry {position} is not an object")
        rating = _parse_rating(_pick(entry, "rating"))
        if rating is None:
            raise ValueError(f"entry {position} has no numeric rating")
        player_id = _pick(entry, "player_id")
        quality = _pick(entry, "quality")
        try:
            players.append(
                Player(
                    id=str(player_id) if player_id not in (None, "") else new_player_id(),
                    name=str(_pick(entry, "name") or ""),
                    rating=rating,
                    nation=str(_pick(entry, "nation") or ""),
                    league=str(_pick(entry, "league") or ""),
                    club=str(_pick(entry, "club") or ""),
                    quality=str(quality) if quality else None,
                    positions=split_positions(_pick(entry, "positions")),
                )
            )
        except ValidationError as exc:
            raise ValueError(f"entry {position}: {exc}") from exc
    return players


def load_players_json(path: Path) -> List[Player]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path} is not valid JSON: {exc}") from exc
    players = players_from_json(data)
    logger.info("Loaded %s players from %s", len(players), path)
    return players


def load_players(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[Player]:
    """Dispatch on file suffix: ``.csv``, ``.json``, anything else is bulk text."""

    suffix = path.suffix.lower()
    if suffix == ".csv":
        return load_players_csv(path, mapping=mapping)
    if suffix == ".json":
        return load_players_json(path)
    return parse_bulk_players(path.read_text(encoding="utf-8"))


def dedupe_players(players: Iterable[Player]) -> List[Player]:
    """Keep the first of any players sharing name, rating, clubs and positions."""

    seen: dict[tuple, Player] = {}
    for player in players:
        key = (
            player.name,
            player.rating,
            player.nation,
            player.league,
            player.club,
            "|".join(player.positions),
        )
        seen.setdefault(key, player)
    return list(seen.values())
