"""Input adapters that turn raw pool exports into players."""

from .players import (
    PlayerRow,
    dedupe_players,
    load_players,
    load_players_csv,
    load_players_json,
    parse_bulk_players,
    players_from_json,
)

__all__ = [
    "PlayerRow",
    "dedupe_players",
    "load_players",
    "load_players_csv",
    "load_players_json",
    "parse_bulk_players",
    "players_from_json",
]
