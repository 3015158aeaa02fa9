import json
from pathlib import Path

import pytest

from sbcsolve.ingest import (
    PlayerRow,
    dedupe_players,
    load_players,
    load_players_csv,
    load_players_json,
    parse_bulk_players,
    players_from_json,
)
from sbcsolve.models import Player


def test_parse_bulk_players_reads_fields():
    text = """
    vinicius junior, 89, brazil, LaLiga, real madrid, LW/ST
    Rodri | 91 | spain | Premier League | manchester city | CDM, CM

    too, short, line
    Ghost, n/a, Nowhere, None, Nobody, ST
    """

    players = parse_bulk_players(text)

    assert len(players) == 2
    first, second = players
    assert first.name == "Vinicius Junior"
    assert first.rating == 89
    assert first.nation == "Brazil"
    assert first.league == "LaLiga"
    assert first.club == "Real Madrid"
    assert first.positions == ["LW", "ST"]
    assert first.quality == "Gold"
    assert second.positions == ["CDM", "CM"]
    assert first.id != second.id


def test_parse_bulk_players_rounds_rating_and_infers_tier():
    players = parse_bulk_players("Young Prospect, 64.6, england, EFL League One, wigan athletic")

    assert players[0].rating == 65
    assert players[0].quality == "Silver"
    assert players[0].positions == []


def test_player_row_from_mapping_joins_columns():
    row = {"First": "Kylian", "Last": "Mbappe", "OVR": "91", "Country": "France", "Pos": "ST/LW"}
    mapping = {"name": "First|Last", "rating": "OVR", "nation": "Country", "positions": "Pos"}

    parsed = PlayerRow.from_mapping(row, mapping)
    player = parsed.to_player()

    assert player.name == "Kylian Mbappe"
    assert player.rating == 91
    assert player.nation == "France"
    assert player.positions == ["ST", "LW"]
    assert player.quality is None


def test_load_players_csv(tmp_path: Path):
    path = tmp_path / "club.csv"
    path.write_text(
        "id,name,rating,nation,league,club,quality,positions\n"
        "1,Alisson,89,Brazil,Premier League,Liverpool,Gold,GK\n"
        "2,Trent,86,England,LaLiga,Real Madrid,,RB/CM\n"
    )

    players = load_players_csv(path)

    assert [player.id for player in players] == ["1", "2"]
    assert players[1].quality is None
    assert players[1].positions == ["RB", "CM"]


def test_load_players_csv_reports_bad_rating():
    with pytest.raises(ValueError, match="line 2"):
        load_players_csv("id,name,rating\n1,Broken,high\n")


def test_players_from_json_accepts_aliases():
    payload = {
        "players": [
            {"playerId": 7, "commonName": "Son", "overall": "87", "nationName": "Korea Republic",
             "leagueName": "MLS", "clubName": "LAFC", "possiblePositions": ["lw", "st"]},
        ]
    }

    players = players_from_json(payload)

    assert players[0].id == "7"
    assert players[0].rating == 87
    assert players[0].club == "LAFC"
    assert players[0].positions == ["LW", "ST"]


def test_players_from_json_rejects_bad_shapes():
    with pytest.raises(ValueError):
        players_from_json("nope")
    with pytest.raises(ValueError):
        players_from_json([{"name": "No rating"}])


def test_load_players_dispatches_on_suffix(tmp_path: Path):
    json_path = tmp_path / "pool.json"
    json_path.write_text(json.dumps([{"id": "a", "name": "A", "rating": 70}]))
    text_path = tmp_path / "pool.txt"
    text_path.write_text("B, 71, Spain, LaLiga, Getafe, CB\n")

    assert load_players(json_path)[0].id == "a"
    assert load_players(text_path)[0].name == "B"


def test_load_players_json_invalid(tmp_path: Path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")

    with pytest.raises(ValueError):
        load_players_json(path)


def test_dedupe_players_keeps_first():
    first = Player(id="1", name="Same", rating=80, nation="X", league="Y", club="Z", positions=["ST"])
    copy = Player(id="2", name="Same", rating=80, nation="X", league="Y", club="Z", positions=["ST"])
    other = Player(id="3", name="Same", rating=81, nation="X", league="Y", club="Z", positions=["ST"])

    assert [player.id for player in dedupe_players([first, copy, other])] == ["1", "3"]
