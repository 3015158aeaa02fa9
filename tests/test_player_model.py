import pytest
from pydantic import ValidationError

from sbcsolve.models import Player, Requirement, SquadConfig


def test_player_is_frozen():
    player = Player(
        id="p1",
        name="Test Player",
        rating=84,
        nation="Brazil",
        league="LaLiga",
        club="Real Madrid",
        positions=["LW"],
    )

    assert player.quality is None
    assert player.positions == ["LW"]

    with pytest.raises((TypeError, ValidationError)):
        player.rating = 99  # type: ignore[misc]


def test_player_requires_id_and_non_negative_rating():
    with pytest.raises(ValidationError):
        Player(id="", name="Nobody", rating=70)
    with pytest.raises(ValidationError):
        Player(id="p1", name="Nobody", rating=-1)


def test_squad_config_clamps_numbers():
    config = SquadConfig(squad_size=20, min_team_rating=-3, min_chemistry=-1, search_limit=0)

    assert config.squad_size == 11
    assert config.min_team_rating == 0.0
    assert config.min_chemistry == 0
    assert config.search_limit == 0

    assert SquadConfig(squad_size=0).squad_size == 1
    assert SquadConfig(squad_size=4.7).squad_size == 4
    assert SquadConfig().search_limit is None
    assert SquadConfig(search_limit=-5).search_limit == 0
    assert SquadConfig(min_chemistry=2.5).min_chemistry == 3
    assert SquadConfig(min_chemistry=4).min_chemistry == 4


def test_required_total_rating():
    assert SquadConfig(squad_size=11, min_team_rating=84).required_total_rating == pytest.approx(924.0)


def test_requirement_activity():
    assert Requirement(attribute="nation", value="Spain").is_active
    assert not Requirement(attribute="nation", value="Spain", min_count=0).is_active
    assert not Requirement(attribute="nation", value="  ", min_count=2).is_active
    assert Requirement(attribute="nation", value="Spain").id
