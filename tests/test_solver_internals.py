import math

from sbcsolve.config import get_rules
from sbcsolve.models import Player, Requirement
from sbcsolve.solver.chemistry import compute_chemistry, threshold_points
from sbcsolve.solver.index import FeasibilityIndex, sort_pool
from sbcsolve.solver.keys import (
    active_requirements,
    matches,
    normalize_key,
    normalize_player,
    normalize_requirement,
)


RULES = get_rules("FC26")


def _keyed(pid: str, rating: int, **kwargs):
    name = kwargs.pop("name", f"Player {pid}")
    data = {"nation": "England", "league": "Premier League", "club": "Arsenal", "positions": ["ST"]}
    data.update(kwargs)
    return normalize_player(Player(id=pid, name=name, rating=rating, **data), RULES)


def test_normalize_key_folds_case_and_accents():
    assert normalize_key("  Atlético Madrid ") == "atletico madrid"
    assert normalize_key("STRAßE") == "strasse"
    assert normalize_key(None) == ""


def test_normalize_player_keeps_source_untouched():
    player = Player(id="p1", name="Ana", rating=72, nation="Brasil ", league="Liga", club="Flamengo", positions=[" st", "cf", ""])

    keyed = normalize_player(player, RULES)

    assert keyed.source is player
    assert keyed.nation_key == "brasil"
    assert keyed.position_keys == ("ST", "CF")
    assert keyed.quality_key == "silver"
    assert player.positions == [" st", "cf", ""]


def test_blank_quality_is_inferred():
    keyed = normalize_player(Player(id="p", name="P", rating=80, quality="  "), RULES)
    assert keyed.quality_key == "gold"

    keyed = normalize_player(Player(id="p", name="P", rating=50), RULES)
    assert keyed.quality_key == "bronze"


def test_position_requirement_matches_case_insensitively():
    player = _keyed("p1", 80, positions=["cam", "Cm"])

    assert matches(player, normalize_requirement(Requirement(attribute="position", value="CM")))
    assert matches(player, normalize_requirement(Requirement(attribute="Position", value=" cam ")))
    assert not matches(player, normalize_requirement(Requirement(attribute="position", value="ST")))


def test_attribute_requirements_require_exact_match():
    player = _keyed("p1", 80, club="Manchester United")

    assert matches(player, normalize_requirement(Requirement(attribute="club", value="manchester united")))
    assert not matches(player, normalize_requirement(Requirement(attribute="club", value="Manchester")))
    assert not matches(player, normalize_requirement(Requirement(attribute="height", value="Manchester United")))


def test_active_requirements_drop_inert_entries():
    requirements = [
        Requirement(id="keep", attribute="nation", value="Spain", min_count=1),
        Requirement(id="zero", attribute="nation", value="Spain", min_count=0),
        Requirement(id="blank", attribute="nation", value=" ", min_count=2),
    ]

    assert [req.source.id for req in active_requirements(requirements)] == ["keep"]


def test_threshold_points():
    assert threshold_points(1, (2, 3, 4)) == 0
    assert threshold_points(3, (2, 3, 4)) == 2
    assert threshold_points(9, (3, 5, 8)) == 3


def test_full_club_squad_caps_at_three():
    squad = [_keyed(f"p{i}", 80) for i in range(11)]

    total, breakdown = compute_chemistry(squad, RULES)

    assert total == 33
    assert all((detail.club, detail.league, detail.nation, detail.total) == (3, 3, 3, 3) for detail in breakdown)


def test_chemistry_breakdown_by_cluster():
    squad = [
        _keyed("a", 80, club="Lyon", league="Ligue 1", nation="France"),
        _keyed("b", 80, club="Lyon", league="Ligue 1", nation="France"),
        _keyed("c", 80, club="Nice", league="Ligue 1", nation="Brazil"),
        _keyed("d", 80, club="Porto", league="Liga Portugal", nation="Portugal"),
    ]

    total, breakdown = compute_chemistry(squad, RULES)
    by_id = {detail.player_id: detail for detail in breakdown}

    assert (by_id["a"].club, by_id["a"].league, by_id["a"].nation) == (1, 1, 1)
    assert by_id["a"].total == 3
    assert by_id["c"].total == 1
    assert by_id["d"].total == 0
    assert total == 3 + 3 + 1 + 0


def test_sort_pool_orders_by_rating_then_name():
    pool = [
        _keyed("z", 80, name="Zed"),
        _keyed("a", 80, name="adam"),
        _keyed("h", 90, name="Hal"),
    ]

    assert [player.id for player in sort_pool(pool)] == ["h", "a", "z"]


def test_feasibility_index_arrays():
    players = sort_pool([
        _keyed("a", 90, nation="Spain"),
        _keyed("b", 80, nation="France"),
        _keyed("c", 70, nation="Spain"),
        _keyed("d", 60, nation="Italy"),
    ])
    requirements = active_requirements([
        Requirement(attribute="nation", value="Spain", min_count=2),
        Requirement(attribute="nation", value="Italy", min_count=1),
    ])

    index = FeasibilityIndex.build(players, requirements)

    assert index.prefix_rating == [0, 90, 170, 240, 300]
    assert index.remaining_matches[0] == [2, 1, 1, 0, 0]
    assert index.remaining_matches[1] == [1, 1, 1, 1, 0]
    assert index.requirement_matches == [[0], [], [0], [1]]
    assert index.max_rating_from(1, 2) == 150
    assert index.min_rating_from(1, 2) == 130
    assert index.max_rating_from(3, 2) == -math.inf
    assert index.min_rating_from(2, 0) == 0
    assert index.requirements_reachable(1, 2, [1, 0], [2, 1])
    assert not index.requirements_reachable(3, 2, [1, 0], [2, 1])


def test_requirements_need_open_slots():
    players = sort_pool([
        _keyed("a", 90, nation="Spain"),
        _keyed("b", 80, nation="Spain"),
        _keyed("c", 70, nation="Italy"),
    ])
    requirements = active_requirements([Requirement(attribute="nation", value="Spain", min_count=2)])
    index = FeasibilityIndex.build(players, requirements)

    assert index.requirements_reachable(0, 2, [0], [2])
    assert not index.requirements_reachable(0, 1, [0], [2])
    assert not index.requirements_reachable(1, 0, [1], [2])
