"""Comparison keys for players and requirements."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from sbcsolve.config import ChemistryRules
from sbcsolve.models import Player, Requirement


def normalize_key(value: str | None) -> str:
    """Trimmed, accent-stripped, case-folded form of a free-text label."""

    if not value:
        return ""
    decomposed = unicodedata.normalize("NFKD", value.strip())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def position_key(value: str | None) -> str:
    if not value:
        return ""
    return value.strip().upper()


@dataclass(frozen=True)
class SolverPlayer:
    """A caller's player plus the keys the solver compares on."""

    source: Player
    nation_key: str
    league_key: str
    club_key: str
    quality_key: str
    position_keys: Tuple[str, ...]

    @property
    def id(self) -> str:
        return self.source.id

    @property
    def name(self) -> str:
        return self.source.name

    @property
    def rating(self) -> int:
        return self.source.rating


@dataclass(frozen=True)
class NormalizedRequirement:
    source: Requirement
    attribute: str
    value_key: str
    min_count: int


def normalize_player(player: Player, rules: ChemistryRules) -> SolverPlayer:
    quality = player.quality if player.quality and player.quality.strip() else rules.infer_quality(player.rating)
    positions = tuple(key for key in (position_key(pos) for pos in player.positions) if key)
    return SolverPlayer(
        source=player,
        nation_key=normalize_key(player.nation),
        league_key=normalize_key(player.league),
        club_key=normalize_key(player.club),
        quality_key=normalize_key(quality),
        position_keys=positions,
    )


def normalize_requirement(requirement: Requirement) -> NormalizedRequirement:
    attribute = requirement.attribute.strip().lower()
    if attribute == "position":
        value_key = position_key(requirement.value)
    else:
        value_key = normalize_key(requirement.value)
    return NormalizedRequirement(
        source=requirement,
        attribute=attribute,
        value_key=value_key,
        min_count=requirement.min_count,
    )


def active_requirements(requirements: Iterable[Requirement]) -> List[NormalizedRequirement]:
    """Drop inert requirements (blank value or ``min_count <= 0``)."""

    return [normalize_requirement(req) for req in requirements if req.is_active]


def matches(player: SolverPlayer, requirement: NormalizedRequirement) -> bool:
    attribute = requirement.attribute
    if attribute == "position":
        return requirement.value_key in player.position_keys
    if attribute == "nation":
        return player.nation_key == requirement.value_key
    if attribute == "league":
        return player.league_key == requirement.value_key
    if attribute == "club":
        return player.club_key == requirement.value_key
    if attribute == "quality":
        return player.quality_key == requirement.value_key
    return False
