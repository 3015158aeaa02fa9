"""Chemistry and quality-tier rules for supported game editions."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict, Iterable, Tuple


logger = logging.getLogger(__name__)

_SEARCH_LIMIT_ENV = "SBCSOLVE_SEARCH_LIMIT"
_RULES_ENV = "SBCSOLVE_RULES"

DEFAULT_RULES_KEY = "FC26"
DEFAULT_SEARCH_LIMIT = 200_000


@dataclass(frozen=True)
class ChemistryRules:
    key: str
    club_thresholds: Tuple[int, ...]
    league_thresholds: Tuple[int, ...]
    nation_thresholds: Tuple[int, ...]
    max_player_chemistry: int
    gold_min_rating: int
    silver_min_rating: int

    def infer_quality(self, rating: int) -> str:
        """Quality tier label implied by a rating when a card has none."""

        if rating >= self.gold_min_rating:
            return "Gold"
        if rating >= self.silver_min_rating:
            return "Silver"
        return "Bronze"


_CHEMISTRY_RULES: Dict[str, ChemistryRules] = {
    "FC26": ChemistryRules(
        key="FC26",
        club_thresholds=(2, 3, 4),
        league_thresholds=(3, 5, 8),
        nation_thresholds=(2, 5, 8),
        max_player_chemistry=3,
        gold_min_rating=75,
        silver_min_rating=65,
    ),
}


def iter_rules() -> Iterable[ChemistryRules]:
    """Return an iterator of all configured rule sets."""

    return _CHEMISTRY_RULES.values()


def get_rules(key: str | None = None) -> ChemistryRules:
    """Fetch rules by edition key, raising KeyError if missing.

    With no key, the ``SBCSOLVE_RULES`` environment variable (or FC26) decides.
    """

    if key is None:
        key = os.getenv(_RULES_ENV) or DEFAULT_RULES_KEY
    normalized = key.strip().upper()
    if normalized not in _CHEMISTRY_RULES:
        raise KeyError(f"No chemistry rules configured for key={key!r}")
    return _CHEMISTRY_RULES[normalized]


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def default_search_limit() -> int:
    return _env_int(_SEARCH_LIMIT_ENV, DEFAULT_SEARCH_LIMIT, min_value=1)
