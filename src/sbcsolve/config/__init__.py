"""Configuration helpers for chemistry rules and solver defaults."""

from .chemistry import (
    DEFAULT_RULES_KEY,
    DEFAULT_SEARCH_LIMIT,
    ChemistryRules,
    default_search_limit,
    get_rules,
    iter_rules,
)

__all__ = [
    "DEFAULT_RULES_KEY",
    "DEFAULT_SEARCH_LIMIT",
    "ChemistryRules",
    "default_search_limit",
    "get_rules",
    "iter_rules",
]
