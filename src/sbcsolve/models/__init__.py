"""Player, requirement and squad configuration models."""

from .player import MAX_SQUAD_SIZE, Attribute, Player, Requirement, SquadConfig

__all__ = ["MAX_SQUAD_SIZE", "Attribute", "Player", "Requirement", "SquadConfig"]
