"""Persist and load solver sessions (pool, requirements and squad config)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from sbcsolve.models import Player, Requirement, SquadConfig


DEFAULT_SESSION_CONFIG = SquadConfig(squad_size=11, min_team_rating=84, min_chemistry=0)


@dataclass
class SolverSession:
    players: List[Player] = field(default_factory=list)
    requirements: List[Requirement] = field(default_factory=list)
    config: SquadConfig = DEFAULT_SESSION_CONFIG

    @classmethod
    def load(cls, path: Path) -> "SolverSession":
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"{path} is not a valid session file: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"{path} is not a valid session file: expected an object")
        players = data.get("players")
        requirements = data.get("requirements")
        config = {**DEFAULT_SESSION_CONFIG.model_dump(), **(data.get("config") or {})}
        return cls(
            players=[Player.model_validate(item) for item in players] if isinstance(players, list) else [],
            requirements=(
                [Requirement.model_validate(item) for item in requirements]
                if isinstance(requirements, list)
                else []
            ),
            config=SquadConfig.model_validate(config),
        )

    def save(self, path: Path) -> None:
        payload = {
            "players": [player.model_dump() for player in self.players],
            "requirements": [requirement.model_dump() for requirement in self.requirements],
            "config": self.config.model_dump(),
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
