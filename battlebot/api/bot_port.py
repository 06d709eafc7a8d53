"""Driver-facing bot contract."""

from __future__ import annotations

from typing import Protocol

from battlebot.api.engine_port import ShotEnginePort
from battlebot.core.models import Coord


class BotPort(Protocol):
    """Bot driven one shot at a time by an external game loop."""

    def reset_for_new_game(self, engine: ShotEnginePort) -> None:
        """Bind the engine and clear all per-game state."""

    def fire_shot(self) -> Coord:
        """Choose a target, fire it through the engine and absorb the outcome."""

    def authors(self) -> str:
        """Return a static identification label."""
