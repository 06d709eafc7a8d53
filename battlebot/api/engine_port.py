"""Game engine contract consumed by the bot."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from battlebot.core.models import Coord


class ShotEnginePort(Protocol):
    """Engine that owns the hidden layout and resolves shots."""

    def shoot(self, coord: Coord) -> bool:
        """Fire at an untried cell and return whether a ship occupied it."""

    def ships_sunk(self) -> int:
        """Return the cumulative number of fully sunk ships this game."""

    def ship_sizes(self) -> Sequence[int]:
        """Return the lengths of every ship in play."""
