"""Per-game state owned by one bot."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from battlebot.ai.hunt import HuntController
from battlebot.core.grid import BoardGrid
from battlebot.core.models import BOARD_SIZE, Coord


@dataclass(slots=True)
class GameSession:
    """Grid knowledge plus chase bookkeeping for a single game."""

    grid: BoardGrid
    hunt: HuntController
    shots: list[Coord] = field(default_factory=list)

    @property
    def shots_fired(self) -> int:
        return len(self.shots)

    def reset(self, ship_lengths: Sequence[int]) -> None:
        """Return to the start-of-game state without reallocating the grid."""
        self.grid.reset()
        self.hunt.reset(ship_lengths)
        self.shots.clear()


def create_session(ship_lengths: Sequence[int], size: int = BOARD_SIZE) -> GameSession:
    """Build a fresh session with every cell Empty."""
    return GameSession(grid=BoardGrid(size=size), hunt=HuntController(ship_lengths))
