"""Core domain models shared by the bot and the simulation harness."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum

BOARD_SIZE = 12

DEFAULT_FLEET_LENGTHS: tuple[int, ...] = (5, 4, 3, 3, 2)

# Neighbor push order: up, down, left, right.
ORTHOGONAL_OFFSETS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class CellState(IntEnum):
    """Tracked knowledge about one cell; values are stored in numpy arrays."""

    EMPTY = 0
    MISS = 1
    HIT = 2


class Orientation(StrEnum):
    """Ship orientation. Horizontal ships keep their row fixed."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


class HuntMode(StrEnum):
    """Targeting mode of the hunt controller."""

    SEARCH = "SEARCH"
    CHASE = "CHASE"


class ShotResult(StrEnum):
    """Result of a single shot against the true layout."""

    MISS = "MISS"
    HIT = "HIT"
    SUNK = "SUNK"
    REPEAT = "REPEAT"
    INVALID = "INVALID"


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate."""

    row: int
    col: int
