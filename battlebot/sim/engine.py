"""Reference game engine used to drive the bot in simulated games."""

from __future__ import annotations

import random
from collections.abc import Sequence

import numpy as np

from battlebot.core.models import BOARD_SIZE, DEFAULT_FLEET_LENGTHS, Coord, ShotResult
from battlebot.infra.logging import get_logger
from battlebot.sim.fleet import FleetPlacement, cells_for_placement, random_fleet, validate_fleet

logger = get_logger(__name__)

# Ship-id layer value for open water; ships are numbered from 1.
_WATER = 0


class ShotRejectedError(ValueError):
    """Raised when a shot targets an already-resolved or off-board cell."""

    def __init__(self, coord: Coord, result: ShotResult) -> None:
        super().__init__(f"shot at ({coord.row}, {coord.col}) rejected: {result.value}")
        self.coord = coord
        self.result = result


class SimulatedEngine:
    """Owns a hidden fleet and answers shots the way a game server would."""

    def __init__(self, fleet: FleetPlacement, size: int = BOARD_SIZE) -> None:
        valid, reason = validate_fleet(fleet, fleet.lengths(), size=size)
        if not valid:
            raise ValueError(reason)
        self._fleet = fleet
        self._size = size
        self._ship_ids = np.full((size, size), _WATER, dtype=np.int16)
        self._fired = np.zeros((size, size), dtype=bool)
        self._cells_left = np.array(fleet.lengths(), dtype=np.int16)
        for ship_id, placement in enumerate(fleet.ships, start=1):
            for cell in cells_for_placement(placement):
                self._ship_ids[cell.row, cell.col] = ship_id
        self.shot_history: list[tuple[Coord, ShotResult]] = []

    @classmethod
    def random(
        cls,
        rng: random.Random,
        lengths: Sequence[int] = DEFAULT_FLEET_LENGTHS,
        size: int = BOARD_SIZE,
    ) -> SimulatedEngine:
        """Create an engine around a random non-touching fleet."""
        return cls(random_fleet(rng, lengths, size), size=size)

    @property
    def size(self) -> int:
        return self._size

    @property
    def fleet(self) -> FleetPlacement:
        return self._fleet

    @property
    def shots_fired(self) -> int:
        return len(self.shot_history)

    @property
    def game_over(self) -> bool:
        return not self._cells_left.any()

    def ship_sizes(self) -> tuple[int, ...]:
        return self._fleet.lengths()

    def ships_sunk(self) -> int:
        return int(np.count_nonzero(self._cells_left == 0))

    def resolve(self, coord: Coord) -> ShotResult:
        """Apply a shot without raising; rejected shots leave the board untouched."""
        if not (0 <= coord.row < self._size and 0 <= coord.col < self._size):
            return ShotResult.INVALID
        if self._fired[coord.row, coord.col]:
            return ShotResult.REPEAT
        self._fired[coord.row, coord.col] = True
        ship_id = int(self._ship_ids[coord.row, coord.col])
        if ship_id == _WATER:
            return ShotResult.MISS
        self._cells_left[ship_id - 1] -= 1
        return ShotResult.SUNK if self._cells_left[ship_id - 1] == 0 else ShotResult.HIT

    def shoot(self, coord: Coord) -> bool:
        """Resolve a shot; repeated or off-board shots raise ``ShotRejectedError``."""
        result = self.resolve(coord)
        if result in (ShotResult.INVALID, ShotResult.REPEAT):
            raise ShotRejectedError(coord, result)
        self.shot_history.append((coord, result))
        if result is ShotResult.SUNK:
            logger.debug(
                "engine_ship_sunk row=%d col=%d sunk=%d", coord.row, coord.col, self.ships_sunk()
            )
        return result is not ShotResult.MISS
