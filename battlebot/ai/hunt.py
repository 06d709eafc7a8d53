"""Hunt controller: chase a discovered ship until the engine reports it sunk."""

from __future__ import annotations

from collections.abc import Sequence

from battlebot.core.grid import BoardGrid
from battlebot.core.models import Coord, HuntMode, Orientation
from battlebot.infra.logging import get_logger

logger = get_logger(__name__)


class HuntController:
    """Hit trail, pending-target stack and remaining-fleet bookkeeping for one game."""

    def __init__(self, ship_lengths: Sequence[int] = ()) -> None:
        self.remaining_ships: list[int] = []
        self.trail: list[Coord] = []
        self.pending: list[Coord] = []
        self.sunk_count = 0
        self.orientation: Orientation | None = None
        self.reset(ship_lengths)

    @property
    def mode(self) -> HuntMode:
        return HuntMode.CHASE if self.trail else HuntMode.SEARCH

    def reset(self, ship_lengths: Sequence[int]) -> None:
        """Reload the fleet and forget every trail from a previous game."""
        self.remaining_ships = [int(length) for length in ship_lengths]
        self.trail.clear()
        self.pending.clear()
        self.sunk_count = 0
        self.orientation = None

    def afloat_count(self) -> int:
        return sum(1 for length in self.remaining_ships if length > 0)

    def next_target(self, grid: BoardGrid) -> Coord | None:
        """Pop the next pending target that is still Empty."""
        while self.pending:
            coord = self.pending.pop()
            if grid.is_empty(coord):
                return coord
            logger.debug("pending_target_stale row=%d col=%d", coord.row, coord.col)
        return None

    def record_hit(self, grid: BoardGrid, coord: Coord, sunk_count: int) -> bool:
        """Update chase state after a hit; return whether it sank a ship."""
        self._extend_trail(coord)

        if sunk_count > self.sunk_count:
            self._confirm_sunk(sunk_count)
            return True

        if len(self.trail) > 1:
            self.orientation = _orientation_between(self.trail[-2], coord)
            if self.orientation is not None:
                logger.debug(
                    "chase_orientation=%s row=%d col=%d", self.orientation, coord.row, coord.col
                )
                self._push_along_orientation(grid, coord, self.orientation)
                return False

        self._push_all_neighbors(grid, coord)
        return False

    def sunk_ship_length(self) -> int:
        """Length of the chased ship from the widest axis span of the trail."""
        if len(self.trail) <= 1:
            return 1
        rows = [coord.row for coord in self.trail]
        cols = [coord.col for coord in self.trail]
        return max(max(rows) - min(rows), max(cols) - min(cols)) + 1

    def _extend_trail(self, coord: Coord) -> None:
        if not self.trail or any(_is_adjacent(coord, existing) for existing in self.trail):
            self.trail.append(coord)
            return
        # Unrelated hit: start a fresh trail from it.
        logger.debug(
            "chase_trail_restart row=%d col=%d dropped=%d", coord.row, coord.col, len(self.trail)
        )
        self.trail = [coord]
        self.orientation = None

    def _confirm_sunk(self, sunk_count: int) -> None:
        length = self.sunk_ship_length()
        self._consume_ship_length(length)
        logger.debug(
            "ship_sunk length=%d sunk_count=%d afloat=%d", length, sunk_count, self.afloat_count()
        )
        self.trail.clear()
        self.pending.clear()
        self.orientation = None
        self.sunk_count = sunk_count

    def _consume_ship_length(self, length: int) -> None:
        # Equal-length ships are indistinguishable; the first matching slot is zeroed.
        for index, remaining in enumerate(self.remaining_ships):
            if remaining == length:
                self.remaining_ships[index] = 0
                return
        afloat = [index for index, remaining in enumerate(self.remaining_ships) if remaining > 0]
        if not afloat:
            return
        closest = min(afloat, key=lambda index: abs(self.remaining_ships[index] - length))
        logger.warning(
            "sunk_length_unmatched length=%d consumed=%d",
            length,
            self.remaining_ships[closest],
        )
        self.remaining_ships[closest] = 0

    def _push_along_orientation(self, grid: BoardGrid, hit: Coord, orientation: Orientation) -> None:
        if orientation is Orientation.HORIZONTAL:
            candidates = (Coord(hit.row, hit.col - 1), Coord(hit.row, hit.col + 1))
        else:
            candidates = (Coord(hit.row - 1, hit.col), Coord(hit.row + 1, hit.col))
        for cell in candidates:
            self._push_if_empty(grid, cell)

    def _push_all_neighbors(self, grid: BoardGrid, hit: Coord) -> None:
        for cell in grid.orthogonal_neighbors(hit):
            self._push_if_empty(grid, cell)

    def _push_if_empty(self, grid: BoardGrid, cell: Coord) -> None:
        if grid.in_bounds(cell) and grid.is_empty(cell):
            self.pending.append(cell)


def _orientation_between(previous: Coord, latest: Coord) -> Orientation | None:
    if previous.row == latest.row:
        return Orientation.HORIZONTAL
    if previous.col == latest.col:
        return Orientation.VERTICAL
    return None


def _is_adjacent(a: Coord, b: Coord) -> bool:
    return abs(a.row - b.row) + abs(a.col - b.col) == 1
