"""Board state tracker: per-cell knowledge and probability scores."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from battlebot.core.models import BOARD_SIZE, ORTHOGONAL_OFFSETS, CellState, Coord


@dataclass(slots=True)
class BoardGrid:
    """Numpy-backed view of what the bot knows about the enemy board."""

    size: int = BOARD_SIZE
    states: np.ndarray = field(
        default_factory=lambda: np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
    )
    probability: np.ndarray = field(
        default_factory=lambda: np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int32)
    )

    def __post_init__(self) -> None:
        if self.states.shape != (self.size, self.size):
            self.states = np.zeros((self.size, self.size), dtype=np.int8)
        if self.probability.shape != (self.size, self.size):
            self.probability = np.zeros((self.size, self.size), dtype=np.int32)

    def reset(self) -> None:
        """Mark every cell Empty and zero every score."""
        self.states.fill(CellState.EMPTY)
        self.probability.fill(0)

    def record_outcome(self, coord: Coord, hit: bool) -> None:
        """Resolve one cell to Hit or Miss; no other cell is touched."""
        self.states[coord.row, coord.col] = CellState.HIT if hit else CellState.MISS

    def in_bounds(self, coord: Coord) -> bool:
        """Return whether the coordinate is in board bounds."""
        return 0 <= coord.row < self.size and 0 <= coord.col < self.size

    def state_at(self, coord: Coord) -> CellState:
        return CellState(int(self.states[coord.row, coord.col]))

    def is_empty(self, coord: Coord) -> bool:
        return bool(self.states[coord.row, coord.col] == CellState.EMPTY)

    def orthogonal_neighbors(self, coord: Coord) -> list[Coord]:
        """Return in-bounds neighbors in left, right, up, down order."""
        result: list[Coord] = []
        for dr, dc in ORTHOGONAL_OFFSETS:
            cell = Coord(coord.row + dr, coord.col + dc)
            if self.in_bounds(cell):
                result.append(cell)
        return result

    def empty_mask(self) -> np.ndarray:
        return self.states == CellState.EMPTY

    def hit_mask(self) -> np.ndarray:
        return self.states == CellState.HIT

    def empty_cells(self) -> list[Coord]:
        """Return Empty cells in row-major order."""
        rows, cols = np.nonzero(self.empty_mask())
        return [Coord(int(r), int(c)) for r, c in zip(rows, cols)]

    def count(self, state: CellState) -> int:
        return int(np.count_nonzero(self.states == state))
