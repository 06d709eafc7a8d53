"""Probability-density targeting with a checkerboard parity bonus."""

from __future__ import annotations

import random
from collections.abc import Sequence

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from battlebot.core.grid import BoardGrid
from battlebot.core.models import Coord
from battlebot.infra.logging import get_logger

logger = get_logger(__name__)

# Below this length the density map is skipped and a random Empty cell is used.
LARGE_SHIP_MIN_LENGTH = 4


class ProbabilityTargeter:
    """Scores Empty cells by how many legal placements of afloat ships cover them."""

    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    def choose(self, grid: BoardGrid, remaining_ships: Sequence[int]) -> Coord:
        """Return the next search-mode target."""
        if not has_large_ship(remaining_ships):
            return self.random_empty_cell(grid)

        self.compute_density(grid, remaining_ships)
        best = best_scoring_cell(grid)
        if best is None:
            return self.random_empty_cell(grid)
        return best

    def compute_density(self, grid: BoardGrid, remaining_ships: Sequence[int]) -> np.ndarray:
        """Recompute ``grid.probability`` from scratch and return it."""
        grid.probability.fill(0)
        open_cells = grid.empty_mask() & ~_adjacent_to_hit(grid.hit_mask())
        for length in remaining_ships:
            if length <= 0 or length > grid.size:
                continue
            _accumulate_placements(grid.probability, open_cells, length)
        return grid.probability

    def random_empty_cell(self, grid: BoardGrid) -> Coord:
        candidates = grid.empty_cells()
        if not candidates:
            raise RuntimeError("no Empty cell left to target")
        return self._rng.choice(candidates)


def has_large_ship(remaining_ships: Sequence[int]) -> bool:
    return any(length >= LARGE_SHIP_MIN_LENGTH for length in remaining_ships)


def parity_bonus(size: int) -> np.ndarray:
    """Return 1 on cells whose coordinate sum is even, 0 elsewhere."""
    rows, cols = np.indices((size, size))
    return ((rows + cols) % 2 == 0).astype(np.int32)


def best_scoring_cell(grid: BoardGrid) -> Coord | None:
    """Return the first row-major Empty cell with the highest positive effective score."""
    effective = grid.probability.astype(np.int64) + parity_bonus(grid.size)
    effective[~grid.empty_mask()] = -1
    # argmax returns the first maximum in row-major order.
    flat_index = int(np.argmax(effective))
    row, col = divmod(flat_index, grid.size)
    score = int(effective[row, col])
    if score <= 0:
        return None
    logger.debug("search_target row=%d col=%d score=%d", row, col, score)
    return Coord(row, col)


def _adjacent_to_hit(hits: np.ndarray) -> np.ndarray:
    adjacent = np.zeros_like(hits, dtype=bool)
    adjacent[1:, :] |= hits[:-1, :]
    adjacent[:-1, :] |= hits[1:, :]
    adjacent[:, 1:] |= hits[:, :-1]
    adjacent[:, :-1] |= hits[:, 1:]
    return adjacent


def _accumulate_placements(scores: np.ndarray, open_cells: np.ndarray, length: int) -> None:
    size = open_cells.shape[0]
    starts = size - length + 1

    # Rightward placements: row fixed, window over columns.
    horizontal = sliding_window_view(open_cells, length, axis=1).all(axis=-1)
    for offset in range(length):
        scores[:, offset : offset + starts] += horizontal

    # Downward placements: column fixed, window over rows.
    vertical = sliding_window_view(open_cells, length, axis=0).all(axis=-1)
    for offset in range(length):
        scores[offset : offset + starts, :] += vertical
