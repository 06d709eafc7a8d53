from __future__ import annotations

import random

import numpy as np

from battlebot.ai.probability import (
    ProbabilityTargeter,
    best_scoring_cell,
    has_large_ship,
    parity_bonus,
)
from battlebot.core.grid import BoardGrid
from battlebot.core.models import CellState, Coord

# Chi-square critical value for 11 degrees of freedom at p = 0.001.
CHI2_CRITICAL_DF11 = 31.26


def _reference_density(grid: BoardGrid, lengths: list[int]) -> np.ndarray:
    size = grid.size
    scores = np.zeros((size, size), dtype=np.int32)

    def blocked(row: int, col: int) -> bool:
        if grid.states[row, col] != CellState.EMPTY:
            return True
        for dr, dc in ((0, -1), (0, 1), (-1, 0), (1, 0)):
            rr, cc = row + dr, col + dc
            if 0 <= rr < size and 0 <= cc < size and grid.states[rr, cc] == CellState.HIT:
                return True
        return False

    for length in lengths:
        if length == 0:
            continue
        for row in range(size):
            for col in range(size):
                if grid.states[row, col] != CellState.EMPTY:
                    continue
                if col + length <= size and not any(blocked(row, col + i) for i in range(length)):
                    for i in range(length):
                        scores[row, col + i] += 1
                if row + length <= size and not any(blocked(row + i, col) for i in range(length)):
                    for i in range(length):
                        scores[row + i, col] += 1
    return scores


def test_density_on_empty_4x4_with_one_length_4_ship() -> None:
    grid = BoardGrid(size=4)
    density = ProbabilityTargeter(random.Random(0)).compute_density(grid, [4])
    # One row placement plus one column placement covers every cell.
    assert (density == 2).all()


def test_density_corners_score_below_centers() -> None:
    grid = BoardGrid(size=4)
    density = ProbabilityTargeter(random.Random(0)).compute_density(grid, [3])
    per_axis = np.array([1, 2, 2, 1])
    np.testing.assert_array_equal(density, np.add.outer(per_axis, per_axis))
    assert density[0, 0] < density[1, 1]


def test_density_excludes_misses_and_cells_next_to_hits() -> None:
    grid = BoardGrid(size=4)
    grid.record_outcome(Coord(0, 0), hit=False)
    density = ProbabilityTargeter(random.Random(0)).compute_density(grid, [4])
    assert density[0, 0] == 0
    assert density[0, 3] == 1
    assert density[3, 0] == 1
    assert density[2, 2] == 2

    grid.reset()
    grid.record_outcome(Coord(0, 0), hit=True)
    density = ProbabilityTargeter(random.Random(0)).compute_density(grid, [3])
    assert density[0, 1] == 0
    assert density[1, 0] == 0
    assert density[3, 3] > 0


def test_density_skips_sunk_slots_and_is_recomputed_from_scratch() -> None:
    grid = BoardGrid(size=6)
    targeter = ProbabilityTargeter(random.Random(0))
    targeter.compute_density(grid, [5, 4])
    only_four = targeter.compute_density(grid, [0, 4]).copy()
    np.testing.assert_array_equal(only_four, _reference_density(grid, [4]))


def test_vectorized_density_matches_reference_loop() -> None:
    rng = random.Random(42)
    targeter = ProbabilityTargeter(random.Random(0))
    for _ in range(20):
        grid = BoardGrid(size=12)
        for row in range(12):
            for col in range(12):
                roll = rng.random()
                if roll < 0.2:
                    grid.record_outcome(Coord(row, col), hit=False)
                elif roll < 0.25:
                    grid.record_outcome(Coord(row, col), hit=True)
        lengths = [5, 4, 0, 3, 2]
        density = targeter.compute_density(grid, lengths)
        np.testing.assert_array_equal(density, _reference_density(grid, lengths))


def test_parity_bonus_marks_even_coordinate_sums() -> None:
    bonus = parity_bonus(3)
    np.testing.assert_array_equal(bonus, np.array([[1, 0, 1], [0, 1, 0], [1, 0, 1]]))


def test_choose_prefers_first_row_major_maximum() -> None:
    grid = BoardGrid(size=4)
    targeter = ProbabilityTargeter(random.Random(0))
    assert targeter.choose(grid, [4]) == Coord(0, 0)

    grid.record_outcome(Coord(0, 0), hit=False)
    assert targeter.choose(grid, [4]) == Coord(1, 1)


def test_choose_falls_back_to_random_when_no_cell_scores_positive() -> None:
    grid = BoardGrid(size=4)
    for row in range(4):
        for col in range(4):
            if (row + col) % 2 == 0:
                grid.record_outcome(Coord(row, col), hit=False)
    targeter = ProbabilityTargeter(random.Random(5))

    targeter.compute_density(grid, [4])
    assert best_scoring_cell(grid) is None
    picks = {targeter.choose(grid, [4]) for _ in range(50)}
    assert picks <= set(grid.empty_cells())
    assert len(picks) > 1


def test_short_ships_only_skip_density_and_pick_uniformly() -> None:
    grid = BoardGrid(size=4)
    for i in range(4):
        grid.record_outcome(Coord(i, i), hit=False)
    targeter = ProbabilityTargeter(random.Random(2024))
    empty = grid.empty_cells()
    counts = {cell: 0 for cell in empty}

    draws = 6000
    for _ in range(draws):
        pick = targeter.choose(grid, [3, 3, 2])
        counts[pick] += 1

    assert not grid.probability.any()
    expected = draws / len(empty)
    chi2 = sum((observed - expected) ** 2 / expected for observed in counts.values())
    assert len(empty) == 12
    assert chi2 < CHI2_CRITICAL_DF11


def test_has_large_ship_threshold() -> None:
    assert has_large_ship([5, 0, 0])
    assert has_large_ship([0, 4])
    assert not has_large_ship([3, 3, 2, 0])
    assert not has_large_ship([])
