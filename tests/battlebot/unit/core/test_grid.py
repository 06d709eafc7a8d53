from __future__ import annotations

import numpy as np

from battlebot.core.grid import BoardGrid
from battlebot.core.models import CellState, Coord


def test_new_grid_is_all_empty_with_zero_scores(grid: BoardGrid) -> None:
    assert grid.states.shape == (12, 12)
    assert grid.count(CellState.EMPTY) == 144
    assert not grid.probability.any()


def test_custom_size_resizes_arrays() -> None:
    small = BoardGrid(size=4)
    assert small.states.shape == (4, 4)
    assert small.probability.shape == (4, 4)
    assert len(small.empty_cells()) == 16


def test_record_outcome_touches_only_target_cell(grid: BoardGrid) -> None:
    before = grid.states.copy()
    grid.record_outcome(Coord(3, 7), hit=True)
    grid.record_outcome(Coord(0, 0), hit=False)

    changed = np.argwhere(before != grid.states)
    assert sorted(map(tuple, changed.tolist())) == [(0, 0), (3, 7)]
    assert grid.state_at(Coord(3, 7)) is CellState.HIT
    assert grid.state_at(Coord(0, 0)) is CellState.MISS
    assert not grid.is_empty(Coord(3, 7))
    assert grid.is_empty(Coord(3, 6))


def test_reset_clears_states_and_scores(grid: BoardGrid) -> None:
    grid.record_outcome(Coord(1, 1), hit=True)
    grid.probability[2, 2] = 9
    grid.reset()
    grid.reset()
    assert grid.count(CellState.EMPTY) == 144
    assert not grid.probability.any()


def test_orthogonal_neighbors_order_and_bounds(grid: BoardGrid) -> None:
    assert grid.orthogonal_neighbors(Coord(5, 5)) == [
        Coord(4, 5),
        Coord(6, 5),
        Coord(5, 4),
        Coord(5, 6),
    ]
    assert grid.orthogonal_neighbors(Coord(0, 0)) == [Coord(1, 0), Coord(0, 1)]
    assert grid.orthogonal_neighbors(Coord(11, 11)) == [Coord(10, 11), Coord(11, 10)]


def test_empty_cells_are_row_major_and_skip_resolved(grid: BoardGrid) -> None:
    grid.record_outcome(Coord(0, 0), hit=False)
    cells = grid.empty_cells()
    assert cells[0] == Coord(0, 1)
    assert cells[11] == Coord(1, 0)
    assert len(cells) == 143


def test_masks_reflect_states(grid: BoardGrid) -> None:
    grid.record_outcome(Coord(2, 2), hit=True)
    grid.record_outcome(Coord(2, 3), hit=False)
    assert grid.hit_mask().sum() == 1
    assert grid.empty_mask().sum() == 142
    assert grid.in_bounds(Coord(11, 0))
    assert not grid.in_bounds(Coord(12, 0))
    assert not grid.in_bounds(Coord(0, -1))
