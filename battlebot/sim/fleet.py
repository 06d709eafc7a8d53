"""Fleet placement models, validation and random layouts for simulated games."""

from __future__ import annotations

import random
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from battlebot.core.models import BOARD_SIZE, DEFAULT_FLEET_LENGTHS, Coord, Orientation


@dataclass(frozen=True, slots=True)
class ShipPlacement:
    """Placement of a single ship."""

    length: int
    bow: Coord
    orientation: Orientation


@dataclass(slots=True)
class FleetPlacement:
    """Collection of ship placements."""

    ships: list[ShipPlacement]

    def lengths(self) -> tuple[int, ...]:
        return tuple(ship.length for ship in self.ships)


def cells_for_placement(placement: ShipPlacement) -> list[Coord]:
    """Compute occupied cells for a ship placement."""
    result: list[Coord] = []
    for i in range(placement.length):
        if placement.orientation is Orientation.HORIZONTAL:
            result.append(Coord(placement.bow.row, placement.bow.col + i))
        else:
            result.append(Coord(placement.bow.row + i, placement.bow.col))
    return result


def validate_fleet(
    fleet: FleetPlacement,
    lengths: Sequence[int] = DEFAULT_FLEET_LENGTHS,
    size: int = BOARD_SIZE,
) -> tuple[bool, str]:
    """Validate that a fleet matches ``lengths`` and fits the board without overlap."""
    if Counter(fleet.lengths()) != Counter(lengths):
        return False, f"Fleet lengths {sorted(fleet.lengths())} do not match {sorted(lengths)}."

    occupied: set[tuple[int, int]] = set()
    for placement in fleet.ships:
        for cell in cells_for_placement(placement):
            if not (0 <= cell.row < size and 0 <= cell.col < size):
                return False, f"Ship of length {placement.length} leaves the board."
            key = (cell.row, cell.col)
            if key in occupied:
                return False, f"Ship of length {placement.length} overlaps another ship."
            occupied.add(key)
    return True, ""


def random_fleet(
    rng: random.Random,
    lengths: Sequence[int] = DEFAULT_FLEET_LENGTHS,
    size: int = BOARD_SIZE,
) -> FleetPlacement:
    """Generate a random valid fleet placement with non-touching ships."""
    for _ in range(400):
        generated = _generate_non_touching_fleet(rng, lengths, size)
        if generated is not None:
            return generated
    # Crowded boards may have no non-touching layout at all.
    return _generate_relaxed_fleet(rng, lengths, size)


def _generate_non_touching_fleet(
    rng: random.Random, lengths: Sequence[int], size: int
) -> FleetPlacement | None:
    occupied: set[tuple[int, int]] = set()
    placed: dict[int, ShipPlacement] = {}
    order = list(range(len(lengths)))
    rng.shuffle(order)

    for index in order:
        candidates = _candidate_placements(lengths[index], size, occupied)
        if not candidates:
            return None
        placement = rng.choice(candidates)
        placed[index] = placement
        for cell in cells_for_placement(placement):
            occupied.add((cell.row, cell.col))

    return FleetPlacement(ships=[placed[index] for index in range(len(lengths))])


def _candidate_placements(
    length: int,
    size: int,
    occupied: set[tuple[int, int]],
) -> list[ShipPlacement]:
    candidates: list[ShipPlacement] = []
    for orientation in (Orientation.HORIZONTAL, Orientation.VERTICAL):
        max_row = size if orientation is Orientation.HORIZONTAL else size - length + 1
        max_col = size - length + 1 if orientation is Orientation.HORIZONTAL else size
        for row in range(max_row):
            for col in range(max_col):
                placement = ShipPlacement(length=length, bow=Coord(row, col), orientation=orientation)
                if _touches_existing(cells_for_placement(placement), occupied, size):
                    continue
                candidates.append(placement)
    return candidates


def _touches_existing(cells: list[Coord], occupied: set[tuple[int, int]], size: int) -> bool:
    for cell in cells:
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                rr = cell.row + dr
                cc = cell.col + dc
                if not (0 <= rr < size and 0 <= cc < size):
                    continue
                if (rr, cc) in occupied:
                    return True
    return False


def _generate_relaxed_fleet(
    rng: random.Random, lengths: Sequence[int], size: int
) -> FleetPlacement:
    """Overlap-only generator used as a last resort."""
    occupied: set[tuple[int, int]] = set()
    placements: list[ShipPlacement] = []

    for length in lengths:
        placed = False
        for _ in range(10_000):
            orientation = rng.choice([Orientation.HORIZONTAL, Orientation.VERTICAL])
            placement = ShipPlacement(
                length=length,
                bow=Coord(rng.randrange(size), rng.randrange(size)),
                orientation=orientation,
            )
            cells = cells_for_placement(placement)
            if any(not (0 <= c.row < size and 0 <= c.col < size) for c in cells):
                continue
            if any((c.row, c.col) in occupied for c in cells):
                continue
            occupied.update((c.row, c.col) for c in cells)
            placements.append(placement)
            placed = True
            break
        if not placed:
            raise RuntimeError("Failed to generate random fleet placement.")

    return FleetPlacement(ships=placements)
