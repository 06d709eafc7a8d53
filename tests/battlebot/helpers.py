from __future__ import annotations

from battlebot.core.models import Coord, Orientation
from battlebot.sim.fleet import FleetPlacement, ShipPlacement


def make_line_fleet() -> FleetPlacement:
    return FleetPlacement(
        ships=[
            ShipPlacement(5, Coord(0, 0), Orientation.HORIZONTAL),
            ShipPlacement(4, Coord(2, 0), Orientation.HORIZONTAL),
            ShipPlacement(3, Coord(4, 0), Orientation.HORIZONTAL),
            ShipPlacement(3, Coord(6, 0), Orientation.HORIZONTAL),
            ShipPlacement(2, Coord(8, 0), Orientation.HORIZONTAL),
        ]
    )


class ScriptedEngine:
    """Engine double with a fixed set of ship cells and a caller-controlled sunk count."""

    def __init__(self, ship_cells: set[Coord], sizes: tuple[int, ...] = (5, 4, 3, 3, 2)) -> None:
        self.ship_cells = set(ship_cells)
        self.sizes = sizes
        self.sunk = 0
        self.shots: list[Coord] = []

    def shoot(self, coord: Coord) -> bool:
        self.shots.append(coord)
        return coord in self.ship_cells

    def ships_sunk(self) -> int:
        return self.sunk

    def ship_sizes(self) -> tuple[int, ...]:
        return self.sizes
