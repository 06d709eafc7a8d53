"""Reference engine and multi-game driver for simulated games."""

from battlebot.sim.engine import ShotRejectedError, SimulatedEngine
from battlebot.sim.fleet import FleetPlacement, ShipPlacement, random_fleet, validate_fleet
from battlebot.sim.runner import GameResult, RunSummary, format_report, play_game, run_games

__all__ = [
    "FleetPlacement",
    "GameResult",
    "RunSummary",
    "ShipPlacement",
    "ShotRejectedError",
    "SimulatedEngine",
    "format_report",
    "play_game",
    "random_fleet",
    "run_games",
    "validate_fleet",
]
