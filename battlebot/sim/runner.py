"""Multi-game driver and shot statistics."""

from __future__ import annotations

import hashlib
import random
import statistics
from collections.abc import Sequence
from dataclasses import dataclass
from time import perf_counter

from battlebot.api.bot_port import BotPort
from battlebot.core.models import BOARD_SIZE, DEFAULT_FLEET_LENGTHS
from battlebot.infra.logging import get_logger
from battlebot.sim.engine import SimulatedEngine

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class GameResult:
    """Outcome of one simulated game."""

    shots: int
    ships_sunk: int


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Aggregated shot statistics over many games."""

    games: int
    mean: float
    median: float
    p90: float
    minimum: int
    maximum: int
    elapsed_seconds: float
    shots: tuple[int, ...] = ()


def play_game(bot: BotPort, engine: SimulatedEngine) -> GameResult:
    """Drive one game to completion; the bot never learns when it ends."""
    bot.reset_for_new_game(engine)
    max_shots = engine.size * engine.size
    while not engine.game_over:
        if engine.shots_fired >= max_shots:
            raise RuntimeError(f"game did not finish within {max_shots} shots")
        bot.fire_shot()
    return GameResult(shots=engine.shots_fired, ships_sunk=engine.ships_sunk())


def run_games(
    bot: BotPort,
    games: int,
    *,
    seed: int | None = None,
    size: int = BOARD_SIZE,
    lengths: Sequence[int] = DEFAULT_FLEET_LENGTHS,
) -> RunSummary:
    """Play ``games`` games on fresh random fleets and summarize shot counts."""
    shots: list[int] = []
    start = perf_counter()
    for game_index in range(games):
        if seed is None:
            rng = random.Random()
        else:
            rng = random.Random(_stable_seed(seed, game_index))
        engine = SimulatedEngine.random(rng, lengths, size)
        result = play_game(bot, engine)
        shots.append(result.shots)
        logger.debug("game_finished index=%d shots=%d", game_index, result.shots)
    elapsed = perf_counter() - start
    summary = summarize(shots, elapsed)
    logger.info(
        "run_finished games=%d mean=%.2f elapsed=%.3fs", summary.games, summary.mean, elapsed
    )
    return summary


def summarize(shots: Sequence[int], elapsed_seconds: float = 0.0) -> RunSummary:
    ordered = sorted(shots)
    return RunSummary(
        games=len(ordered),
        mean=statistics.mean(ordered) if ordered else 0.0,
        median=float(statistics.median(ordered)) if ordered else 0.0,
        p90=_percentile(ordered, 90.0),
        minimum=ordered[0] if ordered else 0,
        maximum=ordered[-1] if ordered else 0,
        elapsed_seconds=elapsed_seconds,
        shots=tuple(shots),
    )


def format_report(summary: RunSummary, label: str) -> str:
    """Render a plain-text report for the console."""
    lines = [
        f"Bot: {label}",
        f"Games played: {summary.games}",
        f"Average shots: {summary.mean:.2f}",
        f"Median / P90: {summary.median:.0f} / {summary.p90:.0f}",
        f"Best / worst: {summary.minimum} / {summary.maximum}",
        f"Elapsed: {summary.elapsed_seconds * 1000:.0f} ms",
    ]
    return "\n".join(lines)


def _stable_seed(global_seed: int, game_index: int) -> int:
    payload = f"{int(global_seed)}|{int(game_index)}".encode("utf-8")
    digest = hashlib.blake2b(payload, digest_size=8).digest()
    return int.from_bytes(digest, "little") & 0x7FFFFFFF


def _percentile(values: list[int], pct: float) -> float:
    if not values:
        return 0.0
    if pct <= 0:
        return float(values[0])
    if pct >= 100:
        return float(values[-1])
    k = (len(values) - 1) * (pct / 100.0)
    f = int(k)
    c = min(f + 1, len(values) - 1)
    if f == c:
        return float(values[f])
    return float(values[f] * (c - k) + values[c] * (k - f))
