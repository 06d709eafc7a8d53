"""Command-line entry point: run the bot over many simulated games."""

from __future__ import annotations

import argparse
import os
import random
from collections.abc import Iterable, Mapping

from battlebot.ai.bot import BattleBot
from battlebot.infra.config import BotConfig, load_config, load_default_env_files
from battlebot.infra.logging import get_logger, setup_logging, shutdown_logging
from battlebot.sim.runner import format_report, run_games

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the Battleship bot over simulated games.")
    parser.add_argument("--games", type=int, default=None, help="Number of games to play")
    parser.add_argument("--seed", type=int, default=None, help="Seed for fleets and bot")
    parser.add_argument("--size", type=int, default=None, help="Board edge length")
    parser.add_argument("--fleet", default=None, help="Comma-separated ship lengths, e.g. 5,4,3,3,2")
    parser.add_argument("--log-level", default=None, help="DEBUG|INFO|WARNING|ERROR")
    parser.add_argument("--log-format", default=None, choices=("text", "json"))
    return parser


def resolve_config(args: argparse.Namespace, env: Mapping[str, str] | None = None) -> BotConfig:
    """Overlay CLI flags on the environment and validate everything in one pass.

    Fleet lengths are checked against the final board size, so `--size` also
    trims an env-provided or default fleet.
    """
    merged = dict(os.environ if env is None else env)
    overrides = {
        "BATTLEBOT_BOARD_SIZE": args.size,
        "BATTLEBOT_FLEET": args.fleet,
        "BATTLEBOT_GAMES": args.games,
        "BATTLEBOT_SEED": args.seed,
        "BATTLEBOT_LOG_LEVEL": args.log_level,
        "LOG_FORMAT": args.log_format,
    }
    for name, value in overrides.items():
        if value is not None:
            merged[name] = str(value)
    return load_config(env=merged)


def main(argv: Iterable[str] | None = None) -> int:
    """Run the configured number of games and print the shot report."""
    load_default_env_files()
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    config = resolve_config(args)
    setup_logging(config.logging_config())
    logger.info(
        "run_config games=%d size=%d fleet=%s seed=%s",
        config.games,
        config.board_size,
        ",".join(str(length) for length in config.fleet_lengths),
        config.seed,
    )

    bot = BattleBot(random.Random(config.seed), size=config.board_size)
    try:
        summary = run_games(
            bot,
            config.games,
            seed=config.seed,
            size=config.board_size,
            lengths=config.fleet_lengths,
        )
    finally:
        shutdown_logging()
    print(format_report(summary, bot.authors()))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
