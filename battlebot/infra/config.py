"""Environment-driven configuration and env-file loading."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from battlebot.core.models import BOARD_SIZE, DEFAULT_FLEET_LENGTHS
from battlebot.infra.logging import LoggingConfig, get_logger

logger = get_logger(__name__)

MIN_BOARD_SIZE = 4
DEFAULT_GAMES = 1000


@dataclass(frozen=True, slots=True)
class BotConfig:
    """Immutable run configuration."""

    board_size: int = BOARD_SIZE
    fleet_lengths: tuple[int, ...] = DEFAULT_FLEET_LENGTHS
    games: int = DEFAULT_GAMES
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "text"
    log_file: str | None = None

    def logging_config(self) -> LoggingConfig:
        return LoggingConfig(
            level_name=self.log_level,
            console_format=self.log_format,
            file_path=self.log_file,
            file_format="json",
        )


def load_config(env: Mapping[str, str] | None = None) -> BotConfig:
    """Load configuration from env vars; malformed values fall back to defaults."""
    board_size = _int("BATTLEBOT_BOARD_SIZE", BOARD_SIZE, minimum=MIN_BOARD_SIZE, env=env)
    return BotConfig(
        board_size=board_size,
        fleet_lengths=fit_fleet(
            parse_fleet(_text("BATTLEBOT_FLEET", "", env=env), board_size=board_size), board_size
        ),
        games=_int("BATTLEBOT_GAMES", DEFAULT_GAMES, minimum=1, env=env),
        seed=_optional_int("BATTLEBOT_SEED", env=env),
        log_level=resolve_log_level_name(env=env),
        log_format=_text("LOG_FORMAT", "text", env=env).lower(),
        log_file=_text("BATTLEBOT_LOG_FILE", "", env=env) or None,
    )


def parse_fleet(raw: str, *, board_size: int = BOARD_SIZE) -> tuple[int, ...]:
    """Parse a comma-separated fleet; fall back to the default on any bad entry."""
    parts = [part.strip() for part in raw.split(",") if part.strip()]
    if not parts:
        return DEFAULT_FLEET_LENGTHS
    lengths: list[int] = []
    for part in parts:
        try:
            value = int(part)
        except ValueError:
            return DEFAULT_FLEET_LENGTHS
        if not 1 <= value <= board_size:
            return DEFAULT_FLEET_LENGTHS
        lengths.append(value)
    return tuple(lengths)


def fit_fleet(lengths: Sequence[int], board_size: int) -> tuple[int, ...]:
    """Trim a fleet until every ship fits and the ships cover at most half the board.

    Ships longer than the board edge are dropped first, then the longest remaining
    ships until the covered cells fit. Random layouts on denser boards can fail.
    """
    fitted = sorted((length for length in lengths if length <= board_size), reverse=True)
    capacity = board_size * board_size // 2
    while fitted and sum(fitted) > capacity:
        fitted.pop(0)
    if len(fitted) == len(lengths):
        return tuple(lengths)
    if not fitted:
        fitted = [min(2, board_size)]
    logger.warning(
        "fleet_adjusted board_size=%d requested=%s fleet=%s",
        board_size,
        ",".join(str(length) for length in lengths),
        ",".join(str(length) for length in fitted),
    )
    return tuple(fitted)


def resolve_log_level_name(default: str = "INFO", *, env: Mapping[str, str] | None = None) -> str:
    """Resolve log level with app-prefixed override."""
    value = _raw("BATTLEBOT_LOG_LEVEL", env=env)
    if value is None:
        value = _raw("LOG_LEVEL", env=env)
    if value is None or not value.strip():
        value = default
    return value.strip().upper()


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into process environment.

    By default, values from the env file overwrite existing environment variables.
    """
    env_path = Path(path)
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files left to right; later files win."""
    to_load = tuple(paths) if paths is not None else (".env.battlebot", ".env.battlebot.local")
    for path in to_load:
        load_env_file(path, override_existing=override_existing)


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _int(
    name: str,
    default: int,
    *,
    minimum: int | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    raw = _raw(name, env=env)
    if raw is None:
        value = int(default)
    else:
        try:
            value = int(raw.strip())
        except ValueError:
            value = int(default)
    if minimum is None:
        return value
    return max(int(minimum), value)


def _optional_int(name: str, *, env: Mapping[str, str] | None = None) -> int | None:
    raw = _raw(name, env=env)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)
