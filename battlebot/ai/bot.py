"""Battleship bot combining hunt-mode chasing with density search."""

from __future__ import annotations

import random

from battlebot.ai.probability import ProbabilityTargeter
from battlebot.ai.session import GameSession, create_session
from battlebot.api.engine_port import ShotEnginePort
from battlebot.core.models import BOARD_SIZE, Coord, HuntMode
from battlebot.infra.logging import get_logger

logger = get_logger(__name__)

BOT_AUTHORS = "battlebot density hunter"


class BattleBot:
    """Chases known hits first and falls back to probability-density search."""

    def __init__(self, rng: random.Random | None = None, size: int = BOARD_SIZE) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._size = size
        self._targeter = ProbabilityTargeter(self._rng)
        self._engine: ShotEnginePort | None = None
        self._session: GameSession | None = None

    @property
    def session(self) -> GameSession:
        if self._session is None:
            raise RuntimeError("reset_for_new_game must be called before the first shot")
        return self._session

    @property
    def mode(self) -> HuntMode:
        return self.session.hunt.mode

    def authors(self) -> str:
        return BOT_AUTHORS

    def reset_for_new_game(self, engine: ShotEnginePort) -> None:
        """Bind the engine for this game and clear every per-game structure."""
        self._engine = engine
        ship_lengths = list(engine.ship_sizes())
        if self._session is None or self._session.grid.size != self._size:
            self._session = create_session(ship_lengths, size=self._size)
        else:
            self._session.reset(ship_lengths)
        logger.debug("game_reset size=%d fleet=%s", self._size, ship_lengths)

    def fire_shot(self) -> Coord:
        """Pick a target, fire it and record the outcome."""
        if self._engine is None:
            raise RuntimeError("reset_for_new_game must be called before the first shot")
        shot = self.choose_shot()
        hit = self._engine.shoot(shot)
        self.notify_result(shot, hit, self._engine.ships_sunk())
        return shot

    def choose_shot(self) -> Coord:
        """Return the next target without firing it."""
        session = self.session
        pending = session.hunt.next_target(session.grid)
        if pending is not None:
            return pending
        return self._targeter.choose(session.grid, session.hunt.remaining_ships)

    def notify_result(self, coord: Coord, hit: bool, sunk_count: int) -> None:
        """Absorb the engine's answer for a shot fired at ``coord``."""
        session = self.session
        session.shots.append(coord)
        session.grid.record_outcome(coord, hit)
        if hit:
            session.hunt.record_hit(session.grid, coord, sunk_count)
