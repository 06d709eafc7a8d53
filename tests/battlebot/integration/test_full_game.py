from __future__ import annotations

import random

import numpy as np
import pytest

from battlebot.ai.bot import BattleBot
from battlebot.core.models import CellState
from battlebot.main import build_parser, main, resolve_config
from battlebot.sim.engine import SimulatedEngine


@pytest.mark.parametrize(
    ("size", "lengths"),
    [
        (12, (5, 4, 3, 3, 2)),
        (10, (5, 4, 3, 3, 2)),
        (8, (4, 3, 2)),
        (6, (3, 2, 2)),
    ],
)
def test_full_games_keep_invariants_and_terminate(size: int, lengths: tuple[int, ...]) -> None:
    for seed in range(8):
        engine = SimulatedEngine.random(random.Random(seed), lengths, size=size)
        bot = BattleBot(random.Random(seed + 100), size=size)
        bot.reset_for_new_game(engine)
        fired: set = set()

        while not engine.game_over:
            before = bot.session.grid.states.copy()
            shot = bot.fire_shot()
            after = bot.session.grid.states

            assert shot not in fired
            fired.add(shot)
            assert before[shot.row, shot.col] == CellState.EMPTY
            changed = np.argwhere(before != after).tolist()
            assert changed == [[shot.row, shot.col]]
            assert bot.session.hunt.afloat_count() == len(lengths) - engine.ships_sunk()
            assert engine.shots_fired <= size * size

        assert engine.ships_sunk() == len(lengths)
        assert all(length == 0 for length in bot.session.hunt.remaining_ships)


def test_one_bot_plays_consecutive_games_independently() -> None:
    bot = BattleBot(random.Random(8))
    totals = []
    for seed in range(3):
        engine = SimulatedEngine.random(random.Random(seed))
        bot.reset_for_new_game(engine)
        while not engine.game_over:
            bot.fire_shot()
        totals.append(engine.shots_fired)
        assert bot.session.shots_fired == engine.shots_fired
    assert all(17 <= total <= 144 for total in totals)


def test_cli_runs_games_and_prints_report(capsys, monkeypatch, tmp_path, restore_root_logging) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BATTLEBOT_LOG_FILE", "")
    exit_code = main(["--games", "3", "--seed", "5", "--size", "10", "--log-level", "warning"])
    out = capsys.readouterr().out

    assert exit_code == 0
    assert "Games played: 3" in out
    assert "Average shots:" in out


def test_cli_size_override_refits_the_env_fleet() -> None:
    args = build_parser().parse_args(["--size", "4"])
    config = resolve_config(args, env={"BATTLEBOT_FLEET": "5,4,2"})
    assert config.board_size == 4
    assert config.fleet_lengths == (4, 2)


def test_cli_runs_on_the_minimum_board_with_the_default_fleet(
    capsys, monkeypatch, tmp_path, restore_root_logging
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BATTLEBOT_FLEET", "")
    monkeypatch.setenv("BATTLEBOT_LOG_FILE", "")
    exit_code = main(["--games", "2", "--seed", "1", "--size", "4", "--log-level", "error"])
    out = capsys.readouterr().out

    assert exit_code == 0
    assert "Games played: 2" in out
