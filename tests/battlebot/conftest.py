from __future__ import annotations

import logging
import random

import pytest

from battlebot.core.grid import BoardGrid
from battlebot.sim.fleet import FleetPlacement
from tests.battlebot.helpers import make_line_fleet


@pytest.fixture
def line_fleet() -> FleetPlacement:
    return make_line_fleet()


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def grid() -> BoardGrid:
    return BoardGrid()


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    yield root
    root.handlers.clear()
    root.handlers.extend(original_handlers)
    root.setLevel(original_level)
