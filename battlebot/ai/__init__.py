"""Targeting AI: hunt controller, density targeter and the bot that combines them."""

from battlebot.ai.bot import BattleBot
from battlebot.ai.hunt import HuntController
from battlebot.ai.probability import ProbabilityTargeter
from battlebot.ai.session import GameSession, create_session

__all__ = [
    "BattleBot",
    "GameSession",
    "HuntController",
    "ProbabilityTargeter",
    "create_session",
]
