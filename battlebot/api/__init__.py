"""Public collaborator contracts."""

from battlebot.api.bot_port import BotPort
from battlebot.api.engine_port import ShotEnginePort

__all__ = ["BotPort", "ShotEnginePort"]
