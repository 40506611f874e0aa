"""Capture-the-flag squad decision engine."""

from ctfbot.bot import SquadBot
from ctfbot.config import EngineConfig, load_config
from ctfbot.state import EngineState, Posture

__all__ = ["SquadBot", "EngineConfig", "load_config", "EngineState", "Posture"]
