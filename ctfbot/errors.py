"""Exceptions raised by the decision engine."""

from typing import Iterable


class CtfBotError(Exception):
    """Base class for engine errors."""


class UnrecognizedUnitConfiguration(CtfBotError):
    """A unit's capability set matches no known role."""

    def __init__(self, unit_id: str, capabilities: Iterable):
        self.unit_id = unit_id
        self.capabilities = frozenset(capabilities)
        names = sorted(getattr(c, "value", str(c)) for c in self.capabilities)
        super().__init__(
            f"Unit {unit_id} has no recognized role (capabilities: {names or 'none'})"
        )


class MissingFlagReference(CtfBotError):
    """The requested flag is absent from the snapshot."""

    def __init__(self, mine: bool):
        self.mine = mine
        side = "own" if mine else "enemy"
        super().__init__(f"No {side} flag in snapshot")


class ConfigError(CtfBotError):
    """Invalid engine configuration."""
