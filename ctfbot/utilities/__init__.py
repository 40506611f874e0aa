"""Debug, reporting and local arena helpers."""

from ctfbot.utilities.local_arena import LocalArena

__all__ = [
    "LocalArena",
]
