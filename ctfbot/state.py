"""Match-lifetime engine state and the per-tick context handed to roles."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from sc2.position import Point2

from ctfbot.config import EngineConfig
from ctfbot.world import ArenaInterface, Snapshot, Unit


class Posture(Enum):
    AGGRESSIVE = "aggressive"
    DEFENSIVE = "defensive"


@dataclass
class EngineState:
    """
    Cross-tick state for one match.

    enemy_max_count and each home position are written once and only read
    afterwards. posture is recomputed every tick before any role runs.
    """

    posture: Optional[Posture] = Posture.DEFENSIVE
    enemy_max_count: int = 0
    home_positions: dict[str, Point2] = field(default_factory=dict)
    tick_count: int = 0

    def reset(self) -> None:
        """Discard everything at match end."""
        self.posture = Posture.DEFENSIVE
        self.enemy_max_count = 0
        self.home_positions.clear()
        self.tick_count = 0


@dataclass(frozen=True)
class TickContext:
    """Frozen view of one tick. Every role of the tick reads the same posture."""

    snapshot: Snapshot
    posture: Optional[Posture]
    config: EngineConfig
    arena: ArenaInterface
    state: EngineState

    def distance(self, a: Point2, b: Point2) -> int:
        return self.arena.distance(a, b)

    def home_of(self, unit: Unit) -> Point2:
        """Home position of a unit, recorded on first call and never changed afterwards."""
        return self.state.home_positions.setdefault(unit.id, unit.position)

    @property
    def enemy_flag_position(self) -> Optional[Point2]:
        flag = self.snapshot.enemy_flag
        return flag.position if flag is not None else None
