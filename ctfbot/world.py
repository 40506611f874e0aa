"""World model and the arena provider contract.

Purpose: Types the engine reads each tick and the interface it issues actions through
Key Decisions: Snapshot objects are immutable and rebuilt every tick, so no unit reference outlives a tick
Limitations: Positions are integer grid tiles with y growing downwards
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import NamedTuple, Optional, Protocol, Union

from sc2.position import Point2

from ctfbot.errors import MissingFlagReference


class Capability(Enum):
    """Body parts a unit can carry. Only the first three decide a role."""

    MELEE = "attack"
    RANGED = "ranged_attack"
    SUPPORT = "heal"
    MOVE = "move"
    TOUGH = "tough"
    CARRY = "carry"
    WORK = "work"

    @classmethod
    def parse(cls, name: Union[str, "Capability"]) -> "Capability":
        if isinstance(name, Capability):
            return name
        return cls(name.lower())


class Direction(IntEnum):
    """Arena movement directions, clockwise from TOP."""

    TOP = 1
    TOP_RIGHT = 2
    RIGHT = 3
    BOTTOM_RIGHT = 4
    BOTTOM = 5
    BOTTOM_LEFT = 6
    LEFT = 7
    TOP_LEFT = 8

    @property
    def offset(self) -> Point2:
        return DIRECTION_OFFSETS[self]


DIRECTION_OFFSETS: dict[Direction, Point2] = {
    Direction.TOP: Point2((0, -1)),
    Direction.TOP_RIGHT: Point2((1, -1)),
    Direction.RIGHT: Point2((1, 0)),
    Direction.BOTTOM_RIGHT: Point2((1, 1)),
    Direction.BOTTOM: Point2((0, 1)),
    Direction.BOTTOM_LEFT: Point2((-1, 1)),
    Direction.LEFT: Point2((-1, 0)),
    Direction.TOP_LEFT: Point2((-1, -1)),
}


def get_direction(dx: float, dy: float) -> Optional[Direction]:
    """
    Map a tile offset to the direction pointing the same way.

    Only the sign of each component matters, so a path step one tile away and a
    far waypoint in the same octant produce the same direction.

    Returns:
        Direction, or None for a zero offset
    """
    sx = (dx > 0) - (dx < 0)
    sy = (dy > 0) - (dy < 0)
    if sx == 0 and sy == 0:
        return None
    for direction, offset in DIRECTION_OFFSETS.items():
        if offset.x == sx and offset.y == sy:
            return direction
    return None


@dataclass(frozen=True)
class Unit:
    """One controllable combat unit as seen at the start of a tick."""

    id: str
    position: Point2
    my: bool
    hits: int
    hits_max: int
    capabilities: frozenset = field(default_factory=frozenset)

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    @property
    def is_damaged(self) -> bool:
        return self.hits < self.hits_max

    def has(self, capability: Capability) -> bool:
        return capability in self.capabilities


@dataclass(frozen=True)
class Flag:
    id: str
    position: Point2
    my: bool


@dataclass(frozen=True)
class Snapshot:
    """Everything the engine knows about the world for one tick."""

    tick: int
    my_units: tuple = ()
    enemy_units: tuple = ()
    my_flag: Optional[Flag] = None
    enemy_flag: Optional[Flag] = None

    def require_flag(self, mine: bool) -> Flag:
        """
        Get one side's flag.

        Raises:
            MissingFlagReference: If that flag is not in the snapshot
        """
        flag = self.my_flag if mine else self.enemy_flag
        if flag is None:
            raise MissingFlagReference(mine)
        return flag

    def find_unit(self, unit_id: str) -> Optional[Unit]:
        for unit in self.my_units:
            if unit.id == unit_id:
                return unit
        for unit in self.enemy_units:
            if unit.id == unit_id:
                return unit
        return None


class Threat(NamedTuple):
    """A position to keep away from and the radius that counts as danger."""

    position: Point2
    radius: int


class ArenaInterface(Protocol):
    """
    Game-world query/action provider.

    Actions are fire-and-forget: outcomes (hit, miss, out of range) are never
    reported back. When several movement directives are issued for one unit in a
    tick, the most recent one is the one carried out.
    """

    def query_snapshot(self) -> Snapshot: ...

    def distance(self, a: Point2, b: Point2) -> int: ...

    def move_to(self, unit: Unit, target: Point2) -> None: ...

    def move(self, unit: Unit, direction: Direction) -> None: ...

    def melee_attack(self, unit: Unit, target: Unit) -> None: ...

    def ranged_attack(self, unit: Unit, target: Unit) -> None: ...

    def heal(self, unit: Unit, target: Unit) -> None: ...

    def ranged_heal(self, unit: Unit, target: Unit) -> None: ...

    def plan_flee_step(self, unit: Unit, threats: list[Threat]) -> Optional[Point2]:
        """First tile of a path leading away from the threats, or None if boxed in."""
        ...

    def annotate(self, position: Point2, text: str, style: dict) -> None: ...
