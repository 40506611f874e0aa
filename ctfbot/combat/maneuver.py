"""Per-unit command batches.

Purpose: Roles describe what a unit does this tick as an ordered list of commands
Key Decisions: Commands reference units by id; the tick driver resolves them against the tick's snapshot
Limitations: Movement conflicts are not resolved here - the provider keeps the most recent movement
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Union

from sc2.position import Point2

from ctfbot.world import Direction


@dataclass(frozen=True)
class MoveTo:
    unit_id: str
    target: Point2


@dataclass(frozen=True)
class Move:
    """Single step in a fixed direction (used by flee)."""

    unit_id: str
    direction: Direction


@dataclass(frozen=True)
class MeleeAttack:
    unit_id: str
    target_id: str


@dataclass(frozen=True)
class RangedAttack:
    unit_id: str
    target_id: str


@dataclass(frozen=True)
class Heal:
    unit_id: str
    target_id: str


@dataclass(frozen=True)
class RangedHeal:
    unit_id: str
    target_id: str


@dataclass(frozen=True)
class Annotate:
    position: Point2
    text: str
    style: dict


Command = Union[MoveTo, Move, MeleeAttack, RangedAttack, Heal, RangedHeal, Annotate]

MOVEMENT_COMMANDS = (MoveTo, Move)
ATTACK_COMMANDS = (MeleeAttack, RangedAttack)
HEAL_COMMANDS = (Heal, RangedHeal)


class Maneuver:
    """Ordered commands for one unit for one tick."""

    def __init__(self, unit_id: str):
        self.unit_id = unit_id
        self.commands: list[Command] = []

    def add(self, command: Optional[Command]) -> None:
        """Append a command, ignoring None so optional steps can be added directly."""
        if command is not None:
            self.commands.append(command)

    def __iter__(self) -> Iterator[Command]:
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)

    def __repr__(self) -> str:
        return f"Maneuver({self.unit_id}, {self.commands})"

    @property
    def movements(self) -> list[Command]:
        return [c for c in self.commands if isinstance(c, MOVEMENT_COMMANDS)]

    @property
    def last_movement(self) -> Optional[Command]:
        """The movement the provider will carry out, if any."""
        movements = self.movements
        return movements[-1] if movements else None

    @property
    def attacks(self) -> list[Command]:
        return [c for c in self.commands if isinstance(c, ATTACK_COMMANDS)]

    @property
    def heals(self) -> list[Command]:
        return [c for c in self.commands if isinstance(c, HEAL_COMMANDS)]
