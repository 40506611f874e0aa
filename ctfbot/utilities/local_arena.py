"""
In-memory grid arena.

Purpose: Reference implementation of ArenaInterface for tests and offline runs
Key Decisions: Chebyshev range like the real arena; the most recent movement per unit is applied in advance()
Limitations: No combat resolution - attacks and heals are only recorded, hits change through set_hits()
"""

import dataclasses
from typing import Iterable, Optional

import numpy as np
from sc2.position import Point2

from ctfbot.world import Capability, Direction, Flag, Snapshot, Threat, Unit, get_direction


class LocalArena:
    """
    Grid world holding units and flags.

    Commands issued during a tick are kept in ``commands`` until advance() ends
    the tick; only the last movement of each unit is carried out.
    """

    def __init__(self, width: int = 100, height: int = 100, blocked: Iterable[tuple] = ()):
        self.width = width
        self.height = height
        self.blocked: set[tuple[int, int]] = {(int(x), int(y)) for x, y in blocked}
        self.tick = 0
        self.commands: list[tuple] = []
        self.annotations: list[tuple] = []
        self._units: dict[str, Unit] = {}
        self._flags: dict[bool, Flag] = {}
        self._movements: dict[str, tuple] = {}

    # ----- world setup -----

    def add_unit(
        self,
        unit_id: str,
        position: tuple,
        my: bool = True,
        capabilities: Iterable = (Capability.MOVE,),
        hits: int = 100,
        hits_max: Optional[int] = None,
    ) -> Unit:
        unit = Unit(
            id=unit_id,
            position=Point2(position),
            my=my,
            hits=hits,
            hits_max=hits if hits_max is None else hits_max,
            capabilities=frozenset(Capability.parse(c) for c in capabilities),
        )
        self._units[unit_id] = unit
        return unit

    def add_flag(self, position: tuple, my: bool) -> Flag:
        flag = Flag(id="my_flag" if my else "enemy_flag", position=Point2(position), my=my)
        self._flags[my] = flag
        return flag

    def remove_flag(self, my: bool) -> None:
        self._flags.pop(my, None)

    def remove_unit(self, unit_id: str) -> None:
        self._units.pop(unit_id, None)
        self._movements.pop(unit_id, None)

    def set_hits(self, unit_id: str, hits: int) -> None:
        self._units[unit_id] = dataclasses.replace(self._units[unit_id], hits=hits)

    def place(self, unit_id: str, position: tuple) -> None:
        self._units[unit_id] = dataclasses.replace(self._units[unit_id], position=Point2(position))

    def unit(self, unit_id: str) -> Unit:
        return self._units[unit_id]

    # ----- queries -----

    def query_snapshot(self) -> Snapshot:
        units = list(self._units.values())
        return Snapshot(
            tick=self.tick,
            my_units=tuple(u for u in units if u.my),
            enemy_units=tuple(u for u in units if not u.my),
            my_flag=self._flags.get(True),
            enemy_flag=self._flags.get(False),
        )

    def distance(self, a, b) -> int:
        return int(max(abs(a[0] - b[0]), abs(a[1] - b[1])))

    def is_walkable(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height and (x, y) not in self.blocked

    def plan_flee_step(self, unit: Unit, threats: list[Threat]) -> Optional[Point2]:
        """
        Pick the neighbouring tile that best escapes the threats.

        Tiles are ranked by total intrusion into the threat radii, then by the
        distance to the closest threat. Returns None when no walkable neighbour
        is better than standing still.
        """
        if not threats:
            return None

        x, y = int(unit.x), int(unit.y)
        candidates = [
            (x + d.offset.x, y + d.offset.y)
            for d in Direction
            if self.is_walkable(x + d.offset.x, y + d.offset.y)
        ]
        if not candidates:
            return None

        tiles = np.array([(x, y)] + candidates, dtype=float)
        threat_pos = np.array([t.position for t in threats], dtype=float)
        radii = np.array([t.radius for t in threats], dtype=float)

        # Chebyshev distance from every tile to every threat
        dist = np.abs(tiles[:, None, :] - threat_pos[None, :, :]).max(axis=2)
        intrusion = np.clip(radii[None, :] - dist, 0, None).sum(axis=1)
        closest = dist.min(axis=1)

        # lexsort: last key is primary
        best = int(np.lexsort((-closest[1:], intrusion[1:]))[0]) + 1
        if intrusion[best] > intrusion[0] or (
            intrusion[best] == intrusion[0] and closest[best] <= closest[0]
        ):
            return None
        return Point2(candidates[best - 1])

    # ----- actions -----

    def move_to(self, unit: Unit, target) -> None:
        target = Point2(target)
        self.commands.append(("move_to", unit.id, target))
        self._movements[unit.id] = ("move_to", target)

    def move(self, unit: Unit, direction: Direction) -> None:
        self.commands.append(("move", unit.id, direction))
        self._movements[unit.id] = ("move", direction)

    def melee_attack(self, unit: Unit, target: Unit) -> None:
        self.commands.append(("melee_attack", unit.id, target.id))

    def ranged_attack(self, unit: Unit, target: Unit) -> None:
        self.commands.append(("ranged_attack", unit.id, target.id))

    def heal(self, unit: Unit, target: Unit) -> None:
        self.commands.append(("heal", unit.id, target.id))

    def ranged_heal(self, unit: Unit, target: Unit) -> None:
        self.commands.append(("ranged_heal", unit.id, target.id))

    def annotate(self, position, text: str, style: dict) -> None:
        self.annotations.append((Point2(position), text, style))

    # ----- tick handling -----

    def commands_for(self, unit_id: str, kind: Optional[str] = None) -> list[tuple]:
        return [c for c in self.commands if c[1] == unit_id and (kind is None or c[0] == kind)]

    def last_movement(self, unit_id: str) -> Optional[tuple]:
        return self._movements.get(unit_id)

    def advance(self) -> None:
        """End the tick: apply each unit's last movement, one tile at most."""
        for unit_id, (kind, arg) in self._movements.items():
            unit = self._units.get(unit_id)
            if unit is None:
                continue
            if kind == "move":
                direction = arg
            else:
                direction = get_direction(arg.x - unit.x, arg.y - unit.y)
            if direction is None:
                continue
            nx, ny = int(unit.x + direction.offset.x), int(unit.y + direction.offset.y)
            if self.is_walkable(nx, ny):
                self._units[unit_id] = dataclasses.replace(unit, position=Point2((nx, ny)))

        self._movements.clear()
        self.commands = []
        self.annotations = []
        self.tick += 1
