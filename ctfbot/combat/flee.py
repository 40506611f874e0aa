"""Threat evaluation and the flee maneuver.

Purpose: Shared helpers for roles that disengage from nearby enemies
Key Decisions: The engine only picks what to flee from; the provider's path search picks the step
Limitations: One step per tick, no memory of previous flee directions
"""

import logging
from typing import Callable, Iterable, Optional

from sc2.position import Point2

from ctfbot.combat.maneuver import Move
from ctfbot.world import ArenaInterface, Threat, Unit, get_direction

logger = logging.getLogger(__name__)

DistanceFn = Callable[[Point2, Point2], int]


def enemies_within(
    position: Point2,
    enemies: Iterable[Unit],
    radius: Optional[int],
    distance: DistanceFn,
) -> list[Unit]:
    """
    Enemies strictly inside a radius around a position.

    Args:
        position: Center of the check
        enemies: Candidate units, order is preserved
        radius: Exclusive radius, None means unbounded
        distance: Grid distance metric

    Returns:
        Matching enemies in snapshot order
    """
    if radius is None:
        return list(enemies)
    return [e for e in enemies if distance(e.position, position) < radius]


def closest_to(position: Point2, units: Iterable[Unit], distance: DistanceFn) -> Optional[Unit]:
    """
    Nearest unit to a position.

    Ties resolve to the unit listed first (snapshot order), since the sort is stable.
    """
    ranked = sorted(units, key=lambda u: distance(u.position, position))
    return ranked[0] if ranked else None


def flee(unit: Unit, threats: Iterable[Unit], radius: int, arena: ArenaInterface) -> Optional[Move]:
    """
    Build a single step away from a set of threats.

    Args:
        unit: The unit fleeing
        threats: Enemy units to get away from
        radius: Distance from each threat that counts as danger
        arena: Provider doing the flee path search

    Returns:
        Move in the direction of the first path step, or None when boxed in
    """
    goals = [Threat(t.position, radius) for t in threats]
    if not goals:
        return None

    step = arena.plan_flee_step(unit, goals)
    if step is None:
        logger.debug("Unit %s has nowhere to flee from %d threats", unit.id, len(goals))
        return None

    direction = get_direction(step[0] - unit.x, step[1] - unit.y)
    if direction is None:
        return None
    return Move(unit.id, direction)
