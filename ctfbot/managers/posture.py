"""Team-wide posture decision.

Purpose: Decide once per tick whether the squad pushes or holds
Key Decisions: Threat density against the initial enemy count first, then enemies near our flag
Limitations: No hysteresis - the posture can flip every tick
"""

import logging
from typing import Callable, Iterable, Optional

from sc2.position import Point2

from ctfbot.config import EngineConfig
from ctfbot.errors import MissingFlagReference
from ctfbot.state import EngineState, Posture
from ctfbot.world import ArenaInterface, Snapshot, Unit

logger = logging.getLogger(__name__)


def decide_posture(
    enemies: Iterable[Unit],
    enemy_max_count: int,
    my_flag_position: Optional[Point2],
    distance: Callable[[Point2, Point2], int],
    threat_ratio: float,
    flag_threat_radius: int,
) -> Posture:
    """
    Pick the squad posture for this tick.

    1. Too many enemies still alive (more than threat_ratio of the initial count): defend
    2. Any enemy strictly inside flag_threat_radius of our flag: defend
    3. Otherwise: attack

    Args:
        enemies: Live enemy units
        enemy_max_count: Enemy count captured at match start
        my_flag_position: Our flag, None skips the proximity check
        distance: Grid distance metric
        threat_ratio: Share of the initial enemy force that keeps us defensive
        flag_threat_radius: Exclusive radius around our flag

    Returns:
        Posture for every unit this tick
    """
    enemies = list(enemies)
    if len(enemies) > enemy_max_count * threat_ratio:
        logger.debug("Enemy max count=%d, current count=%d", enemy_max_count, len(enemies))
        return Posture.DEFENSIVE

    if my_flag_position is None:
        return Posture.AGGRESSIVE

    near_flag = [e for e in enemies if distance(my_flag_position, e.position) < flag_threat_radius]
    logger.debug("Enemies near our flag=%d", len(near_flag))
    if near_flag:
        return Posture.DEFENSIVE
    return Posture.AGGRESSIVE


class PostureController:
    """Keeps the initial enemy count and refreshes the posture each tick."""

    def __init__(self, config: EngineConfig):
        self.config = config

    def update(self, snapshot: Snapshot, state: EngineState, arena: ArenaInterface) -> Optional[Posture]:
        """
        Recompute and store the posture. Must run before any role of the tick.

        Returns:
            New posture, or None when posture control is disabled
        """
        # Captured while still zero so an empty first tick does not pin the denominator
        if not state.enemy_max_count:
            state.enemy_max_count = len(snapshot.enemy_units)

        if not self.config.enable_posture:
            state.posture = None
            return None

        try:
            my_flag_position = snapshot.require_flag(mine=True).position
        except MissingFlagReference as e:
            logger.debug("%s, skipping flag proximity check", e)
            my_flag_position = None

        previous = state.posture
        state.posture = decide_posture(
            snapshot.enemy_units,
            state.enemy_max_count,
            my_flag_position,
            arena.distance,
            self.config.posture_threat_ratio,
            self.config.flag_threat_radius,
        )
        if state.posture != previous:
            logger.info("Posture %s -> %s at tick %d",
                        previous.name if previous else None, state.posture.name, snapshot.tick)
        return state.posture
