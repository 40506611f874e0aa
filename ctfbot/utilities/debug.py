"""Debug overlay helpers.

Purpose: On-screen annotations for unit health and squad posture
Key Decisions: All calls gated by EngineConfig.debug_annotations, no behavioural effect
Limitations: Rendering is entirely up to the arena provider
"""

from typing import Optional

from sc2.position import Point2

from ctfbot.combat.maneuver import Annotate
from ctfbot.constants import (
    HEALTH_LABEL_OFFSET,
    HEALTH_LABEL_STYLE,
    POSTURE_LABEL_OFFSET,
    POSTURE_LABEL_STYLE,
)
from ctfbot.state import Posture
from ctfbot.world import ArenaInterface, Snapshot, Unit


def health_annotation(unit: Unit) -> Annotate:
    """Hits label drawn just above the unit."""
    return Annotate(
        Point2((unit.x, unit.y - HEALTH_LABEL_OFFSET)),
        str(unit.hits),
        dict(HEALTH_LABEL_STYLE),
    )


def render_posture_overlay(arena: ArenaInterface, snapshot: Snapshot, posture: Optional[Posture]) -> None:
    """
    Draw the current posture above our flag.

    Skipped when posture control is off or our flag is not in the snapshot.

    Args:
        arena: Provider receiving the annotation
        snapshot: Current tick snapshot
        posture: Posture decided for this tick
    """
    if posture is None or snapshot.my_flag is None:
        return
    flag = snapshot.my_flag.position
    arena.annotate(
        Point2((flag.x, flag.y - POSTURE_LABEL_OFFSET)),
        f"{posture.name} | enemies: {len(snapshot.enemy_units)}",
        dict(POSTURE_LABEL_STYLE),
    )
