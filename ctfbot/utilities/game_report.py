"""
Squad Report Utility
Periodic summary of the squad written to the log:
- Unit counts per role (and skipped units)
- Enemy count against the initial enemy count
- Current posture
"""

import logging
from collections import Counter

from ctfbot.combat.roles import RoleKind
from ctfbot.state import EngineState
from ctfbot.world import Snapshot

logger = logging.getLogger(__name__)


def should_report(tick: int, interval: int) -> bool:
    """True on every interval-th tick, never when the interval is 0."""
    return interval > 0 and tick % interval == 0


def log_squad_report(snapshot: Snapshot, state: EngineState, roles: Counter) -> None:
    """Log a squad summary.

    Args:
        snapshot: Current tick snapshot
        state: Engine state (posture, enemy max count)
        roles: Count of classified units per RoleKind, None key for skipped units
    """
    logger.info("=" * 40)
    logger.info("  SQUAD REPORT tick %d", snapshot.tick)
    logger.info("=" * 40)
    logger.info("  I have %d units", len(snapshot.my_units))
    logger.info("  %s", _format_roles(roles))
    logger.info("  Enemies: %d / %d", len(snapshot.enemy_units), state.enemy_max_count)
    logger.info("  Posture: %s", _format_posture(state))


def _format_roles(roles: Counter) -> str:
    parts = [f"{kind.name}:{roles.get(kind, 0)}" for kind in RoleKind]
    if roles.get(None):
        parts.append(f"SKIPPED:{roles[None]}")
    return "ROLES: " + " ".join(parts)


def _format_posture(state: EngineState) -> str:
    return state.posture.name if state.posture is not None else "DISABLED"
