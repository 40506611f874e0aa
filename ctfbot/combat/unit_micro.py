"""Unit-level role behaviours.

Purpose: Per-tick decision logic for soldiers, archers and priests
Key Decisions: Pure functions that read the tick context and return a Maneuver; nothing here touches the arena's action methods
Limitations: One Maneuver per unit per tick, later movement commands supersede earlier ones
"""

import logging
from typing import Optional

from ctfbot.combat.flee import closest_to, enemies_within, flee
from ctfbot.combat.maneuver import (
    Heal,
    Maneuver,
    MeleeAttack,
    MoveTo,
    RangedAttack,
    RangedHeal,
)
from ctfbot.state import Posture, TickContext
from ctfbot.utilities.debug import health_annotation
from ctfbot.world import Unit

logger = logging.getLogger(__name__)


def move_to_enemy_flag(unit: Unit, ctx: TickContext) -> Optional[MoveTo]:
    """Flag-directed move, or None when the enemy flag is not in the snapshot."""
    target = ctx.enemy_flag_position
    if target is None:
        logger.debug("No enemy flag, %s skips flag movement", unit.id)
        return None
    return MoveTo(unit.id, target)


def act_melee(unit: Unit, ctx: TickContext) -> Maneuver:
    """
    Soldier behaviour.

    Engages the enemy nearest to the soldier among those close to its home
    position. The leash is measured from home, not from the live position, so
    soldiers are not dragged across the map chasing targets.

    - Target found: move to it and attack it (the attack is a no-op until adjacent)
    - Aggressive, no target: push to the enemy flag
    - Defensive or posture disabled, no target: return home

    Args:
        unit: The soldier to control
        ctx: Current tick context

    Returns:
        Maneuver for this tick
    """
    maneuver = Maneuver(unit.id)
    home = ctx.home_of(unit)

    if ctx.config.debug_annotations:
        maneuver.add(health_annotation(unit))

    in_leash = enemies_within(home, ctx.snapshot.enemy_units, ctx.config.melee_leash_radius, ctx.distance)
    target = closest_to(unit.position, in_leash, ctx.distance)

    if target is not None:
        maneuver.add(MoveTo(unit.id, target.position))
        maneuver.add(MeleeAttack(unit.id, target.id))
    elif ctx.posture == Posture.AGGRESSIVE:
        maneuver.add(move_to_enemy_flag(unit, ctx))
    else:
        maneuver.add(MoveTo(unit.id, home))

    return maneuver


def act_ranged(unit: Unit, ctx: TickContext) -> Maneuver:
    """
    Archer behaviour.

    Always shoots the nearest enemy. Movement follows the posture unless an
    enemy is inside the danger radius, in which case fleeing replaces the
    posture movement for this tick.

    Args:
        unit: The archer to control
        ctx: Current tick context

    Returns:
        Maneuver for this tick
    """
    maneuver = Maneuver(unit.id)
    home = ctx.home_of(unit)
    enemies = ctx.snapshot.enemy_units

    target = closest_to(unit.position, enemies, ctx.distance)
    if target is not None:
        maneuver.add(RangedAttack(unit.id, target.id))

    radius = ctx.config.ranged_danger_radius
    if in_danger := enemies_within(unit.position, enemies, radius, ctx.distance):
        maneuver.add(flee(unit, in_danger, radius, ctx.arena))
        return maneuver

    if ctx.posture == Posture.DEFENSIVE:
        maneuver.add(MoveTo(unit.id, home))
    else:
        maneuver.add(move_to_enemy_flag(unit, ctx))

    return maneuver


def act_support(unit: Unit, ctx: TickContext) -> Maneuver:
    """
    Priest behaviour.

    Does not read the posture. Order matters because the last movement wins:
    1. follow the most wounded ally, or head for the enemy flag
    2. heal the weakest unit in range (contact heal only when adjacent)
    3. flee from enemies inside the wide danger radius
    4. head for the enemy flag

    Args:
        unit: The priest to control
        ctx: Current tick context

    Returns:
        Maneuver for this tick
    """
    maneuver = Maneuver(unit.id)
    ctx.home_of(unit)
    allies = ctx.snapshot.my_units

    # Stable sort keeps snapshot order among equally wounded allies
    wounded = sorted(
        (u for u in allies if u.id != unit.id and u.is_damaged),
        key=lambda u: u.hits,
    )
    if wounded:
        maneuver.add(MoveTo(unit.id, wounded[0].position))
    else:
        maneuver.add(move_to_enemy_flag(unit, ctx))

    heal_targets = sorted(
        (u for u in allies if ctx.distance(u.position, unit.position) <= ctx.config.heal_range),
        key=lambda u: u.hits,
    )
    if heal_targets:
        patient = heal_targets[0]
        # Self-heal at distance 0 is a ranged heal
        if ctx.distance(patient.position, unit.position) == ctx.config.contact_heal_range:
            maneuver.add(Heal(unit.id, patient.id))
        else:
            maneuver.add(RangedHeal(unit.id, patient.id))

    radius = ctx.config.support_danger_radius
    if in_danger := enemies_within(unit.position, ctx.snapshot.enemy_units, radius, ctx.distance):
        maneuver.add(flee(unit, in_danger, radius, ctx.arena))

    maneuver.add(move_to_enemy_flag(unit, ctx))

    return maneuver
