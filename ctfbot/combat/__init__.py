"""Combat package for the capture-the-flag squad.

Handles role classification, per-role unit behaviour and the flee maneuver.
"""

from ctfbot.constants import (
    MELEE_LEASH_RADIUS,
    RANGED_DANGER_RADIUS,
    SUPPORT_DANGER_RADIUS,
    HEAL_RANGE,
    CONTACT_HEAL_RANGE,
)

from ctfbot.combat.maneuver import (
    Maneuver,
    MoveTo,
    Move,
    MeleeAttack,
    RangedAttack,
    Heal,
    RangedHeal,
    Annotate,
    MOVEMENT_COMMANDS,
)

from ctfbot.combat.roles import (
    RoleKind,
    RoleFactory,
    classify_unit,
)

from ctfbot.combat.flee import (
    flee,
    enemies_within,
    closest_to,
)

from ctfbot.combat.unit_micro import (
    act_melee,
    act_ranged,
    act_support,
    move_to_enemy_flag,
)

__all__ = [
    # Constants
    "MELEE_LEASH_RADIUS",
    "RANGED_DANGER_RADIUS",
    "SUPPORT_DANGER_RADIUS",
    "HEAL_RANGE",
    "CONTACT_HEAL_RANGE",
    # Commands
    "Maneuver",
    "MoveTo",
    "Move",
    "MeleeAttack",
    "RangedAttack",
    "Heal",
    "RangedHeal",
    "Annotate",
    "MOVEMENT_COMMANDS",
    # Role classification
    "RoleKind",
    "RoleFactory",
    "classify_unit",
    # Threat helpers
    "flee",
    "enemies_within",
    "closest_to",
    # Role behaviours
    "act_melee",
    "act_ranged",
    "act_support",
    "move_to_enemy_flag",
]
