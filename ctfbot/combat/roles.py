"""Role classification.

Purpose: Map a unit's capability set to exactly one role
Key Decisions: Closed enum with first-match priority Melee > Ranged > Support
Limitations: Capabilities are assumed fixed for a unit's lifetime, so roles are re-derived every tick
"""

from enum import Enum
from typing import Optional

from ctfbot.errors import UnrecognizedUnitConfiguration
from ctfbot.world import Capability, Unit


class RoleKind(Enum):
    MELEE = "soldier"
    RANGED = "archer"
    SUPPORT = "priest"


# First match wins
ROLE_PRIORITY: tuple[tuple[Capability, RoleKind], ...] = (
    (Capability.MELEE, RoleKind.MELEE),
    (Capability.RANGED, RoleKind.RANGED),
    (Capability.SUPPORT, RoleKind.SUPPORT),
)


def classify_unit(unit: Unit) -> Optional[RoleKind]:
    """
    Pick the role for a unit from its capabilities.

    A unit carrying both melee and ranged parts is a soldier.

    Returns:
        RoleKind, or None if no combat capability is present
    """
    for capability, role in ROLE_PRIORITY:
        if unit.has(capability):
            return role
    return None


class RoleFactory:
    """
    Classifies units with an explicit policy for unrecognized configurations.

    Tolerant (default): unrecognized units get no role and are skipped.
    Strict: unrecognized units raise and abort the tick.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def create_role(self, unit: Unit) -> Optional[RoleKind]:
        role = classify_unit(unit)
        if role is None and self.strict:
            raise UnrecognizedUnitConfiguration(unit.id, unit.capabilities)
        return role
