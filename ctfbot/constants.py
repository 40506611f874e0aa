"""System-wide constants and default tuning values.

Purpose: Centralize radii, ratios and debug styles used by roles and the posture controller
Key Decisions: Plain module constants, EngineConfig copies them as defaults so every value stays tunable
Limitations: None - pure data definitions

Organization:
- Posture parameters
- Role radii (leash, danger, heal)
- Debug rendering styles
"""

# ===== POSTURE =====
POSTURE_THREAT_RATIO = 0.6
"""Defensive while more than this share of the initial enemy force is alive"""

FLAG_THREAT_RADIUS = 10
"""Enemies strictly closer than this to our flag force a defensive posture"""

# ===== MELEE =====
MELEE_LEASH_RADIUS = 10
"""Melee units only engage enemies strictly closer than this to their home position"""

# ===== RANGED =====
RANGED_DANGER_RADIUS = 3
"""Ranged units flee from enemies strictly closer than this"""

# ===== SUPPORT =====
SUPPORT_DANGER_RADIUS = 7
"""Support units disengage early - no offense to defend themselves"""

HEAL_RANGE = 3
"""Maximum range for a ranged heal"""

CONTACT_HEAL_RANGE = 1
"""Targets at or inside this range get the stronger contact heal"""

# ===== REPORTING =====
REPORT_INTERVAL = 10
"""Ticks between squad reports (0 disables the report)"""

# ===== DEBUG STYLES =====
HEALTH_LABEL_OFFSET = 0.5
"""Vertical offset of the hits label, above the unit"""

HEALTH_LABEL_STYLE: dict = {
    "font": "0.5",
    "opacity": 0.7,
    "backgroundColor": "#808080",
    "backgroundPadding": 0.03,
}
"""Style of the per-unit hits label"""

POSTURE_LABEL_STYLE: dict = {
    "font": "0.8",
    "opacity": 0.9,
    "color": "#ffffff",
    "backgroundColor": "#202020",
    "backgroundPadding": 0.1,
}
"""Style of the posture label drawn above our flag"""

POSTURE_LABEL_OFFSET = 1.5
"""Vertical offset of the posture label, above our flag"""
