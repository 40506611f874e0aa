"""Engine configuration.

Purpose: Tunable engine options, optionally loaded from a YAML file
Key Decisions: CamelCase keys in the file (same convention as the bot's config.yml), snake_case attributes in code
Limitations: Flat file only, unknown keys are rejected
"""

from dataclasses import dataclass, fields
from os import path
from typing import Optional

import yaml

from ctfbot.constants import (
    CONTACT_HEAL_RANGE,
    FLAG_THREAT_RADIUS,
    HEAL_RANGE,
    MELEE_LEASH_RADIUS,
    POSTURE_THREAT_RATIO,
    RANGED_DANGER_RADIUS,
    REPORT_INTERVAL,
    SUPPORT_DANGER_RADIUS,
)
from ctfbot.errors import ConfigError

CONFIG_FILE: str = "config.yml"

# File key -> EngineConfig attribute
CONFIG_KEYS: dict[str, str] = {
    "EnablePosture": "enable_posture",
    "PostureThreatRatio": "posture_threat_ratio",
    "FlagThreatRadius": "flag_threat_radius",
    "MeleeLeashRadius": "melee_leash_radius",
    "RangedDangerRadius": "ranged_danger_radius",
    "SupportDangerRadius": "support_danger_radius",
    "HealRange": "heal_range",
    "ContactHealRange": "contact_heal_range",
    "StrictClassification": "strict_classification",
    "DebugAnnotations": "debug_annotations",
    "ReportInterval": "report_interval",
}

NULLABLE_OPTIONS: set[str] = {"melee_leash_radius"}


@dataclass
class EngineConfig:
    """
    Engine options.

    The two behaviour variants of the arena bot are expressed here rather than
    as separate code paths: ``enable_posture=False`` always pushes with ranged
    units and sends idle melee units home, ``melee_leash_radius=None`` lets
    melee units engage any enemy regardless of where they started.
    """

    enable_posture: bool = True
    posture_threat_ratio: float = POSTURE_THREAT_RATIO
    flag_threat_radius: int = FLAG_THREAT_RADIUS
    melee_leash_radius: Optional[int] = MELEE_LEASH_RADIUS
    ranged_danger_radius: int = RANGED_DANGER_RADIUS
    support_danger_radius: int = SUPPORT_DANGER_RADIUS
    heal_range: int = HEAL_RANGE
    contact_heal_range: int = CONTACT_HEAL_RANGE
    strict_classification: bool = False
    debug_annotations: bool = True
    report_interval: int = REPORT_INTERVAL

    def __post_init__(self):
        if not 0.0 <= self.posture_threat_ratio <= 1.0:
            raise ConfigError(
                f"posture_threat_ratio must be within [0, 1], got {self.posture_threat_ratio}"
            )
        for name in ("flag_threat_radius", "ranged_danger_radius", "support_danger_radius",
                     "heal_range", "contact_heal_range", "report_interval"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must not be negative")
        if self.melee_leash_radius is not None and self.melee_leash_radius < 0:
            raise ConfigError("melee_leash_radius must not be negative")

    @classmethod
    def from_dict(cls, data: dict) -> "EngineConfig":
        """
        Build a config from a parsed YAML mapping.

        Args:
            data: Mapping of CamelCase file keys to values

        Returns:
            EngineConfig with the given overrides applied

        Raises:
            ConfigError: On unknown keys or values of the wrong type
        """
        defaults = {f.name: f.default for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in CONFIG_KEYS:
                raise ConfigError(f"Unknown config key: {key}")
            attr = CONFIG_KEYS[key]
            if not _matches(defaults[attr], value, nullable=attr in NULLABLE_OPTIONS):
                raise ConfigError(f"{key} has invalid value {value!r}")
            kwargs[attr] = value
        return cls(**kwargs)


def _matches(default, value, nullable: bool = False) -> bool:
    if value is None:
        return nullable
    if isinstance(default, bool) or isinstance(value, bool):
        return isinstance(default, bool) and isinstance(value, bool)
    if isinstance(default, float):
        return isinstance(value, (int, float))
    return isinstance(value, int)


def load_config(config_path: Optional[str] = None) -> EngineConfig:
    """
    Load engine configuration from a YAML file.

    Args:
        config_path: File to read, defaults to config.yml in the working directory

    Returns:
        EngineConfig (defaults when the file does not exist or is empty)
    """
    if config_path is None:
        config_path = path.join(path.abspath("."), CONFIG_FILE)
    if not path.isfile(config_path):
        return EngineConfig()

    with open(config_path) as config_file:
        config = yaml.safe_load(config_file)

    if not config:
        return EngineConfig()
    if not isinstance(config, dict):
        raise ConfigError(f"{config_path} must contain a mapping")
    return EngineConfig.from_dict(config)
