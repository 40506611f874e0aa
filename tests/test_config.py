"""Tests for engine configuration loading."""

from __future__ import annotations

import pytest

from ctfbot.config import EngineConfig, load_config
from ctfbot.errors import ConfigError

pytestmark = pytest.mark.unit


def _write(tmp_path, text: str) -> str:
    path = tmp_path / "config.yml"
    path.write_text(text)
    return str(path)


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(str(tmp_path / "nope.yml"))
        assert config == EngineConfig()

    def test_empty_file_gives_defaults(self, tmp_path):
        assert load_config(_write(tmp_path, "")) == EngineConfig()

    def test_defaults_match_documented_values(self):
        config = EngineConfig()
        assert config.enable_posture is True
        assert config.posture_threat_ratio == 0.6
        assert config.flag_threat_radius == 10
        assert config.melee_leash_radius == 10
        assert config.ranged_danger_radius == 3
        assert config.support_danger_radius == 7
        assert config.heal_range == 3
        assert config.strict_classification is False

    def test_overrides(self, tmp_path):
        config = load_config(_write(tmp_path, (
            "EnablePosture: false\n"
            "PostureThreatRatio: 0.5\n"
            "MeleeLeashRadius: 15\n"
            "StrictClassification: true\n"
        )))
        assert config.enable_posture is False
        assert config.posture_threat_ratio == 0.5
        assert config.melee_leash_radius == 15
        assert config.strict_classification is True
        assert config.ranged_danger_radius == 3

    def test_null_leash_disables_it(self, tmp_path):
        config = load_config(_write(tmp_path, "MeleeLeashRadius: null\n"))
        assert config.melee_leash_radius is None

    def test_integer_ratio_is_accepted(self, tmp_path):
        config = load_config(_write(tmp_path, "PostureThreatRatio: 1\n"))
        assert config.posture_threat_ratio == 1

    def test_unknown_key_is_rejected(self, tmp_path):
        with pytest.raises(ConfigError, match="Unknown config key"):
            load_config(_write(tmp_path, "EnableTurbo: true\n"))

    @pytest.mark.parametrize("text", [
        "EnablePosture: 1\n",
        "FlagThreatRadius: ten\n",
        "RangedDangerRadius: true\n",
        "HealRange: null\n",
    ])
    def test_wrong_types_are_rejected(self, tmp_path, text):
        with pytest.raises(ConfigError):
            load_config(_write(tmp_path, text))

    def test_non_mapping_is_rejected(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(_write(tmp_path, "- a\n- b\n"))


class TestEngineConfigValidation:
    def test_ratio_out_of_range(self):
        with pytest.raises(ConfigError):
            EngineConfig(posture_threat_ratio=1.5)

    def test_negative_radius(self):
        with pytest.raises(ConfigError):
            EngineConfig(ranged_danger_radius=-1)

    def test_negative_leash(self):
        with pytest.raises(ConfigError):
            EngineConfig(melee_leash_radius=-3)
