"""Shared fixtures for engine tests."""

from __future__ import annotations

from typing import Optional

import pytest

from ctfbot.config import EngineConfig
from ctfbot.state import EngineState, Posture, TickContext
from ctfbot.utilities.local_arena import LocalArena
from ctfbot.world import Capability

SOLDIER = (Capability.MELEE, Capability.MOVE)
ARCHER = (Capability.RANGED, Capability.MOVE)
PRIEST = (Capability.SUPPORT, Capability.MOVE)


@pytest.fixture
def arena() -> LocalArena:
    """100x100 arena with our flag at (5, 5) and the enemy flag at (90, 90)."""
    a = LocalArena(width=100, height=100)
    a.add_flag((5, 5), my=True)
    a.add_flag((90, 90), my=False)
    return a


@pytest.fixture
def quiet_config() -> EngineConfig:
    """Config without debug annotations or reports, so command logs stay minimal."""
    return EngineConfig(debug_annotations=False, report_interval=0)


def make_ctx(
    arena: LocalArena,
    posture: Optional[Posture] = Posture.AGGRESSIVE,
    config: Optional[EngineConfig] = None,
    state: Optional[EngineState] = None,
) -> TickContext:
    return TickContext(
        snapshot=arena.query_snapshot(),
        posture=posture,
        config=config or EngineConfig(debug_annotations=False),
        arena=arena,
        state=state or EngineState(),
    )
