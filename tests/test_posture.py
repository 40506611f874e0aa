"""Unit tests for the posture controller."""

from __future__ import annotations

import pytest

from ctfbot.config import EngineConfig
from ctfbot.managers.posture import PostureController, decide_posture
from ctfbot.state import EngineState, Posture
from ctfbot.utilities.local_arena import LocalArena

from conftest import SOLDIER

pytestmark = pytest.mark.unit


def _arena_with_enemies(positions, flag=(50, 50)) -> LocalArena:
    arena = LocalArena()
    if flag is not None:
        arena.add_flag(flag, my=True)
    arena.add_flag((95, 95), my=False)
    for i, pos in enumerate(positions):
        arena.add_unit(f"e{i}", pos, my=False, capabilities=SOLDIER)
    return arena


def _decide(arena: LocalArena, enemy_max_count: int) -> Posture:
    snapshot = arena.query_snapshot()
    return decide_posture(
        snapshot.enemy_units,
        enemy_max_count,
        snapshot.my_flag.position if snapshot.my_flag else None,
        arena.distance,
        threat_ratio=0.6,
        flag_threat_radius=10,
    )


class TestDecidePosture:
    def test_too_many_enemies_is_defensive(self):
        # 7 of 10 alive is above 0.6, even though all are far from our flag
        arena = _arena_with_enemies([(90, i) for i in range(7)])
        assert _decide(arena, 10) == Posture.DEFENSIVE

    def test_threat_density_beats_flag_check(self):
        arena = _arena_with_enemies([(90, i) for i in range(10)])
        assert _decide(arena, 10) == Posture.DEFENSIVE

    def test_ratio_boundary_is_not_defensive(self):
        # 6 of 10 is exactly 0.6, not above it
        arena = _arena_with_enemies([(90, i) for i in range(6)])
        assert _decide(arena, 10) == Posture.AGGRESSIVE

    def test_enemy_at_nine_from_flag_is_defensive(self):
        arena = _arena_with_enemies([(59, 50), (90, 90)])
        assert _decide(arena, 10) == Posture.DEFENSIVE

    def test_enemy_at_eleven_from_flag_is_aggressive(self):
        arena = _arena_with_enemies([(61, 50), (90, 90)])
        assert _decide(arena, 10) == Posture.AGGRESSIVE

    def test_flag_radius_is_exclusive(self):
        arena = _arena_with_enemies([(50, 40)])
        assert _decide(arena, 10) == Posture.AGGRESSIVE

    def test_missing_flag_skips_proximity_check(self):
        arena = _arena_with_enemies([(51, 50)], flag=None)
        assert _decide(arena, 10) == Posture.AGGRESSIVE

    def test_no_enemies_is_aggressive(self):
        arena = _arena_with_enemies([])
        assert _decide(arena, 10) == Posture.AGGRESSIVE


class TestPostureController:
    def test_captures_enemy_max_count_once(self):
        arena = _arena_with_enemies([(90, i) for i in range(5)])
        state = EngineState()
        controller = PostureController(EngineConfig())

        controller.update(arena.query_snapshot(), state, arena)
        assert state.enemy_max_count == 5

        arena.remove_unit("e0")
        arena.remove_unit("e1")
        controller.update(arena.query_snapshot(), state, arena)
        assert state.enemy_max_count == 5

    def test_full_enemy_force_starts_defensive(self):
        arena = _arena_with_enemies([(90, i) for i in range(5)])
        state = EngineState()
        posture = PostureController(EngineConfig()).update(arena.query_snapshot(), state, arena)
        assert posture == Posture.DEFENSIVE
        assert state.posture == Posture.DEFENSIVE

    def test_flips_to_aggressive_after_losses(self):
        arena = _arena_with_enemies([(90, i) for i in range(5)])
        state = EngineState()
        controller = PostureController(EngineConfig())
        controller.update(arena.query_snapshot(), state, arena)

        for i in range(3):
            arena.remove_unit(f"e{i}")
        assert controller.update(arena.query_snapshot(), state, arena) == Posture.AGGRESSIVE

    def test_empty_first_tick_does_not_pin_max_count(self):
        arena = _arena_with_enemies([])
        state = EngineState()
        controller = PostureController(EngineConfig())
        controller.update(arena.query_snapshot(), state, arena)
        assert state.enemy_max_count == 0

        arena.add_unit("late", (90, 90), my=False, capabilities=SOLDIER)
        controller.update(arena.query_snapshot(), state, arena)
        assert state.enemy_max_count == 1

    def test_disabled_posture_is_none(self):
        arena = _arena_with_enemies([(90, 1)])
        state = EngineState()
        controller = PostureController(EngineConfig(enable_posture=False))
        assert controller.update(arena.query_snapshot(), state, arena) is None
        assert state.posture is None
        assert state.enemy_max_count == 1

    def test_custom_threat_ratio(self):
        arena = _arena_with_enemies([(90, i) for i in range(4)])
        state = EngineState(enemy_max_count=4)
        controller = PostureController(EngineConfig(posture_threat_ratio=1.0))
        assert controller.update(arena.query_snapshot(), state, arena) == Posture.AGGRESSIVE
