# bot.py

import logging
from collections import Counter
from typing import Callable, Optional

from ctfbot.combat.maneuver import (
    Annotate,
    Heal,
    Maneuver,
    MeleeAttack,
    Move,
    MoveTo,
    RangedAttack,
    RangedHeal,
)
from ctfbot.combat.roles import RoleFactory, RoleKind
from ctfbot.combat.unit_micro import act_melee, act_ranged, act_support
from ctfbot.config import EngineConfig
from ctfbot.managers.posture import PostureController
from ctfbot.state import EngineState, TickContext
from ctfbot.utilities.debug import render_posture_overlay
from ctfbot.utilities.game_report import log_squad_report, should_report
from ctfbot.world import ArenaInterface, Snapshot, Unit

logger = logging.getLogger(__name__)

RoleAction = Callable[[Unit, TickContext], Maneuver]

ROLE_ACTIONS: dict[RoleKind, RoleAction] = {
    RoleKind.MELEE: act_melee,
    RoleKind.RANGED: act_ranged,
    RoleKind.SUPPORT: act_support,
}


class SquadBot:
    """
    Tick driver for one match.

    Owns the match state (posture, initial enemy count, home positions) and runs
    the per-tick sequence: snapshot, posture, classify, act, execute.
    """

    def __init__(self, arena: ArenaInterface, config: Optional[EngineConfig] = None):
        self.arena = arena
        self.config = config or EngineConfig()
        self.state = EngineState()
        self.factory = RoleFactory(strict=self.config.strict_classification)
        self.posture_controller = PostureController(self.config)

    def on_start(self) -> None:
        """Reset match state. Call once before the first tick of a match."""
        self.state.reset()
        logger.info(
            "Match started (posture control: %s, leash: %s, strict roles: %s)",
            self.config.enable_posture,
            self.config.melee_leash_radius,
            self.config.strict_classification,
        )

    def on_step(self, iteration: Optional[int] = None) -> list[Maneuver]:
        """
        Main loop executed each tick.

        Posture is decided once, before any role runs, and every role of the
        tick reads that same value. Roles only see tick-start positions, so
        units are processed independently in snapshot order.

        Args:
            iteration: Tick number for reporting, defaults to the internal counter

        Returns:
            Maneuvers issued this tick, one per classified unit

        Raises:
            UnrecognizedUnitConfiguration: In strict mode, before any command is issued
        """
        snapshot: Snapshot = self.arena.query_snapshot()
        tick = snapshot.tick if iteration is None else iteration

        posture = self.posture_controller.update(snapshot, self.state, self.arena)
        ctx = TickContext(
            snapshot=snapshot,
            posture=posture,
            config=self.config,
            arena=self.arena,
            state=self.state,
        )

        # Classify everything first so a strict failure aborts the tick before any action
        assignments = [(unit, self.factory.create_role(unit)) for unit in snapshot.my_units]
        role_counts = Counter(role for _, role in assignments)

        maneuvers = []
        for unit, role in assignments:
            if role is None:
                logger.warning(
                    "Skipping unit %s: no role for capabilities %s",
                    unit.id, sorted(c.value for c in unit.capabilities),
                )
                continue
            maneuver = ROLE_ACTIONS[role](unit, ctx)
            self.execute(maneuver, snapshot)
            maneuvers.append(maneuver)

        if self.config.debug_annotations:
            render_posture_overlay(self.arena, snapshot, posture)

        if should_report(tick, self.config.report_interval):
            log_squad_report(snapshot, self.state, role_counts)

        self.state.tick_count += 1
        return maneuvers

    def execute(self, maneuver: Maneuver, snapshot: Snapshot) -> None:
        """
        Issue a maneuver's commands through the arena, in order.

        Commands whose unit or target is no longer in the snapshot are dropped.
        """
        unit = snapshot.find_unit(maneuver.unit_id)
        if unit is None:
            return

        for command in maneuver:
            if isinstance(command, Annotate):
                self.arena.annotate(command.position, command.text, command.style)
            elif isinstance(command, MoveTo):
                self.arena.move_to(unit, command.target)
            elif isinstance(command, Move):
                self.arena.move(unit, command.direction)
            else:
                target = snapshot.find_unit(command.target_id)
                if target is None:
                    continue
                if isinstance(command, MeleeAttack):
                    self.arena.melee_attack(unit, target)
                elif isinstance(command, RangedAttack):
                    self.arena.ranged_attack(unit, target)
                elif isinstance(command, Heal):
                    self.arena.heal(unit, target)
                elif isinstance(command, RangedHeal):
                    self.arena.ranged_heal(unit, target)
