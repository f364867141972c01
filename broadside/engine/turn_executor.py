"""Main turn execution orchestrator.

A turn is PHASE_COUNT phases. Each phase runs the same steps in order:
1. Movement (simultaneous, with collision arbitration)
2. Hazards (whirlpools, then wind)
3. Combat (fire and grapple, line tracing)
4. Victory check (apply damage, decide grapple/sinking outcomes)

The turn stops early as soon as a phase produces a winner or a draw, or
when fewer than two ships are afloat.

Architecture:
Each step is an independent, composable method on TurnExecutor. The
orchestration method composes them per phase and records a PhaseResult,
which is the only thing rendering and logging code consume. The executor
never mutates the MatchState it is given; it works on a deep copy and
returns that copy as the final state.
"""

import copy
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional

from ..models.grid import Grid
from ..models.match import MatchState
from ..models.plan import PhasePlan
from ..models.ship import Ship
from ..schemas.plans import plan_for_phase
from ..utils.constants import PHASE_COUNT, STATUS_EXECUTING, STATUS_FINISHED, STATUS_PLANNING
from .combat import CombatResult, CombatTrace, resolve_combat
from .hazards import apply_hazards
from .movement import resolve_movement
from .victory import PhaseOutcome, check_victory

logger = logging.getLogger(__name__)


@dataclass
class PhaseResult:
    """Everything that happened in one resolved phase.

    Attributes:
        phase: 1-based phase number
        plans_by_ship_id: Canonical plans actually used
        ships_after_movement: Ship snapshots after movement
        ships_after_hazards: Ship snapshots after hazards
        ships_after_phase: Ship snapshots after combat and damage
        traces: Fire/grapple traces for rendering
        movement_events: Movement messages
        hazard_events: Hazard messages
        combat_events: Fire/grapple messages
        result_events: Damage messages
        outcome: Winner/draw decision for this phase
    """

    phase: int
    plans_by_ship_id: dict[str, PhasePlan]
    ships_after_movement: list[Ship]
    ships_after_hazards: list[Ship]
    ships_after_phase: list[Ship]
    traces: list[CombatTrace] = field(default_factory=list)
    movement_events: list[str] = field(default_factory=list)
    hazard_events: list[str] = field(default_factory=list)
    combat_events: list[str] = field(default_factory=list)
    result_events: list[str] = field(default_factory=list)
    outcome: PhaseOutcome = field(default_factory=PhaseOutcome)

    @property
    def events(self) -> list[str]:
        """All messages for the phase in display order."""
        events = [
            *self.movement_events,
            *self.hazard_events,
            *self.combat_events,
            *self.result_events,
        ]
        if self.outcome.reason:
            events.append(self.outcome.reason)
        return events


@dataclass
class TurnResult:
    """Final state plus the ordered phase trace of one resolved turn."""

    final_state: MatchState
    phase_results: list[PhaseResult]


def _snapshot(ships: list[Ship]) -> list[Ship]:
    return [replace(ship) for ship in ships]


class TurnExecutor:
    """Orchestrates the phase steps in the correct order.

    Each step is an independent method that can be tested separately.
    """

    # =========================================================================
    # INDEPENDENT STEP METHODS
    # Each method handles ONE step and returns new ship snapshots + events
    # =========================================================================

    def execute_phase_movement(
        self, ships: list[Ship], plans: dict[str, PhasePlan], grid: Grid
    ) -> tuple[list[Ship], list[str]]:
        """Execute step 1: simultaneous movement with collision arbitration."""
        return resolve_movement(ships, plans, grid)

    def execute_phase_hazards(self, ships: list[Ship], grid: Grid) -> tuple[list[Ship], list[str]]:
        """Execute step 2: whirlpools, then wind."""
        return apply_hazards(ships, grid)

    def execute_phase_combat(
        self, ships: list[Ship], plans: dict[str, PhasePlan], grid: Grid
    ) -> CombatResult:
        """Execute step 3: fire and grapple resolution."""
        return resolve_combat(ships, plans, grid)

    def execute_phase_victory_check(
        self, ships: list[Ship], combat: CombatResult
    ) -> tuple[list[Ship], PhaseOutcome, list[str]]:
        """Execute step 4: apply damage and decide the phase outcome."""
        return check_victory(ships, combat)

    # =========================================================================
    # ORCHESTRATION METHODS
    # =========================================================================

    def collect_phase_plans(
        self, state: MatchState, plans_by_ship_id: Optional[Mapping[str, Any]], phase_index: int
    ) -> dict[str, PhasePlan]:
        """Snapshot every ship's canonical plan for one phase.

        Missing or malformed entries become neutral plans.
        """
        if not isinstance(plans_by_ship_id, Mapping):
            plans_by_ship_id = {}
        return {
            ship.id: plan_for_phase(plans_by_ship_id.get(ship.id), phase_index)
            for ship in state.ships
        }

    def execute_phase(
        self, state: MatchState, plans_by_ship_id: Optional[Mapping[str, Any]], phase_index: int
    ) -> PhaseResult:
        """Run movement -> hazards -> combat -> victory for one phase.

        Updates `state` (which must be the executor's own working copy) with
        the new ships and, if the phase was decisive, the final outcome.

        Args:
            state: Working match state
            plans_by_ship_id: Raw plans for the whole turn
            phase_index: 0-based phase index

        Returns:
            PhaseResult for the phase
        """
        state.phase_index = phase_index
        plans = self.collect_phase_plans(state, plans_by_ship_id, phase_index)

        moved, movement_events = self.execute_phase_movement(state.ships, plans, state.grid)
        hazarded, hazard_events = self.execute_phase_hazards(moved, state.grid)
        combat = self.execute_phase_combat(hazarded, plans, state.grid)
        damaged, outcome, result_events = self.execute_phase_victory_check(hazarded, combat)

        state.ships = damaged

        if outcome.decided:
            state.status = STATUS_FINISHED
            state.winner_id = outcome.winner_id
            state.draw = outcome.draw

        logger.debug(
            f"Turn {state.turn_number} phase {phase_index + 1}: "
            f"{len(movement_events)} movement, {len(hazard_events)} hazard, "
            f"{len(combat.events)} combat events"
        )

        return PhaseResult(
            phase=phase_index + 1,
            plans_by_ship_id=plans,
            ships_after_movement=_snapshot(moved),
            ships_after_hazards=_snapshot(hazarded),
            ships_after_phase=_snapshot(damaged),
            traces=combat.traces,
            movement_events=movement_events,
            hazard_events=hazard_events,
            combat_events=combat.events,
            result_events=result_events,
            outcome=outcome,
        )

    def resolve_turn(
        self, match_state: MatchState, plans_by_ship_id: Optional[Mapping[str, Any]]
    ) -> TurnResult:
        """Resolve a whole turn from both ships' plans.

        Args:
            match_state: Current match state (left untouched)
            plans_by_ship_id: Ship id -> ordered sequence of up to PHASE_COUNT
                plans (PhasePlan objects, canonical dicts or legacy dicts)

        Returns:
            TurnResult with a new MatchState and the ordered phase results
        """
        state = copy.deepcopy(match_state)
        phase_results: list[PhaseResult] = []

        if state.is_finished:
            logger.debug("Match already finished, nothing to resolve")
            return TurnResult(final_state=state, phase_results=phase_results)

        state.status = STATUS_EXECUTING

        for phase_index in range(PHASE_COUNT):
            if len(state.living_ships()) < 2:
                break
            phase_results.append(self.execute_phase(state, plans_by_ship_id, phase_index))
            if state.is_finished:
                break

        if state.is_finished:
            if state.draw:
                logger.info(f"Turn {state.turn_number} ends in a draw")
            else:
                logger.info(f"Turn {state.turn_number} won by {state.winner_id}")
        else:
            state.status = STATUS_PLANNING
            state.phase_index = None
            state.turn_number += 1

        return TurnResult(final_state=state, phase_results=phase_results)


def resolve_turn(
    match_state: MatchState, plans_by_ship_id: Optional[Mapping[str, Any]]
) -> TurnResult:
    """Resolve one turn. See TurnExecutor.resolve_turn."""
    return TurnExecutor().resolve_turn(match_state, plans_by_ship_id)
