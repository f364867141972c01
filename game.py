#!/usr/bin/env python3
"""Broadside - Main entry point.

Runs a two-ship naval duel in text mode with both ships steered by the
heuristic planner, printing every resolved phase.
"""

import argparse
import logging
import sys

from broadside.agent.planner import generate_ai_plan
from broadside.engine.map_generator import create_initial_state
from broadside.engine.turn_executor import TurnExecutor
from broadside.interface.display import DisplayManager
from broadside.models.match import MatchState
from broadside.utils.constants import MAP_MODES, SHIP_TYPES


class GameOrchestrator:
    """Manages the turn loop and planner coordination."""

    def __init__(self, state: MatchState, max_turns: int = 50, show_board: bool = False):
        """Initialize game orchestrator.

        Args:
            state: Initial match state
            max_turns: Stop after this many turns without a decision
            show_board: Print the board after every turn
        """
        self.state = state
        self.max_turns = max_turns
        self.show_board = show_board
        self.turn_executor = TurnExecutor()
        self.display = DisplayManager()

    def run(self) -> MatchState:
        """Main game loop."""
        print("\n" + "=" * 40)
        print("Broadside")
        print("=" * 40)
        if self.show_board:
            print(self.display.render_board(self.state))

        try:
            turns_played = 0
            while not self.state.is_finished and turns_played < self.max_turns:
                self._play_turn()
                turns_played += 1
        except KeyboardInterrupt:
            print("\n\nGame interrupted by user. Exiting...")
            sys.exit(0)

        self.display.show_result(self.state)
        return self.state

    def _play_turn(self) -> None:
        plans = {ship.id: generate_ai_plan(self.state, ship.id) for ship in self.state.ships}
        turn_number = self.state.turn_number
        try:
            turn = self.turn_executor.resolve_turn(self.state, plans)
        except Exception as e:
            print(f"Error resolving turn {turn_number}: {e}")
            print("Game cannot continue. Exiting...")
            sys.exit(1)

        self.state = turn.final_state
        self.display.show_turn(turn_number, turn)
        if self.show_board:
            print(self.display.render_board(self.state))


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Broadside - Two-ship naval duel",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                  # Cutter vs War Brig on the default map
  %(prog)s --p1-type sloop --p2-type dhow   # Choose hull types
  %(prog)s --map procedural --seed 7        # Seeded random layout
  %(prog)s --board --debug                  # Draw the board, verbose logging
        """,
    )
    parser.add_argument("--p1-type", choices=sorted(SHIP_TYPES), default="cutter")
    parser.add_argument("--p2-type", choices=sorted(SHIP_TYPES), default="war_brig")
    parser.add_argument(
        "--map",
        choices=MAP_MODES,
        default="default",
        help="Map layout: default=fixed layout, procedural=seeded random layout",
    )
    parser.add_argument(
        "--seed",
        type=str,
        default=None,
        help="Seed for the procedural map (default: random, printed at start)",
    )
    parser.add_argument(
        "--max-turns",
        type=int,
        default=50,
        help="Stop after this many undecided turns (default: 50)",
    )
    parser.add_argument("--board", action="store_true", help="Print the board after each turn")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    log_level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    seed = args.seed
    if seed is not None and seed.isdigit():
        seed = int(seed)

    try:
        state = create_initial_state(
            p1_type_id=args.p1_type,
            p2_type_id=args.p2_type,
            map_mode=args.map,
            map_seed=seed,
        )
    except ValueError as e:
        print(f"Error creating match: {e}")
        sys.exit(1)

    if state.grid.seed is not None:
        print(f"Procedural map seed: {state.grid.seed}")

    orchestrator = GameOrchestrator(state, max_turns=args.max_turns, show_board=args.board)
    orchestrator.run()


if __name__ == "__main__":
    main()
