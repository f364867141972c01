"""Text display of match state and resolved phases.

This module consumes TurnResult/PhaseResult objects only; it never feeds
anything back into turn resolution.
"""

from ..engine.turn_executor import PhaseResult, TurnResult
from ..models.match import MatchState
from ..utils.constants import HAZARD_WHIRLPOOL, ROCK_LARGE

# Board glyphs
FACING_GLYPHS = {"N": "^", "E": ">", "S": "v", "W": "<"}
WIND_GLYPHS = {"N": "n", "E": "e", "S": "s", "W": "w"}
EMPTY_GLYPH = "."
WHIRLPOOL_GLYPH = "@"
LARGE_ROCK_GLYPH = "#"
SMALL_ROCK_GLYPH = "o"

# Event category prefixes
EVENT_PREFIXES = {
    "movement": "[move]",
    "hazard": "[hazard]",
    "combat": "[combat]",
    "result": "[result]",
}


class DisplayManager:
    """Formats and prints turn information."""

    def render_board(self, state: MatchState) -> str:
        """Draw the grid as text, one row per line.

        Ships are drawn as their facing arrow and take priority over terrain.
        """
        grid = state.grid
        rows = [[EMPTY_GLYPH] * grid.width for _ in range(grid.height)]

        for hazard in grid.hazards:
            if hazard.kind == HAZARD_WHIRLPOOL:
                for dx in range(hazard.size):
                    for dy in range(hazard.size):
                        if grid.in_bounds(hazard.x + dx, hazard.y + dy):
                            rows[hazard.y + dy][hazard.x + dx] = WHIRLPOOL_GLYPH
            elif grid.in_bounds(hazard.x, hazard.y):
                rows[hazard.y][hazard.x] = WIND_GLYPHS[hazard.direction]

        for rock in grid.rocks:
            if not grid.in_bounds(rock.x, rock.y):
                continue
            rows[rock.y][rock.x] = LARGE_ROCK_GLYPH if rock.size == ROCK_LARGE else SMALL_ROCK_GLYPH

        for ship in state.ships:
            if ship.alive and grid.in_bounds(ship.x, ship.y):
                rows[ship.y][ship.x] = FACING_GLYPHS[ship.facing]

        return "\n".join("".join(row) for row in rows)

    def format_ship_status(self, state: MatchState) -> list[str]:
        lines = []
        for ship in state.ships:
            status = "afloat" if ship.alive else "sunk"
            lines.append(
                f"{ship.id} {ship.name} ({ship.type_label or ship.type_id}): "
                f"HP {ship.hp}/{ship.max_hp} at ({ship.x},{ship.y}) facing {ship.facing}, {status}"
            )
        return lines

    def format_phase_result(self, result: PhaseResult) -> list[str]:
        """Flatten one phase into prefixed log lines."""
        lines = [f"-- Phase {result.phase} --"]
        for category, events in (
            ("movement", result.movement_events),
            ("hazard", result.hazard_events),
            ("combat", result.combat_events),
            ("result", result.result_events),
        ):
            prefix = EVENT_PREFIXES[category]
            lines.extend(f"{prefix} {event}" for event in events)
        if result.outcome.reason:
            lines.append(f"{EVENT_PREFIXES['result']} {result.outcome.reason}")
        return lines

    def format_turn(self, turn_number: int, turn: TurnResult) -> list[str]:
        lines = [f"=== Turn {turn_number} ==="]
        for result in turn.phase_results:
            lines.extend(self.format_phase_result(result))
        if not turn.phase_results:
            lines.append("No phases resolved.")
        return lines

    def show_turn(self, turn_number: int, turn: TurnResult) -> None:
        """Print a resolved turn followed by ship status."""
        for line in self.format_turn(turn_number, turn):
            print(line)
        for line in self.format_ship_status(turn.final_state):
            print(line)

    def show_result(self, state: MatchState) -> None:
        """Print the final match result."""
        print("\n" + "=" * 40)
        if state.draw:
            print("The match ends in a draw.")
        elif state.winner_id:
            winner = state.get_ship(state.winner_id)
            name = winner.name if winner else state.winner_id
            print(f"{name} ({state.winner_id}) wins!")
        else:
            print("No decision.")
        print("=" * 40)
