"""Plain-text board view.

One character per cell::

    .  empty      #  wall      o  block
    @  player     E  exit

Meant for logs, debugging and the Gymnasium ``"ansi"`` render mode; real
drawing belongs to the rendering collaborator.
"""

from typing import Dict

from shuffle_maze.components import Position
from shuffle_maze.state import State
from shuffle_maze.types import Cell
from shuffle_maze.utils.grid import agent_position, exit_position

CELL_GLYPHS: Dict[Cell, str] = {
    Cell.EMPTY: ".",
    Cell.WALL: "#",
    Cell.BLOCK: "o",
}
AGENT_GLYPH = "@"
EXIT_GLYPH = "E"


def render_ascii(state: State) -> str:
    player = agent_position(state)
    goal = exit_position(state)
    lines = []
    for y in range(state.height):
        row = []
        for x in range(state.width):
            pos = Position(x, y)
            if pos == player:
                row.append(AGENT_GLYPH)
            elif pos == goal:
                row.append(EXIT_GLYPH)
            else:
                row.append(CELL_GLYPHS[state.cell[pos]])
        lines.append("".join(row))
    return "\n".join(lines)
