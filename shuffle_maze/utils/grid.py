"""Grid math / occupancy helpers.

Predicates used by the movement, push and block systems. Functions here are
pure and deliberately small so the scheduler's inner loops stay cheap.

Two notions of "free" exist:

* :func:`is_empty_cell`: a cell a block may move into right now (in
  bounds, tagged ``Cell.EMPTY``, not the player, not the exit).
* :func:`is_open_cell`: a cell that is not permanently off-limits (in
  bounds, not a wall, not the player, not the exit). It may currently hold
  a block; the scheduler's contested phase uses it.
"""

from typing import List, Optional
from shuffle_maze.components import Position
from shuffle_maze.state import State
from shuffle_maze.types import Cell, EntityID

NEIGHBOR_DELTAS = [(0, -1), (0, 1), (-1, 0), (1, 0)]


def is_in_bounds(state: State, pos: Position) -> bool:
    """Return True if ``pos`` lies within the level rectangle."""
    return 0 <= pos.x < state.width and 0 <= pos.y < state.height


def cell_at(state: State, pos: Position) -> Optional[Cell]:
    """Return the cell tag at ``pos`` or ``None`` when out of bounds."""
    return state.cell.get(pos)


def neighbors(pos: Position) -> List[Position]:
    """The four orthogonal neighbors of ``pos`` (may be out of bounds)."""
    return [Position(pos.x + dx, pos.y + dy) for dx, dy in NEIGHBOR_DELTAS]


def all_positions(state: State) -> List[Position]:
    """Every coordinate, row by row."""
    return [Position(x, y) for y in range(state.height) for x in range(state.width)]


def agent_id_of(state: State) -> Optional[EntityID]:
    return next(iter(state.agent.keys()), None)


def agent_position(state: State) -> Optional[Position]:
    agent_id = agent_id_of(state)
    return None if agent_id is None else state.position.get(agent_id)


def exit_position(state: State) -> Optional[Position]:
    exit_id = next(iter(state.exit.keys()), None)
    return None if exit_id is None else state.position.get(exit_id)


def block_at(state: State, pos: Position) -> Optional[EntityID]:
    """Return the block entity whose logical position is ``pos``."""
    if cell_at(state, pos) != Cell.BLOCK:
        return None
    for eid in state.block:
        if state.position.get(eid) == pos:
            return eid
    return None


def is_open_cell(state: State, pos: Position) -> bool:
    """Not out of bounds, not a wall, not the player and not the exit."""
    cell = cell_at(state, pos)
    if cell is None or cell == Cell.WALL:
        return False
    return pos != agent_position(state) and pos != exit_position(state)


def is_empty_cell(state: State, pos: Position) -> bool:
    """Open and not currently holding a block."""
    return cell_at(state, pos) == Cell.EMPTY and is_open_cell(state, pos)


def empty_cells(state: State) -> List[Position]:
    """All cells a block could move into right now, row by row."""
    player = agent_position(state)
    goal = exit_position(state)
    return [
        pos
        for pos in all_positions(state)
        if state.cell[pos] == Cell.EMPTY and pos != player and pos != goal
    ]
