"""Player (agent) movement system.

Moves the agent one cell into ``next_pos`` when that cell is in bounds and
tagged ``Cell.EMPTY``. Walls and blocks stop it; pushing is handled by
:mod:`shuffle_maze.systems.push`, which the reducer tries first.

Returns the original ``State`` if movement is not possible; otherwise a new
``State`` with the updated position and turn counter.
"""

from dataclasses import replace

from shuffle_maze.components import Position
from shuffle_maze.state import State
from shuffle_maze.types import Cell, EntityID
from shuffle_maze.utils.grid import cell_at


def movement_system(state: State, entity_id: EntityID, next_pos: Position) -> State:
    """Move agent one tile if allowed.

    Args:
        state (State): Current state.
        entity_id (EntityID): Agent entity id (ignored if not an agent).
        next_pos (Position): Desired destination position.

    Returns:
        State: Same state if blocked / invalid or updated with new position.
    """
    if entity_id not in state.agent:
        return state

    # Out of bounds maps to None, walls and blocks to their own tags
    if cell_at(state, next_pos) != Cell.EMPTY:
        return state

    return replace(
        state,
        position=state.position.set(entity_id, next_pos),
        turn=state.turn + 1,
    )
