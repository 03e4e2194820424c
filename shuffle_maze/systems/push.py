"""Push interaction system.

Lets the agent shove a single adjacent mobile block one cell further along
the movement axis. The destination must be in bounds, tagged
``Cell.EMPTY``, and be neither the exit nor the agent's own cell. A block
with another block (or a wall, or the edge) behind it cannot be pushed;
chained pushes are not supported.
"""

from dataclasses import replace
from typing import Optional
from shuffle_maze.components import Position
from shuffle_maze.state import State
from shuffle_maze.types import Cell, EntityID
from shuffle_maze.utils.grid import block_at, exit_position, is_in_bounds


def compute_destination(current_pos: Position, next_pos: Position) -> Position:
    """Return the cell beyond ``next_pos`` as seen from ``current_pos``."""
    dx = next_pos.x - current_pos.x
    dy = next_pos.y - current_pos.y
    return Position(next_pos.x + dx, next_pos.y + dy)


def can_receive_push(state: State, pusher_pos: Position, push_to: Position) -> bool:
    """True if a pushed block may land on ``push_to``."""
    if not is_in_bounds(state, push_to):
        return False
    if state.cell[push_to] != Cell.EMPTY:
        return False
    return push_to != exit_position(state) and push_to != pusher_pos


def push_system(state: State, eid: EntityID, next_pos: Position) -> State:
    """Attempt to push the block at ``next_pos``.

    Args:
        state (State): Current immutable state.
        eid (EntityID): Entity initiating the push (must have a position).
        next_pos (Position): Adjacent position the entity is trying to move into.

    Returns:
        State: Updated state with moved positions and retagged cells if the
        push succeeds; the original state otherwise.
    """
    current_pos: Optional[Position] = state.position.get(eid)
    if current_pos is None:
        return state

    block_id = block_at(state, next_pos)
    if block_id is None:
        return state  # Nothing to push

    push_to = compute_destination(current_pos, next_pos)
    if not can_receive_push(state, current_pos, push_to):
        return state  # Push not possible

    new_position = state.position.set(block_id, push_to).set(eid, next_pos)
    new_cell = state.cell.set(next_pos, Cell.EMPTY).set(push_to, Cell.BLOCK)
    return replace(state, position=new_position, cell=new_cell, turn=state.turn + 1)
