"""Terminal condition system.

Sets ``state.win`` once the agent stands on the exit. The flag is a
side-channel indicator: the level state machine reads it after every
accepted move and regenerates the board.
"""

from dataclasses import replace
from shuffle_maze.state import State
from shuffle_maze.types import EntityID
from shuffle_maze.utils.grid import exit_position


def reached_exit(state: State, agent_id: EntityID) -> bool:
    """Agent stands on the exit position."""
    pos = state.position.get(agent_id)
    return pos is not None and pos == exit_position(state)


def win_system(state: State, agent_id: EntityID) -> State:
    """Set ``win`` flag if the agent reached the exit (idempotent)."""
    if state.win:
        return state
    if reached_exit(state, agent_id):
        return replace(state, win=True)
    return state
