"""State reducer for player actions.

The exported :func:`step` is the movement rule engine: it turns one
``Action`` into a new :class:`shuffle_maze.state.State`. It is pure and
never raises for an illegal move; a rejected move (wall, edge, blocked
push) simply returns the *same* state object, so repeating it is a no-op
as well.

Ordering:

1. Compute the adjacent target cell from the action's delta.
2. ``push_system`` gets the first chance (target holds a block).
3. Otherwise ``movement_system`` walks into an empty cell.
4. After an accepted move ``win_system`` flags a player standing on the
   exit; the level state machine takes it from there.

Autonomous block movement is *not* part of a step. It runs on its own
timer through :func:`shuffle_maze.systems.blocks.block_system`.
"""

from typing import Optional
from shuffle_maze.actions import ACTION_DELTAS, Action
from shuffle_maze.components import Position
from shuffle_maze.state import State
from shuffle_maze.systems.movement import movement_system
from shuffle_maze.systems.push import push_system
from shuffle_maze.systems.terminal import win_system
from shuffle_maze.types import EntityID
from shuffle_maze.utils.grid import agent_id_of


def step(state: State, action: Action, agent_id: Optional[EntityID] = None) -> State:
    """Apply one player action.

    Args:
        state (State): Previous immutable state.
        action (Action): Player action enum value to apply.
        agent_id (EntityID | None): Explicit agent entity id. If ``None`` the
            first entity in ``state.agent`` is used.

    Returns:
        State: Next state, or ``state`` itself when the move was rejected,
        the action was ``WAIT`` or the level is already won.

    Raises:
        ValueError: If there is no agent or the action is not recognized.
    """
    if agent_id is None and (agent_id := agent_id_of(state)) is None:
        raise ValueError("State contains no agent")

    if action == Action.WAIT:
        return state
    if action not in ACTION_DELTAS:
        raise ValueError(f"Action is not valid: {action!r}")

    if state.win:
        return state

    current_pos = state.position.get(agent_id)
    if current_pos is None:
        return state

    dx, dy = ACTION_DELTAS[action]
    next_pos = Position(current_pos.x + dx, current_pos.y + dy)

    pushed_state = push_system(state, agent_id, next_pos)
    if pushed_state is not state:
        return win_system(pushed_state, agent_id)

    moved_state = movement_system(state, agent_id, next_pos)
    if moved_state is state:
        return state
    return win_system(moved_state, agent_id)
