"""Board invariant checks.

Every system must leave the board in a state where:

1. No two entities (player, blocks) share a coordinate.
2. No entity stands on a wall.
3. The exit cell is neither a wall nor a block.
4. ``Cell.BLOCK`` tags and block positions match one to one.

plus the structural basics (one player, one exit, everything in bounds).
These helpers are used by tests and by the game's debug logging.
"""

from collections import Counter
from typing import List

from shuffle_maze.state import State
from shuffle_maze.types import Cell
from shuffle_maze.utils.grid import agent_position, exit_position, is_in_bounds


def invariant_violations(state: State) -> List[str]:
    """Return a human readable description of every broken invariant."""
    problems: List[str] = []

    player = agent_position(state)
    goal = exit_position(state)
    if len(state.agent) != 1 or player is None:
        problems.append(f"expected exactly one positioned agent, got {len(state.agent)}")
    if len(state.exit) != 1 or goal is None:
        problems.append(f"expected exactly one positioned exit, got {len(state.exit)}")

    occupants = [state.position[eid] for eid in state.agent if eid in state.position]
    occupants += [state.position[eid] for eid in state.block if eid in state.position]
    for pos, count in Counter(occupants).items():
        if count > 1:
            problems.append(f"{count} entities share {pos}")
    for pos in occupants:
        if not is_in_bounds(state, pos):
            problems.append(f"entity out of bounds at {pos}")
        elif state.cell[pos] == Cell.WALL:
            problems.append(f"entity on wall at {pos}")

    if goal is not None:
        if not is_in_bounds(state, goal):
            problems.append(f"exit out of bounds at {goal}")
        elif state.cell[goal] != Cell.EMPTY:
            problems.append(f"exit cell is {state.cell[goal]}")
    if player is not None and is_in_bounds(state, player):
        if state.cell[player] != Cell.EMPTY:
            problems.append(f"player cell is {state.cell[player]}")

    tagged = {pos for pos, cell in state.cell.items() if cell == Cell.BLOCK}
    block_positions = {
        state.position[eid] for eid in state.block if eid in state.position
    }
    if len(block_positions) != len(state.block):
        problems.append("block entities without a distinct position")
    for pos in tagged - block_positions:
        problems.append(f"block cell at {pos} has no block entity")
    for pos in block_positions - tagged:
        problems.append(f"block entity at {pos} has no block cell")

    return problems


def is_consistent_state(state: State) -> bool:
    """True if ``state`` satisfies every board invariant."""
    return not invariant_violations(state)
