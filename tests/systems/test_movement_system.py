import pytest

from shuffle_maze.components import Position
from shuffle_maze.systems.movement import movement_system
from tests.test_utils import make_agent_block_wall_state


def test_agent_moves_into_empty_cell() -> None:
    state, agent_id, _ = make_agent_block_wall_state(agent_pos=(1, 1))
    new_state = movement_system(state, agent_id, Position(1, 2))
    assert new_state.position[agent_id] == Position(1, 2)
    assert new_state.turn == 1


@pytest.mark.parametrize(
    "target, walls, blocks",
    [
        ((1, 0), [(1, 0)], []),  # wall
        ((2, 1), [], [(2, 1)]),  # block (push is a separate system)
        ((-1, 1), [], []),  # left edge
        ((1, 5), [], []),  # bottom edge
    ],
)
def test_agent_blocked(target, walls, blocks) -> None:
    agent_pos = (1, 1) if target != (1, 5) else (1, 4)
    state, agent_id, _ = make_agent_block_wall_state(
        agent_pos=agent_pos,
        wall_positions=walls,
        block_positions=blocks,
        exit_pos=(4, 0),
    )
    assert movement_system(state, agent_id, Position(*target)) is state


def test_non_agent_entities_are_ignored() -> None:
    state, _, (block_id,) = make_agent_block_wall_state(
        agent_pos=(0, 0), block_positions=[(2, 2)]
    )
    assert movement_system(state, block_id, Position(2, 3)) is state
