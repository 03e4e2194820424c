from shuffle_maze.components import Position
from shuffle_maze.systems.push import compute_destination, push_system
from shuffle_maze.types import Cell
from shuffle_maze.utils.validation import is_consistent_state
from tests.test_utils import assert_entity_positions, make_agent_block_wall_state


def test_push_block_into_empty_cell() -> None:
    state, agent_id, (block_id,) = make_agent_block_wall_state(
        agent_pos=(2, 2), block_positions=[(3, 2)]
    )
    new_state = push_system(state, agent_id, Position(3, 2))
    assert_entity_positions(new_state, {agent_id: (3, 2), block_id: (4, 2)})
    assert new_state.cell[Position(3, 2)] == Cell.EMPTY
    assert new_state.cell[Position(4, 2)] == Cell.BLOCK
    assert new_state.turn == state.turn + 1
    assert is_consistent_state(new_state)


def test_push_blocked_by_wall_returns_same_state() -> None:
    state, agent_id, _ = make_agent_block_wall_state(
        agent_pos=(2, 2), block_positions=[(3, 2)], wall_positions=[(4, 2)]
    )
    assert push_system(state, agent_id, Position(3, 2)) is state


def test_push_blocked_by_another_block() -> None:
    state, agent_id, _ = make_agent_block_wall_state(
        agent_pos=(1, 2), block_positions=[(2, 2), (3, 2)]
    )
    assert push_system(state, agent_id, Position(2, 2)) is state


def test_push_blocked_by_grid_edge() -> None:
    state, agent_id, _ = make_agent_block_wall_state(
        agent_pos=(3, 0), block_positions=[(4, 0)], exit_pos=(0, 4)
    )
    assert push_system(state, agent_id, Position(4, 0)) is state


def test_push_onto_exit_is_rejected() -> None:
    state, agent_id, _ = make_agent_block_wall_state(
        agent_pos=(2, 4), block_positions=[(3, 4)], exit_pos=(4, 4)
    )
    assert push_system(state, agent_id, Position(3, 4)) is state


def test_push_without_block_returns_same_state() -> None:
    state, agent_id, _ = make_agent_block_wall_state(agent_pos=(2, 2))
    assert push_system(state, agent_id, Position(3, 2)) is state


def test_push_moves_only_the_targeted_block() -> None:
    state, agent_id, (near, far) = make_agent_block_wall_state(
        agent_pos=(0, 1), block_positions=[(1, 1), (1, 3)]
    )
    new_state = push_system(state, agent_id, Position(1, 1))
    assert_entity_positions(new_state, {agent_id: (1, 1), near: (2, 1), far: (1, 3)})


def test_compute_destination_follows_movement_axis() -> None:
    assert compute_destination(Position(2, 2), Position(2, 1)) == Position(2, 0)
    assert compute_destination(Position(2, 2), Position(1, 2)) == Position(0, 2)
