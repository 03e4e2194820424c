from dataclasses import replace

import pytest

from shuffle_maze.components import DrawPosition, Position
from shuffle_maze.systems.interpolation import interpolation_system
from tests.test_utils import make_agent_block_wall_state


def test_draw_position_decays_toward_logical_position() -> None:
    state, _, (block_id,) = make_agent_block_wall_state(
        agent_pos=(0, 0), block_positions=[(3, 1)]
    )
    state = replace(
        state, draw_position=state.draw_position.set(block_id, DrawPosition(1.0, 1.0))
    )
    new_state = interpolation_system(state, rate=0.2)
    draw = new_state.draw_position[block_id]
    assert draw.x == pytest.approx(1.4)
    assert draw.y == pytest.approx(1.0)
    assert new_state.position == state.position


def test_converges_after_many_frames() -> None:
    state, _, (block_id,) = make_agent_block_wall_state(
        agent_pos=(0, 0), block_positions=[(4, 2)]
    )
    state = replace(
        state, draw_position=state.draw_position.set(block_id, DrawPosition(0.0, 0.0))
    )
    for _ in range(100):
        state = interpolation_system(state)
    draw = state.draw_position[block_id]
    assert draw.x == pytest.approx(4.0, abs=1e-6)
    assert draw.y == pytest.approx(2.0, abs=1e-6)


def test_rate_one_snaps_and_missing_draw_position_is_filled() -> None:
    state, _, (block_id,) = make_agent_block_wall_state(
        agent_pos=(0, 0), block_positions=[(2, 3)]
    )
    state = replace(state, draw_position=state.draw_position.remove(block_id))
    new_state = interpolation_system(state, rate=1.0)
    assert new_state.draw_position[block_id] == DrawPosition.at(Position(2, 3))
