import random

import pytest

from shuffle_maze.components import Position
from shuffle_maze.levels.generator import generate
from shuffle_maze.systems.blocks import block_system, commit_targets, plan_targets
from shuffle_maze.types import Cell
from shuffle_maze.utils.grid import neighbors
from shuffle_maze.utils.validation import invariant_violations, is_consistent_state
from tests.test_utils import block_positions, make_board, with_seed


# Two empty cells, three blocks that can only reach those two cells
CROWDED = [
    "@###",
    "o.o#",
    "#o.#",
    "###E",
]


@pytest.mark.parametrize("seed", range(25))
def test_two_free_cells_three_blocks(seed: int) -> None:
    state, _, block_ids = make_board(CROWDED)
    before = {eid: state.position[eid] for eid in block_ids}

    new_state = block_system(state, random.Random(seed))

    after = block_positions(new_state)
    assert len(set(after)) == 3
    assert Position(1, 1) in after
    assert Position(2, 2) in after
    stayed = [eid for eid in block_ids if new_state.position[eid] == before[eid]]
    assert len(stayed) == 1
    assert is_consistent_state(new_state)


def test_boxed_in_block_teleports_to_free_cell() -> None:
    state, agent_id, (block_id,) = make_board(
        [
            "@....",
            "###..",
            "#o#..",
            "###..",
            "....E",
        ]
    )
    new_state = block_system(state, random.Random(3))
    dest = new_state.position[block_id]
    assert dest != Position(1, 2)
    assert state.cell[dest] == Cell.EMPTY
    assert dest not in (Position(0, 0), Position(4, 4))
    assert new_state.cell[Position(1, 2)] == Cell.EMPTY
    assert is_consistent_state(new_state)


def test_block_with_nowhere_to_go_stays() -> None:
    state, _, (block_id,) = make_board(
        [
            "@##",
            "#o#",
            "##E",
        ]
    )
    new_state = block_system(state, random.Random(0))
    assert new_state.position[block_id] == Position(1, 1)
    assert new_state.cell[Position(1, 1)] == Cell.BLOCK
    assert new_state.tick == state.tick + 1


def test_lone_block_prefers_adjacent_cell() -> None:
    state, _, (block_id,) = make_board(
        [
            "@....",
            ".....",
            "..o..",
            ".....",
            "....E",
        ]
    )
    for seed in range(10):
        new_state = block_system(state, random.Random(seed))
        assert new_state.position[block_id] in neighbors(Position(2, 2))


def test_single_shared_neighbor_is_claimed_once() -> None:
    state, _, (left, right) = make_board(
        [
            "@####",
            "#o.o#",
            "####E",
        ]
    )
    for seed in range(10):
        new_state = block_system(state, random.Random(seed))
        positions = {new_state.position[left], new_state.position[right]}
        assert Position(2, 1) in positions
        assert positions & {Position(1, 1), Position(3, 1)}
        assert is_consistent_state(new_state)


def test_blocks_avoid_player_and_exit() -> None:
    state, agent_id, block_ids = make_board(
        [
            "o@o",
            "#o#",
            "oEo",
        ]
    )
    for seed in range(20):
        new_state = block_system(state, random.Random(seed))
        after = block_positions(new_state)
        assert Position(1, 0) not in after
        assert Position(1, 2) not in after
        assert not invariant_violations(new_state)


def test_draw_positions_are_untouched() -> None:
    state, _, _ = make_board(
        [
            "@....",
            ".o.o.",
            "....E",
        ]
    )
    new_state = block_system(state, random.Random(1))
    assert new_state.draw_position == state.draw_position


def test_seeded_state_is_deterministic_without_rng() -> None:
    state, _, _ = make_board(
        [
            "@....",
            ".o.o.",
            "..o..",
            "....E",
        ]
    )
    state = with_seed(state, 42)
    assert block_positions(block_system(state)) == block_positions(block_system(state))


def test_empty_board_only_advances_tick() -> None:
    state, _, _ = make_board(["@.", ".E"])
    new_state = block_system(state, random.Random(0))
    assert new_state.tick == 1
    assert new_state.cell == state.cell


def test_contested_chain_falls_back_home() -> None:
    state, _, (a, b, c) = make_board(
        [
            "@....",
            ".ooo.",
            "....E",
        ]
    )
    # a aims at b's cell, b at c's cell, c has no plan and stays home
    targets = {a: Position(2, 1), b: Position(3, 1)}
    final = commit_targets(state, targets, random.Random(0))
    assert final == {a: Position(1, 1), b: Position(2, 1), c: Position(3, 1)}


def test_conflict_rescue_uses_free_neighbor() -> None:
    state, _, (a, b) = make_board(
        [
            "@....",
            ".o.o.",
            "....E",
        ]
    )
    targets = {a: Position(2, 1), b: Position(2, 1)}
    final = commit_targets(state, targets, random.Random(5))
    assert final[a] == Position(2, 1)
    assert final[b] in {Position(3, 0), Position(3, 2), Position(4, 1)}


def test_plan_gives_every_unboxed_block_a_target() -> None:
    state, _, block_ids = make_board(
        [
            "@.....",
            ".oo...",
            ".oo...",
            ".....E",
        ]
    )
    targets = plan_targets(state, random.Random(9))
    assert set(targets) == set(block_ids)


@pytest.mark.parametrize("seed", range(5))
def test_invariants_hold_over_many_ticks(seed: int) -> None:
    rng = random.Random(seed)
    state = generate(level=4, rows=8, cols=8, rng=rng)
    count = len(state.block)
    for _ in range(40):
        state = block_system(state, rng)
        assert invariant_violations(state) == []
        assert len(state.block) == count
