"""Procedural level generator.

Builds a complete :class:`shuffle_maze.state.State` for a level: a cell
matrix with scattered static walls, the player in the top-left corner, the
exit in the opposite corner, a set of mobile blocks, and the level's
countdown budget. Difficulty grows with the level number through
:class:`shuffle_maze.config.GameConfig`.

Generation never fails for lack of room. Wall draws that hit the player
start or the exit are skipped and duplicate draws overwrite each other,
so the net wall count can be lower than requested. Block placement gives
up after a fixed number of random draws and keeps whatever it placed.
"""

import logging
import random
from dataclasses import replace
from typing import Optional, Tuple

from shuffle_maze.components import Agent, DrawPosition, Exit, MobileBlock, Position
from shuffle_maze.config import DEFAULT_CONFIG, GameConfig
from shuffle_maze.entity import new_entity_id
from shuffle_maze.state import State, create_empty_state
from shuffle_maze.types import Cell, EntityID

logger = logging.getLogger(__name__)


def start_and_exit(width: int, height: int) -> Tuple[Position, Position]:
    """Player start and exit: opposite corners of the grid."""
    return Position(0, 0), Position(width - 1, height - 1)


def place_walls(
    state: State,
    num_walls: int,
    rng: random.Random,
    reserved: Tuple[Position, ...] = (),
) -> State:
    state_cell = state.cell
    for _ in range(num_walls):
        pos = Position(rng.randrange(state.width), rng.randrange(state.height))
        if pos in reserved:
            continue
        state_cell = state_cell.set(pos, Cell.WALL)
    return replace(state, cell=state_cell)


def place_agent(state: State, position: Position) -> State:
    agent_id: EntityID = new_entity_id()
    return replace(
        state,
        agent=state.agent.set(agent_id, Agent()),
        position=state.position.set(agent_id, position),
    )


def place_exit(state: State, position: Position) -> State:
    exit_id: EntityID = new_entity_id()
    return replace(
        state,
        exit=state.exit.set(exit_id, Exit()),
        position=state.position.set(exit_id, position),
    )


def place_blocks(
    state: State,
    num_blocks: int,
    max_attempts: int,
    rng: random.Random,
    reserved: Tuple[Position, ...] = (),
) -> State:
    """Drop up to ``num_blocks`` blocks on random empty cells.

    Each attempt draws one uniformly random coordinate; draws landing on a
    wall, an existing block or a reserved cell are wasted. At most
    ``max_attempts`` draws are made.
    """
    state_cell = state.cell
    state_block = state.block
    state_position = state.position
    state_draw_position = state.draw_position

    placed = 0
    attempts = 0
    while placed < num_blocks and attempts < max_attempts:
        attempts += 1
        pos = Position(rng.randrange(state.width), rng.randrange(state.height))
        if state_cell[pos] != Cell.EMPTY or pos in reserved:
            continue
        block_id: EntityID = new_entity_id()
        state_cell = state_cell.set(pos, Cell.BLOCK)
        state_block = state_block.set(block_id, MobileBlock())
        state_position = state_position.set(block_id, pos)
        state_draw_position = state_draw_position.set(block_id, DrawPosition.at(pos))
        placed += 1

    return replace(
        state,
        cell=state_cell,
        block=state_block,
        position=state_position,
        draw_position=state_draw_position,
    )


def generate(
    level: int,
    rows: int,
    cols: int,
    rng: Optional[random.Random] = None,
    config: GameConfig = DEFAULT_CONFIG,
    num_walls: Optional[int] = None,
    num_blocks: Optional[int] = None,
    seed: Optional[int] = None,
) -> State:
    """Generate a fresh board for ``level``.

    Args:
        level (int): 1-based level number driving wall/block counts and time.
        rows (int): Grid height.
        cols (int): Grid width.
        rng (random.Random | None): Random source; defaults to
            ``random.Random(seed)``.
        config (GameConfig): Difficulty curves. Its own ``rows``/``cols``
            are ignored in favor of the explicit arguments.
        num_walls (int | None): Override for the number of wall draws.
        num_blocks (int | None): Override for the number of requested blocks.
        seed (int | None): Recorded on the state (drives the scheduler's
            default RNG) and used to seed ``rng`` when none is given.

    Returns:
        State: New board; the previous one is simply dropped by the caller.

    Raises:
        ValueError: If ``level`` is below 1 or the grid has fewer than two cells.
    """
    if level < 1:
        raise ValueError(f"Level must be at least 1, got {level}")
    if rng is None:
        rng = random.Random(seed)

    state = create_empty_state(
        cols,
        rows,
        level=level,
        time_limit=config.time_budget(level),
        seed=seed,
    )
    start, goal = start_and_exit(cols, rows)

    wall_draws = config.wall_count(level) if num_walls is None else num_walls
    state = place_walls(state, wall_draws, rng, reserved=(start, goal))

    block_target = (
        config.block_count(level, rows, cols) if num_blocks is None else num_blocks
    )
    state = place_blocks(
        state,
        block_target,
        config.placement_attempts(rows, cols),
        rng,
        reserved=(start, goal),
    )

    state = place_agent(state, start)
    state = place_exit(state, goal)

    logger.debug(
        "Generated level %d (%dx%d): %d walls, %d/%d blocks, %d time units",
        level,
        cols,
        rows,
        sum(1 for cell in state.cell.values() if cell == Cell.WALL),
        len(state.block),
        block_target,
        state.time_limit,
    )
    return state
