"""Autonomous block scheduler.

Each scheduler tick reassigns every mobile block to a new cell, trying to
move as many blocks as possible while keeping the board legal. The pass is
greedy and order dependent; it is not an optimal assignment and is not
meant to be one (the pacing of a level depends on this exact behavior).

Algorithm:

1. *Candidate pool*: every currently empty cell (see
   :func:`shuffle_maze.utils.grid.is_empty_cell`), shuffled.
2. *Local phase*: blocks in random order each take a random empty,
   not-yet-claimed neighbor. Claimed cells leave the pool.
3. *Fallback phase*: blocks still without a target pop a cell from the
   remaining pool. This may be far away ("teleport").
4. *Contested phase*: blocks still without a target pick a random open
   neighbor even if another block stands there now.
5. *Commit pass*: old block cells are cleared, then blocks commit in
   entity order. A block whose target was already claimed this tick tries
   a rescue among the empty, unclaimed neighbors of its original cell and
   otherwise stays home.

Staying home can collide with a block that committed onto that home cell
during the contested phase; that block is sent back to its own home, and
so on down the chain (see :func:`_pin_home`). Every block therefore ends
the tick on a distinct legal cell.

Draw positions are not touched; the interpolation system eases them
toward the new logical positions frame by frame.
"""

import logging
import random
from dataclasses import replace
from typing import Dict, List, Optional, Set

from shuffle_maze.components import Position
from shuffle_maze.state import State
from shuffle_maze.types import Cell, EntityID
from shuffle_maze.utils.grid import (
    empty_cells,
    is_empty_cell,
    is_open_cell,
    neighbors,
)

logger = logging.getLogger(__name__)


def _tick_rng(state: State) -> random.Random:
    """Deterministic RNG per (seed, level, tick) when the board is seeded."""
    if state.seed is None:
        return random.Random()
    return random.Random(hash((state.seed, state.level, state.tick)))


def _shuffled(items: List[Position], rng: random.Random) -> List[Position]:
    items = list(items)
    rng.shuffle(items)
    return items


def plan_targets(
    state: State, rng: random.Random
) -> Dict[EntityID, Position]:
    """Run the local, fallback and contested phases.

    Returns:
        Dict[EntityID, Position]: Tentative target per block. Blocks with no
        open neighbor at all are absent. Targets from the contested phase
        may coincide with each other or with other blocks' cells.
    """
    origin = state.position
    pool = empty_cells(state)
    rng.shuffle(pool)

    targets: Dict[EntityID, Position] = {}
    reserved: Set[Position] = set()

    order = sorted(state.block)
    rng.shuffle(order)
    for eid in order:
        options = [
            pos
            for pos in neighbors(origin[eid])
            if pos not in reserved and is_empty_cell(state, pos)
        ]
        rng.shuffle(options)
        if options:
            targets[eid] = options[0]
            reserved.add(options[0])

    pool = [pos for pos in pool if pos not in reserved]
    for eid in sorted(state.block):
        if eid in targets:
            continue
        if not pool:
            break
        targets[eid] = pool.pop()

    for eid in sorted(state.block):
        if eid in targets:
            continue
        options = [pos for pos in neighbors(origin[eid]) if is_open_cell(state, pos)]
        if options:
            targets[eid] = rng.choice(options)

    return targets


def _pin_home(
    eid: EntityID,
    home: Dict[EntityID, Position],
    claims: Dict[Position, EntityID],
    final: Dict[EntityID, Position],
) -> None:
    """Keep ``eid`` on its original cell, evicting whoever claimed it."""
    current: Optional[EntityID] = eid
    while current is not None:
        cell = home[current]
        evicted = claims.get(cell)
        claims[cell] = current
        final[current] = cell
        current = evicted if evicted != current else None


def commit_targets(
    state: State,
    targets: Dict[EntityID, Position],
    rng: random.Random,
) -> Dict[EntityID, Position]:
    """Resolve tentative targets into distinct final positions."""
    home = {eid: state.position[eid] for eid in state.block}
    claims: Dict[Position, EntityID] = {}
    final: Dict[EntityID, Position] = {}
    pending_homes = set(home.values())

    for eid in sorted(state.block):
        pending_homes.discard(home[eid])
        target = targets.get(eid)
        if target is None:
            _pin_home(eid, home, claims, final)
            continue
        if target not in claims:
            claims[target] = eid
            final[eid] = target
            continue

        # Rescue: cells vacated this tick count as empty, unprocessed blocks do not
        rescue: Optional[Position] = None
        for pos in _shuffled(neighbors(home[eid]), rng):
            if (
                is_open_cell(state, pos)
                and pos not in claims
                and pos not in pending_homes
            ):
                rescue = pos
                break
        if rescue is None:
            _pin_home(eid, home, claims, final)
        else:
            claims[rescue] = eid
            final[eid] = rescue

    return final


def block_system(state: State, rng: Optional[random.Random] = None) -> State:
    """Advance every mobile block by one scheduler tick.

    Args:
        state (State): Current state.
        rng (random.Random | None): Random source for shuffles. Defaults to
            one derived from ``state.seed`` and ``state.tick`` (or an
            unseeded one when the board has no seed).

    Returns:
        State: New state with relocated blocks, retagged cells and the tick
        counter advanced.
    """
    if rng is None:
        rng = _tick_rng(state)
    if not state.block:
        return replace(state, tick=state.tick + 1)

    targets = plan_targets(state, rng)
    final = commit_targets(state, targets, rng)

    state_cell = state.cell
    state_position = state.position
    for eid in state.block:
        state_cell = state_cell.set(state.position[eid], Cell.EMPTY)
    for eid, pos in final.items():
        state_cell = state_cell.set(pos, Cell.BLOCK)
        state_position = state_position.set(eid, pos)

    moved = sum(1 for eid, pos in final.items() if pos != state.position[eid])
    logger.debug(
        "Block tick %d: %d/%d blocks moved", state.tick, moved, len(state.block)
    )
    return replace(
        state, cell=state_cell, position=state_position, tick=state.tick + 1
    )
