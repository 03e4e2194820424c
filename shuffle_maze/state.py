"""Core immutable `State` dataclass.

This module defines the frozen :class:`State` object that represents the
whole board at one instant: the cell matrix, the player, the exit and every
mobile block. All systems are pure functions that take a previous ``State``
(plus inputs such as an ``Action`` or a random source) and return a *new*
``State``; nothing is mutated in place. A system that rejects its input
returns the very same object, so callers can detect "nothing happened" with
an identity check.

Design notes:

* ``cell`` holds exactly one :class:`shuffle_maze.types.Cell` per grid
    coordinate. Walls only exist there. Blocks exist both there (as
    ``Cell.BLOCK``) and as entities with a ``MobileBlock`` marker; the two
    views are kept in lockstep by every system that moves a block.
* Component stores are **persistent maps** (``pyrsistent.PMap``) keyed by
    ``EntityID``. Absence of a key means the entity does not have that
    component.
* ``draw_position`` is cosmetic. Only the interpolation system writes it
    and no rule reads it.
* ``win`` is set by the terminal system when the player stands on the exit.
    The level state machine reacts by generating a fresh ``State``.
"""

from dataclasses import dataclass
from typing import Any, Optional
from pyrsistent import PMap, pmap

from shuffle_maze.components import Agent, DrawPosition, Exit, MobileBlock, Position
from shuffle_maze.types import Cell, EntityID


@dataclass(frozen=True)
class State:
    """Immutable board state.

    Attributes:
        width (int): Grid width in cells (``cols``).
        height (int): Grid height in cells (``rows``).
        cell (PMap[Position, Cell]): Classification of every coordinate.
        agent (PMap[EntityID, Agent]): Player marker components.
        exit (PMap[EntityID, Exit]): Exit marker components.
        block (PMap[EntityID, MobileBlock]): Mobile block marker components.
        position (PMap[EntityID, Position]): Logical positions of all entities.
        draw_position (PMap[EntityID, DrawPosition]): Render coordinates of blocks.
        level (int): Level number this board was generated for (1-based).
        time_limit (int): Countdown budget for this level, in time units.
        turn (int): Accepted player moves so far.
        tick (int): Block scheduler passes so far.
        win (bool): True once the player stands on the exit.
        seed (int | None): Seed the board was generated from, if any.
    """

    # Level
    width: int
    height: int
    cell: PMap[Position, Cell] = pmap()

    # Components
    agent: PMap[EntityID, Agent] = pmap()
    exit: PMap[EntityID, Exit] = pmap()
    block: PMap[EntityID, MobileBlock] = pmap()
    position: PMap[EntityID, Position] = pmap()
    draw_position: PMap[EntityID, DrawPosition] = pmap()

    # Status
    level: int = 1
    time_limit: int = 0
    turn: int = 0
    tick: int = 0
    win: bool = False

    # RNG
    seed: Optional[int] = None

    @property
    def description(self) -> PMap[str, Any]:
        """Sparse serialization of non-empty fields.

        Skips the cell matrix and empty component maps to keep diagnostics
        short; see :func:`shuffle_maze.utils.render.render_ascii` for a
        readable view of the board itself.
        """
        description: PMap[str, Any] = pmap()
        for field in self.__dataclass_fields__:
            if field == "cell":
                continue
            value = getattr(self, field)
            if isinstance(value, type(pmap())) and len(value) == 0:
                continue
            description = description.set(field, value)
        return description


def create_empty_state(width: int, height: int, **kwargs: Any) -> State:
    """Return a state whose every cell is ``Cell.EMPTY`` and has no entities.

    Raises:
        ValueError: If the grid has fewer than two cells (player start and
            exit must differ) or a dimension is not positive.
    """
    if width < 1 or height < 1 or width * height < 2:
        raise ValueError(f"Grid must have at least two cells, got {width}x{height}")
    cell = pmap(
        {Position(x, y): Cell.EMPTY for y in range(height) for x in range(width)}
    )
    return State(width=width, height=height, cell=cell, **kwargs)
