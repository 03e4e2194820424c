"""Mobile block marker component.

Each ``MobileBlock`` entity corresponds to exactly one cell tagged
``Cell.BLOCK`` at its ``Position``. Blocks are pushed by the player and
reshuffled by :func:`shuffle_maze.systems.blocks.block_system`.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MobileBlock:
    """Marker (no fields)."""

    pass
