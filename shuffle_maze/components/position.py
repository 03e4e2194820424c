"""Position components.

``Position`` is the authoritative integer coordinate used by every rule.
``DrawPosition`` is the continuous coordinate a renderer draws a block at;
it decays toward the logical ``Position`` once per render frame and is
never read by game logic.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Grid coordinate.

    Attributes:
        x: Column index (0 at left).
        y: Row index (0 at top).
    """

    x: int
    y: int


@dataclass(frozen=True)
class DrawPosition:
    """Interpolated render coordinate (in cell units)."""

    x: float
    y: float

    @classmethod
    def at(cls, pos: Position) -> "DrawPosition":
        return cls(float(pos.x), float(pos.y))
