"""shuffle_maze.components
=========================

Aggregate import surface for the component dataclasses used by the engine.

Components are immutable ``@dataclass`` value objects keyed by entity id in
the persistent stores of :class:`shuffle_maze.state.State`. Presence of a
marker component (``Agent``, ``Exit``, ``MobileBlock``) is what gives an
entity its role; ``Position`` and ``DrawPosition`` carry coordinates::

    from shuffle_maze.components import Position, MobileBlock
"""

from .agent import Agent
from .exit import Exit
from .mobile_block import MobileBlock
from .position import DrawPosition, Position

__all__ = [
    "Agent",
    "DrawPosition",
    "Exit",
    "MobileBlock",
    "Position",
]
