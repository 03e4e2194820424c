"""Agent marker component.

Presence of :class:`Agent` designates the controllable player entity. Only
one agent exists per level; the reducer picks the first one if asked
without an explicit id.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Agent:
    """Marker (no fields)."""

    pass
