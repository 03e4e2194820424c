"""Common type aliases and enumerations.

``Cell`` is the classification stored in ``State.cell`` for every grid
coordinate. Player and exit occupancy are tracked out-of-band through
their ``Position`` components, never as a ``Cell`` value.
"""

from enum import StrEnum, auto

EntityID = int


class Cell(StrEnum):
    """Per-coordinate grid classification."""

    EMPTY = auto()
    WALL = auto()
    BLOCK = auto()


class GamePhase(StrEnum):
    """Level/round state machine phases."""

    PLAYING = auto()
    LEVEL_TRANSITION = auto()
    TIME_UP = auto()


class GameEvent(StrEnum):
    """User-facing notable events emitted by the state machine."""

    LEVEL_UP = auto()
    TIME_UP = auto()
