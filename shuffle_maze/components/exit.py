from dataclasses import dataclass


@dataclass(frozen=True)
class Exit:
    """Marks the level exit.

    The player wins the level by standing on the exit's position. The
    exit's cell is always tagged ``Cell.EMPTY``.
    """

    pass
