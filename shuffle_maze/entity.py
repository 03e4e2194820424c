"""Entity id generation.

Every *thing* on the board (player, exit, each mobile block) is an
``EntityID`` plus zero or more component dataclasses stored in persistent
maps on :class:`shuffle_maze.state.State`. Static walls are not entities;
they only exist as ``Cell.WALL`` tags.

IDs are allocated from a process-local monotonic counter and never
recycled. Block commit order in the scheduler follows ascending ids, so
blocks created earlier always commit first.
"""

from typing import Iterator

from shuffle_maze.types import EntityID


def entity_id_generator() -> Iterator[EntityID]:
    """Yield an infinite sequence of monotonically increasing entity IDs."""
    eid = 0
    while True:
        yield eid
        eid += 1


_entity_id_gen = entity_id_generator()


def new_entity_id() -> EntityID:
    """Return a newly allocated unique entity ID."""
    return next(_entity_id_gen)

