"""Draw-position interpolation system.

Eases each block's :class:`DrawPosition` toward its logical
:class:`Position` by a fixed fraction per render frame, so a block that
the scheduler (or a push) relocated glides there over several frames
instead of jumping. Purely cosmetic: no rule reads ``draw_position``.
"""

from dataclasses import replace

from shuffle_maze.components import DrawPosition
from shuffle_maze.state import State


def interpolation_system(state: State, rate: float = 0.2) -> State:
    """Move every block's draw position ``rate`` of the way to its target."""
    state_draw_position = state.draw_position
    for eid in state.block:
        pos = state.position[eid]
        draw = state_draw_position.get(eid, DrawPosition.at(pos))
        state_draw_position = state_draw_position.set(
            eid,
            DrawPosition(
                draw.x + (pos.x - draw.x) * rate,
                draw.y + (pos.y - draw.y) * rate,
            ),
        )
    return replace(state, draw_position=state_draw_position)
