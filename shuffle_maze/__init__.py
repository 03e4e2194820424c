"""Shuffle Maze: a tile-grid puzzle-action engine.

A player token walks toward the exit of a rectangular grid while mobile
blocks reshuffle themselves on a timer. The engine is split the same way
as any ECS reducer: an immutable :class:`shuffle_maze.state.State`, pure
*systems* that map a state to a new state, and a thin stateful
:class:`shuffle_maze.game.Game` that owns the clock and swaps the current
state reference.
"""
