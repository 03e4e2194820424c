import pytest

from shuffle_maze.config import DEFAULT_CONFIG, GameConfig


@pytest.mark.parametrize(
    "level, interval",
    [(1, 2000), (2, 1850), (5, 1400), (11, 500), (12, 400), (40, 400)],
)
def test_block_interval(level: int, interval: int) -> None:
    assert DEFAULT_CONFIG.block_interval(level) == interval


@pytest.mark.parametrize("level, budget", [(1, 120), (3, 110), (19, 30), (50, 30)])
def test_time_budget(level: int, budget: int) -> None:
    assert DEFAULT_CONFIG.time_budget(level) == budget


def test_block_count_cap_uses_given_grid() -> None:
    assert DEFAULT_CONFIG.block_count(1) == 12
    assert DEFAULT_CONFIG.block_count(1, rows=3, cols=3) == 3
    assert DEFAULT_CONFIG.block_count(50) == 33


def test_wall_count_and_attempts() -> None:
    assert DEFAULT_CONFIG.wall_count(4) == 12
    assert GameConfig(wall_factor=1.5).wall_count(3) == 4
    assert DEFAULT_CONFIG.placement_attempts() == 200
    assert DEFAULT_CONFIG.placement_attempts(rows=2, cols=3) == 12
    assert GameConfig(placement_attempt_factor=0.25).placement_attempts(3, 3) == 2


@pytest.mark.parametrize(
    "overrides",
    [
        {"rows": 1, "cols": 1},
        {"rows": 0},
        {"wall_factor": -1},
        {"block_cap_divisor": 0},
        {"min_time": 0},
        {"base_time": 10, "min_time": 30},
        {"countdown_period_ms": 0},
        {"min_interval_ms": 0},
        {"base_interval_ms": 100, "min_interval_ms": 400},
        {"interpolation_rate": 0.0},
        {"interpolation_rate": 1.5},
    ],
)
def test_invalid_config(overrides) -> None:
    with pytest.raises(ValueError):
        GameConfig(**overrides)
