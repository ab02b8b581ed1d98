import pytest

from flappy_strike.config import DEFAULT_SETTINGS, ConfigError, GameSettings
from flappy_strike.world import GameWorld


def test_default_settings_are_valid() -> None:
    assert DEFAULT_SETTINGS.validate() is DEFAULT_SETTINGS
    assert DEFAULT_SETTINGS.max_top_height == 600 - 170 - 100


@pytest.mark.parametrize(
    "overrides",
    [
        {"gap_size": 0},
        {"gap_size": 400, "min_pipe_height": 100},  # 400 + 200 == 600
        {"min_pipe_height": -1},
        {"pipe_spawn_rate": 0},
        {"projectile_speed": 0},
        {"crate_chance": 1.5},
    ],
)
def test_degenerate_settings_are_rejected(overrides: dict) -> None:
    with pytest.raises(ConfigError):
        GameSettings(**overrides).validate()


def test_world_creation_validates() -> None:
    with pytest.raises(ValueError):
        GameWorld.create(GameSettings(gap_size=500))
