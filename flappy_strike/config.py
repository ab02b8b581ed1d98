from __future__ import annotations

"""Game configuration constants for Flappy Strike."""

from dataclasses import dataclass

# Game configuration
WINDOW_WIDTH = 400
WINDOW_HEIGHT = 600
FPS = 60

# Bird
BIRD_X = 50
BIRD_SIZE = 40
# Hitbox scaling: the player's collision box is 80% of the sprite, centered.
# Pipes and crates are tested at full size.
HITBOX_MARGIN = 0.8
MAX_TILT_DEG = 45.0
TILT_PER_VELOCITY = 5.7  # degrees of tilt per px/tick of vertical velocity

# Out-of-bounds band above and below the play area before the bird dies
BOUNDS_TOLERANCE = 50

# Pipes
PIPE_WIDTH = 70
MIN_PIPE_HEIGHT = 100

# Crates
CRATE_SIZE = 40
CRATE_BONUS = 5
CRATE_CHANCE = 0.6
CRATE_OFFSET_X = 150  # spawned this far right of the new pipe, halfway to the next one

# Projectiles (one tick = one frame)
PROJECTILE_SPEED = 12.0  # px/tick
PROJECTILE_RADIUS = 4
FIRE_RATE_MS = 150.0  # cooldown while the fire key is held

# Timers
COUNTDOWN_STEPS = 3
COUNTDOWN_STEP_MS = 800.0
SHAKE_INTENSITY = 10.0  # px, peak-to-peak
SHAKE_DURATION_MS = 300.0
GAME_OVER_OVERLAY_DELAY_MS = 400.0

# Assets
ASSET_FILES = {
    "bird": "yellowbird-midflap.png",
    "pipe": "pipe-green.png",
    "bg": "background-day.png",
}
ASSET_BASE_URL = "https://raw.githubusercontent.com/samuelcust/flappy-bird-assets/master/sprites/"
ASSET_TIMEOUT_MS = 2000.0
ASSET_FETCH_TIMEOUT_S = 10.0

# Roast
ROAST_MODEL = "gemini-3-flash-preview"
ROAST_TEMPERATURE = 0.8
ROAST_MAX_OUTPUT_TOKENS = 50
ROAST_MAX_WORDS = 15
ROAST_TIMEOUT_MS = 8000
ROAST_FALLBACK = "Even gravity is laughing at you!"
ROAST_EMPTY_FALLBACK = "Ouch, what a crash! Try again."
ROAST_THINKING = "Thinking up an insult..."

# Palette
SKY_TOP = (78, 170, 196)
SKY_BOTTOM = (196, 236, 224)
BIRD_COLOR = (243, 225, 0)
BIRD_DEAD_COLOR = (255, 68, 68)
PIPE_COLOR = (115, 191, 46)
OUTLINE_COLOR = (0, 0, 0)
CRATE_COLOR = (139, 69, 19)
CRATE_TRIM = (255, 255, 255)
PROJECTILE_COLOR = (255, 255, 0)
TITLE_COLOR = (250, 204, 21)
RECORD_COLOR = (96, 165, 250)
ROAST_BADGE_COLOR = (220, 38, 38)
GAME_OVER_TINT = (69, 10, 10, 230)
START_TINT = (0, 0, 0, 102)


class ConfigError(ValueError):
    """Raised when gameplay settings cannot produce a playable world."""


@dataclass(frozen=True)
class GameSettings:
    """Per-run gameplay tunables. Distances are px, speeds px/tick, rates ms."""

    gravity: float = 0.25
    jump_strength: float = -6.0
    pipe_speed: float = 3.0
    pipe_spawn_rate: float = 1500.0
    gap_size: int = 170
    min_pipe_height: int = MIN_PIPE_HEIGHT
    play_width: int = WINDOW_WIDTH
    play_height: int = WINDOW_HEIGHT
    crate_chance: float = CRATE_CHANCE
    crate_bonus: int = CRATE_BONUS
    fire_rate: float = FIRE_RATE_MS
    projectile_speed: float = PROJECTILE_SPEED

    def validate(self) -> "GameSettings":
        if self.gap_size <= 0:
            raise ConfigError(f"gap_size must be positive, got {self.gap_size}")
        if self.min_pipe_height < 0:
            raise ConfigError(f"min_pipe_height must not be negative, got {self.min_pipe_height}")
        if self.gap_size + 2 * self.min_pipe_height >= self.play_height:
            raise ConfigError(
                f"gap_size ({self.gap_size}) + 2 * min_pipe_height ({self.min_pipe_height}) "
                f"must be smaller than play_height ({self.play_height})"
            )
        if self.pipe_spawn_rate <= 0 or self.fire_rate < 0:
            raise ConfigError("pipe_spawn_rate must be positive and fire_rate non-negative")
        if self.pipe_speed < 0 or self.projectile_speed <= 0:
            raise ConfigError("pipe_speed must be non-negative and projectile_speed positive")
        if not 0.0 <= self.crate_chance <= 1.0:
            raise ConfigError(f"crate_chance must be within [0, 1], got {self.crate_chance}")
        return self

    @property
    def max_top_height(self) -> int:
        """Largest top segment that still leaves a full-height bottom segment."""
        return self.play_height - self.gap_size - self.min_pipe_height


DEFAULT_SETTINGS = GameSettings()
