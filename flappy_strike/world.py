"""The owned game world: every entity collection, run counter and timer slot."""

from __future__ import annotations

import random
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Optional

from .config import DEFAULT_SETTINGS, GameSettings
from .entities import Crate, GameStatus, Pipe, Player, Projectile


@dataclass(frozen=True)
class FrameInput:
    """Level-triggered inputs sampled once per frame. Jumps are events, not levels."""

    fire_held: bool = False


@dataclass
class RoastSlot:
    """Display-only roast state, filled in by the frame driver from a background future."""

    text: str = ""
    pending: bool = False
    requested_score: Optional[int] = None
    future: Optional[Future] = None

    def request(self, score: int) -> None:
        self.text = ""
        self.pending = True
        self.requested_score = score

    def clear(self) -> None:
        if self.future is not None:
            self.future.cancel()
        self.text = ""
        self.pending = False
        self.requested_score = None
        self.future = None


@dataclass
class GameWorld:
    settings: GameSettings = DEFAULT_SETTINGS
    rng: random.Random = field(default_factory=random.Random)

    player: Player = field(default_factory=Player.centered)
    pipes: list[Pipe] = field(default_factory=list)
    crates: list[Crate] = field(default_factory=list)
    projectiles: list[Projectile] = field(default_factory=list)

    status: GameStatus = GameStatus.START
    score: int = 0
    high_score: int = 0
    dead: bool = False
    last_pipe_spawn: float = 0.0
    last_fired: Optional[float] = None

    countdown_remaining: Optional[int] = None
    countdown_tick_at: Optional[float] = None
    shake_started_at: Optional[float] = None
    shake_offset: tuple[float, float] = (0.0, 0.0)
    game_over_at: Optional[float] = None

    roast: RoastSlot = field(default_factory=RoastSlot)

    @classmethod
    def create(cls, settings: GameSettings = DEFAULT_SETTINGS, seed: Optional[int] = None) -> "GameWorld":
        settings.validate()
        return cls(
            settings=settings,
            rng=random.Random(seed),
            player=Player.centered(settings.play_height),
        )

    def clear_entities(self) -> None:
        self.player = Player.centered(self.settings.play_height)
        self.pipes = []
        self.crates = []
        self.projectiles = []

    @property
    def countdown_running(self) -> bool:
        return self.countdown_remaining is not None
