"""Frame driver, input mapping and entry point for Flappy Strike."""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

import pygame
from dotenv import load_dotenv

from .assets import AssetLoader
from .config import DEFAULT_SETTINGS, FPS, GameSettings
from .render import Fonts, Renderer
from .roast import RoastClient, sync_roast
from .simulation import step
from .state import activate, advance_timers, retry
from .world import FrameInput, GameWorld

logger = logging.getLogger(__name__)

ACTIVATE_KEYS = (pygame.K_SPACE, pygame.K_UP, pygame.K_w)
FIRE_KEYS = (pygame.K_f,)
RETRY_KEYS = (pygame.K_r, pygame.K_RETURN)


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


class Game:
    """Top-level controller: owns the window, the world and the collaborators."""

    def __init__(
        self,
        settings: GameSettings = DEFAULT_SETTINGS,
        roast_client: Optional[RoastClient] = None,
        assets: Optional[AssetLoader] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.world = GameWorld.create(settings, seed=seed)
        pygame.init()
        size = (settings.play_width, settings.play_height)
        self.screen = pygame.display.set_mode(size, pygame.DOUBLEBUF)
        pygame.display.set_caption("Flappy Strike")
        self.clock = pygame.time.Clock()
        self.assets = assets or AssetLoader()
        self.assets.start(self.now())
        self.roast_client = roast_client or RoastClient()
        self.renderer = Renderer(size, self.assets, Fonts())
        self.running = True

    def now(self) -> float:
        return float(pygame.time.get_ticks())

    def handle_input(self, event: pygame.event.Event, now: float) -> None:
        if event.type == pygame.KEYDOWN:
            if event.key in ACTIVATE_KEYS:
                activate(self.world, now)
            elif event.key in RETRY_KEYS:
                retry(self.world, now)
            elif event.key == pygame.K_ESCAPE:
                self.running = False
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            activate(self.world, now)

    def frame_input(self) -> FrameInput:
        pressed = pygame.key.get_pressed()
        return FrameInput(fire_held=any(pressed[k] for k in FIRE_KEYS))

    def tick(self, now: float, inputs: FrameInput) -> None:
        """Everything one frame does after input events, in order."""
        advance_timers(self.world, now)
        step(self.world, inputs, now)
        sync_roast(self.world, self.roast_client)

    def run(self) -> None:
        logger.info("Flappy Strike started")
        try:
            while self.running:
                self.clock.tick(FPS)
                now = self.now()
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    else:
                        self.handle_input(event, now)
                self.tick(now, self.frame_input())
                self.renderer.render(self.world, self.screen, now)
                pygame.display.flip()
        finally:
            self.roast_client.close()
            self.assets.close()
            pygame.quit()
            logger.info("Flappy Strike stopped (high score %d)", self.world.high_score)


def main() -> None:
    load_dotenv()
    setup_logging(os.getenv("FLAPPY_STRIKE_DEBUG", "false").lower() == "true")
    try:
        Game().run()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)
