import os

os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

from concurrent.futures import Future

import pygame
import pytest

from flappy_strike.assets import AssetLoader
from flappy_strike.config import ASSET_FILES, COUNTDOWN_STEP_MS, GAME_OVER_OVERLAY_DELAY_MS, ROAST_FALLBACK
from flappy_strike.entities import GameStatus, Pipe
from flappy_strike.game import Game
from flappy_strike.render import wrap_text
from flappy_strike.state import begin_run
from flappy_strike.world import FrameInput


class InstantRoastClient:
    def __init__(self) -> None:
        self.requests = []
        self.closed = False

    def request(self, score: int) -> Future:
        self.requests.append(score)
        future: Future = Future()
        future.set_result(ROAST_FALLBACK)
        return future

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def game(tmp_path):
    g = Game(roast_client=InstantRoastClient(), assets=AssetLoader(tmp_path, cache_dir=tmp_path, base_url=None), seed=42)
    yield g
    pygame.quit()


def key(k: int) -> pygame.event.Event:
    return pygame.event.Event(pygame.KEYDOWN, key=k)


def test_game_init(game: Game) -> None:
    assert game.world.status is GameStatus.START
    assert game.screen.get_size() == (400, 600)
    game.renderer.render(game.world, game.screen, 0.0)


def test_full_run_cycle(game: Game) -> None:
    world = game.world
    game.handle_input(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(10, 10)), 0.0)
    assert world.status is GameStatus.COUNTDOWN
    game.renderer.render(world, game.screen, 0.0)

    start = 3 * COUNTDOWN_STEP_MS
    game.tick(start, FrameInput())
    assert world.status is GameStatus.PLAYING

    game.handle_input(key(pygame.K_SPACE), start + 16)
    assert world.player.velocity == world.settings.jump_strength
    game.tick(start + 16, FrameInput(fire_held=True))
    assert len(world.projectiles) == 1
    game.renderer.render(world, game.screen, start + 16)

    # dive out of the play area
    world.player.y = world.settings.play_height + 200
    game.tick(start + 32, FrameInput())
    assert world.status is GameStatus.GAME_OVER
    assert game.roast_client.requests == [0]
    assert world.roast.text == ROAST_FALLBACK
    assert not world.roast.pending

    over = start + 32 + GAME_OVER_OVERLAY_DELAY_MS
    game.tick(over, FrameInput())
    game.renderer.render(world, game.screen, over)

    game.handle_input(key(pygame.K_r), over)
    assert world.status is GameStatus.COUNTDOWN
    assert world.roast.text == ""


def test_escape_stops_loop(game: Game) -> None:
    game.handle_input(key(pygame.K_ESCAPE), 0.0)
    assert not game.running


def test_wrap_text_fits_width() -> None:
    pygame.font.init()
    font = pygame.font.SysFont(None, 24)
    text = "Even gravity is laughing at you, and honestly so is the pipe behind you."
    lines = wrap_text(font, text, 150)
    assert len(lines) > 1
    assert " ".join(lines) == text
    for line in lines:
        if " " in line:
            assert font.size(line)[0] <= 150


def test_sprites_render_with_bounded_cache(tmp_path) -> None:
    pygame.init()
    for filename in ASSET_FILES.values():
        pygame.image.save(pygame.Surface((20, 30)), str(tmp_path / filename))
    assets = AssetLoader(tmp_path, cache_dir=tmp_path, base_url=None)
    g = Game(roast_client=InstantRoastClient(), assets=assets, seed=3)
    try:
        assets.wait(timeout=5)
        assert assets.failed == set()
        world = g.world
        begin_run(world, 0.0)
        for i, top in enumerate(range(100, 330, 10)):
            world.pipes.append(Pipe(120 + i * 5, top, world.settings.gap_size))
        g.renderer.render(world, g.screen, 10_000.0)
        # background, bird and one full-height pipe per orientation
        assert len(g.renderer._scaled) == 4
    finally:
        pygame.quit()
