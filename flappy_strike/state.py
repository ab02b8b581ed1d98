"""Run lifecycle: START -> COUNTDOWN -> PLAYING -> GAME_OVER -> COUNTDOWN ...

Every transition goes through this module. Countdown and screen shake are
plain fields on the world advanced by ``advance_timers`` from the frame
driver, so starting a new run simply overwrites whatever was pending.
"""

from __future__ import annotations

import logging

from .config import (
    COUNTDOWN_STEP_MS,
    COUNTDOWN_STEPS,
    GAME_OVER_OVERLAY_DELAY_MS,
    SHAKE_DURATION_MS,
    SHAKE_INTENSITY,
)
from .entities import GameStatus
from .world import GameWorld

logger = logging.getLogger(__name__)


def activate(world: GameWorld, now: float) -> None:
    """Handle the "activate" input: start a run, jump, or retry."""
    status = world.status
    if status is GameStatus.START:
        if not world.countdown_running:
            start_countdown(world, now)
    elif status is GameStatus.COUNTDOWN:
        pass
    elif status is GameStatus.PLAYING:
        if not world.dead:
            world.player.flap(world.settings.jump_strength)
    elif status is GameStatus.GAME_OVER:
        # A jump mashed at the moment of death must not skip the death screen.
        if overlay_visible(world, now):
            retry(world, now)
    else:
        raise AssertionError(f"unhandled status {status!r}")


def start_countdown(world: GameWorld, now: float) -> None:
    world.clear_entities()
    world.dead = False
    world.status = GameStatus.COUNTDOWN
    world.countdown_remaining = COUNTDOWN_STEPS
    world.countdown_tick_at = now + COUNTDOWN_STEP_MS
    logger.debug("Countdown started at %.0f ms", now)


def begin_run(world: GameWorld, now: float) -> None:
    world.clear_entities()
    world.score = 0
    world.dead = False
    world.last_fired = None
    world.last_pipe_spawn = now
    world.countdown_remaining = None
    world.countdown_tick_at = None
    world.game_over_at = None
    world.roast.clear()
    world.status = GameStatus.PLAYING
    logger.info("Run started")


def retry(world: GameWorld, now: float) -> bool:
    """GAME_OVER -> COUNTDOWN. Returns False when there is nothing to retry."""
    if world.status is not GameStatus.GAME_OVER:
        return False
    world.roast.clear()
    world.shake_started_at = None
    world.shake_offset = (0.0, 0.0)
    start_countdown(world, now)
    return True


def signal_death(world: GameWorld, now: float) -> bool:
    """End the current run. Only the first call per run has any effect."""
    if world.dead or world.status is not GameStatus.PLAYING:
        return False
    world.dead = True
    world.player.alive = False
    world.status = GameStatus.GAME_OVER
    world.game_over_at = now
    world.high_score = max(world.high_score, world.score)
    world.shake_started_at = now
    world.roast.request(world.score)
    logger.info("Game over: score=%d high_score=%d", world.score, world.high_score)
    return True


def overlay_visible(world: GameWorld, now: float) -> bool:
    return (
        world.status is GameStatus.GAME_OVER
        and world.game_over_at is not None
        and now - world.game_over_at >= GAME_OVER_OVERLAY_DELAY_MS
    )


def advance_timers(world: GameWorld, now: float) -> None:
    """Advance countdown and shake. Called once per frame in every status."""
    while world.countdown_remaining is not None and now >= world.countdown_tick_at:
        world.countdown_remaining -= 1
        if world.countdown_remaining <= 0:
            begin_run(world, now)
        else:
            world.countdown_tick_at += COUNTDOWN_STEP_MS

    if world.shake_started_at is not None:
        elapsed = now - world.shake_started_at
        if elapsed >= SHAKE_DURATION_MS:
            world.shake_started_at = None
            world.shake_offset = (0.0, 0.0)
        else:
            amplitude = SHAKE_INTENSITY * (1.0 - elapsed / SHAKE_DURATION_MS)
            world.shake_offset = (
                (world.rng.random() - 0.5) * amplitude,
                (world.rng.random() - 0.5) * amplitude,
            )
