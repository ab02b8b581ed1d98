"""One simulation tick: firing, physics, spawning, projectiles, crates, pipes."""

from __future__ import annotations

from .collision import boxes_overlap, point_in_box
from .config import BIRD_X, CRATE_OFFSET_X, CRATE_SIZE
from .entities import Crate, GameStatus, Pipe, Projectile
from .state import signal_death
from .world import FrameInput, GameWorld


def step(world: GameWorld, inputs: FrameInput, now: float) -> None:
    """Advance the world by one frame. Does nothing unless a run is in progress.

    `now` is an absolute timestamp in milliseconds; it only drives the fire
    cooldown and the spawn interval. Motion is per tick. The first death
    freezes the world for the rest of the tick.
    """
    if world.status is not GameStatus.PLAYING or world.dead:
        return
    settings = world.settings
    player = world.player

    if inputs.fire_held and (world.last_fired is None or now - world.last_fired >= settings.fire_rate):
        fire(world)
        world.last_fired = now

    player.integrate(settings.gravity)
    if player.out_of_bounds(settings.play_height):
        signal_death(world, now)
        return

    if now - world.last_pipe_spawn > settings.pipe_spawn_rate:
        spawn_pipe(world)
        world.last_pipe_spawn = now

    update_projectiles(world)

    hitbox = player.hitbox()
    for crate in world.crates:
        crate.scroll(settings.pipe_speed)
        if crate.active and boxes_overlap(hitbox, crate.box()):
            signal_death(world, now)
            return
    world.crates = [c for c in world.crates if not c.offscreen()]

    for pipe in world.pipes:
        pipe.scroll(settings.pipe_speed)
        if not pipe.scored and pipe.trailing_edge < BIRD_X:
            pipe.scored = True
            world.score += 1
        if boxes_overlap(hitbox, pipe.top_box()) or boxes_overlap(
            hitbox, pipe.bottom_box(settings.play_height)
        ):
            signal_death(world, now)
            return
    world.pipes = [p for p in world.pipes if not p.offscreen()]


def fire(world: GameWorld) -> Projectile:
    cx, cy = world.player.center
    projectile = Projectile(cx, cy, world.settings.projectile_speed)
    world.projectiles.append(projectile)
    return projectile


def spawn_pipe(world: GameWorld) -> Pipe:
    """Add a pipe at the right edge and maybe a crate floating in its gap."""
    settings = world.settings
    top_height = world.rng.randint(settings.min_pipe_height, settings.max_top_height)
    pipe = Pipe(settings.play_width, top_height, settings.gap_size)
    world.pipes.append(pipe)
    if world.rng.random() < settings.crate_chance:
        crate_y = top_height + settings.gap_size / 2 - CRATE_SIZE / 2
        world.crates.append(Crate(settings.play_width + CRATE_OFFSET_X, crate_y))
    return pipe


def update_projectiles(world: GameWorld) -> None:
    play_width = world.settings.play_width
    for projectile in world.projectiles:
        projectile.advance()
        for crate in world.crates:
            if crate.active and point_in_box(projectile.x, projectile.y, crate.box()):
                crate.active = False
                projectile.active = False
                world.score += world.settings.crate_bonus
                break
    world.projectiles = [p for p in world.projectiles if p.active and not p.offscreen(play_width)]
