"""Per-frame draw pass. Reads the world, never writes it."""

from __future__ import annotations

import pygame

from .assets import AssetLoader
from .config import (
    BIRD_COLOR,
    BIRD_DEAD_COLOR,
    BIRD_SIZE,
    BIRD_X,
    CRATE_COLOR,
    CRATE_TRIM,
    GAME_OVER_TINT,
    MAX_TILT_DEG,
    OUTLINE_COLOR,
    PIPE_COLOR,
    PROJECTILE_COLOR,
    PROJECTILE_RADIUS,
    RECORD_COLOR,
    ROAST_BADGE_COLOR,
    ROAST_THINKING,
    SKY_BOTTOM,
    SKY_TOP,
    START_TINT,
    TILT_PER_VELOCITY,
    TITLE_COLOR,
)
from .entities import GameStatus
from .state import overlay_visible
from .utils import scale_color, tilt_degrees, vertical_gradient
from .world import GameWorld


class Fonts:
    def __init__(self) -> None:
        self.huge = pygame.font.SysFont(None, 160, bold=True)
        self.big = pygame.font.SysFont(None, 64, bold=True)
        self.medium = pygame.font.SysFont(None, 36, bold=True)
        self.small = pygame.font.SysFont(None, 24)


class Renderer:
    """Draws a GameWorld onto the display surface, image or placeholder per asset."""

    def __init__(self, size: tuple[int, int], assets: AssetLoader, fonts: Fonts) -> None:
        self.size = size
        self.assets = assets
        self.fonts = fonts
        self.frame = pygame.Surface(size)
        self.sky = pygame.surfarray.make_surface(vertical_gradient(size[0], size[1], SKY_TOP, SKY_BOTTOM))
        self._scaled: dict[tuple[str, int, int, bool], pygame.Surface] = {}

    def _image(self, name: str, w: int, h: int, flip: bool = False) -> pygame.Surface | None:
        if w <= 0 or h <= 0:
            return None
        key = (name, w, h, flip)
        if key not in self._scaled:
            img = self.assets.get(name)
            if img is None:
                return None
            img = pygame.transform.smoothscale(img, (w, h))
            if flip:
                img = pygame.transform.flip(img, False, True)
            self._scaled[key] = img
        return self._scaled[key]

    def render(self, world: GameWorld, screen: pygame.Surface, now: float) -> None:
        surf = self.frame
        self._draw_background(surf)
        self._draw_pipes(surf, world)
        self._draw_crates(surf, world)
        self._draw_projectiles(surf, world)
        self._draw_bird(surf, world)
        if world.status is GameStatus.PLAYING:
            self._draw_score(surf, world.score)

        status = world.status
        if status is GameStatus.START:
            self._draw_start(surf)
        elif status is GameStatus.COUNTDOWN:
            self._draw_countdown(surf, world.countdown_remaining)
        elif status is GameStatus.GAME_OVER:
            if overlay_visible(world, now):
                self._draw_game_over(surf, world)
        if not self.assets.ready(now):
            self._blit_centered(surf, self.fonts.small.render("Loading...", True, (255, 255, 255)), self.size[1] - 20)

        screen.fill((3, 7, 18))
        sx, sy = world.shake_offset
        screen.blit(surf, (round(sx), round(sy)))

    def _draw_background(self, surf: pygame.Surface) -> None:
        bg = self._image("bg", *self.size)
        surf.blit(bg if bg is not None else self.sky, (0, 0))

    def _draw_pipes(self, surf: pygame.Surface, world: GameWorld) -> None:
        height = self.size[1]
        for pipe in world.pipes:
            x, w = int(pipe.x), int(pipe.width)
            top_h = int(pipe.top_height)
            bottom_y = int(pipe.bottom_y)
            # One full-height image per orientation; each segment blits the slice next to the gap.
            top_img = self._image("pipe", w, height, flip=True)
            bottom_img = self._image("pipe", w, height)
            if top_img is not None and bottom_img is not None:
                surf.blit(top_img, (x, 0), pygame.Rect(0, height - top_h, w, top_h))
                surf.blit(bottom_img, (x, bottom_y), pygame.Rect(0, 0, w, height - bottom_y))
                continue
            for rect in (pygame.Rect(x, 0, w, top_h), pygame.Rect(x, bottom_y, w, height - bottom_y)):
                pygame.draw.rect(surf, PIPE_COLOR, rect)
                pygame.draw.rect(surf, OUTLINE_COLOR, rect, 2)

    def _draw_crates(self, surf: pygame.Surface, world: GameWorld) -> None:
        for crate in world.crates:
            if not crate.active:
                continue
            rect = pygame.Rect(int(crate.x), int(crate.y), int(crate.size), int(crate.size))
            pygame.draw.rect(surf, CRATE_COLOR, rect)
            pygame.draw.rect(surf, CRATE_TRIM, rect.inflate(-10, -10), 1)

    def _draw_projectiles(self, surf: pygame.Surface, world: GameWorld) -> None:
        glow = scale_color(PROJECTILE_COLOR, 0.6)
        for p in world.projectiles:
            if not p.active:
                continue
            center = (int(p.x), int(p.y))
            pygame.draw.circle(surf, glow, center, PROJECTILE_RADIUS + 2)
            pygame.draw.circle(surf, PROJECTILE_COLOR, center, PROJECTILE_RADIUS)

    def _draw_bird(self, surf: pygame.Surface, world: GameWorld) -> None:
        player = world.player
        img = self._image("bird", BIRD_SIZE, BIRD_SIZE)
        if img is None:
            img = pygame.Surface((BIRD_SIZE, BIRD_SIZE), pygame.SRCALPHA)
            img.fill(BIRD_COLOR if player.alive else BIRD_DEAD_COLOR)
            pygame.draw.rect(img, OUTLINE_COLOR, img.get_rect(), 2)
        angle = tilt_degrees(player.velocity, TILT_PER_VELOCITY, MAX_TILT_DEG)
        rotated = pygame.transform.rotate(img, angle)
        center = (BIRD_X + BIRD_SIZE // 2, int(player.y) + BIRD_SIZE // 2)
        surf.blit(rotated, rotated.get_rect(center=center))

    def _outlined(self, font: pygame.font.Font, text: str, color: tuple[int, int, int]) -> pygame.Surface:
        base = font.render(text, True, color)
        edge = font.render(text, True, OUTLINE_COLOR)
        out = pygame.Surface((base.get_width() + 6, base.get_height() + 6), pygame.SRCALPHA)
        for dx in (0, 3, 6):
            for dy in (0, 3, 6):
                out.blit(edge, (dx, dy))
        out.blit(base, (3, 3))
        return out

    def _blit_centered(self, surf: pygame.Surface, text: pygame.Surface, y: int) -> None:
        surf.blit(text, text.get_rect(center=(self.size[0] // 2, y)))

    def _draw_score(self, surf: pygame.Surface, score: int) -> None:
        self._blit_centered(surf, self._outlined(self.fonts.big, str(score), (255, 255, 255)), 80)

    def _tint(self, surf: pygame.Surface, rgba: tuple[int, int, int, int]) -> None:
        veil = pygame.Surface(self.size, pygame.SRCALPHA)
        veil.fill(rgba)
        surf.blit(veil, (0, 0))

    def _draw_start(self, surf: pygame.Surface) -> None:
        self._tint(surf, START_TINT)
        cy = self.size[1] // 2
        self._blit_centered(surf, self._outlined(self.fonts.big, "FLAPPY", TITLE_COLOR), cy - 150)
        self._blit_centered(surf, self._outlined(self.fonts.big, "STRIKE", TITLE_COLOR), cy - 95)
        white = (255, 255, 255)
        self._blit_centered(surf, self.fonts.small.render("CONTROLS", True, (200, 200, 200)), cy - 20)
        self._blit_centered(surf, self.fonts.small.render("SPACE - JUMP    F - FIRE", True, white), cy + 10)
        self._blit_centered(surf, self.fonts.medium.render("CLICK TO START", True, white), cy + 80)

    def _draw_countdown(self, surf: pygame.Surface, remaining: int | None) -> None:
        if remaining is None:
            return
        self._blit_centered(surf, self._outlined(self.fonts.huge, str(remaining), (255, 255, 255)), self.size[1] // 2)

    def _draw_game_over(self, surf: pygame.Surface, world: GameWorld) -> None:
        self._tint(surf, GAME_OVER_TINT)
        w, h = self.size
        white = (255, 255, 255)
        self._blit_centered(surf, self.fonts.big.render("YOU CRASHED", True, white), h // 2 - 190)

        muted = (170, 170, 170)
        for label, value, color, x in (("SCORE", world.score, TITLE_COLOR, w // 3), ("RECORD", world.high_score, RECORD_COLOR, 2 * w // 3)):
            cap = self.fonts.small.render(label, True, muted)
            num = self.fonts.big.render(str(value), True, color)
            surf.blit(cap, cap.get_rect(center=(x, h // 2 - 120)))
            surf.blit(num, num.get_rect(center=(x, h // 2 - 80)))

        box = pygame.Rect(24, h // 2 - 30, w - 48, 110)
        pygame.draw.rect(surf, (0, 0, 0), box, border_radius=14)
        pygame.draw.rect(surf, (60, 60, 60), box, 1, border_radius=14)
        badge = self.fonts.small.render("AI ROAST", True, white)
        badge_rect = badge.get_rect(center=(w // 2, box.top))
        pygame.draw.rect(surf, ROAST_BADGE_COLOR, badge_rect.inflate(16, 6), border_radius=10)
        surf.blit(badge, badge_rect)

        text = ROAST_THINKING if world.roast.pending else f'"{world.roast.text}"'
        lines = wrap_text(self.fonts.small, text, box.width - 24)
        top = box.centery - len(lines) * self.fonts.small.get_linesize() // 2
        for i, line in enumerate(lines):
            rendered = self.fonts.small.render(line, True, white)
            surf.blit(rendered, rendered.get_rect(midtop=(w // 2, top + i * self.fonts.small.get_linesize())))

        retry = self.fonts.medium.render("R / CLICK - RETRY", True, TITLE_COLOR)
        self._blit_centered(surf, retry, h // 2 + 150)


def wrap_text(font: pygame.font.Font, text: str, max_width: int) -> list[str]:
    """Greedy word wrap to fit max_width pixels."""
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}".strip()
        if current and font.size(candidate)[0] > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines
