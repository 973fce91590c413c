# cityrun/game/render.py
from __future__ import annotations
import math
import random
from dataclasses import dataclass
from typing import List, Optional

import pygame

from .config import (
    BUILDING_COUNT, BUILDING_SPACING, BUILDING_LOOP_PAD, PARALLAX_FACTOR,
    COLOR_SKY, COLOR_SUN, COLOR_BUILDING, COLOR_WINDOW, COLOR_GROUND, COLOR_SPIKE,
    COLOR_PLAYER, COLOR_FACE, COLOR_FG, COLOR_PANEL, COLOR_PANEL_TEXT,
)
from .level import ground_segments
from .state import GameState, RunStatus

GROUND_THICKNESS = 8


@dataclass
class Building:
    x: float
    w: float
    h: float


def make_buildings(count: int = BUILDING_COUNT, rng: Optional[random.Random] = None) -> List[Building]:
    """Skyline row for the far parallax layer."""
    rng = rng or random.Random()
    out: List[Building] = []
    x = 0.0
    for _ in range(count):
        w = 140 + rng.random() * 120
        h = 220 + rng.random() * 180
        out.append(Building(x=x, w=w, h=h))
        x += w + BUILDING_SPACING
    return out


class Scenery:
    """Far buildings scrolling at a fraction of the world speed. Purely cosmetic."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.buildings = make_buildings(rng=rng)
        self.offset = 0.0
        self.loop = self.buildings[-1].x + BUILDING_LOOP_PAD

    def scroll(self, speed: float):
        self.offset -= speed * PARALLAX_FACTOR

    def draw(self, surf: pygame.Surface, ground_y: float):
        w, h = surf.get_size()
        surf.fill(COLOR_SKY)
        pygame.draw.circle(surf, COLOR_SUN, (w - 150, 120), 45)

        for b in self.buildings:
            x = b.x + self.offset
            while x + b.w < 0:
                x += self.loop
            if x > w:
                continue
            top = ground_y - b.h
            pygame.draw.rect(surf, COLOR_BUILDING, pygame.Rect(int(x), int(top), int(b.w), int(b.h)))
            wy = top + 30
            while wy < ground_y - 20:
                wx = x + 20
                while wx < x + b.w - 25:
                    pygame.draw.rect(surf, COLOR_WINDOW, pygame.Rect(int(wx), int(wy), 14, 8))
                    wx += 35
                wy += 40


def draw_world(surf: pygame.Surface, state: GameState):
    """Ground segments, spikes and the player for the current state."""
    gy = state.ground_y
    for x0, x1 in ground_segments(state.track.pits, state.screen_width):
        pygame.draw.rect(surf, COLOR_GROUND, pygame.Rect(int(x0), int(gy), int(math.ceil(x1 - x0)), GROUND_THICKNESS))

    for sp in state.track.spikes:
        pygame.draw.polygon(surf, COLOR_SPIKE, sp.world_points(gy))

    draw_player(surf, state)


def draw_player(surf: pygame.Surface, state: GameState):
    p = state.player
    w, h = int(p.width), int(p.height)
    body = pygame.Surface((w, h), pygame.SRCALPHA)
    body.fill(COLOR_PLAYER)

    # face: two eyes, nose, smile
    cx, cy = w // 2, h // 2
    pygame.draw.circle(body, COLOR_FACE, (cx - 10, cy - 8), 4)
    pygame.draw.circle(body, COLOR_FACE, (cx + 10, cy - 8), 4)
    pygame.draw.rect(body, COLOR_FACE, pygame.Rect(cx - 2, cy - 2, 4, 6))
    pygame.draw.arc(body, COLOR_FACE, pygame.Rect(cx - 10, cy - 4, 20, 20), math.pi, 2 * math.pi, 2)

    # canvas rotation is clockwise, pygame's is counter-clockwise
    rotated = pygame.transform.rotate(body, -math.degrees(p.rotation))
    center = (p.x + p.width / 2, p.y + p.height / 2)
    surf.blit(rotated, rotated.get_rect(center=(int(center[0]), int(center[1]))))


def draw_hud(surf: pygame.Surface, font: pygame.font.Font, state: GameState):
    surf.blit(font.render(f"Score: {int(state.score)}", True, COLOR_FG), (12, 10))


def draw_overlay(surf: pygame.Surface, font: pygame.font.Font, state: GameState):
    """Menu / pause / game-over panel depending on the run status."""
    if state.status is RunStatus.IDLE:
        lines = ["CITY RUN", "ENTER or click to start", "W / SPACE / UP to jump, P to pause"]
    elif state.status is RunStatus.PAUSED:
        lines = ["PAUSED", "P to resume", "M for menu"]
    elif state.status is RunStatus.GAME_OVER:
        cause = "spiked" if state.death_cause == "spike" else "fell"
        lines = [f"GAME OVER ({cause})", f"Score: {int(state.score)}", "R or click to restart, M for menu"]
    else:
        return

    w, h = surf.get_size()
    panel_w, panel_h = 420, 30 * (len(lines) + 1)
    panel = pygame.Surface((panel_w, panel_h), pygame.SRCALPHA)
    panel.fill(COLOR_PANEL)
    px, py = (w - panel_w) // 2, (h - panel_h) // 2
    surf.blit(panel, (px, py))

    for i, msg in enumerate(lines):
        txt = font.render(msg, True, COLOR_PANEL_TEXT)
        surf.blit(txt, (px + (panel_w - txt.get_width()) // 2, py + 15 + i * 30))


def render_frame(surf: pygame.Surface, font: Optional[pygame.font.Font], scenery: Scenery, state: GameState):
    """Full frame; the parallax only scrolls while the run is live."""
    if state.running:
        scenery.scroll(state.speed)
    scenery.draw(surf, state.ground_y)
    draw_world(surf, state)
    if font is not None:
        draw_hud(surf, font, state)
        draw_overlay(surf, font, state)
