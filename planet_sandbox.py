#!/usr/bin/env python3
"""
planet_sandbox.py

Interactive planet sandbox.

Features
--------
- "New planet" button (or N) spawns a planet with a random position, size
  and hue. Each planet carries one orbiting moon.
- The planet nearest the mouse pointer is selected on every pointer move and
  drifts toward the pointer at a constant speed, even after the pointer stops.
- Drop an image file onto the window (or pass --image) to paint it, fitted
  and centred. The paint is one-shot: the next frame draws over it.

Usage
-----
    python planet_sandbox.py
    python planet_sandbox.py --planets 5 --seed 42
    python planet_sandbox.py --image backdrop.png

Dependencies
-----------
    pip install pygame
"""

import argparse
import logging
import random
import sys
from typing import List, Optional, Tuple

import pygame

from planets import AppState, Planet, PlanetManager, random_planet

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
FPS = 60
BACKGROUND_COLOR = (0, 0, 0)


# ---------- Background image ----------


def fit_image_rect(img_w: int, img_h: int, surf_w: int, surf_h: int) -> pygame.Rect:
    """Largest rect with the image's aspect ratio that fits the surface, centred."""
    if img_w <= 0 or img_h <= 0:
        raise ValueError(f"Image has no area ({img_w}x{img_h}).")

    aspect = img_w / img_h
    new_w = float(surf_w)
    new_h = surf_w / aspect
    if new_h > surf_h:
        new_h = float(surf_h)
        new_w = surf_h * aspect

    offset_x = (surf_w - new_w) / 2.0
    offset_y = (surf_h - new_h) / 2.0
    return pygame.Rect(round(offset_x), round(offset_y), round(new_w), round(new_h))


def draw_background_image(surface: pygame.Surface, path: str) -> bool:
    """
    Clear the surface and paint the image at `path` fitted inside it.

    Returns False (after logging) if the file can't be read or decoded.
    """
    try:
        image = pygame.image.load(path)
        rect = fit_image_rect(image.get_width(), image.get_height(),
                              surface.get_width(), surface.get_height())
        # smoothscale only takes 24/32-bit surfaces; paletted images fall back
        if image.get_bitsize() in (24, 32):
            scaled = pygame.transform.smoothscale(image, rect.size)
        else:
            scaled = pygame.transform.scale(image, rect.size)
    except (pygame.error, OSError, ValueError) as exc:
        logger.error("Error loading the image %s: %s", path, exc)
        return False

    surface.fill(BACKGROUND_COLOR)
    surface.blit(scaled, rect.topleft)
    logger.info("Painted %s at %s", path, tuple(rect))
    return True


# ---------- UI ----------


class UIButton:
    """Simple rectangular UI button with hover and click handling."""

    def __init__(self, label: str, x: int, y: int, w: int, h: int, font: pygame.font.Font, callback):
        self.label = label
        self.rect = pygame.Rect(x, y, w, h)
        self.font = font
        self.callback = callback
        self.hover = False

    def draw(self, surface: pygame.Surface):
        bg = (40, 44, 60) if not self.hover else (70, 80, 120)
        pygame.draw.rect(surface, bg, self.rect, border_radius=6)
        pygame.draw.rect(surface, (110, 120, 160), self.rect, 1, border_radius=6)
        txt = self.font.render(self.label, True, (220, 220, 240))
        tx = self.rect.x + (self.rect.w - txt.get_width()) // 2
        ty = self.rect.y + (self.rect.h - txt.get_height()) // 2
        surface.blit(txt, (tx, ty))

    def contains(self, pos: Tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)

    def click(self):
        if callable(self.callback):
            self.callback()


# ---------- Viewer ----------


class PlanetSandbox:
    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT,
                 fps: int = FPS, seed: Optional[int] = None):
        pygame.init()
        pygame.display.set_caption("planet_sandbox")
        self.width = width
        self.height = height
        self.fps = fps
        self.screen = pygame.display.set_mode((width, height))
        self.clock = pygame.time.Clock()
        self.rng = random.Random(seed)

        self.state = AppState()
        self.manager = PlanetManager()

        self.font = pygame.font.SysFont("consolas", 14)
        self.small_font = pygame.font.SysFont("consolas", 12)

        self.ui_buttons: List[UIButton] = [
            UIButton("New planet", 10, 10, 120, 32, self.font, self.spawn_planet),
        ]

    # --- main loop ---

    def run(self):
        while True:
            self.clock.tick(self.fps)
            self.handle_events()
            self.tick()

    def tick(self):
        """Clear, move the selected planet, advance moons, redraw everything."""
        self.screen.fill(BACKGROUND_COLOR)
        self.manager.move_selected(*self.state.cursor)
        self.manager.update(1.0)
        self.manager.draw_all(self.screen)
        self.draw_ui()
        pygame.display.flip()
        self.state.frame += 1

    # --- event handling ---

    def handle_events(self):
        for event in pygame.event.get():
            self.handle_event(event)

    def handle_event(self, event: pygame.event.Event):
        if event.type == pygame.QUIT:
            self.quit()
        elif event.type == pygame.KEYDOWN:
            self.handle_keydown(event.key)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.handle_left_down(event.pos)
        elif event.type == pygame.MOUSEMOTION:
            self.handle_mouse_motion(event.pos)
        elif event.type == pygame.DROPFILE:
            self.handle_drop_file(event.file)

    def handle_keydown(self, key):
        if key == pygame.K_ESCAPE:
            self.quit()
        if key == pygame.K_n:
            self.spawn_planet()

    def handle_left_down(self, pos):
        for btn in self.ui_buttons:
            if btn.contains(pos):
                btn.click()
                return

    def handle_mouse_motion(self, pos):
        self.state.cursor = (float(pos[0]), float(pos[1]))
        self.manager.select_nearest(*self.state.cursor)
        for btn in self.ui_buttons:
            btn.hover = btn.contains(pos)

    def handle_drop_file(self, path: str) -> bool:
        painted = draw_background_image(self.screen, path)
        if painted:
            pygame.display.flip()
        return painted

    def spawn_planet(self) -> Planet:
        planet = random_planet(self.rng, self.width, self.height)
        self.manager.add(planet)
        logger.debug("Spawned %r with color %s", planet, planet.color)
        return planet

    def quit(self):
        logger.info("Closing after %d frames, %d planets", self.state.frame, len(self.manager))
        pygame.quit()
        sys.exit(0)

    # --- drawing ---

    def draw_ui(self):
        for btn in self.ui_buttons:
            btn.draw(self.screen)

        help_lines = [
            "N / New planet: spawn   Move mouse: nearest planet follows   Drop image: background   ESC: quit",
        ]
        y = self.height - 20
        for line in help_lines:
            txt = self.small_font.render(line, True, (150, 150, 150))
            self.screen.blit(txt, (10, y))
            y += txt.get_height() + 1


# ---------- main ----------


def positive_int(value: str) -> int:
    n = int(value)
    if n <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Planets with moons that chase the mouse pointer")
    parser.add_argument("--width", type=positive_int, default=DEFAULT_WIDTH, help="Window width in pixels.")
    parser.add_argument("--height", type=positive_int, default=DEFAULT_HEIGHT, help="Window height in pixels.")
    parser.add_argument("--fps", type=positive_int, default=FPS, help="Frame rate cap.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for spawned planets.")
    parser.add_argument("--planets", type=int, default=0, help="Number of planets to spawn at start-up.")
    parser.add_argument("--image", default=None, help="Image to paint once at start-up.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return parser


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.planets < 0:
        parser.error("--planets must not be negative")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s - %(message)s",
        stream=sys.stdout,
    )

    sandbox = PlanetSandbox(args.width, args.height, fps=args.fps, seed=args.seed)
    for _ in range(args.planets):
        sandbox.spawn_planet()
    if args.image:
        sandbox.handle_drop_file(args.image)
    sandbox.run()


if __name__ == "__main__":
    main()
