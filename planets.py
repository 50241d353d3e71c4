#!/usr/bin/env python3
"""
planets.py

Model side of the planet sandbox: shaded planets with an orbiting moon, and
the manager that owns them and tracks which one is chasing the pointer.

Nothing in here opens a window. Planets draw onto whatever pygame.Surface
they are handed, so the model can be driven headless.

Features
--------
- Planet bodies rendered with an off-centre radial gradient (light from the
  upper left, base colour, black rim).
- One white moon per planet, orbiting at radius + 10 px.
- Constant-speed easing toward a target point, stopping within 1 px.
- Nearest-planet selection, recomputed from scratch on every call.
"""

import logging
import math
import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

import pygame

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]

MOON_RADIUS = 5
MOON_ORBIT_OFFSET = 10
ORBIT_SPEED = 0.02  # radians per frame
MOVE_SPEED = 2.0  # pixels per frame
ARRIVAL_DISTANCE = 1.0

MIN_RADIUS = 10
MAX_RADIUS = 30
PLANET_SATURATION = 70
PLANET_LIGHTNESS = 50

HIGHLIGHT_COLOR: Color = (255, 255, 255)
SHADOW_COLOR: Color = (0, 0, 0)
MOON_COLOR: Color = (255, 255, 255)
GRADIENT_STOP_BASE = 0.3


# ---------- Colour helpers ----------


def hsl_to_rgb(hue: float, saturation: float = PLANET_SATURATION,
               lightness: float = PLANET_LIGHTNESS) -> Color:
    """Convert hue in degrees plus saturation/lightness percentages to (r, g, b)."""
    c = pygame.Color(0, 0, 0)
    c.hsla = (hue % 360.0, saturation, lightness, 100)
    return (c.r, c.g, c.b)


def lerp_color(a: Color, b: Color, t: float) -> Color:
    t = max(0.0, min(t, 1.0))
    return tuple(int(round(ca + (cb - ca) * t)) for ca, cb in zip(a, b))


def gradient_color(t: float, base: Color) -> Color:
    """
    Colour of the planet gradient at parameter t in [0, 1].

    Stops: 0 -> highlight, GRADIENT_STOP_BASE -> base colour, 1 -> shadow.
    """
    if t <= GRADIENT_STOP_BASE:
        return lerp_color(HIGHLIGHT_COLOR, base, t / GRADIENT_STOP_BASE)
    return lerp_color(base, SHADOW_COLOR, (t - GRADIENT_STOP_BASE) / (1.0 - GRADIENT_STOP_BASE))


# ---------- Data model ----------


class Planet:
    def __init__(self, x: float, y: float, radius: float, color: Color,
                 moon_angle: Optional[float] = None):
        if radius <= 0:
            raise ValueError(f"Planet radius must be positive, got {radius}.")

        self.x: float = float(x)
        self.y: float = float(y)
        self.radius: float = float(radius)
        self.color: Color = tuple(color)
        self.is_selected: bool = False

        # Moon
        self.moon_radius: int = MOON_RADIUS
        self.moon_orbit_radius: float = self.radius + MOON_ORBIT_OFFSET
        self.orbit_speed: float = ORBIT_SPEED
        if moon_angle is None:
            self.moon_angle: float = random.random() * 2.0 * math.pi
        else:
            self.moon_angle = float(moon_angle)

    def __repr__(self) -> str:
        return f"Planet(x={self.x:.1f}, y={self.y:.1f}, radius={self.radius:.1f})"

    @property
    def pos(self) -> Tuple[float, float]:
        return (self.x, self.y)

    # --- simulation ---

    def update(self, dt: float = 1.0):
        """Advance the moon along its orbit; dt is measured in frames."""
        self.moon_angle += self.orbit_speed * dt

    def moon_position(self) -> Tuple[float, float]:
        return (
            self.x + math.cos(self.moon_angle) * self.moon_orbit_radius,
            self.y + math.sin(self.moon_angle) * self.moon_orbit_radius,
        )

    def move_toward(self, target_x: float, target_y: float, speed: float = MOVE_SPEED):
        dx = target_x - self.x
        dy = target_y - self.y
        distance = math.hypot(dx, dy)

        # close enough: stop here instead of oscillating around the target
        if distance > ARRIVAL_DISTANCE:
            self.x += (dx / distance) * speed
            self.y += (dy / distance) * speed

    def distance_to(self, x: float, y: float) -> float:
        return math.hypot(self.x - x, self.y - y)

    # --- drawing ---

    def draw(self, surface: pygame.Surface):
        """Draw the shaded body and its moon. Does not advance the moon."""
        self.draw_body(surface)
        self.draw_moon(surface)

    def draw_body(self, surface: pygame.Surface):
        # Two-circle radial gradient: a point light at one third of the radius
        # up-left of centre, spreading out to the full disc. Paint from the
        # rim inward so every inner disc lands on top.
        lx = self.x - self.radius / 3.0
        ly = self.y - self.radius / 3.0
        steps = max(2, int(math.ceil(self.radius)))
        for i in range(steps, 0, -1):
            t = i / steps
            cx = lx + (self.x - lx) * t
            cy = ly + (self.y - ly) * t
            pygame.draw.circle(
                surface, gradient_color(t, self.color), (round(cx), round(cy)),
                max(1, round(self.radius * t)),
            )
        pygame.draw.circle(surface, HIGHLIGHT_COLOR, (round(lx), round(ly)), 1)

    def draw_moon(self, surface: pygame.Surface):
        mx, my = self.moon_position()
        pygame.draw.circle(surface, MOON_COLOR, (round(mx), round(my)), self.moon_radius)

    def advance_and_draw_moon(self, surface: pygame.Surface):
        """Single-step variant: advance the orbit by one frame, then draw the moon."""
        self.update(1.0)
        self.draw_moon(surface)


class PlanetManager:
    """Owns every planet plus the one currently following the pointer."""

    def __init__(self, planets: Optional[Sequence[Planet]] = None):
        self.planets: List[Planet] = []
        self.selected: Optional[Planet] = None
        for p in planets or ():
            self.add(p)

    def __len__(self) -> int:
        return len(self.planets)

    def __iter__(self) -> Iterator[Planet]:
        return iter(self.planets)

    def add(self, planet: Planet):
        if any(p is planet for p in self.planets):
            return
        self.planets.append(planet)
        logger.debug("Added %r (%d planets)", planet, len(self.planets))

    def select_nearest(self, x: float, y: float) -> Optional[Planet]:
        """
        Select the planet closest to (x, y).

        Every planet's flag is reset on each call, even when the winner is
        unchanged. Ties go to the planet added first. With no planets this
        does nothing and returns None.
        """
        if not self.planets:
            return None

        best: Optional[Planet] = None
        best_dist = float("inf")
        for p in self.planets:
            d = p.distance_to(x, y)
            if d < best_dist:
                best_dist = d
                best = p

        for p in self.planets:
            p.is_selected = False
        best.is_selected = True
        self.selected = best
        return best

    def move_selected(self, target_x: float, target_y: float):
        if self.selected is not None:
            self.selected.move_toward(target_x, target_y)

    def update(self, dt: float = 1.0):
        for p in self.planets:
            p.update(dt)

    def draw_all(self, surface: pygame.Surface):
        for p in self.planets:
            p.draw(surface)


@dataclass
class AppState:
    """Runtime state shared by the input handlers and the render loop."""

    cursor: Tuple[float, float] = (0.0, 0.0)
    frame: int = 0


# ---------- Spawning ----------


def random_planet(rng: random.Random, width: int, height: int) -> Planet:
    """Planet with random position inside width x height, radius and hue."""
    x = rng.random() * width
    y = rng.random() * height
    radius = rng.random() * (MAX_RADIUS - MIN_RADIUS) + MIN_RADIUS
    color = hsl_to_rgb(rng.random() * 360.0)
    moon_angle = rng.random() * 2.0 * math.pi
    return Planet(x, y, radius, color, moon_angle=moon_angle)
