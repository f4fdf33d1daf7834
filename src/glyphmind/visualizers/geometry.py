"""
Procedural glyph geometry.

Each shape builder is a pure function of (size, complexity, time) that
returns paths in glyph-local coordinates (origin at the glyph center).
:func:`draw_glyph` places them on a surface with the whole-glyph
transform:
- Frequency → Rotation speed and pulse rate
- Emotional Intensity → Opacity
- Symbolic Density → Line width
"""

import math
from dataclasses import dataclass
from typing import Callable

import pygame

from glyphmind.core.analyzer import ResonanceVector
from glyphmind.core.mapper import Shape
from glyphmind.visualizers.colors import to_rgb, with_alpha

Point = tuple[float, float]

CIRCLE_SEGMENTS = 64
SPIRAL_SAMPLES = 100  # segments; the polyline has SPIRAL_SAMPLES + 1 points
TRIANGLE_HEIGHT_RATIO = 0.866  # equilateral


@dataclass(frozen=True)
class GlyphPath:
    """A single polyline in glyph-local coordinates."""

    points: tuple[Point, ...]
    closed: bool = True
    filled: bool = False


def _regular_polygon(
    radius: float,
    sides: int,
    rotation: float = 0.0,
) -> tuple[Point, ...]:
    """Compute vertices of a regular polygon centered at the origin."""
    return tuple(
        (
            radius * math.cos(rotation + 2 * math.pi * i / sides),
            radius * math.sin(rotation + 2 * math.pi * i / sides),
        )
        for i in range(sides)
    )


def _scale_rotate(points: tuple[Point, ...], scale: float, rotation: float = 0.0) -> tuple[Point, ...]:
    cos_r, sin_r = math.cos(rotation), math.sin(rotation)
    return tuple(
        ((x * cos_r - y * sin_r) * scale, (x * sin_r + y * cos_r) * scale)
        for x, y in points
    )


def circle_paths(size: float, complexity: int, time: float = 0.0) -> list[GlyphPath]:
    """Concentric rings shrinking 20% per ring; only the outer ring is filled."""
    rings = max(1, int(complexity) // 2)
    paths = []
    for i in range(rings):
        radius = (size / 2) * (1 - i * 0.2)
        if radius <= 0:
            break
        paths.append(GlyphPath(_regular_polygon(radius, CIRCLE_SEGMENTS), filled=(i == 0)))
    return paths


def triangle_paths(size: float, complexity: int, time: float = 0.0) -> list[GlyphPath]:
    """Base equilateral triangle plus nested copies scaled by 1 - 0.3i."""
    height = size * TRIANGLE_HEIGHT_RATIO
    base = (
        (0.0, -height / 2),
        (-size / 2, height / 2),
        (size / 2, height / 2),
    )
    paths = [GlyphPath(base, filled=True)]
    for i in range(1, int(complexity)):
        paths.append(GlyphPath(_scale_rotate(base, 1 - i * 0.3)))
    return paths


def square_paths(size: float, complexity: int, time: float = 0.0) -> list[GlyphPath]:
    """Base square plus nested copies scaled by 1 - 0.2i and rotated 45° per step."""
    half = size / 2
    base = ((-half, -half), (half, -half), (half, half), (-half, half))
    paths = [GlyphPath(base, filled=True)]
    for i in range(1, int(complexity)):
        paths.append(GlyphPath(_scale_rotate(base, 1 - i * 0.2, i * math.pi / 4)))
    return paths


def hexagon_paths(size: float, complexity: int, time: float = 0.0) -> list[GlyphPath]:
    """Filled hexagon plus nested outlines at radius 1 - 0.25i."""
    radius = size / 2
    paths = [GlyphPath(_regular_polygon(radius, 6), filled=True)]
    for i in range(1, int(complexity)):
        paths.append(GlyphPath(_regular_polygon(radius * (1 - i * 0.25), 6)))
    return paths


def star_paths(size: float, complexity: int, time: float = 0.0) -> list[GlyphPath]:
    """Single star with 5 + complexity points, inner radius 0.4 of outer."""
    outer = size / 2
    inner = outer * 0.4
    tips = 5 + int(complexity)
    points = []
    for i in range(tips * 2):
        angle = i * math.pi / tips - math.pi / 2
        radius = outer if i % 2 == 0 else inner
        points.append((radius * math.cos(angle), radius * math.sin(angle)))
    return [GlyphPath(tuple(points), filled=True)]


def spiral_paths(size: float, complexity: int, time: float = 0.0) -> list[GlyphPath]:
    """
    Open Archimedean spiral over 3 + complexity turns.

    The angle offset follows elapsed time, so the spiral winds even when
    the rest of the glyph is static.
    """
    max_radius = size / 2
    turns = 3 + int(complexity)
    points = []
    for i in range(SPIRAL_SAMPLES + 1):
        t = i / SPIRAL_SAMPLES
        angle = t * turns * math.pi * 2 + time
        radius = max_radius * t
        points.append((radius * math.cos(angle), radius * math.sin(angle)))
    return [GlyphPath(tuple(points), closed=False)]


ShapeBuilder = Callable[[float, int, float], list[GlyphPath]]

SHAPE_BUILDERS: dict[Shape, ShapeBuilder] = {
    Shape.CIRCLE: circle_paths,
    Shape.TRIANGLE: triangle_paths,
    Shape.SQUARE: square_paths,
    Shape.HEXAGON: hexagon_paths,
    Shape.STAR: star_paths,
    Shape.SPIRAL: spiral_paths,
}

_missing = set(Shape) - set(SHAPE_BUILDERS)
if _missing:
    raise TypeError(f"No geometry builder for shapes: {sorted(s.value for s in _missing)}")


def build_glyph_paths(shape, size: float, complexity: int, time: float = 0.0) -> list[GlyphPath]:
    """Dispatch to the builder for ``shape``; unknown shapes draw as circles."""
    builder = SHAPE_BUILDERS.get(Shape.coerce(shape), circle_paths)
    return builder(size, max(0, int(complexity)), time)


def glyph_transform(time: float, frequency: float) -> tuple[float, float]:
    """Return (rotation, pulse scale) of the whole glyph at ``time``."""
    rotation = time * frequency * 0.5
    pulse = 1 + math.sin(time * frequency * 2) * 0.1
    return rotation, pulse


def transform_points(
    points: tuple[Point, ...],
    center: Point,
    rotation: float,
    scale: float,
) -> list[Point]:
    """Map glyph-local points to surface coordinates."""
    cx, cy = center
    return [(cx + x, cy + y) for x, y in _scale_rotate(points, scale, rotation)]


def glyph_style(vector: ResonanceVector) -> tuple[tuple, tuple, float]:
    """
    Stroke color, fill color and line width for a vector.

    Returns:
        (stroke RGBA, fill RGBA, line width in local units).
    """
    opacity = 0.7 + (vector.emotional_intensity / 100) * 0.3
    color = to_rgb(vector.glyph.color)
    line_width = 2 + (vector.symbolic_density / 100) * 3
    return with_alpha(color, opacity), with_alpha(color, opacity * 0.3), line_width


def draw_paths(
    surface: pygame.Surface,
    paths: list[GlyphPath],
    stroke: tuple,
    fill: tuple,
    width: int,
):
    """Stroke (and fill where requested) already-transformed paths."""
    for path in paths:
        points = path.points
        if path.closed and len(points) >= 3:
            if path.filled:
                pygame.draw.polygon(surface, fill, points)
            pygame.draw.polygon(surface, stroke, points, width)
        elif len(points) >= 2:
            pygame.draw.lines(surface, stroke, path.closed, points, width)


def draw_glyph(
    surface: pygame.Surface,
    vector: ResonanceVector,
    center: Point,
    size: float,
    time: float,
):
    """
    Draw the main glyph for ``vector`` onto ``surface``.

    Args:
        surface: Target surface.
        vector: Resonance vector (read only).
        center: Glyph center in surface coordinates.
        size: Glyph size (diameter of the outer shape).
        time: Elapsed animation time in seconds.
    """
    glyph = vector.glyph
    rotation, pulse = glyph_transform(time, glyph.frequency)
    stroke, fill, line_width = glyph_style(vector)
    width = max(1, int(round(line_width * pulse)))

    local = build_glyph_paths(glyph.shape, size, glyph.complexity, time)
    placed = [
        GlyphPath(
            tuple(transform_points(p.points, center, rotation, pulse)),
            closed=p.closed,
            filled=p.filled,
        )
        for p in local
    ]

    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    draw_paths(overlay, placed, stroke, fill, width)
    surface.blit(overlay, (0, 0))
