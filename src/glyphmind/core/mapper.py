"""
Glyph mapping module.

Maps three resonance scalars to the visual descriptor consumed by
the renderer:
- Cognitive + Emotional → Shape
- Emotional → Animation frequency
- Cognitive + Symbolic → Complexity (nested copies, rings, star points)
- All three → HSL color
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Shape(str, Enum):
    """The six glyph shape variants, in mapping order."""

    CIRCLE = "circle"
    TRIANGLE = "triangle"
    SQUARE = "square"
    HEXAGON = "hexagon"
    STAR = "star"
    SPIRAL = "spiral"

    @classmethod
    def coerce(cls, value: Any) -> "Shape":
        """Return the matching Shape, defaulting to CIRCLE for unknown tags."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.CIRCLE


SHAPES = tuple(Shape)

MIN_FREQUENCY = 0.5


@dataclass(frozen=True)
class GlyphDescriptor:
    """Shape, frequency, color and complexity of a glyph."""

    shape: Shape
    frequency: float
    color: str
    complexity: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "shape": self.shape.value,
            "frequency": self.frequency,
            "color": self.color,
            "complexity": self.complexity,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlyphDescriptor":
        return cls(
            shape=Shape.coerce(data.get("shape", "circle")),
            frequency=max(MIN_FREQUENCY, float(data.get("frequency", MIN_FREQUENCY))),
            color=str(data.get("color", "")),
            complexity=max(0, int(data.get("complexity", 0))),
        )


def glyph_color(cognitive: float, emotional: float, symbolic: float) -> str:
    """
    Map the three metrics into HSL space.

    Args:
        cognitive: Cognitive load (0-100).
        emotional: Emotional intensity (0-100).
        symbolic: Symbolic density (0-100).

    Returns:
        CSS-style ``hsl(h, s%, l%)`` string.
    """
    hue = math.floor((cognitive + emotional + symbolic) / 3 * 3.6)
    saturation = max(50, emotional)
    lightness = max(30, min(70, 100 - cognitive))
    return f"hsl({hue:g}, {saturation:g}%, {lightness:g}%)"


def map_glyph(cognitive: float, emotional: float, symbolic: float) -> GlyphDescriptor:
    """
    Derive a GlyphDescriptor from resonance scalars.

    Pure function: identical inputs always give identical descriptors.
    """
    shape_index = math.floor((cognitive + emotional) / 33) % len(SHAPES)
    return GlyphDescriptor(
        shape=SHAPES[shape_index],
        frequency=max(MIN_FREQUENCY, emotional / 100),
        color=glyph_color(cognitive, emotional, symbolic),
        complexity=max(0, math.floor((cognitive + symbolic) / 20)),
    )


class GlyphMapper:
    """Object wrapper around :func:`map_glyph` for injection into pipelines."""

    def map(self, cognitive: float, emotional: float, symbolic: float) -> GlyphDescriptor:
        return map_glyph(cognitive, emotional, symbolic)
