"""Core text analysis modules."""

from glyphmind.core.analyzer import DEFAULT_VECTOR, ResonanceVector, TextMetricsEngine, analyze
from glyphmind.core.mapper import GlyphDescriptor, GlyphMapper, Shape, map_glyph

__all__ = [
    "DEFAULT_VECTOR",
    "ResonanceVector",
    "TextMetricsEngine",
    "analyze",
    "GlyphDescriptor",
    "GlyphMapper",
    "Shape",
    "map_glyph",
]
