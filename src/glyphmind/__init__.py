"""
Text resonance analysis and procedural glyph rendering.

Only the pure analysis core is exported here. Rendering and export live
in ``glyphmind.visualizers``, ``glyphmind.io`` and ``glyphmind.pipeline``,
which need pygame.
"""

from glyphmind.core.analyzer import DEFAULT_VECTOR, ResonanceVector, TextMetricsEngine, analyze
from glyphmind.core.mapper import GlyphDescriptor, GlyphMapper, Shape

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_VECTOR",
    "ResonanceVector",
    "TextMetricsEngine",
    "analyze",
    "GlyphDescriptor",
    "GlyphMapper",
    "Shape",
]
