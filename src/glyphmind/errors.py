"""
Error taxonomy for the GlyphMind engine.

Only SurfaceUnavailable ever reaches the caller. AnalysisFailure is
recovered inside the analyzer and InvalidColorFormat inside the drawing
helpers, so a bad input never stops an animation mid-run.
"""


class GlyphMindError(Exception):
    """Base class for all GlyphMind errors."""


class SurfaceUnavailable(GlyphMindError):
    """The drawing surface could not be acquired."""


class AnalysisFailure(GlyphMindError):
    """Text analysis could not produce a resonance vector."""


class InvalidColorFormat(GlyphMindError, ValueError):
    """A color string could not be parsed."""

    def __init__(self, value):
        super().__init__(f"Unrecognized color value: {value!r}")
        self.value = value
