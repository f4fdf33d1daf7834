"""Glyph drawing and animation."""

from glyphmind.visualizers.glyph import GlyphRenderer
from glyphmind.visualizers.scheduler import (
    AnimationScheduler,
    AnimationState,
    ManualScheduler,
    PygameScheduler,
    Scheduler,
)

__all__ = [
    "GlyphRenderer",
    "AnimationScheduler",
    "AnimationState",
    "ManualScheduler",
    "PygameScheduler",
    "Scheduler",
]
