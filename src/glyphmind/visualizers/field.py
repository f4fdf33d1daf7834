"""
Resonance field: a coarse scalar grid of two interfering radial waves.

The first wave follows emotional intensity and glyph frequency, the
second follows cognitive load and temporal flow.
"""

import math

import numpy as np
import pygame

from glyphmind.core.analyzer import ResonanceVector
from glyphmind.visualizers.colors import RGB, with_alpha

CELL_SIZE = 20
FIELD_COLOR: RGB = (0, 255, 255)
MAX_CELL_OPACITY = 0.3
MIN_CELL_OPACITY = 0.05


class ScalarField:
    """Grid of wave amplitudes, one cell per ``cell_size`` pixels."""

    def __init__(self, width: int, height: int, cell_size: int = CELL_SIZE):
        self.cell_size = cell_size
        self.width = 0
        self.height = 0
        self.values = np.zeros((0, 0), dtype=np.float64)
        self.resize(width, height)

    @property
    def shape(self) -> tuple[int, int]:
        """(rows, cols) of the grid."""
        return self.values.shape

    def resize(self, width: int, height: int):
        """Rebuild a zeroed grid covering a ``width`` x ``height`` surface."""
        self.width = int(width)
        self.height = int(height)
        rows = math.ceil(self.height / self.cell_size)
        cols = math.ceil(self.width / self.cell_size)
        self.values = np.zeros((max(0, rows), max(0, cols)), dtype=np.float64)

    def update(self, vector: ResonanceVector, time: float):
        """Recompute every cell for ``vector`` at ``time`` seconds."""
        rows, cols = self.values.shape
        if rows == 0 or cols == 0:
            return

        y, x = np.mgrid[0:rows, 0:cols]
        distance = np.hypot(x - cols / 2, y - rows / 2)

        frequency = vector.glyph.frequency
        wave1 = np.sin(distance * 0.3 - time * frequency * 2) * (vector.emotional_intensity / 100)
        wave2 = np.cos(distance * 0.2 + time * vector.temporal_flow / 50) * (vector.cognitive_load / 100)

        self.values[:] = (wave1 + wave2) * 0.5

    def opacities(self) -> np.ndarray:
        """Per-cell paint opacity, zero where the cell is below the visible threshold."""
        alpha = np.minimum(MAX_CELL_OPACITY, np.abs(self.values) * 0.5)
        alpha[alpha <= MIN_CELL_OPACITY] = 0.0
        return alpha

    def render(self, surface: pygame.Surface, color: RGB = FIELD_COLOR):
        """Paint visible cells as translucent squares."""
        alpha = self.opacities()
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        size = self.cell_size

        for row, col in zip(*np.nonzero(alpha)):
            rect = pygame.Rect(int(col) * size, int(row) * size, size, size)
            overlay.fill(with_alpha(color, float(alpha[row, col])), rect)

        surface.blit(overlay, (0, 0))

    def snapshot(self) -> np.ndarray:
        return self.values.copy()
