"""
Render configuration.

GlyphRenderOptions is the per-render options object (surface size,
animation and layer toggles). RenderConfig holds the engine-wide look
and timing settings that rarely change between renders.
"""

import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Union

logger = logging.getLogger(__name__)

# Respawn area the first renderer hard-coded regardless of surface size
LEGACY_RESPAWN_BOUNDS = (800, 600)

# Options file keys -> GlyphRenderOptions fields
OPTION_KEYS = {
    "width": "width",
    "height": "height",
    "animate": "animate",
    "showParticles": "show_particles",
    "showResonanceField": "show_resonance_field",
    "complexity": "complexity",
}


@dataclass
class GlyphRenderOptions:
    """Options for a single render call."""

    width: int = 400
    height: int = 400
    animate: bool = True
    show_particles: bool = True
    show_resonance_field: bool = True
    complexity: int = 3  # Informational; the glyph's own complexity is drawn

    def to_dict(self) -> dict[str, Any]:
        return {key: getattr(self, name) for key, name in OPTION_KEYS.items()}

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        base: "GlyphRenderOptions | None" = None,
    ) -> "GlyphRenderOptions":
        """
        Build options from camelCase keys, starting from ``base``.

        Unknown keys are ignored.
        """
        overrides = {}
        for key, value in data.items():
            name = OPTION_KEYS.get(key)
            if name is None:
                logger.debug("Ignoring unknown render option %r", key)
                continue
            overrides[name] = value

        options = replace(base or cls(), **overrides)
        options.width = int(options.width)
        options.height = int(options.height)
        options.complexity = int(options.complexity)
        options.animate = bool(options.animate)
        options.show_particles = bool(options.show_particles)
        options.show_resonance_field = bool(options.show_resonance_field)
        return options


@dataclass
class RenderConfig:
    """Engine-wide look and timing."""

    fps: int = 60

    # Colors
    background_color: str = "#0a0a0f"
    fade_color: str = "#0a0a0f"
    fade_alpha: float = 0.1  # Motion trail strength, lower = longer trails
    field_color: str = "#00ffff"
    marker_color: str = "#f5a623"
    ring_color: str = "#00ffff"

    # Layout
    glyph_scale: float = 0.3  # Glyph size relative to the short side
    marker_ring_scale: float = 0.4
    ring_scale: float = 0.6
    ring_count: int = 3

    # Glow
    particle_glow: float = 2.5  # Halo radius as a multiple of particle size
    marker_glow: float = 2.0

    # Particles
    legacy_respawn_bounds: bool = False
    seed: int | None = None

    @property
    def respawn_bounds(self) -> tuple[int, int] | None:
        """Fixed respawn area, or None to follow the surface size."""
        return LEGACY_RESPAWN_BOUNDS if self.legacy_respawn_bounds else None


def load_render_options(
    path: Union[str, Path],
    base: GlyphRenderOptions | None = None,
) -> GlyphRenderOptions:
    """
    Read a JSON options file.

    Args:
        path: File holding a JSON object with camelCase option keys.
        base: Options to override. Defaults are used if None.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a JSON object.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object, got {type(data).__name__}")

    return GlyphRenderOptions.from_dict(data, base)
