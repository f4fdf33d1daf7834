"""
Glyph rendering engine.

Composites one resonance vector onto a pygame surface. Layers are drawn
in a fixed order every frame:
1. Fade toward the background (motion trails)
2. Resonance field (optional)
3. Main glyph
4. Particle swarm (optional)
5. Emergence markers
6. Frequency rings
"""

import logging
import math
from typing import Any, Iterator

import numpy as np
import pygame

from glyphmind.config import GlyphRenderOptions, RenderConfig
from glyphmind.core.analyzer import ResonanceVector
from glyphmind.errors import SurfaceUnavailable
from glyphmind.io.exporter import png_bytes, png_data_url, surface_to_array
from glyphmind.visualizers.colors import to_rgb, with_alpha
from glyphmind.visualizers.field import ScalarField
from glyphmind.visualizers.geometry import draw_glyph
from glyphmind.visualizers.particles import ParticleSystem, particle_count
from glyphmind.visualizers.scheduler import AnimationScheduler, ManualScheduler, Scheduler

logger = logging.getLogger(__name__)

# Particle ticks per second of animation time
TICK_RATE = 60

MARKER_SIZE = 8.0


def create_surface(width: int, height: int) -> pygame.Surface:
    """
    Allocate an offscreen RGB surface.

    Raises:
        SurfaceUnavailable: For non-positive sizes or when pygame refuses.
    """
    if width <= 0 or height <= 0:
        raise SurfaceUnavailable(f"Cannot create a {width}x{height} surface")
    try:
        return pygame.Surface((int(width), int(height)))
    except pygame.error as exc:
        raise SurfaceUnavailable(f"pygame could not create a surface: {exc}") from exc


class GlyphRenderer:
    """
    Renders resonance vectors as animated glyphs.

    The renderer owns its surface, resonance field, particle swarm and
    animation loop. It only reads the vectors it is given.
    """

    def __init__(
        self,
        surface: pygame.Surface | None = None,
        config: RenderConfig | None = None,
        scheduler: Scheduler | None = None,
        rng: np.random.Generator | None = None,
        size: tuple[int, int] = (400, 400),
    ):
        """
        Args:
            surface: Target surface. A new offscreen surface of ``size`` is
                created if None.
            config: Look and timing. Uses defaults if None.
            scheduler: Host frame scheduler. A ManualScheduler is used if None,
                so nothing animates until it is stepped.
            rng: Random generator for the particle swarm.
            size: Size of the offscreen surface when none is given.

        Raises:
            SurfaceUnavailable: If no usable surface can be acquired.
        """
        self.config = config or RenderConfig()

        if surface is None:
            surface = create_surface(*size)
        elif not isinstance(surface, pygame.Surface):
            raise SurfaceUnavailable(f"Expected a pygame.Surface, got {type(surface).__name__}")
        self.surface = surface

        width, height = self.surface.get_size()
        if width <= 0 or height <= 0:
            raise SurfaceUnavailable(f"Surface has unusable size {width}x{height}")

        if rng is None:
            rng = np.random.default_rng(self.config.seed)
        self.field = ScalarField(width, height)
        self.particles = ParticleSystem(rng=rng, fixed_respawn_bounds=self.config.respawn_bounds)
        self.animation = AnimationScheduler(
            scheduler or ManualScheduler(frame_time=1 / self.config.fps)
        )

        self.vector: ResonanceVector | None = None
        self.options = GlyphRenderOptions(width=width, height=height)
        self.time = 0.0

    @property
    def size(self) -> tuple[int, int]:
        return self.surface.get_size()

    @property
    def is_running(self) -> bool:
        return self.animation.is_running

    def glyph_size(self) -> float:
        return min(self.size) * self.config.glyph_scale

    def render(self, vector: ResonanceVector, options: GlyphRenderOptions | None = None):
        """
        Show ``vector``: animate it, or draw a single static frame.

        Args:
            vector: Resonance vector to draw.
            options: Size and layer toggles. Defaults are used if None.
        """
        options = options or GlyphRenderOptions()
        self.resize(options.width, options.height)

        if options.animate:
            self.start_animation(vector, options)
        else:
            self.stop_animation()
            self.render_static(vector, options)

    def resize(self, width: int, height: int):
        """
        Resize the surface and field.

        Particles keep their positions; only future respawns use the new bounds.

        Raises:
            SurfaceUnavailable: For non-positive sizes.
        """
        width, height = int(width), int(height)
        if (width, height) != self.size:
            if pygame.display.get_init() and self.surface is pygame.display.get_surface():
                try:
                    self.surface = pygame.display.set_mode((width, height))
                except pygame.error as exc:
                    raise SurfaceUnavailable(f"Could not resize window: {exc}") from exc
            else:
                self.surface = create_surface(width, height)
        elif width <= 0 or height <= 0:
            raise SurfaceUnavailable(f"Cannot create a {width}x{height} surface")

        self.field.resize(width, height)
        self.particles.resize((width, height))

    def start_animation(self, vector: ResonanceVector, options: GlyphRenderOptions):
        """Spawn a fresh swarm and (re)start the frame loop."""
        self.vector = vector
        self.options = options
        self.particles.initialize(
            particle_count(vector.symbolic_density),
            self.size,
            vector.glyph.color,
        )
        self.animation.start(self._on_frame)
        logger.debug(
            "Animation started: %s, %d particles", vector.glyph.shape.value, len(self.particles)
        )

    def stop_animation(self):
        self.animation.stop()

    def _on_frame(self, elapsed: float):
        self.render_frame(self.vector, self.options, elapsed)

    def render_frame(
        self,
        vector: ResonanceVector,
        options: GlyphRenderOptions,
        time: float,
        dt: float = 1.0,
    ) -> pygame.Surface:
        """
        Draw one animation frame on top of the previous one.

        Args:
            vector: Resonance vector to draw.
            options: Layer toggles.
            time: Elapsed animation time in seconds.
            dt: Particle ticks to advance.

        Returns:
            The renderer's surface.
        """
        cfg = self.config
        surface = self.surface
        width, height = surface.get_size()
        center = (width / 2, height / 2)
        self.time = time

        # Trail effect: darken instead of clearing
        fade = pygame.Surface((width, height))
        fade.fill(to_rgb(cfg.fade_color))
        fade.set_alpha(int(round(cfg.fade_alpha * 255)))
        surface.blit(fade, (0, 0))

        if options.show_resonance_field:
            self.field.update(vector, time)
            self.field.render(surface, to_rgb(cfg.field_color))

        draw_glyph(surface, vector, center, self.glyph_size(), time)

        if options.show_particles:
            self.particles.tick(center[0], center[1], vector.glyph.frequency, dt)
            self.particles.render(surface, glow=cfg.particle_glow)

        self._draw_emergence_markers(surface, vector, time)
        self._draw_frequency_rings(surface, vector, time)
        return surface

    def render_static(
        self,
        vector: ResonanceVector,
        options: GlyphRenderOptions | None = None,
    ) -> pygame.Surface:
        """Clear and draw the glyph and emergence markers at t=0."""
        self.vector = vector
        if options is not None:
            self.options = options

        surface = self.surface
        width, height = surface.get_size()
        surface.fill(to_rgb(self.config.background_color))
        draw_glyph(surface, vector, (width / 2, height / 2), self.glyph_size(), 0.0)
        self._draw_emergence_markers(surface, vector, 0.0)
        self.time = 0.0
        return surface

    def _draw_emergence_markers(self, surface: pygame.Surface, vector: ResonanceVector, time: float):
        """Pulsing amber dots on a ring, one per emergence point."""
        if not vector.emergence_points:
            return

        cfg = self.config
        width, height = surface.get_size()
        distance = min(width, height) * cfg.marker_ring_scale
        color = to_rgb(cfg.marker_color)
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)

        for index, point in enumerate(vector.emergence_points):
            angle = point / 100 * math.pi * 2
            x = width / 2 + distance * math.cos(angle)
            y = height / 2 + distance * math.sin(angle)
            size = MARKER_SIZE * (1 + math.sin(time * 3 + index) * 0.3)

            if cfg.marker_glow > 1:
                pygame.draw.circle(overlay, with_alpha(color, 0.3), (x, y), size * cfg.marker_glow)
            pygame.draw.circle(overlay, with_alpha(color, 1.0), (x, y), size)

        surface.blit(overlay, (0, 0))

    def _draw_frequency_rings(self, surface: pygame.Surface, vector: ResonanceVector, time: float):
        """Concentric rings breathing with time; opacity follows temporal flow."""
        cfg = self.config
        width, height = surface.get_size()
        max_radius = min(width, height) * cfg.ring_scale
        opacity = 0.1 + (vector.temporal_flow / 100) * 0.2
        color = with_alpha(to_rgb(cfg.ring_color), opacity)
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)

        for i in range(cfg.ring_count):
            radius = max_radius * (0.3 + i * 0.2) + math.sin(time * 2 + i) * 20
            if radius >= 1:
                pygame.draw.circle(overlay, color, (width / 2, height / 2), radius, 1)

        surface.blit(overlay, (0, 0))

    def surface_to_array(self, surface: pygame.Surface | None = None) -> np.ndarray:
        """RGB array of ``surface`` (default: the renderer's own)."""
        return surface_to_array(surface if surface is not None else self.surface)

    def capture_snapshot(self) -> str:
        """Encode the current raster as a ``data:image/png;base64`` URL."""
        return png_data_url(png_bytes(self.surface_to_array()))

    def iter_frames(
        self,
        vector: ResonanceVector,
        options: GlyphRenderOptions | None = None,
        n_frames: int = 60,
        fps: int | None = None,
    ) -> Iterator[np.ndarray]:
        """
        Render an offline animation at fixed ``1/fps`` steps.

        The live loop is stopped first. With a seeded generator the
        frames are reproducible.

        Yields:
            (H, W, 3) uint8 RGB arrays.
        """
        options = options or GlyphRenderOptions()
        fps = fps or self.config.fps

        self.stop_animation()
        self.resize(options.width, options.height)
        self.vector = vector
        self.options = options
        self.surface.fill(to_rgb(self.config.background_color))
        self.particles.initialize(
            particle_count(vector.symbolic_density),
            self.size,
            vector.glyph.color,
        )

        dt = TICK_RATE / fps
        for i in range(n_frames):
            self.render_frame(vector, options, i / fps, dt=dt)
            yield self.surface_to_array()

    def debug_snapshot(self) -> dict[str, Any]:
        """Copies of the renderer's internal state."""
        return {
            "state": self.animation.state.value,
            "time": self.time,
            "size": self.size,
            "frames_drawn": self.animation.frames_drawn,
            "frames_skipped": self.animation.frames_skipped,
            "field": self.field.snapshot(),
            "particles": self.particles.snapshot(),
        }
