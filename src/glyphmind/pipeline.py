"""
Main GlyphMind pipeline.

Orchestrates the flow from text to resonance vector to exported
glyph: JSON record, PNG still or MP4 animation.
"""

import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Union

import numpy as np

from glyphmind.config import GlyphRenderOptions, RenderConfig
from glyphmind.core.analyzer import ResonanceVector, TextMetricsEngine
from glyphmind.io.encoder import encode_video
from glyphmind.io.exporter import ResonanceExporter, SnapshotExporter
from glyphmind.visualizers.glyph import GlyphRenderer

logger = logging.getLogger(__name__)


def use_headless_display():
    """Route SDL to the dummy video driver unless a driver is already chosen."""
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")


class GlyphPipeline:
    """
    Complete text-to-glyph pipeline.

    Combines analysis, offscreen rendering and export into a single
    interface. Every render uses a fresh renderer, so results do not
    depend on earlier calls.
    """

    def __init__(
        self,
        config: RenderConfig | None = None,
        options: GlyphRenderOptions | None = None,
        seed: int | None = None,
    ):
        """
        Args:
            config: Look and timing of rendered glyphs.
            options: Default render options (size, layer toggles).
            seed: Particle seed; overrides ``config.seed`` when given.
        """
        self.config = config or RenderConfig()
        if seed is not None:
            self.config = replace(self.config, seed=seed)
        self.options = options or GlyphRenderOptions()

        self.engine = TextMetricsEngine()
        self.exporter = ResonanceExporter()
        self.snapshots = SnapshotExporter()

    def analyze(self, text: str) -> ResonanceVector:
        return self.engine.analyze(text)

    def process(
        self,
        text: str,
        output_path: Union[str, Path] | None = None,
    ) -> dict[str, Any]:
        """
        Analyze ``text`` and build its record.

        Args:
            text: Input text.
            output_path: Optional JSON file for the record.

        Returns:
            Dictionary with the vector, its record and summary fields.
        """
        vector = self.analyze(text)
        record = self.exporter.build_record(vector, text)

        result = {
            "vector": vector,
            "record": record,
            "signature": vector.meaning_signature,
            "shape": vector.glyph.shape.value,
            "complexity": vector.glyph.complexity,
        }

        if output_path:
            result["output_path"] = str(self.exporter.export_json(vector, output_path, text))

        return result

    def create_renderer(self, options: GlyphRenderOptions | None = None) -> GlyphRenderer:
        """Fresh offscreen renderer sized for ``options``."""
        use_headless_display()
        options = options or self.options
        rng = np.random.default_rng(self.config.seed)
        return GlyphRenderer(
            config=self.config,
            rng=rng,
            size=(options.width, options.height),
        )

    def render_still(
        self,
        vector: ResonanceVector,
        output_path: Union[str, Path],
        options: GlyphRenderOptions | None = None,
    ) -> Path:
        """Render the static glyph and write it as PNG."""
        options = options or self.options
        renderer = self.create_renderer(options)
        renderer.render_static(vector, options)
        return self.snapshots.save_png(renderer.surface_to_array(), output_path)

    def render_frames(
        self,
        vector: ResonanceVector,
        duration: float = 5.0,
        options: GlyphRenderOptions | None = None,
        fps: int | None = None,
    ):
        """Offline animation frames as RGB arrays."""
        options = options or self.options
        fps = fps or self.config.fps
        n_frames = max(1, int(round(duration * fps)))
        renderer = self.create_renderer(options)
        return renderer.iter_frames(vector, options, n_frames, fps), n_frames

    def render_video(
        self,
        vector: ResonanceVector,
        output_path: Union[str, Path],
        duration: float = 5.0,
        options: GlyphRenderOptions | None = None,
        fps: int | None = None,
        quality: str = "medium",
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> Path:
        """
        Render ``duration`` seconds of animation to MP4.

        Raises:
            RuntimeError: If ffmpeg is missing or fails.
        """
        options = options or self.options
        fps = fps or self.config.fps
        frames, n_frames = self.render_frames(vector, duration, options, fps)

        logger.info(
            "Rendering %d frames at %dx%d @ %dfps", n_frames, options.width, options.height, fps
        )
        return encode_video(
            frames,
            output_path,
            width=options.width,
            height=options.height,
            fps=fps,
            quality=quality,
            total_frames=n_frames,
            progress_callback=progress_callback,
        )
