"""Tests for render options and config."""

import json

import pytest

from glyphmind.config import (
    LEGACY_RESPAWN_BOUNDS,
    GlyphRenderOptions,
    RenderConfig,
    load_render_options,
)


class TestGlyphRenderOptions:
    def test_defaults(self):
        options = GlyphRenderOptions()
        assert (options.width, options.height) == (400, 400)
        assert options.animate and options.show_particles and options.show_resonance_field

    def test_from_dict_camel_case(self):
        options = GlyphRenderOptions.from_dict(
            {"width": "320", "showParticles": False, "showResonanceField": 0, "colour": "red"}
        )
        assert options.width == 320
        assert options.height == 400
        assert options.show_particles is False
        assert options.show_resonance_field is False

    def test_to_dict_round_trip(self):
        options = GlyphRenderOptions(width=10, height=20, animate=False)
        assert GlyphRenderOptions.from_dict(options.to_dict()) == options

    def test_base_not_mutated(self):
        base = GlyphRenderOptions(width=100)
        GlyphRenderOptions.from_dict({"width": 50}, base)
        assert base.width == 100


class TestLoadRenderOptions:
    def test_load_with_base(self, tmp_path):
        path = tmp_path / "opts.json"
        path.write_text(json.dumps({"animate": False}), encoding="utf-8")
        options = load_render_options(path, GlyphRenderOptions(width=90))
        assert options.width == 90
        assert options.animate is False

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "opts.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError):
            load_render_options(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_render_options(tmp_path / "nope.json")


class TestRenderConfig:
    def test_respawn_bounds(self):
        assert RenderConfig().respawn_bounds is None
        assert RenderConfig(legacy_respawn_bounds=True).respawn_bounds == LEGACY_RESPAWN_BOUNDS
