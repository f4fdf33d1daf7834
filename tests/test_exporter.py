"""Tests for record and snapshot export."""

import io
import json

import numpy as np
import pygame
import pytest
from PIL import Image

from glyphmind.io.exporter import (
    ResonanceExporter,
    SnapshotExporter,
    decode_data_url,
    png_bytes,
    png_data_url,
    surface_to_array,
)


class TestResonanceExporter:
    def test_record_structure(self, sample_vector, emotional_text):
        record = ResonanceExporter().build_record(sample_vector, emotional_text)
        assert set(record) == {"metadata", "resonance"}
        assert record["metadata"]["text_length"] == len(emotional_text)
        assert "created" in record["metadata"]
        assert record["resonance"]["glyphData"]["shape"] == sample_vector.glyph.shape.value

    def test_values_rounded(self, sample_vector):
        record = ResonanceExporter(precision=1).build_record(sample_vector)
        for point in record["resonance"]["emergencePoints"]:
            assert point == round(point, 1)
        assert record["resonance"]["cognitiveLoad"] == round(sample_vector.cognitive_load, 1)

    def test_record_is_json_safe(self, sample_vector):
        json.dumps(ResonanceExporter().build_record(sample_vector))

    def test_export_and_load(self, sample_vector, tmp_path):
        exporter = ResonanceExporter(precision=6)
        path = exporter.export_json(sample_vector, tmp_path / "out" / "record.json")
        assert path.exists()

        loaded = ResonanceExporter.load_json(path)
        assert loaded.glyph.shape is sample_vector.glyph.shape
        assert loaded.glyph.color == sample_vector.glyph.color
        assert loaded.glyph.frequency == pytest.approx(sample_vector.glyph.frequency, abs=1e-6)
        assert loaded.cognitive_load == pytest.approx(sample_vector.cognitive_load, abs=1e-6)
        assert loaded.meaning_signature == sample_vector.meaning_signature


class TestSnapshotExporter:
    @pytest.fixture
    def surface(self):
        s = pygame.Surface((8, 4))
        s.fill((10, 20, 30))
        s.set_at((7, 0), (255, 0, 0))
        return s

    def test_to_array_orientation(self, surface):
        arr = surface_to_array(surface)
        assert arr.shape == (4, 8, 3)
        assert tuple(arr[0, 7]) == (255, 0, 0)
        assert tuple(arr[3, 0]) == (10, 20, 30)

    def test_png_decodes(self, surface):
        data = SnapshotExporter().to_png(surface)
        img = Image.open(io.BytesIO(data))
        assert img.size == (8, 4)
        assert img.getpixel((7, 0))[:3] == (255, 0, 0)

    def test_save_png(self, surface, tmp_path):
        path = SnapshotExporter().save_png(surface, tmp_path / "a" / "glyph.png")
        assert path.read_bytes()[:4] == b"\x89PNG"

    def test_data_url(self):
        frame = np.zeros((2, 2, 3), dtype=np.uint8)
        url = png_data_url(png_bytes(frame))
        assert url.startswith("data:image/png;base64,")
        assert decode_data_url(url) == png_bytes(frame)

    def test_decode_rejects_other_urls(self):
        with pytest.raises(ValueError):
            decode_data_url("data:text/plain;base64,aGk=")
