"""
Export module.

Writes analysis records to JSON and rendered frames to PNG, so a glyph
can be stored, shared or re-rendered later.
"""

import base64
import io
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Union

import numpy as np
import pygame
from PIL import Image

from glyphmind.core.analyzer import ResonanceVector

PNG_DATA_URL_PREFIX = "data:image/png;base64,"


def png_bytes(frame: np.ndarray) -> bytes:
    """Encode an (H, W, 3) uint8 RGB array as PNG."""
    buffer = io.BytesIO()
    Image.fromarray(np.asarray(frame, dtype=np.uint8)).save(buffer, format="PNG")
    return buffer.getvalue()


def surface_to_array(surface: pygame.Surface) -> np.ndarray:
    """Convert a pygame surface to an (H, W, 3) uint8 array."""
    # pygame uses (width, height) but numpy expects (height, width)
    arr = pygame.surfarray.array3d(surface)
    return np.ascontiguousarray(np.transpose(arr, (1, 0, 2)))


def png_data_url(data: bytes) -> str:
    return PNG_DATA_URL_PREFIX + base64.b64encode(data).decode("ascii")


def decode_data_url(url: str) -> bytes:
    """
    Inverse of :func:`png_data_url`.

    Raises:
        ValueError: If ``url`` is not a base64 PNG data URL.
    """
    if not url.startswith(PNG_DATA_URL_PREFIX):
        raise ValueError("Not a PNG data URL")
    return base64.b64decode(url[len(PNG_DATA_URL_PREFIX):], validate=True)


class SnapshotExporter:
    """Turns surfaces and RGB arrays into PNG bytes and PNG files."""

    def to_png(self, source: Union[pygame.Surface, np.ndarray]) -> bytes:
        frame = surface_to_array(source) if isinstance(source, pygame.Surface) else source
        return png_bytes(frame)

    def save_png(
        self,
        source: Union[pygame.Surface, np.ndarray],
        output_path: Union[str, Path],
    ) -> Path:
        """
        Write a PNG file.

        Args:
            source: Surface or RGB array.
            output_path: Destination path; parent directories are created.

        Returns:
            Path to written file.
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(self.to_png(source))
        return output_path


@dataclass
class RecordMetadata:
    """Header for an exported analysis record."""

    created: str
    text_length: int
    schema_version: str = "1.0"


class ResonanceExporter:
    """
    Exports resonance vectors to JSON records.

    Records use the camelCase vector shape, with metric values rounded
    to a fixed precision.
    """

    def __init__(self, precision: int = 2):
        """
        Args:
            precision: Decimal places for floating point values.
        """
        self.precision = precision

    def _round(self, value: float) -> float:
        return round(float(value), self.precision)

    def build_record(self, vector: ResonanceVector, text: str = "") -> dict[str, Any]:
        """Build a JSON-safe record for ``vector``."""
        metadata = RecordMetadata(
            created=datetime.now(timezone.utc).isoformat(),
            text_length=len(text),
        )

        data = vector.to_dict()
        for key in ("cognitiveLoad", "emotionalIntensity", "symbolicDensity", "temporalFlow"):
            data[key] = self._round(data[key])
        data["emergencePoints"] = [self._round(p) for p in data["emergencePoints"]]
        data["glyphData"]["frequency"] = self._round(data["glyphData"]["frequency"])

        return {
            "metadata": {
                "created": metadata.created,
                "text_length": metadata.text_length,
                "schema_version": metadata.schema_version,
            },
            "resonance": data,
        }

    def export_json(
        self,
        vector: ResonanceVector,
        output_path: Union[str, Path],
        text: str = "",
        indent: int = 2,
    ) -> Path:
        """
        Export a record to a JSON file.

        Returns:
            Path to written file.
        """
        record = self.build_record(vector, text)
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(record, f, indent=indent, ensure_ascii=False)

        return output_path

    @staticmethod
    def load_json(path: Union[str, Path]) -> ResonanceVector:
        """Read a record written by :meth:`export_json` (or a bare vector dict)."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return ResonanceVector.from_dict(data.get("resonance", data))
