"""Export and encoding."""

from glyphmind.io.encoder import encode_video
from glyphmind.io.exporter import (
    ResonanceExporter,
    SnapshotExporter,
    png_bytes,
    png_data_url,
    surface_to_array,
)

__all__ = [
    "encode_video",
    "ResonanceExporter",
    "SnapshotExporter",
    "png_bytes",
    "png_data_url",
    "surface_to_array",
]
