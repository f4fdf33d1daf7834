"""
Voice analysis record.

Speech capture lives outside GlyphMind. The capture side hands over a
sampled volume envelope, which is summarized here into a VoiceAnalysis
that travels with a session entry as opaque metadata. The text metrics
engine never reads it.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Sequence

import numpy as np

EMOTIONAL_TONES = ("calm", "excited", "stressed", "neutral")

WORDS_PER_SECOND = 2.5
SILENCE_RATIO = 0.3


@dataclass
class VoiceAnalysis:
    """Summary statistics of one recording."""

    duration: float
    average_volume: float = 0.0
    peak_volume: float = 0.0
    silence_periods: list[float] = field(default_factory=list)
    speech_rate: float = 0.0  # words per minute estimate
    emotional_tone: str = "neutral"

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        return {
            "duration": data["duration"],
            "averageVolume": data["average_volume"],
            "peakVolume": data["peak_volume"],
            "silencePeriods": data["silence_periods"],
            "speechRate": data["speech_rate"],
            "emotionalTone": data["emotional_tone"],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VoiceAnalysis":
        tone = data.get("emotionalTone", "neutral")
        return cls(
            duration=float(data.get("duration", 0.0)),
            average_volume=float(data.get("averageVolume", 0.0)),
            peak_volume=float(data.get("peakVolume", 0.0)),
            silence_periods=[float(p) for p in data.get("silencePeriods", [])],
            speech_rate=float(data.get("speechRate", 0.0)),
            emotional_tone=tone if tone in EMOTIONAL_TONES else "neutral",
        )


def classify_tone(average: float, peak: float, variance: float) -> str:
    """Map volume statistics to one of EMOTIONAL_TONES."""
    intensity = peak / (average or 1)

    if variance > 500 and intensity > 2:
        return "excited"
    if variance > 300 and average > 50:
        return "stressed"
    if variance < 100 and average < 30:
        return "calm"
    return "neutral"


def _silence_periods(volume: np.ndarray, duration: float, threshold: float) -> list[float]:
    """Lengths (seconds) of closed runs below the silence threshold."""
    periods = []
    silence_start = None
    n = len(volume)
    for index, level in enumerate(volume):
        timestamp = index / n * duration
        if level < threshold and silence_start is None:
            silence_start = timestamp
        elif level >= threshold and silence_start is not None:
            periods.append(timestamp - silence_start)
            silence_start = None
    return periods


def summarize_volume(volume: Sequence[float], duration: float) -> VoiceAnalysis:
    """
    Summarize a volume envelope.

    Args:
        volume: Per-frame average spectrum magnitudes (0-255 scale).
        duration: Recording length in seconds.

    Returns:
        VoiceAnalysis with rounded average/peak volume and speech rate.
    """
    levels = np.asarray(volume, dtype=np.float64)
    if levels.size == 0:
        return VoiceAnalysis(duration=duration)

    average = float(levels.mean())
    peak = float(levels.max())
    variance = float(levels.var())

    silences = _silence_periods(levels, duration, average * SILENCE_RATIO)

    speaking_time = duration - sum(silences)
    if duration > 0:
        speech_rate = speaking_time * WORDS_PER_SECOND / duration * 60
    else:
        speech_rate = 0.0

    return VoiceAnalysis(
        duration=duration,
        average_volume=float(round(average)),
        peak_volume=float(round(peak)),
        silence_periods=silences,
        speech_rate=float(round(speech_rate)),
        emotional_tone=classify_tone(average, peak, variance),
    )
