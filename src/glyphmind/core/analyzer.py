"""
Text metrics module.

Scores free text on four heuristic axes and assembles the resonance
vector that drives the glyph renderer:
- Cognitive Load → word length, long words, clause count
- Emotional Intensity → emotional lexicon, intensifiers, !? runs
- Symbolic Density → punctuation, comparisons, abstract concepts
- Temporal Flow → time words and transitions

Everything here is synchronous and deterministic.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable

from glyphmind.core import lexicon
from glyphmind.core.mapper import GlyphDescriptor, Shape, map_glyph
from glyphmind.errors import AnalysisFailure

logger = logging.getLogger(__name__)

WORD_SPLIT = re.compile(r"\s+")
SENTENCE_SPLIT = re.compile(r"[.!?]+")
CLAUSE_SPLIT = re.compile(r"[,;:]")
PUNCTUATION_RUN = re.compile(r"[!?]{2,}")
# Letters, digits and underscore are ASCII only, so accented letters count as symbols
SYMBOL = re.compile(r"[^A-Za-z0-9_\s]")

COMPLEX_WORD_LENGTH = 6
EMERGENCE_EMOTIONAL_THRESHOLD = 60
EMERGENCE_COGNITIVE_THRESHOLD = 70


def _lexicon_pattern(words: Iterable[str]) -> re.Pattern:
    """Whole-word, case-insensitive alternation over a word list."""
    return re.compile(r"\b(?:" + "|".join(re.escape(w) for w in words) + r")\b", re.IGNORECASE)


EMOTIONAL_PATTERN = _lexicon_pattern(lexicon.EMOTIONAL_WORDS)
INTENSIFIER_PATTERN = _lexicon_pattern(lexicon.INTENSIFIERS)
COMPARISON_PATTERN = _lexicon_pattern(lexicon.COMPARISON_WORDS)
ABSTRACT_PATTERN = _lexicon_pattern(lexicon.ABSTRACT_WORDS)
TIME_PATTERN = _lexicon_pattern(lexicon.TIME_WORDS)
TRANSITION_PATTERN = _lexicon_pattern(lexicon.TRANSITION_WORDS)


def clamp_score(value: float) -> float:
    """Clamp a metric to [0, 100]."""
    return float(max(0.0, min(100.0, value)))


@dataclass(frozen=True)
class ResonanceVector:
    """Four-scalar resonance signature plus derived glyph data."""

    cognitive_load: float
    emotional_intensity: float
    symbolic_density: float
    temporal_flow: float
    emergence_points: tuple[float, ...]
    meaning_signature: str
    glyph: GlyphDescriptor

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the camelCase record shape shared with storage."""
        return {
            "cognitiveLoad": self.cognitive_load,
            "emotionalIntensity": self.emotional_intensity,
            "symbolicDensity": self.symbolic_density,
            "temporalFlow": self.temporal_flow,
            "emergencePoints": list(self.emergence_points),
            "meaningSignature": self.meaning_signature,
            "glyphData": self.glyph.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResonanceVector":
        """Rebuild a vector from a stored record, clamping every metric to range.

        Raises:
            ValueError: If the record or its glyph data is not a mapping.
        """
        glyph = data.get("glyphData") if isinstance(data, dict) else None
        if not isinstance(data, dict) or not isinstance(glyph, (dict, type(None))):
            raise ValueError("Malformed resonance record")

        points = sorted(clamp_score(p) for p in data.get("emergencePoints", []))
        return cls(
            cognitive_load=clamp_score(data.get("cognitiveLoad", 0.0)),
            emotional_intensity=clamp_score(data.get("emotionalIntensity", 0.0)),
            symbolic_density=clamp_score(data.get("symbolicDensity", 0.0)),
            temporal_flow=clamp_score(data.get("temporalFlow", 0.0)),
            emergence_points=tuple(points),
            meaning_signature=str(data.get("meaningSignature", "")),
            glyph=GlyphDescriptor.from_dict(glyph or {}),
        )


DEFAULT_GLYPH_COLOR = "#8b5cf6"

DEFAULT_VECTOR = ResonanceVector(
    cognitive_load=50.0,
    emotional_intensity=30.0,
    symbolic_density=40.0,
    temporal_flow=35.0,
    emergence_points=(25.0, 75.0),
    meaning_signature="Neutral resonance with contemplative undertones",
    glyph=GlyphDescriptor(
        shape=Shape.CIRCLE,
        frequency=0.5,
        color=DEFAULT_GLYPH_COLOR,
        complexity=3,
    ),
)


def _count(pattern: re.Pattern, text: str) -> int:
    return len(pattern.findall(text))


def cognitive_load(text: str) -> float:
    """
    Score structural complexity.

    ``avg_word_length * 10 + long_words * 2 + clause_total``. Empty pieces
    produced by leading/trailing whitespace or a trailing terminator are
    counted, matching how the scores have always been calibrated.
    """
    words = WORD_SPLIT.split(text)
    avg_word_length = sum(len(w) for w in words) / len(words)
    complex_words = sum(1 for w in words if len(w) > COMPLEX_WORD_LENGTH)
    clauses = sum(len(CLAUSE_SPLIT.split(s)) for s in SENTENCE_SPLIT.split(text))

    return clamp_score(avg_word_length * 10 + complex_words * 2 + clauses)


def emotional_intensity(text: str) -> float:
    """Score emotional charge from lexicon hits and !/? runs."""
    score = (
        _count(EMOTIONAL_PATTERN, text) * 15
        + _count(INTENSIFIER_PATTERN, text) * 5
        + _count(PUNCTUATION_RUN, text) * 10
    )
    return clamp_score(score)


def symbolic_density(text: str) -> float:
    """Score symbol use, comparisons and abstract vocabulary."""
    score = (
        _count(SYMBOL, text) * 2
        + _count(COMPARISON_PATTERN, text) * 10
        + _count(ABSTRACT_PATTERN, text) * 20
    )
    return clamp_score(score)


def temporal_flow(text: str) -> float:
    """Score time references and transitions."""
    score = _count(TIME_PATTERN, text) * 8 + _count(TRANSITION_PATTERN, text) * 12
    return clamp_score(score)


def split_sentences(text: str) -> list[str]:
    """Split on runs of . ! ? and drop blank pieces."""
    return [s for s in SENTENCE_SPLIT.split(text) if s.strip()]


def emergence_points(text: str) -> tuple[float, ...]:
    """
    Normalized positions (0-100) of sentences with outlier scores.

    Ascending by construction since sentences are visited in order.
    """
    sentences = split_sentences(text)
    n = len(sentences)
    points = []
    for i, sentence in enumerate(sentences):
        if (
            emotional_intensity(sentence) > EMERGENCE_EMOTIONAL_THRESHOLD
            or cognitive_load(sentence) > EMERGENCE_COGNITIVE_THRESHOLD
        ):
            points.append(clamp_score(i / n * 100))
    return tuple(points)


def extract_themes(text: str) -> list[str]:
    lowered = text.lower()
    themes = [
        theme
        for theme, keywords in lexicon.THEME_KEYWORDS.items()
        if any(keyword in lowered for keyword in keywords)
    ]
    return themes or [lexicon.FALLBACK_THEME]


def extract_mood(text: str) -> str:
    lowered = text.lower()
    for mood, keywords in lexicon.MOOD_KEYWORDS.items():
        if any(keyword in lowered for keyword in keywords):
            return mood
    return lexicon.FALLBACK_MOOD


def extract_archetype(text: str) -> str:
    return lexicon.ARCHETYPES[len(text) % len(lexicon.ARCHETYPES)]


def meaning_signature(text: str) -> str:
    """Compose the natural-language summary of a text."""
    return (
        f"{extract_archetype(text)} resonance with {extract_mood(text)} undertones, "
        f"exploring themes of {', '.join(extract_themes(text))}"
    )


class TextMetricsEngine:
    """
    Turns text into a ResonanceVector.

    Never raises: any failure (including empty input) is logged and
    replaced by DEFAULT_VECTOR.
    """

    def analyze(self, text: str) -> ResonanceVector:
        try:
            return self._analyze(text)
        except Exception as exc:
            logger.warning("Text analysis failed (%s); using default resonance vector", exc)
            return DEFAULT_VECTOR

    def _analyze(self, text: str) -> ResonanceVector:
        if not isinstance(text, str):
            raise AnalysisFailure(f"expected str, got {type(text).__name__}")
        if not text.strip():
            raise AnalysisFailure("no text to analyze")

        cognitive = cognitive_load(text)
        emotional = emotional_intensity(text)
        symbolic = symbolic_density(text)

        vector = ResonanceVector(
            cognitive_load=cognitive,
            emotional_intensity=emotional,
            symbolic_density=symbolic,
            temporal_flow=temporal_flow(text),
            emergence_points=emergence_points(text),
            meaning_signature=meaning_signature(text),
            glyph=map_glyph(cognitive, emotional, symbolic),
        )
        logger.debug(
            "Analyzed %d chars: shape=%s complexity=%d",
            len(text), vector.glyph.shape.value, vector.glyph.complexity,
        )
        return vector


def analyze(text: str) -> ResonanceVector:
    """Module-level convenience wrapper around TextMetricsEngine.analyze."""
    return TextMetricsEngine().analyze(text)
