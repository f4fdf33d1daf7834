"""Tests for the text metrics engine."""

import pytest

from glyphmind.core import lexicon
from glyphmind.core.analyzer import (
    DEFAULT_VECTOR,
    ResonanceVector,
    TextMetricsEngine,
    analyze,
    cognitive_load,
    emergence_points,
    emotional_intensity,
    extract_archetype,
    extract_mood,
    extract_themes,
    meaning_signature,
    symbolic_density,
    temporal_flow,
)
from glyphmind.core.mapper import Shape


class TestDefaultVector:
    """Failure paths fall back to the documented default."""

    def test_empty_string_returns_default(self):
        assert analyze("") == DEFAULT_VECTOR

    def test_whitespace_returns_default(self):
        assert analyze("   \n\t ") == DEFAULT_VECTOR

    def test_non_string_returns_default(self):
        assert TextMetricsEngine().analyze(None) == DEFAULT_VECTOR

    def test_default_values(self):
        v = DEFAULT_VECTOR
        assert v.cognitive_load == 50
        assert v.emotional_intensity == 30
        assert v.symbolic_density == 40
        assert v.temporal_flow == 35
        assert v.emergence_points == (25, 75)
        assert v.meaning_signature == "Neutral resonance with contemplative undertones"
        assert v.glyph.shape is Shape.CIRCLE
        assert v.glyph.frequency == 0.5
        assert v.glyph.complexity == 3

    def test_failure_is_logged(self, caplog):
        with caplog.at_level("WARNING", logger="glyphmind.core.analyzer"):
            analyze("")
        assert "default resonance vector" in caplog.text


class TestScores:
    """Individual metric formulas."""

    def test_love_adds_fifteen(self):
        assert emotional_intensity("the day") == 0
        assert emotional_intensity("the day love") == 15

    def test_emotional_match_is_whole_word(self):
        assert emotional_intensity("a lovely hopeful day") == 0

    def test_emotional_match_ignores_case(self):
        assert emotional_intensity("LOVE") == 15

    def test_intensifier_and_punctuation_run(self):
        assert emotional_intensity("very") == 5
        assert emotional_intensity("what!?") == 10
        assert emotional_intensity("what!") == 0

    def test_emotional_clamped(self):
        assert emotional_intensity("love " * 20) == 100

    def test_cognitive_load_simple(self):
        # avg word length 5 -> 50, one clause
        assert cognitive_load("hello world") == pytest.approx(51)

    def test_cognitive_load_counts_empty_pieces(self):
        # "world." keeps its period; the trailing split piece adds a clause
        assert cognitive_load("hello world.") == pytest.approx(57)

    def test_cognitive_load_complex_words(self):
        # "understanding" has 13 chars -> avg 13 -> 130, clamped
        assert cognitive_load("understanding") == 100

    def test_symbolic_density(self):
        assert symbolic_density("a, b.") == 4
        assert symbolic_density("it seems so") == 10
        assert symbolic_density("truth") == 20

    def test_symbolic_density_counts_accented_letters(self):
        assert symbolic_density("na\u00efve caf\u00e9") == 4
        assert symbolic_density("snake_case 42") == 0

    def test_temporal_flow(self):
        assert temporal_flow("now and then, however") == pytest.approx(28)
        assert temporal_flow("nowhere") == 0


class TestEmergencePoints:
    def test_charged_sentence_is_marked(self, emotional_text):
        assert emergence_points(emotional_text) == pytest.approx((100 / 3,))

    def test_calm_text_has_none(self, plain_text):
        assert emergence_points(plain_text) == ()

    def test_sorted_and_in_range(self):
        text = "Love hate fear joy rage. Calm. Love hate fear joy rage! Extraordinarily incomprehensible."
        points = emergence_points(text)
        assert list(points) == sorted(points)
        assert all(0 <= p <= 100 for p in points)
        assert points[0] == 0


class TestSignature:
    def test_themes_fallback(self):
        assert extract_themes("nothing to see") == [lexicon.FALLBACK_THEME]

    def test_themes_substring_match(self):
        assert extract_themes("we will discover and grow together") == [
            "connection", "discovery", "growth",
        ]

    def test_mood_first_match_wins(self):
        assert extract_mood("I ponder the joy") == "contemplative"
        assert extract_mood("pure elation") == "euphoric"
        assert extract_mood("nothing") == "neutral"

    def test_archetype_by_length(self):
        assert extract_archetype("abc") == "The Rebel"
        assert extract_archetype("a" * 10) == "The Seeker"

    def test_format(self):
        assert meaning_signature("abc") == (
            "The Rebel resonance with neutral undertones, exploring themes of existence"
        )


class TestAnalyze:
    def test_ranges(self, plain_text, emotional_text, abstract_text):
        for text in (plain_text, emotional_text, abstract_text, "!!!???", "x"):
            v = analyze(text)
            for value in (v.cognitive_load, v.emotional_intensity, v.symbolic_density, v.temporal_flow):
                assert 0 <= value <= 100
            assert all(0 <= p <= 100 for p in v.emergence_points)
            assert v.glyph.frequency >= 0.5
            assert v.glyph.complexity >= 0

    def test_deterministic(self, abstract_text):
        assert analyze(abstract_text) == analyze(abstract_text)

    def test_glyph_consistent_with_scores(self, emotional_text):
        v = analyze(emotional_text)
        assert v.emotional_intensity == 100
        assert v.glyph.frequency == pytest.approx(1.0)
        assert v.glyph.complexity == int((v.cognitive_load + v.symbolic_density) // 20)

    def test_vector_is_frozen(self, sample_vector):
        with pytest.raises(AttributeError):
            sample_vector.cognitive_load = 0

    def test_dict_round_trip(self, sample_vector):
        data = sample_vector.to_dict()
        assert set(data) == {
            "cognitiveLoad", "emotionalIntensity", "symbolicDensity", "temporalFlow",
            "emergencePoints", "meaningSignature", "glyphData",
        }
        assert ResonanceVector.from_dict(data) == sample_vector

    def test_from_dict_clamps(self):
        v = ResonanceVector.from_dict({"cognitiveLoad": 250, "emergencePoints": [90, -5]})
        assert v.cognitive_load == 100
        assert v.emergence_points == (0, 90)

    @pytest.mark.parametrize("data", [None, "oops", {"glyphData": 3}])
    def test_from_dict_rejects_malformed(self, data):
        with pytest.raises(ValueError):
            ResonanceVector.from_dict(data)
