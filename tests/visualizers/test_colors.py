"""Tests for color parsing."""

import pytest

from glyphmind.errors import InvalidColorFormat
from glyphmind.visualizers.colors import (
    NEUTRAL_GREY,
    hsl_to_rgb,
    parse_color,
    to_hex,
    to_rgb,
    with_alpha,
)


class TestParseColor:
    def test_hex(self):
        assert parse_color("#8b5cf6") == (139, 92, 246)
        assert parse_color("#F5A623") == (245, 166, 35)

    def test_short_hex(self):
        assert parse_color("#0ff") == (0, 255, 255)

    def test_hsl(self):
        assert parse_color("hsl(0, 100%, 50%)") == (255, 0, 0)
        assert parse_color("hsl(120, 100%, 50%)") == (0, 255, 0)
        assert parse_color("hsl(240, 100%, 50%)") == (0, 0, 255)

    def test_mapper_output_parses(self):
        assert parse_color("hsl(108, 50%, 70%)") == hsl_to_rgb(108, 50, 70)

    def test_rgb_and_sequences(self):
        assert parse_color("rgba(10, 10, 15, 0.1)") == (10, 10, 15)
        assert parse_color((300, -4, 12)) == (255, 0, 12)

    @pytest.mark.parametrize("value", ["", "purple", "#12345", "hsl(1, 2, 3)", None, 42])
    def test_invalid(self, value):
        with pytest.raises(InvalidColorFormat):
            parse_color(value)

    def test_invalid_is_value_error(self):
        with pytest.raises(ValueError):
            parse_color("nope")


class TestLenientHelpers:
    def test_fallback(self):
        assert to_rgb("not-a-color") == NEUTRAL_GREY
        assert to_rgb(None) == NEUTRAL_GREY

    def test_fallback_logged(self, caplog):
        with caplog.at_level("WARNING", logger="glyphmind.visualizers.colors"):
            to_rgb("definitely-not-a-color-xyz")
        assert "definitely-not-a-color-xyz" in caplog.text

    def test_with_alpha(self):
        assert with_alpha((1, 2, 3), 1.0) == (1, 2, 3, 255)
        assert with_alpha((1, 2, 3), 0.0) == (1, 2, 3, 0)
        assert with_alpha((1, 2, 3), 2.0)[3] == 255

    def test_to_hex(self):
        assert to_hex((245, 166, 35)) == "#f5a623"
