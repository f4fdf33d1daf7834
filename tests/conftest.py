"""Pytest configuration and shared fixtures."""

import os

# Headless SDL before pygame is imported anywhere
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pygame
import pytest

from glyphmind.core.analyzer import analyze

TEST_SEED = 42


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator for reproducible particle runs."""
    return np.random.default_rng(TEST_SEED)


@pytest.fixture
def small_surface() -> pygame.Surface:
    """Small offscreen surface; big enough for every layer to land on it."""
    return pygame.Surface((160, 120))


@pytest.fixture
def plain_text() -> str:
    return "The cat sat on the mat and looked at the door."


@pytest.fixture
def emotional_text() -> str:
    """Several sentences, one of them emotionally charged."""
    return (
        "The morning was quiet. "
        "I feel love and hate, fear and joy, rage and despair!!! "
        "Then the rain stopped."
    )


@pytest.fixture
def abstract_text() -> str:
    return (
        "Consciousness seems like a river; reality appears as a dream. "
        "However, the truth of existence is meaning, purpose and wisdom."
    )


@pytest.fixture
def sample_vector(emotional_text):
    """A non-default resonance vector with emergence points."""
    return analyze(emotional_text)
