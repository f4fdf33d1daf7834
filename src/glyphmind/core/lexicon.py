"""
Fixed word lists used by the text metrics engine.

Order matters for MOOD_KEYWORDS (first match wins) and ARCHETYPES
(indexed by text length).
"""

EMOTIONAL_WORDS = (
    "love", "hate", "fear", "joy", "anger", "sadness", "excitement", "anxiety",
    "passion", "rage", "bliss", "terror", "ecstasy", "despair", "hope", "dread",
)

INTENSIFIERS = ("very", "extremely", "incredibly", "absolutely", "completely")

COMPARISON_WORDS = ("like", "as", "seems", "appears", "resembles")

ABSTRACT_WORDS = (
    "consciousness", "reality", "existence", "meaning", "purpose", "soul",
    "spirit", "essence", "truth", "wisdom", "enlightenment", "transcendence",
)

TIME_WORDS = ("now", "then", "before", "after", "during", "while", "when", "until")

TRANSITION_WORDS = ("however", "therefore", "meanwhile", "consequently", "furthermore")

THEME_KEYWORDS = {
    "transformation": ("change", "transform", "evolve", "become", "shift"),
    "connection": ("together", "bond", "unite", "connect", "relationship"),
    "discovery": ("find", "discover", "reveal", "uncover", "explore"),
    "conflict": ("struggle", "fight", "battle", "oppose", "resist"),
    "growth": ("grow", "develop", "expand", "progress", "advance"),
    "mystery": ("unknown", "secret", "hidden", "mysterious", "enigma"),
}

FALLBACK_THEME = "existence"

MOOD_KEYWORDS = {
    "contemplative": ("think", "ponder", "reflect", "consider", "wonder"),
    "energetic": ("energy", "power", "force", "dynamic", "vibrant"),
    "melancholic": ("sad", "sorrow", "loss", "grief", "melancholy"),
    "euphoric": ("joy", "bliss", "ecstasy", "elation", "rapture"),
    "mysterious": ("mystery", "enigma", "puzzle", "riddle", "secret"),
}

FALLBACK_MOOD = "neutral"

ARCHETYPES = (
    "The Seeker", "The Sage", "The Creator", "The Rebel", "The Hero",
    "The Lover", "The Jester", "The Caregiver", "The Ruler", "The Magician",
)
