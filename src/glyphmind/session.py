"""
Session history.

Keeps the analyses of one session (newest first), with auto-generated
tags, favorites, user preferences, search and JSON import/export.
Optionally persisted to a JSON file; persistence problems are logged
and never interrupt the session.
"""

import json
import logging
import time
import uuid
from collections import Counter
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Callable, Union

from glyphmind.core.analyzer import ResonanceVector
from glyphmind.core.voice import VoiceAnalysis

logger = logging.getLogger(__name__)

INPUT_TYPES = ("text", "voice", "symbol")
MAX_ENTRIES = 100
TAG_THRESHOLD = 70
TOP_TAGS = 10


@dataclass(frozen=True)
class Provider:
    """Descriptive metadata for an external analysis provider. Never called."""

    name: str
    endpoint: str
    model: str
    free: bool


PROVIDERS = (
    Provider(
        name="Groq",
        endpoint="https://api.groq.com/openai/v1/chat/completions",
        model="llama3-8b-8192",
        free=True,
    ),
    Provider(
        name="Hugging Face",
        endpoint="https://api-inference.huggingface.co/models/microsoft/DialoGPT-medium",
        model="microsoft/DialoGPT-medium",
        free=True,
    ),
)


def _generate_id(prefix: str, now: float) -> str:
    return f"{prefix}_{int(now * 1000)}_{uuid.uuid4().hex[:9]}"


def generate_tags(vector: ResonanceVector) -> list[str]:
    """Tags for an entry: strong metrics, the glyph shape, and ``emergent``."""
    tags = []
    if vector.cognitive_load > TAG_THRESHOLD:
        tags.append("complex")
    if vector.emotional_intensity > TAG_THRESHOLD:
        tags.append("intense")
    if vector.symbolic_density > TAG_THRESHOLD:
        tags.append("symbolic")
    if vector.temporal_flow > TAG_THRESHOLD:
        tags.append("dynamic")

    tags.append(vector.glyph.shape.value)

    if len(vector.emergence_points) > 2:
        tags.append("emergent")
    return tags


@dataclass
class SessionEntry:
    """One analyzed input."""

    id: str
    timestamp: float  # epoch seconds
    input_type: str
    input_data: str
    analysis: ResonanceVector
    voice_analysis: VoiceAnalysis | None = None
    glyph_snapshot: str | None = None  # PNG data URL
    tags: list[str] = field(default_factory=list)
    notes: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = {
            "id": self.id,
            "timestamp": int(round(self.timestamp * 1000)),
            "inputType": self.input_type,
            "inputData": self.input_data,
            "analysis": self.analysis.to_dict(),
            "tags": list(self.tags),
            "notes": self.notes,
        }
        if self.voice_analysis is not None:
            data["voiceAnalysis"] = self.voice_analysis.to_dict()
        if self.glyph_snapshot is not None:
            data["glyphSnapshot"] = self.glyph_snapshot
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionEntry":
        if not isinstance(data, dict) or not isinstance(data.get("analysis"), dict):
            raise ValueError("Malformed session entry")
        voice = data.get("voiceAnalysis")
        if not isinstance(voice, (dict, type(None))):
            raise ValueError("Malformed voice analysis")
        return cls(
            id=str(data["id"]),
            timestamp=float(data.get("timestamp", 0)) / 1000,
            input_type=data.get("inputType", "text"),
            input_data=str(data.get("inputData", "")),
            analysis=ResonanceVector.from_dict(data["analysis"]),
            voice_analysis=VoiceAnalysis.from_dict(voice) if voice else None,
            glyph_snapshot=data.get("glyphSnapshot"),
            tags=[str(t) for t in data.get("tags", [])],
            notes=str(data.get("notes") or ""),
        )


@dataclass
class Preferences:
    ai_provider: str = PROVIDERS[0].name
    auto_analyze: bool = True
    save_history: bool = True
    dark_mode: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "aiProvider": self.ai_provider,
            "autoAnalyze": self.auto_analyze,
            "saveHistory": self.save_history,
            "darkMode": self.dark_mode,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Preferences":
        defaults = cls()
        return cls(
            ai_provider=str(data.get("aiProvider", defaults.ai_provider)),
            auto_analyze=bool(data.get("autoAnalyze", defaults.auto_analyze)),
            save_history=bool(data.get("saveHistory", defaults.save_history)),
            dark_mode=bool(data.get("darkMode", defaults.dark_mode)),
        )


@dataclass
class SessionStats:
    total_entries: int
    total_analyses: int
    session_duration: float  # seconds
    average_analysis_time: float
    top_tags: list[tuple[str, int]]
    shape_distribution: list[tuple[str, int]]


class SessionHistory:
    """
    In-memory session with an optional JSON file store.

    Example:
        >>> history = SessionHistory()
        >>> entry = history.add_entry("text", text, analyze(text))
        >>> history.search("love", tags=["intense"])
    """

    def __init__(
        self,
        path: Union[str, Path, None] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            path: JSON file to load from and save to. In-memory only if None.
            clock: Returns the current epoch time in seconds.
        """
        self.path = Path(path) if path is not None else None
        self._clock = clock
        self._reset()
        if self.path is not None:
            self._load()

    def _reset(self):
        now = self._clock()
        self.id = _generate_id("session", now)
        self.start_time = now
        self.entries: list[SessionEntry] = []
        self.total_analyses = 0
        self.favorite_glyphs: list[str] = []
        self.preferences = Preferences()

    # Persistence

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "startTime": int(round(self.start_time * 1000)),
            "entries": [e.to_dict() for e in self.entries],
            "totalAnalyses": self.total_analyses,
            "favoriteGlyphs": list(self.favorite_glyphs),
            "preferences": self.preferences.to_dict(),
        }

    def _apply(self, data: Any) -> bool:
        """Replace the session with ``data`` if it looks like a session record."""
        if not isinstance(data, dict) or not data.get("id") or not isinstance(data.get("entries"), list):
            return False

        entries = [SessionEntry.from_dict(e) for e in data["entries"]]
        favorites = [str(f) for f in data.get("favoriteGlyphs", [])]
        preferences = data.get("preferences") or {}
        if not isinstance(preferences, dict):
            raise ValueError("Malformed preferences")
        start_time = float(data.get("startTime", 0)) / 1000 or self._clock()
        total = int(data.get("totalAnalyses", len(entries)))

        self.id = str(data["id"])
        self.start_time = start_time
        self.entries = entries[:MAX_ENTRIES]
        self.total_analyses = total
        self.favorite_glyphs = favorites
        self.preferences = Preferences.from_dict(preferences)
        return True

    def _load(self):
        if not self.path.exists():
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not self._apply(data):
                logger.warning("Ignoring malformed session file %s", self.path)
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning("Could not load session from %s: %s", self.path, exc)
            self._reset()

    def save(self) -> bool:
        """Write the session to the file store. Returns False on failure."""
        if self.path is None:
            return False
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Could not save session to %s: %s", self.path, exc)
            return False
        return True

    # Entries

    def add_entry(
        self,
        input_type: str,
        input_data: str,
        analysis: ResonanceVector,
        voice_analysis: VoiceAnalysis | None = None,
        glyph_snapshot: str | None = None,
    ) -> SessionEntry:
        """
        Record an analysis at the front of the history.

        Raises:
            ValueError: If ``input_type`` is not one of INPUT_TYPES.
        """
        if input_type not in INPUT_TYPES:
            raise ValueError(f"input_type must be one of {INPUT_TYPES}, got {input_type!r}")

        now = self._clock()
        entry = SessionEntry(
            id=_generate_id("entry", now),
            timestamp=now,
            input_type=input_type,
            input_data=input_data,
            analysis=analysis,
            voice_analysis=voice_analysis,
            glyph_snapshot=glyph_snapshot,
            tags=generate_tags(analysis),
        )

        self.entries.insert(0, entry)
        self.total_analyses += 1
        del self.entries[MAX_ENTRIES:]

        if self.preferences.save_history:
            self.save()
        return entry

    def get_entries(self, limit: int | None = None) -> list[SessionEntry]:
        return list(self.entries[:limit] if limit else self.entries)

    def get_entry(self, entry_id: str) -> SessionEntry | None:
        return next((e for e in self.entries if e.id == entry_id), None)

    def update_entry(self, entry_id: str, **updates) -> bool:
        """
        Replace fields of an entry, e.g. ``update_entry(id, notes="...")``.

        Raises:
            TypeError: For names that are not SessionEntry fields.
        """
        unknown = set(updates) - {f.name for f in fields(SessionEntry)}
        if unknown:
            raise TypeError(f"Unknown entry fields: {sorted(unknown)}")

        for index, entry in enumerate(self.entries):
            if entry.id == entry_id:
                self.entries[index] = replace(entry, **updates)
                self.save()
                return True
        return False

    def delete_entry(self, entry_id: str) -> bool:
        for index, entry in enumerate(self.entries):
            if entry.id == entry_id:
                del self.entries[index]
                self.save()
                return True
        return False

    # Favorites and preferences

    def add_favorite(self, glyph_snapshot: str):
        if glyph_snapshot not in self.favorite_glyphs:
            self.favorite_glyphs.append(glyph_snapshot)
            self.save()

    def remove_favorite(self, glyph_snapshot: str):
        if glyph_snapshot in self.favorite_glyphs:
            self.favorite_glyphs.remove(glyph_snapshot)
            self.save()

    def get_favorites(self) -> list[str]:
        return list(self.favorite_glyphs)

    def update_preferences(self, **updates):
        self.preferences = replace(self.preferences, **updates)
        self.save()

    def get_preferences(self) -> Preferences:
        return replace(self.preferences)

    # Queries

    def stats(self) -> SessionStats:
        duration = self._clock() - self.start_time
        n = len(self.entries)

        tag_counts = Counter(tag for entry in self.entries for tag in entry.tags)
        shape_counts = Counter(entry.analysis.glyph.shape.value for entry in self.entries)

        return SessionStats(
            total_entries=n,
            total_analyses=self.total_analyses,
            session_duration=duration,
            average_analysis_time=duration / n if n else 0.0,
            top_tags=tag_counts.most_common(TOP_TAGS),
            shape_distribution=shape_counts.most_common(),
        )

    def search(
        self,
        query: str = "",
        input_type: str | None = None,
        tags: list[str] | None = None,
        date_range: tuple[float, float] | None = None,
    ) -> list[SessionEntry]:
        """
        Filter entries, newest first.

        Args:
            query: Case-insensitive substring of the input, the meaning
                signature or any tag. Blank matches everything.
            input_type: Keep only this input type.
            tags: Keep entries carrying at least one of these tags.
            date_range: Inclusive (start, end) epoch seconds.
        """
        results = self.entries

        term = query.strip().lower()
        if term:
            results = [
                e for e in results
                if term in e.input_data.lower()
                or term in e.analysis.meaning_signature.lower()
                or any(term in tag.lower() for tag in e.tags)
            ]

        if input_type:
            results = [e for e in results if e.input_type == input_type]

        if tags:
            results = [e for e in results if any(tag in e.tags for tag in tags)]

        if date_range:
            start, end = date_range
            results = [e for e in results if start <= e.timestamp <= end]

        return list(results)

    # Import / export

    def export_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def import_json(self, payload: str) -> bool:
        """Replace the session with an exported one. Returns False if rejected."""
        try:
            data = json.loads(payload)
            if not self._apply(data):
                logger.warning("Rejected session import: not a session record")
                return False
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("Rejected session import: %s", exc)
            return False

        logger.info("Imported session %s with %d entries", self.id, len(self.entries))
        self.save()
        return True

    def clear(self):
        """Start a new empty session and remove the stored file."""
        self._reset()
        if self.path is not None:
            try:
                self.path.unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("Could not remove session file %s: %s", self.path, exc)
