"""Core entities for the interest extraction and suggestion domain."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping, Optional

NOUN = "noun"
ENTITY_KINDS: frozenset[str] = frozenset({"person", "place", "organization"})


@dataclass(frozen=True)
class TokenClassification:
    """Part of speech and named-entity kind reported for a single token."""

    part_of_speech: Optional[str] = None
    entity_kind: Optional[str] = None

    @property
    def is_boosted(self) -> bool:
        return self.part_of_speech == NOUN or self.entity_kind in ENTITY_KINDS


@dataclass(frozen=True)
class WeightedPhrase:
    """A phrase extracted from one message and the score it contributes."""

    phrase: str
    weight: float

    @property
    def size(self) -> int:
        return len(self.phrase.split(" "))


@dataclass
class Candidate:
    """A scored phrase tracked within one conversation."""

    phrase: str
    score: float = 0.0
    mention_count: int = 0
    last_seen_at: float = 0.0
    last_shown_at: Optional[float] = None
    cooldown_until: Optional[float] = None
    disliked_count: int = 0
    accepted: bool = False

    def scale_score(self, factor: float) -> None:
        self.score = max(0.0, self.score * factor)

    def in_cooldown(self, now: float) -> bool:
        return self.cooldown_until is not None and self.cooldown_until > now


@dataclass
class ConversationStore:
    """Per-conversation candidate map plus the time of the last processed message."""

    candidates: dict[str, Candidate] = field(default_factory=dict)
    last_message_at: float = 0.0
    last_suggested_phrase: Optional[str] = None
    last_suggested_at: Optional[float] = None


@dataclass
class SuggestionPoolEntry:
    """A known interest the engine may proactively ask the user about."""

    phrase: str
    timestamp: float
    is_selected: bool = False
    was_asked: bool = False

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        return {
            "phrase": payload["phrase"],
            "isSelected": payload["is_selected"],
            "wasAsked": payload["was_asked"],
            "timestamp": payload["timestamp"],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "SuggestionPoolEntry":
        phrase = payload.get("phrase")
        if not isinstance(phrase, str) or not phrase.strip():
            raise ValueError(f"Pool entry is missing a phrase: {payload!r}")
        return cls(
            phrase=phrase,
            timestamp=float(payload.get("timestamp", 0.0)),
            is_selected=bool(payload.get("isSelected", False)),
            was_asked=bool(payload.get("wasAsked", False)),
        )


__all__ = [
    "Candidate",
    "ConversationStore",
    "ENTITY_KINDS",
    "NOUN",
    "SuggestionPoolEntry",
    "TokenClassification",
    "WeightedPhrase",
]
