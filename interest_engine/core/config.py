"""Tunable constants for extraction, gating and the suggestion pool."""
from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

import yaml


@dataclass(frozen=True)
class EngineConfig:
    """Single configuration struct; variant behaviours are configuration choices."""

    # scoring
    min_score_to_suggest: float = 2.75
    min_mentions: int = 2
    strong_single_mention_threshold: float = 4.5
    bigram_boost: float = 1.2
    trigram_boost: float = 1.4
    pos_ner_boost_per_token: float = 0.25
    decay_time_constant_seconds: float = 1800.0
    score_tie_tolerance: float = 1e-4
    # cooldowns and feedback
    show_cooldown_seconds: float = 600.0
    reject_cooldown_seconds: float = 3600.0
    accept_cooldown_seconds: float = 86400.0
    accept_score_factor: float = 0.5
    reject_score_factor: float = 0.3
    max_dislikes_before_permanent_removal: int = 2
    # rate limit
    session_max_suggestions_per_hour: int = 3
    rate_limit_window_seconds: float = 3600.0
    # phrases
    min_phrase_length: int = 3
    max_phrase_length: int = 30
    max_ngram_size: int = 3
    normalize_elongation: bool = False
    # pool
    pool_capacity: int = 5
    adopted_interest_capacity: int = 5
    shuffle_curated_phrases: bool = True

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        positive = (
            "decay_time_constant_seconds",
            "rate_limit_window_seconds",
        )
        for name in positive:
            if getattr(self, name) <= 0:
                raise ValueError(f"'{name}' must be greater than zero.")

        at_least_one = (
            "min_phrase_length",
            "max_ngram_size",
            "pool_capacity",
            "adopted_interest_capacity",
            "max_dislikes_before_permanent_removal",
        )
        for name in at_least_one:
            if getattr(self, name) < 1:
                raise ValueError(f"'{name}' must be at least 1.")

        non_negative = (
            "min_score_to_suggest",
            "min_mentions",
            "strong_single_mention_threshold",
            "pos_ner_boost_per_token",
            "score_tie_tolerance",
            "show_cooldown_seconds",
            "reject_cooldown_seconds",
            "accept_cooldown_seconds",
            "session_max_suggestions_per_hour",
        )
        for name in non_negative:
            if getattr(self, name) < 0:
                raise ValueError(f"'{name}' cannot be negative.")

        for name in ("accept_score_factor", "reject_score_factor"):
            value = getattr(self, name)
            if not 0 < value <= 1:
                raise ValueError(f"'{name}' must be within (0, 1], got {value}.")

        for name in ("bigram_boost", "trigram_boost"):
            if getattr(self, name) < 1:
                raise ValueError(f"'{name}' must be at least 1.0.")

        if self.min_phrase_length > self.max_phrase_length:
            raise ValueError(
                f"'min_phrase_length' ({self.min_phrase_length}) cannot be greater than "
                f"'max_phrase_length' ({self.max_phrase_length})."
            )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> "EngineConfig":
        if not mapping:
            return cls()

        defaults = {item.name: item.default for item in fields(cls)}
        unknown = sorted(set(mapping) - set(defaults))
        if unknown:
            raise ValueError("Unknown engine configuration keys: " + ", ".join(unknown))

        values: dict[str, Any] = {}
        for name, raw in mapping.items():
            default = defaults[name]
            if isinstance(default, bool):
                if not isinstance(raw, bool):
                    raise ValueError(f"'{name}' must be a boolean, got {raw!r}.")
                values[name] = raw
                continue
            try:
                values[name] = type(default)(raw)
            except (TypeError, ValueError) as error:
                raise ValueError(f"Invalid value for '{name}': {raw!r}") from error
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "EngineConfig":
        with Path(path).open("r", encoding="utf-8") as file:
            document = yaml.safe_load(file) or {}
        if not isinstance(document, Mapping):
            raise ValueError(f"Configuration file {path} must contain a mapping.")
        if "engine" in document:
            return cls.from_mapping(document["engine"])
        flat = {key: value for key, value in document.items() if key not in {"logging", "storage"}}
        return cls.from_mapping(flat)


__all__ = ["EngineConfig"]
