"""Narrow collaborator interfaces injected into the engine at construction time."""
from __future__ import annotations

from typing import Optional, Protocol, Sequence

from interest_engine.core.entities import TokenClassification


class LinguisticAnalyzer(Protocol):
    def tokenize(self, text: str) -> list[str]:
        ...

    def classify(self, token: str, context: str) -> TokenClassification:
        ...


class ProfanityFilter(Protocol):
    def contains_profanity(self, text: str) -> bool:
        ...

    def strip(self, text: str) -> str:
        ...


class KeyValueStore(Protocol):
    def load(self, key: str) -> Optional[bytes]:
        ...

    def save(self, key: str, data: bytes) -> None:
        ...


class ProfileSync(Protocol):
    def replace_interests(self, user_id: str, tags: Sequence[str]) -> bool:
        ...


__all__ = ["KeyValueStore", "LinguisticAnalyzer", "ProfanityFilter", "ProfileSync"]
