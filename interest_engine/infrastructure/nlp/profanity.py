"""Word-list profanity filter."""
from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

from interest_engine.utils.logger import logger
from interest_engine.utils.text_cleaning import normalize_elongation

_WORD_PATTERN = re.compile(r"\w+(?:['’]\w+)*", re.UNICODE)
_MULTISPACE_PATTERN = re.compile(r"\s+")

_DEFAULT_WORDS: frozenset[str] = frozenset(
    {
        "arse", "asshole", "bastard", "bitch", "bollocks", "bullshit", "crap", "cunt",
        "damn", "dick", "douche", "fuck", "fucked", "fucker", "fucking", "motherfucker",
        "piss", "prick", "pussy", "shit", "shitty", "slut", "twat", "wanker", "whore",
    }
)


class WordListProfanityFilter:
    """Match whole words against a list, tolerating elongated spellings."""

    def __init__(self, words: Iterable[str] | None = None) -> None:
        source = _DEFAULT_WORDS if words is None else words
        self._words = frozenset(word.strip().lower() for word in source if word.strip())

    @classmethod
    def from_file(cls, path: str | Path) -> "WordListProfanityFilter":
        word_path = Path(path)
        logger.info("Loading profanity word list from {}", word_path)
        lines = word_path.read_text(encoding="utf-8").splitlines()
        return cls(line for line in lines if line.strip() and not line.lstrip().startswith("#"))

    def _is_profane(self, word: str) -> bool:
        lowered = word.lower()
        return lowered in self._words or normalize_elongation(lowered) in self._words

    def contains_profanity(self, text: str) -> bool:
        return any(self._is_profane(match.group(0)) for match in _WORD_PATTERN.finditer(text))

    def strip(self, text: str) -> str:
        stripped = _WORD_PATTERN.sub(
            lambda match: " " if self._is_profane(match.group(0)) else match.group(0), text
        )
        return _MULTISPACE_PATTERN.sub(" ", stripped).strip()


__all__ = ["WordListProfanityFilter"]
