"""Utility functions for chat message preprocessing."""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable

from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

from interest_engine.utils.logger import logger

_URL_PATTERN = re.compile(r"https?://\S+|www\.\S+")
_MENTION_PATTERN = re.compile(r"@[\w_]+")
_HASHTAG_MARKER_PATTERN = re.compile(r"#(?=\w)")
_MULTISPACE_PATTERN = re.compile(r"\s+")
_ELONGATION_PATTERN = re.compile(r"(.)\1{2,}")

_CHAT_STOPWORDS: frozenset[str] = frozenset(
    {
        "a", "about", "also", "an", "and", "are", "as", "at", "be", "but", "by",
        "can", "could", "down", "for", "from", "he", "her", "him", "i", "if",
        "in", "into", "is", "it", "just", "least", "less", "me", "more", "most",
        "my", "no", "not", "of", "off", "on", "or", "our", "ours", "out", "over",
        "she", "should", "so", "such", "than", "that", "the", "their", "theirs",
        "them", "then", "there", "these", "they", "this", "to", "too", "under",
        "up", "very", "via", "was", "we", "will", "with", "would", "you", "your",
        "yours",
        # greetings and fillers that show up in almost every chat
        "hi", "hey", "hello", "hii", "helo", "yo", "sup", "wassup", "whatsup",
        "yes", "yeah", "yep", "yup", "nah", "nope", "ok", "okay", "kay", "sure",
        "wow", "omg", "lol", "lmao", "haha", "hehe", "hmm", "umm", "uhh", "uh",
        "oh", "ah", "im", "dont", "thanks", "thx", "pls", "please",
    }
)

_LEGITIMATE_DOUBLES: dict[str, str] = {
    "footbal": "football",
    "swiming": "swimming",
    "runing": "running",
    "hapines": "happiness",
    "succes": "success",
    "acces": "access",
    "proces": "process",
    "busines": "business",
    "profes": "profess",
    "clas": "class",
    "dres": "dress",
    "pres": "press",
    "ful": "full",
    "wel": "well",
    "tel": "tell",
    "cel": "cell",
    "bil": "bill",
    "wil": "will",
    "hil": "hill",
    "fil": "fill",
    "kil": "kill",
}

_TRAILING_REPEAT_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^(okay)y+$"), r"\1"),
    (re.compile(r"^(yeah)h+$"), r"\1"),
    (re.compile(r"^(hello)o+$"), r"\1"),
    (re.compile(r"^(please)e+$"), r"\1"),
    (re.compile(r"^(thanks)s+$"), r"\1"),
    (re.compile(r"^(nice)e+$"), r"\1"),
    (re.compile(r"^(cool)l+$"), r"\1"),
)


@lru_cache(maxsize=1)
def default_stopwords() -> frozenset[str]:
    """Return the chat seed list combined with scikit-learn's English stop words."""
    combined = {token.lower() for token in _CHAT_STOPWORDS.union(ENGLISH_STOP_WORDS)}
    combined.discard("")
    return frozenset(combined)


def build_stopwords(
    extra: Iterable[str] | None = None, exclusions: Iterable[str] | None = None
) -> frozenset[str]:
    """Extend or trim the default stop-word set."""
    stopwords = set(default_stopwords())
    if extra:
        stopwords.update(token.strip().lower() for token in extra if token.strip())
    if exclusions:
        stopwords.difference_update(token.strip().lower() for token in exclusions)
    return frozenset(stopwords)


def clean_text(text: str) -> str:
    """Strip urls, mentions and hashtag markers, then collapse whitespace.

    Hashtag words are kept (``#hiking`` becomes ``hiking``) since they are often
    the strongest topical signal in a message.
    """
    logger.debug("Cleaning text: {}", text)
    text = _URL_PATTERN.sub(" ", text)
    text = _MENTION_PATTERN.sub(" ", text)
    text = _HASHTAG_MARKER_PATTERN.sub("", text)
    text = _MULTISPACE_PATTERN.sub(" ", text).strip()
    logger.debug("Cleaned text: {}", text)
    return text


def normalize_elongation(word: str) -> str:
    """Collapse elongated spellings such as ``fooootballl`` into ``football``."""
    normalized = word.strip().lower()
    previous = None
    passes = 0
    while normalized != previous and passes < 5:
        previous = normalized
        normalized = _ELONGATION_PATTERN.sub(r"\1", normalized)
        passes += 1

    normalized = _LEGITIMATE_DOUBLES.get(normalized, normalized)

    for pattern, replacement in _TRAILING_REPEAT_PATTERNS:
        replaced = pattern.sub(replacement, normalized)
        if replaced != normalized:
            normalized = replaced
            break

    if normalized != word.lower():
        logger.debug("Normalized elongated word '{}' to '{}'", word, normalized)
    return normalized


__all__ = ["build_stopwords", "clean_text", "default_stopwords", "normalize_elongation"]
