"""Turn raw message text into weighted candidate phrases."""
from __future__ import annotations

import re
from typing import Iterable, Sequence

from interest_engine.core.config import EngineConfig
from interest_engine.core.entities import WeightedPhrase
from interest_engine.core.ports import LinguisticAnalyzer, ProfanityFilter
from interest_engine.utils.logger import logger
from interest_engine.utils.text_cleaning import clean_text, default_stopwords, normalize_elongation

_HAS_LETTER = re.compile(r"[^\W\d_]", re.UNICODE)


def build_ngrams(tokens: Sequence[str], max_size: int) -> list[tuple[str, ...]]:
    """Contiguous windows of 1..max_size tokens, shortest first."""
    ngrams: list[tuple[str, ...]] = []
    for size in range(1, max_size + 1):
        if len(tokens) < size:
            break
        for start in range(len(tokens) - size + 1):
            ngrams.append(tuple(tokens[start : start + size]))
    return ngrams


class FeatureExtractor:
    """Stateless phrase extraction on top of the linguistic and profanity collaborators."""

    def __init__(
        self,
        analyzer: LinguisticAnalyzer,
        profanity_filter: ProfanityFilter,
        config: EngineConfig | None = None,
        stopwords: Iterable[str] | None = None,
    ) -> None:
        self._analyzer = analyzer
        self._profanity = profanity_filter
        self._config = config or EngineConfig()
        self._stopwords = frozenset(stopwords) if stopwords is not None else default_stopwords()

    def extract_candidates(self, text: str) -> list[WeightedPhrase]:
        cleaned = clean_text(text or "")
        if not cleaned:
            return []

        if self._profanity.contains_profanity(cleaned):
            logger.debug("Stripping profanity before extraction")
        remaining = self._profanity.strip(cleaned).strip()
        if not remaining:
            logger.debug("Message was entirely profane; skipping extraction")
            return []

        surface_tokens = self._filtered_tokens(remaining)
        if not surface_tokens:
            return []

        boosted = self._boosted_tokens(surface_tokens, remaining)
        tokens = [normalized for normalized, _ in surface_tokens]

        config = self._config
        phrases: list[WeightedPhrase] = []
        for ngram in build_ngrams(tokens, config.max_ngram_size):
            phrase = " ".join(ngram)
            if not config.min_phrase_length <= len(phrase) <= config.max_phrase_length:
                continue
            if all(token in self._stopwords for token in ngram):
                continue

            weight = 1.0
            if len(ngram) == 2:
                weight *= config.bigram_boost
            elif len(ngram) >= 3:
                weight *= config.trigram_boost
            weight += config.pos_ner_boost_per_token * sum(1 for token in ngram if token in boosted)
            phrases.append(WeightedPhrase(phrase=phrase, weight=weight))

        logger.debug("Extracted {} phrases from message", len(phrases))
        return phrases

    def _filtered_tokens(self, text: str) -> list[tuple[str, str]]:
        """Return ``(normalized, surface)`` pairs for tokens worth scoring."""
        pairs: list[tuple[str, str]] = []
        for surface in self._analyzer.tokenize(text):
            token = surface.lower()
            if not _HAS_LETTER.search(token):
                continue
            if self._config.normalize_elongation:
                token = normalize_elongation(token)
            if token in self._stopwords:
                continue
            pairs.append((token, surface))
        return pairs

    def _boosted_tokens(self, tokens: Sequence[tuple[str, str]], context: str) -> set[str]:
        boosted: set[str] = set()
        for normalized, surface in tokens:
            if normalized in boosted:
                continue
            if self._analyzer.classify(surface, context).is_boosted:
                boosted.add(normalized)
        return boosted


__all__ = ["FeatureExtractor", "build_ngrams"]
