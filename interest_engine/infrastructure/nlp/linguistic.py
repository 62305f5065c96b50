"""Tokenization and lightweight part-of-speech / named-entity classification."""
from __future__ import annotations

import re
import threading
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterable, Mapping

import nltk
from nltk.tree import Tree

from interest_engine.core.entities import NOUN, TokenClassification
from interest_engine.infrastructure.interests.curated import ACTIVITY_KEYWORDS
from interest_engine.utils.logger import logger

_TOKEN_PATTERN = re.compile(r"\w+(?:['’-]\w+)*", re.UNICODE)
_SENTENCE_BREAK = re.compile(r"[.!?]\s*$")

_NLTK_NOUN_TAGS = frozenset({"NN", "NNS", "NNP", "NNPS"})
_NLTK_ENTITY_LABELS: Mapping[str, str] = {
    "PERSON": "person",
    "GPE": "place",
    "GSP": "place",
    "LOCATION": "place",
    "FACILITY": "place",
    "ORGANIZATION": "organization",
}

# Newer NLTK releases renamed several resources; the first available wins.
_NLTK_RESOURCES: Mapping[str, tuple[tuple[str, str], ...]] = {
    "tokenizer": (("tokenizers/punkt_tab", "punkt_tab"), ("tokenizers/punkt", "punkt")),
    "tagger": (
        ("taggers/averaged_perceptron_tagger_eng", "averaged_perceptron_tagger_eng"),
        ("taggers/averaged_perceptron_tagger", "averaged_perceptron_tagger"),
    ),
    "chunker": (
        ("chunkers/maxent_ne_chunker_tab", "maxent_ne_chunker_tab"),
        ("chunkers/maxent_ne_chunker", "maxent_ne_chunker"),
    ),
    "words": (("corpora/words", "words"),),
}


@dataclass
class LexiconLinguisticAnalyzer:
    """Dictionary-driven analyzer with no model downloads.

    A token counts as a noun when it belongs to the activity lexicon or when it
    is capitalised somewhere other than the start of a sentence. Named entities
    come from an optional gazetteer.
    """

    nouns: frozenset[str] = ACTIVITY_KEYWORDS
    gazetteer: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.nouns = frozenset(noun.lower() for noun in self.nouns)
        self.gazetteer = {key.lower(): value for key, value in self.gazetteer.items()}

    def tokenize(self, text: str) -> list[str]:
        return _TOKEN_PATTERN.findall(text)

    def classify(self, token: str, context: str) -> TokenClassification:
        lowered = token.lower()
        entity_kind = self.gazetteer.get(lowered)
        if lowered in self.nouns or self._capitalised_mid_sentence(token, context):
            return TokenClassification(part_of_speech=NOUN, entity_kind=entity_kind)
        return TokenClassification(part_of_speech=None, entity_kind=entity_kind)

    @staticmethod
    def _capitalised_mid_sentence(token: str, context: str) -> bool:
        for match in _TOKEN_PATTERN.finditer(context):
            word = match.group(0)
            if word.lower() != token.lower() or not word[:1].isupper() or word.isupper():
                continue
            preceding = context[: match.start()].rstrip()
            if preceding and not _SENTENCE_BREAK.search(preceding):
                return True
        return False


def _resource_available(candidates: Iterable[tuple[str, str]]) -> bool:
    candidates = tuple(candidates)
    for path, _ in candidates:
        try:
            nltk.data.find(path)
            return True
        except LookupError:
            continue

    for path, package in candidates:
        logger.info("Downloading NLTK resource '{}'…", package)
        try:
            nltk.download(package, quiet=True)
            nltk.data.find(path)
            return True
        except Exception as error:  # noqa: BLE001
            logger.warning("Failed to obtain NLTK resource '{}': {}", package, error)
    return False


@lru_cache(maxsize=256)
def _tag_context(context: str) -> Mapping[str, TokenClassification]:
    tokens = nltk.word_tokenize(context)
    tagged = nltk.pos_tag(tokens)
    tree = nltk.ne_chunk(tagged)

    classifications: dict[str, TokenClassification] = {}
    for node in tree:
        if isinstance(node, Tree):
            entity_kind = _NLTK_ENTITY_LABELS.get(node.label())
            for word, tag in node.leaves():
                part_of_speech = NOUN if tag in _NLTK_NOUN_TAGS else None
                classifications[word.lower()] = TokenClassification(part_of_speech, entity_kind)
            continue
        word, tag = node
        key = word.lower()
        existing = classifications.get(key)
        if tag in _NLTK_NOUN_TAGS:
            classifications[key] = TokenClassification(NOUN, existing.entity_kind if existing else None)
        elif existing is None:
            classifications[key] = TokenClassification()
    return classifications


class NltkLinguisticAnalyzer:
    """Analyzer backed by NLTK's tokenizer, perceptron tagger and NE chunker.

    Resources are checked (and downloaded when missing) on first use. If any of
    them stays unavailable the analyzer logs a warning and answers through a
    :class:`LexiconLinguisticAnalyzer` instead.
    """

    def __init__(self, fallback: LexiconLinguisticAnalyzer | None = None) -> None:
        self._fallback = fallback or LexiconLinguisticAnalyzer()
        self._ready: bool | None = None
        self._lock = threading.Lock()

    def _ensure_ready(self) -> bool:
        with self._lock:
            if self._ready is None:
                self._ready = all(
                    _resource_available(candidates) for candidates in _NLTK_RESOURCES.values()
                )
                if not self._ready:
                    logger.warning("NLTK resources unavailable; using lexicon analyzer fallback.")
            return self._ready

    def tokenize(self, text: str) -> list[str]:
        if not self._ensure_ready():
            return self._fallback.tokenize(text)
        try:
            return [token for token in nltk.word_tokenize(text) if _TOKEN_PATTERN.fullmatch(token)]
        except LookupError as error:
            logger.warning("NLTK tokenizer failed: {}", error)
            return self._fallback.tokenize(text)

    def classify(self, token: str, context: str) -> TokenClassification:
        if not self._ensure_ready():
            return self._fallback.classify(token, context)
        try:
            tags = _tag_context(context)
        except LookupError as error:
            logger.warning("NLTK tagging failed: {}", error)
            return self._fallback.classify(token, context)
        return tags.get(token.lower(), TokenClassification())


__all__ = ["LexiconLinguisticAnalyzer", "NltkLinguisticAnalyzer"]
