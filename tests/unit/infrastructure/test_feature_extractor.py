"""Unit tests for the phrase feature extractor."""
from __future__ import annotations

import pytest

from interest_engine.core.config import EngineConfig
from interest_engine.infrastructure.nlp.feature_extractor import FeatureExtractor, build_ngrams
from interest_engine.infrastructure.nlp.linguistic import LexiconLinguisticAnalyzer
from interest_engine.infrastructure.nlp.profanity import WordListProfanityFilter


def build_extractor(**overrides) -> FeatureExtractor:
    return FeatureExtractor(
        LexiconLinguisticAnalyzer(),
        WordListProfanityFilter(),
        EngineConfig(**overrides),
    )


def weights_by_phrase(phrases):
    return {item.phrase: item.weight for item in phrases}


def test_build_ngrams_uses_contiguous_windows():
    assert build_ngrams(["a", "b", "c"], 2) == [("a",), ("b",), ("c",), ("a", "b"), ("b", "c")]
    assert build_ngrams(["a"], 3) == [("a",)]


def test_football_message_builds_boosted_ngrams():
    weights = weights_by_phrase(build_extractor().extract_candidates("I love playing football every weekend"))

    assert weights["football"] == pytest.approx(1.25)
    assert weights["love"] == pytest.approx(1.0)
    assert weights["playing football"] == pytest.approx(1.45)
    assert weights["love playing football"] == pytest.approx(1.65)
    assert "every" not in weights
    assert "i" not in weights


def test_profane_only_message_yields_nothing():
    assert build_extractor().extract_candidates("shit fuck!!") == []


def test_profanity_is_stripped_before_tokenizing():
    weights = weights_by_phrase(build_extractor().extract_candidates("damn this guitar"))
    assert "guitar" in weights
    assert not any("damn" in phrase for phrase in weights)


def test_phrase_length_bounds_are_enforced():
    phrases = [item.phrase for item in build_extractor().extract_candidates("ab cd")]
    assert phrases == ["ab cd"]

    long_word = "supercalifragilisticexpialidocious"
    assert build_extractor().extract_candidates(long_word) == []


def test_urls_and_mentions_do_not_become_candidates():
    phrases = {item.phrase for item in build_extractor().extract_candidates("@sam https://example.com hiking")}
    assert phrases == {"hiking"}


def test_numeric_tokens_are_dropped():
    phrases = {item.phrase for item in build_extractor().extract_candidates("2024 hiking 42")}
    assert phrases == {"hiking"}


def test_elongation_normalization_is_opt_in():
    plain = {item.phrase for item in build_extractor().extract_candidates("footballlll")}
    normalized = {
        item.phrase
        for item in build_extractor(normalize_elongation=True).extract_candidates("footballlll")
    }

    assert plain == {"footballlll"}
    assert normalized == {"football"}


def test_capitalised_mid_sentence_token_gets_noun_boost():
    weights = weights_by_phrase(build_extractor().extract_candidates("We visited Lisbon yesterday"))
    assert weights["lisbon"] == pytest.approx(1.25)
    assert weights["visited"] == pytest.approx(1.0)


def test_repeated_phrase_in_one_message_counts_each_occurrence():
    phrases = [item.phrase for item in build_extractor().extract_candidates("tennis tennis")]
    assert phrases.count("tennis") == 2
    assert "tennis tennis" in phrases


class StubAnalyzer:
    def __init__(self, entities: dict[str, str]) -> None:
        self._entities = entities
        self.contexts: list[str] = []

    def tokenize(self, text: str) -> list[str]:
        return text.split()

    def classify(self, token, context):
        from interest_engine.core.entities import TokenClassification

        self.contexts.append(context)
        return TokenClassification(entity_kind=self._entities.get(token.lower()))


def test_entity_classification_from_collaborator_adds_bonus():
    analyzer = StubAnalyzer({"arsenal": "organization"})
    extractor = FeatureExtractor(analyzer, WordListProfanityFilter(), EngineConfig())

    weights = weights_by_phrase(extractor.extract_candidates("arsenal match"))

    assert weights["arsenal"] == pytest.approx(1.25)
    assert weights["match"] == pytest.approx(1.0)
    assert weights["arsenal match"] == pytest.approx(1.45)
    assert set(analyzer.contexts) == {"arsenal match"}
