"""Unit tests for the per-message extraction use case."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from interest_engine.core.config import EngineConfig
from interest_engine.core.entities import WeightedPhrase
from interest_engine.use_cases.process_message import ExtractionSession


class StubExtractor:
    def __init__(self, phrases=None):
        self.phrases = phrases if phrases is not None else [WeightedPhrase("chess", 1.0)]
        self.texts: list[str] = []

    def extract_candidates(self, text):
        self.texts.append(text)
        return list(self.phrases)


class RecordingSelector:
    def __init__(self, result=None):
        self.result = result
        self.calls = []

    def select(self, store, now, existing_interests, last_suggested_phrase=None):
        self.calls.append((now, list(existing_interests), last_suggested_phrase))
        if self.result is not None:
            store.last_suggested_phrase = self.result
        return self.result


def make_session(extractor=None, selector=None, clock=None):
    return ExtractionSession(
        extractor or StubExtractor(),
        selector or RecordingSelector(),
        EngineConfig(),
        now_provider=clock or (lambda: 500.0),
    )


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_messages_touch_nothing(text):
    extractor = StubExtractor()
    session = make_session(extractor)

    assert session.execute("c1", text) is None
    assert extractor.texts == []
    assert session.candidates("c1") == []


def test_message_updates_store_and_consults_selector():
    selector = RecordingSelector(result="chess")
    session = make_session(selector=selector)

    assert session.execute("c1", "  chess tonight ", ["tennis"]) == "chess"
    assert session.execute("c1", "chess again", ["tennis"], now=600.0) == "chess"

    assert selector.calls == [(500.0, ["tennis"], None), (600.0, ["tennis"], "chess")]
    candidate = session.candidate("c1", "Chess")
    assert candidate.mention_count == 2
    assert candidate.last_seen_at == 600.0


def test_messages_without_phrases_still_run_selection():
    selector = RecordingSelector(result="chess")
    session = make_session(StubExtractor(phrases=[]), selector)

    assert session.execute("c1", "ok") == "chess"
    assert selector.calls == [(500.0, [], None)]
    assert session.candidates("c1") == []


def test_conversations_are_isolated():
    session = make_session()
    session.execute("c1", "chess")

    assert session.candidates("c2") == []
    assert session.candidate("c2", "chess") is None


def test_accept_dampens_and_cools_down(clock):
    session = make_session(clock=clock)
    session.execute("c1", "chess")
    session.execute("c1", "chess")

    accepted = session.mark_accepted("c1", "Chess ")

    assert accepted.accepted
    assert accepted.score == pytest.approx(1.0)
    assert accepted.cooldown_until == clock.now + 86400


def test_reject_counts_dislikes_and_creates_unknown_candidates(clock):
    session = make_session(clock=clock)

    first = session.mark_rejected("c1", "Sailing")
    second = session.mark_rejected("c1", "sailing")

    assert first.disliked_count == 1
    assert second.disliked_count == 2
    assert second.phrase == "sailing"
    assert second.cooldown_until == clock.now + 3600
    assert second.score == 0.0


def test_returned_candidates_are_copies():
    session = make_session()
    session.execute("c1", "chess")

    session.candidates("c1")[0].score = 99.0

    assert session.candidate("c1", "chess").score == pytest.approx(1.0)


def test_concurrent_messages_on_one_conversation_are_serialised():
    session = make_session(StubExtractor([WeightedPhrase("chess", 0.5)]))

    with ThreadPoolExecutor(max_workers=8) as executor:
        list(executor.map(lambda _: session.execute("c1", "chess"), range(200)))

    candidate = session.candidate("c1", "chess")
    assert candidate.mention_count == 200
    assert candidate.score == pytest.approx(100.0)
