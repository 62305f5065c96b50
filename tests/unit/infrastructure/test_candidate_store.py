"""Unit tests for candidate scoring and decay."""
from __future__ import annotations

import math

import pytest

from interest_engine.core.entities import Candidate, ConversationStore, WeightedPhrase
from interest_engine.infrastructure.scoring.candidate_store import apply_decay, apply_message, decay_factor

TAU = 1800.0


def test_first_message_creates_candidates_without_decay():
    store = apply_message(ConversationStore(), [WeightedPhrase("football", 1.25)], 100.0, TAU)

    candidate = store.candidates["football"]
    assert candidate.score == pytest.approx(1.25)
    assert candidate.mention_count == 1
    assert candidate.last_seen_at == 100.0
    assert candidate.last_shown_at is None
    assert store.last_message_at == 100.0


def test_decay_follows_exponential_curve():
    store = apply_message(ConversationStore(), [WeightedPhrase("chess", 2.0)], 1000.0, TAU)

    apply_message(store, [WeightedPhrase("tennis", 1.0)], 1900.0, TAU)

    assert store.candidates["chess"].score == pytest.approx(2.0 * math.exp(-0.5))
    assert store.candidates["chess"].mention_count == 1
    assert store.candidates["tennis"].score == pytest.approx(1.0)


@pytest.mark.parametrize("elapsed", [1.0, 60.0, 1800.0, 86400.0])
def test_decay_is_strictly_decreasing_and_non_negative(elapsed):
    factor = decay_factor(elapsed, TAU)
    longer = decay_factor(elapsed * 2, TAU)
    assert 0.0 <= longer < factor < 1.0


def test_non_positive_elapsed_time_leaves_scores_untouched():
    store = ConversationStore(candidates={"chess": Candidate("chess", score=3.0)}, last_message_at=500.0)

    apply_decay(store, 500.0, TAU)
    apply_decay(store, 400.0, TAU)

    assert store.candidates["chess"].score == 3.0


def test_reapplying_a_message_double_counts_mentions():
    phrases = [WeightedPhrase("chess", 1.0)]
    store = apply_message(ConversationStore(), phrases, 10.0, TAU)
    apply_message(store, phrases, 10.0, TAU)

    assert store.candidates["chess"].mention_count == 2
    assert store.candidates["chess"].score == pytest.approx(2.0)


def test_scale_score_clamps_at_zero():
    candidate = Candidate("chess", score=1.0)
    candidate.scale_score(-2.0)
    assert candidate.score == 0.0
