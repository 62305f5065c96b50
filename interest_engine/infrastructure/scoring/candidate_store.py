"""Per-conversation candidate scoring with exponential time decay."""
from __future__ import annotations

import math
from typing import Iterable

from interest_engine.core.entities import Candidate, ConversationStore, WeightedPhrase


def decay_factor(elapsed_seconds: float, time_constant_seconds: float) -> float:
    """Multiplier applied to every score after ``elapsed_seconds`` without messages."""
    if elapsed_seconds <= 0:
        return 1.0
    return math.exp(-elapsed_seconds / time_constant_seconds)


def apply_decay(store: ConversationStore, now: float, time_constant_seconds: float) -> None:
    if store.last_message_at <= 0:
        return
    factor = decay_factor(now - store.last_message_at, time_constant_seconds)
    if factor == 1.0:
        return
    for candidate in store.candidates.values():
        candidate.scale_score(factor)


def apply_message(
    store: ConversationStore,
    phrases: Iterable[WeightedPhrase],
    now: float,
    time_constant_seconds: float,
) -> ConversationStore:
    """Decay existing scores, then add one mention per extracted phrase.

    Not idempotent: applying the same message twice counts its mentions twice.
    """
    apply_decay(store, now, time_constant_seconds)
    store.last_message_at = now

    for item in phrases:
        candidate = store.candidates.get(item.phrase)
        if candidate is None:
            candidate = Candidate(phrase=item.phrase, last_seen_at=now)
            store.candidates[item.phrase] = candidate
        candidate.score = max(0.0, candidate.score + item.weight)
        candidate.mention_count += 1
        candidate.last_seen_at = now
    return store


__all__ = ["apply_decay", "apply_message", "decay_factor"]
