"""Eligibility rules that pick at most one candidate to surface."""
from __future__ import annotations

import threading
from collections import deque
from functools import cmp_to_key
from typing import Iterable, Optional

from interest_engine.core.config import EngineConfig
from interest_engine.core.entities import Candidate, ConversationStore
from interest_engine.utils.logger import logger


class ShownRateLimiter:
    """Sliding-window log of suggestion timestamps shared by every conversation."""

    def __init__(self, max_per_window: int, window_seconds: float) -> None:
        self._max_per_window = max_per_window
        self._window_seconds = window_seconds
        self._shown: deque[float] = deque()
        self._lock = threading.Lock()

    def _prune(self, now: float) -> None:
        cutoff = now - self._window_seconds
        while self._shown and self._shown[0] <= cutoff:
            self._shown.popleft()

    def shown_in_window(self, now: float) -> int:
        with self._lock:
            self._prune(now)
            return len(self._shown)

    def try_record(self, now: float) -> bool:
        """Record a suggestion shown at ``now`` if the window still has room."""
        with self._lock:
            self._prune(now)
            if len(self._shown) >= self._max_per_window:
                return False
            self._shown.append(now)
            return True


class SelectionGate:
    """Rank candidates by score and return the first one passing every rule."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        rate_limiter: ShownRateLimiter | None = None,
    ) -> None:
        self._config = config or EngineConfig()
        self._rate_limiter = rate_limiter or ShownRateLimiter(
            self._config.session_max_suggestions_per_hour,
            self._config.rate_limit_window_seconds,
        )

    @property
    def rate_limiter(self) -> ShownRateLimiter:
        return self._rate_limiter

    def _compare(self, left: Candidate, right: Candidate) -> int:
        if abs(left.score - right.score) > self._config.score_tie_tolerance:
            return -1 if left.score > right.score else 1
        if left.last_seen_at != right.last_seen_at:
            return -1 if left.last_seen_at > right.last_seen_at else 1
        return 0

    def rank(self, candidates: Iterable[Candidate]) -> list[Candidate]:
        return sorted(candidates, key=cmp_to_key(self._compare))

    def rejection_reason(
        self,
        candidate: Candidate,
        now: float,
        existing_interests: set[str],
        last_suggested_phrase: Optional[str],
    ) -> Optional[str]:
        config = self._config
        phrase = candidate.phrase.lower()
        if candidate.accepted:
            return "accepted"
        if candidate.in_cooldown(now):
            return "cooldown"
        if phrase in existing_interests:
            return "existing interest"
        if last_suggested_phrase is not None and phrase == last_suggested_phrase.lower():
            return "last suggestion"
        if candidate.score < config.min_score_to_suggest:
            return "low score"
        if (
            candidate.mention_count < config.min_mentions
            and candidate.score < config.strong_single_mention_threshold
        ):
            return "too few mentions"
        if candidate.disliked_count >= config.max_dislikes_before_permanent_removal:
            return "disliked"
        return None

    def select(
        self,
        store: ConversationStore,
        now: float,
        existing_interests: Iterable[str],
        last_suggested_phrase: Optional[str] = None,
    ) -> Optional[str]:
        existing = {interest.strip().lower() for interest in existing_interests}
        winner: Optional[Candidate] = None
        for candidate in self.rank(store.candidates.values()):
            reason = self.rejection_reason(candidate, now, existing, last_suggested_phrase)
            if reason is None:
                winner = candidate
                break

        if winner is None:
            return None
        if not self._rate_limiter.try_record(now):
            logger.debug("Suggestion rate limit reached; not surfacing '{}'", winner.phrase)
            return None

        winner.last_shown_at = now
        winner.cooldown_until = now + self._config.show_cooldown_seconds
        store.last_suggested_phrase = winner.phrase
        store.last_suggested_at = now
        logger.info("Surfacing interest suggestion '{}' (score {:.2f})", winner.phrase, winner.score)
        return winner.phrase


__all__ = ["SelectionGate", "ShownRateLimiter"]
