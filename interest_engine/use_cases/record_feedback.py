"""Use case routing accept/reject decisions into the candidate store and the pool."""
from __future__ import annotations

import threading
from collections import Counter
from typing import Optional, Protocol, Sequence

from interest_engine.core.config import EngineConfig
from interest_engine.core.entities import Candidate
from interest_engine.utils.logger import logger


class CandidateFeedbackSink(Protocol):
    def mark_accepted(self, conversation_id: str, phrase: str, now: float | None = None) -> Candidate:
        ...

    def mark_rejected(self, conversation_id: str, phrase: str, now: float | None = None) -> Candidate:
        ...


class InterestPool(Protocol):
    def mark_selected(self, phrase: str, now: float | None = None) -> bool:
        ...

    def mark_rejected(self, phrase: str, now: float | None = None) -> bool:
        ...

    def remove_entry(self, phrase: str) -> bool:
        ...


class AdoptedInterests(Protocol):
    @property
    def loaded(self) -> bool:
        ...

    def add(self, phrase: str) -> tuple[bool, list[str]]:
        ...

    def remove(self, phrase: str) -> tuple[bool, list[str]]:
        ...


class ProfileSyncQueue(Protocol):
    def submit(self, user_id: str, tags: Sequence[str]) -> object:
        ...


class FeedbackCoordinator:
    """Apply user feedback to every store that cares about it.

    Rejections are tallied per phrase across all conversations; once the tally
    reaches ``max_dislikes_before_permanent_removal`` the phrase is removed from
    the suggestion pool for good. Nothing here raises on collaborator failure.
    """

    def __init__(
        self,
        session: CandidateFeedbackSink,
        pool: InterestPool,
        adopted: AdoptedInterests,
        profile_sync: ProfileSyncQueue,
        config: EngineConfig | None = None,
        *,
        user_id: str = "default",
    ) -> None:
        self._session = session
        self._pool = pool
        self._adopted = adopted
        self._profile_sync = profile_sync
        self._config = config or EngineConfig()
        self._user_id = user_id
        self._rejections: Counter[str] = Counter()
        self._lock = threading.Lock()

    def accept(self, conversation_id: str, phrase: str, now: float | None = None) -> None:
        cleaned = phrase.strip()
        if not cleaned:
            return
        self._session.mark_accepted(conversation_id, cleaned, now=now)
        changed, interests = self._adopted.add(cleaned)
        if changed:
            logger.info("Accepted interest '{}' in conversation {}", cleaned, conversation_id)
            self._sync(interests)
        else:
            logger.debug("Interest '{}' already adopted", cleaned)
        self._pool.mark_selected(cleaned, now=now)

    def reject(self, conversation_id: str, phrase: str, now: float | None = None) -> None:
        cleaned = phrase.strip()
        if not cleaned:
            return
        candidate = self._session.mark_rejected(conversation_id, cleaned, now=now)
        with self._lock:
            self._rejections[cleaned.lower()] += 1
            total = self._rejections[cleaned.lower()]

        dislikes = max(total, candidate.disliked_count)
        logger.info("Rejected interest '{}' ({} rejections)", cleaned, dislikes)
        if dislikes >= self._config.max_dislikes_before_permanent_removal:
            self._pool.remove_entry(cleaned)
            logger.info("Permanently removed '{}' after {} rejections", cleaned, dislikes)
        else:
            self._pool.mark_rejected(cleaned, now=now)

    def remove_interest(self, phrase: str) -> bool:
        changed, interests = self._adopted.remove(phrase)
        if changed:
            logger.info("Removed adopted interest '{}'", phrase)
            self._sync(interests)
        return changed

    def rejection_count(self, phrase: str) -> int:
        with self._lock:
            return self._rejections[phrase.strip().lower()]

    def _sync(self, interests: Sequence[str]) -> Optional[object]:
        if not self._adopted.loaded:
            # the profile is replaced wholesale, so only a list read from storage is sent
            logger.warning("Adopted interests not readable yet; skipping profile sync for user {}", self._user_id)
            return None
        try:
            return self._profile_sync.submit(self._user_id, list(interests))
        except Exception as error:  # noqa: BLE001
            logger.warning("Could not schedule profile sync for user {}: {}", self._user_id, error)
            return None


__all__ = ["FeedbackCoordinator"]
