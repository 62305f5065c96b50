"""Use case run once per outgoing message: score phrases and maybe surface one."""
from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field, replace
from typing import Callable, Iterable, Optional, Protocol

from interest_engine.core.config import EngineConfig
from interest_engine.core.entities import Candidate, ConversationStore, WeightedPhrase
from interest_engine.infrastructure.scoring.candidate_store import apply_message
from interest_engine.utils.logger import logger


class PhraseExtractor(Protocol):
    def extract_candidates(self, text: str) -> list[WeightedPhrase]:
        ...


class SuggestionSelector(Protocol):
    def select(
        self,
        store: ConversationStore,
        now: float,
        existing_interests: Iterable[str],
        last_suggested_phrase: Optional[str] = None,
    ) -> Optional[str]:
        ...


@dataclass
class _ConversationSlot:
    store: ConversationStore = field(default_factory=ConversationStore)
    lock: threading.Lock = field(default_factory=threading.Lock)


class ExtractionSession:
    """Owns every conversation's candidate store.

    Work on one conversation is serialised by that conversation's lock; calls
    for different conversations run in parallel. Stores are created lazily and
    kept in memory for the lifetime of the session.
    """

    def __init__(
        self,
        extractor: PhraseExtractor,
        selector: SuggestionSelector,
        config: EngineConfig | None = None,
        now_provider: Callable[[], float] | None = None,
    ) -> None:
        self._extractor = extractor
        self._selector = selector
        self._config = config or EngineConfig()
        self._now_provider = now_provider or time.time
        self._slots: dict[str, _ConversationSlot] = {}
        self._registry_lock = threading.Lock()

    def _slot(self, conversation_id: str) -> _ConversationSlot:
        with self._registry_lock:
            slot = self._slots.get(conversation_id)
            if slot is None:
                slot = _ConversationSlot()
                self._slots[conversation_id] = slot
            return slot

    def execute(
        self,
        conversation_id: str,
        text: str,
        existing_interests: Iterable[str] = (),
        now: float | None = None,
    ) -> Optional[str]:
        if not text or not text.strip():
            return None

        slot = self._slot(conversation_id)
        with slot.lock:
            timestamp = self._now_provider() if now is None else now
            phrases = self._extractor.extract_candidates(text.strip())
            apply_message(slot.store, phrases, timestamp, self._config.decay_time_constant_seconds)
            if not phrases:
                logger.debug("No candidate phrases in message for conversation {}", conversation_id)

            return self._selector.select(
                slot.store,
                timestamp,
                existing_interests,
                slot.store.last_suggested_phrase,
            )

    def mark_accepted(self, conversation_id: str, phrase: str, now: float | None = None) -> Candidate:
        slot = self._slot(conversation_id)
        with slot.lock:
            timestamp = self._now_provider() if now is None else now
            candidate = self._candidate_for_update(slot.store, phrase, timestamp)
            candidate.accepted = True
            candidate.cooldown_until = timestamp + self._config.accept_cooldown_seconds
            candidate.scale_score(self._config.accept_score_factor)
            return replace(candidate)

    def mark_rejected(self, conversation_id: str, phrase: str, now: float | None = None) -> Candidate:
        slot = self._slot(conversation_id)
        with slot.lock:
            timestamp = self._now_provider() if now is None else now
            candidate = self._candidate_for_update(slot.store, phrase, timestamp)
            candidate.disliked_count += 1
            candidate.cooldown_until = timestamp + self._config.reject_cooldown_seconds
            candidate.scale_score(self._config.reject_score_factor)
            return replace(candidate)

    def candidates(self, conversation_id: str) -> list[Candidate]:
        """Copies of the conversation's candidates; empty for unknown conversations."""
        with self._registry_lock:
            slot = self._slots.get(conversation_id)
        if slot is None:
            return []
        with slot.lock:
            return [replace(candidate) for candidate in slot.store.candidates.values()]

    def candidate(self, conversation_id: str, phrase: str) -> Optional[Candidate]:
        lowered = phrase.strip().lower()
        for candidate in self.candidates(conversation_id):
            if candidate.phrase == lowered:
                return candidate
        return None

    @staticmethod
    def _candidate_for_update(store: ConversationStore, phrase: str, now: float) -> Candidate:
        key = phrase.strip().lower()
        candidate = store.candidates.get(key)
        if candidate is None:
            # feedback for a phrase this conversation never scored, e.g. from the ask flow
            candidate = Candidate(phrase=key, last_seen_at=now)
            store.candidates[key] = candidate
        return candidate


__all__ = ["ExtractionSession", "PhraseExtractor", "SuggestionSelector"]
