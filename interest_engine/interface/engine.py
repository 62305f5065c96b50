"""Composition root exposing the caller-facing interest engine API."""
from __future__ import annotations

import random
import time
from typing import Callable, Iterable, Optional

import pandas as pd

from interest_engine.core.config import EngineConfig
from interest_engine.core.ports import KeyValueStore, LinguisticAnalyzer, ProfanityFilter, ProfileSync
from interest_engine.infrastructure.interests.suggestion_pool import SuggestionPoolManager
from interest_engine.infrastructure.nlp.feature_extractor import FeatureExtractor
from interest_engine.infrastructure.nlp.linguistic import LexiconLinguisticAnalyzer
from interest_engine.infrastructure.nlp.profanity import WordListProfanityFilter
from interest_engine.infrastructure.reports.candidate_report import candidates_to_frame
from interest_engine.infrastructure.scoring.selection_gate import SelectionGate, ShownRateLimiter
from interest_engine.infrastructure.storage.adopted_interests import AdoptedInterestRepository
from interest_engine.infrastructure.storage.key_value import InMemoryKeyValueStore
from interest_engine.infrastructure.sync.profile_sync import LoggingProfileSync, ProfileSyncDispatcher
from interest_engine.use_cases.process_message import ExtractionSession
from interest_engine.use_cases.record_feedback import FeedbackCoordinator
from interest_engine.utils.logger import logger


class InterestEngine:
    """Service object constructed once per user and shared by reference.

    ``process_message`` never raises: any failure inside extraction or
    selection is logged and reported as "no suggestion" so the caller's message
    send path is unaffected.
    """

    def __init__(
        self,
        *,
        session: ExtractionSession,
        pool: SuggestionPoolManager,
        adopted: AdoptedInterestRepository,
        feedback: FeedbackCoordinator,
        dispatcher: ProfileSyncDispatcher,
        rate_limiter: ShownRateLimiter,
        now_provider: Callable[[], float] = time.time,
    ) -> None:
        self._session = session
        self._pool = pool
        self._adopted = adopted
        self._feedback = feedback
        self._dispatcher = dispatcher
        self._rate_limiter = rate_limiter
        self._now_provider = now_provider

    @classmethod
    def build(
        cls,
        config: EngineConfig | None = None,
        *,
        user_id: str = "default",
        storage: KeyValueStore | None = None,
        analyzer: LinguisticAnalyzer | None = None,
        profanity_filter: ProfanityFilter | None = None,
        profile_sync: ProfileSync | None = None,
        now_provider: Callable[[], float] | None = None,
        rng: random.Random | None = None,
    ) -> "InterestEngine":
        config = config or EngineConfig()
        storage = storage or InMemoryKeyValueStore()
        clock = now_provider or time.time

        extractor = FeatureExtractor(
            analyzer or LexiconLinguisticAnalyzer(),
            profanity_filter or WordListProfanityFilter(),
            config,
        )
        rate_limiter = ShownRateLimiter(
            config.session_max_suggestions_per_hour, config.rate_limit_window_seconds
        )
        session = ExtractionSession(
            extractor, SelectionGate(config, rate_limiter), config, now_provider=clock
        )
        pool = SuggestionPoolManager(
            storage, config, user_id=user_id, rng=rng, now_provider=clock
        )
        adopted = AdoptedInterestRepository(storage, config, user_id=user_id)
        dispatcher = ProfileSyncDispatcher(profile_sync or LoggingProfileSync())
        feedback = FeedbackCoordinator(
            session, pool, adopted, dispatcher, config, user_id=user_id
        )
        logger.debug("Built interest engine for user {}", user_id)
        return cls(
            session=session,
            pool=pool,
            adopted=adopted,
            feedback=feedback,
            dispatcher=dispatcher,
            rate_limiter=rate_limiter,
            now_provider=clock,
        )

    # -- extraction ---------------------------------------------------------

    def process_message(
        self,
        conversation_id: str,
        text: str,
        existing_interests: Optional[Iterable[str]] = None,
        now: float | None = None,
    ) -> Optional[str]:
        interests = list(existing_interests) if existing_interests is not None else self._adopted.interests()
        try:
            return self._session.execute(conversation_id, text, interests, now=now)
        except Exception as error:  # noqa: BLE001
            logger.warning("Interest extraction failed for conversation {}: {}", conversation_id, error)
            return None

    def candidate_snapshot(self, conversation_id: str) -> pd.DataFrame:
        return candidates_to_frame(self._session.candidates(conversation_id))

    def suggestions_shown_in_window(self, now: float | None = None) -> int:
        return self._rate_limiter.shown_in_window(self._now_provider() if now is None else now)

    # -- feedback -----------------------------------------------------------

    def accept(self, conversation_id: str, phrase: str, now: float | None = None) -> None:
        self._feedback.accept(conversation_id, phrase, now=now)

    def reject(self, conversation_id: str, phrase: str, now: float | None = None) -> None:
        self._feedback.reject(conversation_id, phrase, now=now)

    def remove_interest(self, phrase: str) -> bool:
        return self._feedback.remove_interest(phrase)

    def get_adopted_interests(self) -> list[str]:
        return self._adopted.interests()

    # -- suggestion pool ----------------------------------------------------

    def get_next_unasked(self, now: float | None = None) -> Optional[str]:
        return self._pool.get_next_unasked(now=now)

    def mark_selected(self, phrase: str, now: float | None = None) -> bool:
        return self._pool.mark_selected(phrase, now=now)

    def mark_rejected(self, phrase: str, now: float | None = None) -> bool:
        return self._pool.mark_rejected(phrase, now=now)

    def add_interest_to_pool(self, phrase: str, now: float | None = None) -> bool:
        return self._pool.add_interest_to_pool(phrase, now=now)

    def get_suggested_interests(self) -> list[str]:
        return self._pool.get_suggested_interests()

    def clear_pool(self) -> None:
        self._pool.clear()

    def describe_interest(self, phrase: str) -> str:
        return self._pool.describe(phrase)

    def close(self, wait: bool = True) -> None:
        """Drain outstanding profile-sync calls."""
        self._dispatcher.shutdown(wait=wait)


__all__ = ["InterestEngine"]
