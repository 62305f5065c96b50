"""Fixed-capacity, persisted pool of interests the engine can ask the user about."""
from __future__ import annotations

import random
import threading
import time
from typing import Callable, Optional, Sequence

from interest_engine.core.config import EngineConfig
from interest_engine.core.entities import SuggestionPoolEntry
from interest_engine.core.ports import KeyValueStore
from interest_engine.infrastructure.interests.curated import CURATED_INTERESTS
from interest_engine.infrastructure.storage.key_value import StorageReadError, load_json, save_json
from interest_engine.utils.logger import logger


class SuggestionPoolManager:
    """User-scoped pool with LRU eviction and an unasked → asked → selected lifecycle.

    Every public method holds a single re-entrant lock, so read-then-write
    sequences such as :meth:`get_next_unasked` are atomic with respect to each
    other. State is loaded lazily on first access; when nothing is persisted the
    pool is seeded from the curated phrase list. Write failures are logged and
    the in-memory pool stays authoritative. While storage cannot be read the
    pool runs on an unsaved in-memory seed and nothing is written; the next
    successful read replaces that seed and keeps every phrase removed offline.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        config: EngineConfig | None = None,
        *,
        user_id: str = "default",
        curated_phrases: Sequence[str] = CURATED_INTERESTS,
        rng: random.Random | None = None,
        now_provider: Callable[[], float] | None = None,
    ) -> None:
        self._storage = storage
        self._config = config or EngineConfig()
        self._curated = tuple(curated_phrases)
        self._rng = rng or random.Random()
        self._now_provider = now_provider or time.time
        self._pool_key = f"{user_id}.suggestion_pool"
        self._removed_key = f"{user_id}.removed_interests"
        self._entries: list[SuggestionPoolEntry] | None = None
        self._removed: set[str] = set()
        self._loaded = False
        self._lock = threading.RLock()

    @property
    def capacity(self) -> int:
        return self._config.pool_capacity

    # -- loading and persistence -------------------------------------------

    def _load(self) -> list[SuggestionPoolEntry]:
        if self._loaded and self._entries is not None:
            return self._entries

        try:
            removed_payload = load_json(self._storage, self._removed_key)
            payload = load_json(self._storage, self._pool_key)
        except StorageReadError:
            if self._entries is None:
                self._entries = self._seed()
                logger.warning("Interest pool storage unreadable; using an unsaved in-memory pool")
            return self._entries

        stored_removed = (
            {str(phrase).lower() for phrase in removed_payload}
            if isinstance(removed_payload, list)
            else set()
        )
        removed_offline = self._removed - stored_removed
        self._removed |= stored_removed

        entries: list[SuggestionPoolEntry] | None = None
        if isinstance(payload, list):
            try:
                entries = [SuggestionPoolEntry.from_dict(item) for item in payload]
            except (TypeError, ValueError, AttributeError) as error:
                logger.warning("Ignoring malformed suggestion pool: {}", error)

        self._loaded = True
        if entries is None:
            self._entries = self._seed()
            self._persist()
            logger.info("Initialized interest pool with {} interests", len(self._entries))
        else:
            kept = [entry for entry in entries if entry.phrase.lower() not in self._removed]
            self._entries = kept[-self.capacity :]
            if len(self._entries) != len(entries):
                self._persist()
        if removed_offline:
            self._persist_removed()
        return self._entries

    def _seed(self) -> list[SuggestionPoolEntry]:
        phrases = [phrase for phrase in self._curated if phrase.lower() not in self._removed]
        if self._config.shuffle_curated_phrases:
            self._rng.shuffle(phrases)
        now = self._now_provider()
        return [SuggestionPoolEntry(phrase=phrase, timestamp=now) for phrase in phrases[: self.capacity]]

    def _persist(self) -> None:
        # never overwrite stored state that could not be read
        if not self._loaded:
            return
        entries = self._entries or []
        save_json(self._storage, self._pool_key, [entry.to_dict() for entry in entries])

    def _persist_removed(self) -> None:
        if not self._loaded:
            return
        save_json(self._storage, self._removed_key, sorted(self._removed))

    def _find(self, phrase: str) -> Optional[SuggestionPoolEntry]:
        lowered = phrase.strip().lower()
        for entry in self._load():
            if entry.phrase.lower() == lowered:
                return entry
        return None

    # -- public API ---------------------------------------------------------

    def entries(self) -> list[SuggestionPoolEntry]:
        with self._lock:
            return [
                SuggestionPoolEntry(
                    phrase=entry.phrase,
                    timestamp=entry.timestamp,
                    is_selected=entry.is_selected,
                    was_asked=entry.was_asked,
                )
                for entry in self._load()
            ]

    def get_suggested_interests(self) -> list[str]:
        with self._lock:
            return [entry.phrase for entry in self._load()]

    def get_next_unasked(self, now: float | None = None) -> Optional[str]:
        with self._lock:
            timestamp = self._now_provider() if now is None else now
            for attempt in range(2):
                for entry in self._load():
                    if entry.was_asked or entry.is_selected:
                        continue
                    entry.was_asked = True
                    entry.timestamp = timestamp
                    self._persist()
                    logger.info("Asking about interest '{}'", entry.phrase)
                    return entry.phrase

                if attempt == 0:
                    fresh = self._novel_curated_phrase()
                    if fresh is None or not self.add_interest_to_pool(fresh, now=timestamp):
                        break

            logger.info("No unasked interests available")
            return None

    def add_interest_to_pool(self, phrase: str, now: float | None = None) -> bool:
        cleaned = phrase.strip()
        if not cleaned:
            return False
        with self._lock:
            entries = self._load()
            if self._find(cleaned) is not None:
                return False
            if cleaned.lower() in self._removed:
                logger.debug("Not adding '{}': permanently removed", cleaned)
                return False

            timestamp = self._now_provider() if now is None else now
            while len(entries) >= self.capacity:
                self._evict_one(entries)
            entries.append(SuggestionPoolEntry(phrase=cleaned, timestamp=timestamp))
            self._persist()
            logger.info("Added '{}' to pool (size: {}/{})", cleaned, len(entries), self.capacity)
            return True

    def mark_selected(self, phrase: str, now: float | None = None) -> bool:
        with self._lock:
            entry = self._find(phrase)
            if entry is None:
                return False
            entry.is_selected = True
            entry.timestamp = self._now_provider() if now is None else now
            self._persist()
            logger.info("Marked '{}' as selected", entry.phrase)
            return True

    def mark_rejected(self, phrase: str, now: float | None = None) -> bool:
        """Refresh the entry's timestamp and return it to unasked.

        The entry also moves to the end of the stored order. Left in place it
        would be the first unasked entry and :meth:`get_next_unasked` would ask
        about it again straight away.
        """
        with self._lock:
            entry = self._find(phrase)
            if entry is None:
                return False
            entry.was_asked = False
            entry.timestamp = self._now_provider() if now is None else now
            entries = self._load()
            entries.remove(entry)
            entries.append(entry)
            self._persist()
            logger.info("Marked '{}' as rejected (staying in pool)", entry.phrase)
            return True

    def remove_entry(self, phrase: str) -> bool:
        """Delete ``phrase`` and never reintroduce it from the curated list."""
        with self._lock:
            entries = self._load()
            lowered = phrase.strip().lower()
            remaining = [entry for entry in entries if entry.phrase.lower() != lowered]
            removed = len(remaining) != len(entries)
            entries[:] = remaining
            self._removed.add(lowered)
            self._persist()
            self._persist_removed()
            logger.info("Permanently removed '{}' from the interest pool", phrase)
            return removed

    def clear(self) -> None:
        """Drop pool state; the next access reseeds from the curated list."""
        with self._lock:
            self._entries = None
            self._loaded = False
            save_json(self._storage, self._pool_key, None)
            logger.info("Cleared interest pool; it will be re-initialized on next access")

    def describe(self, phrase: str) -> str:
        with self._lock:
            entries = self._load()
            entry = self._find(phrase)
            if entry is None:
                status = "inPool=false"
            else:
                status = f"inPool=true, selected={entry.is_selected}, asked={entry.was_asked}"
            return f"Interest '{phrase}': {status}, poolSize={len(entries)}/{self.capacity}"

    # -- helpers ------------------------------------------------------------

    def _evict_one(self, entries: list[SuggestionPoolEntry]) -> None:
        unselected = [entry for entry in entries if not entry.is_selected]
        victims = unselected or entries
        oldest = min(victims, key=lambda entry: entry.timestamp)
        entries.remove(oldest)
        kind = "unselected" if unselected else "selected"
        logger.info("Removed oldest {} '{}' to make room", kind, oldest.phrase)

    def _novel_curated_phrase(self) -> Optional[str]:
        excluded = {entry.phrase.lower() for entry in self._load()} | self._removed
        available = [phrase for phrase in self._curated if phrase.lower() not in excluded]
        if not available:
            return None
        if self._config.shuffle_curated_phrases:
            return self._rng.choice(available)
        return available[0]


__all__ = ["SuggestionPoolManager"]
