"""Persisted list of interests the user explicitly accepted."""
from __future__ import annotations

import threading

from interest_engine.core.config import EngineConfig
from interest_engine.core.ports import KeyValueStore
from interest_engine.infrastructure.storage.key_value import StorageReadError, load_json, save_json
from interest_engine.utils.logger import logger


class AdoptedInterestRepository:
    """Newest-first list capped at ``adopted_interest_capacity``.

    Until the stored list has been read once, changes are kept in memory only
    and :attr:`loaded` is ``False``. They are merged into the stored list on the
    first successful read.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        config: EngineConfig | None = None,
        *,
        user_id: str = "default",
    ) -> None:
        self._storage = storage
        self._config = config or EngineConfig()
        self._key = f"{user_id}.adopted_interests"
        self._interests: list[str] | None = None
        self._offline: list[str] = []
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._interests is not None

    def _load(self) -> list[str]:
        if self._interests is not None:
            return self._interests
        try:
            payload = load_json(self._storage, self._key)
        except StorageReadError:
            return self._offline

        stored = [str(item) for item in payload if str(item).strip()] if isinstance(payload, list) else []
        offline, self._offline = self._offline, []
        merged: list[str] = []
        for phrase in offline + stored:
            if all(phrase.lower() != kept.lower() for kept in merged):
                merged.append(phrase)
        self._interests = merged[: self._config.adopted_interest_capacity]
        if offline:
            logger.info("Merged {} offline interests into the stored list", len(offline))
            self._save()
        return self._interests

    def _save(self) -> None:
        if self._interests is not None:
            save_json(self._storage, self._key, self._interests)

    def interests(self) -> list[str]:
        with self._lock:
            return list(self._load())

    def add(self, phrase: str) -> tuple[bool, list[str]]:
        """Insert ``phrase`` at the front; returns ``(changed, snapshot)``."""
        with self._lock:
            interests = self._load()
            lowered = phrase.strip().lower()
            if any(existing.lower() == lowered for existing in interests):
                return False, list(interests)

            interests.insert(0, phrase.strip())
            while len(interests) > self._config.adopted_interest_capacity:
                dropped = interests.pop()
                logger.info("Adopted interest list full - removed oldest: '{}'", dropped)
            self._save()
            return True, list(interests)

    def remove(self, phrase: str) -> tuple[bool, list[str]]:
        with self._lock:
            interests = self._load()
            lowered = phrase.strip().lower()
            remaining = [existing for existing in interests if existing.lower() != lowered]
            changed = len(remaining) != len(interests)
            if changed:
                interests[:] = remaining
                self._save()
            return changed, list(interests)


__all__ = ["AdoptedInterestRepository"]
