"""Fire-and-forget dispatch of adopted interests to the remote profile."""
from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Sequence

from interest_engine.core.ports import ProfileSync
from interest_engine.utils.logger import logger


class LoggingProfileSync:
    """Profile collaborator that only records what would have been sent."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[str]]] = []

    def replace_interests(self, user_id: str, tags: Sequence[str]) -> bool:
        self.calls.append((user_id, list(tags)))
        logger.info("Profile sync for user {}: {}", user_id, list(tags))
        return True


class ProfileSyncDispatcher:
    """Submit ``replace_interests`` calls to a background worker.

    The caller never waits on the result; a ``False`` result or an exception is
    logged and otherwise ignored. Retrying is left to the caller.
    """

    def __init__(self, profile_sync: ProfileSync, max_workers: int = 1) -> None:
        self._profile_sync = profile_sync
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="profile-sync")

    def _run(self, user_id: str, tags: list[str]) -> bool:
        try:
            succeeded = bool(self._profile_sync.replace_interests(user_id, tags))
        except Exception as error:  # noqa: BLE001
            logger.warning("Profile sync for user {} raised: {}", user_id, error)
            return False
        if succeeded:
            logger.debug("Synced {} interests for user {}", len(tags), user_id)
        else:
            logger.warning("Profile sync for user {} reported failure", user_id)
        return succeeded

    def submit(self, user_id: str, tags: Sequence[str]) -> Future[bool]:
        return self._executor.submit(self._run, user_id, list(tags))

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)


__all__ = ["LoggingProfileSync", "ProfileSyncDispatcher"]
