"""Unit tests for background profile synchronisation."""
from __future__ import annotations

from interest_engine.infrastructure.sync.profile_sync import LoggingProfileSync, ProfileSyncDispatcher


class RefusingProfileSync:
    def replace_interests(self, user_id, tags):
        return False


class ExplodingProfileSync:
    def replace_interests(self, user_id, tags):
        raise ConnectionError("profile service down")


def test_dispatcher_delivers_tags_in_background(profile_sync):
    dispatcher = ProfileSyncDispatcher(profile_sync)

    future = dispatcher.submit("user-1", ("chess", "tennis"))
    dispatcher.shutdown()

    assert future.result() is True
    assert profile_sync.calls == [("user-1", ["chess", "tennis"])]


def test_failed_result_is_reported_not_raised():
    dispatcher = ProfileSyncDispatcher(RefusingProfileSync())

    assert dispatcher.submit("user-1", ["chess"]).result() is False
    dispatcher.shutdown()


def test_exceptions_are_swallowed_by_the_worker():
    dispatcher = ProfileSyncDispatcher(ExplodingProfileSync())

    assert dispatcher.submit("user-1", ["chess"]).result() is False
    dispatcher.shutdown()


def test_logging_profile_sync_records_calls():
    sync = LoggingProfileSync()

    assert sync.replace_interests("user-1", ["chess"])
    assert sync.calls == [("user-1", ["chess"])]
