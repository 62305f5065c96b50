"""Unit tests for the adopted interest list."""
from __future__ import annotations

import json

from interest_engine.core.config import EngineConfig
from interest_engine.infrastructure.storage.adopted_interests import AdoptedInterestRepository
from interest_engine.infrastructure.storage.key_value import InMemoryKeyValueStore


def test_add_inserts_newest_first_and_persists(storage):
    repository = AdoptedInterestRepository(storage, EngineConfig(), user_id="user-1")

    assert repository.add("chess") == (True, ["chess"])
    assert repository.add(" Tennis ") == (True, ["Tennis", "chess"])
    assert json.loads(storage.load("user-1.adopted_interests")) == ["Tennis", "chess"]


def test_add_is_case_insensitive_idempotent(storage):
    repository = AdoptedInterestRepository(storage, user_id="user-1")
    repository.add("Chess")

    changed, snapshot = repository.add("chess")

    assert not changed
    assert snapshot == ["Chess"]


def test_capacity_drops_oldest(storage):
    repository = AdoptedInterestRepository(storage, EngineConfig(adopted_interest_capacity=2))
    for phrase in ["chess", "tennis", "sailing"]:
        repository.add(phrase)

    assert repository.interests() == ["sailing", "tennis"]


def test_remove_and_reload(storage):
    repository = AdoptedInterestRepository(storage, user_id="user-1")
    repository.add("chess")
    repository.add("tennis")

    assert repository.remove("CHESS") == (True, ["tennis"])
    assert repository.remove("chess") == (False, ["tennis"])
    assert AdoptedInterestRepository(storage, user_id="user-1").interests() == ["tennis"]


def test_corrupt_payload_starts_empty(storage):
    storage.save("user-1.adopted_interests", b'{"oops": true}')

    assert AdoptedInterestRepository(storage, user_id="user-1").interests() == []


class FlakyStore(InMemoryKeyValueStore):
    def __init__(self) -> None:
        super().__init__()
        self.failures = 0

    def load(self, key):
        if self.failures:
            self.failures -= 1
            raise OSError("read timed out")
        return super().load(key)


def test_unreadable_list_is_merged_instead_of_overwritten():
    store = FlakyStore()
    repository = AdoptedInterestRepository(store, user_id="user-1")
    repository.add("chess")
    repository.add("tennis")

    store.failures = 1
    restarted = AdoptedInterestRepository(store, user_id="user-1")
    assert restarted.add("sailing") == (True, ["sailing"])
    assert not restarted.loaded
    assert json.loads(store.load("user-1.adopted_interests")) == ["tennis", "chess"]

    assert restarted.interests() == ["sailing", "tennis", "chess"]
    assert restarted.loaded
    assert json.loads(store.load("user-1.adopted_interests")) == ["sailing", "tennis", "chess"]
