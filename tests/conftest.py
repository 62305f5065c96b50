"""Pytest configuration and shared fixtures for the project."""
from __future__ import annotations

import random
import sys
from pathlib import Path
from typing import Iterator, Sequence

import pytest

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from interest_engine.core.config import EngineConfig
from interest_engine.infrastructure.storage.key_value import InMemoryKeyValueStore
from interest_engine.interface.engine import InterestEngine


class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


class RecordingProfileSync:
    def __init__(self, result: bool = True) -> None:
        self.result = result
        self.calls: list[tuple[str, list[str]]] = []

    def replace_interests(self, user_id: str, tags: Sequence[str]) -> bool:
        self.calls.append((user_id, list(tags)))
        return self.result


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig(shuffle_curated_phrases=False)


@pytest.fixture
def storage() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def profile_sync() -> RecordingProfileSync:
    return RecordingProfileSync()


@pytest.fixture
def engine(
    config: EngineConfig,
    storage: InMemoryKeyValueStore,
    profile_sync: RecordingProfileSync,
    clock: FakeClock,
) -> Iterator[InterestEngine]:
    built = InterestEngine.build(
        config,
        user_id="user-1",
        storage=storage,
        profile_sync=profile_sync,
        now_provider=clock,
        rng=random.Random(7),
    )
    yield built
    built.close()
