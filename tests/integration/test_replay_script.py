"""Tests for the conversation replay script."""
from __future__ import annotations

import pandas as pd
import pytest

from interest_engine.infrastructure.storage.key_value import InMemoryKeyValueStore, JsonFileKeyValueStore
from scripts.bootstrap import bootstrap_project
from scripts.replay_conversation import build_storage, load_messages, replay


def write_csv(path, rows):
    pd.DataFrame(rows).to_csv(path, index=False)
    return path


def test_load_messages_requires_columns(tmp_path):
    path = write_csv(tmp_path / "messages.csv", [{"conversation_id": "c1"}])

    with pytest.raises(ValueError, match="text"):
        load_messages(path)


def test_replay_surfaces_and_accepts(tmp_path, engine, profile_sync):
    rows = [{"conversation_id": "c1", "text": "football", "timestamp": 100.0 + index} for index in range(3)]
    rows.append({"conversation_id": "c1", "text": "", "timestamp": 104.0})
    messages = load_messages(write_csv(tmp_path / "messages.csv", rows))

    surfaced = replay(engine, messages, feedback="accept")
    engine.close()

    assert surfaced == [{"conversation_id": "c1", "phrase": "football", "timestamp": 102.0}]
    assert profile_sync.calls == [("user-1", ["football"])]


def test_replay_without_timestamps_uses_engine_clock(engine):
    messages = pd.DataFrame({"conversation_id": ["c1"] * 3, "text": ["football"] * 3})

    surfaced = replay(engine, messages)

    assert [item["phrase"] for item in surfaced] == ["football"]
    assert surfaced[0]["timestamp"] is None


def test_build_storage_honours_directory(tmp_path):
    assert isinstance(build_storage({}), InMemoryKeyValueStore)
    assert isinstance(build_storage({"storage": {"directory": str(tmp_path)}}), JsonFileKeyValueStore)


def test_bootstrap_paths_point_at_the_checkout(tmp_path):
    paths = bootstrap_project()

    assert (paths.root / "interest_engine").is_dir()
    assert paths.config.is_file()
    assert paths.resolve("data/interest_state") == paths.root / "data" / "interest_state"
    assert paths.resolve(tmp_path) == tmp_path
