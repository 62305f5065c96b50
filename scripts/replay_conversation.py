"""Replay a CSV of outgoing messages through the interest engine."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Optional

import pandas as pd
import yaml

if __package__ is None or __package__ == "":
    _SCRIPT_PARENT = Path(__file__).resolve().parents[1]
    _SCRIPT_PARENT_STR = str(_SCRIPT_PARENT)
    if _SCRIPT_PARENT_STR not in sys.path:
        sys.path.insert(0, _SCRIPT_PARENT_STR)

from scripts.bootstrap import bootstrap_project

_PATHS = bootstrap_project()

from interest_engine.core.config import EngineConfig
from interest_engine.core.ports import KeyValueStore
from interest_engine.infrastructure.storage.key_value import InMemoryKeyValueStore, JsonFileKeyValueStore
from interest_engine.interface.engine import InterestEngine
from interest_engine.utils.formatting import format_interest_for_display
from interest_engine.utils.logger import configure_logging, logger

REQUIRED_COLUMNS = ("conversation_id", "text")


def load_config(path: Path) -> dict:
    with path.open("r", encoding="utf-8") as file:
        return yaml.safe_load(file) or {}


def load_messages(path: Path) -> pd.DataFrame:
    messages = pd.read_csv(path)
    missing = [column for column in REQUIRED_COLUMNS if column not in messages.columns]
    if missing:
        raise ValueError("Messages file is missing required columns: " + ", ".join(missing))
    return messages


def build_storage(config: dict) -> KeyValueStore:
    directory = (config.get("storage") or {}).get("directory")
    if directory:
        return JsonFileKeyValueStore(_PATHS.resolve(directory))
    return InMemoryKeyValueStore()


def replay(
    engine: InterestEngine,
    messages: pd.DataFrame,
    feedback: Optional[str] = None,
) -> list[dict[str, Any]]:
    """Process every row in order; ``feedback`` is ``"accept"``, ``"reject"`` or ``None``."""
    surfaced: list[dict[str, Any]] = []
    has_timestamps = "timestamp" in messages.columns
    for row in messages.itertuples(index=False):
        conversation_id = str(row.conversation_id)
        text = row.text if isinstance(row.text, str) else ""
        now = None
        if has_timestamps and pd.notna(row.timestamp):
            now = float(row.timestamp)

        suggestion = engine.process_message(conversation_id, text, now=now)
        if suggestion is None:
            continue

        surfaced.append({"conversation_id": conversation_id, "phrase": suggestion, "timestamp": now})
        if feedback == "accept":
            engine.accept(conversation_id, suggestion, now=now)
        elif feedback == "reject":
            engine.reject(conversation_id, suggestion, now=now)
    return surfaced


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Replay chat messages through the interest engine")
    parser.add_argument("--config", type=Path, default=_PATHS.config)
    parser.add_argument("--messages", type=Path, required=True)
    parser.add_argument("--user-id", default="default")
    decision = parser.add_mutually_exclusive_group()
    decision.add_argument("--accept-all", action="store_true")
    decision.add_argument("--reject-all", action="store_true")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    config = load_config(args.config)
    configure_logging((config.get("logging") or {}).get("level", "INFO"))

    engine_config = EngineConfig.from_mapping(config.get("engine"))
    engine = InterestEngine.build(engine_config, user_id=args.user_id, storage=build_storage(config))

    logger.info("Replaying messages from {}", args.messages)
    messages = load_messages(args.messages)
    feedback = "accept" if args.accept_all else "reject" if args.reject_all else None
    try:
        surfaced = replay(engine, messages, feedback=feedback)
    finally:
        engine.close()

    for item in surfaced:
        print(f"{item['conversation_id']}\t{format_interest_for_display(item['phrase'])}")
    logger.info("Surfaced {} suggestions from {} messages", len(surfaced), len(messages))


if __name__ == "__main__":
    main()
