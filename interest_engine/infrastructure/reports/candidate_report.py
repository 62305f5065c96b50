"""Tabular views of candidate stores for diagnostics."""
from __future__ import annotations

from dataclasses import asdict
from typing import Iterable

import pandas as pd

from interest_engine.core.entities import Candidate

CANDIDATE_COLUMNS: tuple[str, ...] = (
    "phrase",
    "score",
    "mention_count",
    "last_seen_at",
    "last_shown_at",
    "cooldown_until",
    "disliked_count",
    "accepted",
)


def candidates_to_frame(candidates: Iterable[Candidate]) -> pd.DataFrame:
    """One row per candidate, highest score first."""
    records = [asdict(candidate) for candidate in candidates]
    if not records:
        return pd.DataFrame(columns=list(CANDIDATE_COLUMNS))

    frame = pd.DataFrame(records, columns=list(CANDIDATE_COLUMNS))
    return frame.sort_values(
        ["score", "last_seen_at", "phrase"], ascending=[False, False, True]
    ).reset_index(drop=True)


__all__ = ["CANDIDATE_COLUMNS", "candidates_to_frame"]
