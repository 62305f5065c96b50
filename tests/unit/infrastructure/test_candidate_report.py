"""Unit tests for the candidate DataFrame report."""
from __future__ import annotations

from interest_engine.core.entities import Candidate
from interest_engine.infrastructure.reports import CANDIDATE_COLUMNS, candidates_to_frame


def test_empty_report_keeps_columns():
    frame = candidates_to_frame([])

    assert frame.empty
    assert list(frame.columns) == list(CANDIDATE_COLUMNS)


def test_rows_are_sorted_by_score_then_recency():
    frame = candidates_to_frame(
        [
            Candidate("chess", score=1.0, mention_count=1, last_seen_at=5.0),
            Candidate("tennis", score=3.0, mention_count=2, last_seen_at=1.0),
            Candidate("sailing", score=1.0, mention_count=1, last_seen_at=9.0, accepted=True),
        ]
    )

    assert frame["phrase"].tolist() == ["tennis", "sailing", "chess"]
    assert frame.loc[1, "accepted"]
    assert frame.loc[0, "mention_count"] == 2
