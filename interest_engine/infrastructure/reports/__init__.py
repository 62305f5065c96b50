"""Infrastructure helpers for diagnostic reports."""

from .candidate_report import CANDIDATE_COLUMNS, candidates_to_frame

__all__ = ["CANDIDATE_COLUMNS", "candidates_to_frame"]
