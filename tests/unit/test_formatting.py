"""Unit tests for interest display formatting."""
from __future__ import annotations

from interest_engine.utils.formatting import format_interest_for_display


def test_title_cases_each_word():
    assert format_interest_for_display("rock climbing") == "Rock Climbing"


def test_preserves_acronyms_and_platform_names():
    assert format_interest_for_display("nba games") == "NBA Games"
    assert format_interest_for_display("ios development") == "iOS Development"


def test_handles_hyphen_slash_and_apostrophe_segments():
    assert format_interest_for_display("sci-fi") == "Sci-Fi"
    assert format_interest_for_display("ai/ml") == "AI/ML"
    assert format_interest_for_display("john's cooking") == "John's Cooking"


def test_blank_input_is_returned_unchanged():
    assert format_interest_for_display("   ") == "   "
