"""Display helpers for interest phrases."""
from __future__ import annotations

_SPECIAL_CASES: dict[str, str] = {
    "ios": "iOS",
    "iphone": "iPhone",
    "ipad": "iPad",
    "macos": "macOS",
    "macbook": "MacBook",
    "ai": "AI",
    "ml": "ML",
    "ar": "AR",
    "vr": "VR",
    "ui": "UI",
    "ux": "UX",
    "cpu": "CPU",
    "gpu": "GPU",
    "usa": "USA",
    "uk": "UK",
    "eu": "EU",
    "nba": "NBA",
    "nfl": "NFL",
    "fifa": "FIFA",
    "ufc": "UFC",
}


def _format_token(token: str) -> str:
    mapped = _SPECIAL_CASES.get(token.lower())
    if mapped:
        return mapped

    for separator in ("-", "/"):
        if separator in token:
            return separator.join(_format_token(part) for part in token.split(separator))

    if "'" in token:
        pieces = token.split("'")
        formatted = [pieces[0].capitalize()]
        for piece in pieces[1:]:
            # possessive "s" stays lowercase: "john's" -> "John's"
            formatted.append(piece.lower() if piece.lower() == "s" else piece.capitalize())
        return "'".join(formatted)

    return token.capitalize()


def format_interest_for_display(phrase: str) -> str:
    """Return a title-cased phrase that keeps acronyms and platform names intact."""
    trimmed = phrase.strip()
    if not trimmed:
        return phrase
    return " ".join(_format_token(token) for token in trimmed.split())


__all__ = ["format_interest_for_display"]
