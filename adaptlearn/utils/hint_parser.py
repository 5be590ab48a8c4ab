"""
Hint parser - Split raw AI hint text into a hint and an optional next step.

The hint service returns free text. Known markers ("Next step:", "Next:",
"Suggestion:", ...) separate the hint from a suggested next step; without
a marker the first two paragraphs are used.
"""

import re
from dataclasses import dataclass


# Tried in order; the first marker found anywhere in the text wins
NEXT_MARKERS = (
    re.compile(r"Next step:\s*", re.IGNORECASE),
    re.compile(r"Next:\s*", re.IGNORECASE),
    re.compile(r"Next steps?:\s*", re.IGNORECASE),
    re.compile(r"Suggestion:\s*", re.IGNORECASE),
)

QUOTES = "\"'“”‘’"
_LEADING_QUOTES = re.compile(rf"^\s*[{QUOTES}]+")
_TRAILING_QUOTES = re.compile(rf"[{QUOTES}]+\s*$")
_WHITESPACE = re.compile(r"\s+")
_PARAGRAPH_BREAK = re.compile(r"\n\n+")


@dataclass(frozen=True)
class ParsedHint:
    hint: str
    next: str = ""


def sanitize_hint_text(text: str) -> str:
    """Strip emphasis asterisks and surrounding quotes, collapse whitespace."""
    if not text:
        return ""
    out = text.replace("*", "")
    out = _LEADING_QUOTES.sub("", out)
    out = _TRAILING_QUOTES.sub("", out)
    return _WHITESPACE.sub(" ", out).strip()


def parse_hint(raw: str) -> ParsedHint:
    """
    Parse backend hint text into hint and next-step parts.

    Args:
        raw: Hint text as returned by the hint service

    Returns:
        ParsedHint with sanitized hint and next (empty if absent)
    """
    if not raw:
        return ParsedHint(hint="", next="")

    normalized = raw.replace("\r", "\n")

    for marker in NEXT_MARKERS:
        match = marker.search(normalized)
        if match:
            before = normalized[:match.start()].strip()
            after = normalized[match.end():].strip()
            return ParsedHint(hint=sanitize_hint_text(before), next=sanitize_hint_text(after))

    parts = [p.strip() for p in _PARAGRAPH_BREAK.split(normalized) if p.strip()]
    return ParsedHint(
        hint=sanitize_hint_text(parts[0] if parts else ""),
        next=sanitize_hint_text(parts[1] if len(parts) > 1 else ""),
    )
