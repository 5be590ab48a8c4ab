"""adaptlearn utilities."""

from .hint_parser import NEXT_MARKERS, ParsedHint, parse_hint, sanitize_hint_text

__all__ = ["NEXT_MARKERS", "ParsedHint", "parse_hint", "sanitize_hint_text"]
