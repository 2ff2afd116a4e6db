"""
Word-box to line-box aggregation.
"""

from typing import Iterable

from manga_translator.models.region import Rectangle, Token


def aggregate_tokens(tokens: Iterable[Token]) -> Rectangle:
    """Return the smallest rectangle enclosing every token box."""
    tokens = list(tokens)
    if not tokens:
        raise ValueError("Cannot aggregate an empty token sequence")

    min_x = min(t.left for t in tokens)
    min_y = min(t.top for t in tokens)
    max_x = max(t.left + t.width for t in tokens)
    max_y = max(t.top + t.height for t in tokens)
    return Rectangle(min_x, min_y, max_x - min_x, max_y - min_y)
