"""Fallback ranges for problems that carry no source position."""

from __future__ import annotations

PROJECT_ANCHOR = "<project "


def fallback_range(text: str, anchor: str = PROJECT_ANCHOR) -> tuple[int, int]:
    """Return the range of the first *anchor* occurrence in *text*.

    The start is shifted one character past the match (existing clients
    expect this).  Returns ``(0, 0)`` when the anchor does not occur.
    """
    index = text.find(anchor) if anchor else -1
    if index < 0:
        return 0, 0
    start = index + 1
    end = min(start + len(anchor), len(text))
    return start, end
