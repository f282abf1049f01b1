"""Advisory "does this look like an RSS document" check.

The check only looks for the substrings ``xml`` and ``rss`` (ASCII
case-insensitively).  It rejects obviously wrong input such as an HTML error
page early; passing it says nothing about well-formedness.  Callers that
build a parser from raw text may skip it.
"""

from __future__ import annotations

from feedscan.core.exceptions import FormatRejectedError
from feedscan.core.records import ascii_lower

_REQUIRED_MARKERS: tuple[str, ...] = ("xml", "rss")


def looks_like_feed(text: str) -> bool:
    """Return ``True`` if *text* contains every required marker."""
    folded = ascii_lower(text)
    return all(marker in folded for marker in _REQUIRED_MARKERS)


def ensure_feed(text: str, source: str | None = None) -> str:
    """Return *text* unchanged if it passes :func:`looks_like_feed`.

    Raises:
        FormatRejectedError: If a required marker is missing.
    """
    if not looks_like_feed(text):
        missing = [m for m in _REQUIRED_MARKERS if m not in ascii_lower(text)]
        raise FormatRejectedError(
            f"document does not look like an RSS feed (missing: {', '.join(missing)})",
            source=source,
        )
    return text
