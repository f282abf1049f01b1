"""Single-pass extraction of feed records from a token stream.

Sub-modules:
- ``tokens`` -- token model, ``TokenSource`` interface and the expat-backed default
- ``engine`` -- ``extract()``, the tag-to-field scanner
"""

from __future__ import annotations

from feedscan.extraction.engine import extract
from feedscan.extraction.tokens import (
    ExpatTokenSource,
    Token,
    TokenKind,
    TokenSource,
)

__all__ = [
    "extract",
    "ExpatTokenSource",
    "Token",
    "TokenKind",
    "TokenSource",
]
