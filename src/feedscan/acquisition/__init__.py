"""Document acquisition: obtain feed text before it is scanned.

Sub-modules:
- ``http_fetcher`` -- async httpx-based fetch by URL and charset
- ``files``        -- read a local file
- ``precheck``     -- advisory XML/RSS marker check
"""

from __future__ import annotations

from feedscan.acquisition.files import read_document
from feedscan.acquisition.http_fetcher import fetch_document
from feedscan.acquisition.precheck import ensure_feed, looks_like_feed

__all__ = [
    "fetch_document",
    "read_document",
    "ensure_feed",
    "looks_like_feed",
]
