"""Conventional RSS 2.0 element names used when a caller does not override them.

Element names are matched ASCII case-insensitively by the extraction engine,
so the casing here only matters for display and serialization of the mapping.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Container element
# ---------------------------------------------------------------------------

#: ``<item>...</item>`` -- every occurrence starts a new record.
DEFAULT_NODE_TAG: str = "item"

# ---------------------------------------------------------------------------
# Field elements
# ---------------------------------------------------------------------------

#: ``<title>...</title>``
DEFAULT_TITLE_TAG: str = "title"

#: ``<link>...</link>``
DEFAULT_LINK_TAG: str = "link"

#: ``<author>...</author>``.  Many feeds use ``dc:creator`` instead.
DEFAULT_AUTHOR_TAG: str = "author"

#: ``<description>...</description>``
DEFAULT_DESCRIPTION_TAG: str = "description"

#: ``<guid>...</guid>``
DEFAULT_GUID_TAG: str = "guid"

#: ``<pubDate>...</pubDate>``
DEFAULT_PUBLISH_TAG: str = "pubDate"

# ---------------------------------------------------------------------------
# Acquisition
# ---------------------------------------------------------------------------

#: Charset used to decode fetched and read documents when none is given.
DEFAULT_CHARSET: str = "utf-8"

#: Default HTTP request timeout in seconds.
DEFAULT_TIMEOUT: float = 20.0

#: Maximum number of concurrent feed fetches in :func:`feedscan.parser.scan_feeds`.
DEFAULT_SCAN_CONCURRENCY: int = 10

#: User-agent string sent with every HTTP request.
USER_AGENT: str = "feedscan/0.1 (+https://pypi.org/project/feedscan/)"
