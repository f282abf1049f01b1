"""Configuration package for feedscan.

Re-exports the most commonly used configuration symbols so that callers can
write::

    from feedscan.config import get_settings, DEFAULT_NODE_TAG
"""

from __future__ import annotations

from feedscan.config.defaults import (
    DEFAULT_AUTHOR_TAG,
    DEFAULT_CHARSET,
    DEFAULT_DESCRIPTION_TAG,
    DEFAULT_GUID_TAG,
    DEFAULT_LINK_TAG,
    DEFAULT_NODE_TAG,
    DEFAULT_PUBLISH_TAG,
    DEFAULT_TITLE_TAG,
)
from feedscan.config.settings import Settings, get_settings

__all__ = [
    # settings
    "Settings",
    "get_settings",
    # defaults
    "DEFAULT_NODE_TAG",
    "DEFAULT_TITLE_TAG",
    "DEFAULT_LINK_TAG",
    "DEFAULT_AUTHOR_TAG",
    "DEFAULT_DESCRIPTION_TAG",
    "DEFAULT_GUID_TAG",
    "DEFAULT_PUBLISH_TAG",
    "DEFAULT_CHARSET",
]
