"""Shared pytest fixtures for feedscan tests.

Fixture summary
---------------
_isolated_settings -- clears FEEDSCAN_* variables and the settings cache per test.
sample_feed_xml    -- the two-item RSS fixture document as text.
sample_feed_path   -- path of the same fixture on disk.
minimal_feed_xml   -- a single-item document with every default field element.

All tests run without network access; HTTP is mocked with respx.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from feedscan.config.settings import get_settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"

#: The minimal single-item document used throughout the engine tests.
MINIMAL_FEED_XML = (
    "<rss><item><title>Hey!</title><link>examples.com</link>"
    "<description>hello.world!</description><author>MeteorCat</author>"
    "<guid>unique key</guid><pubDate>2020-05-28 15:00:00</pubDate></item></rss>"
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run every test against default settings, unaffected by the shell environment."""
    for key in list(os.environ):
        if key.startswith("FEEDSCAN_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(Path(__file__).parent)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def minimal_feed_xml() -> str:
    return MINIMAL_FEED_XML


@pytest.fixture()
def sample_feed_path() -> Path:
    return FIXTURES_DIR / "sample_feed.xml"


@pytest.fixture()
def sample_feed_xml(sample_feed_path: Path) -> str:
    return sample_feed_path.read_text(encoding="utf-8")
