"""Unit tests for the structured logging configuration.

Verifies that ``configure_logging()`` produces well-formed output and that
the ``scan_source_var`` context variable is propagated into log records.
"""

from __future__ import annotations

import json
import logging
from io import StringIO

from feedscan.core.logging_config import configure_logging, scan_source_var
from feedscan.parser import FeedParser


def _capture(log_level: str, emit) -> list[dict]:
    """Configure logging, run *emit* and return the JSON records written."""
    configure_logging(log_level)

    buffer = StringIO()
    root = logging.getLogger()
    original_streams = []
    for handler in root.handlers:
        if hasattr(handler, "stream"):
            original_streams.append((handler, handler.stream))
            handler.stream = buffer

    try:
        emit()
    finally:
        for handler, stream in original_streams:
            handler.flush()
            handler.stream = stream

    lines = [line for line in buffer.getvalue().splitlines() if line.strip()]
    return [json.loads(line) for line in lines]


class TestConfigureLoggingJson:
    def test_records_are_json_with_standard_fields(self) -> None:
        records = _capture("INFO", lambda: logging.getLogger("test.feedscan").info("hello"))
        target = next(r for r in records if r.get("event") == "hello")
        assert target["level"] == "info"
        assert target["logger"] == "test.feedscan"
        assert "timestamp" in target

    def test_debug_records_filtered_at_info(self) -> None:
        records = _capture("INFO", lambda: logging.getLogger("test.feedscan").debug("quiet"))
        assert not [r for r in records if r.get("event") == "quiet"]


class TestScanSourceContextVar:
    def test_source_set_explicitly(self) -> None:
        def emit() -> None:
            token = scan_source_var.set("https://example.com/rss")
            try:
                logging.getLogger("test.feedscan").info("with_source")
            finally:
                scan_source_var.reset(token)

        records = _capture("INFO", emit)
        target = next(r for r in records if r.get("event") == "with_source")
        assert target["source"] == "https://example.com/rss"

    def test_no_source_outside_scan(self) -> None:
        records = _capture("INFO", lambda: logging.getLogger("test.feedscan").info("bare"))
        target = next(r for r in records if r.get("event") == "bare")
        assert "source" not in target

    def test_parser_tags_records_with_source(self, minimal_feed_xml: str) -> None:
        parser = FeedParser(minimal_feed_xml, source="feeds/local.xml")
        records = _capture("INFO", parser.parse_vec)
        summary = next(r for r in records if r.get("logger") == "feedscan.parser")
        assert summary["source"] == "feeds/local.xml"
        assert scan_source_var.get() is None


class TestConfigureLoggingIdempotent:
    def test_calling_twice_keeps_one_handler(self) -> None:
        configure_logging("INFO")
        configure_logging("INFO")
        assert len(logging.getLogger().handlers) == 1
