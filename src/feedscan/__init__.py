"""feedscan -- streaming extraction of records from RSS-like feed documents.

Quick start::

    from feedscan import FieldMapping, extract, records_to_json

    records = extract(xml_text, FieldMapping(author_tag="dc:creator"))
    print(records_to_json(records))
"""

from __future__ import annotations

from feedscan.core.exceptions import (
    AcquisitionError,
    FeedScanError,
    FormatRejectedError,
    ParseError,
)
from feedscan.core.records import FieldMapping, Record, RecordField
from feedscan.extraction import extract
from feedscan.parser import FeedParser, FeedScanResult, scan_feeds
from feedscan.serialization import records_from_json, records_to_json

__version__ = "0.1.0"

__all__ = [
    # model
    "FieldMapping",
    "Record",
    "RecordField",
    # scanning
    "extract",
    "FeedParser",
    "FeedScanResult",
    "scan_feeds",
    # serialization
    "records_to_json",
    "records_from_json",
    # errors
    "FeedScanError",
    "AcquisitionError",
    "FormatRejectedError",
    "ParseError",
]
