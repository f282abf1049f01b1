"""Exception hierarchy for feedscan.

All custom exceptions subclass ``FeedScanError`` so that callers can catch
every failure the library raises with a single ``except`` clause.

Hierarchy::

    FeedScanError
    ├── AcquisitionError      (source, status_code)
    ├── FormatRejectedError   (source)
    └── ParseError            (line, column)
"""

from __future__ import annotations


class FeedScanError(Exception):
    """Base class for all feedscan exceptions."""


# ---------------------------------------------------------------------------
# Acquisition exceptions
# ---------------------------------------------------------------------------


class AcquisitionError(FeedScanError):
    """Raised when document text cannot be obtained.

    Covers transport errors, HTTP error statuses, unknown charsets and
    file-system failures.  Never retried internally.

    Args:
        message: Human-readable description of the failure.
        source: URL or file path that was being read.
        status_code: HTTP status code when the server answered with an error.
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.source = source
        self.status_code = status_code


class FormatRejectedError(FeedScanError):
    """Raised by the advisory pre-check when text does not look like a feed.

    Args:
        message: Human-readable description of the rejection.
        source: URL or file path of the rejected document, if known.
    """

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


# ---------------------------------------------------------------------------
# Scan exceptions
# ---------------------------------------------------------------------------


class ParseError(FeedScanError):
    """Raised when the token source reports malformed input mid-scan.

    The scan is aborted and no partial result is returned.

    Args:
        message: The tokenizer diagnostic.
        line: 1-based line of the offending token, when known.
        column: 0-based column of the offending token, when known.
    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(message)
        self.line = line
        self.column = column
