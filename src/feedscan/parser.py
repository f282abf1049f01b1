"""Feed parser facade: document text plus element-name mapping.

:class:`FeedParser` bundles a document with the :class:`FieldMapping` used to
scan it and offers constructors for the three acquisition descriptors::

    parser = await FeedParser.from_url("https://www.zhihu.com/rss", "utf8")
    parser = parser.with_tags(author_tag="dc:creator")
    records = parser.parse_vec()

:func:`scan_feeds` fetches and scans several feeds concurrently, bounded by
an ``asyncio.Semaphore``.  Each feed's outcome is reported separately; one
failing feed does not affect the others.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field

import httpx

from feedscan.acquisition import ensure_feed, fetch_document, read_document
from feedscan.config.settings import get_settings
from feedscan.core.exceptions import FeedScanError
from feedscan.core.logging_config import scan_source_var
from feedscan.core.records import FieldMapping, Record
from feedscan.extraction import extract
from feedscan.extraction.tokens import TokenSource
from feedscan.serialization import records_to_json

logger = logging.getLogger(__name__)

_STRING_SOURCE = "<string>"


class FeedParser:
    """A feed document ready to be scanned.

    Args:
        xml: Decoded document text.
        mapping: Element names to recognise.  Defaults to
            :meth:`Settings.field_mapping`.
        source: URL, path or ``"<string>"``; used in log records and errors.
        token_source: Tokenizer passed to :func:`~feedscan.extraction.extract`.
    """

    def __init__(
        self,
        xml: str = "",
        mapping: FieldMapping | None = None,
        *,
        source: str = _STRING_SOURCE,
        token_source: TokenSource | None = None,
    ) -> None:
        self.xml = xml
        self.mapping = mapping if mapping is not None else get_settings().field_mapping()
        self.source = source
        self._token_source = token_source

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(source={self.source!r}, "
            f"mapping={self.mapping!r}, xml_length={len(self.xml)})"
        )

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_str(
        cls,
        xml: str,
        mapping: FieldMapping | None = None,
        *,
        check_format: bool | None = None,
    ) -> FeedParser:
        """Build a parser over literal text.

        Args:
            xml: Document text.
            mapping: Element names; see :class:`FeedParser`.
            check_format: Run the advisory pre-check.  Defaults to the
                configured ``check_format``.

        Raises:
            FormatRejectedError: If the pre-check runs and fails.
        """
        return cls._checked(xml, mapping, _STRING_SOURCE, check_format)

    @classmethod
    async def from_url(
        cls,
        url: str,
        charset: str | None = None,
        mapping: FieldMapping | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        check_format: bool | None = None,
    ) -> FeedParser:
        """Fetch *url* and build a parser over its body.

        Args:
            url: Feed address.
            charset: Fallback codec when the response declares none.
            mapping: Element names; see :class:`FeedParser`.
            client: Optional shared :class:`httpx.AsyncClient`.
            check_format: Run the advisory pre-check.

        Raises:
            AcquisitionError: If the document cannot be fetched.
            FormatRejectedError: If the pre-check runs and fails.
        """
        text = await fetch_document(url, charset, client=client)
        return cls._checked(text, mapping, url, check_format)

    @classmethod
    def from_file(
        cls,
        path: str | os.PathLike[str],
        mapping: FieldMapping | None = None,
        *,
        encoding: str | None = None,
        check_format: bool | None = None,
    ) -> FeedParser:
        """Read *path* and build a parser over its contents.

        Raises:
            AcquisitionError: If the file cannot be read.
            FormatRejectedError: If the pre-check runs and fails.
        """
        text = read_document(path, encoding or get_settings().default_charset)
        return cls._checked(text, mapping, str(path), check_format)

    @classmethod
    def _checked(
        cls,
        xml: str,
        mapping: FieldMapping | None,
        source: str,
        check_format: bool | None,
    ) -> FeedParser:
        if check_format is None:
            check_format = get_settings().check_format
        if check_format:
            ensure_feed(xml, source=source)
        return cls(xml, mapping, source=source)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def with_tags(self, **names: str) -> FeedParser:
        """Return a parser over the same text with element names overridden.

        Example::

            parser.with_tags(author_tag="dc:creator")
        """
        return type(self)(
            self.xml,
            self.mapping.with_overrides(**names),
            source=self.source,
            token_source=self._token_source,
        )

    def set_xml(self, xml: str) -> None:
        self.xml = xml

    def get_xml(self) -> str:
        return self.xml

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def parse_vec(self) -> list[Record]:
        """Scan the document and return its records in document order.

        Raises:
            ParseError: If the document is malformed.
        """
        token = scan_source_var.set(self.source)
        try:
            records = extract(self.xml, self.mapping, token_source=self._token_source)
            logger.info("parser: %d records from %s", len(records), self.source)
        finally:
            scan_source_var.reset(token)
        return records

    def parse_json(self, indent: int | None = None) -> str:
        """Scan the document and return its records as a JSON array.

        Raises:
            ParseError: If the document is malformed.
        """
        return records_to_json(self.parse_vec(), indent=indent)


# ---------------------------------------------------------------------------
# Concurrent multi-feed scanning
# ---------------------------------------------------------------------------


@dataclass
class FeedScanResult:
    """Outcome of scanning a single feed.

    Attributes:
        url: The feed address.
        records: Extracted records; empty when ``error`` is set.
        error: The acquisition, format or parse error that stopped this
            feed, or ``None`` on success.
    """

    url: str
    records: list[Record] = field(default_factory=list)
    error: FeedScanError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def scan_feeds(
    urls: Iterable[str],
    mapping: FieldMapping | None = None,
    *,
    charset: str | None = None,
    concurrency: int | None = None,
    client: httpx.AsyncClient | None = None,
    check_format: bool | None = None,
) -> list[FeedScanResult]:
    """Fetch and scan several feeds concurrently.

    Fetches run in parallel, bounded by a semaphore of size *concurrency*.
    Each document is scanned right after its fetch completes.

    Args:
        urls: Feed addresses.  Results keep this order.
        mapping: Element names applied to every feed.
        charset: Fallback codec for bodies that declare none.
        concurrency: Maximum simultaneous fetches.  Defaults to the
            configured ``scan_concurrency``.  Must be at least 1.
        client: Optional shared :class:`httpx.AsyncClient`.  If ``None``,
            one client is created for the whole batch.
        check_format: Run the advisory pre-check on each document.

    Returns:
        One :class:`FeedScanResult` per URL, in input order.

    Raises:
        ValueError: If *concurrency* is less than 1.
    """
    settings = get_settings()
    url_list = list(urls)
    limit = concurrency if concurrency is not None else settings.scan_concurrency
    if limit < 1:
        raise ValueError(f"concurrency must be at least 1, got {limit}")
    semaphore = asyncio.Semaphore(limit)
    effective_mapping = mapping if mapping is not None else settings.field_mapping()

    async def _scan_one(http_client: httpx.AsyncClient, url: str) -> FeedScanResult:
        try:
            async with semaphore:
                parser = await FeedParser.from_url(
                    url,
                    charset,
                    effective_mapping,
                    client=http_client,
                    check_format=check_format,
                )
            return FeedScanResult(url=url, records=parser.parse_vec())
        except FeedScanError as exc:
            logger.warning("parser: failed to scan feed '%s': %s", url, exc)
            return FeedScanResult(url=url, error=exc)

    if client is not None:
        return list(await asyncio.gather(*(_scan_one(client, url) for url in url_list)))

    async with httpx.AsyncClient(follow_redirects=True) as own_client:
        return list(await asyncio.gather(*(_scan_one(own_client, url) for url in url_list)))
