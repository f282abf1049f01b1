"""Token sources: turn document text into start/end/text/CDATA/EOF events.

The extraction engine only depends on :class:`TokenSource`.  The default
implementation, :class:`ExpatTokenSource`, is built on the stdlib
``xml.parsers.expat`` parser with namespace processing disabled, so prefixed
names such as ``dc:creator`` reach the engine verbatim.

Text policy of :class:`ExpatTokenSource`:

- Character data between two markup boundaries, including expanded entity
  and character references, is delivered as a single ``TEXT`` token.
- With ``trim_text`` enabled (the default) ``TEXT`` is stripped of XML
  whitespace and whitespace-only text is skipped.  ``CDATA`` is never trimmed.
- Self-closing elements produce a ``START`` followed by an ``END``.
- Comments, processing instructions and the XML declaration produce no
  tokens.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from xml.parsers import expat

from feedscan.core.exceptions import ParseError

logger = logging.getLogger(__name__)

#: Bytes handed to expat per ``Parse`` call.
DEFAULT_CHUNK_SIZE: int = 64 * 1024

_XML_WHITESPACE = " \t\r\n"

_NO_ELEMENTS = expat.errors.codes[expat.errors.XML_ERROR_NO_ELEMENTS]
_JUNK_AFTER_ROOT = expat.errors.codes[expat.errors.XML_ERROR_JUNK_AFTER_DOC_ELEMENT]


class TokenKind(str, Enum):
    """Kinds of event produced by a :class:`TokenSource`."""

    START = "start"
    END = "end"
    TEXT = "text"
    CDATA = "cdata"
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    """A single event from a token source.

    Attributes:
        kind: The event kind.
        value: Element name for ``START``/``END``, content for
            ``TEXT``/``CDATA``, empty for ``EOF``.
    """

    kind: TokenKind
    value: str = ""


class TokenSource(ABC):
    """Abstract producer of :class:`Token` events for a document."""

    @abstractmethod
    def tokens(self, text: str) -> Iterator[Token]:
        """Yield the tokens of *text* in document order, ending with ``EOF``.

        Raises:
            ParseError: If the text is malformed.  Tokens already yielded
                stay valid; no further tokens follow.
        """

    def __call__(self, text: str) -> Iterator[Token]:
        return self.tokens(text)


# ---------------------------------------------------------------------------
# expat-backed implementation
# ---------------------------------------------------------------------------


class _ExpatCollector:
    """Receives expat callbacks and queues the resulting tokens."""

    def __init__(self, trim_text: bool) -> None:
        self._trim_text = trim_text
        self._pending: list[Token] = []
        self._text: list[str] = []
        self._cdata: list[str] | None = None
        self.seen_element = False

        parser = expat.ParserCreate(encoding="utf-8")
        parser.StartElementHandler = self._start_element
        parser.EndElementHandler = self._end_element
        parser.CharacterDataHandler = self._character_data
        parser.StartCdataSectionHandler = self._start_cdata
        parser.EndCdataSectionHandler = self._end_cdata
        parser.CommentHandler = self._markup_boundary
        parser.ProcessingInstructionHandler = self._markup_boundary
        self.parser = parser

    def feed(self, data: bytes, final: bool) -> list[Token]:
        self.parser.Parse(data, final)
        if final:
            self._flush_text()
        return self.drain()

    def drain(self) -> list[Token]:
        ready, self._pending = self._pending, []
        return ready

    def _flush_text(self) -> None:
        if not self._text:
            return
        content = "".join(self._text)
        self._text = []
        if self._trim_text:
            content = content.strip(_XML_WHITESPACE)
            if not content:
                return
        self._pending.append(Token(TokenKind.TEXT, content))

    def _start_element(self, name: str, attrs: dict[str, str]) -> None:  # noqa: ARG002
        self._flush_text()
        self.seen_element = True
        self._pending.append(Token(TokenKind.START, name))

    def _end_element(self, name: str) -> None:
        self._flush_text()
        self._pending.append(Token(TokenKind.END, name))

    def _character_data(self, data: str) -> None:
        if self._cdata is not None:
            self._cdata.append(data)
        else:
            self._text.append(data)

    def _start_cdata(self) -> None:
        self._flush_text()
        self._cdata = []

    def _end_cdata(self) -> None:
        content = "".join(self._cdata or [])
        self._cdata = None
        self._pending.append(Token(TokenKind.CDATA, content))

    def _markup_boundary(self, *args: str) -> None:  # noqa: ARG002
        self._flush_text()


class ExpatTokenSource(TokenSource):
    """Incremental token source backed by ``xml.parsers.expat``.

    The text is encoded to UTF-8 and fed to expat in chunks of *chunk_size*
    bytes; tokens are yielded as soon as each chunk has been parsed.  Lone
    surrogate escapes (``\\udc80``-``\\udcff``, as produced by decoding with
    ``errors="surrogateescape"``) are turned back into their raw bytes, so
    undecodable input is reported by expat as a well-formedness error.

    A document without any element (empty, whitespace, comments only) yields
    only ``EOF``.  Several top-level elements (a fragment) are scanned one
    after another with a fresh expat parser each; character data between
    them is skipped.

    Args:
        trim_text: Strip XML whitespace from ``TEXT`` tokens and skip
            whitespace-only text.
        chunk_size: Number of bytes handed to expat per ``Parse`` call.
    """

    def __init__(self, trim_text: bool = True, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size < 1:
            raise ValueError("chunk_size must be positive")
        self.trim_text = trim_text
        self.chunk_size = chunk_size

    def tokens(self, text: str) -> Iterator[Token]:
        try:
            data = text.encode("utf-8", "surrogateescape")
        except UnicodeEncodeError as exc:
            raise ParseError(f"document is not encodable as UTF-8: {exc.reason}") from exc

        start: int | None = 0
        while start is not None:
            segment = start
            collector = _ExpatCollector(self.trim_text)
            try:
                for offset in range(segment, len(data), self.chunk_size):
                    yield from collector.feed(data[offset : offset + self.chunk_size], False)
                yield from collector.feed(b"", True)
                start = None
            except expat.ExpatError as exc:
                if exc.code == _JUNK_AFTER_ROOT and collector.seen_element:
                    # Another top-level element or stray text: keep scanning.
                    yield from collector.drain()
                    start = _resume_offset(data, segment + collector.parser.ErrorByteIndex)
                elif exc.code == _NO_ELEMENTS and not collector.seen_element:
                    logger.debug("tokens: no elements from byte %d", segment)
                    start = None
                else:
                    line, column = _absolute_position(data, segment, exc.lineno, exc.offset)
                    raise ParseError(str(exc), line=line, column=column) from exc
        yield Token(TokenKind.EOF)


def _resume_offset(data: bytes, position: int) -> int | None:
    """Return the offset of the next markup at or after *position*, if any.

    Character data outside any element carries no field content and is
    skipped.
    """
    resume = data.find(b"<", position)
    if resume != position:
        end = len(data) if resume < 0 else resume
        logger.debug("tokens: skipped %d bytes outside any element", end - position)
    return resume if resume >= 0 else None


def _absolute_position(data: bytes, start: int, line: int, column: int) -> tuple[int, int]:
    """Translate an expat position within the segment at *start* to the whole document."""
    if start == 0:
        return line, column
    if line == 1:
        column += start - (data.rfind(b"\n", 0, start) + 1)
    return line + data.count(b"\n", 0, start), column
