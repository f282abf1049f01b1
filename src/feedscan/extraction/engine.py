"""Streaming tag-to-field extraction engine.

Walks the token stream of a feed document once, tracks the most recently
opened element and routes text and CDATA content into the record currently
being built::

    from feedscan.extraction import extract

    records = extract(xml_text)
    records = extract(xml_text, FieldMapping(author_tag="dc:creator"))

Rules applied per token:

- ``START`` sets the active element.  If it is the container element a new,
  empty :class:`~feedscan.core.records.Record` is appended and becomes the
  current record; the previous record receives no further writes.
- ``TEXT`` / ``CDATA`` overwrite the field bound to the active element on the
  current record.  Content seen before the first container, or under an
  element bound to no field, is dropped.
- ``END`` is ignored; the active element stays set until the next ``START``.
- ``EOF`` ends the scan.

A :class:`~feedscan.core.exceptions.ParseError` from the token source aborts
the scan; records gathered so far are discarded.
"""

from __future__ import annotations

import logging

from feedscan.core.records import FieldMapping, Record
from feedscan.extraction.tokens import ExpatTokenSource, TokenKind, TokenSource

logger = logging.getLogger(__name__)

_DEFAULT_MAPPING = FieldMapping()

_CONTENT_KINDS = frozenset({TokenKind.TEXT, TokenKind.CDATA})


def extract(
    document_text: str,
    mapping: FieldMapping | None = None,
    *,
    token_source: TokenSource | None = None,
) -> list[Record]:
    """Extract one record per container element of *document_text*.

    Args:
        document_text: Decoded feed document.
        mapping: Element names to recognise.  Defaults to the conventional
            RSS names.
        token_source: Tokenizer to drive.  Defaults to a fresh
            :class:`~feedscan.extraction.tokens.ExpatTokenSource`.

    Returns:
        Records in document order.  Empty if the document has no container
        element.

    Raises:
        ParseError: If the token source reports malformed input.
    """
    mapping = mapping if mapping is not None else _DEFAULT_MAPPING
    source = token_source if token_source is not None else ExpatTokenSource()

    records: list[Record] = []
    active = ""
    dropped = 0

    for token in source(document_text):
        if token.kind is TokenKind.START:
            active = token.value
            if mapping.is_container(active):
                records.append(Record())
        elif token.kind in _CONTENT_KINDS:
            field = mapping.field_for(active) if records else None
            if field is None:
                dropped += 1
                continue
            records[-1].assign(field, token.value)
        elif token.kind is TokenKind.EOF:
            break

    logger.debug(
        "extraction: %d records, %d content tokens dropped (container=%r)",
        len(records),
        dropped,
        mapping.node_tag,
    )
    return records
