"""JSON rendering of extracted records.

Each record becomes a flat object with the keys ``title``, ``link``,
``author``, ``description``, ``guid`` and ``publish``.  Empty fields are
written as empty strings, never omitted.
"""

from __future__ import annotations

import json
from collections.abc import Iterable

from pydantic import TypeAdapter, ValidationError

from feedscan.core.records import Record

_RECORD_LIST = TypeAdapter(list[Record])


def records_to_json(records: Iterable[Record], *, indent: int | None = None) -> str:
    """Serialize *records* to a JSON array.

    Non-ASCII characters are written as-is (``ensure_ascii=False``).

    Args:
        records: Records in the order they should appear.
        indent: Passed to :func:`json.dumps`; ``None`` gives compact output.

    Returns:
        The JSON document.
    """
    return json.dumps(
        [record.model_dump() for record in records],
        ensure_ascii=False,
        indent=indent,
    )


def records_from_json(payload: str | bytes) -> list[Record]:
    """Read a JSON array written by :func:`records_to_json`.

    Missing keys default to the empty string.

    Raises:
        ValueError: If *payload* is not a JSON array of record objects.
    """
    try:
        return _RECORD_LIST.validate_json(payload)
    except ValidationError as exc:
        raise ValueError(f"invalid record array: {exc}") from exc
