"""Local file acquisition of feed documents."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from feedscan.config.defaults import DEFAULT_CHARSET
from feedscan.core.exceptions import AcquisitionError

logger = logging.getLogger(__name__)


def read_document(path: str | os.PathLike[str], encoding: str = DEFAULT_CHARSET) -> str:
    """Read a feed document from the local file system.

    Undecodable bytes are preserved as surrogate escapes; the tokenizer later
    reports them as a parse error.

    Args:
        path: File to read.
        encoding: Codec used to decode the file.

    Returns:
        The decoded document text.

    Raises:
        AcquisitionError: If the file cannot be opened or read, or the
            encoding is unknown.
    """
    try:
        text = Path(path).read_text(encoding=encoding, errors="surrogateescape")
    except LookupError as exc:
        raise AcquisitionError(f"unknown charset '{encoding}'", source=str(path)) from exc
    except OSError as exc:
        logger.warning("acquisition: cannot read %s: %s", path, exc)
        raise AcquisitionError(f"cannot read {path}: {exc}", source=str(path)) from exc
    logger.debug("acquisition: read %s (%d chars)", path, len(text))
    return text
