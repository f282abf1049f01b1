"""Async HTTP acquisition of feed documents.

Uses ``httpx`` for all requests.  A single GET is issued per call; there are
no retries.  Every failure is raised as
:class:`~feedscan.core.exceptions.AcquisitionError`.
"""

from __future__ import annotations

import codecs
import logging

import httpx

from feedscan.config.settings import get_settings
from feedscan.core.exceptions import AcquisitionError

logger = logging.getLogger(__name__)


def _is_known_codec(charset: str) -> bool:
    try:
        codecs.lookup(charset)
    except LookupError:
        return False
    return True


def _decode_body(content: bytes, charset: str, url: str) -> str:
    """Decode *content* with *charset*, preserving undecodable bytes.

    Invalid byte sequences are kept as surrogate escapes so that the
    tokenizer reports them as a parse error instead of the text being
    silently altered.

    Raises:
        AcquisitionError: If *charset* is not a known codec.
    """
    try:
        codec = codecs.lookup(charset)
    except LookupError as exc:
        raise AcquisitionError(f"unknown charset '{charset}'", source=url) from exc
    return content.decode(codec.name, errors="surrogateescape")


async def fetch_document(
    url: str,
    charset: str | None = None,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> str:
    """Fetch *url* and return its body as text.

    Args:
        url: Feed address.
        charset: Fallback codec used when the response does not declare a
            charset in its ``Content-Type`` header, or declares one that is
            not a known codec (aliases such as
            ``"utf8"`` are accepted).  Defaults to the configured
            ``default_charset``.
        client: Optional shared :class:`httpx.AsyncClient`.  Inject for
            testing or connection reuse.  If ``None``, a client is created
            for this call.
        timeout: Request timeout in seconds.  Defaults to the configured
            ``http_timeout``.

    Returns:
        The decoded document text.

    Raises:
        AcquisitionError: On transport errors, HTTP statuses >= 400 and an
            unknown *charset* (or configured default).
    """
    settings = get_settings()
    effective_timeout = timeout if timeout is not None else settings.http_timeout
    headers = {"User-Agent": settings.user_agent}

    try:
        if client is None:
            async with httpx.AsyncClient(follow_redirects=True) as own_client:
                response = await own_client.get(url, headers=headers, timeout=effective_timeout)
        else:
            response = await client.get(url, headers=headers, timeout=effective_timeout)
    except httpx.TimeoutException as exc:
        logger.warning("acquisition: timeout fetching %s", url)
        raise AcquisitionError(f"timeout fetching {url}", source=url) from exc
    except httpx.RequestError as exc:
        logger.warning("acquisition: request error for %s: %s", url, exc)
        raise AcquisitionError(f"request error for {url}: {exc}", source=url) from exc

    if response.status_code >= 400:
        logger.warning("acquisition: HTTP %d for %s", response.status_code, url)
        raise AcquisitionError(
            f"HTTP {response.status_code} for {url}",
            source=url,
            status_code=response.status_code,
        )

    fallback_charset = charset or settings.default_charset
    effective_charset = response.charset_encoding or fallback_charset
    if effective_charset != fallback_charset and not _is_known_codec(effective_charset):
        logger.warning(
            "acquisition: unknown declared charset '%s' for %s, using %s",
            effective_charset,
            url,
            fallback_charset,
        )
        effective_charset = fallback_charset
    text = _decode_body(response.content, effective_charset, url)
    logger.debug(
        "acquisition: fetched %s (%d bytes, charset=%s)",
        url,
        len(response.content),
        effective_charset,
    )
    return text
