"""Library settings loaded from environment variables.

Uses Pydantic Settings v2 for validated, type-safe configuration.  Every
variable is prefixed with ``FEEDSCAN_``; an optional ``.env`` file in the
working directory is read as well.

Usage::

    from feedscan.config.settings import get_settings

    settings = get_settings()
    mapping = settings.field_mapping()
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from feedscan.config.defaults import (
    DEFAULT_CHARSET,
    DEFAULT_SCAN_CONCURRENCY,
    DEFAULT_TIMEOUT,
    USER_AGENT,
)

if TYPE_CHECKING:
    from feedscan.core.records import FieldMapping


class Settings(BaseSettings):
    """Process-wide configuration backed by environment variables and an optional .env file.

    Every field has a default, so the library works without any environment
    set up.
    """

    model_config = SettingsConfigDict(
        env_prefix="FEEDSCAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    log_level: str = "INFO"
    """Logging verbosity.  One of: DEBUG, INFO, WARNING, ERROR, CRITICAL."""

    # ------------------------------------------------------------------
    # Acquisition
    # ------------------------------------------------------------------

    http_timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    """HTTP request timeout in seconds, applied by the fetcher's client."""

    user_agent: str = USER_AGENT
    """User-agent string sent with every feed request."""

    default_charset: str = DEFAULT_CHARSET
    """Charset used to decode documents when the caller does not name one."""

    check_format: bool = False
    """Run the advisory XML/RSS pre-check before a parser is handed out.

    The check is a cheap substring heuristic, not a validity guarantee."""

    scan_concurrency: int = Field(default=DEFAULT_SCAN_CONCURRENCY, ge=1)
    """Maximum number of feeds fetched at the same time by ``scan_feeds``."""

    # ------------------------------------------------------------------
    # Element-name overrides
    # ------------------------------------------------------------------

    node_tag: Optional[str] = None
    title_tag: Optional[str] = None
    link_tag: Optional[str] = None
    author_tag: Optional[str] = None
    """Set ``FEEDSCAN_AUTHOR_TAG=dc:creator`` for feeds using Dublin Core authors."""
    description_tag: Optional[str] = None
    guid_tag: Optional[str] = None
    publish_tag: Optional[str] = None

    def field_mapping(self) -> FieldMapping:
        """Return the :class:`FieldMapping` with every configured override applied.

        Returns:
            FieldMapping: Defaults for each tag left unset in the environment.
        """
        from feedscan.core.records import TAG_ATTRIBUTES, FieldMapping  # noqa: PLC0415

        overrides = {
            name: getattr(self, name)
            for name in TAG_ATTRIBUTES
            if getattr(self, name) is not None
        }
        return FieldMapping(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings singleton.

    In tests, call ``get_settings.cache_clear()`` after patching environment
    variables.

    Returns:
        Settings: The validated settings object.
    """
    return Settings()
