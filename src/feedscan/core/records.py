"""Record model: the extracted item type and the per-run element-name mapping.

:class:`FieldMapping` tells the extraction engine which element names delimit
items and which element names feed each record field.  :class:`Record` is one
extracted item.  Both are plain value types with no side effects.
"""

from __future__ import annotations

import string
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from feedscan.config.defaults import (
    DEFAULT_AUTHOR_TAG,
    DEFAULT_DESCRIPTION_TAG,
    DEFAULT_GUID_TAG,
    DEFAULT_LINK_TAG,
    DEFAULT_NODE_TAG,
    DEFAULT_PUBLISH_TAG,
    DEFAULT_TITLE_TAG,
)

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def ascii_lower(value: str) -> str:
    """Fold ``A``-``Z`` to lower case and leave every other character untouched."""
    return value.translate(_ASCII_LOWER)


class RecordField(str, Enum):
    """Record field selectors, declared in dispatch priority order."""

    TITLE = "title"
    LINK = "link"
    AUTHOR = "author"
    DESCRIPTION = "description"
    GUID = "guid"
    PUBLISH = "publish"

    @property
    def tag_attribute(self) -> str:
        """Name of the :class:`FieldMapping` attribute holding this field's element name."""
        return f"{self.value}_tag"


#: Every element-name attribute of :class:`FieldMapping`, container first.
TAG_ATTRIBUTES: tuple[str, ...] = ("node_tag",) + tuple(
    field.tag_attribute for field in RecordField
)


# ---------------------------------------------------------------------------
# Field mapping
# ---------------------------------------------------------------------------


class FieldMapping(BaseModel):
    """Immutable association between record fields and element names.

    Any subset of the names may be overridden at construction::

        FieldMapping(author_tag="dc:creator")

    Names are compared ASCII case-insensitively.  They need not be distinct:
    when two fields share a name, the field declared earlier in
    :class:`RecordField` receives the value and the other is never written.

    Attributes:
        node_tag: Container element; each occurrence starts a new record.
        title_tag: Element feeding :attr:`Record.title`.
        link_tag: Element feeding :attr:`Record.link`.
        author_tag: Element feeding :attr:`Record.author`.
        description_tag: Element feeding :attr:`Record.description`.
        guid_tag: Element feeding :attr:`Record.guid`.
        publish_tag: Element feeding :attr:`Record.publish`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    node_tag: str = Field(default=DEFAULT_NODE_TAG, min_length=1)
    title_tag: str = Field(default=DEFAULT_TITLE_TAG, min_length=1)
    link_tag: str = Field(default=DEFAULT_LINK_TAG, min_length=1)
    author_tag: str = Field(default=DEFAULT_AUTHOR_TAG, min_length=1)
    description_tag: str = Field(default=DEFAULT_DESCRIPTION_TAG, min_length=1)
    guid_tag: str = Field(default=DEFAULT_GUID_TAG, min_length=1)
    publish_tag: str = Field(default=DEFAULT_PUBLISH_TAG, min_length=1)

    _dispatch: dict[str, RecordField] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: object) -> None:
        table: dict[str, RecordField] = {}
        for field in RecordField:
            # First registration wins: earlier fields keep a shared name.
            table.setdefault(ascii_lower(getattr(self, field.tag_attribute)), field)
        self._dispatch = table

    def with_overrides(self, **names: str) -> FieldMapping:
        """Return a copy with the given element names replaced.

        Args:
            **names: Any of the ``*_tag`` attributes.

        Returns:
            A new, validated :class:`FieldMapping`.
        """
        return FieldMapping(**{**self.model_dump(), **names})

    def is_container(self, tag: str) -> bool:
        """Return ``True`` if *tag* names the container element."""
        return ascii_lower(tag) == ascii_lower(self.node_tag)

    def field_for(self, tag: str) -> RecordField | None:
        """Return the field fed by *tag*, or ``None`` if no field uses it."""
        return self._dispatch.get(ascii_lower(tag))

    def dispatch_table(self) -> dict[str, RecordField]:
        """Return a copy of the lower-cased element name to field table."""
        return dict(self._dispatch)


# ---------------------------------------------------------------------------
# Record
# ---------------------------------------------------------------------------


class Record(BaseModel):
    """One extracted feed item.  Every field defaults to the empty string."""

    title: str = ""
    link: str = ""
    author: str = ""
    description: str = ""
    guid: str = ""
    publish: str = ""

    def assign(self, field: RecordField, value: str) -> None:
        """Replace the value of *field*; earlier content is discarded."""
        setattr(self, field.value, value)
