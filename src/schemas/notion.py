"""Notion page, property and block schemas.

Notion returns pages as a bag of heterogeneously typed properties. Each
property carries a ``type`` tag naming which payload field is populated, so
reads go through the typed accessors on :class:`NotionPage`, which raise
:class:`PropertyError` instead of assuming a shape.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


class PropertyError(ValueError):
    """Raised when a page property is missing or not of the expected type."""

    def __init__(
        self,
        key: str,
        expected: str,
        actual: str | None,
        detail: str | None = None,
    ):
        self.key = key
        self.expected = expected
        self.actual = actual
        if actual is None:
            message = f"Property {key!r} is missing"
        elif actual != expected:
            message = f"Property {key!r} has type {actual!r}, expected {expected!r}"
        else:
            message = f"Property {key!r} {detail or 'is invalid'}"
        super().__init__(message)

    @property
    def missing(self) -> bool:
        return self.actual is None


class BlockTypeError(TypeError):
    """Raised when a block is handed to code expecting another block type."""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected block of type {expected!r}, got {actual!r}")


def rfc3339(value: str) -> str:
    """Normalise a Notion date or datetime string to RFC 3339 in whole seconds."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    text = parsed.replace(microsecond=0).isoformat()
    if text.endswith("+00:00"):
        return text[: -len("+00:00")] + "Z"
    return text


class Annotations(BaseModel):
    """Inline formatting flags on a rich text run."""

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    code: bool = False
    color: str = "default"


class RichText(BaseModel):
    """A single run of rich text."""

    type: str = "text"
    plain_text: str = ""
    href: str | None = None
    annotations: Annotations = Field(default_factory=Annotations)

    model_config = {"extra": "allow"}


class SelectOption(BaseModel):
    """The chosen option of a select property."""

    name: str
    id: str | None = None
    color: str | None = None


class DateValue(BaseModel):
    """Value of a date property. Dates are kept as the ISO strings Notion sends."""

    start: str
    end: str | None = None
    time_zone: str | None = None


class PageProperty(BaseModel):
    """A single typed page property.

    Only the field named by ``type`` is populated; properties of types this
    project does not read are kept as extra fields.
    """

    type: str
    id: str | None = None
    title: list[RichText] | None = None
    rich_text: list[RichText] | None = None
    select: SelectOption | None = None
    date: DateValue | None = None

    model_config = {"extra": "allow"}


class NotionPage(BaseModel):
    """A page as returned by the database query and page endpoints."""

    id: str
    last_edited_time: datetime
    created_time: datetime | None = None
    url: str | None = None
    properties: dict[str, PageProperty] = {}

    model_config = {"extra": "allow"}

    def get_property(self, key: str, expected_type: str) -> PageProperty:
        """Return the property named key, checking its type tag.

        Raises:
            PropertyError: If the property is absent or has another type
        """
        prop = self.properties.get(key)
        if prop is None:
            raise PropertyError(key, expected_type, None)
        if prop.type != expected_type:
            raise PropertyError(key, expected_type, prop.type)
        return prop

    def select_name(self, key: str) -> str:
        """Name of the selected option, or an empty string when unset."""
        prop = self.get_property(key, "select")
        return prop.select.name if prop.select is not None else ""

    def title_text(self, key: str) -> str:
        """Plain text of the first run of a title property.

        Raises:
            PropertyError: If the property is missing, mistyped or empty
        """
        prop = self.get_property(key, "title")
        if not prop.title:
            raise PropertyError(key, "title", "title", "has no text")
        return prop.title[0].plain_text

    def rich_text_values(self, key: str) -> list[str]:
        """Plain text of every run of a rich text property."""
        prop = self.get_property(key, "rich_text")
        return [run.plain_text for run in prop.rich_text or []]

    def first_rich_text(self, key: str) -> str:
        """Plain text of the first run of a rich text property, or ''."""
        values = self.rich_text_values(key)
        return values[0] if values else ""

    def date_start(self, key: str) -> str:
        """Start of a date property as an RFC 3339 timestamp, or '' when unset.

        Date-only values become midnight UTC and fractional seconds are
        dropped, so ``2026-01-15`` reads as ``2026-01-15T00:00:00Z``.
        """
        prop = self.get_property(key, "date")
        if prop.date is None:
            return ""
        try:
            return rfc3339(prop.date.start)
        except ValueError:
            raise PropertyError(
                key, "date", "date", f"has unparseable start {prop.date.start!r}"
            ) from None

    @property
    def title(self) -> str:
        """Text of the page's title property, whatever it is named."""
        for prop in self.properties.values():
            if prop.type == "title" and prop.title:
                return prop.title[0].plain_text
        return ""


class FileObject(BaseModel):
    """A URL reference, either Notion-hosted (expiring) or external."""

    url: str
    expiry_time: str | None = None


class ImagePayload(BaseModel):
    """Payload of an image block."""

    type: str
    file: FileObject | None = None
    external: FileObject | None = None
    caption: list[RichText] = []

    @property
    def is_external(self) -> bool:
        return self.external is not None


class Block(BaseModel):
    """A content block.

    The block's payload lives under a key equal to its ``type`` and is kept
    as an extra field, accessible through :attr:`payload`.
    """

    id: str
    type: str
    has_children: bool = False

    model_config = {"extra": "allow"}

    @property
    def payload(self) -> dict[str, Any]:
        extra = self.model_extra or {}
        value = extra.get(self.type)
        return value if isinstance(value, dict) else {}

    @property
    def rich_text(self) -> list[RichText]:
        return [RichText.model_validate(run) for run in self.payload.get("rich_text", [])]

    @property
    def image(self) -> ImagePayload:
        """The image payload of an image block.

        Raises:
            BlockTypeError: If the block is not an image block
        """
        if self.type != "image":
            raise BlockTypeError("image", self.type)
        return ImagePayload.model_validate(self.payload)
