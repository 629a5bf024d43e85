"""Schema definitions for notion-publisher."""

from .notion import (
    Annotations,
    Block,
    BlockTypeError,
    DateValue,
    FileObject,
    ImagePayload,
    NotionPage,
    PageProperty,
    PropertyError,
    RichText,
    SelectOption,
)

__all__ = [
    "Annotations",
    "Block",
    "BlockTypeError",
    "DateValue",
    "FileObject",
    "ImagePayload",
    "NotionPage",
    "PageProperty",
    "PropertyError",
    "RichText",
    "SelectOption",
]
