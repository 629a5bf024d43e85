"""Render options and override hook contracts.

The exporter knows nothing about how a page header is built or where
images go; both are delegated to override hooks installed through
:class:`OverrideOptions`. A hook is any callable with the matching
signature:

- ``HeaderHook(page) -> str``: the complete header block placed at the top
  of the document, delimiters included.
- ``ImageHook(context) -> str``: the Markdown for one image block. May save
  files as a side effect.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from schemas.notion import Block, NotionPage

from .media_downloader import MediaDownloader

MD_IMAGE_PATTERN = "![{alt}]({url})"


def image_markdown(url: str, alt: str = "image") -> str:
    return MD_IMAGE_PATTERN.format(alt=alt, url=url)


@dataclass
class ImageSaveOptions:
    """Where uploaded images are saved. None leaves them remote."""

    save_path: Path | None = None


@dataclass
class BlockContext:
    """What an image hook is given for one block.

    Attributes:
        block: The block being rendered
        page: The page that owns the block
        options: Options in effect for this render
        downloader: Downloader the exporter uses for media
    """

    block: Block
    page: NotionPage
    options: "RenderOptions"
    downloader: MediaDownloader


HeaderHook = Callable[[NotionPage], str]
ImageHook = Callable[[BlockContext], str]


@dataclass
class OverrideOptions:
    page_header: HeaderHook | None = None
    image: ImageHook | None = None


@dataclass
class RenderOptions:
    """Configuration for a single render.

    Attributes:
        image_options: Where uploaded images are saved
        overrides: Hooks replacing the default header and image output
        skip_empty_paragraphs: Drop paragraphs without text
    """

    image_options: ImageSaveOptions = field(default_factory=ImageSaveOptions)
    overrides: OverrideOptions = field(default_factory=OverrideOptions)
    skip_empty_paragraphs: bool = False
