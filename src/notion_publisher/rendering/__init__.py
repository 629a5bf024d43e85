"""Rendering of Notion pages into Markdown documents."""

from .exporter import Exporter
from .invoker import publishing_options, render_page
from .media_downloader import MediaDownloader
from .options import (
    BlockContext,
    HeaderHook,
    ImageHook,
    ImageSaveOptions,
    OverrideOptions,
    RenderOptions,
)
from .overrides import HeaderMeta, header_override, image_override, make_image_override

__all__ = [
    "BlockContext",
    "Exporter",
    "HeaderHook",
    "HeaderMeta",
    "ImageHook",
    "ImageSaveOptions",
    "MediaDownloader",
    "OverrideOptions",
    "RenderOptions",
    "header_override",
    "image_override",
    "make_image_override",
    "publishing_options",
    "render_page",
]
