"""Override hooks that turn exported pages into blog posts.

``header_override`` writes a YAML front-matter block built from the post's
database properties. ``image_override`` keeps externally hosted images as
links and copies images uploaded to Notion onto the file server, pointing
the document at their public URL.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel

from notion_publisher.config import DEFAULT_IMAGE_BASE_URL, DEFAULT_IMAGE_SAVE_ROOT
from notion_publisher.sanitize import sanitize_title
from schemas.notion import BlockTypeError, NotionPage

from .options import BlockContext, ImageHook, image_markdown

logger = logging.getLogger(__name__)

FRONT_MATTER_SEPARATOR = "---\n"

TITLE_KEY = "Name"
DESCRIPTION_KEY = "Description"
IMAGES_KEY = "Images"
RELEASE_KEY = "Release"


class HeaderMeta(BaseModel):
    """Front matter written at the top of every post."""

    title: str
    description: str = ""
    date: str = ""
    images: list[str] = []
    aliases: list[str] = []


def build_header_meta(page: NotionPage) -> HeaderMeta:
    """Collect front matter from a post's properties.

    Raises:
        PropertyError: If any of the four properties is missing or mistyped
    """
    images: list[str] = []
    first_image = page.first_rich_text(IMAGES_KEY)
    if first_image:
        images.append(first_image)

    return HeaderMeta(
        title=page.title_text(TITLE_KEY),
        description=page.first_rich_text(DESCRIPTION_KEY),
        date=page.date_start(RELEASE_KEY),
        images=images,
    )


def header_override(page: NotionPage) -> str:
    """Render the front matter block and title heading for a post."""
    meta = build_header_meta(page)
    front_matter = yaml.safe_dump(
        meta.model_dump(),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
    return (
        FRONT_MATTER_SEPARATOR
        + front_matter
        + FRONT_MATTER_SEPARATOR
        + "\n"
        + f"# {meta.title}"
    )


def make_image_override(save_root: Path, public_base_url: str) -> ImageHook:
    """Build an image hook saving uploads under save_root.

    Uploaded images land in ``save_root/<post slug>/<filename>`` and are
    linked as ``public_base_url/<post slug>/<filename>``, so save_root must
    be the directory the file server publishes at public_base_url.

    Args:
        save_root: Local directory holding one subdirectory per post
        public_base_url: URL the file server exposes save_root at

    Returns:
        An image hook
    """
    base_url = public_base_url.rstrip("/")

    def image_override(context: BlockContext) -> str:
        image = context.block.image
        if image.is_external:
            return image_markdown(image.external.url)
        if image.file is None:
            raise BlockTypeError("image with file or external source", image.type)

        slug = sanitize_title(context.page.title)
        saved = context.downloader.save_image(image.file.url, save_root / slug)

        url = f"{base_url}/{slug}/{saved.name}"
        logger.debug(f"Image for block {context.block.id} published at {url}")
        return image_markdown(url, alt=url)

    return image_override


image_override = make_image_override(DEFAULT_IMAGE_SAVE_ROOT, DEFAULT_IMAGE_BASE_URL)
