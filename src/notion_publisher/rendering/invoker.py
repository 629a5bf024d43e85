"""Render a single page to a Markdown file with the publishing overrides."""

import logging
from collections.abc import Callable
from pathlib import Path

from notion_publisher.config import DEFAULT_FILE_MODE, PublisherSettings

from .exporter import Exporter
from .options import ImageSaveOptions, OverrideOptions, RenderOptions
from .overrides import header_override, image_override, make_image_override

logger = logging.getLogger(__name__)

ExporterFactory = Callable[[], Exporter]


def publishing_options(settings: PublisherSettings | None = None) -> RenderOptions:
    """Options used for every published page.

    Args:
        settings: Source of the image locations; None uses the defaults
    """
    image_hook = image_override
    if settings is not None:
        image_hook = make_image_override(
            settings.image_save_root, settings.image_base_url
        )

    return RenderOptions(
        image_options=ImageSaveOptions(),
        overrides=OverrideOptions(page_header=header_override, image=image_hook),
        skip_empty_paragraphs=True,
    )


def render_page(
    page_id: str,
    output_path: Path,
    exporter_factory: ExporterFactory = Exporter.from_resolved_token,
    options: RenderOptions | None = None,
    file_mode: int = DEFAULT_FILE_MODE,
) -> bool:
    """Render a page and write it to output_path.

    Failures are logged and reported through the return value; none of
    them propagate.

    Args:
        page_id: ID of the page to render
        output_path: File the document is written to
        exporter_factory: Builds the exporter used for this page
        options: Render options (default: publishing_options())
        file_mode: Permission bits applied to the written file

    Returns:
        True if the document was written, False otherwise
    """
    try:
        exporter = exporter_factory()
    except Exception as e:
        logger.error(f"Failed creating exporter attempting to render page {page_id}: {e}")
        return False

    try:
        with exporter:
            document = exporter.render(page_id, options or publishing_options())
    except Exception as e:
        logger.error(f"Failed rendering page {page_id}. Error: {e}")
        return False

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(document)
        output_path.chmod(file_mode)
    except OSError as e:
        logger.error(f"Failed writing file {output_path} for page {page_id}. Error: {e}")
        return False

    logger.info(f"Rendered page {page_id} to {output_path}")
    return True
