"""Markdown exporter for Notion pages.

Walks a page's block tree through the Notion API and converts it to
Markdown. Output specific to a site (front matter, image hosting) is left to
the override hooks in :class:`RenderOptions`.
"""

import logging

from notion_publisher.auth import resolve_token
from notion_publisher.clients import NotionClient
from schemas.notion import Block, NotionPage, RichText

from .filters import format_rich_text, indent, plain_text
from .media_downloader import MediaDownloader
from .options import BlockContext, RenderOptions, image_markdown

logger = logging.getLogger(__name__)

HEADING_LEVELS = {"heading_1": 1, "heading_2": 2, "heading_3": 3}
LIST_TYPES = {"bulleted_list_item", "numbered_list_item", "to_do"}
NESTED_INDENT = "    "


def default_image(context: BlockContext) -> str:
    """Render an image block when no image hook is installed.

    External images are linked directly. Uploaded images are saved to
    ``image_options.save_path`` and linked by local path, or linked remotely
    when no save path is configured.
    """
    image = context.block.image
    if image.is_external:
        return image_markdown(image.external.url)
    if image.file is None:
        return ""

    save_path = context.options.image_options.save_path
    if save_path is None:
        return image_markdown(image.file.url)

    saved = context.downloader.save_image(image.file.url, save_path)
    return image_markdown(str(saved))


class Exporter:
    """Render Notion pages to Markdown documents.

    Example:
        with Exporter.from_token(token) as exporter:
            markdown = exporter.render(page_id, RenderOptions())
    """

    def __init__(self, client: NotionClient, downloader: MediaDownloader | None = None):
        self.client = client
        self.downloader = downloader or MediaDownloader()

    @classmethod
    def from_token(cls, token: str) -> "Exporter":
        return cls(NotionClient.from_token(token))

    @classmethod
    def from_resolved_token(cls) -> "Exporter":
        """Build an exporter authenticated with the resolved Notion token.

        Raises:
            TokenError: If no token is available
        """
        return cls.from_token(resolve_token())

    def close(self) -> None:
        self.client.close()
        self.downloader.close()

    def __enter__(self) -> "Exporter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def render(self, page_id: str, options: RenderOptions | None = None) -> bytes:
        """Render a page and its content as UTF-8 Markdown.

        Args:
            page_id: ID of the page to render
            options: Render options (default: no overrides)

        Returns:
            The document bytes

        Raises:
            ClientError: If the page or its blocks cannot be fetched
            Any exception raised by an override hook
        """
        options = options or RenderOptions()
        page = self.client.retrieve_page(page_id)

        header = self._render_header(page, options)
        body = self._render_children(page.id, page, options)

        document = f"{header}\n\n{body}" if body else header
        return (document.rstrip("\n") + "\n").encode("utf-8")

    def _render_header(self, page: NotionPage, options: RenderOptions) -> str:
        hook = options.overrides.page_header
        if hook is not None:
            return hook(page)
        return f"# {page.title}"

    def _render_children(
        self, block_id: str, page: NotionPage, options: RenderOptions
    ) -> str:
        chunks: list[tuple[str, str]] = []
        number = 0

        for block in self.client.list_block_children(block_id):
            number = number + 1 if block.type == "numbered_list_item" else 0
            markdown = self._render_block(block, page, options, number)
            if markdown is not None:
                chunks.append((block.type, markdown))

        return self._join(chunks)

    def _join(self, chunks: list[tuple[str, str]]) -> str:
        """Join rendered blocks, keeping consecutive list items tight."""
        output = ""
        previous: str | None = None
        for block_type, markdown in chunks:
            if previous is not None:
                tight = block_type in LIST_TYPES and previous in LIST_TYPES
                output += "\n" if tight else "\n\n"
            output += markdown
            previous = block_type
        return output

    def _render_block(
        self,
        block: Block,
        page: NotionPage,
        options: RenderOptions,
        number: int,
    ) -> str | None:
        block_type = block.type
        payload = block.payload
        text = format_rich_text(block.rich_text)

        if block_type == "paragraph":
            if not text and not block.has_children and options.skip_empty_paragraphs:
                return None
            markdown = text
        elif block_type in HEADING_LEVELS:
            markdown = "#" * HEADING_LEVELS[block_type] + " " + text
        elif block_type == "bulleted_list_item":
            markdown = f"- {text}"
        elif block_type == "numbered_list_item":
            markdown = f"{number}. {text}"
        elif block_type == "to_do":
            mark = "x" if payload.get("checked") else " "
            markdown = f"- [{mark}] {text}"
        elif block_type == "toggle":
            markdown = text
        elif block_type in ("quote", "callout"):
            markdown = indent(text, "> ") if text else ">"
        elif block_type == "code":
            language = payload.get("language", "")
            markdown = f"```{language}\n{plain_text(block.rich_text)}\n```"
        elif block_type == "equation":
            markdown = f"$$\n{payload.get('expression', '')}\n$$"
        elif block_type == "divider":
            markdown = "---"
        elif block_type in ("bookmark", "embed", "link_preview"):
            url = payload.get("url", "")
            caption = plain_text(
                [RichText.model_validate(run) for run in payload.get("caption", [])]
            )
            markdown = f"[{caption or url}]({url})"
        elif block_type == "image":
            markdown = self._render_image(block, page, options)
        else:
            logger.debug(f"Skipping unsupported block {block.id} of type {block_type}")
            return None

        if block.has_children:
            children = self._render_children(block.id, page, options)
            if children:
                if block_type in LIST_TYPES or block_type == "toggle":
                    markdown += "\n" + indent(children, NESTED_INDENT)
                elif block_type in ("quote", "callout"):
                    markdown += "\n" + indent(children, "> ")
                else:
                    markdown += "\n\n" + children

        return markdown

    def _render_image(
        self, block: Block, page: NotionPage, options: RenderOptions
    ) -> str:
        context = BlockContext(
            block=block, page=page, options=options, downloader=self.downloader
        )
        hook = options.overrides.image or default_image
        return hook(context)
