"""Tests for the publishing override hooks."""

from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest
import yaml

from conftest import make_block, make_image_block, make_page
from notion_publisher.rendering import (
    BlockContext,
    MediaDownloader,
    RenderOptions,
    header_override,
    make_image_override,
)
from notion_publisher.rendering.overrides import build_header_meta
from schemas.notion import Block, BlockTypeError, NotionPage, PropertyError


def parse_header(header: str) -> tuple[dict, str]:
    """Split a rendered header into its front matter and the rest."""
    assert header.startswith("---\n")
    front_matter, rest = header[len("---\n"):].split("---\n", 1)
    return yaml.safe_load(front_matter), rest


class TestHeaderOverride:
    """Tests for header_override()."""

    def test_front_matter_fields(self, sample_page):
        front_matter, rest = parse_header(header_override(sample_page))

        assert front_matter == {
            "title": "Hello World",
            "description": "A first post",
            "date": "2026-01-15T00:00:00Z",
            "images": ["https://files.example.com/cover.png"],
            "aliases": [],
        }
        assert rest == "\n# Hello World"

    def test_field_order(self, sample_page):
        header = header_override(sample_page)
        keys = [line.split(":")[0] for line in header.splitlines() if line and line[0].isalpha()]

        assert keys == ["title", "description", "date", "images", "aliases"]

    def test_optional_fields_empty(self):
        page = NotionPage.model_validate(
            make_page(description=None, image=None, release=None)
        )

        front_matter, _ = parse_header(header_override(page))

        assert front_matter["description"] == ""
        assert front_matter["date"] == ""
        assert front_matter["images"] == []

    def test_only_first_image_used(self):
        record = make_page()
        record["properties"]["Images"]["rich_text"].append(
            make_page(image="https://files.example.com/second.png")["properties"]["Images"]["rich_text"][0]
        )
        page = NotionPage.model_validate(record)

        assert build_header_meta(page).images == ["https://files.example.com/cover.png"]

    def test_title_with_yaml_special_characters(self):
        page = NotionPage.model_validate(make_page(title="Go: the #1 language"))

        front_matter, rest = parse_header(header_override(page))

        assert front_matter["title"] == "Go: the #1 language"
        assert rest == "\n# Go: the #1 language"

    def test_missing_property_raises(self):
        """Missing header properties surface as PropertyError."""
        record = make_page()
        del record["properties"]["Release"]
        page = NotionPage.model_validate(record)

        with pytest.raises(PropertyError, match="Release"):
            header_override(page)

    def test_mistyped_property_raises(self):
        record = make_page()
        record["properties"]["Description"] = {"type": "number", "number": 4}
        page = NotionPage.model_validate(record)

        with pytest.raises(PropertyError) as exc_info:
            header_override(page)

        assert exc_info.value.actual == "number"


@pytest.fixture
def mock_downloader(tmp_path):
    downloader = MagicMock(spec=MediaDownloader)
    downloader.save_image.side_effect = lambda url, save_dir: save_dir / "diagram.png"
    return downloader


def image_context(block_record: dict, page: NotionPage, downloader) -> BlockContext:
    return BlockContext(
        block=Block.model_validate(block_record),
        page=page,
        options=RenderOptions(),
        downloader=downloader,
    )


class TestImageOverride:
    """Tests for hooks built by make_image_override()."""

    def test_external_image_not_downloaded(self, tmp_path, sample_page, mock_downloader):
        hook = make_image_override(tmp_path, "https://files.example.com/img/posts")
        context = image_context(
            make_image_block("https://example.com/pic.jpg?w=600", external=True),
            sample_page,
            mock_downloader,
        )

        markdown = hook(context)

        assert markdown == "![image](https://example.com/pic.jpg?w=600)"
        mock_downloader.save_image.assert_not_called()

    def test_uploaded_image_saved_under_post_slug(
        self, tmp_path, sample_page, mock_downloader, uploaded_image_url
    ):
        """Uploaded images are saved per post and linked by public URL."""
        hook = make_image_override(tmp_path / "posts", "https://files.example.com/img/posts/")
        context = image_context(
            make_image_block(uploaded_image_url), sample_page, mock_downloader
        )

        markdown = hook(context)

        mock_downloader.save_image.assert_called_once_with(
            uploaded_image_url, tmp_path / "posts" / "hello-world"
        )
        public_url = "https://files.example.com/img/posts/hello-world/diagram.png"
        assert markdown == f"![{public_url}]({public_url})"

    def test_uploaded_image_written_to_disk(self, tmp_path, sample_page, uploaded_image_url):
        http_client = MagicMock(spec=httpx.Client)
        response = MagicMock()
        response.content = b"png bytes"
        response.headers = {"content-type": "image/png"}
        http_client.get.return_value = response
        hook = make_image_override(tmp_path, "https://files.example.com/img/posts")
        context = image_context(
            make_image_block(uploaded_image_url),
            sample_page,
            MediaDownloader(http_client=http_client),
        )

        hook(context)

        assert (tmp_path / "hello-world" / "diagram.png").read_bytes() == b"png bytes"

    def test_non_image_block_raises(self, tmp_path, sample_page, mock_downloader):
        hook = make_image_override(tmp_path, "https://files.example.com")
        context = image_context(make_block("paragraph", "text"), sample_page, mock_downloader)

        with pytest.raises(BlockTypeError):
            hook(context)

    def test_download_failure_propagates(self, tmp_path, sample_page, uploaded_image_url):
        downloader = MagicMock(spec=MediaDownloader)
        downloader.save_image.side_effect = httpx.RequestError("Connection failed")
        hook = make_image_override(tmp_path, "https://files.example.com")
        context = image_context(make_image_block(uploaded_image_url), sample_page, downloader)

        with pytest.raises(httpx.RequestError):
            hook(context)

    def test_default_hook_uses_server_locations(self, sample_page, mock_downloader, uploaded_image_url):
        from notion_publisher.rendering import image_override

        context = image_context(make_image_block(uploaded_image_url), sample_page, mock_downloader)

        markdown = image_override(context)

        save_dir = mock_downloader.save_image.call_args.args[1]
        assert save_dir == Path("/usr/share/server/files/img/posts/hello-world")
        assert "/img/posts/hello-world/diagram.png" in markdown
