"""Pytest fixtures for notion-publisher tests."""

import pytest


def rich_text(text: str, **annotations) -> dict:
    """Build a Notion rich text run."""
    return {
        "type": "text",
        "text": {"content": text, "link": None},
        "annotations": {
            "bold": False,
            "italic": False,
            "strikethrough": False,
            "underline": False,
            "code": False,
            "color": "default",
            **annotations,
        },
        "plain_text": text,
        "href": None,
    }


def make_page(
    page_id: str = "page-1",
    title: str = "Hello World",
    status: str | None = "online",
    last_edited_time: str = "2026-01-15T10:00:00.000Z",
    description: str | None = "A first post",
    image: str | None = "https://files.example.com/cover.png",
    release: str | None = "2026-01-15",
) -> dict:
    """Build a Notion page record as returned by the database query endpoint."""
    properties: dict = {
        "Name": {"id": "title", "type": "title", "title": [rich_text(title)]},
        "Description": {
            "id": "desc",
            "type": "rich_text",
            "rich_text": [rich_text(description)] if description else [],
        },
        "Images": {
            "id": "imgs",
            "type": "rich_text",
            "rich_text": [rich_text(image)] if image else [],
        },
        "Release": {
            "id": "rel",
            "type": "date",
            "date": {"start": release, "end": None, "time_zone": None} if release else None,
        },
    }
    if status is not None:
        properties["Status"] = {
            "id": "status",
            "type": "select",
            "select": {"id": "opt-1", "name": status, "color": "green"},
        }
    return {
        "object": "page",
        "id": page_id,
        "created_time": "2026-01-01T09:00:00.000Z",
        "last_edited_time": last_edited_time,
        "url": f"https://www.notion.so/{page_id}",
        "properties": properties,
    }


def make_block(block_type: str, text: str = "", block_id: str = "block-1", **payload) -> dict:
    """Build a Notion block record."""
    body = {"rich_text": [rich_text(text)] if text else [], **payload}
    return {
        "object": "block",
        "id": block_id,
        "type": block_type,
        "has_children": False,
        block_type: body,
    }


def make_image_block(
    url: str,
    external: bool = False,
    block_id: str = "image-1",
) -> dict:
    """Build a Notion image block, either uploaded or external."""
    if external:
        image = {"caption": [], "type": "external", "external": {"url": url}}
    else:
        image = {
            "caption": [],
            "type": "file",
            "file": {"url": url, "expiry_time": "2026-01-15T11:00:00.000Z"},
        }
    return {
        "object": "block",
        "id": block_id,
        "type": "image",
        "has_children": False,
        "image": image,
    }


@pytest.fixture
def sample_page_record():
    """A publishable page with every property the header reads."""
    return make_page()


@pytest.fixture
def sample_page(sample_page_record):
    from schemas.notion import NotionPage

    return NotionPage.model_validate(sample_page_record)


@pytest.fixture
def uploaded_image_url():
    return (
        "https://prod-files-secure.s3.us-west-2.amazonaws.com/ws/abc/"
        "diagram.png?X-Amz-Signature=deadbeef"
    )
