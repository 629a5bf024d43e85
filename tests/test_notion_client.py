"""Tests for the NotionClient class."""

from unittest.mock import MagicMock

import pytest

from conftest import make_block, make_page
from notion_publisher.clients import NotionClient, ValidationError
from notion_publisher.clients.notion_client import NOTION_API_URL, NOTION_VERSION
from schemas.notion import Block, NotionPage


def ok_response(data: dict) -> MagicMock:
    response = MagicMock()
    response.is_success = True
    response.json.return_value = data
    return response


def list_response(results: list, next_cursor: str | None = None) -> MagicMock:
    return ok_response({
        "object": "list",
        "results": results,
        "has_more": next_cursor is not None,
        "next_cursor": next_cursor,
    })


@pytest.fixture
def mock_http_client():
    return MagicMock()


@pytest.fixture
def client(mock_http_client):
    client = NotionClient.from_token("secret_token")
    client._client = mock_http_client
    return client


class TestNotionClientConfiguration:
    """Tests for NotionClient.from_token()."""

    def test_sets_auth_and_version_headers(self):
        client = NotionClient.from_token("secret_token")

        assert client.base_url == NOTION_API_URL
        assert client.headers["Authorization"] == "Bearer secret_token"
        assert client.headers["Notion-Version"] == NOTION_VERSION

    def test_accepts_extra_config(self):
        client = NotionClient.from_token(
            "secret_token", timeout=10, headers={"User-Agent": "tests"}
        )

        assert client.timeout == 10
        assert client.headers["User-Agent"] == "tests"
        assert client.headers["Authorization"] == "Bearer secret_token"


class TestQueryDatabase:
    """Tests for NotionClient.query_database()."""

    def test_returns_validated_pages(self, client, mock_http_client):
        mock_http_client.request.return_value = list_response([make_page()])

        pages = client.query_database("db-1")

        assert len(pages) == 1
        assert isinstance(pages[0], NotionPage)
        assert pages[0].title == "Hello World"
        mock_http_client.request.assert_called_once_with(
            "POST", "/databases/db-1/query", json={"page_size": 100}
        )

    def test_follows_pagination(self, client, mock_http_client):
        """Query continues with next_cursor until has_more is false."""
        mock_http_client.request.side_effect = [
            list_response([make_page(page_id="p1")], next_cursor="cursor-2"),
            list_response([make_page(page_id="p2")]),
        ]

        pages = client.query_database("db-1")

        assert [page.id for page in pages] == ["p1", "p2"]
        second_call = mock_http_client.request.call_args_list[1]
        assert second_call.kwargs["json"] == {"page_size": 100, "start_cursor": "cursor-2"}

    def test_passes_filter(self, client, mock_http_client):
        mock_http_client.request.return_value = list_response([])
        query_filter = {"property": "Status", "select": {"equals": "online"}}

        client.query_database("db-1", query_filter=query_filter)

        body = mock_http_client.request.call_args.kwargs["json"]
        assert body["filter"] == query_filter

    def test_fetch_queries_database(self, client, mock_http_client):
        mock_http_client.request.return_value = list_response([])

        assert client.fetch("db-1") == []

    def test_invalid_page_raises_validation_error(self, client, mock_http_client):
        mock_http_client.request.return_value = list_response([{"id": "broken"}])

        with pytest.raises(ValidationError) as exc_info:
            client.query_database("db-1")

        assert "broken" in exc_info.value.message
        assert exc_info.value.errors

    def test_non_json_body_raises_validation_error(self, client, mock_http_client):
        response = ok_response({})
        response.json.side_effect = ValueError("Expecting value")
        mock_http_client.request.return_value = response

        with pytest.raises(ValidationError, match="not valid JSON"):
            client.query_database("db-1")

    def test_non_object_body_raises_validation_error(self, client, mock_http_client):
        mock_http_client.request.return_value = ok_response([make_page()])

        with pytest.raises(ValidationError, match="not a JSON object, got list"):
            client.query_database("db-1")


class TestPageContent:
    """Tests for page and block retrieval."""

    def test_retrieve_page(self, client, mock_http_client):
        mock_http_client.request.return_value = ok_response(make_page(page_id="p9"))

        page = client.retrieve_page("p9")

        assert page.id == "p9"
        mock_http_client.request.assert_called_once_with("GET", "/pages/p9")

    def test_retrieve_page_non_json_body(self, client, mock_http_client):
        response = ok_response({})
        response.json.side_effect = ValueError("Expecting value")
        mock_http_client.request.return_value = response

        with pytest.raises(ValidationError, match="not valid JSON"):
            client.retrieve_page("p9")

    def test_list_block_children_paginates(self, client, mock_http_client):
        mock_http_client.request.side_effect = [
            list_response([make_block("paragraph", "one", block_id="b1")], "c2"),
            list_response([make_block("paragraph", "two", block_id="b2")]),
        ]

        blocks = client.list_block_children("p1")

        assert [block.id for block in blocks] == ["b1", "b2"]
        assert all(isinstance(block, Block) for block in blocks)
        first, second = mock_http_client.request.call_args_list
        assert first.args == ("GET", "/blocks/p1/children")
        assert first.kwargs["params"] == {"page_size": 100}
        assert second.kwargs["params"] == {"page_size": 100, "start_cursor": "c2"}
