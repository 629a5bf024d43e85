"""Notion API client for querying databases and reading page content."""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from schemas.notion import Block, NotionPage

from .client import Client
from .exceptions import ValidationError

NOTION_API_URL = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"


class NotionClient(Client):
    """Client for the Notion REST API.

    Queries databases for pages and walks block children, validating
    responses against the schemas in :mod:`schemas.notion`. Paginated
    endpoints are followed until ``has_more`` is false.

    Example:
        with NotionClient.from_token(token) as client:
            pages = client.query_database("864350bdeb5e42358b3e05accccc0e3f")
    """

    DEFAULT_PAGE_SIZE = 100

    @classmethod
    def from_token(cls, token: str, **config: Any) -> "NotionClient":
        """Build a client authenticated with an integration token."""
        headers = {
            "Authorization": f"Bearer {token}",
            "Notion-Version": NOTION_VERSION,
            "User-Agent": "notion-publisher/1.0",
        }
        headers.update(config.pop("headers", {}))
        return cls({"base_url": NOTION_API_URL, "headers": headers, **config})

    def fetch(self, database_id: str) -> list[NotionPage]:
        return self.query_database(database_id)

    def query_database(
        self,
        database_id: str,
        query_filter: dict[str, Any] | None = None,
    ) -> list[NotionPage]:
        """Return every page in a database.

        Args:
            database_id: ID of the database to query
            query_filter: Optional Notion filter object; None queries unfiltered

        Raises:
            ValidationError: If a page fails schema validation
            APIError: If the API returns a non-2xx response
            ConnectionError: If the network connection fails
        """
        body: dict[str, Any] = {"page_size": self.DEFAULT_PAGE_SIZE}
        if query_filter is not None:
            body["filter"] = query_filter

        results = self._collect(
            lambda cursor: self.post(
                f"/databases/{database_id}/query",
                json={**body, **({"start_cursor": cursor} if cursor else {})},
            )
        )
        return [self._validate(NotionPage, item) for item in results]

    def retrieve_page(self, page_id: str) -> NotionPage:
        response = self.get(f"/pages/{page_id}")
        return self._validate(NotionPage, self._json(response))

    def list_block_children(self, block_id: str) -> list[Block]:
        """Return the direct children of a block (or page)."""
        results = self._collect(
            lambda cursor: self.get(
                f"/blocks/{block_id}/children",
                params={
                    "page_size": self.DEFAULT_PAGE_SIZE,
                    **({"start_cursor": cursor} if cursor else {}),
                },
            )
        )
        return [self._validate(Block, item) for item in results]

    def _collect(self, request) -> list[dict[str, Any]]:
        """Follow a paginated list endpoint until it is exhausted."""
        items: list[dict[str, Any]] = []
        cursor: str | None = None

        while True:
            data = self._json(request(cursor))
            items.extend(data.get("results", []))
            cursor = data.get("next_cursor")
            if not data.get("has_more") or not cursor:
                break

        return items

    def _json(self, response) -> dict[str, Any]:
        """Decode a response body that must be a JSON object."""
        try:
            data = response.json()
        except ValueError as e:
            raise ValidationError(f"Response from {response.url} is not valid JSON") from e
        if not isinstance(data, dict):
            raise ValidationError(
                f"Response from {response.url} is not a JSON object, got {type(data).__name__}"
            )
        return data

    def _validate(self, model, item: dict[str, Any]):
        try:
            return model.model_validate(item)
        except PydanticValidationError as e:
            item_id = item.get("id", "unknown") if isinstance(item, dict) else "unknown"
            raise ValidationError(
                f"{model.__name__} {item_id} failed validation",
                errors=[str(err) for err in e.errors()],
            ) from e
