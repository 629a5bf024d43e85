"""Network clients for the Notion API."""

from .client import Client
from .exceptions import (
    APIError,
    ClientError,
    ConnectionError,
    NotFoundError,
    RateLimitError,
    UnauthorizedError,
    ValidationError,
)
from .notion_client import NotionClient

__all__ = [
    "Client",
    "NotionClient",
    "ClientError",
    "ConnectionError",
    "APIError",
    "UnauthorizedError",
    "RateLimitError",
    "NotFoundError",
    "ValidationError",
]
