"""Media downloader for saving Notion-hosted images locally."""

import hashlib
import logging
from pathlib import Path, PurePosixPath
from urllib.parse import unquote, urlparse

import httpx

logger = logging.getLogger(__name__)

EXTENSIONS_BY_MEDIA_TYPE = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
}


class MediaDownloader:
    """Downloads images uploaded to Notion into a local directory.

    Notion serves uploaded files from short-lived signed URLs, so images
    are copied to disk during rendering. The saved file keeps the name of
    the uploaded file where the URL carries one.

    Example:
        with MediaDownloader() as downloader:
            path = downloader.save_image(url, Path("/srv/img/posts/my-post"))
    """

    def __init__(self, http_client: httpx.Client | None = None):
        """Initialize the media downloader.

        Args:
            http_client: Optional HTTP client for downloading media.
                         If not provided, one will be created internally.
        """
        self._client = http_client
        self._owns_client = http_client is None

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=30.0, follow_redirects=True)
        return self._client

    def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "MediaDownloader":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def save_image(self, url: str, save_dir: Path) -> Path:
        """Download an image into save_dir.

        Args:
            url: URL of the image
            save_dir: Directory to save into; created if missing

        Returns:
            Path of the saved file

        Raises:
            httpx.HTTPStatusError: If the request returns an error status
            httpx.RequestError: If there's a network error
        """
        client = self._get_client()
        response = client.get(url)
        response.raise_for_status()

        save_dir.mkdir(parents=True, exist_ok=True)
        filename = self._derive_filename(url, response.headers.get("content-type"))
        destination = save_dir / filename
        destination.write_bytes(response.content)

        logger.debug(f"Saved image {filename} to {save_dir}")
        return destination

    def _derive_filename(self, url: str, content_type: str | None = None) -> str:
        """Derive a filename for a downloaded image.

        Uses the last path segment of the URL (query strings on signed URLs
        are ignored). URLs without a usable name get a name hashed from the
        URL path, with an extension taken from the content type.

        Args:
            url: URL the image was downloaded from
            content_type: Content-Type header of the response

        Returns:
            A filename without directory components
        """
        path = unquote(urlparse(url).path)
        name = PurePosixPath(path).name
        if name and PurePosixPath(name).suffix:
            return name

        digest = hashlib.sha256(path.encode("utf-8")).hexdigest()[:16]
        media_type = (content_type or "").split(";")[0].strip().lower()
        extension = EXTENSIONS_BY_MEDIA_TYPE.get(media_type, "bin")
        return f"{digest}.{extension}"
