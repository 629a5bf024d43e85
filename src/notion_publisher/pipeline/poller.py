"""Poll loop mirroring a Notion database into Markdown files.

Each cycle queries the database, keeps pages whose status is publishable
and renders those whose ``last_edited_time`` differs from the one recorded
in the ledger. The ledger lives in memory only: a restarted process
re-exports every publishable page once.
"""

import logging
import signal
from collections.abc import Callable
from datetime import datetime
from functools import partial
from pathlib import Path
from time import sleep

import httpx

from notion_publisher.auth import TokenError, resolve_token
from notion_publisher.clients import ClientError, NotionClient
from notion_publisher.config import MARKDOWN_EXTENSION, PublisherSettings
from notion_publisher.rendering import publishing_options, render_page
from notion_publisher.sanitize import sanitize_title
from schemas.notion import NotionPage, PropertyError

logger: logging.Logger = logging.getLogger(__name__)

Ledger = dict[str, datetime]
TokenResolver = Callable[[], str]
ClientFactory = Callable[[str], NotionClient]
RenderFunction = Callable[[str, Path], bool]


class Poller:
    """Fixed-cadence poller for a Notion database.

    Attributes:
        settings: Database, property names and output locations
        ledger: Page ID -> last_edited_time at the last render attempt
        shutdown_requested: Flag for graceful shutdown
    """

    def __init__(
        self,
        settings: PublisherSettings | None = None,
        token_resolver: TokenResolver = resolve_token,
        client_factory: ClientFactory = NotionClient.from_token,
        render: RenderFunction | None = None,
        ledger: Ledger | None = None,
    ):
        self.settings = settings or PublisherSettings()
        self.token_resolver = token_resolver
        self.client_factory = client_factory
        self.render = render or partial(
            render_page, options=publishing_options(self.settings)
        )
        self.ledger: Ledger = {} if ledger is None else ledger
        self.shutdown_requested = False

        signal.signal(signal.SIGTERM, self._handle_shutdown)
        signal.signal(signal.SIGINT, self._handle_shutdown)

    def _handle_shutdown(self, signum, frame) -> None:
        """Request shutdown once the current cycle completes."""
        logger.info("Shutdown signal received, will exit after current cycle")
        self.shutdown_requested = True

    def run_forever(self) -> None:
        """Sleep, poll, repeat until a shutdown signal is received."""
        while not self.shutdown_requested:
            sleep(self.settings.poll_interval)
            if self.shutdown_requested:
                break
            self.run_once()

        logger.info("Exiting gracefully")

    def run_once(self) -> int:
        """Run one poll cycle.

        Token and query failures are logged and end the cycle early.

        Returns:
            Number of pages for which a render was attempted
        """
        try:
            token = self.token_resolver()
        except TokenError as e:
            logger.error(f"Failed to resolve token. Error: {e}")
            return 0

        try:
            with self.client_factory(token) as client:
                pages = client.query_database(self.settings.database_id)
        except (ClientError, httpx.HTTPError) as e:
            logger.error(f"Failed to query database. Error: {e}")
            return 0

        attempted = 0
        for page in pages:
            if self.process_page(page):
                attempted += 1
        return attempted

    def process_page(self, page: NotionPage) -> bool:
        """Render a page if it is publishable and changed.

        Returns:
            True if a render was attempted
        """
        if not self.is_publishable(page):
            return False

        try:
            title = page.title_text(self.settings.title_key)
        except PropertyError as e:
            logger.error(f"Skipping page {page.id}: {e}")
            return False

        recorded = self.ledger.get(page.id)
        if recorded == page.last_edited_time:
            logger.debug(
                f"No updates on {page.id}. LastEditedTime: {page.last_edited_time}, "
                f"Recorded Time: {recorded}"
            )
            return False

        logger.info(f"Page qualified to render. ID: {page.id} || Title: {title}")
        self.render(page.id, self.output_path(title))
        self.ledger[page.id] = page.last_edited_time
        return True

    def is_publishable(self, page: NotionPage) -> bool:
        """Check the status gate, logging why a page is skipped."""
        status_key = self.settings.status_key
        expected = self.settings.publishable_status

        try:
            status = page.select_name(status_key)
        except PropertyError as e:
            if e.missing:
                logger.info(f"Skipping post with ID {page.id} because {status_key} missing")
            else:
                logger.warning(
                    f"Unexpectedly found incorrect type for {status_key} property on "
                    f"page {page.id}. Expected {e.expected} found {e.actual}."
                )
            return False

        if status != expected:
            logger.info(
                f'Skipping page {page.id} because status is "{status}" '
                f'but needs to be "{expected}".'
            )
            return False

        return True

    def output_path(self, title: str) -> Path:
        return self.settings.output_dir / (sanitize_title(title) + MARKDOWN_EXTENSION)
