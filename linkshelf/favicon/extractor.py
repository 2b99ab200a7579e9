"""Extract the declared icon of a page from its markup"""

import asyncio
import logging
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from linkshelf.favicon.constants import FETCH_ERRORS, PARSER, IconSelector
from linkshelf.favicon.models import FetchSettings, IconCandidate
from linkshelf.favicon.utils import resolve_icon_href

logger = logging.getLogger(__name__)


class HtmlIconExtractor:
    """Fetch a page and pick its best icon declaration by selector priority."""

    http_client: httpx.AsyncClient
    fetch_settings: FetchSettings

    def __init__(self, http_client: httpx.AsyncClient, fetch_settings: FetchSettings) -> None:
        self.http_client = http_client
        self.fetch_settings = fetch_settings

    async def extract(self, page_url: str, base_url: str) -> Optional[IconCandidate]:
        """Return the highest priority icon declared by the page, or None.

        None is returned when the page cannot be fetched, answers with an error status,
        cannot be parsed, or declares no icon.
        """
        markup = await self.fetch_page(page_url)
        if markup is None:
            return None

        try:
            page = BeautifulSoup(markup, PARSER)
            return self.select_icon(page, base_url)
        except Exception as ex:
            logger.debug(f"Failed to parse markup of {page_url}: {ex}")
            return None

    async def fetch_page(self, page_url: str) -> Optional[str]:
        """GET the page and return its body, or None on failure."""
        timeout = self.fetch_settings.page_timeout_sec
        try:
            async with asyncio.timeout(timeout):
                response = await self.http_client.get(
                    page_url,
                    headers={
                        "User-Agent": self.fetch_settings.user_agent,
                        "Accept": self.fetch_settings.accept,
                    },
                    timeout=timeout,
                )
        except FETCH_ERRORS as ex:
            logger.debug(f"Failed to fetch page {page_url}: {ex!r}")
            return None

        if response.status_code >= 400:
            logger.debug(f"Page {page_url} returned {response.status_code}")
            return None

        return response.text

    @staticmethod
    def select_icon(page: BeautifulSoup, base_url: str) -> Optional[IconCandidate]:
        """Walk the selectors in priority order and resolve the first usable href."""
        for selector in IconSelector:
            element = page.select_one(selector.value)
            if element is None:
                continue
            href = element.get("href")
            if isinstance(href, str) and href.strip():
                return IconCandidate(
                    href=resolve_icon_href(href.strip(), base_url),
                    rank=selector.rank,
                )
        return None
