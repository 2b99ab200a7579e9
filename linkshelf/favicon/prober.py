"""Header-only existence check for candidate icon URLs"""

import asyncio
import logging

import httpx

from linkshelf.favicon.constants import FETCH_ERRORS
from linkshelf.favicon.models import FetchSettings
from linkshelf.favicon.utils import has_icon_extension

logger = logging.getLogger(__name__)


class IconProber:
    """Check that a candidate icon URL answers with an image, without downloading it."""

    http_client: httpx.AsyncClient
    fetch_settings: FetchSettings

    def __init__(self, http_client: httpx.AsyncClient, fetch_settings: FetchSettings) -> None:
        self.http_client = http_client
        self.fetch_settings = fetch_settings

    async def exists(self, url: str) -> bool:
        """Return True if the URL responds below 400 and looks like an image.

        A missing or generic content type is accepted for `.ico` paths. Network errors,
        malformed URLs, timeouts and error statuses all count as "does not exist".
        """
        timeout = self.fetch_settings.probe_timeout_sec
        try:
            async with asyncio.timeout(timeout):
                response = await self.http_client.head(
                    url,
                    headers={"User-Agent": self.fetch_settings.user_agent},
                    timeout=timeout,
                )
        except FETCH_ERRORS as ex:
            logger.debug(f"Probe failed for {url}: {ex!r}")
            return False

        if response.status_code >= 400:
            logger.debug(f"Probe for {url} returned {response.status_code}")
            return False

        content_type = response.headers.get("content-type", "").lower()
        return "image" in content_type or "icon" in content_type or has_icon_extension(url)
