"""Two-phase favicon updates for links.

Phase 1 runs in the request path and stores a placeholder built from the hostname
alone. Phase 2 runs detached, resolves the real icon and upgrades the stored value
when it found something better than the placeholder.
"""

import logging
from asyncio import Task

import aiodogstatsd

from linkshelf.favicon.models import IconResult, IconSource
from linkshelf.favicon.resolver import FaviconResolver
from linkshelf.links.backends.protocol import Link, LinkStore
from linkshelf.utils.task_runner import BackgroundTaskRunner

logger = logging.getLogger(__name__)


class FaviconCoordinator:
    """Decouple link writes from favicon resolution."""

    resolver: FaviconResolver
    store: LinkStore
    task_runner: BackgroundTaskRunner
    metrics_client: aiodogstatsd.Client

    def __init__(
        self,
        resolver: FaviconResolver,
        store: LinkStore,
        task_runner: BackgroundTaskRunner,
        metrics_client: aiodogstatsd.Client,
    ) -> None:
        self.resolver = resolver
        self.store = store
        self.task_runner = task_runner
        self.metrics_client = metrics_client

    def placeholder_for(self, url: str) -> str | None:
        """Phase 1: the fallback service URL, computed without network I/O."""
        return self.resolver.placeholder(url)

    def schedule_refresh(self, link: Link) -> Task:
        """Phase 2: resolve the link's icon in the background.

        Only plain values are captured, never the request or the link model itself.
        """
        return self.task_runner.spawn(
            self.refresh_in_background(link.user_id, link.id, link.url),
            name=f"favicon-refresh-{link.id}",
        )

    async def refresh_in_background(self, user_id: str, link_id: str, url: str) -> bool:
        """Resolve `url` and upgrade the stored favicon of the link.

        The placeholder is kept when resolution lands on the fallback tier (same value)
        or finds nothing. The write is skipped when the link was deleted or its URL
        changed while resolving. Returns True if the favicon was written.
        """
        result = await self.resolver.resolve(url)
        if result.url is None or result.source is IconSource.GOOGLE:
            return False

        current = await self.store.get_link(user_id, link_id)
        if current is None:
            logger.info(f"Link {link_id} is gone, dropping resolved favicon")
            return False
        if current.url != url:
            logger.info(f"Link {link_id} URL changed while resolving, dropping stale favicon")
            self.metrics_client.increment("favicon.refresh.stale")
            return False

        await self.store.update_link(user_id, link_id, favicon_url=result.url)
        logger.info(f"Favicon updated for {url}: {result.source.value}")
        return True

    async def refresh_now(self, link: Link) -> tuple[Link, IconResult]:
        """Resolve in the request path and store the result.

        The stored favicon is left alone when nothing at all could be resolved.
        """
        result = await self.resolver.resolve(link.url)
        if result.url is None:
            return link, result

        updated = await self.store.update_link(link.user_id, link.id, favicon_url=result.url)
        return updated, result
