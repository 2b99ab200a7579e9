"""Initialize the favicon resolution components"""

import logging
from functools import partial

import httpx

from linkshelf.configs import settings
from linkshelf.favicon.coordinator import FaviconCoordinator
from linkshelf.favicon.extractor import HtmlIconExtractor
from linkshelf.favicon.models import FetchSettings
from linkshelf.favicon.prober import IconProber
from linkshelf.favicon.resolver import FaviconResolver
from linkshelf.links.backends.protocol import LinkStore
from linkshelf.utils.http_client import create_http_client
from linkshelf.utils.metrics import get_metrics_client
from linkshelf.utils.task_runner import BackgroundTaskRunner, metrics_timeout_handler

logger = logging.getLogger(__name__)

coordinator: FaviconCoordinator | None = None
http_client: httpx.AsyncClient | None = None


def create_favicon_http_client(
    fetch_settings: FetchSettings,
    max_connections: int,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the HTTP client shared by the prober and the extractor.

    The connect timeout follows the probe budget, the overall request timeout follows the
    page budget and redirects are capped at `fetch_settings.max_redirects` hops.
    """
    return create_http_client(
        max_connections=max_connections,
        connect_timeout=fetch_settings.probe_timeout_sec,
        request_timeout=fetch_settings.page_timeout_sec,
        max_redirects=fetch_settings.max_redirects,
        transport=transport,
    )


def create_resolver(client: httpx.AsyncClient, fetch_settings: FetchSettings) -> FaviconResolver:
    """Wire a resolver around an HTTP client."""
    return FaviconResolver(
        extractor=HtmlIconExtractor(client, fetch_settings),
        prober=IconProber(client, fetch_settings),
        metrics_client=get_metrics_client(),
        fallback_icon_size=settings.favicon.fallback_icon_size,
    )


def init_coordinator(store: LinkStore) -> FaviconCoordinator:
    """Initialize the favicon coordinator.

    This should only be called once at the startup of application.
    """
    global coordinator, http_client

    fetch_settings = FetchSettings.from_config(settings.favicon)
    http_client = create_favicon_http_client(
        fetch_settings, max_connections=settings.favicon.max_connections
    )
    coordinator = FaviconCoordinator(
        resolver=create_resolver(http_client, fetch_settings),
        store=store,
        task_runner=BackgroundTaskRunner(),
        metrics_client=get_metrics_client(),
    )
    logger.info("Favicon coordinator initialized")
    return coordinator


async def shutdown_coordinator() -> None:
    """Drain in-flight favicon refreshes and close the HTTP client."""
    global coordinator, http_client

    if coordinator is not None:
        await coordinator.task_runner.shutdown(
            timeout=settings.runtime.shutdown_grace_sec,
            timeout_cb=partial(metrics_timeout_handler, get_metrics_client()),
        )
        coordinator = None
    if http_client is not None:
        await http_client.aclose()
        http_client = None


def get_coordinator() -> FaviconCoordinator:
    """Return the favicon coordinator"""
    if coordinator is None:
        raise ValueError("Favicon coordinator has not been initialized.")
    return coordinator
