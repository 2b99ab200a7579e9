"""Client class for recording and sending StatsD metrics."""

import logging
from functools import cache
from typing import Mapping

import aiodogstatsd

from linkshelf.configs import settings

logger = logging.getLogger(__name__)

# Type definition for tags in aiodogstatsd metrics
MetricTags = Mapping[str, float | int | str]


@cache
def get_metrics_client() -> aiodogstatsd.Client:
    """Instantiate and memoize the StatsD client.

    Constant tags carry the deployment and the storage backend, plus the favicon
    redirect cap.
    """
    constant_tags: MetricTags = {
        "application": "linkshelf",
        "environment": settings.current_env.lower(),
        "deployment.canary": int(settings.deployment.canary),
        "store.backend": settings["store"].backend,
        "favicon.max_redirects": settings.favicon.max_redirects,
    }

    return aiodogstatsd.Client(
        host=settings.metrics.host,
        port=settings.metrics.port,
        namespace="linkshelf",
        constant_tags=constant_tags,
    )


async def configure_metrics() -> None:
    """Configure metrics client. Used in application startup."""
    client = get_metrics_client()
    if settings.metrics.dev_logger:
        client._protocol = _LocalDatagramLogger()
    await client.connect()


class _LocalDatagramLogger(aiodogstatsd.client.DatagramProtocol):
    """This class can be used to override the default DatagramProtocol.
    Instead of writing bytes to a socket, it logs them.
    The purpose is to make it easy to see the metrics in development environments.
    """

    def send(self, data: bytes) -> None:
        payload = data.decode("utf8")
        # Datagrams look like `linkshelf.favicon.resolve.timing:12|ms|#application:linkshelf`.
        metric, _, _ = payload.partition(":")
        logger.debug("sending metrics", extra={"metric": metric, "data": payload})

    def error_received(self, exc) -> None:
        logger.exception(exc)
