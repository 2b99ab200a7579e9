"""Three-tier favicon resolution: declared icon, root favicon.ico, fallback service."""

import logging

import aiodogstatsd

from linkshelf.exceptions import InvalidUrlError
from linkshelf.favicon.constants import DEFAULT_FALLBACK_ICON_SIZE, ROOT_FAVICON_PATH
from linkshelf.favicon.extractor import HtmlIconExtractor
from linkshelf.favicon.models import IconResult, IconSource
from linkshelf.favicon.prober import IconProber
from linkshelf.favicon.utils import fallback_favicon_url, parse_url

logger = logging.getLogger(__name__)


class FaviconResolver:
    """Resolve the best available icon for a URL.

    Tiers run strictly in order and stop at the first success:

    1. the icon declared in the page markup, if the prober confirms it
    2. `/favicon.ico` at the origin, if the prober confirms it
    3. the third-party fallback service keyed by hostname

    `resolve` never raises. Total failure is reported as `IconSource.NONE`.
    """

    extractor: HtmlIconExtractor
    prober: IconProber
    metrics_client: aiodogstatsd.Client
    fallback_icon_size: int

    def __init__(
        self,
        extractor: HtmlIconExtractor,
        prober: IconProber,
        metrics_client: aiodogstatsd.Client,
        fallback_icon_size: int = DEFAULT_FALLBACK_ICON_SIZE,
    ) -> None:
        self.extractor = extractor
        self.prober = prober
        self.metrics_client = metrics_client
        self.fallback_icon_size = fallback_icon_size

    def placeholder(self, url: str) -> str | None:
        """Return the fallback service URL for `url` without any network I/O.

        Returns None when no hostname can be parsed out of `url`.
        """
        try:
            parsed = parse_url(url)
        except InvalidUrlError:
            return None
        return fallback_favicon_url(parsed.hostname, self.fallback_icon_size)

    async def resolve(self, url: str) -> IconResult:
        """Run the full fallback chain for `url`."""
        with self.metrics_client.timeit("favicon.resolve.timing"):
            result = await self._resolve(url)

        self.metrics_client.increment("favicon.resolve", tags={"source": result.source.value})
        return result

    async def _resolve(self, url: str) -> IconResult:
        try:
            parsed = parse_url(url)

            candidate = await self.extractor.extract(url, parsed.base_url)
            if candidate is not None and await self.prober.exists(candidate.href):
                return IconResult(url=candidate.href, source=IconSource.HTML)

            root_candidate = f"{parsed.base_url}{ROOT_FAVICON_PATH}"
            if await self.prober.exists(root_candidate):
                return IconResult(url=root_candidate, source=IconSource.ROOT)

            return IconResult(
                url=fallback_favicon_url(parsed.hostname, self.fallback_icon_size),
                source=IconSource.GOOGLE,
            )
        except InvalidUrlError as ex:
            logger.info(f"Favicon resolution skipped: {ex}")
        except Exception as ex:
            logger.warning(f"Unexpected error resolving favicon for {url}: {ex}")

        return self._salvage(url)

    def _salvage(self, url: str) -> IconResult:
        """Fall back to the third-party service if a hostname is still recoverable."""
        fallback = self.placeholder(url)
        if fallback is None:
            return IconResult(url=None, source=IconSource.NONE)
        return IconResult(url=fallback, source=IconSource.GOOGLE)
