"""URL manipulation utilities for favicon resolution"""

from urllib.parse import urlparse

from linkshelf.exceptions import InvalidUrlError
from linkshelf.favicon.constants import (
    DEFAULT_FALLBACK_ICON_SIZE,
    FALLBACK_FAVICON_URL_TEMPLATE,
)
from linkshelf.favicon.models import ParsedUrl


def parse_url(url: str) -> ParsedUrl:
    """Split a user-supplied URL into scheme, hostname and origin.

    Raises:
        InvalidUrlError: if the string has no scheme or no hostname.
    """
    try:
        parsed = urlparse(url.strip())
        hostname = parsed.hostname
    except (AttributeError, ValueError) as ex:
        raise InvalidUrlError(f"Cannot parse URL: {url!r}") from ex

    if not parsed.scheme or not hostname:
        raise InvalidUrlError(f"URL needs a scheme and a host: {url!r}")

    # IPv6 literals lose their brackets in `hostname`.
    host = f"[{hostname}]" if ":" in hostname else hostname
    return ParsedUrl(
        scheme=parsed.scheme,
        hostname=hostname,
        base_url=f"{parsed.scheme}://{host}",
    )


def fallback_favicon_url(hostname: str, size: int = DEFAULT_FALLBACK_ICON_SIZE) -> str:
    """Build the third-party icon service URL for a hostname."""
    return FALLBACK_FAVICON_URL_TEMPLATE.format(hostname=hostname, size=size)


def resolve_icon_href(href: str, base_url: str) -> str:
    """Turn an icon `href` into an absolute URL.

    Relative references are anchored at the origin root, not at the page's own path.
    """
    if href.startswith("//"):
        return f"https:{href}"
    if href.startswith(("http://", "https://")):
        return href
    if href.startswith("/"):
        return f"{base_url}{href}"
    return f"{base_url}/{href}"


def has_icon_extension(url: str) -> bool:
    """Check whether the URL path ends with the conventional `.ico` extension."""
    try:
        path = urlparse(url).path
    except ValueError:
        return False
    return path.lower().endswith(".ico")
