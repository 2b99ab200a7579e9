"""Constants for favicon resolution"""

from enum import Enum, unique

import httpx


@unique
class IconSelector(Enum):
    """Icon-declaring link elements, most specific first.

    Iteration order is the priority order: the first selector with a usable match wins,
    no matter where that element appears in the document.
    """

    SVG = 'link[rel="icon"][type="image/svg+xml"]'
    SIZED_32 = 'link[rel="icon"][sizes="32x32"]'
    SIZED_64 = 'link[rel="icon"][sizes="64x64"]'
    SIZED_128 = 'link[rel="icon"][sizes="128x128"]'
    APPLE_TOUCH = 'link[rel="apple-touch-icon"]'
    APPLE_TOUCH_PRECOMPOSED = 'link[rel="apple-touch-icon-precomposed"]'
    ICON = 'link[rel="icon"]'
    SHORTCUT_ICON = 'link[rel="shortcut icon"]'

    @property
    def rank(self) -> int:
        """Return the 1-based priority of this selector (lower is better)."""
        return list(IconSelector).index(self) + 1


PARSER: str = "html.parser"

# Failures of a single fetch that count as "nothing there". `httpx.InvalidURL` is raised
# while building the request and does not derive from `httpx.HTTPError`.
FETCH_ERRORS: tuple[type[Exception], ...] = (httpx.HTTPError, httpx.InvalidURL, TimeoutError)

ROOT_FAVICON_PATH: str = "/favicon.ico"

# Third-party icon service, keyed only by hostname and a fixed size. It is assumed to
# be always available and is never probed.
FALLBACK_FAVICON_URL_TEMPLATE: str = "https://www.google.com/s2/favicons?domain={hostname}&sz={size}"

DEFAULT_FALLBACK_ICON_SIZE: int = 64
