"""Data models for favicon resolution"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class IconSource(str, Enum):
    """The tier that produced a favicon."""

    HTML = "html"
    ROOT = "root"
    GOOGLE = "google"
    NONE = "none"


class IconResult(BaseModel):
    """Outcome of one resolution attempt. A `None` url only ever comes with `NONE`."""

    model_config = ConfigDict(frozen=True)

    url: str | None
    source: IconSource


class ParsedUrl(BaseModel):
    """Scheme and hostname of a user-supplied URL plus its origin (`scheme://host`)."""

    model_config = ConfigDict(frozen=True)

    scheme: str
    hostname: str
    base_url: str


class IconCandidate(BaseModel):
    """An absolute icon URL and the rank of the selector that declared it."""

    model_config = ConfigDict(frozen=True)

    href: str
    rank: int


class FetchSettings(BaseModel):
    """Network client settings shared by the prober and the page extractor."""

    model_config = ConfigDict(frozen=True)

    user_agent: str
    accept: str
    probe_timeout_sec: float = 3.0
    page_timeout_sec: float = 5.0
    max_redirects: int = 3

    @classmethod
    def from_config(cls, config: Any) -> "FetchSettings":
        """Build from the `favicon` section of the settings."""
        return cls(
            user_agent=config.user_agent,
            accept=config.accept,
            probe_timeout_sec=config.probe_timeout_sec,
            page_timeout_sec=config.page_timeout_sec,
            max_redirects=config.max_redirects,
        )
