"""Sentry Configuration"""

import logging
from urllib.parse import urlsplit

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration
from sentry_sdk.types import Event, Hint

from linkshelf.configs import settings
from linkshelf.utils.version import fetch_app_version_from_file

logger = logging.getLogger(__name__)

REDACTED_TEXT = "[REDACTED]"

# Frame variables that may carry a user's saved link.
SENSITIVE_VARS = frozenset({"url", "page_url", "href", "candidate", "root_candidate", "body"})


def configure_sentry() -> None:  # pragma: no cover
    """Configure and initialize Sentry integration."""
    if settings.sentry.mode == "disabled":
        return
    # This is the SHA-1 hash of the HEAD of the current branch stored in version.json file.
    version_sha = fetch_app_version_from_file().commit
    sentry_sdk.init(
        dsn=settings.sentry.dsn,
        integrations=[
            StarletteIntegration(),
            FastApiIntegration(),
        ],
        release=version_sha,
        debug="debug" == settings.sentry.mode,
        before_send=strip_sensitive_data,
        environment=settings.sentry.env,
        traces_sample_rate=settings.sentry.traces_sample_rate,
    )


def strip_sensitive_data(event: Event, hint: Hint) -> Event | None:
    """Filter out users' saved links from Sentry events."""
    #  See: https://docs.sentry.io/platforms/python/configuration/filtering/
    request = event.get("request", {})
    if request.get("query_string"):
        request["query_string"] = REDACTED_TEXT
    if request.get("data"):
        request["data"] = REDACTED_TEXT

    for exception in event.get("exception", {}).get("values", []):
        for frame in exception.get("stacktrace", {}).get("frames", []):
            frame_vars = frame.get("vars", {})
            for key in SENSITIVE_VARS.intersection(frame_vars):
                frame_vars[key] = REDACTED_TEXT

    if message := event.get("logentry", {}).get("message"):
        event["logentry"]["message"] = _redact_urls(message)

    return event


def _redact_urls(message: str) -> str:
    """Replace anything that looks like an absolute URL with its scheme and a redaction marker."""
    words = []
    for word in message.split(" "):
        if "://" in word:
            scheme = urlsplit(word).scheme
            word = f"{scheme}://{REDACTED_TEXT}" if scheme else REDACTED_TEXT
        words.append(word)
    return " ".join(words)
