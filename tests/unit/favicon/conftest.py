# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Module for test configurations for the favicon unit tests."""

from typing import Any
from urllib.parse import urlparse

import httpx
import pytest

from linkshelf.utils.http_client import create_http_client


class FakeWeb:
    """Serve canned responses by (method, host, path).

    Requests to hosts that have no route at all fail the way a DNS lookup would.
    Known hosts answer 404 for unknown paths.
    """

    routes: dict[tuple[str, str, str], dict[str, Any]]
    requests: list[httpx.Request]

    def __init__(self) -> None:
        self.routes = {}
        self.requests = []

    def add(
        self,
        method: str,
        url: str,
        status_code: int = 200,
        headers: dict[str, str] | None = None,
        text: str | None = None,
    ) -> None:
        """Register a response for `method url`."""
        parsed = urlparse(url)
        self.routes[(method, parsed.hostname or "", parsed.path or "/")] = {
            "status_code": status_code,
            "headers": headers,
            "text": text,
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        """Transport handler."""
        self.requests.append(request)
        key = (request.method, request.url.host, request.url.path or "/")
        if key in self.routes:
            return httpx.Response(**self.routes[key])
        if request.url.host not in {host for _, host, _ in self.routes}:
            raise httpx.ConnectError("Name or service not known", request=request)
        return httpx.Response(404)


@pytest.fixture(name="fake_web")
def fixture_fake_web() -> FakeWeb:
    """Return an empty fake web."""
    return FakeWeb()


@pytest.fixture(name="http_client")
def fixture_http_client(fake_web: FakeWeb) -> Any:
    """Return an async HTTP client backed by the fake web."""
    return create_http_client(transport=httpx.MockTransport(fake_web.handler))
