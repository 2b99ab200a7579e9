# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Module for test configurations for the unit test directory."""

from typing import Any

import aiodogstatsd
import pytest
from pytest_mock import MockerFixture

from linkshelf.favicon.models import FetchSettings
from linkshelf.links.backends.memory import InMemoryStore


@pytest.fixture(name="statsd_mock")
def fixture_statsd_mock(mocker: MockerFixture) -> Any:
    """Return mock for the StatsD client."""
    return mocker.MagicMock(spec=aiodogstatsd.Client)


@pytest.fixture(name="fetch_settings")
def fixture_fetch_settings() -> FetchSettings:
    """Return fetch settings with short timeouts for tests."""
    return FetchSettings(
        user_agent="linkshelf-test/1.0",
        accept="text/html",
        probe_timeout_sec=0.5,
        page_timeout_sec=0.5,
        max_redirects=3,
    )


@pytest.fixture(name="store")
def fixture_store() -> InMemoryStore:
    """Return an empty in-memory store."""
    return InMemoryStore()
