# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Module for test configurations for the web unit tests."""

from typing import Any, Iterator

import aiodogstatsd
import pytest
from fastapi.testclient import TestClient
from pytest_mock import MockerFixture

from linkshelf.favicon import get_coordinator
from linkshelf.favicon.coordinator import FaviconCoordinator
from linkshelf.favicon.models import IconResult, IconSource
from linkshelf.favicon.resolver import FaviconResolver
from linkshelf.links import get_store
from linkshelf.links.backends.memory import InMemoryStore
from linkshelf.main import app
from linkshelf.utils.task_runner import BackgroundTaskRunner

RESOLVED_ICON = IconResult(url="https://example.com/icon.svg", source=IconSource.HTML)


@pytest.fixture(name="coordinator")
def fixture_coordinator(
    mocker: MockerFixture, store: InMemoryStore, statsd_mock: Any
) -> FaviconCoordinator:
    """Return a coordinator with a real placeholder, a mocked resolution and no
    background scheduling.
    """
    resolver = FaviconResolver(
        extractor=mocker.MagicMock(),
        prober=mocker.MagicMock(),
        metrics_client=statsd_mock,
    )
    resolver.resolve = mocker.AsyncMock(return_value=RESOLVED_ICON)  # type: ignore[method-assign]
    coordinator = FaviconCoordinator(
        resolver=resolver,
        store=store,
        task_runner=BackgroundTaskRunner(),
        metrics_client=statsd_mock,
    )
    mocker.patch.object(coordinator, "schedule_refresh")
    return coordinator


@pytest.fixture(name="client")
def fixture_client(
    mocker: MockerFixture, store: InMemoryStore, coordinator: FaviconCoordinator
) -> Iterator[TestClient]:
    """Return a test client with the store and coordinator overridden."""
    mocker.patch.object(aiodogstatsd.Client, "_report")
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_coordinator] = lambda: coordinator
    yield TestClient(app)
    del app.dependency_overrides[get_store]
    del app.dependency_overrides[get_coordinator]
