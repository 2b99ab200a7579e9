# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Unit tests for the StatsD client helpers."""

import logging
from typing import Any

from pytest import LogCaptureFixture
from pytest_mock import MockerFixture

from linkshelf.configs import settings
from linkshelf.utils.metrics import _LocalDatagramLogger, get_metrics_client
from tests.types import FilterCaplogFixture


def test_get_metrics_client_constant_tags(mocker: MockerFixture) -> None:
    """Test that the client is tagged with the environment, store backend and favicon
    redirect cap.
    """
    client_mock: Any = mocker.patch("linkshelf.utils.metrics.aiodogstatsd.Client")

    get_metrics_client.__wrapped__()

    client_mock.assert_called_once()
    kwargs = client_mock.call_args.kwargs
    assert kwargs["namespace"] == "linkshelf"
    assert kwargs["constant_tags"] == {
        "application": "linkshelf",
        "environment": "testing",
        "deployment.canary": 0,
        "store.backend": settings["store"].backend,
        "favicon.max_redirects": settings.favicon.max_redirects,
    }


def test_local_datagram_logger(
    caplog: LogCaptureFixture, filter_caplog: FilterCaplogFixture
) -> None:
    """Test that the development protocol logs datagrams with their metric name."""
    caplog.set_level(logging.DEBUG)

    _LocalDatagramLogger().send(b"linkshelf.favicon.resolve:1|c|#source:html")

    records = filter_caplog(caplog.records, "linkshelf.utils.metrics")
    assert len(records) == 1
    record: Any = records[0]
    assert record.message == "sending metrics"
    assert record.metric == "linkshelf.favicon.resolve"
    assert record.data == "linkshelf.favicon.resolve:1|c|#source:html"
