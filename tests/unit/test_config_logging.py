# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Unit tests for the config_logging.py module."""

import json
import logging
from typing import Any, Iterator

import pytest

from linkshelf.configs import settings
from linkshelf.configs.app_configs.config_logging import (
    GCPCompatibleJSONFormatter,
    configure_logging,
)


@pytest.fixture(autouse=True)
def restore_log_format() -> Iterator[None]:
    """Put the configured log format back after each test."""
    old_format = settings.logging.format
    yield
    settings.logging.format = old_format


def test_configure_logging_invalid_format() -> None:
    """Test that configure_logging will raise a ValueError when encountering unknown log
    formats.
    """
    settings.logging.format = "invalid"

    with pytest.raises(ValueError) as excinfo:
        configure_logging()

    assert "Invalid log format:" in str(excinfo)


def test_configure_logging_mozlog_production() -> None:
    """Test that configure_logging will raise a ValueError when using a format other
    than 'mozlog' in production.
    """
    with settings.using_env("production"):
        old_format = settings.logging.format
        settings.logging.format = "pretty"

        with pytest.raises(ValueError) as excinfo:
            configure_logging()

        assert "Log format must be 'mozlog' in production" in str(excinfo)

        settings.logging.format = old_format


@pytest.mark.parametrize(
    ["log_format", "expected_handler"],
    [("mozlog", "console-mozlog"), ("pretty", "console-pretty")],
)
def test_configure_log_handler_assigned(log_format: str, expected_handler: str) -> None:
    """Test that the app and request summary loggers get the handler of the format."""
    settings.logging.format = log_format
    configure_logging()

    log_manager: Any = logging.root.manager
    for name in ("linkshelf", "request.summary"):
        assert log_manager.loggerDict[name].handlers[0].name == expected_handler


@pytest.mark.parametrize(
    ["level", "expected_severity"],
    [(logging.DEBUG, 100), (logging.INFO, 200), (logging.WARNING, 400), (logging.ERROR, 500)],
)
def test_gcp_compatible_json_formatter(level: int, expected_severity: int) -> None:
    """Test that records carry the GCP severity next to the MozLog fields."""
    formatter = GCPCompatibleJSONFormatter(logger_name="linkshelf")
    record = logging.LogRecord(
        name="linkshelf.favicon.resolver",
        level=level,
        pathname=__file__,
        lineno=1,
        msg="Favicon updated",
        args=None,
        exc_info=None,
    )

    out = json.loads(formatter.format(record))

    assert out["severity"] == expected_severity
    assert out["Logger"] == "linkshelf"
    assert out["Fields"]["msg"] == "Favicon updated"


def test_configure_logging_favicon_level() -> None:
    """Test that the favicon loggers get their own level and write through the app
    handlers.
    """
    old_level = settings.logging.favicon_level
    settings.logging.favicon_level = "WARNING"
    try:
        configure_logging()

        favicon_logger = logging.getLogger("linkshelf.favicon")
        assert favicon_logger.level == logging.WARNING
        assert favicon_logger.handlers == []
        assert favicon_logger.propagate is True
        assert logging.getLogger("linkshelf").level == logging.getLevelName(
            settings.logging.level
        )
    finally:
        settings.logging.favicon_level = old_level
        configure_logging()


def test_configure_logging_pretty_handler_has_no_level() -> None:
    """Test that the console handler leaves level filtering to the loggers."""
    settings.logging.format = "pretty"
    configure_logging()

    handler = logging.getLogger("linkshelf").handlers[0]
    assert handler.level == logging.NOTSET
