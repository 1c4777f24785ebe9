"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
import os

import pytest

from postfeed.config import FeedSettings, get_feed_settings, reset_default_values
from tests.helpers.feed_doubles import TEST_BASE_URL, RecordingHandler


@pytest.fixture(autouse=True)
def _isolated_feed_config(monkeypatch):
    """Keep POSTFEED_* variables and cached settings from leaking between tests."""
    for name in list(os.environ):
        if name.startswith("POSTFEED_") or name == "LOG_APPEND":
            monkeypatch.delenv(name, raising=False)
    get_feed_settings.cache_clear()
    reset_default_values()
    yield
    get_feed_settings.cache_clear()
    reset_default_values()


@pytest.fixture
def feed_settings() -> FeedSettings:
    return FeedSettings(base_url=TEST_BASE_URL)


@pytest.fixture
def recording_handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def restore_root_logging():
    """Snapshot root logger handlers and level so logging setup tests stay contained."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    root_logger.handlers = []
    yield root_logger
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers = handlers
    root_logger.setLevel(level)
