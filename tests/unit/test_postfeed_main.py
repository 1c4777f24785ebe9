import logging

import pytest

from postfeed import __main__ as cli
from postfeed.exceptions import FeedConnectionError
from postfeed.logging_config import setup_logging


def test_main_without_address_exits_with_usage_error(restore_root_logging, capsys):
    assert cli.main([]) == 2
    assert "POSTFEED_ADDRESS" in capsys.readouterr().err


def test_main_reports_failure_status(restore_root_logging, monkeypatch, capsys):
    async def failing_run_feed(address, *, status_reporter, posts, settings):
        status_reporter.report_error(FeedConnectionError("Transport error for ws://x/abc123"))
        raise FeedConnectionError("Transport error for ws://x/abc123")

    monkeypatch.setattr(cli, "run_feed", failing_run_feed)

    assert cli.main(["abc123"]) == 1
    assert "Error: Transport error" in capsys.readouterr().err


def test_main_uses_address_from_environment(restore_root_logging, monkeypatch):
    calls = []

    async def fake_run_feed(address, *, status_reporter, posts, settings):
        calls.append((address, settings.base_url))
        status_reporter.report_status("Feed closed")

    monkeypatch.setenv("POSTFEED_ADDRESS", "abc123")
    monkeypatch.setattr(cli, "run_feed", fake_run_feed)

    assert cli.main(["--base-url", "ws://other.test/api/posts"]) == 0
    assert calls == [("abc123", "ws://other.test/api/posts")]


def test_setup_logging_writes_service_log_file(restore_root_logging, monkeypatch, tmp_path):
    monkeypatch.setenv("POSTFEED_LOG_DIR", str(tmp_path))

    setup_logging("postfeed")
    logging.getLogger("postfeed.test").info("hello feed")
    for handler in restore_root_logging.handlers:
        handler.flush()

    assert "hello feed" in (tmp_path / "postfeed.log").read_text(encoding="utf-8")
    assert logging.getLogger("websockets").level == logging.WARNING


def test_setup_logging_is_not_repeated(restore_root_logging):
    setup_logging()
    handlers = list(restore_root_logging.handlers)

    setup_logging()

    assert restore_root_logging.handlers == handlers
