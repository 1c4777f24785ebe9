from postfeed.exceptions import FeedConnectionError
from postfeed.feed_events import ErrorEvent
from postfeed.status_reporter import StatusDisplay, StatusReporter


def test_report_status_replaces_text_in_normal_mode():
    display = StatusDisplay()
    reporter = StatusReporter(display)

    reporter.report_status("Connecting")
    reporter.report_status("Connected")

    assert display.text == "Connected"
    assert display.is_error is False


def test_report_status_is_idempotent():
    once = StatusReporter()
    twice = StatusReporter()

    once.report_status("Connected")
    twice.report_status("Connected")
    twice.report_status("Connected")

    assert once.display == twice.display


def test_report_error_uses_event_message_and_sets_error_mode():
    reporter = StatusReporter()

    reporter.report_error(ErrorEvent(message="feed not found"))

    assert "feed not found" in reporter.display.text
    assert reporter.display.text == "Error: feed not found"
    assert reporter.display.is_error is True


def test_repeated_errors_do_not_compound():
    reporter = StatusReporter()

    for _ in range(3):
        reporter.report_error({"error": True, "message": "feed not found"})

    assert reporter.display == StatusDisplay(text="Error: feed not found", is_error=True)


def test_report_error_accepts_exceptions():
    reporter = StatusReporter()

    reporter.report_error(FeedConnectionError("Transport error for ws://x/abc"))

    assert reporter.display.text == "Error: Transport error for ws://x/abc"


def test_status_after_error_returns_to_normal_mode():
    reporter = StatusReporter()
    reporter.report_error({"message": "down"})

    reporter.report_status("Connected")

    assert reporter.display == StatusDisplay(text="Connected", is_error=False)


def test_reporter_creates_display_when_none_given():
    reporter = StatusReporter()

    assert reporter.display == StatusDisplay(text="", is_error=False)
