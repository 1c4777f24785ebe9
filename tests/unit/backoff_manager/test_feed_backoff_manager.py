import pytest

from postfeed.backoff_manager import BackoffManager
from postfeed.backoff_manager_helpers import SINGLE_ATTEMPT, BackoffConfig
from postfeed.backoff_manager_helpers.delay_calculator import DelayCalculator
from postfeed.backoff_manager_helpers.state_manager import BackoffStateManager
from postfeed.config import FeedSettings


def test_base_delay_grows_exponentially_and_caps():
    config = BackoffConfig(initial_delay=1.0, max_delay=5.0, multiplier=2.0)

    delays = [DelayCalculator.calculate_base_delay(config, attempt) for attempt in range(1, 6)]

    assert delays == [1.0, 2.0, 4.0, 5.0, 5.0]


def test_jitter_stays_within_range(monkeypatch):
    bounds = []

    def fake_uniform(a, b):
        bounds.append((a, b))
        return b

    monkeypatch.setattr("postfeed.backoff_manager.random.uniform", fake_uniform)

    delay = DelayCalculator.apply_jitter(10.0, 0.1)

    assert bounds == [(-1.0, 1.0)]
    assert delay == pytest.approx(11.0)


def test_jitter_never_goes_below_minimum(monkeypatch):
    monkeypatch.setattr("postfeed.backoff_manager.random.uniform", lambda a, b: a)

    assert DelayCalculator.apply_jitter(0.05, 0.5) == 0.1


def test_default_manager_makes_a_single_attempt():
    manager = BackoffManager()

    assert manager.config == SINGLE_ATTEMPT
    manager.record_failure("abc123")
    assert manager.should_retry("abc123") is False


def test_manager_allows_retries_until_max_attempts():
    manager = BackoffManager(BackoffConfig(max_attempts=3))

    manager.record_failure("abc123")
    assert manager.should_retry("abc123")
    manager.record_failure("abc123")
    assert manager.should_retry("abc123")
    manager.record_failure("abc123")
    assert not manager.should_retry("abc123")


def test_reset_clears_attempts_per_address():
    manager = BackoffManager(BackoffConfig(max_attempts=2))
    manager.record_failure("abc123")
    manager.record_failure("other")

    manager.reset_backoff("abc123")

    assert manager.get_backoff_info("abc123")["attempt"] == 0
    assert manager.get_backoff_info("other")["attempt"] == 1


def test_calculate_delay_uses_recorded_attempt(monkeypatch):
    monkeypatch.setattr("postfeed.backoff_manager.random.uniform", lambda a, b: 0.0)
    manager = BackoffManager(BackoffConfig(initial_delay=1.0, max_delay=60.0, multiplier=3.0, max_attempts=5))
    manager.record_failure("abc123")
    manager.record_failure("abc123")

    assert manager.calculate_delay("abc123") == 3.0


def test_manager_from_settings_copies_policy():
    settings = FeedSettings(
        max_connect_attempts=4,
        reconnect_initial_delay_seconds=0.5,
        reconnect_max_delay_seconds=8.0,
        reconnect_multiplier=1.5,
        reconnect_jitter=0.2,
    )

    manager = BackoffManager.from_settings(settings)

    assert manager.config == BackoffConfig(initial_delay=0.5, max_delay=8.0, multiplier=1.5, jitter_range=0.2, max_attempts=4)


def test_state_manager_tracks_failure_time():
    manager = BackoffStateManager()

    assert manager.update_failure_state("abc123") == 1
    info = manager.get_backoff_info("abc123", BackoffConfig(max_attempts=2))

    assert info["attempt"] == 1
    assert info["last_failure_time"] is not None
    assert info["can_retry"] is True
