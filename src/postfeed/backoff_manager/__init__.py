"""Configurable exponential backoff for feed connection attempts."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from postfeed.backoff_manager_helpers import SINGLE_ATTEMPT, BackoffConfig
from postfeed.backoff_manager_helpers.delay_calculator import DelayCalculator
from postfeed.backoff_manager_helpers.state_manager import BackoffStateManager
from postfeed.config import FeedSettings

__all__ = ["BackoffConfig", "BackoffManager"]

logger = logging.getLogger(__name__)


class BackoffManager:
    """
    Decides whether another connection attempt is allowed and how long to wait.

    ``max_attempts`` counts every attempt including the first, so the default
    configuration makes exactly one attempt and never retries.
    """

    def __init__(self, config: Optional[BackoffConfig] = None):
        self.config = config if config is not None else SINGLE_ATTEMPT
        self.state_manager = BackoffStateManager()

    @classmethod
    def from_settings(cls, settings: FeedSettings) -> "BackoffManager":
        return cls(BackoffConfig.from_settings(settings))

    def record_failure(self, address: str) -> int:
        attempt = self.state_manager.update_failure_state(address)
        logger.info("[BackoffManager] Connection attempt %s/%s failed for %s", attempt, self.config.max_attempts, address)
        return attempt

    def should_retry(self, address: str) -> bool:
        info = self.state_manager.get_backoff_info(address, self.config)
        if not info["can_retry"]:
            logger.warning("[BackoffManager] Max attempts (%s) reached for %s", self.config.max_attempts, address)
        return info["can_retry"]

    def calculate_delay(self, address: str, attempt: Optional[int] = None) -> float:
        current_attempt = attempt if attempt is not None else self.state_manager.get_or_initialize_state(address)["attempt"]
        return DelayCalculator.calculate_full_delay(self.config, max(1, current_attempt), address)

    def reset_backoff(self, address: str) -> None:
        self.state_manager.reset_backoff(address)

    def get_backoff_info(self, address: str) -> Dict[str, Any]:
        return self.state_manager.get_backoff_info(address, self.config)
