"""Delay calculation helpers for backoff management."""

import logging

from postfeed.backoff_manager import random as backoff_random

from .types import MINIMUM_DELAY_SECONDS, BackoffConfig

logger = logging.getLogger(__name__)


class DelayCalculator:
    """Calculates backoff delays with jitter."""

    @staticmethod
    def calculate_base_delay(config: BackoffConfig, attempt: int) -> float:
        """
        Calculate base exponential backoff delay.

        Args:
            config: Backoff configuration
            attempt: Failed attempt number, starting at 1

        Returns:
            Base delay in seconds
        """
        return min(config.initial_delay * (config.multiplier ** (attempt - 1)), config.max_delay)

    @staticmethod
    def apply_jitter(base_delay: float, jitter_range: float) -> float:
        """
        Apply jitter to prevent many clients reconnecting in lockstep.

        Args:
            base_delay: Base delay
            jitter_range: Jitter range as fraction of base delay

        Returns:
            Delay with jitter applied
        """
        if jitter_range <= 0:
            return max(MINIMUM_DELAY_SECONDS, base_delay)
        jitter_amount = base_delay * jitter_range
        jitter = backoff_random.uniform(-jitter_amount, jitter_amount)
        return max(MINIMUM_DELAY_SECONDS, base_delay + jitter)

    @classmethod
    def calculate_full_delay(cls, config: BackoffConfig, attempt: int, address: str) -> float:
        base_delay = cls.calculate_base_delay(config, attempt)
        delay = cls.apply_jitter(base_delay, config.jitter_range)
        logger.debug("[BackoffManager] Attempt %s for %s: delay %.2fs (base %.2fs)", attempt, address, delay, base_delay)
        return delay
