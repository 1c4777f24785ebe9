"""State management helpers for backoff tracking."""

import logging
import time
from typing import Any, Dict

from .types import BackoffConfig

logger = logging.getLogger(__name__)


def _new_state() -> Dict[str, Any]:
    return {"attempt": 0, "last_failure_time": None}


class BackoffStateManager:
    """Tracks failed connection attempts per feed address."""

    def __init__(self):
        self.backoff_state: Dict[str, Dict[str, Any]] = {}

    def get_or_initialize_state(self, address: str) -> Dict[str, Any]:
        return self.backoff_state.setdefault(address, _new_state())

    def update_failure_state(self, address: str) -> int:
        state = self.get_or_initialize_state(address)
        state["attempt"] += 1
        state["last_failure_time"] = time.time()
        return state["attempt"]

    def reset_backoff(self, address: str) -> None:
        if self.backoff_state.pop(address, None) is not None:
            logger.debug("[BackoffManager] Reset backoff state for %s", address)

    def get_backoff_info(self, address: str, config: BackoffConfig) -> Dict[str, Any]:
        state = self.backoff_state.get(address, _new_state())
        return {
            "attempt": state["attempt"],
            "last_failure_time": state["last_failure_time"],
            "max_attempts": config.max_attempts,
            "can_retry": state["attempt"] < config.max_attempts,
        }
