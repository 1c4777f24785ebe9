"""
Canonical connection state definitions for feed subscriptions.

This module provides the single source of truth for subscription states and
the transitions allowed between them.
"""

from enum import Enum
from typing import Dict, FrozenSet


class ConnectionState(Enum):
    """
    Connection states for a single feed subscription.

    CLOSED and FAILED are terminal: once reached, no further frames are
    delivered to the subscription handler.
    """

    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATES


TERMINAL_STATES: FrozenSet[ConnectionState] = frozenset({ConnectionState.CLOSED, ConnectionState.FAILED})

ALLOWED_TRANSITIONS: Dict[ConnectionState, FrozenSet[ConnectionState]] = {
    ConnectionState.CONNECTING: frozenset({ConnectionState.OPEN, ConnectionState.FAILED, ConnectionState.CLOSED}),
    ConnectionState.OPEN: frozenset({ConnectionState.FAILED, ConnectionState.CLOSED}),
    ConnectionState.CLOSED: frozenset(),
    ConnectionState.FAILED: frozenset(),
}


def can_transition(current: ConnectionState, target: ConnectionState) -> bool:
    """Return True when moving from *current* to *target* is a legal transition."""
    return target in ALLOWED_TRANSITIONS[current]


__all__ = ["ALLOWED_TRANSITIONS", "ConnectionState", "TERMINAL_STATES", "can_transition"]
