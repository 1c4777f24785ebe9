import pytest

from postfeed.connection_state import ConnectionState, can_transition
from postfeed.exceptions import InvalidStateTransitionError
from postfeed.feed_subscriber import Subscription
from postfeed.feed_subscriber_helpers import FeedConnectionLifecycle


@pytest.mark.parametrize(
    "current, target, allowed",
    [
        (ConnectionState.CONNECTING, ConnectionState.OPEN, True),
        (ConnectionState.CONNECTING, ConnectionState.FAILED, True),
        (ConnectionState.OPEN, ConnectionState.CLOSED, True),
        (ConnectionState.OPEN, ConnectionState.FAILED, True),
        (ConnectionState.OPEN, ConnectionState.CONNECTING, False),
        (ConnectionState.CLOSED, ConnectionState.OPEN, False),
        (ConnectionState.FAILED, ConnectionState.CLOSED, False),
    ],
)
def test_transition_table(current, target, allowed):
    assert can_transition(current, target) is allowed


def test_terminal_states():
    assert ConnectionState.CLOSED.is_terminal
    assert ConnectionState.FAILED.is_terminal
    assert not ConnectionState.OPEN.is_terminal


@pytest.mark.asyncio
async def test_subscription_rejects_leaving_terminal_state():
    lifecycle = FeedConnectionLifecycle("abc123", "ws://feed.test/api/posts/abc123")
    subscription = Subscription("abc123", lambda event: None, lifecycle)
    subscription._transition(ConnectionState.FAILED, RuntimeError("down"))

    with pytest.raises(InvalidStateTransitionError) as excinfo:
        subscription._transition(ConnectionState.OPEN)

    assert excinfo.value.current is ConnectionState.FAILED
    assert excinfo.value.target is ConnectionState.OPEN
