"""User facing status line derived from a session snapshot."""
from typing import Dict, Optional

from sentry_control import SentryState, State
from sentry_control.dataclasses import SessionSnapshot, VideoState
from sentry_helper import ServerAddress

SENTRY_STATE_MESSAGES: Dict[SentryState, str] = {
    SentryState.ERROR: "Hardware error, restart Arduino",
    SentryState.HOMING: "Sentry is homing...",
    SentryState.HOMING_REQUIRED: "Homing required",
    SentryState.HOMING_FAILED: "Homing failed",
    SentryState.MOTORS_OFF: "Motors are off",
    SentryState.RELOADING: "Please wait...",
}


def is_active_client(snapshot: SessionSnapshot) -> bool:
    """Connected and in control of the sentry."""
    return snapshot.connection == State.CONNECTED and snapshot.queue_position == 0


def status_message(snapshot: SessionSnapshot, server_address: ServerAddress) -> Optional[str]:
    """Most important message to show, None if everything is fine."""
    if snapshot.connection != State.CONNECTED:
        return f"Connecting to {server_address}..."

    if snapshot.video.state == VideoState.ERRORED:
        return f"Error playing stream: {snapshot.video.message}"

    if snapshot.queue_position > 0:
        return "Someone else is already in control"

    if snapshot.sentry_state is not None:
        return SENTRY_STATE_MESSAGES.get(snapshot.sentry_state)

    return None
