"""Timing controller driving the periodic control and ping messages."""
from typing import Any, Dict

from sentry_control import SessionClient


class TimingController:
    """Sends control vector and pings at fixed rates off the main loop clock."""

    def __init__(self, settings: Dict[str, Any], session: SessionClient):
        """Initialize timing controller with settings.

        Args:
            settings: Settings (or plain dict) containing timing configuration
            session: Session used for sending
        """
        self.settings = settings
        self.session = session

        self.main_loop_fps: int = 60
        self.control_interval: float = 0.0
        self.ping_interval: float = 0.0
        self.last_control_update: float = 0.0
        self.last_ping: float = 0.0

        self.update_from_settings()

    def update_from_settings(self) -> None:
        timing = self.settings.get("timing", {})
        control_rate_frequency = timing.get("control_update_hz", 20)
        ping_frequency = timing.get("ping_hz", 2)

        self.control_interval = 1.0 / control_rate_frequency
        self.ping_interval = 1.0 / ping_frequency
        self.main_loop_fps = timing.get("main_loop_fps", 60)

    def should_update_control(self, now: float) -> bool:
        return now - self.last_control_update >= self.control_interval

    def should_ping(self, now: float) -> bool:
        return now - self.last_ping >= self.ping_interval

    def update(self, now: float) -> None:
        """Call once per main loop iteration with the current monotonic time.

        Sending is a no-op while disconnected, the schedule keeps running so
        the first messages go out right after a reconnect.
        """
        if self.should_update_control(now):
            self.session.send_control()
            self.last_control_update = now

        if self.should_ping(now):
            self.session.send_ping()
            self.last_ping = now
