from typing import Any, Dict, Optional

from ..SentryState import SentryState
from .Message import Message, optional_number


class Status(Message):
    """
    Hardware status with the current motor positions.

    The status value is kept raw, an unknown or malformed value must not
    prevent the telemetry from being used. Older servers sent the status as a
    bare string under "sentry_state".
    """
    KEYS = ("status", "sentry_state")

    def __init__(
        self,
        status: Any,
        pitch: Optional[float] = None,
        yaw: Optional[float] = None
    ) -> None:
        self.status = status
        self.pitch = pitch
        self.yaw = yaw

    def get_state(self) -> SentryState:
        """Raises ValueError when the status is not a known state string."""
        return SentryState.parse(self.status)

    @classmethod
    def from_json(cls, key: str, data: Dict[str, Any]) -> "Status":
        value = data[key]
        if isinstance(value, dict):
            data = value
            value = data.get("status")

        return cls(
            value,
            optional_number(data, "pitch"),
            optional_number(data, "yaw")
        )
