from enum import Enum
from typing import Any, Dict


class SentryState(Enum):
    """Hardware status as reported by the sentry server."""
    READY = "ready"
    NOT_LOADED = "not_loaded"
    MAGAZINE_RELEASED = "magazine_released"
    RELOADING = "reloading"
    HOMING_REQUIRED = "homing_required"
    HOMING = "homing"
    MOTORS_OFF = "motors_off"
    HOMING_FAILED = "homing_failed"
    ERROR = "error"

    @classmethod
    def parse(cls, raw: Any) -> "SentryState":
        """
        Case-insensitive lookup by wire value.

        Raises ValueError for anything that is not a known status string.
        """
        if not isinstance(raw, str):
            raise ValueError(f"Sentry state must be a string, got {raw!r}")

        key = raw.strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown sentry state: {raw!r}") from None


# Older clients called the released magazine an open breach
_ALIASES: Dict[str, str] = {
    "breach_open": SentryState.MAGAZINE_RELEASED.value,
}
