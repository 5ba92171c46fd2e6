from typing import Any, Dict, Optional

from sentry_helper.exceptions import MessageFormatError

from .Message import Message


class QueuePosition(Message):
    """
    Position 0 means we are in control, anything above means another client
    is. The server sends the total number of clients along with it.
    """
    KEYS = ("queue_position",)

    def __init__(self, position: int, num_clients: Optional[int] = None) -> None:
        self.position = position
        self.num_clients = num_clients

    @classmethod
    def from_json(cls, key: str, data: Dict[str, Any]) -> "QueuePosition":
        position = data.get(key)
        if not _is_count(position):
            raise MessageFormatError(f"'{key}' must be a non-negative integer, got {position!r}")

        num_clients = data.get("num_clients")
        if not _is_count(num_clients):
            num_clients = None

        return cls(position, num_clients)


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
