from .Message import Message


class Ping(Message):
    """Liveness message, the server drops clients that stay silent."""

    def to_json(self) -> str:
        return "ping"
