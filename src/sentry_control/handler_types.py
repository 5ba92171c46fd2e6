import socket
from typing import Callable, Protocol

from sentry_helper import Address

from .dataclasses import SessionSnapshot

Observer = Callable[[SessionSnapshot], None]


class Dialer(Protocol):
    def __call__(self, address: Address, timeout: float, /) -> socket.socket:
        pass


class VideoPlayer(Protocol):
    """Plays the RTP stream arriving on a local UDP port."""

    def play(self, port: int, pipeline: str) -> str:
        """Returns an error description, empty on success."""
        pass

    def stop(self) -> None:
        pass
