"""Immutable value types shared between the session and its observers."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from sentry_helper import ServerAddress

from .SentryState import SentryState
from .State import State


@dataclass(frozen=True)
class ControlVector:
    """Joystick output, both components within [-1, 1]."""
    x: float = 0.0
    y: float = 0.0

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0


class VideoState(Enum):
    IDLE = "idle"
    OFFERED = "offered"
    STREAMING = "streaming"
    ERRORED = "errored"


@dataclass(frozen=True)
class VideoSession:
    state: VideoState = VideoState.IDLE
    remote_address: Optional[ServerAddress] = None
    nonce: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def idle(cls) -> "VideoSession":
        return cls()

    @classmethod
    def offered(cls, remote_address: ServerAddress, nonce: str) -> "VideoSession":
        return cls(VideoState.OFFERED, remote_address=remote_address, nonce=nonce)

    @classmethod
    def streaming(cls) -> "VideoSession":
        return cls(VideoState.STREAMING)

    @classmethod
    def errored(cls, message: str) -> "VideoSession":
        return cls(VideoState.ERRORED, message=message)


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything the UI needs to redraw, pushed on every change."""
    connection: State = State.DISCONNECTED
    sentry_state: Optional[SentryState] = None
    queue_position: int = 0
    client_count: int = 0
    video: VideoSession = field(default_factory=VideoSession.idle)
    pitch: float = 0.0
    yaw: float = 0.0
