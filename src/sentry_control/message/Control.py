from typing import Dict

from .Message import Message


class Control(Message):
    """Periodic joystick position, pitch is the vertical axis."""

    def __init__(self, pitch: float, yaw: float) -> None:
        self.pitch = pitch
        self.yaw = yaw

    def to_json(self) -> Dict[str, float]:
        return {
            "pitch": round(self.pitch, 3),
            "yaw": round(self.yaw, 3),
        }
