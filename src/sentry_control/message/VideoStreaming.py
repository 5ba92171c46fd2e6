from typing import Any, Dict

from .Message import Message, require_object, require_string


class VideoStreaming(Message):
    KEYS = ("video_streaming",)

    def __init__(self, gstreamer_command: str) -> None:
        self.gstreamer_command = gstreamer_command

    @classmethod
    def from_json(cls, key: str, data: Dict[str, Any]) -> "VideoStreaming":
        streaming = require_object(data, key)
        return cls(require_string(streaming, "gstreamer_command"))
