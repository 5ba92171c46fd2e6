from typing import Any, Dict

from .Message import Message, require_object, require_string


class VideoError(Message):
    KEYS = ("video_error",)

    def __init__(self, message: str) -> None:
        self.message = message

    @classmethod
    def from_json(cls, key: str, data: Dict[str, Any]) -> "VideoError":
        error = require_object(data, key)
        return cls(require_string(error, "message"))
