from typing import Any, Dict

from .Message import Message, require_object, require_string


class VideoOffer(Message):
    """Server asks us to punch a hole towards rtp_address using nonce."""
    KEYS = ("video_offer",)

    def __init__(self, rtp_address: str, nonce: str) -> None:
        self.rtp_address = rtp_address
        self.nonce = nonce

    @classmethod
    def from_json(cls, key: str, data: Dict[str, Any]) -> "VideoOffer":
        offer = require_object(data, key)
        return cls(
            require_string(offer, "rtp_address"),
            require_string(offer, "nonce")
        )
