from .Player import Player, NullPlayer
from .gstreamer import is_gstreamer_available

__all__ = [
    "Player",
    "NullPlayer",
    "is_gstreamer_available",
]
