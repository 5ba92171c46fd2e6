from .Message import Message
from .VideoOffer import VideoOffer
from .VideoStreaming import VideoStreaming
from .VideoError import VideoError
from .QueuePosition import QueuePosition
from .Status import Status
from .Control import Control
from .Command import Command
from .Ping import Ping

__all__ = [
  "Message",
  "VideoOffer",
  "VideoStreaming",
  "VideoError",
  "QueuePosition",
  "Status",
  "Control",
  "Command",
  "Ping",
]
