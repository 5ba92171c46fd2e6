from abc import ABC, abstractmethod


class Player(ABC):
    """
    Plays an RTP stream arriving on a local UDP port.

    `pipeline` is the decoder description sent by the server, it is appended
    to a UDP source listening on `port`.
    """

    @abstractmethod
    def play(self, port: int, pipeline: str) -> str:
        """Start playback. Returns an error description, empty on success."""
        pass

    @abstractmethod
    def stop(self) -> None:
        pass


class NullPlayer(Player):
    """Used when no video backend is available, control keeps working."""

    ERROR = "Video playback is not available"

    def play(self, port: int, pipeline: str) -> str:
        return self.ERROR

    def stop(self) -> None:
        pass
