import logging
import threading
from typing import Optional

import gi
gi.require_version('Gst', '1.0')
from gi.repository import Gst, GLib

from sentry_ui.video.Player import Player


class GstPlayer(Player):
    """
    GStreamer-based player.

    The server sends the decoding part of the pipeline, we prepend the UDP
    source bound to the port the hole puncher used. The description is
    expected to end in a video sink.
    """

    def __init__(self) -> None:
        Gst.init(None)

        self.pipeline: Optional[Gst.Pipeline] = None
        self._lock = threading.Lock()

    @staticmethod
    def describe(port: int, pipeline: str) -> str:
        return f"udpsrc port={port} ! {pipeline.strip()}"

    def play(self, port: int, pipeline: str) -> str:
        with self._lock:
            self._stop_unlocked()

            description = self.describe(port, pipeline)
            logging.debug(f"Launching pipeline: {description}")
            try:
                self.pipeline = Gst.parse_launch(description)
            except GLib.Error as e:
                logging.error(f"Failed to parse pipeline: {e.message}")
                return e.message

            result = self.pipeline.set_state(Gst.State.PLAYING)
            if result == Gst.StateChangeReturn.FAILURE:
                self._stop_unlocked()
                return "Failed to start video pipeline"

            return ""

    def stop(self) -> None:
        with self._lock:
            self._stop_unlocked()

    def _stop_unlocked(self) -> None:
        if self.pipeline is not None:
            self.pipeline.set_state(Gst.State.NULL)
            self.pipeline = None
