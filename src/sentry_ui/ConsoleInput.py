"""
Read typed commands from a text stream (stdin by default).

Reading blocks, so it happens on a daemon thread, the main loop picks the
lines up without waiting.
"""
import logging
import queue
import sys
import threading
from typing import Optional, TextIO


class ConsoleInput(threading.Thread):
    def __init__(self, stream: Optional[TextIO] = None) -> None:
        super().__init__(daemon=True, name="ConsoleInput")

        self.stream = stream if stream is not None else sys.stdin
        self.lines: queue.Queue[str] = queue.Queue()
        self.closed = threading.Event()

    def run(self) -> None:
        for line in self.stream:
            line = line.strip()
            if line:
                self.lines.put(line)

        logging.debug("Console input closed")
        self.closed.set()

    def get_line(self) -> Optional[str]:
        try:
            return self.lines.get_nowait()
        except queue.Empty:
            return None
