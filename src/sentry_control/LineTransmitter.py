"""
Write queued messages to a stream socket, one JSON line each.

All outbound traffic of a connection goes through one transmitter, so lines
from different callers never interleave and keep the order they were queued
in.

tx = LineTransmitter(sock)
tx.start()
tx.add_message(Ping())
...
tx.stop()
"""
import logging
from queue import Queue, Empty
import socket
import threading

from .message import Message


class LineTransmitter(threading.Thread):
    POLL_INTERVAL = 0.1

    def __init__(self, sock: socket.socket) -> None:
        super().__init__(daemon=True, name="LineTransmitter")

        self.socket = sock
        self.queue: Queue[Message] = Queue()

        self._stop_event = threading.Event()

    def add_message(self, message: Message) -> None:
        self.queue.put(message)

    def run(self) -> None:
        while not self._stop_event.is_set():
            try:
                message = self.queue.get(timeout=self.POLL_INTERVAL)
            except Empty:
                continue

            try:
                self.socket.sendall(message.to_line().encode("utf-8"))
            except OSError as e:
                logging.warning(f"Socket error while sending {message.type}: {e}")
            except Exception as e:
                logging.error(f"Unexpected transmit error: {e}", exc_info=True)
            finally:
                self.queue.task_done()

    def is_running(self) -> bool:
        return self.is_alive() and not self._stop_event.is_set()

    def stop(self) -> None:
        """Stop sending, messages still in the queue are discarded."""
        self._stop_event.set()
        if self.is_alive():
            self.join()
