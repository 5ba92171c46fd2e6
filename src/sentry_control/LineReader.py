"""
Read newline terminated lines from a stream socket.

Socket file objects (`makefile`) become unusable after the first timeout,
so lines are split by hand. Buffered data survives timeouts, the caller can
simply call `readline()` again.
"""
import logging
import socket
from typing import Optional


class LineReader:
    BUFFERSIZE = 4096
    MAX_LINE_LENGTH = 64 * 1024

    def __init__(self, sock: socket.socket, encoding: str = "utf-8") -> None:
        self.socket = sock
        self.encoding = encoding
        self._buffer = bytearray()
        self._eof = False

        # Set while skipping the rest of an oversized line
        self._discarding = False

    def readline(self) -> Optional[str]:
        """
        Return the next line without terminator, or None once the peer closed
        the connection. Raises socket.timeout when no complete line arrived in
        time. Lines longer than MAX_LINE_LENGTH are dropped.
        """
        while True:
            index = self._buffer.find(b"\n")
            if index >= 0:
                raw = bytes(self._buffer[:index])
                del self._buffer[:index + 1]

                if self._discarding or index > self.MAX_LINE_LENGTH:
                    if not self._discarding:
                        logging.warning(f"Dropping line longer than {self.MAX_LINE_LENGTH} bytes")
                    self._discarding = False
                    continue

                return raw.rstrip(b"\r").decode(self.encoding, errors="replace")

            if len(self._buffer) > self.MAX_LINE_LENGTH:
                if not self._discarding:
                    logging.warning(f"Dropping line longer than {self.MAX_LINE_LENGTH} bytes")
                self._buffer.clear()
                self._discarding = True

            if self._eof:
                return None

            data = self.socket.recv(self.BUFFERSIZE)
            if not data:
                # A trailing unterminated line is dropped
                self._eof = True
                self._buffer.clear()
                return None

            self._buffer.extend(data)
