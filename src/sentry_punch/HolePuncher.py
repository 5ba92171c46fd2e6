"""
Keep a NAT binding open towards the video relay.

The server tells us where its RTP sender lives and which nonce identifies
us. We send the nonce from a fresh UDP port at a fixed interval, the server
learns our public address from those datagrams and starts pushing the
stream back through the same binding. The video player then takes over the
port, which is why `stop()` only returns once the socket is closed.
"""
import logging
import socket
import threading
from typing import Optional, Tuple

from sentry_helper import Address


class HolePuncher:
    SEND_INTERVAL = 1

    def __init__(
        self,
        interval: float = SEND_INTERVAL,
        bind_host: Optional[str] = None
    ) -> None:
        self.interval = interval
        self.bind_host = bind_host

        # Survives stop(), the player binds the same port afterwards
        self.bound_port: Optional[int] = None

        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    def bind_socket(self, port: int = 0, family: int = socket.AF_INET) -> socket.socket:
        """Bind a UDP socket, on all interfaces unless bind_host is set."""
        host = self.bind_host
        if host is None:
            host = "::" if family == socket.AF_INET6 else "0.0.0.0"

        sock = socket.socket(family, socket.SOCK_DGRAM)
        try:
            sock.bind((host, port))
        except OSError:
            sock.close()
            raise

        logging.info(f"Bound punch socket to {sock.getsockname()}")

        return sock

    @staticmethod
    def resolve(address: Address) -> Tuple[int, Tuple]:
        """
        Address family and socket address to send to, IPv6 relays need an
        IPv6 socket. Raises socket.gaierror (an OSError) when unresolvable.
        """
        host, port = address
        info = socket.getaddrinfo(host, port, type=socket.SOCK_DGRAM)
        family, _, _, _, sockaddr = info[0]

        return family, sockaddr

    def start(self, address: Address, nonce: str) -> int:
        """
        Start punching towards address, replacing any previous run.

        Returns the bound local port.
        """
        with self._lock:
            self._stop_unlocked()

            family, remote = self.resolve(address)
            sock = self.bind_socket(family=family)
            self.bound_port = sock.getsockname()[1]

            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._punch,
                args=(sock, remote, nonce.encode("utf-8"), self._stop_event),
                name="HolePuncher",
                daemon=True
            )
            self._thread.start()

            return self.bound_port

    def stop(self) -> None:
        with self._lock:
            self._stop_unlocked()

    def is_running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def _stop_unlocked(self) -> None:
        if self._thread is None:
            return

        self._stop_event.set()
        self._thread.join()
        self._thread = None
        logging.debug(f"Stopped punching from port {self.bound_port}")

    def _punch(
        self,
        sock: socket.socket,
        address: Tuple,
        payload: bytes,
        stop_event: threading.Event
    ) -> None:
        logging.info(f"Punching from port {sock.getsockname()[1]} to {address}")
        try:
            while not stop_event.is_set():
                try:
                    sock.sendto(payload, address)
                except OSError as e:
                    logging.warning(f"Punch to {address} failed: {e}")

                stop_event.wait(self.interval)
        finally:
            sock.close()
