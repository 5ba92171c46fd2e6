"""
The session client keeps a TCP connection to the sentry server alive and
mirrors the server side state. It cycles through three states for as long as
it is running:

1. CONNECTING: The server is being dialed. Failed attempts are retried after
  a short delay.
2. CONNECTED: Lines are read and dispatched one at a time. Outbound messages
  are written by a LineTransmitter that belongs to this connection only.
3. DISCONNECTED: The connection is gone, for whatever reason. Session state
  is reset, hole punching stops and - unless the client was stopped - it
  starts over with 1.

Observers get a fresh SessionSnapshot whenever something changed. They are
called from the worker thread, UI code has to hand the snapshot over to its
own thread.
"""
from collections import defaultdict
from dataclasses import replace
import logging
import socket
import threading
from typing import Any, Callable, Dict, List, Optional

from sentry_helper import ServerAddress, parse_address
from sentry_helper.exceptions import AddressFormatError, MessageFormatError
from sentry_punch import HolePuncher

from .LineReader import LineReader
from .LineTransmitter import LineTransmitter
from .State import State
from .dataclasses import ControlVector, SessionSnapshot, VideoSession, VideoState
from .handler_types import Dialer, Observer, VideoPlayer
from .message import (
  Control,
  Message,
  Ping,
  QueuePosition,
  Status,
  VideoError,
  VideoOffer,
  VideoStreaming,
)


class SessionClient(threading.Thread):
    CONNECT_TIMEOUT = 5
    READ_TIMEOUT = 5
    RECONNECT_DELAY = 0.5

    def __init__(
        self,
        address: ServerAddress,
        player: VideoPlayer,
        hole_puncher: Optional[HolePuncher] = None,
        connect: Optional[Dialer] = None,
        connect_timeout: float = CONNECT_TIMEOUT,
        read_timeout: float = READ_TIMEOUT,
        reconnect_delay: float = RECONNECT_DELAY
    ) -> None:
        super().__init__(daemon=True, name="SessionClient")

        self.address = address
        self.player = player
        self.hole_puncher = hole_puncher if hole_puncher is not None else HolePuncher()
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.reconnect_delay = reconnect_delay

        self._connect: Dialer = connect if connect is not None else socket.create_connection

        self._observers: List[Observer] = []
        self._state_handlers: Dict[State, List[Callable[[], None]]] = defaultdict(list)
        self._handlers: Dict[type, Callable[[Any], None]] = {
            VideoOffer: self.video_offer_handler,
            VideoStreaming: self.video_streaming_handler,
            VideoError: self.video_error_handler,
            QueuePosition: self.queue_position_handler,
            Status: self.status_handler,
        }

        # Guards the snapshot and the live socket/transmitter pair
        self._lock = threading.Lock()
        self._snapshot = SessionSnapshot()
        self._socket: Optional[socket.socket] = None
        self._transmitter: Optional[LineTransmitter] = None
        self._control_vector = ControlVector()

        self._shutdown = threading.Event()

    @property
    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    @property
    def state(self) -> State:
        return self._snapshot.connection

    def subscribe(self, observer: Observer) -> None:
        """Add observers before starting, otherwise the first update is lost."""
        self._observers.append(observer)

    def on(self, state: State, handler: Callable[[], None]) -> None:
        self._state_handlers[state].append(handler)

    def send(self, message: Message) -> bool:
        """
        Queue a message on the current connection.

        Returns False when there is no connection, the message is dropped in
        that case.
        """
        transmitter = self._transmitter
        if transmitter is None:
            logging.debug(f"Not connected, dropping {message.type}")
            return False

        transmitter.add_message(message)
        return True

    def set_control_vector(self, vector: ControlVector) -> None:
        self._control_vector = vector

    def send_control(self) -> bool:
        vector = self._control_vector
        return self.send(Control(pitch=vector.y, yaw=vector.x))

    def send_ping(self) -> bool:
        return self.send(Ping())

    def run(self) -> None:
        logging.info(f"Session started for {self.address}")

        while not self._shutdown.is_set():
            sock = self._dial()
            if sock is None:
                self._shutdown.wait(self.reconnect_delay)
                continue

            try:
                self._serve(sock)
            except Exception as e:
                logging.exception(f"Unexpected session error: {e}")
            finally:
                self._teardown(sock)

            self._shutdown.wait(self.reconnect_delay)

        self._update(connection=State.DISCONNECTED)
        logging.info("Session stopped")

    def stop(self) -> None:
        """Stop the worker and wait until the socket has been closed."""
        self._shutdown.set()

        with self._lock:
            sock = self._socket

        # Wakes up a reader blocked in recv()
        if sock is not None:
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError as e:
                logging.debug(f"Socket shutdown failed: {e}")

        if self.ident is not None and threading.current_thread() is not self:
            self.join()

    def handle_line(self, line: str) -> None:
        line = line.strip()
        if not line:
            return

        logging.debug(f"Server message: `{line}`")
        try:
            message = Message.from_line(line)
        except MessageFormatError as e:
            logging.warning(f"Can't handle message `{line}`: {e}")
            return

        self.handle_message(message)

    def handle_message(self, message: Message) -> None:
        handler = self._handlers.get(type(message))
        if handler is None:
            logging.warning(f"No handler for {message.type}")
            return

        handler(message)

    def video_offer_handler(self, message: VideoOffer) -> None:
        self.player.stop()

        try:
            remote = parse_address(message.rtp_address)
        except AddressFormatError as e:
            logging.warning(f"Invalid video offer: {e}")
            self._update(video=VideoSession.errored(str(e)))
            return

        try:
            self.hole_puncher.start(remote, message.nonce)
        except OSError as e:
            logging.error(f"Could not open video port: {e}")
            self._update(video=VideoSession.errored(f"Could not open video port: {e}"))
            return

        self._update(video=VideoSession.offered(remote, message.nonce))

    def video_streaming_handler(self, message: VideoStreaming) -> None:
        if self._snapshot.video.state != VideoState.OFFERED:
            logging.warning("Ignoring video stream that was never offered")
            return

        self.hole_puncher.stop()
        port = self.hole_puncher.bound_port
        if port is None:
            self._update(video=VideoSession.errored("No video port negotiated"))
            return

        try:
            error = self.player.play(port, message.gstreamer_command)
        except Exception as e:
            logging.exception(f"Video player failed: {e}")
            error = str(e) or e.__class__.__name__

        if error:
            logging.error(f"Error playing stream: {error}")
            self._update(video=VideoSession.errored(error))
        else:
            logging.info(f"Playing video stream on port {port}")
            self._update(video=VideoSession.streaming())

    def video_error_handler(self, message: VideoError) -> None:
        self.hole_puncher.stop()
        logging.error(f"Server reported video error: {message.message}")
        self._update(video=VideoSession.errored(message.message))

    def queue_position_handler(self, message: QueuePosition) -> None:
        changes: Dict[str, Any] = {"queue_position": message.position}
        if message.num_clients is not None:
            changes["client_count"] = message.num_clients

        self._update(**changes)

    def status_handler(self, message: Status) -> None:
        changes: Dict[str, Any] = {}
        try:
            changes["sentry_state"] = message.get_state()
        except ValueError as e:
            logging.warning(f"Keeping previous sentry state: {e}")

        if message.pitch is not None:
            changes["pitch"] = message.pitch
        if message.yaw is not None:
            changes["yaw"] = message.yaw

        self._update(**changes)

    def _dial(self) -> Optional[socket.socket]:
        self._update(connection=State.CONNECTING)

        try:
            sock = self._connect(tuple(self.address), self.connect_timeout)
        except OSError as e:
            logging.warning(f"Socket failed to connect to {self.address}: {e}")
            return None

        with self._lock:
            if self._shutdown.is_set():
                sock.close()
                return None

            self._socket = sock

        return sock

    def _serve(self, sock: socket.socket) -> None:
        sock.settimeout(self.read_timeout)

        transmitter = LineTransmitter(sock)
        transmitter.start()
        with self._lock:
            self._transmitter = transmitter

        logging.info(f"Connected to {self.address}")
        self._update(connection=State.CONNECTED, video=VideoSession.idle())

        reader = LineReader(sock)
        while not self._shutdown.is_set():
            try:
                line = reader.readline()
            except socket.timeout:
                logging.warning(f"No message received for {self.read_timeout}s")
                continue
            except OSError as e:
                logging.warning(f"Socket error while reading: {e}")
                return

            if line is None:
                logging.warning("Received EOF from socket")
                return

            self.handle_line(line)

    def _teardown(self, sock: socket.socket) -> None:
        with self._lock:
            transmitter = self._transmitter
            self._transmitter = None
            self._socket = None

        if transmitter is not None:
            transmitter.stop()

        sock.close()
        self.hole_puncher.stop()

        logging.info("Socket disconnected")

        # Sentry state and telemetry are kept as last known values
        self._update(
            connection=State.DISCONNECTED,
            video=VideoSession.idle(),
            queue_position=0,
            client_count=0
        )

    def _update(self, **changes: Any) -> None:
        with self._lock:
            previous = self._snapshot
            snapshot = replace(previous, **changes)
            if snapshot == previous:
                return

            self._snapshot = snapshot

        if snapshot.connection != previous.connection:
            logging.debug(f"State changed from '{previous.connection}' to '{snapshot.connection}'")
            for fn in self._state_handlers[snapshot.connection]:
                self._call(fn)

        for observer in list(self._observers):
            self._call(observer, snapshot)

    def _call(self, fn: Callable[..., None], *args: Any) -> None:
        try:
            fn(*args)
        except Exception as e:
            logging.exception(f"Error in session callback: {e}")
