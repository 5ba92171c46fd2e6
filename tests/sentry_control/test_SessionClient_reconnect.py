import socket
import threading
import time
from unittest.mock import MagicMock

import pytest

from sentry_control import LineReader, SentryState, SessionClient, State
from sentry_control.dataclasses import ControlVector, VideoState
from sentry_helper import ServerAddress


def wait_for(condition, timeout=2.0, interval=0.01):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(interval)

    return condition()


class FakeServer:
    """Dialer handing out socketpairs, the far ends play the server."""

    def __init__(self, failures=0):
        self.failures = failures
        self.calls = []
        self.peers = []
        self._lock = threading.Lock()

    def __call__(self, address, timeout):
        with self._lock:
            self.calls.append((address, timeout))
            if self.failures > 0:
                self.failures -= 1
                raise ConnectionRefusedError("Connection refused")

            local, remote = socket.socketpair()
            remote.settimeout(1)
            self.peers.append(remote)

            return local

    def close(self):
        for peer in self.peers:
            peer.close()


@pytest.fixture
def server():
    server = FakeServer()
    yield server
    server.close()


@pytest.fixture
def puncher():
    puncher = MagicMock()
    puncher.bound_port = 5555
    return puncher


def make_client(server, puncher):
    return SessionClient(
        ServerAddress("10.42.0.1", 8080),
        MagicMock(),
        hole_puncher=puncher,
        connect=server,
        connect_timeout=0.5,
        read_timeout=0.2,
        reconnect_delay=0.01
    )


class TestSessionClientReconnect:
    def test_connects_and_reads(self, server, puncher):
        client = make_client(server, puncher)
        client.start()
        try:
            assert wait_for(lambda: client.state == State.CONNECTED)
            assert server.calls[0] == (("10.42.0.1", 8080), 0.5)

            server.peers[0].sendall(b'{"status":"ready","pitch":1.5,"yaw":-2}\n')
            assert wait_for(lambda: client.snapshot.sentry_state == SentryState.READY)
            assert client.snapshot.pitch == 1.5
            assert client.snapshot.yaw == -2.0
        finally:
            client.stop()

    def test_outbound_messages(self, server, puncher):
        client = make_client(server, puncher)
        client.start()
        try:
            assert wait_for(lambda: client.state == State.CONNECTED)
            reader = LineReader(server.peers[0])

            client.set_control_vector(ControlVector(x=0.5, y=-0.25))
            assert client.send_control()
            assert client.send_ping()

            assert reader.readline() == '{"pitch":-0.25,"yaw":0.5}'
            assert reader.readline() == '"ping"'
        finally:
            client.stop()

    def test_reconnects_after_server_closed(self, server, puncher):
        disconnects = []
        client = make_client(server, puncher)
        client.on(State.DISCONNECTED, lambda: disconnects.append(time.monotonic()))
        client.start()
        try:
            assert wait_for(lambda: client.state == State.CONNECTED)
            server.peers[0].sendall(b'{"queue_position":1,"num_clients":2}\n')
            server.peers[0].sendall(b'{"status":"homing"}\n')
            assert wait_for(lambda: client.snapshot.sentry_state == SentryState.HOMING)

            server.peers[0].close()

            assert wait_for(lambda: len(server.calls) == 2 and client.state == State.CONNECTED)
            assert len(disconnects) == 1
            puncher.stop.assert_called()

            snapshot = client.snapshot
            assert snapshot.queue_position == 0
            assert snapshot.client_count == 0
            assert snapshot.video.state == VideoState.IDLE
            assert snapshot.sentry_state == SentryState.HOMING
        finally:
            client.stop()

    def test_retries_failed_connects(self, puncher):
        server = FakeServer(failures=2)
        client = make_client(server, puncher)
        client.start()
        try:
            assert wait_for(lambda: client.state == State.CONNECTED)
            assert len(server.calls) == 3
        finally:
            client.stop()
            server.close()

    def test_survives_read_timeouts(self, server, puncher):
        client = make_client(server, puncher)
        client.start()
        try:
            assert wait_for(lambda: client.state == State.CONNECTED)
            time.sleep(0.5)

            assert client.state == State.CONNECTED
            assert len(server.calls) == 1
        finally:
            client.stop()

    def test_stop_joins_and_disconnects(self, server, puncher):
        states = []
        client = make_client(server, puncher)
        client.subscribe(lambda snapshot: states.append(snapshot.connection))
        client.start()

        assert wait_for(lambda: client.state == State.CONNECTED)
        client.stop()

        assert not client.is_alive()
        assert client.state == State.DISCONNECTED
        assert states[-1] == State.DISCONNECTED
        assert client.send_ping() is False
        assert server.peers[0].recv(1024) == b""
