import json
import socket
import unittest
from unittest.mock import MagicMock

from sentry_control import LineReader, LineTransmitter
from sentry_control.message import Command, Control, Ping


class TestLineTransmitter(unittest.TestCase):
    def setUp(self):
        self.local, self.remote = socket.socketpair()
        self.remote.settimeout(1)
        self.reader = LineReader(self.remote)

        self.transmitter = LineTransmitter(self.local)
        self.transmitter.start()

    def tearDown(self):
        self.transmitter.stop()
        self.local.close()
        self.remote.close()

    def test_message_is_sent_as_line(self):
        self.transmitter.add_message(Command("fire"))

        self.assertEqual(self.reader.readline(), '{"command":"fire"}')

    def test_order_is_preserved(self):
        messages = [Control(0.1 * i, -0.1 * i) for i in range(5)]
        messages.insert(2, Ping())
        messages.insert(4, Command("home"))

        for message in messages:
            self.transmitter.add_message(message)

        lines = [self.reader.readline() for _ in messages]
        self.assertEqual(lines, [m.to_line().rstrip("\n") for m in messages])
        self.assertEqual(json.loads(lines[2]), "ping")

    def test_is_running(self):
        self.assertTrue(self.transmitter.is_running())

        self.transmitter.stop()
        self.assertFalse(self.transmitter.is_running())
        self.assertFalse(self.transmitter.is_alive())

    def test_stop_before_start(self):
        transmitter = LineTransmitter(self.local)
        transmitter.stop()

        self.assertFalse(transmitter.is_running())

    def test_send_error_does_not_kill_thread(self):
        sock = MagicMock()
        sock.sendall.side_effect = [BrokenPipeError("gone"), None]
        transmitter = LineTransmitter(sock)
        transmitter.start()

        transmitter.add_message(Ping())
        transmitter.add_message(Command("home"))
        transmitter.queue.join()

        self.assertTrue(transmitter.is_running())
        self.assertEqual(sock.sendall.call_count, 2)
        sock.sendall.assert_called_with(b'{"command":"home"}\n')

        transmitter.stop()
