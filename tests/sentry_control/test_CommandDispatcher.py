import unittest
from unittest.mock import MagicMock

from sentry_control import Command, CommandDispatcher, CommandTable
from sentry_control.message import Command as CommandMessage
from sentry_helper.exceptions import UnsupportedCommandError


class TestCommandDispatcher(unittest.TestCase):
    def setUp(self):
        self.session = MagicMock()
        self.session.send.return_value = True
        self.dispatcher = CommandDispatcher(self.session)

    def test_default_table(self):
        self.assertEqual(self.dispatcher.table.names(), CommandTable.from_profile().names())

    def test_send_enum(self):
        self.assertTrue(self.dispatcher.send(Command.FIRE))
        self.session.send.assert_called_once_with(CommandMessage("fire"))

    def test_send_name(self):
        self.assertTrue(self.dispatcher.send("Reload"))
        self.session.send.assert_called_once_with(CommandMessage("reload"))

    def test_send_uses_profile(self):
        dispatcher = CommandDispatcher(self.session, CommandTable.from_profile("breach"))

        dispatcher.send(Command.RELEASE_MAGAZINE)
        self.session.send.assert_called_once_with(CommandMessage("open_breach"))

    def test_send_while_disconnected(self):
        self.session.send.return_value = False

        self.assertFalse(self.dispatcher.send(Command.HOME))
        self.session.send.assert_called_once()

    def test_unknown_name(self):
        with self.assertRaises(UnsupportedCommandError):
            self.dispatcher.send("self_destruct")

        self.session.send.assert_not_called()

    def test_move_is_unsupported(self):
        with self.assertRaises(UnsupportedCommandError):
            self.dispatcher.send(Command.MOVE)

        self.session.send.assert_not_called()
