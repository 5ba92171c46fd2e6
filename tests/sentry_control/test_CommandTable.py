import unittest

from sentry_control import Command, CommandTable
from sentry_control.CommandTable import DEFAULT_PROFILE, PROFILES
from sentry_control.message import Command as CommandMessage
from sentry_helper.exceptions import UnsupportedCommandError


class TestCommandTable(unittest.TestCase):
    def setUp(self):
        self.table = CommandTable.from_profile()

    def test_default_profile(self):
        self.assertEqual(DEFAULT_PROFILE, "magazine")
        self.assertEqual(self.table.names(), PROFILES["magazine"])

    def test_wire_names(self):
        self.assertEqual(self.table.wire_name(Command.FIRE), "fire")
        self.assertEqual(self.table.wire_name(Command.FIRE_AND_RELOAD), "fire_and_reload")
        self.assertEqual(self.table.wire_name(Command.RELEASE_MAGAZINE), "release_magazine")
        self.assertEqual(self.table.wire_name(Command.LOAD_MAGAZINE), "load_magazine")

    def test_breach_profile(self):
        table = CommandTable.from_profile("breach")

        self.assertEqual(table.wire_name(Command.RELEASE_MAGAZINE), "open_breach")
        self.assertEqual(table.wire_name(Command.LOAD_MAGAZINE), "close_breach")
        self.assertEqual(table.wire_name(Command.HOME), "home")

    def test_unknown_profile(self):
        with self.assertRaises(ValueError):
            CommandTable.from_profile("laser")

    def test_move_has_no_wire_name(self):
        with self.assertRaises(UnsupportedCommandError):
            self.table.wire_name(Command.MOVE)

    def test_every_other_command_has_a_wire_name(self):
        for profile in PROFILES:
            table = CommandTable.from_profile(profile)
            for command in Command:
                if command is Command.MOVE:
                    continue
                with self.subTest(profile=profile, command=command):
                    self.assertTrue(table.wire_name(command))

    def test_lookup(self):
        self.assertEqual(self.table.lookup("fire"), Command.FIRE)
        self.assertEqual(self.table.lookup(" FIRE "), Command.FIRE)
        self.assertIsNone(self.table.lookup("move"))
        self.assertIsNone(self.table.lookup("launch"))

    def test_lookup_accepts_enum_names_in_breach_profile(self):
        table = CommandTable.from_profile("breach")

        self.assertEqual(table.lookup("open_breach"), Command.RELEASE_MAGAZINE)
        self.assertEqual(table.lookup("release_magazine"), Command.RELEASE_MAGAZINE)

    def test_extend(self):
        extended = self.table.extend({Command.MOVE: "move"})

        self.assertEqual(extended.wire_name(Command.MOVE), "move")
        with self.assertRaises(UnsupportedCommandError):
            self.table.wire_name(Command.MOVE)

    def test_to_message(self):
        message = self.table.to_message(Command.HOME)

        self.assertEqual(message, CommandMessage("home"))
        self.assertEqual(message.to_line(), '{"command":"home"}\n')

    def test_names_is_a_copy(self):
        names = self.table.names()
        names[Command.FIRE] = "boom"

        self.assertEqual(self.table.wire_name(Command.FIRE), "fire")
