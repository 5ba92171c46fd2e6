"""
Turns discrete user actions into command messages.

Sending never blocks the caller: the message is queued on the session's
transmitter and written from the connection's own thread, in the same queue
as the periodic control messages.
"""
import logging
from typing import Optional

from sentry_helper.exceptions import UnsupportedCommandError

from .CommandTable import Command, CommandTable
from .SessionClient import SessionClient


class CommandDispatcher:
    def __init__(
        self,
        session: SessionClient,
        table: Optional[CommandTable] = None
    ) -> None:
        self.session = session
        self.table = table if table is not None else CommandTable.from_profile()

    def send(self, command: Command | str) -> bool:
        """
        Queue a command, given as enum member or wire/enum name.

        Returns False when it was dropped because there is no connection.
        Raises UnsupportedCommandError for commands the table can't name.
        """
        if isinstance(command, str):
            resolved = self.table.lookup(command)
            if resolved is None:
                raise UnsupportedCommandError(f"Unknown command: '{command}'")
            command = resolved

        message = self.table.to_message(command)
        sent = self.session.send(message)
        if sent:
            logging.debug(f"Queued command '{message.get_command()}'")
        else:
            logging.info(f"Not connected, dropped command '{message.get_command()}'")

        return sent
