from .CommandDispatcher import CommandDispatcher
from .CommandTable import Command, CommandTable
from .LineReader import LineReader
from .LineTransmitter import LineTransmitter
from .SentryState import SentryState
from .SessionClient import SessionClient
from .State import State

__all__ = [
    "Command",
    "CommandDispatcher",
    "CommandTable",
    "LineReader",
    "LineTransmitter",
    "SentryState",
    "SessionClient",
    "State",
]
