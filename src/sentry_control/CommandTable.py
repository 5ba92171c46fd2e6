"""
Discrete command vocabulary.

Two generations of sentry hardware name the magazine actions differently,
the magazine profile matches the current server, the breach profile the
older firmware. Both share every other command name.
"""
from enum import Enum
from typing import Dict, Mapping, Optional

from sentry_helper.exceptions import UnsupportedCommandError

from .message import Command as CommandMessage


class Command(Enum):
    MOVE = "move"
    HOME = "home"
    FIRE = "fire"
    RELOAD = "reload"
    FIRE_AND_RELOAD = "fire_and_reload"
    RELEASE_MAGAZINE = "release_magazine"
    LOAD_MAGAZINE = "load_magazine"
    MOTORS_ON = "motors_on"
    MOTORS_OFF = "motors_off"


_COMMON: Dict[Command, str] = {
    Command.HOME: "home",
    Command.FIRE: "fire",
    Command.RELOAD: "reload",
    Command.FIRE_AND_RELOAD: "fire_and_reload",
    Command.MOTORS_ON: "motors_on",
    Command.MOTORS_OFF: "motors_off",
}

PROFILES: Dict[str, Dict[Command, str]] = {
    "magazine": {
        **_COMMON,
        Command.RELEASE_MAGAZINE: "release_magazine",
        Command.LOAD_MAGAZINE: "load_magazine",
    },
    "breach": {
        **_COMMON,
        Command.RELEASE_MAGAZINE: "open_breach",
        Command.LOAD_MAGAZINE: "close_breach",
    },
}

DEFAULT_PROFILE = "magazine"


class CommandTable:
    def __init__(self, names: Mapping[Command, str]) -> None:
        self._names: Dict[Command, str] = dict(names)

    @classmethod
    def from_profile(cls, profile: str = DEFAULT_PROFILE) -> "CommandTable":
        try:
            return cls(PROFILES[profile])
        except KeyError:
            raise ValueError(
                f"Unknown command profile '{profile}', expected one of {sorted(PROFILES)}"
            ) from None

    def extend(self, names: Mapping[Command, str]) -> "CommandTable":
        """Return a new table with additional or overridden names."""
        return CommandTable({**self._names, **names})

    def wire_name(self, command: Command) -> str:
        try:
            return self._names[command]
        except KeyError:
            raise UnsupportedCommandError(f"No wire name for command {command.name}") from None

    def lookup(self, name: str) -> Optional[Command]:
        """Reverse lookup, accepts wire names and enum names."""
        normalized = name.strip().lower()
        for command, wire in self._names.items():
            if normalized in (wire, command.value):
                return command

        return None

    def names(self) -> Dict[Command, str]:
        return dict(self._names)

    def to_message(self, command: Command) -> CommandMessage:
        return CommandMessage(self.wire_name(command))
