"""
Messages travel as single JSON values terminated by a newline.

Inbound messages are recognised by their top-level key. Every subclass that
declares KEYS is registered automatically, so adding a new server message
only requires a new class.
"""

import abc
import json
from typing import Any, Dict, Tuple

from sentry_helper.exceptions import MessageFormatError


class Message(abc.ABC):
    """Abstract Base Class for all messages with built-in serialization."""

    _registry: Dict[str, Any] = {}

    # Top-level JSON keys identifying an inbound message, empty for outbound
    KEYS: Tuple[str, ...] = ()

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        for key in cls.KEYS:
            Message._registry[key] = cls

    @property
    def type(self) -> str:
        return self.__class__.__name__

    def to_json(self) -> Any:
        raise NotImplementedError(f"{self.type} can not be sent")

    def to_line(self) -> str:
        return json.dumps(self.to_json(), separators=(",", ":")) + "\n"

    @classmethod
    def from_json(cls, key: str, data: Dict[str, Any]) -> "Message":
        raise NotImplementedError(f"{cls.__name__} can not be received")

    @classmethod
    def from_line(cls, line: str) -> "Message":
        """Dynamically deserialize a line into the correct message subclass."""
        try:
            data = json.loads(line)
        except ValueError as e:
            raise MessageFormatError(f"Invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise MessageFormatError(f"Expected a JSON object, got {type(data).__name__}")

        keys = [key for key in data if key in cls._registry]
        if not keys:
            raise MessageFormatError(f"No known message key in {sorted(data.keys())}")
        if len(keys) > 1:
            raise MessageFormatError(f"Ambiguous message, multiple keys: {keys}")

        key = keys[0]
        return cls._registry[key].from_json(key, data)

    def __repr__(self) -> str:
        return f"{self.type}({self.__dict__})"

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.__dict__ == other.__dict__


def require_object(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    if not isinstance(value, dict):
        raise MessageFormatError(f"'{key}' must be an object")

    return value


def require_string(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise MessageFormatError(f"'{key}' must be a string")

    return value


def optional_number(data: Dict[str, Any], key: str) -> float | None:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None

    return float(value)
