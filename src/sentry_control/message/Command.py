from typing import Dict

from .Message import Message


class Command(Message):
    def __init__(self, command: str) -> None:
        self.command = command

    def get_command(self) -> str:
        return self.command

    def to_json(self) -> Dict[str, str]:
        return {"command": self.command}
