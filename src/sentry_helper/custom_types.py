from typing import NamedTuple

Address = tuple[str, int]


class ServerAddress(NamedTuple):
    host: str
    port: int

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"

        return f"{self.host}:{self.port}"
