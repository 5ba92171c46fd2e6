from typing import Dict, Any
from pathlib import Path
import copy
import logging

import tomllib
import tomli_w

from sentry_helper import ServerAddress, parse_address
from sentry_helper.exceptions import AddressFormatError


class Settings:
    DEFAULT_SERVER_ADDRESS = ServerAddress("10.42.0.1", 8080)

    DEFAULTS: Dict[str, Any] = {
        "server": {
            "address": str(DEFAULT_SERVER_ADDRESS),
        },
        "window": {
            "width": 480,
            "height": 480,
        },
        "input": {
            "zone_radius": 100.0,
            "deadzone": 0.1,
            "curve_exponent": 1.0,
        },
        "commands": {
            "profile": "magazine",
        },
        "timing": {
            "main_loop_fps": 60,
            "control_update_hz": 20,
            "ping_hz": 2,
        },
        "network": {
            "connect_timeout": 5,
            "read_timeout": 5,
            "reconnect_delay": 0.5,
        },
        "punch": {
            "interval": 1,
        },
    }

    def __init__(self, path: str) -> None:
        self.path = Path(path)
        self.settings: Dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        if self.path.exists():
            with self.path.open("rb") as file:
                loaded = tomllib.load(file)
                self.settings = self._merge(copy.deepcopy(self.DEFAULTS), loaded)
        else:
            self.settings = copy.deepcopy(self.DEFAULTS)

    def save(self) -> None:
        with self.path.open("wb") as f:
            f.write(tomli_w.dumps(self.settings).encode("utf-8"))

    def get(self, key: str, default: Any = None) -> Any:
        return self.settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.settings[key] = value

    def get_server_address(self) -> ServerAddress:
        """
        Configured server address, or the default one if it can not be parsed.
        """
        raw = self.get("server", {}).get("address", "")
        try:
            return parse_address(raw)
        except AddressFormatError as e:
            logging.error(f"{e} - falling back to {self.DEFAULT_SERVER_ADDRESS}")
            return self.DEFAULT_SERVER_ADDRESS

    def set_server_address(self, address: str) -> None:
        """Set the server address, raises AddressFormatError when invalid."""
        parsed = parse_address(address)
        self.settings.setdefault("server", {})["address"] = str(parsed)

    def _merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        for key, value in override.items():
            if (
                key in base
                and isinstance(base[key], dict)
                and isinstance(value, dict)
            ):
                base[key] = self._merge(base[key], value)
            else:
                base[key] = value
        return base
