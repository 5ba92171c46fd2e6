from enum import Enum
import logging
import socket
from urllib.parse import urlsplit

from sentry_helper.custom_types import ServerAddress
from sentry_helper.exceptions import AddressFormatError


class ProbeResult(Enum):
    CONNECTED = "connected"
    INVALID_ADDRESS = "invalid_address"
    FAILED = "failed"


def clamp(raw: float, min_val: float, max_val: float) -> float:
    lower = min(min_val, max_val)
    upper = max(min_val, max_val)
    clamped = max(lower, min(upper, raw))

    return clamped


def parse_address(address: str) -> ServerAddress:
    """
    Parse "host:port" (or "[v6]:port") into a ServerAddress.

    Both parts are mandatory, anything else raises AddressFormatError.
    """
    if not isinstance(address, str):
        raise AddressFormatError(f"Address must be a string, got {type(address).__name__}")

    raw = address.strip()
    try:
        parts = urlsplit(f"//{raw}")
        host = parts.hostname
        port = parts.port
    except ValueError as e:
        raise AddressFormatError(f"Invalid address '{address}': {e}") from e

    if not host or port is None:
        raise AddressFormatError(f"Address must contain a host and port: '{address}'")

    return ServerAddress(host, port)


def probe_address(address: str, timeout: float = 1) -> ProbeResult:
    """Try to open (and immediately close) a TCP connection to address."""
    try:
        parsed = parse_address(address)
    except AddressFormatError:
        return ProbeResult.INVALID_ADDRESS

    try:
        sock = socket.create_connection(parsed, timeout=timeout)
    except OSError as e:
        logging.debug(f"Probe of {parsed} failed: {e}")
        return ProbeResult.FAILED

    sock.close()

    return ProbeResult.CONNECTED
