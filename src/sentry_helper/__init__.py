from sentry_helper.helper import (
  clamp,
  parse_address,
  probe_address,
  ProbeResult,
)
from sentry_helper.custom_types import (
  Address,
  ServerAddress,
)

__all__ = [
  "clamp",
  "parse_address",
  "probe_address",
  "ProbeResult",
  "Address",
  "ServerAddress",
]
