"""
Virtual joystick: pointer positions in, control vector out.

The first press defines the center of the joystick zone, further movement is
measured relative to it. The distance from the center is limited to the zone
radius and normalized to [-1, 1] per axis. Small deflections are clamped to
zero (dead-zone) and an optional exponential response curve gives finer
control around the center.
"""
from dataclasses import dataclass
from enum import Enum
import math
from typing import Optional

from sentry_control.dataclasses import ControlVector
from sentry_helper import clamp


class PointerAction(Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"


@dataclass(frozen=True)
class PointerEvent:
    """Pointer position in screen coordinates, y grows downwards."""
    action: PointerAction
    x: float
    y: float


@dataclass(frozen=True)
class ResponseCurve:
    exponent: float = 1.0

    def __post_init__(self) -> None:
        if not self.exponent > 0:
            raise ValueError(f"Response curve exponent must be positive, got {self.exponent}")

    def apply(self, value: float) -> float:
        if self.exponent == 1.0 or value == 0:
            return value

        return math.copysign(abs(value) ** self.exponent, value)


LINEAR = ResponseCurve()

# Below this a component is trigonometric rounding noise, not a deflection
EPSILON = 1e-12


def map_delta(
    dx: float,
    dy: float,
    zone_radius: float,
    deadzone: float,
    curve: ResponseCurve = LINEAR
) -> ControlVector:
    """Map a raw pointer offset onto a bounded control vector."""
    if not zone_radius > 0:
        raise ValueError(f"Zone radius must be positive, got {zone_radius}")

    deadzone = clamp(deadzone, 0.0, 1.0)

    angle = math.atan2(dy, dx)
    magnitude = min(math.hypot(dx, dy), zone_radius)

    x = clamp(math.cos(angle) * magnitude / zone_radius, -1.0, 1.0)
    y = clamp(math.sin(angle) * magnitude / zone_radius, -1.0, 1.0)

    if abs(x) < max(deadzone, EPSILON):
        x = 0.0
    if abs(y) < max(deadzone, EPSILON):
        y = 0.0

    return ControlVector(curve.apply(x), curve.apply(y))


class InputMapper:
    def __init__(
        self,
        zone_radius: float = 100.0,
        deadzone: float = 0.1,
        curve: ResponseCurve = LINEAR
    ) -> None:
        if not zone_radius > 0:
            raise ValueError(f"Zone radius must be positive, got {zone_radius}")

        self.zone_radius = zone_radius
        self.deadzone = clamp(deadzone, 0.0, 1.0)
        self.curve = curve

        self.pressed = False
        self.origin: Optional[tuple[float, float]] = None
        self.vector = ControlVector()

    def map(self, dx: float, dy: float) -> ControlVector:
        return map_delta(dx, dy, self.zone_radius, self.deadzone, self.curve)

    def handle(self, event: PointerEvent) -> ControlVector:
        if event.action == PointerAction.DOWN:
            self.pressed = True
            self.origin = (event.x, event.y)

        elif event.action == PointerAction.UP:
            self.reset()
            return self.vector

        if not self.pressed or self.origin is None:
            return self.vector

        origin_x, origin_y = self.origin
        # Screen y points down, pushing the stick up means pitching up
        self.vector = self.map(event.x - origin_x, origin_y - event.y)

        return self.vector

    def reset(self) -> None:
        self.pressed = False
        self.origin = None
        self.vector = ControlVector()

    def __repr__(self) -> str:
        return (f"<InputMapper(vector=({self.vector.x:.3f}, {self.vector.y:.3f}), "
                f"pressed={self.pressed}, deadzone={self.deadzone}, "
                f"exponent={self.curve.exponent})>")
