from typing import Tuple

import pygame

from sentry_ui.InputMapper import InputMapper


class JoystickView:
    """Draws the joystick zone around the press point and the current knob."""

    BACKGROUND: Tuple[int, int, int] = (20, 20, 20)
    ZONE: Tuple[int, int, int] = (90, 90, 90)
    KNOB: Tuple[int, int, int] = (220, 220, 220)
    KNOB_RADIUS = 12

    def __init__(self, screen: pygame.Surface) -> None:
        self.screen = screen

    def knob_position(self, mapper: InputMapper) -> Tuple[float, float]:
        origin_x, origin_y = mapper.origin
        return (
            origin_x + mapper.vector.x * mapper.zone_radius,
            origin_y - mapper.vector.y * mapper.zone_radius
        )

    def render(self, mapper: InputMapper) -> None:
        self.screen.fill(self.BACKGROUND)

        if mapper.origin is None:
            return

        pygame.draw.circle(self.screen, self.ZONE, mapper.origin, mapper.zone_radius, width=2)
        pygame.draw.circle(self.screen, self.KNOB, self.knob_position(mapper), self.KNOB_RADIUS)
