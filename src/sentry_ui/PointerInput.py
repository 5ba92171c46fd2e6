"""Translate pygame mouse and touch events into joystick pointer events."""
from typing import Optional, Tuple

import pygame

from sentry_ui.InputMapper import PointerAction, PointerEvent

LEFT_BUTTON = 1


class PointerInput:
    def __init__(self, size: Tuple[int, int]) -> None:
        # Finger coordinates are normalized, mouse coordinates are pixels
        self.size = size
        self.finger_id: Optional[int] = None

    def translate(self, event: pygame.event.Event) -> Optional[PointerEvent]:
        # Touch screens emit emulated mouse events as well, the finger events
        # are the ones we track
        if getattr(event, "touch", False):
            return None

        match event.type:
            case pygame.MOUSEBUTTONDOWN if event.button == LEFT_BUTTON:
                return PointerEvent(PointerAction.DOWN, *event.pos)

            case pygame.MOUSEMOTION if event.buttons[0]:
                return PointerEvent(PointerAction.MOVE, *event.pos)

            case pygame.MOUSEBUTTONUP if event.button == LEFT_BUTTON:
                return PointerEvent(PointerAction.UP, *event.pos)

            case pygame.FINGERDOWN if self.finger_id is None:
                self.finger_id = event.finger_id
                return self._finger_event(PointerAction.DOWN, event)

            case pygame.FINGERMOTION if event.finger_id == self.finger_id:
                return self._finger_event(PointerAction.MOVE, event)

            case pygame.FINGERUP if event.finger_id == self.finger_id:
                self.finger_id = None
                return self._finger_event(PointerAction.UP, event)

        return None

    def _finger_event(self, action: PointerAction, event: pygame.event.Event) -> PointerEvent:
        width, height = self.size
        return PointerEvent(action, event.x * width, event.y * height)
