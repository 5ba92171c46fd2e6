"""Event handling controller for pygame events."""
from typing import Iterable, Optional

import pygame

from sentry_control import SessionClient

from sentry_ui.InputMapper import InputMapper
from sentry_ui.PointerInput import PointerInput


class EventController:
    def __init__(
        self,
        pointer: PointerInput,
        mapper: InputMapper,
        session: SessionClient
    ) -> None:
        self.pointer = pointer
        self.mapper = mapper
        self.session = session

    def handle_events(self, events: Optional[Iterable[pygame.event.Event]] = None) -> bool:
        """Returns False if application should quit."""
        if events is None:
            events = pygame.event.get()

        for event in events:
            if event.type == pygame.QUIT:
                return False

            pointer_event = self.pointer.translate(event)
            if pointer_event is not None:
                vector = self.mapper.handle(pointer_event)
                self.session.set_control_vector(vector)

        return True
