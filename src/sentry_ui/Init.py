import logging
from typing import Tuple

import pygame
from pygame import display, time

from sentry_control import CommandTable, SessionClient
from sentry_punch import HolePuncher

from sentry_ui.InputMapper import InputMapper, ResponseCurve
from sentry_ui.Settings import Settings
from sentry_ui.video import NullPlayer, Player, is_gstreamer_available


class Init:
    """
    Factory to help with initialization of core components
    """

    @classmethod
    def settings(cls, path: str = "settings.toml") -> Settings:
        return Settings(path)

    @classmethod
    def player(cls) -> Player:
        if is_gstreamer_available():
            from sentry_ui.video.GstPlayer import GstPlayer
            return GstPlayer()

        logging.warning("GStreamer is not available, video is disabled")
        return NullPlayer()

    @classmethod
    def ui(cls, size: Tuple[int, int], title: str) -> Tuple[pygame.Surface, pygame.time.Clock]:
        pygame.init()

        flags = pygame.DOUBLEBUF | pygame.SCALED
        screen = display.set_mode(size, flags)
        display.set_caption(title)
        clock = time.Clock()

        return screen, clock

    @classmethod
    def session(cls, settings: Settings, player: Player) -> SessionClient:
        network = settings.get("network", {})
        punch = settings.get("punch", {})

        return SessionClient(
            settings.get_server_address(),
            player,
            hole_puncher=HolePuncher(interval=punch.get("interval", HolePuncher.SEND_INTERVAL)),
            connect_timeout=network.get("connect_timeout", SessionClient.CONNECT_TIMEOUT),
            read_timeout=network.get("read_timeout", SessionClient.READ_TIMEOUT),
            reconnect_delay=network.get("reconnect_delay", SessionClient.RECONNECT_DELAY)
        )

    @classmethod
    def command_table(cls, settings: Settings) -> CommandTable:
        profile = settings.get("commands", {}).get("profile", "magazine")
        try:
            return CommandTable.from_profile(profile)
        except ValueError as e:
            logging.error(f"{e} - falling back to default profile")
            return CommandTable.from_profile()

    @classmethod
    def input_mapper(cls, settings: Settings) -> InputMapper:
        config = settings.get("input", {})

        return InputMapper(
            zone_radius=config.get("zone_radius", 100.0),
            deadzone=config.get("deadzone", 0.1),
            curve=ResponseCurve(config.get("curve_exponent", 1.0))
        )
