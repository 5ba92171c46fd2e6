import argparse
from datetime import datetime
import logging
import queue
import time
from typing import List, Optional

import pygame

from sentry_control import CommandDispatcher
from sentry_control.dataclasses import ControlVector, SessionSnapshot
from sentry_helper import ProbeResult, probe_address
from sentry_helper.exceptions import AddressFormatError, UnsupportedCommandError

from sentry_ui.ConsoleInput import ConsoleInput
from sentry_ui.EventController import EventController
from sentry_ui.Init import Init
from sentry_ui.InputMapper import InputMapper
from sentry_ui.JoystickView import JoystickView
from sentry_ui.PointerInput import PointerInput
from sentry_ui.StatusText import status_message
from sentry_ui.TimingController import TimingController

TITLE = "Sentry"

HELP = """Commands:
  fire, home, reload, fire_and_reload, release_magazine, load_magazine,
  motors_on, motors_off   send a command to the sentry
  move <dx> <dy>          deflect the joystick (pixels from center)
  center                  release the joystick
  status                  print the current state
  probe [host:port]       test if a server is reachable
  quit                    exit"""


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sentry remote control client")
    parser.add_argument(
        "--config",
        default="settings.toml",
        help="Path to the settings file. Default is settings.toml."
    )
    parser.add_argument(
        "--server",
        help="Server address as host:port, overrides the settings file."
    )
    parser.add_argument(
        "--log",
        default="ERROR",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default is ERROR."
    )
    parser.add_argument(
        "--log-to-file",
        action="store_true",
        help="Save logs to txt file."
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Do not open the joystick window, control from the console only."
    )
    parser.add_argument(
        "--write-config",
        action="store_true",
        help="Write the effective settings to the config file and exit."
    )

    return parser.parse_args(argv)


def configure_logging(log: str, log_to_file: bool) -> None:
    level = getattr(logging, log.upper(), None)
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level: {log}")

    log_format = "%(asctime)s - %(levelname)s - %(threadName)s - %(message)s"
    handlers: List[logging.Handler] = [logging.StreamHandler()]

    if log_to_file:
        timestamp = datetime.now().strftime("%Y-%m-%d_%H:%M:%S")
        handlers.append(logging.FileHandler(f"{timestamp}.txt"))

    logging.basicConfig(
        level=level,
        format=log_format,
        handlers=handlers
    )


def format_snapshot(snapshot: SessionSnapshot) -> str:
    sentry_state = snapshot.sentry_state.value if snapshot.sentry_state else "unknown"
    return (
        f"[{snapshot.connection.value}] sentry={sentry_state} "
        f"queue={snapshot.queue_position}/{snapshot.client_count} "
        f"video={snapshot.video.state.value} "
        f"pitch={snapshot.pitch:g} yaw={snapshot.yaw:g}"
    )


def handle_line(
    line: str,
    dispatcher: CommandDispatcher,
    mapper: InputMapper
) -> bool:
    """Process one typed line. Returns False when the user wants to quit."""
    session = dispatcher.session
    parts = line.split()
    if not parts:
        return True

    name, *args = parts

    match name.lower():
        case "quit" | "exit":
            return False

        case "help":
            print(HELP)

        case "status":
            print(format_snapshot(session.snapshot))

        case "center":
            mapper.reset()
            session.set_control_vector(ControlVector())

        case "move":
            try:
                dx, dy = (float(value) for value in args)
            except ValueError:
                print("Usage: move <dx> <dy>")
                return True

            vector = mapper.map(dx, dy)
            session.set_control_vector(vector)
            print(f"Joystick at x={vector.x:.3f} y={vector.y:.3f}")

        case "probe":
            address = args[0] if args else str(session.address)
            match probe_address(address):
                case ProbeResult.CONNECTED:
                    print(f"{address} is reachable")
                case ProbeResult.INVALID_ADDRESS:
                    print(f"Invalid address: '{address}'")
                case ProbeResult.FAILED:
                    print(f"Could not connect to {address}")

        case _:
            try:
                if not dispatcher.send(name):
                    print("Not connected, command dropped")
            except UnsupportedCommandError as e:
                print(f"{e} (type 'help' for a list)")

    return True


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log, args.log_to_file)

    settings = Init.settings(args.config)
    if args.server:
        try:
            settings.set_server_address(args.server)
        except AddressFormatError as e:
            logging.error(f"{e} - using {settings.get_server_address()}")

    if args.write_config:
        settings.save()
        print(f"Settings written to {settings.path}")
        return 0

    player = Init.player()
    session = Init.session(settings, player)
    dispatcher = CommandDispatcher(session, Init.command_table(settings))
    mapper = Init.input_mapper(settings)
    timing = TimingController(settings, session)

    # Snapshots arrive on the session thread, print them from the main loop
    snapshots: queue.Queue[SessionSnapshot] = queue.Queue()
    session.subscribe(snapshots.put)

    view: Optional[JoystickView] = None
    events: Optional[EventController] = None
    if args.headless:
        clock = pygame.time.Clock()
    else:
        window = settings.get("window", {})
        size = (window.get("width", 480), window.get("height", 480))
        screen, clock = Init.ui(size, TITLE)
        view = JoystickView(screen)
        events = EventController(PointerInput(size), mapper, session)

    console = ConsoleInput()
    console.start()

    print(f"Connecting to {session.address}, type 'help' for commands")
    session.start()

    try:
        running = True
        while running:
            if events is not None and not events.handle_events():
                break

            timing.update(time.monotonic())

            while True:
                try:
                    snapshot = snapshots.get_nowait()
                except queue.Empty:
                    break

                print(format_snapshot(snapshot))
                message = status_message(snapshot, session.address)
                if message:
                    print(f"  {message}")
                if view is not None:
                    pygame.display.set_caption(message or TITLE)

            line = console.get_line()
            if line is not None:
                running = handle_line(line, dispatcher, mapper)
            elif args.headless and console.closed.is_set():
                logging.info("Console closed, shutting down")
                running = False

            if view is not None:
                view.render(mapper)
                pygame.display.flip()

            clock.tick(timing.main_loop_fps)

    except KeyboardInterrupt:
        pass

    finally:
        start = time.monotonic()
        session.stop()
        player.stop()
        pygame.quit()
        delta = round(time.monotonic() - start)
        logging.debug(f"Session shut down after {delta}s")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
