"""Command line entry point for the Hue client."""

import argparse
import json
import logging
import signal
import sys
import threading
from typing import Any, List, Optional

from .color import NAMED_COLORS, RGBColor
from .config import config
from .discovery import discover_ip
from .exceptions import HueError
from .hue_client import HueClient
from .presets import (
    cycle_thru_color_list,
    cycle_thru_hue_range,
    police_lights,
    strobe,
)

logger = logging.getLogger(__name__)

# Bridge error type for "link button not pressed"
LINK_BUTTON_NOT_PRESSED = 101


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def setup_signal_handlers(stop: threading.Event) -> None:
    """Stop running presets on SIGINT/SIGTERM."""

    def signal_handler(signum, frame):
        logger.info(f"Received signal {signum}, stopping...")
        stop.set()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)


def parse_color(value: str) -> RGBColor:
    named = NAMED_COLORS.get(value.lower())
    if named is not None:
        return named
    return RGBColor.from_hex(value)


def _client(args: argparse.Namespace) -> HueClient:
    return HueClient(ip=args.ip, username=args.username)


def _pairing_succeeded(result: Any) -> bool:
    return isinstance(result, list) and bool(result) and "success" in result[0]


def _link_button_pending(result: Any) -> bool:
    if not isinstance(result, list) or not result or "error" not in result[0]:
        return False
    return result[0]["error"].get("type") == LINK_BUTTON_NOT_PRESSED


def _write_env_file(path: str, hue: HueClient) -> None:
    env_content = f"""# Hue client configuration
HUE_BRIDGE_IP={hue.ip}
HUE_USERNAME={hue.username}
LOG_LEVEL={config.log_level}
"""
    with open(path, "w") as f:
        f.write(env_content)
    print(f"Wrote bridge configuration to {path}")


def command_discover(args: argparse.Namespace) -> int:
    print(discover_ip(args.timeout))
    return 0


def command_pair(args: argparse.Namespace) -> int:
    hue = _client(args)
    print(f"Pairing '{hue.client_name}' with bridge at {hue.ip}")

    result = hue.authorize()
    if not _pairing_succeeded(result):
        if not _link_button_pending(result):
            print(f"Unexpected response: {result}")
            return 1
        input("Press the LINK BUTTON on the bridge, then press ENTER: ")
        result = hue.authorize()

    if not _pairing_succeeded(result):
        print(f"Pairing failed: {result}")
        return 1

    print(f"Paired. Username: {hue.username}")
    if args.env_file:
        _write_env_file(args.env_file, hue)
    return 0


def command_lights(args: argparse.Namespace) -> int:
    hue = _client(args)
    json.dump(hue.lights(), sys.stdout, indent=2)
    print()
    return 0


def command_switch(args: argparse.Namespace) -> int:
    hue = _client(args)
    if args.light == "all":
        if args.command == "on":
            hue.all_lights.on()
        else:
            hue.all_lights.off()
    elif args.command == "on":
        hue.on(args.light)
    else:
        hue.off(args.light)
    return 0


def command_color(args: argparse.Namespace) -> int:
    try:
        color = parse_color(args.color)
    except ValueError as e:
        print(str(e))
        return 1

    hue = _client(args)
    overrides = {"on": True}
    if args.light == "all":
        target = hue.all_lights
        setter = target.set_bright_color if args.bright else target.set_color
        setter(color, overrides)
    else:
        setter = hue.set_bright_color if args.bright else hue.set_color
        setter(args.light, color, overrides)
    return 0


def command_preset(args: argparse.Namespace, stop: threading.Event) -> int:
    try:
        colors = [parse_color(value) for value in args.colors]
    except ValueError as e:
        print(str(e))
        return 1

    hue = _client(args)
    logger.info(f"Running preset '{args.name}', interrupt to stop")
    interval = args.interval
    if args.name == "colors":
        cycle_thru_color_list(hue, colors, 1 if interval is None else interval, stop)
    elif args.name == "hues":
        cycle_thru_hue_range(hue, 1 if interval is None else interval, stop)
    elif args.name == "police":
        police_lights(hue, 0.1 if interval is None else interval, stop)
    else:
        strobe(hue, stop)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Control Philips Hue lights")
    parser.add_argument("--ip", default=None, help="Bridge IP (skips discovery)")
    parser.add_argument("--username", default=None, help="Bridge username")
    subparsers = parser.add_subparsers(dest="command", required=True)

    parser_discover = subparsers.add_parser("discover", help="Find the bridge IP")
    parser_discover.add_argument("--timeout", type=float, default=None)

    parser_pair = subparsers.add_parser("pair", help="Authorize this client")
    parser_pair.add_argument(
        "--env-file", default=None, help="Write bridge IP and username to this file"
    )

    subparsers.add_parser("lights", help="Print the state of all lights")

    for name in ("on", "off"):
        parser_switch = subparsers.add_parser(name, help=f"Switch lights {name}")
        parser_switch.add_argument("light", help="Light id or 'all'")

    parser_color = subparsers.add_parser("color", help="Set a light color")
    parser_color.add_argument("light", help="Light id or 'all'")
    parser_color.add_argument("color", help="Color name or #rrggbb")
    parser_color.add_argument(
        "--bright", action="store_true", help="Use full brightness"
    )

    parser_preset = subparsers.add_parser("preset", help="Run a looping effect")
    parser_preset.add_argument(
        "name", choices=["colors", "hues", "police", "strobe"]
    )
    parser_preset.add_argument("--interval", type=float, default=None)
    parser_preset.add_argument(
        "--colors", nargs="+", default=["red", "green", "blue"]
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(config.log_level)

    try:
        if args.command == "discover":
            return command_discover(args)
        if args.command == "pair":
            return command_pair(args)
        if args.command == "lights":
            return command_lights(args)
        if args.command in ("on", "off"):
            return command_switch(args)
        if args.command == "color":
            return command_color(args)
        stop = threading.Event()
        setup_signal_handlers(stop)
        return command_preset(args, stop)
    except HueError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
