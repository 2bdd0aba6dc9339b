"""Looping light effects built on the client's write operations.

Every loop runs until ``stop`` is set. Without a stop event it runs until the
process is terminated. Write failures are not caught and end the loop.
"""

import logging
import threading
from collections import deque
from typing import Any, Iterable, Optional

from .color import BLUE, RED
from .config import HUE_MAX, HUE_STEP

logger = logging.getLogger(__name__)


def _stop_event(stop: Optional[threading.Event]) -> threading.Event:
    return stop if stop is not None else threading.Event()


def cycle_thru_color_list(
    hue,
    colors: Iterable[Any],
    interval: float = 1,
    stop: Optional[threading.Event] = None,
) -> None:
    """Show each color in turn on all lights, at full brightness."""
    stop = _stop_event(stop)
    queue = deque(colors)
    if not queue:
        raise ValueError("At least one color is required")

    logger.info(f"Cycling {len(queue)} colors every {interval}s")
    while not stop.is_set():
        hue.all_lights.set_bright_color(queue[0])
        queue.rotate(-1)
        stop.wait(interval)


def cycle_thru_hue_range(
    hue, interval: float = 1, stop: Optional[threading.Event] = None
) -> None:
    """Step the raw hue of all lights from 0 to 65535, wrapping around."""
    stop = _stop_event(stop)
    logger.info(f"Cycling hue range every {interval}s")
    while not stop.is_set():
        for value in range(0, HUE_MAX + 1, HUE_STEP):
            if stop.is_set():
                return
            hue.all_lights.write({"hue": value})
            stop.wait(interval)


def police_lights(
    hue, interval: float = 0.1, stop: Optional[threading.Event] = None
) -> None:
    """Alternate blue and red with hard switches."""
    stop = _stop_event(stop)
    colors = deque([BLUE, RED])
    while not stop.is_set():
        hue.all_lights.set_bright_color(colors[0], {"transitiontime": 0})
        colors.rotate(-1)
        stop.wait(interval)


def strobe(hue, stop: Optional[threading.Event] = None) -> None:
    """Darken all lights, then flash them as fast as writes are admitted."""
    stop = _stop_event(stop)
    hue.all_lights.write({"bri": 0})
    while not stop.is_set():
        hue.all_lights.write({"bri": 255, "alert": "select", "transitiontime": 0})


class Presets:
    """The preset loops bound to one client."""

    def __init__(self, hue):
        self._hue = hue

    def cycle_thru_color_list(self, colors, interval=1, stop=None):
        cycle_thru_color_list(self._hue, colors, interval, stop)

    def cycle_thru_hue_range(self, interval=1, stop=None):
        cycle_thru_hue_range(self._hue, interval, stop)

    def police_lights(self, interval=0.1, stop=None):
        police_lights(self._hue, interval, stop)

    def strobe(self, stop=None):
        strobe(self._hue, stop)
