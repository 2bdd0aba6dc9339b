"""Apply one light operation to every light known to a client."""

import logging
from typing import Any, Callable, Dict

from .exceptions import HueBroadcastError, HueError

logger = logging.getLogger(__name__)


class AllLights:
    """Forward a client operation to each light id, prepending the id.

    ``hue.all_lights.write({"hue": 0})`` is ``hue.write(id, {"hue": 0})`` for
    every id in ``hue.lights()``. Results are discarded. By default the first
    failure propagates and the remaining lights are skipped; with
    ``continue_on_error`` every light is tried and the failures are raised
    together as ``HueBroadcastError``.
    """

    def __init__(self, hue, continue_on_error: bool = False):
        self._hue = hue
        self.continue_on_error = continue_on_error

    def each(self, fn: Callable[[str], Any]) -> None:
        """Call ``fn(light_id)`` for every light."""
        failures: Dict[str, Exception] = {}
        for light_id in self._hue.light_ids():
            try:
                fn(light_id)
            except HueError as e:
                if not self.continue_on_error:
                    raise
                logger.error(f"Failed to update light {light_id}: {e}")
                failures[light_id] = e
        if failures:
            raise HueBroadcastError(failures)

    def write(self, state: Any) -> None:
        self.each(lambda light_id: self._hue.write(light_id, state))

    def on(self) -> None:
        self.each(self._hue.on)

    def off(self) -> None:
        self.each(self._hue.off)

    def set_color(self, color: Any, overrides: Any = None) -> None:
        self.each(lambda light_id: self._hue.set_color(light_id, color, overrides))

    def set_bright_color(self, color: Any, overrides: Any = None) -> None:
        self.each(
            lambda light_id: self._hue.set_bright_color(light_id, color, overrides)
        )
