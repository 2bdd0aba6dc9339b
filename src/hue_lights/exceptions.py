"""Exceptions raised by the Hue client."""

from typing import Dict


class HueError(Exception):
    """Base exception for all Hue-related errors."""

    pass


class HueDiscoveryError(HueError):
    """No Hue bridge answered on the local network."""

    pass


class HueProtocolError(HueError):
    """The bridge answered with an unexpected or unsuccessful response."""

    pass


class HueConnectionError(HueError):
    """Network/connection related errors."""

    pass


class HueTimeoutError(HueConnectionError):
    """Request timeout errors."""

    pass


class HueUnsupportedMethodError(HueError, ValueError):
    """An HTTP verb the bridge API does not use was requested."""

    pass


class HueBroadcastError(HueError):
    """One or more lights failed during a broadcast."""

    def __init__(self, failures: Dict[str, Exception]):
        self.failures = dict(failures)
        ids = ", ".join(str(light_id) for light_id in self.failures)
        super().__init__(f"Broadcast failed for lights: {ids}")
