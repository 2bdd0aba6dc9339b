"""Philips Hue client - discovery, pairing, light control and effects."""

from .broadcast import AllLights
from .color import BLUE, GREEN, RED, WHITE, HSLColor, RGBColor
from .config import HueConfig
from .discovery import discover_ip
from .exceptions import (
    HueBroadcastError,
    HueConnectionError,
    HueDiscoveryError,
    HueError,
    HueProtocolError,
    HueTimeoutError,
    HueUnsupportedMethodError,
)
from .hue_client import HueClient, HueRateLimiter
from .models import LightState
from .presets import Presets

__version__ = "1.0.0"
__description__ = "Client for controlling Philips Hue lights over the local bridge API"

__all__ = [
    "AllLights",
    "HueClient",
    "HueConfig",
    "HueRateLimiter",
    "HSLColor",
    "RGBColor",
    "LightState",
    "Presets",
    "discover_ip",
    "RED",
    "GREEN",
    "BLUE",
    "WHITE",
    "HueError",
    "HueBroadcastError",
    "HueConnectionError",
    "HueDiscoveryError",
    "HueProtocolError",
    "HueTimeoutError",
    "HueUnsupportedMethodError",
]
