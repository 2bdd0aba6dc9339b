"""Hue bridge client with client-side rate limiting."""

import hashlib
import logging
import socket
import threading
import time
from collections import deque
from contextlib import contextmanager
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple

import httpx

from .broadcast import AllLights
from .color import as_hsl
from .config import HueConfig, config
from .discovery import discover_ip
from .exceptions import (
    HueConnectionError,
    HueError,
    HueProtocolError,
    HueTimeoutError,
    HueUnsupportedMethodError,
)
from .models import state_payload
from .presets import Presets

logger = logging.getLogger(__name__)

__all__ = [
    "HueClient",
    "HueError",
    "HueConnectionError",
    "HueProtocolError",
    "HueRateLimiter",
    "HueTimeoutError",
    "HueUnsupportedMethodError",
    "default_username",
]

_METHODS = ("GET", "POST", "PUT")


def default_username() -> str:
    """Derive a stable username from the SHA1 hex digest of the hostname."""
    hostname = socket.gethostname().strip()
    return hashlib.sha1(hostname.encode("utf-8")).hexdigest()


class HueRateLimiter:
    """Sliding window limiter: at most ``max_requests`` admissions per ``window``.

    Callers block in ``admit()``, re-checking every ``poll_interval`` seconds,
    until an earlier admission has aged out of the window. An admission stays
    counted until it is strictly older than ``window``, so no closed interval
    of that length ever holds more than ``max_requests``.
    """

    def __init__(
        self,
        max_requests: Optional[int] = None,
        window: Optional[float] = None,
        poll_interval: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.max_requests = config.rate_limit if max_requests is None else max_requests
        self.window = config.rate_window if window is None else window
        self.poll_interval = (
            config.rate_poll_interval if poll_interval is None else poll_interval
        )
        if self.max_requests < 1 or self.window <= 0 or self.poll_interval <= 0:
            raise ValueError("Rate limit, window and poll interval must be positive")
        self._clock = clock
        self._sleep = sleep
        self._timestamps: Deque[float] = deque()
        self._lock = threading.Lock()

    @property
    def timestamps(self) -> Tuple[float, ...]:
        """Admission times still inside the window as of the last check."""
        with self._lock:
            return tuple(self._timestamps)

    def _prune(self, now: float) -> None:
        while self._timestamps and now - self._timestamps[0] > self.window:
            self._timestamps.popleft()

    def admit(self) -> None:
        """Block until a write may be sent, then record it."""
        with self._lock:
            waited = False
            while True:
                now = self._clock()
                self._prune(now)
                if len(self._timestamps) < self.max_requests:
                    self._timestamps.append(now)
                    return
                if not waited:
                    logger.debug(
                        f"Rate limit of {self.max_requests}/{self.window}s reached, waiting"
                    )
                    waited = True
                self._sleep(self.poll_interval)


class HueClient:
    """Client for a single Hue bridge.

    ``ip`` falls back to the configured bridge IP and then to network
    discovery. ``username`` falls back to the configured username and then to
    a hash of the local hostname. Both are fixed once the client exists.

    Used as a context manager the client keeps one HTTP connection pool open;
    otherwise each request opens its own.
    """

    def __init__(
        self,
        ip: Optional[str] = None,
        client: Optional[str] = None,
        username: Optional[str] = None,
        *,
        settings: Optional[HueConfig] = None,
        rate_limiter: Optional[HueRateLimiter] = None,
    ):
        self._settings = settings or config
        self._ip = ip or self._settings.bridge_ip or discover_ip(
            self._settings.discovery_timeout, self._settings.timeout
        )
        self._client_name = client or self._settings.client_name
        self._username = username or self._settings.username or default_username()
        self.timeout = httpx.Timeout(self._settings.timeout)
        self.rate_limiter = rate_limiter or HueRateLimiter(
            max_requests=self._settings.rate_limit,
            window=self._settings.rate_window,
            poll_interval=self._settings.rate_poll_interval,
        )
        self._state: Optional[Dict[str, Any]] = None
        self._client: Optional[httpx.Client] = None

    def __enter__(self):
        self._client = httpx.Client(timeout=self.timeout)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._client:
            self._client.close()
            self._client = None

    def __repr__(self) -> str:
        return f"HueClient(ip={self._ip!r}, client={self._client_name!r})"

    @property
    def ip(self) -> str:
        return self._ip

    @property
    def client_name(self) -> str:
        return self._client_name

    @property
    def username(self) -> str:
        return self._username

    @property
    def base_url(self) -> str:
        return f"http://{self._ip}/api/{self._username}"

    @property
    def last_state(self) -> Optional[Dict[str, Any]]:
        """Snapshot from the most recent ``poll_state()``, if any."""
        return self._state

    @contextmanager
    def _get_client(self):
        """Get HTTP client (context manager for standalone usage)."""
        if self._client:
            yield self._client
        else:
            with httpx.Client(timeout=self.timeout) as client:
                yield client

    def _request(self, method: str, url: str, body: Optional[Dict[str, Any]] = None) -> Any:
        verb = method.upper()
        if verb not in _METHODS:
            raise HueUnsupportedMethodError(f"Unsupported method: {method}")

        logger.debug(f"{verb} {url} {body if body is not None else ''}")
        try:
            with self._get_client() as client:
                if verb == "GET":
                    response = client.get(url)
                elif verb == "POST":
                    response = client.post(url, json=body or {})
                else:
                    response = client.put(url, json=body or {})
        except httpx.TimeoutException as e:
            raise HueTimeoutError(f"Request to {url} timed out: {e}") from e
        except httpx.RequestError as e:
            raise HueConnectionError(f"Request to {url} failed: {e}") from e

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise HueProtocolError(
                f"Bridge answered {response.status_code} for {verb} {url}"
            ) from e

        try:
            return response.json()
        except ValueError as e:
            raise HueProtocolError(f"Bridge answered with invalid JSON for {url}") from e

    def request(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        """Make an authorized request relative to ``/api/<username>``.

        ``path`` must include its leading slash.
        """
        return self._request(method, f"{self.base_url}{path}", body)

    def authorize(self) -> Any:
        """Register this client/username pair with the bridge.

        Call once, press the link button on the bridge, then call again; the
        second response carries the success entry. No waiting is done here.
        """
        result = self._request(
            "POST",
            f"http://{self._ip}/api/",
            {"devicetype": self._client_name, "username": self._username},
        )
        logger.info(f"Authorization response from {self._ip}: {result}")
        return result

    def poll_state(self) -> Dict[str, Any]:
        """Fetch the full bridge state and cache it."""
        state = self.request("GET", "/")
        if not isinstance(state, dict) or not isinstance(state.get("lights"), dict):
            logger.warning(f"Bridge at {self._ip} returned no lights: {state}")
            raise HueProtocolError(f"Bridge state has no lights collection: {state}")
        self._state = state
        return state

    def lights(self) -> Dict[str, Any]:
        """Lights from the cached state, polling first if nothing is cached."""
        if self._state is None:
            self.poll_state()
        return self._state["lights"]

    def light_ids(self) -> List[str]:
        return list(self.lights())

    def each_light(self, fn: Callable[[str], Any]) -> None:
        """Call ``fn`` with every known light id."""
        for light_id in self.light_ids():
            fn(light_id)

    @property
    def all_lights(self) -> AllLights:
        """Broadcast wrapper: ``hue.all_lights.set_bright_color(BLUE)``."""
        return AllLights(self)

    @property
    def preset(self) -> Presets:
        """Effect loops bound to this client: ``hue.preset.police_lights()``."""
        return Presets(self)

    def write(self, light: Any, state: Any) -> Any:
        """Write a partial state to a light.

        ``state`` is a ``LightState`` or a mapping of bridge keys (``on``,
        ``bri``, ``sat``, ``hue``, ``alert``, ``transitiontime``). The parsed
        per-field success/error list is returned unchanged.
        """
        self.rate_limiter.admit()
        return self.request("PUT", f"/lights/{light}/state", state_payload(state))

    def on(self, light: Any) -> Any:
        return self.write(light, {"on": True})

    def off(self, light: Any) -> Any:
        return self.write(light, {"on": False})

    def set_color(self, light: Any, color: Any, overrides: Any = None) -> Any:
        """Set a light to ``color`` (anything implementing ``to_hsl()``).

        Lightness maps to ``bri``, saturation to ``sat`` and hue to
        ``hue`` (degrees * 182). Color fields win over ``overrides``.
        """
        hsl = as_hsl(color)
        payload = state_payload(overrides)
        payload.update(
            bri=int(hsl.l * 255),
            sat=int(hsl.s * 255),
            hue=int(hsl.h * 360 * 182),
        )
        return self.write(light, payload)

    def set_bright_color(self, light: Any, color: Any, overrides: Any = None) -> Any:
        """Like ``set_color`` but at full brightness (lightness 1.0)."""
        return self.set_color(light, as_hsl(color).with_lightness(1.0), overrides)
