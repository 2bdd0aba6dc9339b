"""Pytest configuration and fixtures for Hue client tests."""

import pytest
from unittest.mock import MagicMock, patch

import httpx

from hue_lights.config import HueConfig
from hue_lights.hue_client import HueClient, HueRateLimiter


BRIDGE_IP = "192.168.1.64"
USERNAME = "0123456789abcdef0123456789abcdef01234567"


@pytest.fixture
def mock_hue_response_success():
    """Mock successful Hue API write response."""
    return [{"success": {"/lights/1/state/on": True}}]


@pytest.fixture
def mock_hue_response_error():
    """Mock error Hue API write response."""
    return [{
        "error": {
            "type": 3,
            "address": "/lights/99",
            "description": "resource, /lights/99, not available"
        }
    }]


@pytest.fixture
def mock_bridge_state():
    """Mock full bridge state as returned by GET /api/<username>/."""
    return {
        "lights": {
            "1": {
                "name": "Living Room Light",
                "state": {"on": True, "bri": 200, "hue": 0, "sat": 254, "reachable": True},
                "type": "Extended color light"
            },
            "2": {
                "name": "Kitchen Light",
                "state": {"on": False, "bri": 100, "hue": 46920, "sat": 254, "reachable": True},
                "type": "Extended color light"
            }
        },
        "groups": {},
        "config": {"name": "Test Bridge"}
    }


@pytest.fixture
def settings():
    """Configuration independent of the test environment."""
    return HueConfig()


@pytest.fixture
def rate_limiter():
    """Rate limiter that never blocks in tests."""
    return HueRateLimiter(max_requests=1000, window=1.0, poll_interval=0.01)


@pytest.fixture
def hue_client(settings, rate_limiter):
    """Client pointed at a fixed bridge, no discovery involved."""
    return HueClient(
        ip=BRIDGE_IP,
        username=USERNAME,
        settings=settings,
        rate_limiter=rate_limiter,
    )


def make_response(payload, status_code=200):
    """Build a mock httpx.Response carrying ``payload`` as JSON."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "error", request=MagicMock(), response=response
        )
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def mock_http_client(mock_hue_response_success):
    """Patch httpx.Client; yields the client object used inside ``with``."""
    with patch('hue_lights.hue_client.httpx.Client') as mock_client_class:
        mock_client = MagicMock()
        mock_client.get.return_value = make_response({"lights": {}})
        mock_client.post.return_value = make_response(mock_hue_response_success)
        mock_client.put.return_value = make_response(mock_hue_response_success)
        mock_client_class.return_value.__enter__.return_value = mock_client
        mock_client_class.return_value.__exit__.return_value = None
        yield mock_client
