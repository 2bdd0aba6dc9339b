"""Unit tests for broadcasting operations to all lights."""

import pytest
from unittest.mock import MagicMock

from hue_lights.broadcast import AllLights
from hue_lights.color import BLUE
from hue_lights.exceptions import HueBroadcastError, HueConnectionError


@pytest.fixture
def hue():
    """Client double with three lights."""
    client = MagicMock()
    client.light_ids.return_value = ["1", "2", "3"]
    return client


class TestAllLights:
    """Test forwarding with the light id prepended."""

    def test_write(self, hue):
        result = AllLights(hue).write({"hue": 0, "bri": 200})

        assert result is None
        assert [c.args for c in hue.write.call_args_list] == [
            ("1", {"hue": 0, "bri": 200}),
            ("2", {"hue": 0, "bri": 200}),
            ("3", {"hue": 0, "bri": 200}),
        ]

    def test_on_off(self, hue):
        lights = AllLights(hue)
        lights.on()
        lights.off()

        assert [c.args for c in hue.on.call_args_list] == [("1",), ("2",), ("3",)]
        assert [c.args for c in hue.off.call_args_list] == [("1",), ("2",), ("3",)]

    def test_set_color(self, hue):
        AllLights(hue).set_color(BLUE, {"on": True})

        assert [c.args for c in hue.set_color.call_args_list] == [
            ("1", BLUE, {"on": True}),
            ("2", BLUE, {"on": True}),
            ("3", BLUE, {"on": True}),
        ]

    def test_set_bright_color(self, hue):
        AllLights(hue).set_bright_color(BLUE, {"transitiontime": 0})

        assert hue.set_bright_color.call_count == 3
        hue.set_bright_color.assert_called_with("3", BLUE, {"transitiontime": 0})

    def test_each(self, hue):
        seen = []
        AllLights(hue).each(seen.append)

        assert seen == ["1", "2", "3"]

    def test_first_failure_stops_broadcast(self, hue):
        hue.on.side_effect = [None, HueConnectionError("light 2 unreachable"), None]

        with pytest.raises(HueConnectionError):
            AllLights(hue).on()
        assert hue.on.call_count == 2

    def test_continue_on_error_collects_failures(self, hue):
        error = HueConnectionError("light 2 unreachable")
        hue.on.side_effect = [None, error, None]

        with pytest.raises(HueBroadcastError) as excinfo:
            AllLights(hue, continue_on_error=True).on()

        assert hue.on.call_count == 3
        assert excinfo.value.failures == {"2": error}
        assert "2" in str(excinfo.value)

    def test_non_hue_errors_propagate(self, hue):
        hue.write.side_effect = KeyError("bad")

        with pytest.raises(KeyError):
            AllLights(hue, continue_on_error=True).write({"on": True})
        assert hue.write.call_count == 1

    def test_client_all_lights(self, hue_client, mock_http_client):
        mock_http_client.get.return_value.json.return_value = {"lights": {"1": {}, "4": {}}}

        hue_client.all_lights.on()

        urls = sorted(c.args[0] for c in mock_http_client.put.call_args_list)
        assert urls == [
            f"{hue_client.base_url}/lights/1/state",
            f"{hue_client.base_url}/lights/4/state",
        ]
