# ABOUTME: Tests for the Open-Meteo marine and weather client
# ABOUTME: Uses mocked responses to avoid real API calls in tests

from unittest.mock import patch

import pytest
import requests

from surfcast.errors import UpstreamDataError
from surfcast.metrics.models import RawObservation
from surfcast.weather.sources import OpenMeteoClient

MARINE_RESPONSE = {
    "latitude": -38.37,
    "longitude": 144.29,
    "hourly": {
        "time": ["2025-06-14T00:00", "2025-06-14T01:00"],
        "wave_height": [2.1, 2.3],
        "wave_direction": [225.0, 360.0],
        "wave_period": [13.5, 14.0],
        "wind_wave_height": [0.4, 0.0],
        "wind_wave_direction": [200.0, 210.0],
        "wind_wave_period": [4.5, 0.0],
        "swell_wave_height": [1.9, 2.0],
        "swell_wave_direction": [230.0, 232.0],
        "swell_wave_period": [14.2, 14.6],
    },
}

WEATHER_RESPONSE = {
    "hourly": {
        "time": ["2025-06-14T00:00", "2025-06-14T01:00"],
        "wind_speed_10m": [8.0, 11.5],
        "wind_direction_10m": [20.0, 35.0],
        "temperature_2m": [11.2, None],
    },
}


def _fetch(client=None):
    with patch("requests.get") as mock_get:
        mock_get.return_value.status_code = 200
        mock_get.return_value.json.side_effect = [MARINE_RESPONSE, WEATHER_RESPONSE]

        client = client or OpenMeteoClient()
        return client.fetch_hourly(-38.373, 144.289), mock_get


def test_fetch_merges_marine_and_weather_hourly():
    hourly, _ = _fetch()

    assert hourly["wave_height"] == [2.1, 2.3]
    assert hourly["wind_speed_10m"] == [8.0, 11.5]
    assert hourly["temperature_2m"] == [11.2, None]


def test_fetch_requests_both_endpoints_with_timezone_and_timeout():
    client = OpenMeteoClient(timeout=5)
    _, mock_get = _fetch(client)

    assert mock_get.call_count == 2
    marine_call, weather_call = mock_get.call_args_list
    assert marine_call.args[0] == client.marine_url
    assert weather_call.args[0] == client.weather_url
    assert marine_call.kwargs["params"]["timezone"] == "Australia/Melbourne"
    assert "swell_wave_period" in marine_call.kwargs["params"]["hourly"]
    assert "wind_speed_10m" in weather_call.kwargs["params"]["hourly"]
    assert marine_call.kwargs["timeout"] == 5


def test_fetch_raises_on_http_error():
    with patch("requests.get") as mock_get:
        mock_get.return_value.raise_for_status.side_effect = requests.HTTPError("503")

        with pytest.raises(requests.HTTPError):
            OpenMeteoClient().fetch_hourly(-38.373, 144.289)


def test_fetch_raises_when_hourly_block_missing():
    with patch("requests.get") as mock_get:
        mock_get.return_value.json.side_effect = [{"error": True}, WEATHER_RESPONSE]

        with pytest.raises(UpstreamDataError):
            OpenMeteoClient().fetch_hourly(-38.373, 144.289)


class TestParseObservation:
    """Tests for turning one hour of data into a RawObservation"""

    def test_parses_full_hour(self):
        hourly, _ = _fetch()
        observation = OpenMeteoClient().parse_observation(hourly, 0)

        assert isinstance(observation, RawObservation)
        assert observation.wave_height == 2.1
        assert observation.wave_period == 13.5
        assert observation.wind_speed == 8.0
        assert observation.air_temp == 11.2
        assert observation.swell_wave_height == 1.9
        assert observation.wind_wave_period == 4.5
        assert observation.timestamp == "2025-06-14T00:00"

    def test_normalizes_360_and_treats_zero_period_as_absent(self):
        hourly, _ = _fetch()
        observation = OpenMeteoClient().parse_observation(hourly, 1)

        assert observation.wave_direction_deg == 0
        assert observation.wind_wave_period is None

    def test_missing_temperature_uses_default(self):
        hourly, _ = _fetch()
        observation = OpenMeteoClient().parse_observation(hourly, 1)

        assert observation.air_temp == 20.0

    def test_missing_required_field_raises(self):
        hourly = {"time": ["2025-06-14T00:00"], "wave_height": [1.0]}

        with pytest.raises(UpstreamDataError):
            OpenMeteoClient().parse_observation(hourly, 0)

    def test_null_required_value_raises(self):
        hourly, _ = _fetch()
        hourly = dict(hourly, wave_period=[None, None])

        with pytest.raises(UpstreamDataError):
            OpenMeteoClient().parse_observation(hourly, 0)

    def test_malformed_value_raises_upstream_error(self):
        hourly, _ = _fetch()
        hourly = dict(hourly, wave_height=[-3.0, 1.0])

        with pytest.raises(UpstreamDataError):
            OpenMeteoClient().parse_observation(hourly, 0)
