# ABOUTME: End-to-end integration tests with mocked Open-Meteo responses
# ABOUTME: Validates full flow from HTTP fetch through scoring, tides and serialization

import random
from datetime import datetime, timedelta
from unittest.mock import Mock, patch

from surfcast.cache.manager import CacheManager
from surfcast.orchestrator import SurfReportOrchestrator
from surfcast.tides.synthesizer import TideSynthesizer


def create_open_meteo_mock_responses(wave_height, wave_period, wind_speed, wind_direction, hours=24):
    """Create mock responses for the marine call followed by the weather call"""
    times = [
        (datetime(2025, 6, 14) + timedelta(hours=h)).strftime("%Y-%m-%dT%H:%M") for h in range(hours)
    ]

    marine_response = Mock()
    marine_response.json.return_value = {
        "hourly": {
            "time": times,
            "wave_height": [wave_height] * hours,
            "wave_direction": [225.0] * hours,
            "wave_period": [wave_period] * hours,
            "wind_wave_height": [0.0] * hours,
            "wind_wave_direction": [0.0] * hours,
            "wind_wave_period": [0.0] * hours,
            "swell_wave_height": [wave_height] * hours,
            "swell_wave_direction": [225.0] * hours,
            "swell_wave_period": [wave_period] * hours,
        }
    }
    marine_response.status_code = 200
    marine_response.raise_for_status = Mock()

    weather_response = Mock()
    weather_response.json.return_value = {
        "hourly": {
            "time": times,
            "wind_speed_10m": [wind_speed] * hours,
            "wind_direction_10m": [wind_direction] * hours,
            "temperature_2m": [12.0] * hours,
        }
    }
    weather_response.status_code = 200
    weather_response.raise_for_status = Mock()

    return [marine_response, weather_response]


def create_orchestrator():
    return SurfReportOrchestrator(
        synthesizer=TideSynthesizer(rng=random.Random(8)),
        cache=CacheManager(),
    )


class TestEndToEndFlow:
    """End-to-end tests with mocked HTTP"""

    @patch("requests.get")
    def test_clean_groundswell_rates_well(self, mock_get):
        """Head-high 14s groundswell with light northerly wind at Bells"""
        mock_get.side_effect = create_open_meteo_mock_responses(2.0, 14.0, 8.0, 0.0)

        conditions = create_orchestrator().get_current_conditions(1)

        assert conditions is not None
        assert conditions.swell.quality.value == "excellent"
        assert conditions.surf_score.overall_score >= 7
        assert conditions.rating == "excellent"
        assert conditions.secondary_swell is None

    @patch("requests.get")
    def test_blown_out_wind_swell_rates_poorly(self, mock_get):
        """Small short-period swell with strong onshore wind"""
        mock_get.side_effect = create_open_meteo_mock_responses(0.3, 5.0, 40.0, 225.0)

        conditions = create_orchestrator().get_current_conditions(1)

        assert conditions.swell.quality.value == "poor"
        assert conditions.surf_score.overall_score < 4
        assert conditions.rating == "poor"

    @patch("requests.get")
    def test_serialized_conditions_are_complete(self, mock_get):
        mock_get.side_effect = create_open_meteo_mock_responses(1.5, 12.0, 12.0, 20.0)

        data = create_orchestrator().get_current_conditions(5).to_dict()

        assert data["spotId"] == 5
        assert data["waveDirection"] == "SW"
        assert data["windDirection"] == "NNE"
        assert data["swellType"] == "ground_swell"
        assert data["secondarySwellDominance"] == 0.0
        assert data["isStale"] is False
        assert 1.0 <= data["surfScore"] <= 10.0

    @patch("requests.get")
    def test_outage_after_success_serves_stale_data(self, mock_get):
        import requests

        mock_get.side_effect = create_open_meteo_mock_responses(1.5, 12.0, 12.0, 20.0)
        orchestrator = create_orchestrator()
        orchestrator.get_current_conditions(3)

        orchestrator.cache._conditions[3]["fetched_at"] -= timedelta(hours=1)
        mock_get.side_effect = requests.ConnectionError("marine API down")

        stale = orchestrator.get_current_conditions(3)

        assert stale.is_stale
        assert stale.to_dict()["isStale"] is True
