# ABOUTME: Tests for application configuration and scoring thresholds
# ABOUTME: Validates Victorian defaults, env overrides and the tunable scoring and tide constants

import os
from dataclasses import FrozenInstanceError
from unittest.mock import patch

import pytest

from surfcast.config import Config, ScoringConfig, TideModelConfig


def test_config_has_victorian_region():
    """Region and timezone default to Victoria"""
    assert Config.REGION_NAME == "Victoria, AU"
    assert Config.TIMEZONE == "Australia/Melbourne"


def test_config_has_open_meteo_endpoints():
    assert Config.OPEN_METEO_MARINE_URL.startswith("https://marine-api.open-meteo.com")
    assert Config.OPEN_METEO_WEATHER_URL.startswith("https://api.open-meteo.com")


def test_config_has_cache_ttls():
    """Conditions refresh within the hour; tides are kept for a day"""
    assert 0 < Config.CONDITIONS_CACHE_TTL_SECONDS <= 3600
    assert Config.TIDE_CACHE_TTL_HOURS >= 1


def test_env_overrides_forecast_days():
    with patch.dict(os.environ, {"FORECAST_DAYS": "3", "HTTP_TIMEOUT_SECONDS": "4"}):
        from importlib import reload
        from surfcast import config
        reload(config)
        assert config.Config.FORECAST_DAYS == 3
        assert config.Config.HTTP_TIMEOUT_SECONDS == 4

    from importlib import reload
    from surfcast import config
    reload(config)


class TestScoringConfig:
    """Tests for scoring thresholds and weights"""

    def test_period_thresholds(self):
        config = ScoringConfig()
        assert config.excellent_period == 13.0
        assert config.good_period == 10.0
        assert config.fair_period == 8.0

    def test_weights_sum_to_one(self):
        config = ScoringConfig()
        total = config.wave_weight + config.wind_weight + config.tide_weight + config.consistency_weight
        assert total == pytest.approx(1.0)

    def test_wave_and_wind_outweigh_tide(self):
        config = ScoringConfig()
        assert config.wave_weight > config.tide_weight
        assert config.wind_weight > config.tide_weight

    def test_is_immutable(self):
        with pytest.raises(FrozenInstanceError):
            ScoringConfig().shoaling_factor = 1.0


class TestTideModelConfig:
    """Tests for the harmonic tide constants"""

    def test_curve_range_covers_tide_score_bands(self):
        """Spring tides reach below the low band and above the high band"""
        tide = TideModelConfig()
        scoring = ScoringConfig()
        spring_swing = (1 + tide.spring_neap_amplitude) * (tide.m2_amplitude + tide.s2_amplitude)

        assert tide.base_height - spring_swing < scoring.low_tide_max
        assert tide.base_height + spring_swing > scoring.high_tide_min
        assert scoring.low_tide_max <= tide.base_height <= scoring.high_tide_min

    def test_event_jitter_is_small_against_half_a_tide_cycle(self):
        tide = TideModelConfig()
        assert tide.event_jitter_minutes < tide.m2_period_hours * 60 / 4
        assert tide.event_search_margin_minutes > tide.event_jitter_minutes
