# ABOUTME: Application configuration plus the tunable thresholds behind scoring and tides
# ABOUTME: Environment-driven settings live on Config; algorithm constants live in frozen dataclasses

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration"""

    # Region: Victorian coastline (Surf Coast, Bellarine, Port Phillip, Mornington)
    REGION_NAME = "Victoria, AU"
    TIMEZONE = os.getenv("TIMEZONE", "Australia/Melbourne")

    # Open-Meteo endpoints (no API key required)
    OPEN_METEO_MARINE_URL = os.getenv(
        "OPEN_METEO_MARINE_URL", "https://marine-api.open-meteo.com/v1/marine"
    )
    OPEN_METEO_WEATHER_URL = os.getenv(
        "OPEN_METEO_WEATHER_URL", "https://api.open-meteo.com/v1/forecast"
    )
    FORECAST_DAYS = int(os.getenv("FORECAST_DAYS", "7"))
    HTTP_TIMEOUT_SECONDS = int(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))

    # Caching
    CONDITIONS_CACHE_TTL_SECONDS = int(os.getenv("CONDITIONS_CACHE_TTL_SECONDS", "900"))  # 15 minutes
    TIDE_CACHE_TTL_HOURS = int(os.getenv("TIDE_CACHE_TTL_HOURS", "24"))

    # Marine API doesn't always give temperatures; these are typical Victorian values
    DEFAULT_AIR_TEMP_C = float(os.getenv("DEFAULT_AIR_TEMP_C", "20"))
    DEFAULT_WATER_TEMP_C = float(os.getenv("DEFAULT_WATER_TEMP_C", "18"))

    # Debug mode
    DEBUG = os.getenv("DEBUG", "false").lower() == "true"


@dataclass(frozen=True)
class ScoringConfig:
    """Thresholds and weights used by the converters, classifier and score composer"""

    # Swell height -> breaking height attenuation for the Victorian coast
    shoaling_factor: float = 0.85

    # Confidence heuristic (percent): rises with height until saturation
    confidence_min: float = 70.0
    confidence_max: float = 95.0
    confidence_saturation_height: float = 2.0  # meters

    # Period thresholds (seconds)
    excellent_period: float = 13.0
    good_period: float = 10.0
    fair_period: float = 8.0

    # Wave height bands (meters, breaking)
    flat_height: float = 0.3
    small_height: float = 0.6
    sweet_spot_min: float = 1.0
    sweet_spot_max: float = 2.5
    large_height: float = 3.5
    chaotic_height: float = 5.0

    # Wind (km/h)
    glassy_wind: float = 5.0
    light_wind: float = 10.0
    moderate_wind: float = 15.0
    fresh_wind: float = 20.0
    strong_wind: float = 25.0
    offshore_min_angle: float = 135.0
    onshore_max_angle: float = 45.0

    # Tide bands (meters)
    low_tide_max: float = 1.5
    high_tide_min: float = 2.5
    neutral_tide_score: float = 5.5

    # Consistency ramp (period seconds -> score)
    consistency_min_period: float = 6.0
    consistency_max_period: float = 16.0
    consistency_min_score: float = 2.5
    consistency_max_score: float = 9.5

    # Overall weights; wave and wind dominate, tide is a modifier
    wave_weight: float = 0.4
    wind_weight: float = 0.3
    tide_weight: float = 0.2
    consistency_weight: float = 0.1

    # Energy and multi-swell analysis
    energy_scale: float = 1.0
    negligible_energy_ratio: float = 0.3
    constructive_max_angle: float = 45.0
    destructive_min_angle: float = 135.0
    comparable_period_ratio: float = 0.6


@dataclass(frozen=True)
class TideModelConfig:
    """Harmonic constants for the synthesized Victorian tide curve"""

    # Centered on the 1.5-2.5 m mid band so low, mid and high tides all occur
    base_height: float = 2.0  # meters above chart datum
    m2_period_hours: float = 12.4206  # principal lunar semidiurnal
    m2_amplitude: float = 1.1
    s2_period_hours: float = 12.0  # principal solar semidiurnal
    s2_amplitude: float = 0.35
    spring_neap_amplitude: float = 0.3
    lunar_cycle_days: float = 29.5
    min_height: float = 0.05

    # High/low events are the curve's turning points, nudged by bounded jitter
    event_jitter_minutes: int = 20
    event_height_jitter: float = 0.05  # meters
    event_search_margin_minutes: int = 180
