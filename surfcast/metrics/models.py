# ABOUTME: Value types produced by the surf scoring pipeline
# ABOUTME: Observations, swell components, classifications and score breakdowns

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from surfcast.errors import InvalidObservationError


class SwellType(str, Enum):
    GROUND_SWELL = "ground_swell"
    WIND_SWELL = "wind_swell"
    MIXED = "mixed"


class SwellQuality(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class SwellInteraction(str, Enum):
    CONSTRUCTIVE = "constructive"
    DESTRUCTIVE = "destructive"
    NEUTRAL = "neutral"


def _check_non_negative(name: str, value: Optional[float]) -> None:
    if value is None:
        return
    if math.isnan(value) or value < 0:
        raise InvalidObservationError(f"{name} must be >= 0, got {value}")


def _check_positive(name: str, value: Optional[float]) -> None:
    if value is None:
        return
    if math.isnan(value) or value <= 0:
        raise InvalidObservationError(f"{name} must be > 0, got {value}")


def _check_bearing(name: str, value: Optional[float]) -> None:
    if value is None:
        return
    if not 0 <= value < 360:
        raise InvalidObservationError(f"{name} must be in [0, 360), got {value}")


@dataclass(frozen=True)
class RawObservation:
    """Marine/weather readings for one spot at one hour"""
    wave_height: float           # meters, combined sea state
    wave_direction_deg: float    # 0-359, coming from
    wave_period: Optional[float]  # seconds
    wind_speed: float            # km/h
    wind_direction_deg: float    # 0-359, coming from
    air_temp: float              # celsius
    timestamp: str = ""
    wind_wave_height: Optional[float] = None
    wind_wave_period: Optional[float] = None
    wind_wave_direction_deg: Optional[float] = None
    swell_wave_height: Optional[float] = None
    swell_wave_period: Optional[float] = None
    swell_wave_direction_deg: Optional[float] = None

    def __post_init__(self):
        _check_non_negative("wave_height", self.wave_height)
        _check_positive("wave_period", self.wave_period)
        _check_non_negative("wind_speed", self.wind_speed)
        _check_bearing("wave_direction_deg", self.wave_direction_deg)
        _check_bearing("wind_direction_deg", self.wind_direction_deg)
        _check_non_negative("wind_wave_height", self.wind_wave_height)
        _check_positive("wind_wave_period", self.wind_wave_period)
        _check_bearing("wind_wave_direction_deg", self.wind_wave_direction_deg)
        _check_non_negative("swell_wave_height", self.swell_wave_height)
        _check_positive("swell_wave_period", self.swell_wave_period)
        _check_bearing("swell_wave_direction_deg", self.swell_wave_direction_deg)

    def __str__(self) -> str:
        return (
            f"Waves: {self.wave_height}m @ {self.wave_period}s from {self.wave_direction_deg}deg, "
            f"Wind: {self.wind_speed}km/h from {self.wind_direction_deg}deg"
        )


@dataclass(frozen=True)
class WaveMetrics:
    """Swell height expressed as surf the spot will actually see"""
    height_meters: float
    height_feet: float
    breaking_height: float
    confidence: float  # percent, heuristic


@dataclass(frozen=True)
class SwellClassification:
    """Period-based swell category"""
    type: SwellType
    quality: SwellQuality
    description: str


@dataclass(frozen=True)
class SwellComponent:
    """One swell train (primary ground swell or secondary wind swell)"""
    height: float
    period: float
    direction: str  # 16-point compass
    dominance: float  # percent of combined energy


@dataclass(frozen=True)
class SwellDominance:
    """Energy share of the primary and secondary swell trains"""
    primary: float
    secondary: float


@dataclass(frozen=True)
class TideContext:
    """Current tide height and the tide band a spot works best on"""
    height: float  # meters
    optimal_tide: str = "mid"  # "low", "mid" or "high"

    def __post_init__(self):
        _check_non_negative("tide height", self.height)
        if self.optimal_tide not in ("low", "mid", "high"):
            raise InvalidObservationError(
                f"optimal_tide must be low, mid or high, got {self.optimal_tide!r}"
            )


@dataclass(frozen=True)
class SurfScoreResult:
    """Overall 1-10 surf score with its component breakdown"""
    overall_score: float
    wave_quality: float
    wind_quality: float
    tide_optimal: float
    consistency_score: float

    def __post_init__(self):
        for name in ("overall_score", "wave_quality", "wind_quality",
                     "tide_optimal", "consistency_score"):
            value = getattr(self, name)
            if not 1.0 <= value <= 10.0:
                raise InvalidObservationError(f"{name} must be 1-10, got {value}")


@dataclass
class SpotConditions:
    """Everything computed for one spot at one hour, ready to store or serve"""
    spot_id: int
    timestamp: str
    wave_height: float
    wave_direction: str
    wave_period: float
    wind_speed: float
    wind_direction: str
    air_temperature: float
    water_temperature: float
    rating: str
    surf_score: SurfScoreResult
    swell: SwellClassification
    breaking_height: float
    confidence: float
    wave_energy: float
    energy_level: str
    primary_swell: SwellComponent
    secondary_swell: Optional[SwellComponent]
    swell_interaction: SwellInteraction
    is_stale: bool = False

    def to_dict(self) -> dict:
        secondary = self.secondary_swell
        return {
            "spotId": self.spot_id,
            "timestamp": self.timestamp,
            "waveHeight": self.wave_height,
            "waveDirection": self.wave_direction,
            "wavePeriod": self.wave_period,
            "windSpeed": self.wind_speed,
            "windDirection": self.wind_direction,
            "airTemperature": self.air_temperature,
            "waterTemperature": self.water_temperature,
            "rating": self.rating,
            "surfScore": self.surf_score.overall_score,
            "waveQuality": self.surf_score.wave_quality,
            "windQuality": self.surf_score.wind_quality,
            "tideOptimal": self.surf_score.tide_optimal,
            "consistencyScore": self.surf_score.consistency_score,
            "swellType": self.swell.type.value,
            "swellQuality": self.swell.quality.value,
            "breakingHeight": self.breaking_height,
            "confidence": self.confidence,
            "waveEnergy": self.wave_energy,
            "energyLevel": self.energy_level,
            "primarySwellHeight": self.primary_swell.height,
            "primarySwellPeriod": self.primary_swell.period,
            "primarySwellDirection": self.primary_swell.direction,
            "primarySwellDominance": self.primary_swell.dominance,
            "secondarySwellHeight": secondary.height if secondary else None,
            "secondarySwellPeriod": secondary.period if secondary else None,
            "secondarySwellDirection": secondary.direction if secondary else None,
            "secondarySwellDominance": secondary.dominance if secondary else 0.0,
            "swellInteraction": self.swell_interaction.value,
            "isStale": self.is_stale,
        }
