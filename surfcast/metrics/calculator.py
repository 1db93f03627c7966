# ABOUTME: Core surf score composition from wave, wind, tide and consistency components
# ABOUTME: Turns breaking height, period and wind into 1-10 scores and a five-level rating

import logging
import math
from typing import Optional

from surfcast.config import ScoringConfig
from surfcast.errors import InvalidObservationError
from surfcast.metrics.conversions import angular_difference, compass_to_degrees
from surfcast.metrics.models import SurfScoreResult, SwellQuality, TideContext
from surfcast.metrics.swell import classify_swell_quality

log = logging.getLogger(__name__)

PERIOD_POINTS = {
    SwellQuality.EXCELLENT: 4.0,
    SwellQuality.GOOD: 3.0,
    SwellQuality.FAIR: 1.5,
    SwellQuality.POOR: 0.0,
}

# (minimum overall score, label), checked from the top
RATING_THRESHOLDS = [
    (8.5, "excellent"),
    (7.0, "very-good"),
    (5.5, "good"),
    (4.0, "fair"),
]


def _clamp_score(score: float) -> float:
    return max(1.0, min(10.0, round(score, 1)))


class SurfScoreCalculator:
    """Calculates 1-10 surf scores from already-fetched conditions"""

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def calculate_wave_score(self, breaking_height: float, period: float) -> float:
        """
        Score wave quality (1-10) from breaking height and period.

        Height points peak inside the sweet spot (1.0-2.5m by default) and
        drop off for flat or oversized, chaotic surf. Period points come from
        the swell classification, so long-period groundswell lifts the score.

        Args:
            breaking_height: Breaking wave height in meters
            period: Wave period in seconds

        Returns:
            Score from 1.0 to 10.0
        """
        if breaking_height is None or math.isnan(breaking_height) or breaking_height < 0:
            raise InvalidObservationError(f"Breaking height must be >= 0, got {breaking_height}")

        cfg = self.config
        swell = classify_swell_quality(period, cfg)

        h = breaking_height
        if h < cfg.flat_height:
            height_points = 0.0  # Flat
        elif h < cfg.small_height:
            height_points = 1.5  # Ankle to knee high
        elif h < cfg.sweet_spot_min:
            height_points = 3.0  # Small but fun
        elif h <= cfg.sweet_spot_max:
            height_points = 5.0  # Sweet spot
        elif h <= cfg.large_height:
            height_points = 3.5  # Big
        elif h <= cfg.chaotic_height:
            height_points = 2.0  # Heavy, starting to close out
        else:
            height_points = 0.5  # Chaotic

        return _clamp_score(1.0 + height_points + PERIOD_POINTS[swell.quality])

    def calculate_wind_score(
        self,
        wind_speed: float,
        wind_direction: str,
        swell_direction: str = "S",
    ) -> float:
        """
        Score wind quality (1-10) from speed and direction relative to the swell.

        Wind blowing against the incoming swell (offshore) grooms the faces;
        wind from the same direction as the swell (onshore) chops them up.
        Above the strong-wind threshold the offshore bonus no longer applies.

        Args:
            wind_speed: Wind speed in km/h
            wind_direction: Compass direction the wind blows from
            swell_direction: Compass direction the swell arrives from.
                Defaults to "S", the exposure of the Victorian coast.

        Returns:
            Score from 1.0 to 10.0
        """
        if wind_speed is None or math.isnan(wind_speed) or wind_speed < 0:
            raise InvalidObservationError(f"Wind speed must be >= 0, got {wind_speed}")

        cfg = self.config
        score = 5.0  # Neutral

        if wind_speed <= cfg.glassy_wind:
            score += 3.0  # Glassy
        elif wind_speed <= cfg.light_wind:
            score += 2.0  # Clean
        elif wind_speed <= cfg.moderate_wind:
            score += 1.0  # Acceptable
        elif wind_speed <= cfg.fresh_wind:
            score += 0.0  # Choppy
        elif wind_speed <= cfg.strong_wind:
            score -= 1.0  # Getting messy
        else:
            score -= 4.0  # Blown out

        divergence = angular_difference(
            compass_to_degrees(wind_direction), compass_to_degrees(swell_direction)
        )
        if divergence >= cfg.offshore_min_angle:
            if wind_speed <= cfg.strong_wind:
                score += 2.0  # Offshore
        elif divergence <= cfg.onshore_max_angle:
            score -= 1.0  # Onshore

        return _clamp_score(score)

    def calculate_tide_score(self, tide_context: Optional[TideContext] = None) -> float:
        """
        Score how close the tide is to the spot's preferred band.

        With no tide information the score is neutral so it neither helps
        nor hurts the overall score.
        """
        cfg = self.config
        if tide_context is None:
            return cfg.neutral_tide_score

        if tide_context.height < cfg.low_tide_max:
            band = "low"
        elif tide_context.height > cfg.high_tide_min:
            band = "high"
        else:
            band = "mid"

        if band == tide_context.optimal_tide:
            return 8.0
        if {band, tide_context.optimal_tide} == {"low", "high"}:
            return 3.0
        return 5.0

    def calculate_consistency_score(self, period: float) -> float:
        """Longer, cleaner periods mean more consistent sets."""
        if period is None or math.isnan(period) or period <= 0:
            raise InvalidObservationError(f"Wave period must be > 0, got {period}")

        cfg = self.config
        span = cfg.consistency_max_period - cfg.consistency_min_period
        fraction = (period - cfg.consistency_min_period) / span
        fraction = max(0.0, min(1.0, fraction))
        score = cfg.consistency_min_score + fraction * (cfg.consistency_max_score - cfg.consistency_min_score)
        return _clamp_score(score)

    def calculate_surf_score(
        self,
        breaking_height: float,
        period: float,
        wind_speed: float,
        wind_direction: str,
        tide_context: Optional[TideContext] = None,
        swell_direction: str = "S",
    ) -> SurfScoreResult:
        """
        Combine wave, wind, tide and consistency into an overall score.

        The overall score is a weighted average of the four components,
        rounded to one decimal and clamped to 1-10. No side effects: the same
        inputs always give the same result.

        Args:
            breaking_height: Breaking wave height in meters
            period: Wave period in seconds
            wind_speed: Wind speed in km/h
            wind_direction: Compass direction the wind blows from
            tide_context: Current tide and the spot's preferred band, if known
            swell_direction: Compass direction the swell arrives from

        Returns:
            SurfScoreResult
        """
        cfg = self.config
        wave_quality = self.calculate_wave_score(breaking_height, period)
        wind_quality = self.calculate_wind_score(wind_speed, wind_direction, swell_direction)
        tide_optimal = self.calculate_tide_score(tide_context)
        consistency = self.calculate_consistency_score(period)

        total_weight = cfg.wave_weight + cfg.wind_weight + cfg.tide_weight + cfg.consistency_weight
        weighted = (
            wave_quality * cfg.wave_weight
            + wind_quality * cfg.wind_weight
            + tide_optimal * cfg.tide_weight
            + consistency * cfg.consistency_weight
        ) / total_weight

        result = SurfScoreResult(
            overall_score=_clamp_score(weighted),
            wave_quality=wave_quality,
            wind_quality=wind_quality,
            tide_optimal=_clamp_score(tide_optimal),
            consistency_score=consistency,
        )
        log.debug(
            f"Surf score {result.overall_score} (wave {wave_quality}, wind {wind_quality}, "
            f"tide {result.tide_optimal}, consistency {consistency})"
        )
        return result

    def calculate_surf_rating(
        self,
        wave_height: float,
        wind_speed: float,
        wave_direction_deg: float,
        wind_direction_deg: float,
    ) -> str:
        """
        Coarse five-level rating stored alongside each condition reading.

        Args:
            wave_height: Wave height in meters
            wind_speed: Wind speed in km/h
            wave_direction_deg: Bearing the waves come from
            wind_direction_deg: Bearing the wind blows from

        Returns:
            "excellent", "very-good", "good", "fair" or "poor"
        """
        if wave_height < 0 or wind_speed < 0:
            raise InvalidObservationError(
                f"Wave height and wind speed must be >= 0, got {wave_height}, {wind_speed}"
            )

        score = 0

        if 1.5 <= wave_height <= 3.0:
            score += 3
        elif 1.0 <= wave_height <= 4.0:
            score += 2
        elif 0.5 <= wave_height <= 5.0:
            score += 1

        is_offshore = angular_difference(wind_direction_deg, wave_direction_deg) > 90

        if wind_speed < 10 and is_offshore:
            score += 2
        elif wind_speed < 15:
            score += 1
        elif wind_speed > self.config.strong_wind:
            score -= 1

        if score >= 4:
            return "excellent"
        if score >= 3:
            return "very-good"
        if score >= 2:
            return "good"
        if score >= 1:
            return "fair"
        return "poor"

    def rating_for_score(self, overall_score: float) -> str:
        """Map an overall 1-10 score onto the five rating labels."""
        for threshold, label in RATING_THRESHOLDS:
            if overall_score >= threshold:
                return label
        return "poor"
