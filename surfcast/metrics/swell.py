# ABOUTME: Swell classification, wave energy and multi-swell analysis
# ABOUTME: Splits energy between ground swell and wind swell and classifies how they interact

import logging
import math
from typing import Optional

from surfcast.config import ScoringConfig
from surfcast.errors import InvalidObservationError
from surfcast.metrics.conversions import (
    DEFAULT_SCORING,
    angular_difference,
    compass_to_degrees,
    degrees_to_compass,
)
from surfcast.metrics.models import (
    RawObservation,
    SwellClassification,
    SwellComponent,
    SwellDominance,
    SwellInteraction,
    SwellQuality,
    SwellType,
)

log = logging.getLogger(__name__)

# (lower bound exclusive, label), checked from the top
ENERGY_LEVELS = [
    (500, "Massive - Expert only"),
    (300, "Powerful - Advanced surfers"),
    (150, "Solid - Intermediate+"),
    (50, "Moderate - All levels"),
]
SMALL_ENERGY_LEVEL = "Small - Beginners welcome"


def classify_swell_quality(period: float, config: ScoringConfig = DEFAULT_SCORING) -> SwellClassification:
    """
    Classify swell type and quality from its period.

    Args:
        period: Wave period in seconds (> 0)

    Returns:
        SwellClassification
    """
    if period is None or math.isnan(period) or period <= 0:
        raise InvalidObservationError(f"Wave period must be > 0, got {period}")

    if period >= config.excellent_period:
        return SwellClassification(
            type=SwellType.GROUND_SWELL,
            quality=SwellQuality.EXCELLENT,
            description="Long-period groundswell - premium surf conditions",
        )
    if period >= config.good_period:
        return SwellClassification(
            type=SwellType.GROUND_SWELL,
            quality=SwellQuality.GOOD,
            description="Medium-period groundswell - quality waves",
        )
    if period >= config.fair_period:
        return SwellClassification(
            type=SwellType.MIXED,
            quality=SwellQuality.FAIR,
            description="Mixed swell - average conditions",
        )
    return SwellClassification(
        type=SwellType.WIND_SWELL,
        quality=SwellQuality.POOR,
        description="Wind swell - choppy conditions",
    )


def calculate_wave_energy(height: float, period: float, config: ScoringConfig = DEFAULT_SCORING) -> float:
    """
    Relative wave energy: height squared times period.

    Not rounded, so it stays strictly increasing in both height and period.
    """
    if height is None or math.isnan(height) or height < 0:
        raise InvalidObservationError(f"Wave height must be >= 0, got {height}")
    if period is None or math.isnan(period) or period <= 0:
        raise InvalidObservationError(f"Wave period must be > 0, got {period}")
    return config.energy_scale * height ** 2 * period


def interpret_energy_level(energy: float) -> str:
    """Bucket an energy value into the label shown to surfers."""
    for threshold, label in ENERGY_LEVELS:
        if energy > threshold:
            return label
    return SMALL_ENERGY_LEVEL


def _secondary_present(height: Optional[float], period: Optional[float]) -> bool:
    # Zero counts as absent: upstream APIs report 0.0 when there is no wind swell
    if height is None or period is None:
        return False
    if height < 0 or period < 0:
        raise InvalidObservationError(
            f"Secondary swell must be non-negative, got height={height} period={period}"
        )
    return height > 0 and period > 0


def calculate_swell_dominance(
    primary_height: float,
    primary_period: float,
    secondary_height: Optional[float] = None,
    secondary_period: Optional[float] = None,
    config: ScoringConfig = DEFAULT_SCORING,
) -> SwellDominance:
    """
    Split dominance between two swell trains by their energy share.

    Returns (100, 0) when the secondary swell is absent. Otherwise the
    primary share is rounded to one decimal and the secondary is whatever
    remains, so the two always add up to 100.
    """
    primary_energy = calculate_wave_energy(primary_height, primary_period, config)
    if not _secondary_present(secondary_height, secondary_period):
        return SwellDominance(primary=100.0, secondary=0.0)

    secondary_energy = calculate_wave_energy(secondary_height, secondary_period, config)
    total = primary_energy + secondary_energy
    if total <= 0:
        return SwellDominance(primary=100.0, secondary=0.0)

    primary = round(primary_energy / total * 100, 1)
    return SwellDominance(primary=primary, secondary=round(100.0 - primary, 1))


def analyze_swell_interaction(
    primary_height: float,
    primary_period: float,
    primary_direction: str,
    secondary_height: Optional[float] = None,
    secondary_period: Optional[float] = None,
    secondary_direction: Optional[str] = None,
    config: ScoringConfig = DEFAULT_SCORING,
) -> SwellInteraction:
    """
    Classify how a secondary swell affects the primary one.

    - No secondary, or one carrying under 30% of the primary's energy: neutral
    - Similar direction (<= 45 deg apart) and comparable period: constructive
    - Opposing directions (>= 135 deg apart): destructive
    - Anything else: neutral
    """
    primary_energy = calculate_wave_energy(primary_height, primary_period, config)
    if secondary_direction is None or not _secondary_present(secondary_height, secondary_period):
        return SwellInteraction.NEUTRAL

    secondary_energy = calculate_wave_energy(secondary_height, secondary_period, config)
    if secondary_energy < primary_energy * config.negligible_energy_ratio:
        return SwellInteraction.NEUTRAL

    divergence = angular_difference(
        compass_to_degrees(primary_direction), compass_to_degrees(secondary_direction)
    )
    period_ratio = min(primary_period, secondary_period) / max(primary_period, secondary_period)

    if divergence <= config.constructive_max_angle and period_ratio >= config.comparable_period_ratio:
        return SwellInteraction.CONSTRUCTIVE
    if divergence >= config.destructive_min_angle:
        return SwellInteraction.DESTRUCTIVE
    return SwellInteraction.NEUTRAL


def build_swell_components(
    observation: RawObservation,
    config: ScoringConfig = DEFAULT_SCORING,
) -> tuple[SwellComponent, Optional[SwellComponent]]:
    """
    Split an observation into primary (ground) and secondary (wind) swell.

    The primary uses the dedicated swell fields when the API gave them and
    falls back to the combined sea state otherwise. The secondary comes from
    the wind-wave fields and is None when there is no wind swell.
    """
    if observation.swell_wave_height is not None and observation.swell_wave_period:
        primary_height = observation.swell_wave_height
        primary_period = observation.swell_wave_period
        primary_deg = (
            observation.swell_wave_direction_deg
            if observation.swell_wave_direction_deg is not None
            else observation.wave_direction_deg
        )
    else:
        primary_height = observation.wave_height
        primary_period = observation.wave_period
        primary_deg = observation.wave_direction_deg

    if primary_period is None:
        raise InvalidObservationError("Observation has no wave period to build swell components from")

    secondary_height = observation.wind_wave_height
    secondary_period = observation.wind_wave_period
    dominance = calculate_swell_dominance(
        primary_height, primary_period, secondary_height, secondary_period, config
    )

    primary = SwellComponent(
        height=primary_height,
        period=primary_period,
        direction=degrees_to_compass(primary_deg),
        dominance=dominance.primary,
    )

    if not _secondary_present(secondary_height, secondary_period):
        return primary, None

    secondary_deg = (
        observation.wind_wave_direction_deg
        if observation.wind_wave_direction_deg is not None
        else observation.wind_direction_deg
    )
    secondary = SwellComponent(
        height=secondary_height,
        period=secondary_period,
        direction=degrees_to_compass(secondary_deg),
        dominance=dominance.secondary,
    )
    log.debug(f"Swell split: primary {primary.dominance}% / secondary {secondary.dominance}%")
    return primary, secondary
