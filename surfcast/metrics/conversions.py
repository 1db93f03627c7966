# ABOUTME: Unit and direction conversions used across the scoring pipeline
# ABOUTME: Degrees to compass points, angular differences, and swell to breaking height

import math

from surfcast.config import ScoringConfig
from surfcast.errors import InvalidObservationError
from surfcast.metrics.models import WaveMetrics

COMPASS_POINTS = [
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
]
SECTOR_DEGREES = 360 / len(COMPASS_POINTS)  # 22.5

_COMPASS_TO_DEGREES = {
    point: index * SECTOR_DEGREES for index, point in enumerate(COMPASS_POINTS)
}

DEFAULT_SCORING = ScoringConfig()


def degrees_to_compass(degrees: float) -> str:
    """
    Convert a bearing to one of the 16 compass points.

    Bearings of 360 or more are wrapped; 359 rounds up into the N sector.

    Raises:
        InvalidObservationError: for negative, NaN or infinite bearings
    """
    if degrees is None or math.isnan(degrees) or math.isinf(degrees):
        raise InvalidObservationError(f"Invalid bearing: {degrees}")
    if degrees < 0:
        raise InvalidObservationError(f"Bearing must be >= 0, got {degrees}")

    normalized = degrees % 360
    index = int(math.floor(normalized / SECTOR_DEGREES + 0.5)) % len(COMPASS_POINTS)
    return COMPASS_POINTS[index]


def compass_to_degrees(direction: str) -> float:
    """Convert a compass point like "SW" to its center bearing (225.0)."""
    if not isinstance(direction, str):
        raise InvalidObservationError(f"Compass direction must be a string, got {direction!r}")
    try:
        return _COMPASS_TO_DEGREES[direction.strip().upper()]
    except KeyError:
        raise InvalidObservationError(f"Unknown compass direction: {direction!r}") from None


def angular_difference(a: float, b: float) -> float:
    """Smallest angle between two bearings, 0-180, wrapping at 360/0."""
    diff = abs(a - b) % 360
    return 360 - diff if diff > 180 else diff


def meters_to_feet(meters: float) -> float:
    """Convert meters to feet, one decimal place."""
    return round(meters * 3.28084, 1)


def convert_wave_height(swell_height: float, config: ScoringConfig = DEFAULT_SCORING) -> WaveMetrics:
    """
    Convert an offshore swell height into the breaking height surfers see.

    Breaking height is the swell height scaled by the shoaling factor. The
    confidence value is a heuristic, not a physical model: small readings
    are mostly noise relative to their size, so confidence climbs linearly
    from confidence_min at flat to confidence_max once the swell reaches
    confidence_saturation_height.

    Args:
        swell_height: Swell height in meters (>= 0)
        config: Scoring thresholds

    Returns:
        WaveMetrics with the breaking height and confidence percentage
    """
    if swell_height is None or math.isnan(swell_height) or swell_height < 0:
        raise InvalidObservationError(f"Swell height must be >= 0, got {swell_height}")

    saturation = max(config.confidence_saturation_height, 1e-6)
    fraction = min(swell_height, saturation) / saturation
    confidence = config.confidence_min + (config.confidence_max - config.confidence_min) * fraction

    return WaveMetrics(
        height_meters=swell_height,
        height_feet=meters_to_feet(swell_height),
        breaking_height=swell_height * config.shoaling_factor,
        confidence=round(confidence, 1),
    )
