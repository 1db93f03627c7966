# ABOUTME: Data models for tide events, hourly tide curves and tide reports
# ABOUTME: Reports carry their source so estimates are never mistaken for station data

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from surfcast.errors import InvalidObservationError

TIDE_DESCRIPTIONS = ("High tide", "Low tide", "Rising tide", "Falling tide")


class TideType(str, Enum):
    HIGH = "high"
    LOW = "low"


class TideSource(str, Enum):
    MEASURED = "measured"        # From a tide station
    SYNTHESIZED = "synthesized"  # Harmonic estimate for a mapped spot
    FALLBACK = "fallback"        # Generic pattern, spot has no station mapping


@dataclass(frozen=True)
class TideEvent:
    """A high or low tide at a time of day"""
    time: str  # "HH:MM"
    height: float  # meters
    type: TideType

    def __post_init__(self):
        if self.height <= 0:
            raise InvalidObservationError(f"Tide height must be > 0, got {self.height}")

    def to_dict(self) -> dict:
        return {"time": self.time, "height": self.height, "type": self.type.value}


@dataclass(frozen=True)
class HourlyTidePoint:
    """Tide height at the top of an hour"""
    hour: int  # 0-23
    height: float  # meters
    description: str

    def __post_init__(self):
        if not 0 <= self.hour <= 23:
            raise InvalidObservationError(f"Hour must be 0-23, got {self.hour}")
        if self.height <= 0:
            raise InvalidObservationError(f"Tide height must be > 0, got {self.height}")
        if self.description not in TIDE_DESCRIPTIONS:
            raise InvalidObservationError(f"Unknown tide description: {self.description!r}")

    def to_dict(self) -> dict:
        return {"hour": self.hour, "height": self.height, "description": self.description}


@dataclass
class TideReport:
    """Tides for one spot on one calendar date"""
    spot_id: int
    date: date
    source: TideSource
    events: list[TideEvent] = field(default_factory=list)
    hourly: list[HourlyTidePoint] = field(default_factory=list)

    @property
    def is_estimate(self) -> bool:
        return self.source != TideSource.MEASURED

    def to_dict(self) -> dict:
        return {
            "spotId": self.spot_id,
            "date": self.date.isoformat(),
            "source": self.source.value,
            "isEstimate": self.is_estimate,
            "events": [event.to_dict() for event in self.events],
            "hourly": [point.to_dict() for point in self.hourly],
        }
