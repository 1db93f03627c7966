# ABOUTME: Harmonic tide estimate for Victorian spots when no station data is available
# ABOUTME: M2 + S2 semidiurnal terms with spring/neap modulation and per-spot offsets

import logging
import math
import random
from datetime import date, datetime
from typing import Optional, Union

from surfcast.config import TideModelConfig
from surfcast.errors import InvalidObservationError
from surfcast.spots import TIDE_LOCATION_OFFSETS
from surfcast.tides.models import (
    HourlyTidePoint,
    TideEvent,
    TideReport,
    TideSource,
    TideType,
)

log = logging.getLogger(__name__)

# Harmonic phases are measured from here so consecutive days join up
EPOCH = date(2000, 1, 1)

MINUTES_PER_DAY = 24 * 60

# Used for spots without a tide station mapping
FALLBACK_EVENTS = (
    TideEvent(time="06:32", height=1.8, type=TideType.HIGH),
    TideEvent(time="12:45", height=0.3, type=TideType.LOW),
    TideEvent(time="19:15", height=1.6, type=TideType.HIGH),
)


def parse_tide_date(value: Union[date, str]) -> date:
    """Accept a date, datetime or ISO "YYYY-MM-DD" string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise InvalidObservationError(f"Invalid tide date: {value!r}") from None
    raise InvalidObservationError(f"Tide date must be a date or ISO string, got {value!r}")


class TideSynthesizer:
    """
    Deterministic harmonic tide model plus jittered high/low events.

    The hourly curve is a pure function of date and spot. High/low events
    are the turning points of that same curve with bounded jitter on time
    and height. The jitter comes only from the injected generator, so pass
    a seeded random.Random to make events reproducible.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        config: Optional[TideModelConfig] = None,
        location_offsets: Optional[dict[int, float]] = None,
    ):
        self.rng = rng if rng is not None else random.Random()
        self.config = config or TideModelConfig()
        self.location_offsets = (
            location_offsets if location_offsets is not None else TIDE_LOCATION_OFFSETS
        )

    def spring_neap_factor(self, day: date) -> float:
        """Amplitude multiplier over the lunar cycle: >1 near springs, <1 near neaps."""
        cfg = self.config
        days = (day - EPOCH).days
        lunar_phase = (days % cfg.lunar_cycle_days) / cfg.lunar_cycle_days
        return 1 + cfg.spring_neap_amplitude * math.cos(lunar_phase * 2 * math.pi)

    def _raw_height(self, hours_since_epoch: float, factor: float, offset: float) -> float:
        cfg = self.config
        m2 = cfg.m2_amplitude * math.cos(2 * math.pi * hours_since_epoch / cfg.m2_period_hours)
        s2 = cfg.s2_amplitude * math.cos(2 * math.pi * hours_since_epoch / cfg.s2_period_hours)
        return cfg.base_height + factor * (m2 + s2) + offset

    def generate_hourly_tides(self, tide_date: Union[date, str], spot_id: int) -> list[HourlyTidePoint]:
        """
        Tide height for each hour 0-23 on the given date.

        Spots without a mapped offset use no offset. Heights are floored at
        the model's minimum so they are always positive.
        """
        day = parse_tide_date(tide_date)
        factor = self.spring_neap_factor(day)
        offset = self.location_offsets.get(spot_id, 0.0)
        start = (day - EPOCH).days * 24

        points = []
        for hour in range(24):
            t = start + hour
            previous = self._raw_height(t - 1, factor, offset)
            current = self._raw_height(t, factor, offset)
            following = self._raw_height(t + 1, factor, offset)

            if current >= previous and current >= following:
                description = "High tide"
            elif current <= previous and current <= following:
                description = "Low tide"
            elif following > current:
                description = "Rising tide"
            else:
                description = "Falling tide"

            height = max(self.config.min_height, round(current, 2))
            points.append(HourlyTidePoint(hour=hour, height=height, description=description))

        return points

    def _turning_points(self, start: int, factor: float, offset: float) -> list[tuple[int, TideType]]:
        """
        Minutes past midnight of every high and low on the curve for the day
        starting at hour `start` since EPOCH.

        The search runs a margin past both ends of the day so the turning
        points just outside it are available too.
        """
        margin = self.config.event_search_margin_minutes
        minutes = range(-margin - 1, MINUTES_PER_DAY + margin + 1)
        heights = [self._raw_height(start + m / 60, factor, offset) for m in minutes]

        turning = []
        for i in range(1, len(heights) - 1):
            if heights[i] > heights[i - 1] and heights[i] >= heights[i + 1]:
                turning.append((minutes[i], TideType.HIGH))
            elif heights[i] < heights[i - 1] and heights[i] <= heights[i + 1]:
                turning.append((minutes[i], TideType.LOW))
        return turning

    def generate_tide_events(self, tide_date: Union[date, str], spot_id: int) -> list[TideEvent]:
        """
        Two highs and two lows for the day, alternating, in time order.

        Events sit on the turning points of the same harmonic curve that
        generate_hourly_tides samples, shifted by up to event_jitter_minutes
        and event_height_jitter. When only three turning points fall inside
        the day, the nearest one just past midnight is pulled onto the day
        boundary. Unmapped spots get the generic three-event fallback instead.
        """
        day = parse_tide_date(tide_date)
        if spot_id not in self.location_offsets:
            log.warning(f"No tide station mapped for spot {spot_id}, using fallback tides")
            return list(FALLBACK_EVENTS)

        cfg = self.config
        factor = self.spring_neap_factor(day)
        offset = self.location_offsets[spot_id]
        start = (day - EPOCH).days * 24

        turning = self._turning_points(start, factor, offset)
        inside = [t for t in turning if 0 <= t[0] < MINUTES_PER_DAY]
        before = [t for t in turning if t[0] < 0]
        after = [t for t in turning if t[0] >= MINUTES_PER_DAY]

        while len(inside) < 4:
            gap_before = -before[-1][0] if before else None
            gap_after = after[0][0] - MINUTES_PER_DAY + 1 if after else None
            if gap_after is None or (gap_before is not None and gap_before <= gap_after):
                inside.insert(0, before.pop())
            else:
                inside.append(after.pop(0))
        # With five turning points in the day, start on the morning low
        if len(inside) > 4 and inside[0][1] == TideType.HIGH:
            inside = inside[1:]
        selected = inside[:4]

        events = []
        for minute, tide_type in selected:
            height = self._raw_height(start + minute / 60, factor, offset)
            height += self.rng.uniform(-cfg.event_height_jitter, cfg.event_height_jitter)
            shifted = minute + self.rng.randint(-cfg.event_jitter_minutes, cfg.event_jitter_minutes)
            shifted = min(max(shifted, 0), MINUTES_PER_DAY - 1)
            hours, mins = divmod(shifted, 60)
            events.append(TideEvent(
                time=f"{hours:02d}:{mins:02d}",
                height=max(cfg.min_height, round(height, 2)),
                type=tide_type,
            ))

        return events

    def build_report(self, tide_date: Union[date, str], spot_id: int) -> TideReport:
        """Events and hourly curve for a spot, labelled as an estimate."""
        day = parse_tide_date(tide_date)
        source = (
            TideSource.SYNTHESIZED if spot_id in self.location_offsets else TideSource.FALLBACK
        )
        return TideReport(
            spot_id=spot_id,
            date=day,
            source=source,
            events=self.generate_tide_events(day, spot_id),
            hourly=self.generate_hourly_tides(day, spot_id),
        )
