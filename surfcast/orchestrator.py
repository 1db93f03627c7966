# ABOUTME: Orchestrator tying the marine API, scoring core, tide synthesizer and cache together
# ABOUTME: Produces per-spot conditions, daily forecasts and tide reports with stale-data fallback

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Union

import requests

from surfcast.cache.manager import CacheManager
from surfcast.config import Config
from surfcast.debug import debug_log
from surfcast.errors import InvalidObservationError, UpstreamDataError
from surfcast.metrics.calculator import SurfScoreCalculator
from surfcast.metrics.conversions import convert_wave_height, degrees_to_compass
from surfcast.metrics.models import RawObservation, SpotConditions, TideContext
from surfcast.metrics.swell import (
    analyze_swell_interaction,
    build_swell_components,
    calculate_wave_energy,
    classify_swell_quality,
    interpret_energy_level,
)
from surfcast.spots import SurfSpot, get_spot
from surfcast.tides.models import TideReport
from surfcast.tides.synthesizer import TideSynthesizer, parse_tide_date
from surfcast.weather.sources import OpenMeteoClient

log = logging.getLogger(__name__)

MIDDAY_HOUR = 12
HOURS_PER_DAY = 24


class SurfReportOrchestrator:
    """Orchestrates fetching, scoring and caching of surf reports"""

    def __init__(
        self,
        client: Optional[OpenMeteoClient] = None,
        calculator: Optional[SurfScoreCalculator] = None,
        synthesizer: Optional[TideSynthesizer] = None,
        cache: Optional[CacheManager] = None,
    ):
        self.client = client or OpenMeteoClient()
        self.calculator = calculator or SurfScoreCalculator()
        self.synthesizer = synthesizer or TideSynthesizer()
        self.cache = cache or CacheManager(
            conditions_ttl_seconds=Config.CONDITIONS_CACHE_TTL_SECONDS,
            tide_ttl_hours=Config.TIDE_CACHE_TTL_HOURS,
        )

    def get_current_conditions(self, spot_id: int) -> Optional[SpotConditions]:
        """
        Current conditions for a spot, fetching from Open-Meteo if the cache is stale.

        If the upstream fetch fails, the spot is marked offline and the last
        known good conditions are returned flagged as stale (or None if we've
        never had any).

        Raises:
            UnknownSpotError: if the spot id isn't tracked
        """
        spot = get_spot(spot_id)

        cached = self.cache.get_conditions(spot_id)
        if cached is not None:
            debug_log(f"Using cached conditions for {spot.name}", "ORCHESTRATOR")
            return cached

        try:
            hourly = self.client.fetch_hourly(spot.latitude, spot.longitude)
            observation = self.client.parse_observation(hourly, 0)
            conditions = self.score_observation(spot, observation)
        except (requests.RequestException, UpstreamDataError, InvalidObservationError) as e:
            log.error(f"Failed to refresh conditions for {spot.name}: {e}")
            self.cache.set_offline(spot_id)
            last_known = self.cache.get_last_known(spot_id)
            if last_known is None:
                return None
            return replace(last_known, is_stale=True)

        self.cache.set_conditions(spot_id, conditions)
        debug_log(
            f"{spot.name}: score {conditions.surf_score.overall_score}, rating {conditions.rating}",
            "ORCHESTRATOR",
        )
        return conditions

    def get_forecast(self, spot_id: int, days: int = 7) -> list[SpotConditions]:
        """
        One midday sample per day for the next few days.

        Hours with unusable data are skipped; an upstream failure gives an
        empty forecast.
        """
        spot = get_spot(spot_id)
        days = min(days, Config.FORECAST_DAYS)

        try:
            hourly = self.client.fetch_hourly(spot.latitude, spot.longitude, days)
        except (requests.RequestException, UpstreamDataError) as e:
            log.error(f"Failed to fetch forecast for {spot.name}: {e}")
            return []

        hours_available = len(hourly.get("time", []))
        forecast = []
        for day in range(days):
            index = day * HOURS_PER_DAY + MIDDAY_HOUR
            if index >= hours_available:
                break
            try:
                observation = self.client.parse_observation(hourly, index)
                forecast.append(self.score_observation(spot, observation))
            except (UpstreamDataError, InvalidObservationError) as e:
                log.warning(f"Skipping forecast day {day} for {spot.name}: {e}")

        return forecast

    def get_tides(self, spot_id: int, tide_date: Union[date, str, None] = None) -> TideReport:
        """Tide report for a spot and date (today by default), cached for the day."""
        day = parse_tide_date(tide_date) if tide_date is not None else date.today()

        cached = self.cache.get_tides(spot_id, day)
        if cached is not None:
            return cached

        report = self.synthesizer.build_report(day, spot_id)
        self.cache.set_tides(report)
        debug_log(f"Generated {report.source.value} tides for spot {spot_id} on {day}", "ORCHESTRATOR")
        return report

    def score_observation(
        self,
        spot: SurfSpot,
        observation: RawObservation,
        tide_context: Optional[TideContext] = None,
    ) -> SpotConditions:
        """
        Run one observation through the whole scoring pipeline.

        When no tide context is passed, one is derived from the spot's tide
        curve at the observation hour if the timestamp can be read.
        """
        primary, secondary = build_swell_components(observation, self.calculator.config)
        metrics = convert_wave_height(primary.height, self.calculator.config)
        swell = classify_swell_quality(primary.period, self.calculator.config)
        energy = calculate_wave_energy(metrics.breaking_height, primary.period, self.calculator.config)

        interaction = analyze_swell_interaction(
            primary.height,
            primary.period,
            primary.direction,
            secondary.height if secondary else None,
            secondary.period if secondary else None,
            secondary.direction if secondary else None,
            self.calculator.config,
        )

        if tide_context is None:
            tide_context = self._tide_context(spot, observation)

        wind_direction = degrees_to_compass(observation.wind_direction_deg)
        surf_score = self.calculator.calculate_surf_score(
            metrics.breaking_height,
            primary.period,
            observation.wind_speed,
            wind_direction,
            tide_context=tide_context,
            swell_direction=primary.direction,
        )
        rating = self.calculator.calculate_surf_rating(
            observation.wave_height,
            observation.wind_speed,
            observation.wave_direction_deg,
            observation.wind_direction_deg,
        )

        return SpotConditions(
            spot_id=spot.id,
            timestamp=observation.timestamp,
            wave_height=observation.wave_height,
            wave_direction=degrees_to_compass(observation.wave_direction_deg),
            wave_period=observation.wave_period,
            wind_speed=observation.wind_speed,
            wind_direction=wind_direction,
            air_temperature=observation.air_temp,
            water_temperature=Config.DEFAULT_WATER_TEMP_C,
            rating=rating,
            surf_score=surf_score,
            swell=swell,
            breaking_height=round(metrics.breaking_height, 2),
            confidence=metrics.confidence,
            wave_energy=round(energy, 1),
            energy_level=interpret_energy_level(energy),
            primary_swell=primary,
            secondary_swell=secondary,
            swell_interaction=interaction,
        )

    def _tide_context(self, spot: SurfSpot, observation: RawObservation) -> Optional[TideContext]:
        try:
            observed_at = datetime.fromisoformat(observation.timestamp)
        except (TypeError, ValueError):
            return None

        report = self.get_tides(spot.id, observed_at.date())
        for point in report.hourly:
            if point.hour == observed_at.hour:
                return TideContext(height=point.height, optimal_tide=spot.optimal_tide)
        return None
