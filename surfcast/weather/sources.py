# ABOUTME: Open-Meteo client for hourly marine and wind data along the Victorian coast
# ABOUTME: Fetches both endpoints, merges them, and parses hours into RawObservation records

import logging
from typing import Any, Optional

import requests

from surfcast.config import Config
from surfcast.errors import InvalidObservationError, UpstreamDataError
from surfcast.metrics.models import RawObservation

log = logging.getLogger(__name__)

MARINE_FIELDS = [
    "wave_height",
    "wave_direction",
    "wave_period",
    "wind_wave_height",
    "wind_wave_direction",
    "wind_wave_period",
    "swell_wave_height",
    "swell_wave_direction",
    "swell_wave_period",
]

WEATHER_FIELDS = [
    "wind_speed_10m",
    "wind_direction_10m",
    "temperature_2m",
]

REQUIRED_FIELDS = [
    "wave_height",
    "wave_direction",
    "wave_period",
    "wind_speed_10m",
    "wind_direction_10m",
]


class OpenMeteoClient:
    """Client for the Open-Meteo marine and forecast APIs"""

    def __init__(
        self,
        marine_url: Optional[str] = None,
        weather_url: Optional[str] = None,
        timeout: Optional[int] = None,
        timezone: Optional[str] = None,
    ):
        self.marine_url = marine_url or Config.OPEN_METEO_MARINE_URL
        self.weather_url = weather_url or Config.OPEN_METEO_WEATHER_URL
        self.timeout = timeout or Config.HTTP_TIMEOUT_SECONDS
        self.timezone = timezone or Config.TIMEZONE

    def fetch_hourly(self, lat: float, lon: float, days: Optional[int] = None) -> dict[str, list]:
        """
        Fetch hourly wave and wind arrays for given coordinates

        Args:
            lat: Latitude
            lon: Longitude
            days: Forecast days (default Config.FORECAST_DAYS)

        Returns:
            Merged "hourly" dict: field name -> list of hourly values

        Raises:
            requests.RequestException: on network or HTTP errors
            UpstreamDataError: if either payload has no hourly block
        """
        days = days or Config.FORECAST_DAYS
        common = {
            "latitude": lat,
            "longitude": lon,
            "timezone": self.timezone,
            "forecast_days": days,
        }

        marine_response = requests.get(
            self.marine_url,
            params={**common, "hourly": ",".join(MARINE_FIELDS)},
            timeout=self.timeout,
        )
        marine_response.raise_for_status()
        marine_data = marine_response.json()

        weather_response = requests.get(
            self.weather_url,
            params={**common, "hourly": ",".join(WEATHER_FIELDS)},
            timeout=self.timeout,
        )
        weather_response.raise_for_status()
        weather_data = weather_response.json()

        try:
            hourly = dict(marine_data["hourly"])
            weather_hourly = weather_data["hourly"]
        except (KeyError, TypeError) as e:
            raise UpstreamDataError(f"Open-Meteo response missing hourly data: {e}") from e

        for name in WEATHER_FIELDS:
            if name in weather_hourly:
                hourly[name] = weather_hourly[name]

        log.debug(f"Fetched {len(hourly.get('time', []))} hours for {lat},{lon}")
        return hourly

    def parse_observation(self, hourly: dict[str, list], index: int) -> RawObservation:
        """
        Build a RawObservation for one hour of a merged hourly payload.

        Missing optional fields (swell split, temperature) become None or the
        configured default. Missing required fields raise UpstreamDataError.
        """
        values = {}
        for name in REQUIRED_FIELDS:
            value = self._value_at(hourly, name, index)
            if value is None:
                raise UpstreamDataError(f"Open-Meteo hour {index} has no {name}")
            values[name] = float(value)

        air_temp = self._value_at(hourly, "temperature_2m", index)
        timestamp = self._value_at(hourly, "time", index) or ""

        try:
            return RawObservation(
                wave_height=values["wave_height"],
                wave_direction_deg=values["wave_direction"] % 360,
                wave_period=values["wave_period"],
                wind_speed=values["wind_speed_10m"],
                wind_direction_deg=values["wind_direction_10m"] % 360,
                air_temp=float(air_temp) if air_temp is not None else Config.DEFAULT_AIR_TEMP_C,
                timestamp=timestamp,
                wind_wave_height=self._optional_float(hourly, "wind_wave_height", index),
                wind_wave_period=self._optional_positive(hourly, "wind_wave_period", index),
                wind_wave_direction_deg=self._optional_bearing(hourly, "wind_wave_direction", index),
                swell_wave_height=self._optional_float(hourly, "swell_wave_height", index),
                swell_wave_period=self._optional_positive(hourly, "swell_wave_period", index),
                swell_wave_direction_deg=self._optional_bearing(hourly, "swell_wave_direction", index),
            )
        except InvalidObservationError as e:
            raise UpstreamDataError(f"Open-Meteo hour {index} is malformed: {e}") from e

    def _value_at(self, hourly: dict[str, list], name: str, index: int) -> Any:
        series = hourly.get(name)
        if not series or index >= len(series):
            return None
        return series[index]

    def _optional_float(self, hourly: dict[str, list], name: str, index: int) -> Optional[float]:
        value = self._value_at(hourly, name, index)
        return float(value) if value is not None else None

    def _optional_positive(self, hourly: dict[str, list], name: str, index: int) -> Optional[float]:
        # Open-Meteo reports period 0 when there is no such swell train
        value = self._optional_float(hourly, name, index)
        return value if value else None

    def _optional_bearing(self, hourly: dict[str, list], name: str, index: int) -> Optional[float]:
        value = self._optional_float(hourly, name, index)
        return value % 360 if value is not None else None
