# ABOUTME: In-memory cache for per-spot conditions and daily tide reports
# ABOUTME: Keeps last known good conditions so upstream outages degrade to stale data

from datetime import date, datetime, timedelta, timezone
from typing import Optional

from surfcast.metrics.models import SpotConditions
from surfcast.tides.models import TideReport


class CacheManager:
    """
    Split cache for spot conditions and tide reports.

    Conditions: Short TTL (default 15 minutes), refreshed from the marine API
    Tides: One report per spot per date, kept for a day so jittered events stay put
    """

    def __init__(self, conditions_ttl_seconds: int = 900, tide_ttl_hours: int = 24):
        self.conditions_ttl_seconds = conditions_ttl_seconds
        self.tide_ttl_hours = tide_ttl_hours

        # spot_id -> {"conditions": SpotConditions, "fetched_at": datetime}
        self._conditions: dict[int, dict] = {}

        # (spot_id, date) -> {"report": TideReport, "generated_at": datetime}
        self._tides: dict[tuple[int, date], dict] = {}

        # Offline state per spot
        self._offline: set[int] = set()
        self._last_known: dict[int, SpotConditions] = {}

    # ==================== Conditions Cache ====================

    def set_conditions(self, spot_id: int, conditions: SpotConditions) -> None:
        """Store freshly computed conditions and clear the spot's offline flag."""
        self._conditions[spot_id] = {
            "conditions": conditions,
            "fetched_at": datetime.now(timezone.utc),
        }
        self._offline.discard(spot_id)
        self._last_known[spot_id] = conditions

    def get_conditions(self, spot_id: int) -> Optional[SpotConditions]:
        """Get cached conditions if fresh, else None."""
        if self.is_conditions_stale(spot_id):
            return None
        return self._conditions[spot_id]["conditions"]

    def is_conditions_stale(self, spot_id: int) -> bool:
        """Check if a spot's conditions need a refresh."""
        entry = self._conditions.get(spot_id)
        if entry is None:
            return True

        fetched_at = entry.get("fetched_at")
        if fetched_at is None:
            return True

        age = datetime.now(timezone.utc) - fetched_at
        return age.total_seconds() > self.conditions_ttl_seconds

    # ==================== Offline State ====================

    def set_offline(self, spot_id: int) -> None:
        """Mark a spot's upstream data as unavailable, keeping its last known conditions."""
        self._offline.add(spot_id)

    def is_offline(self, spot_id: int) -> bool:
        return spot_id in self._offline

    def get_last_known(self, spot_id: int) -> Optional[SpotConditions]:
        """Get the last known good conditions (for stale display)."""
        return self._last_known.get(spot_id)

    # ==================== Tide Cache ====================

    def set_tides(self, report: TideReport) -> None:
        """Store a tide report, dropping any that have expired."""
        self._prune_tides()
        self._tides[(report.spot_id, report.date)] = {
            "report": report,
            "generated_at": datetime.now(timezone.utc),
        }

    def get_tides(self, spot_id: int, tide_date: date) -> Optional[TideReport]:
        """Get a cached tide report if it hasn't expired."""
        key = (spot_id, tide_date)
        entry = self._tides.get(key)
        if entry is None:
            return None

        if self._is_tide_expired(entry):
            del self._tides[key]
            return None
        return entry["report"]

    def _is_tide_expired(self, entry: dict) -> bool:
        age = datetime.now(timezone.utc) - entry["generated_at"]
        return age > timedelta(hours=self.tide_ttl_hours)

    def _prune_tides(self) -> None:
        expired = [key for key, entry in self._tides.items() if self._is_tide_expired(entry)]
        for key in expired:
            del self._tides[key]

    def clear(self) -> None:
        """Clear all caches."""
        self._conditions = {}
        self._tides = {}
        self._offline = set()
        self._last_known = {}
