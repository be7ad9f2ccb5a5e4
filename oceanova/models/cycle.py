"""Refresh cycle result and published state models."""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import StrEnum

from oceanova.models.advisory import VesselAdvisory
from oceanova.models.alert import AlertSet
from oceanova.models.common import CycleId
from oceanova.models.forecast import Forecast
from oceanova.models.weather import Location, WeatherReading


class RefreshStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    OK = "ok"
    ERROR = "error"


@dataclass(frozen=True)
class CycleResult:
    cycle_id: CycleId
    location: Location
    reading: WeatherReading
    alerts: AlertSet
    forecast: Forecast
    advisory: VesselAdvisory
    completed_at: datetime
    duration_seconds: float = 0.0


@dataclass(frozen=True)
class PublishedState:
    """Snapshot handed to readers.

    `result` is always the last successfully completed cycle; status and
    error describe the most recent attempt.
    """

    location: Location | None = None
    result: CycleResult | None = None
    status: RefreshStatus = RefreshStatus.IDLE
    error_message: str | None = None
    error_stage: str | None = None
    updated_at: datetime | None = None

    def loading(self, location: Location, now: datetime) -> "PublishedState":
        return replace(
            self,
            location=location,
            status=RefreshStatus.LOADING,
            error_message=None,
            error_stage=None,
            updated_at=now,
        )

    def succeeded(self, result: CycleResult) -> "PublishedState":
        return PublishedState(
            location=result.location,
            result=result,
            status=RefreshStatus.OK,
            updated_at=result.completed_at,
        )

    def settled(self) -> "PublishedState":
        """Leave the loading status without a new result."""
        if self.status != RefreshStatus.LOADING:
            return self
        return replace(
            self, status=RefreshStatus.OK if self.result else RefreshStatus.IDLE
        )

    def failed(self, message: str, stage: str, now: datetime) -> "PublishedState":
        return replace(
            self,
            status=RefreshStatus.ERROR,
            error_message=message,
            error_stage=stage,
            updated_at=now,
        )
