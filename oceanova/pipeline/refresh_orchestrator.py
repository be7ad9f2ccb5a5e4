"""Refresh orchestrator: full refresh cycle and the published-state slot.

Cycles are serialized by a lock. Every cycle gets a generation number and
a cancel token; starting a cycle or selecting a new location cancels the
token of any older cycle. A cycle publishes only if it is still the newest
when it finishes, so a superseded cycle's result is always discarded.
"""

import logging
import threading
import time
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from datetime import datetime
from enum import StrEnum

from oceanova.advisory.gemini_client import GeminiClient
from oceanova.advisory.pipeline import AdvisoryRequestPipeline
from oceanova.advisory.retry import RetryPolicy
from oceanova.config.loader import load_credentials
from oceanova.config.locations import default_location
from oceanova.config.schema import AppConfig
from oceanova.errors import (
    CycleCancelled,
    LocationNotFoundError,
    OceanovaError,
    RefreshError,
    RefreshStage,
)
from oceanova.hazards.alert_classifier import classify
from oceanova.hazards.forecast_scorer import forecast_dates, score
from oceanova.ingest.marine_source import MarineConditionsSource, build_marine_source
from oceanova.ingest.normalizer import ReadingNormalizer
from oceanova.ingest.openweather_client import OpenWeatherClient
from oceanova.models.common import CycleId, utc_now
from oceanova.models.cycle import CycleResult, PublishedState
from oceanova.models.weather import Location

logger = logging.getLogger(__name__)


class RefreshOutcome(StrEnum):
    PUBLISHED = "published"
    SUPERSEDED = "superseded"
    FAILED = "failed"


class RefreshOrchestrator:
    def __init__(
        self,
        config: AppConfig,
        marine_source: MarineConditionsSource | None = None,
        weather_client: OpenWeatherClient | None = None,
        advisory_pipeline: AdvisoryRequestPipeline | None = None,
        environ: Mapping[str, str] | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.config = config
        self.marine_source = marine_source or build_marine_source(config.marine)
        self.weather_client = weather_client
        self.advisory_pipeline = advisory_pipeline
        self.environ = environ
        self.clock = clock

        self._cycle_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self._generation: CycleId = 0
        self._cancel = threading.Event()
        self._location: Location | None = None
        self._state = PublishedState()

    # --- Published state ---

    @property
    def state(self) -> PublishedState:
        with self._state_lock:
            return self._state

    @property
    def location(self) -> Location:
        with self._state_lock:
            if self._location is None:
                self._location = default_location(self.config)
            return self._location

    def select_location(self, location: Location) -> None:
        """Switch location; any in-flight cycle is cancelled and discarded."""
        with self._state_lock:
            self._location = location
            self._cancel.set()
        logger.info("Location changed to %s", location.name)

    def cancel_in_flight(self) -> None:
        with self._state_lock:
            self._cancel.set()

    # --- Cycles ---

    def refresh(self) -> RefreshOutcome:
        """Run one cycle for the current location, reporting failures as an outcome."""
        try:
            location = self.location
        except LocationNotFoundError as e:
            err = RefreshError(RefreshStage.CONFIGURATION, e)
            logger.error("Refresh failed at %s: %s", err.stage.value, e)
            with self._state_lock:
                self._state = self._state.failed(
                    err.user_message, err.stage.value, self.clock()
                )
            return RefreshOutcome.FAILED
        try:
            result = self.run_cycle(location)
        except RefreshError as e:
            logger.error("Refresh failed at %s: %s", e.stage.value, e.user_message)
            return RefreshOutcome.FAILED
        return RefreshOutcome.PUBLISHED if result is not None else RefreshOutcome.SUPERSEDED

    def run_cycle(self, location: Location) -> CycleResult | None:
        """Execute a full refresh cycle for a location.

        Returns the published result, or None if a newer cycle superseded
        this one. Raises RefreshError on failure; the previously published
        result is kept and the error is recorded next to it.
        """
        cycle_id, cancel, previous = self._begin(location)

        with self._cycle_lock:
            if cancel.is_set():
                logger.info("Cycle #%d superseded before it started", cycle_id)
                self._settle(cycle_id, previous)
                return None
            start_time = time.monotonic()
            logger.info("=== Cycle #%d starting for %s ===", cycle_id, location.name)
            try:
                result = self._execute(cycle_id, location, cancel, start_time)
            except CycleCancelled:
                logger.info("Cycle #%d cancelled", cycle_id)
                self._settle(cycle_id, previous)
                return None
            except RefreshError as e:
                if not self._publish_failure(cycle_id, cancel, e):
                    self._settle(cycle_id, previous)
                raise
            except Exception as e:
                logger.exception("Cycle #%d crashed", cycle_id)
                err = RefreshError(RefreshStage.INTERNAL, e)
                if not self._publish_failure(cycle_id, cancel, err):
                    self._settle(cycle_id, previous)
                raise err from e

            if not self._publish_success(result, cancel):
                logger.info("Cycle #%d finished after being superseded, discarded", cycle_id)
                self._settle(cycle_id, previous)
                return None
            logger.info(
                "Cycle #%d OK: %d alerts, advisory optimal %.1f kn (%.1fs)",
                cycle_id,
                len(result.alerts),
                result.advisory.optimal_speed_knots,
                result.duration_seconds,
            )
            return result

    def _execute(
        self,
        cycle_id: CycleId,
        location: Location,
        cancel: threading.Event,
        start_time: float,
    ) -> CycleResult:
        with _stage(RefreshStage.CONFIGURATION):
            weather_client, advisory_pipeline = self._clients()

        with _stage(RefreshStage.WEATHER_FETCH):
            raw = weather_client.get_forecast(location.latitude, location.longitude)
        _check(cancel)

        with _stage(RefreshStage.NORMALIZE):
            reading, samples = ReadingNormalizer(self.marine_source).normalize(location, raw)
            alerts = classify(reading)
            days = forecast_dates(self.clock().date())
            forecast = score(
                samples, self.marine_source.wave_heights(location, days), days[0]
            )
        _check(cancel)

        def cancellable_sleep(seconds: float) -> None:
            if cancel.wait(seconds):
                raise CycleCancelled(f"cycle #{cycle_id} superseded during backoff")

        with _stage(RefreshStage.ADVISORY):
            advisory = advisory_pipeline.request_advisory(
                reading,
                forecast,
                self.config.advisory.current_speed_knots,
                sleep=cancellable_sleep,
            )

        return CycleResult(
            cycle_id=cycle_id,
            location=location,
            reading=reading,
            alerts=alerts,
            forecast=forecast,
            advisory=advisory,
            completed_at=self.clock(),
            duration_seconds=time.monotonic() - start_time,
        )

    def _clients(self) -> tuple[OpenWeatherClient, AdvisoryRequestPipeline]:
        if self.weather_client is not None and self.advisory_pipeline is not None:
            return self.weather_client, self.advisory_pipeline

        creds = load_credentials(self.config, self.environ)
        weather_client = self.weather_client or OpenWeatherClient(
            api_key=creds.openweather_api_key,
            base_url=self.config.weather.base_url,
            timeout=self.config.weather.timeout,
        )
        advisory_pipeline = self.advisory_pipeline or AdvisoryRequestPipeline(
            GeminiClient(
                api_key=creds.gemini_api_key,
                model=self.config.advisory.model,
                base_url=self.config.advisory.base_url,
                timeout=self.config.advisory.timeout,
            ),
            RetryPolicy.from_config(self.config.advisory.retry),
        )
        return weather_client, advisory_pipeline

    # --- Publication ---

    def _begin(
        self, location: Location
    ) -> tuple[CycleId, threading.Event, PublishedState]:
        with self._state_lock:
            previous = self._state
            self._cancel.set()
            self._generation += 1
            self._cancel = threading.Event()
            self._state = self._state.loading(location, self.clock())
            return self._generation, self._cancel, previous

    def _is_current(self, cycle_id: CycleId, cancel: threading.Event) -> bool:
        return cycle_id == self._generation and not cancel.is_set()

    def _publish_success(self, result: CycleResult, cancel: threading.Event) -> bool:
        with self._state_lock:
            if not self._is_current(result.cycle_id, cancel):
                return False
            self._state = self._state.succeeded(result)
            return True

    def _publish_failure(
        self, cycle_id: CycleId, cancel: threading.Event, error: RefreshError
    ) -> bool:
        with self._state_lock:
            if not self._is_current(cycle_id, cancel):
                logger.info("Cycle #%d failed after being superseded, not published", cycle_id)
                return False
            self._state = self._state.failed(
                error.user_message, error.stage.value, self.clock()
            )
            return True

    def _settle(self, cycle_id: CycleId, previous: PublishedState) -> None:
        """Drop the loading status of a cancelled cycle unless a newer one started."""
        with self._state_lock:
            if cycle_id == self._generation:
                self._state = previous.settled()


@contextmanager
def _stage(stage: RefreshStage) -> Iterator[None]:
    """Wrap engine errors raised inside a block as RefreshError for that stage."""
    try:
        yield
    except CycleCancelled:
        raise
    except OceanovaError as e:
        logger.error("Stage %s failed: %s", stage.value, e)
        raise RefreshError(stage, e) from e


def _check(cancel: threading.Event) -> None:
    if cancel.is_set():
        raise CycleCancelled("cycle superseded")
