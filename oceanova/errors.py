"""Error taxonomy for refresh cycles and their upstream calls."""

from enum import StrEnum


class OceanovaError(Exception):
    """Base class for all errors raised by the engine."""


class ConfigurationError(OceanovaError):
    """Raised when required credentials or settings are missing."""


class LocationNotFoundError(OceanovaError):
    """Raised when a location name is not in the location table."""

    def __init__(self, name: str):
        super().__init__("Location not found. Please choose from the suggested list.")
        self.name = name


class TransportError(OceanovaError):
    """Raised on network errors or non-success HTTP status from an upstream."""

    def __init__(self, message: str, service: str, status_code: int | None = None):
        super().__init__(message)
        self.service = service
        self.status_code = status_code


class WeatherPayloadError(OceanovaError):
    """Raised when the weather provider response lacks required fields."""


class AdvisoryFailure(StrEnum):
    EMPTY_RESPONSE = "empty-response"
    MALFORMED_PAYLOAD = "malformed-payload"
    EXHAUSTED_RETRIES = "exhausted-retries"


class AdvisoryError(OceanovaError):
    """Raised when no schema-valid advisory could be produced."""

    def __init__(self, kind: AdvisoryFailure, message: str, attempts: int = 1):
        super().__init__(message)
        self.kind = kind
        self.attempts = attempts


class CycleCancelled(OceanovaError):
    """Raised inside a cycle that was superseded by a newer one."""


class RefreshStage(StrEnum):
    CONFIGURATION = "configuration"
    WEATHER_FETCH = "weather-fetch"
    NORMALIZE = "normalize"
    ADVISORY = "advisory"
    INTERNAL = "internal"


class RefreshError(OceanovaError):
    """Umbrella error for a failed refresh cycle.

    Carries the stage that failed and the underlying cause so the
    published status can show a descriptive message.
    """

    def __init__(self, stage: RefreshStage, cause: Exception):
        super().__init__(f"{stage.value} failed: {cause}")
        self.stage = stage
        self.cause = cause

    @property
    def user_message(self) -> str:
        cause = self.cause
        if isinstance(cause, ConfigurationError):
            return f"Credentials missing: {cause}"
        if isinstance(cause, TransportError):
            return f"Upstream unreachable ({cause.service}): {cause}"
        if isinstance(cause, AdvisoryError):
            if cause.kind == AdvisoryFailure.EXHAUSTED_RETRIES:
                return (
                    "Advisory could not be produced after "
                    f"{cause.attempts} attempts."
                )
            return f"Advisory response was unusable: {cause}"
        if isinstance(cause, WeatherPayloadError):
            return f"Weather data was unusable: {cause}"
        return f"Refresh failed: {cause}"
