"""Advisory request pipeline: prompt, retried submission, schema validation."""

import logging
import time
from collections.abc import Callable

from pydantic import ValidationError

from oceanova.advisory.gemini_client import GeminiClient, extract_text
from oceanova.advisory.prompt import build_prompt, build_request_body
from oceanova.advisory.retry import RetryExhaustedError, RetryPolicy, retry_with_backoff
from oceanova.errors import AdvisoryError, AdvisoryFailure, TransportError
from oceanova.models.advisory import AdvisoryPayload, VesselAdvisory
from oceanova.models.forecast import Forecast
from oceanova.models.weather import WeatherReading

logger = logging.getLogger(__name__)


class AdvisoryRequestPipeline:
    def __init__(
        self,
        client: GeminiClient,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.client = client
        self.policy = policy or RetryPolicy()
        self.sleep = sleep

    def request_advisory(
        self,
        reading: WeatherReading,
        forecast: Forecast,
        current_speed_knots: float,
        sleep: Callable[[float], None] | None = None,
    ) -> VesselAdvisory:
        """Produce a complete advisory or raise AdvisoryError.

        Transport failures are retried under the policy. An empty or
        malformed response fails immediately. `sleep` overrides the
        pipeline's sleep for this call so a caller can cancel backoff waits.
        """
        body = build_request_body(build_prompt(reading, forecast))

        try:
            envelope = retry_with_backoff(
                lambda: self.client.generate(body),
                self.policy,
                retry_on=(TransportError,),
                sleep=sleep or self.sleep,
                label=f"Advisory request for {reading.location.name}",
            )
        except RetryExhaustedError as e:
            raise AdvisoryError(
                AdvisoryFailure.EXHAUSTED_RETRIES,
                "Failed to fetch AI recommendations after multiple retries: "
                f"{e.last_error}",
                attempts=e.attempts,
            ) from e

        text = extract_text(envelope)
        if text is None:
            raise AdvisoryError(
                AdvisoryFailure.EMPTY_RESPONSE,
                "AI recommendations could not be generated: response had no text",
            )

        payload = parse_payload(text)
        advisory = VesselAdvisory.from_payload(payload, current_speed_knots)
        logger.info(
            "Advisory for %s: optimal %.1f kn, fuel %.0f%%, %d recommendations",
            reading.location.name,
            advisory.optimal_speed_knots,
            advisory.fuel_efficiency_pct,
            len(advisory.recommendations),
        )
        return advisory


def parse_payload(text: str) -> AdvisoryPayload:
    try:
        return AdvisoryPayload.model_validate_json(text)
    except ValidationError as e:
        logger.warning("Malformed advisory payload: %s", text[:200])
        raise AdvisoryError(
            AdvisoryFailure.MALFORMED_PAYLOAD,
            f"Advisory payload does not match the expected shape: "
            f"{e.error_count()} error(s)",
        ) from e
