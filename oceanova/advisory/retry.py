"""Retry policy value object and a generic retry-with-backoff combinator."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from oceanova.config.schema import RetryConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 5
    base_delay_ms: int = 1000
    multiplier: float = 2.0

    @classmethod
    def from_config(cls, config: RetryConfig) -> "RetryPolicy":
        return cls(
            max_attempts=config.max_attempts,
            base_delay_ms=config.base_delay_ms,
            multiplier=config.multiplier,
        )

    def delay_ms(self, failed_attempt: int) -> float:
        """Wait after the given 1-based failed attempt."""
        return self.base_delay_ms * self.multiplier ** (failed_attempt - 1)

    def delays_ms(self) -> list[float]:
        """All waits of a fully failing run, one fewer than max_attempts."""
        return [self.delay_ms(n) for n in range(1, self.max_attempts)]


class RetryExhaustedError(Exception):
    """Raised when every attempt allowed by a policy failed."""

    def __init__(self, attempts: int, last_error: Exception):
        super().__init__(f"Gave up after {attempts} attempts: {last_error}")
        self.attempts = attempts
        self.last_error = last_error


def retry_with_backoff(
    fn: Callable[[], T],
    policy: RetryPolicy,
    retry_on: tuple[type[Exception], ...],
    sleep: Callable[[float], None] = time.sleep,
    label: str = "request",
) -> T:
    """Call fn until it succeeds or the policy's attempts run out.

    Only exceptions in retry_on are retried; anything else propagates
    immediately. `sleep` takes seconds.
    """
    last_error: Exception | None = None
    for attempt in range(1, policy.max_attempts + 1):
        try:
            return fn()
        except retry_on as e:
            last_error = e
            if attempt == policy.max_attempts:
                break
            delay_ms = policy.delay_ms(attempt)
            logger.warning(
                "%s failed, retrying in %.0fms (attempt %d/%d): %s",
                label, delay_ms, attempt, policy.max_attempts, e,
            )
            sleep(delay_ms / 1000)

    assert last_error is not None
    logger.error("%s failed after %d attempts", label, policy.max_attempts)
    raise RetryExhaustedError(policy.max_attempts, last_error) from last_error
