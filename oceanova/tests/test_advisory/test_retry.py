"""Tests for the retry policy and backoff combinator."""

import pytest

from oceanova.advisory.retry import RetryExhaustedError, RetryPolicy, retry_with_backoff
from oceanova.config.schema import RetryConfig
from oceanova.errors import TransportError


class _Flaky:
    """Fails `failures` times with TransportError, then returns 'ok'."""

    def __init__(self, failures: int):
        self.failures = failures
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise TransportError(f"fail {self.calls}", service="test", status_code=503)
        return "ok"


class TestRetryPolicy:
    def test_default_delays(self):
        assert RetryPolicy().delays_ms() == [1000, 2000, 4000, 8000]

    def test_total_wait(self):
        assert sum(RetryPolicy().delays_ms()) == 15000

    def test_from_config(self):
        policy = RetryPolicy.from_config(
            RetryConfig(max_attempts=3, base_delay_ms=500, multiplier=3.0)
        )
        assert policy.delays_ms() == [500, 1500]

    def test_single_attempt_has_no_delays(self):
        assert RetryPolicy(max_attempts=1).delays_ms() == []


class TestRetryWithBackoff:
    def test_first_try_success(self):
        sleeps: list[float] = []
        fn = _Flaky(0)
        assert retry_with_backoff(fn, RetryPolicy(), (TransportError,), sleeps.append) == "ok"
        assert fn.calls == 1
        assert sleeps == []

    def test_four_failures_then_success(self):
        sleeps: list[float] = []
        fn = _Flaky(4)
        result = retry_with_backoff(fn, RetryPolicy(), (TransportError,), sleeps.append)
        assert result == "ok"
        assert fn.calls == 5
        assert sleeps == [1.0, 2.0, 4.0, 8.0]
        assert sum(sleeps) * 1000 == pytest.approx(15000)

    def test_always_failing(self):
        sleeps: list[float] = []
        fn = _Flaky(100)
        with pytest.raises(RetryExhaustedError) as exc_info:
            retry_with_backoff(fn, RetryPolicy(), (TransportError,), sleeps.append)
        assert fn.calls == 5
        assert exc_info.value.attempts == 5
        assert isinstance(exc_info.value.last_error, TransportError)
        # no wait after the final attempt
        assert len(sleeps) == 4

    def test_non_retryable_error_propagates_immediately(self):
        sleeps: list[float] = []
        calls = []

        def fn():
            calls.append(1)
            raise ValueError("schema")

        with pytest.raises(ValueError):
            retry_with_backoff(fn, RetryPolicy(), (TransportError,), sleeps.append)
        assert len(calls) == 1
        assert sleeps == []

    def test_sleep_can_abort(self):
        class Stop(Exception):
            pass

        def sleep(_seconds: float) -> None:
            raise Stop

        fn = _Flaky(3)
        with pytest.raises(Stop):
            retry_with_backoff(fn, RetryPolicy(), (TransportError,), sleep)
        assert fn.calls == 1
