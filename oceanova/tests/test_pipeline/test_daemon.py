"""Tests for the refresh daemon."""

import time
from unittest.mock import MagicMock

import pytest

from oceanova.daemon import RefreshDaemon
from oceanova.pipeline.refresh_orchestrator import RefreshOrchestrator, RefreshOutcome


def _wait_for(predicate, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


@pytest.fixture
def orchestrator() -> MagicMock:
    orch = MagicMock(spec=RefreshOrchestrator)
    orch.refresh.return_value = RefreshOutcome.PUBLISHED
    return orch


class TestRefreshDaemon:
    """Tests for RefreshDaemon lifecycle."""

    def test_first_cycle_runs_immediately(self, orchestrator):
        daemon = RefreshDaemon(orchestrator, interval=60)
        assert daemon.started_at is None
        daemon.start()
        assert daemon.started_at is not None
        try:
            assert _wait_for(lambda: orchestrator.refresh.call_count >= 1)
            assert daemon.running
        finally:
            daemon.stop(timeout=5)
        assert not daemon.running

    def test_prevents_duplicate_start(self, orchestrator):
        daemon = RefreshDaemon(orchestrator, interval=60)
        daemon.start()
        try:
            with pytest.raises(RuntimeError):
                daemon.start()
        finally:
            daemon.stop(timeout=5)

    def test_location_change_triggers_cycle(self, orchestrator, bay_of_bengal):
        daemon = RefreshDaemon(orchestrator, interval=60)
        daemon.start()
        try:
            assert _wait_for(lambda: orchestrator.refresh.call_count == 1)
            daemon.change_location(bay_of_bengal)
            assert _wait_for(lambda: orchestrator.refresh.call_count == 2)
        finally:
            daemon.stop(timeout=5)
        orchestrator.select_location.assert_called_once_with(bay_of_bengal)

    def test_stop_cancels_in_flight_and_ends_ticks(self, orchestrator):
        daemon = RefreshDaemon(orchestrator, interval=0.05)
        daemon.start()
        assert _wait_for(lambda: orchestrator.refresh.call_count >= 1)
        daemon.stop(timeout=5)

        orchestrator.cancel_in_flight.assert_called()
        calls = orchestrator.refresh.call_count
        time.sleep(0.2)
        assert orchestrator.refresh.call_count == calls

    def test_run_one_cycle_success(self, orchestrator):
        daemon = RefreshDaemon(orchestrator)
        daemon._run_one_cycle()
        assert daemon.total_cycles == 1
        assert daemon.total_successes == 1
        assert daemon.total_failures == 0

    def test_run_one_cycle_failure(self, orchestrator):
        orchestrator.refresh.return_value = RefreshOutcome.FAILED
        daemon = RefreshDaemon(orchestrator)
        daemon._run_one_cycle()
        assert daemon.total_successes == 0
        assert daemon.total_failures == 1

    def test_superseded_counts_neither(self, orchestrator):
        orchestrator.refresh.return_value = RefreshOutcome.SUPERSEDED
        daemon = RefreshDaemon(orchestrator)
        daemon._run_one_cycle()
        assert daemon.total_cycles == 1
        assert daemon.total_successes == 0
        assert daemon.total_failures == 0

    def test_run_one_cycle_crash(self, orchestrator):
        """Exception in a cycle is caught and counted as failure."""
        orchestrator.refresh.side_effect = RuntimeError("boom")
        daemon = RefreshDaemon(orchestrator)
        daemon._run_one_cycle()
        assert daemon.total_failures == 1
