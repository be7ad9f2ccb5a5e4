"""Tests for reporting formatters."""

import json

import pytest

from oceanova.models.cycle import PublishedState, RefreshStatus
from oceanova.reporting.formatters import (
    format_cycle_text,
    format_state_json,
    format_time_savings,
    state_to_dict,
)
from oceanova.tests.factories import START, make_cycle_result, make_reading


class TestFormatTimeSavings:
    @pytest.mark.parametrize(
        ("hours", "expected"),
        [
            (1.5, "+1h 30min"),
            (-0.75, "-0h 45min"),
            (0.0, "+0h 0min"),
            (2.25, "+2h 15min"),
            (-3.0, "-3h 0min"),
            (2.999, "+3h 0min"),
        ],
    )
    def test_format(self, hours, expected):
        assert format_time_savings(hours) == expected


class TestFormatCycleText:
    def test_calm(self):
        text = format_cycle_text(make_cycle_result())
        assert "=== Arabian Sea (15, 65) | Cycle 1 ===" in text
        assert "Alerts: none" in text
        assert "time -0h 45min" in text
        assert "Wed 2026-02-11" in text
        assert "HIGH" in text.splitlines()[-5]

    def test_alerts_most_severe_first(self):
        reading = make_reading(wind_speed_knots=40.0, wave_height_m=3.0, temperature_c=36.0)
        lines = format_cycle_text(make_cycle_result(reading)).splitlines()
        idx = lines.index("Alerts (3):")
        assert lines[idx + 1].startswith("  [HIGH] cyclone")
        assert lines[idx + 2].startswith("  [MEDIUM] heat")
        assert lines[idx + 3].startswith("  [MEDIUM] swell")


class TestStateToDict:
    def test_idle(self):
        data = state_to_dict(PublishedState())
        assert data["status"] == "idle"
        assert data["result"] is None
        assert data["location"] is None

    def test_published(self):
        result = make_cycle_result(
            make_reading(wind_speed_knots=40.0, wave_height_m=3.0, temperature_c=36.0)
        )
        data = state_to_dict(PublishedState().succeeded(result))

        assert data["status"] == "ok"
        assert data["location"] == {"name": "Arabian Sea", "latitude": 15, "longitude": 65}
        assert data["updated_at"] == result.completed_at.isoformat()
        r = data["result"]
        assert [a["type"] for a in r["alerts"]] == ["cyclone", "heat", "swell"]
        assert [d["risk"] for d in r["forecast"]] == ["low", "low", "low", "medium", "high"]
        assert [d["day"] for d in r["forecast"]] == ["Wed", "Thu", "Fri", "Sat", "Sun"]
        assert r["advisory"]["time_savings"] == "-0h 45min"
        assert r["advisory"]["current_speed_knots"] == 12.5
        assert r["reading"]["observed_at"] == START.isoformat()

    def test_error_keeps_result(self):
        result = make_cycle_result()
        state = PublishedState().succeeded(result).failed(
            "Upstream unreachable (openweather): HTTP 500", "weather-fetch", START
        )
        data = state_to_dict(state)
        assert data["status"] == RefreshStatus.ERROR.value
        assert data["error"].startswith("Upstream unreachable")
        assert data["error_stage"] == "weather-fetch"
        assert data["result"]["cycle_id"] == 1

    def test_json_serializable(self):
        state = PublishedState().succeeded(make_cycle_result())
        assert json.loads(format_state_json(state))["result"]["advisory"]["fuel_efficiency_pct"] == 87.5
