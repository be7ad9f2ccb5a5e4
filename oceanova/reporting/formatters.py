"""Output formatters for published refresh state."""

import json
import math
from dataclasses import asdict

from oceanova.hazards.alert_classifier import sort_alerts
from oceanova.models.cycle import CycleResult, PublishedState


def format_time_savings(hours: float) -> str:
    """Signed hours as '+1h 30min' / '-0h 45min'."""
    sign = "-" if hours < 0 else "+"
    abs_hours = abs(hours)
    h = math.floor(abs_hours)
    m = round((abs_hours - h) * 60)
    if m == 60:
        h, m = h + 1, 0
    return f"{sign}{h}h {m}min"


def format_cycle_text(r: CycleResult) -> str:
    """Plain text report for the CLI and logs."""
    w = r.reading
    a = r.advisory
    lines = [
        f"=== {r.location.name} ({r.location.latitude}, {r.location.longitude}) "
        f"| Cycle {r.cycle_id} ===",
        f"Temp {w.temperature_c:.1f}°C | Wind {w.wind_speed_knots:.1f} kn "
        f"@ {w.wind_direction_deg:.0f}° | Waves {w.wave_height_m:.1f} m "
        f"(sea state {w.sea_state})",
        f"Visibility {w.visibility_km:.1f} km | Pressure {w.pressure_hpa:.0f} hPa "
        f"| Humidity {w.humidity_pct:.0f}% | Current {w.current_speed_knots:.1f} kn "
        f"@ {w.current_direction_deg:.0f}°",
    ]
    if r.alerts:
        lines.append(f"Alerts ({len(r.alerts)}):")
        for alert in sort_alerts(r.alerts):
            lines.append(
                f"  [{alert.severity.value.upper()}] {alert.type.value}: {alert.message}"
            )
    else:
        lines.append("Alerts: none")

    lines.append("Forecast:")
    for day in r.forecast:
        lines.append(
            f"  {day.day_label} {day.date.isoformat()}  {day.temp_c:5.1f}°C  "
            f"{day.wind_speed_knots:5.1f} kn  {day.wave_height_m:4.1f} m  "
            f"{day.visibility_km:5.1f} km  {day.risk.value.upper()}"
        )

    lines.append(
        f"Advisory: speed {a.current_speed_knots:.1f} -> {a.optimal_speed_knots:.1f} kn "
        f"| fuel efficiency {a.fuel_efficiency_pct:.0f}% "
        f"| route deviation {a.route_deviation_nm:.1f} nm "
        f"| time {format_time_savings(a.time_savings_hours)}"
    )
    for rec in a.recommendations:
        lines.append(f"  - {rec}")
    lines.append(f"Duration: {r.duration_seconds:.1f}s")
    return "\n".join(lines)


def state_to_dict(s: PublishedState) -> dict:
    """JSON-ready view of the published state."""
    data: dict = {
        "status": s.status.value,
        "location": asdict(s.location) if s.location else None,
        "error": s.error_message,
        "error_stage": s.error_stage,
        "updated_at": s.updated_at.isoformat() if s.updated_at else None,
        "result": None,
    }
    r = s.result
    if r is None:
        return data

    w = r.reading
    data["result"] = {
        "cycle_id": r.cycle_id,
        "completed_at": r.completed_at.isoformat(),
        "reading": {
            "location": asdict(w.location),
            "observed_at": w.observed_at.isoformat(),
            "temperature_c": w.temperature_c,
            "wind_speed_knots": w.wind_speed_knots,
            "wind_direction_deg": w.wind_direction_deg,
            "wave_height_m": w.wave_height_m,
            "visibility_km": w.visibility_km,
            "pressure_hpa": w.pressure_hpa,
            "humidity_pct": w.humidity_pct,
            "sea_state": w.sea_state,
            "current_speed_knots": w.current_speed_knots,
            "current_direction_deg": w.current_direction_deg,
        },
        "alerts": [
            {"type": a.type.value, "severity": a.severity.value, "message": a.message}
            for a in sort_alerts(r.alerts)
        ],
        "forecast": [
            {
                "date": d.date.isoformat(),
                "day": d.day_label,
                "temp_c": d.temp_c,
                "wind_speed_knots": d.wind_speed_knots,
                "wave_height_m": d.wave_height_m,
                "visibility_km": d.visibility_km,
                "risk": d.risk.value,
            }
            for d in r.forecast
        ],
        "advisory": {
            "current_speed_knots": r.advisory.current_speed_knots,
            "optimal_speed_knots": r.advisory.optimal_speed_knots,
            "fuel_efficiency_pct": r.advisory.fuel_efficiency_pct,
            "route_deviation_nm": r.advisory.route_deviation_nm,
            "time_savings_hours": r.advisory.time_savings_hours,
            "time_savings": format_time_savings(r.advisory.time_savings_hours),
            "recommendations": list(r.advisory.recommendations),
        },
    }
    return data


def format_state_json(s: PublishedState) -> str:
    return json.dumps(state_to_dict(s), indent=2)
