"""Vessel advisory models."""

from dataclasses import dataclass

from pydantic import BaseModel, Field


class AdvisoryPayload(BaseModel):
    """Wire shape of the advisory service's JSON text payload."""

    model_config = {"extra": "ignore"}

    optimalSpeed: float
    fuelEfficiency: float = Field(ge=0.0, le=100.0)
    routeDeviation: float
    timeSavings: float
    recommendations: list[str]


@dataclass(frozen=True)
class VesselAdvisory:
    current_speed_knots: float
    optimal_speed_knots: float
    fuel_efficiency_pct: float
    route_deviation_nm: float
    time_savings_hours: float
    recommendations: tuple[str, ...]

    @classmethod
    def from_payload(
        cls, payload: AdvisoryPayload, current_speed_knots: float
    ) -> "VesselAdvisory":
        return cls(
            current_speed_knots=current_speed_knots,
            optimal_speed_knots=payload.optimalSpeed,
            fuel_efficiency_pct=payload.fuelEfficiency,
            route_deviation_nm=payload.routeDeviation,
            time_savings_hours=payload.timeSavings,
            recommendations=tuple(payload.recommendations),
        )
