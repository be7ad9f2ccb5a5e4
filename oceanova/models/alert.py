"""Hazard alert models."""

from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias

from oceanova.models.common import Severity


class AlertType(StrEnum):
    CYCLONE = "cyclone"
    WIND = "wind"
    SWELL = "swell"
    FOG = "fog"
    HEAT = "heat"


@dataclass(frozen=True)
class Alert:
    type: AlertType
    severity: Severity
    message: str


AlertSet: TypeAlias = frozenset[Alert]
