"""Models exchanged with the heart rate zone and training load collaborators."""

from datetime import date
from typing import Literal

from pydantic import Field

from training_reports.models.base import CamelModel


class HeartRateZoneDefinition(CamelModel):
    """One heart rate zone with its bpm bounds."""

    zone: int
    name: str
    description: str
    min: int
    max: int
    color: str


class ZoneDurationResult(CamelModel):
    """Seconds spent in each zone, aligned positionally with the zone list."""

    durations: list[float] = Field(default_factory=list)
    total_seconds: float = 0
    source: Literal["samples", "average", "none"] = "none"


class IntensityBands(CamelModel):
    low: float = 0
    moderate: float = 0
    high: float = 0


class PolarizationSummary(CamelModel):
    """Low/moderate/high split compared with an 80/10/10 target."""

    totals: IntensityBands
    percentages: IntensityBands
    target: IntensityBands
    score: float
    focus: str
    message: str


class TrainingLoadDay(CamelModel):
    """Daily point of the CTL/ATL/TSB series."""

    date: date
    trimp: float
    ctl: float
    atl: float
    tsb: float


class TrainingLoadStatus(CamelModel):
    ctl: float
    atl: float
    tsb: float
    status: str
    recommendation: str


class TrainingLoadResult(CamelModel):
    history: list[TrainingLoadDay] = Field(default_factory=list)
    current: TrainingLoadStatus
