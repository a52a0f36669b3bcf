"""Report output models."""

from datetime import date
from typing import Literal, Optional

from pydantic import Field, model_validator

from training_reports.models.base import CamelModel
from training_reports.models.training import (
    HeartRateZoneDefinition,
    PolarizationSummary,
    TrainingLoadDay,
)

PeriodType = Literal["monthly", "annual"]


class ReportPeriod(CamelModel):
    """Inclusive calendar boundaries of a report."""

    type: PeriodType
    start_date: date
    end_date: date
    label: str


class EnvironmentTotals(CamelModel):
    """Indoor or outdoor sub-total of the summary."""

    activities: int = 0
    distance: float = 0
    duration: float = 0
    elevation: float = 0
    trimp: float = 0


class ReportSummary(CamelModel):
    total_activities: int = 0
    total_distance: float = 0
    total_duration: float = 0
    total_elevation: float = 0
    total_calories: float = 0
    total_trimp: float = 0
    average_heart_rate: Optional[int] = None
    average_speed: Optional[float] = None
    indoor: EnvironmentTotals = Field(default_factory=EnvironmentTotals)
    outdoor: EnvironmentTotals = Field(default_factory=EnvironmentTotals)


class ZoneBucket(CamelModel):
    """Time spent in one heart rate zone over the period."""

    zone: int
    name: str
    description: str
    min: int
    max: int
    color: str
    seconds: int
    hours: float
    percentage: float


class ReportTrainingLoad(CamelModel):
    start_ctl: float = 0
    end_ctl: float = 0
    ctl_change: float = 0
    start_atl: float = 0
    end_atl: float = 0
    atl_change: float = 0
    history: list[TrainingLoadDay] = Field(default_factory=list)


class ReportActivity(CamelModel):
    """Slim projection of an activity used in rankings."""

    id: int
    date: date
    type: str
    sub_sport: Optional[str] = None
    distance: float = 0
    duration: float = 0
    trimp: Optional[float] = None
    elevation_gain: Optional[float] = None
    avg_heart_rate: Optional[float] = None
    avg_speed: Optional[float] = None


class TopActivities(CamelModel):
    by_distance: list[ReportActivity] = Field(default_factory=list)
    by_duration: list[ReportActivity] = Field(default_factory=list)
    by_trimp: list[ReportActivity] = Field(default_factory=list)
    by_elevation: list[ReportActivity] = Field(default_factory=list)


class ReportRecord(CamelModel):
    id: int
    record_type: str
    record_type_name: str
    activity_type: str
    value: float
    unit: str
    achieved_at: date
    previous_value: Optional[float] = None
    improvement: Optional[float] = None


class ReportRecords(CamelModel):
    new: list[ReportRecord] = Field(default_factory=list)
    improved: list[ReportRecord] = Field(default_factory=list)


class TypeSummary(CamelModel):
    type: str
    count: int = 0
    distance: float = 0
    duration: float = 0
    trimp: float = 0
    indoor: int = 0
    outdoor: int = 0


class ActivitiesCount(CamelModel):
    indoor: int = 0
    outdoor: int = 0
    total: int = 0


class MonthlyBreakdown(CamelModel):
    month: int
    month_name: str
    activities: int = 0
    distance: int = 0
    duration: int = 0
    elevation: int = 0
    trimp: int = 0
    avg_speed: Optional[float] = None
    avg_heart_rate: Optional[int] = None


class ReportData(CamelModel):
    """Complete period report."""

    period: ReportPeriod
    summary: ReportSummary
    heart_rate_zones: list[HeartRateZoneDefinition]
    zone_distribution: list[ZoneBucket]
    polarization: PolarizationSummary
    training_load: ReportTrainingLoad
    top_activities: TopActivities
    records: ReportRecords
    by_type: list[TypeSummary]
    activities_count: ActivitiesCount
    monthly_breakdown: Optional[list[MonthlyBreakdown]] = None

    @model_validator(mode="after")
    def check_monthly_breakdown(self) -> "ReportData":
        is_annual = self.period.type == "annual"
        if is_annual and self.monthly_breakdown is None:
            raise ValueError("Annual reports require a monthly breakdown")
        if not is_annual and self.monthly_breakdown is not None:
            raise ValueError("Only annual reports carry a monthly breakdown")
        if is_annual and len(self.monthly_breakdown) != 12:
            raise ValueError("Monthly breakdown must have exactly 12 entries")
        return self
