"""Monthly and annual training report generation."""

import logging

from training_reports.analytics.breakdown import calculate_by_type, calculate_monthly_breakdown
from training_reports.analytics.period import end_of_day, resolve_period, start_of_day
from training_reports.analytics.rankings import get_top_activities
from training_reports.analytics.records import get_records_in_period
from training_reports.analytics.summary import calculate_summary, count_activities
from training_reports.analytics.training_load import calculate_period_training_load
from training_reports.analytics.zones import calculate_zone_distribution
from training_reports.config import DEFAULT_FC_MAX, DEFAULT_FC_REST
from training_reports.models.report import ReportData, ReportPeriod
from training_reports.services.heart_rate_zones import HeartRateZoneModel
from training_reports.services.record_types import RecordTypeFormatter
from training_reports.services.training_load_model import TrainingLoadModel
from training_reports.storage.repositories import ActivityStore, PersonalRecordStore, UserProfileStore

logger = logging.getLogger(__name__)


class ReportGenerator:
    """Assemble period reports from a user's activities and records."""

    def __init__(
        self,
        user_store: UserProfileStore,
        activity_store: ActivityStore,
        record_store: PersonalRecordStore,
        zone_model: HeartRateZoneModel = None,
        load_model: TrainingLoadModel = None,
        formatter: RecordTypeFormatter = None,
    ):
        """Initialize report generator.

        Args:
            user_store: Provides heart rate settings of users
            activity_store: Provides activities by date range
            record_store: Provides personal records by date range and type
            zone_model: Heart rate zone model (default: HeartRateZoneModel)
            load_model: Training load model (default: TrainingLoadModel)
            formatter: Record type names (default: RecordTypeFormatter)
        """
        self.user_store = user_store
        self.activity_store = activity_store
        self.record_store = record_store
        self.zone_model = zone_model or HeartRateZoneModel()
        self.load_model = load_model or TrainingLoadModel()
        self.formatter = formatter or RecordTypeFormatter()

    @classmethod
    def from_store(cls, store, **kwargs) -> "ReportGenerator":
        """Build a generator backed by a single store implementing all lookups."""
        return cls(store, store, store, **kwargs)

    def generate_monthly_report(self, user_id: int, month: int, year: int) -> ReportData:
        """Report covering one calendar month."""
        return self.generate_report(user_id, resolve_period("monthly", year, month))

    def generate_annual_report(self, user_id: int, year: int) -> ReportData:
        """Report covering one calendar year, with a monthly breakdown."""
        return self.generate_report(user_id, resolve_period("annual", year))

    def generate_report(self, user_id: int, period: ReportPeriod) -> ReportData:
        """Run every aggregation for ``period``.

        Any collaborator failure (unknown user, storage error) propagates and
        no partial report is returned.
        """
        logger.info(f"Generating {period.type} report '{period.label}' for user {user_id}")

        user = self.user_store.find_user(user_id)
        if not user.fc_max or not user.fc_rest:
            logger.warning(
                f"User {user_id} has incomplete heart rate settings, "
                f"falling back to {DEFAULT_FC_MAX}/{DEFAULT_FC_REST} bpm"
            )
        fc_max = user.fc_max or DEFAULT_FC_MAX
        fc_rest = user.fc_rest or DEFAULT_FC_REST

        activities = self.activity_store.query_by_user_and_date_range(
            user_id, start_of_day(period.start_date), end_of_day(period.end_date)
        )
        logger.debug(f"Loaded {len(activities)} activities for {period.label}")

        heart_rate_zones = self.zone_model.build_zones(fc_max, fc_rest)
        zone_distribution, polarization = calculate_zone_distribution(
            activities, heart_rate_zones, self.zone_model
        )

        report = ReportData(
            period=period,
            summary=calculate_summary(activities),
            heart_rate_zones=heart_rate_zones,
            zone_distribution=zone_distribution,
            polarization=polarization,
            training_load=calculate_period_training_load(
                user_id, period.start_date, period.end_date, self.activity_store, self.load_model
            ),
            top_activities=get_top_activities(activities),
            records=get_records_in_period(
                user_id, period.start_date, period.end_date, self.record_store, self.formatter
            ),
            by_type=calculate_by_type(activities),
            activities_count=count_activities(activities),
            monthly_breakdown=(
                calculate_monthly_breakdown(activities) if period.type == "annual" else None
            ),
        )

        logger.info(f"Report '{period.label}' ready: {report.summary.total_activities} activities")
        return report
