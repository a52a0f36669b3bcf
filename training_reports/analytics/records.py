"""Personal records achieved during a period."""

import logging
import math
from collections.abc import Sequence
from datetime import date
from typing import Optional

from training_reports.analytics.period import end_of_day, start_of_day
from training_reports.analytics.rounding import round_half_up
from training_reports.config import MIN_RECORD_IMPROVEMENT_PCT, RECORDS_LIMIT, REPORT_RECORD_TYPES
from training_reports.models.activity import PersonalRecord
from training_reports.models.report import ReportRecord, ReportRecords
from training_reports.services.record_types import RecordTypeFormatter
from training_reports.storage.repositories import PersonalRecordStore

logger = logging.getLogger(__name__)


def record_improvement(record: PersonalRecord) -> Optional[float]:
    """Gain over the previous value in percent (one decimal).

    ``None`` for a first record or when the previous value is zero.
    """
    if record.previous_value is None or record.previous_value == 0:
        return None
    ratio = (record.value - record.previous_value) / record.previous_value
    return round_half_up(ratio * 1000) / 10


def classify_records(
    records: Sequence[PersonalRecord],
    formatter: RecordTypeFormatter,
    limit: int = RECORDS_LIMIT,
    min_improvement: float = MIN_RECORD_IMPROVEMENT_PCT,
) -> ReportRecords:
    """Split records into first-ever and improved ones.

    Improvements below ``min_improvement`` percent are dropped. Improved
    records are ordered by improvement, gains over a zero previous value
    first; new ones keep the input order (newest first). Each list holds at
    most ``limit`` records.
    """
    new_records = []
    improved_records = []

    for record in records:
        improvement = record_improvement(record)
        if improvement is not None and improvement < min_improvement:
            continue

        report_record = ReportRecord(
            id=record.id,
            record_type=record.record_type,
            record_type_name=formatter.format_record_type_name(record.record_type),
            activity_type=record.activity_type,
            value=record.value,
            unit=record.unit,
            achieved_at=record.achieved_at.date(),
            previous_value=record.previous_value,
            improvement=improvement,
        )

        if record.is_first:
            new_records.append(report_record)
        else:
            improved_records.append(report_record)

    # A zero previous value is an unbounded gain
    improved_records.sort(
        key=lambda r: math.inf if r.improvement is None else r.improvement, reverse=True
    )

    return ReportRecords(new=new_records[:limit], improved=improved_records[:limit])


def get_records_in_period(
    user_id: int,
    start_date: date,
    end_date: date,
    record_store: PersonalRecordStore,
    formatter: RecordTypeFormatter,
) -> ReportRecords:
    """Fetch the period's relevant records and classify them."""
    records = record_store.query_by_user_and_date_range_and_types(
        user_id, start_of_day(start_date), end_of_day(end_date), REPORT_RECORD_TYPES
    )
    logger.debug(f"Found {len(records)} records between {start_date} and {end_date}")
    return classify_records(records, formatter)
