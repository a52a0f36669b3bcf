"""Export of generated training reports (JSON, text summary, Excel)."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from training_reports.analytics.rounding import round_half_up
from training_reports.config import EXPORT_DIR
from training_reports.models.report import ReportActivity, ReportData

logger = logging.getLogger(__name__)

HEADER_FILL = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True)
TITLE_FONT = Font(bold=True, size=12)

RANKING_TITLES = {
    "by_distance": "Top 5 - Distance",
    "by_duration": "Top 5 - Duration",
    "by_trimp": "Top 5 - TRIMP",
    "by_elevation": "Top 5 - Elevation",
}


def format_duration(seconds: float) -> str:
    """Seconds as ``H:MM``."""
    minutes = int(seconds // 60)
    return f"{minutes // 60}:{minutes % 60:02d}"


class ReportExporter:
    """Export one generated report."""

    def __init__(self, report: ReportData):
        """Initialize report exporter.

        Args:
            report: Report to export
        """
        self.report = report

    def _default_path(self, suffix: str) -> Path:
        period = self.report.period
        stamp = period.start_date.strftime("%Y-%m") if period.type == "monthly" else str(period.start_date.year)
        return EXPORT_DIR / f"training_report_{period.type}_{stamp}{suffix}"

    # JSON

    def to_dict(self) -> dict:
        """Report as a JSON-compatible dict with camelCase keys.

        ``monthlyBreakdown`` is only present for annual reports.
        """
        exclude = {"monthly_breakdown"} if self.report.monthly_breakdown is None else None
        return self.report.model_dump(mode="json", by_alias=True, exclude=exclude)

    def to_json(self, output_path: Optional[str] = None) -> str:
        """Serialize the report; write it to ``output_path`` when given.

        Returns:
            JSON document
        """
        document = json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
        if output_path:
            path = Path(output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(document, encoding="utf-8")
            logger.info(f"JSON report exported to {path}")
        return document

    # Text

    def generate_summary_report(self) -> str:
        """Generate a plain-text summary report.

        Returns:
            Summary report as string
        """
        report = self.report
        summary = report.summary
        lines = []
        lines.append("=" * 60)
        lines.append(f"TRAINING REPORT - {report.period.label.upper()}")
        lines.append("=" * 60)
        lines.append(f"Period: {report.period.start_date} to {report.period.end_date}")
        lines.append("")

        lines.append("OVERVIEW")
        lines.append("-" * 40)
        lines.append(f"Activities: {summary.total_activities}")
        lines.append(f"Distance: {summary.total_distance / 1000:,.1f} km")
        lines.append(f"Duration: {format_duration(summary.total_duration)}")
        lines.append(f"Elevation: {summary.total_elevation:,.0f} m")
        lines.append(f"Calories: {summary.total_calories:,.0f} kcal")
        lines.append(f"TRIMP: {summary.total_trimp:,.0f}")
        if summary.average_heart_rate is not None:
            lines.append(f"Average heart rate: {summary.average_heart_rate} bpm")
        if summary.average_speed is not None:
            lines.append(f"Average speed: {summary.average_speed} km/h")
        lines.append(
            f"Indoor / outdoor: {report.activities_count.indoor} / {report.activities_count.outdoor}"
        )
        lines.append("")

        lines.append("HEART RATE ZONES")
        lines.append("-" * 40)
        for bucket in report.zone_distribution:
            lines.append(f"{bucket.name:<20} {bucket.hours:>7.2f} h {bucket.percentage:>6.1f}%")
        lines.append(f"Polarization score: {report.polarization.score} ({report.polarization.focus})")
        lines.append("")

        load = report.training_load
        lines.append("TRAINING LOAD")
        lines.append("-" * 40)
        lines.append(f"CTL (Fitness): {load.start_ctl} -> {load.end_ctl} ({load.ctl_change:+.1f})")
        lines.append(f"ATL (Fatigue): {load.start_atl} -> {load.end_atl} ({load.atl_change:+.1f})")
        lines.append("")

        lines.append("PERSONAL RECORDS")
        lines.append("-" * 40)
        for record in report.records.new:
            lines.append(f"  New: {record.record_type_name} ({record.activity_type}) {record.value} {record.unit}")
        for record in report.records.improved:
            lines.append(
                f"  Improved: {record.record_type_name} ({record.activity_type}) "
                f"{record.value} {record.unit} (+{record.improvement}%)"
            )
        if not report.records.new and not report.records.improved:
            lines.append("  None")
        lines.append("")

        lines.append("BY TYPE")
        lines.append("-" * 40)
        for group in report.by_type:
            lines.append(f"{group.type:<20} {group.count:>4} {group.distance / 1000:>9.1f} km")

        if report.monthly_breakdown is not None:
            lines.append("")
            lines.append("MONTHLY BREAKDOWN")
            lines.append("-" * 40)
            for month in report.monthly_breakdown:
                lines.append(
                    f"{month.month_name:<10} {month.activities:>4} {month.distance / 1000:>9.1f} km "
                    f"{format_duration(month.duration):>8}"
                )

        lines.append("")
        lines.append("=" * 60)
        lines.append("END OF REPORT")
        lines.append("=" * 60)

        return "\n".join(lines)

    # Excel

    def export_to_excel(self, output_path: Optional[str] = None) -> str:
        """Export the report to an Excel workbook.

        Args:
            output_path: Output file path (generated if not provided)

        Returns:
            Path to exported file
        """
        path = Path(output_path) if output_path else self._default_path(".xlsx")
        path.parent.mkdir(parents=True, exist_ok=True)

        wb = Workbook()
        wb.remove(wb.active)

        self._add_summary_sheet(wb)
        self._add_zones_sheet(wb)
        self._add_training_load_sheet(wb)
        self._add_top_activities_sheet(wb)
        self._add_records_sheet(wb)
        self._add_by_type_sheet(wb)
        if self.report.monthly_breakdown is not None:
            self._add_monthly_sheet(wb)

        wb.save(path)
        logger.info(f"Excel report exported to {path}")

        return str(path)

    def _add_summary_sheet(self, wb: Workbook):
        ws = wb.create_sheet("Summary")
        summary = self.report.summary

        ws.append(["Metric", "Total", "Indoor", "Outdoor"])
        ws.append(["Activities", summary.total_activities, summary.indoor.activities, summary.outdoor.activities])
        ws.append(["Distance (km)", summary.total_distance / 1000,
                   summary.indoor.distance / 1000, summary.outdoor.distance / 1000])
        ws.append(["Duration (h)", summary.total_duration / 3600,
                   summary.indoor.duration / 3600, summary.outdoor.duration / 3600])
        ws.append(["Elevation (m)", summary.total_elevation, summary.indoor.elevation, summary.outdoor.elevation])
        ws.append(["TRIMP", summary.total_trimp, summary.indoor.trimp, summary.outdoor.trimp])
        ws.append(["Calories", summary.total_calories])
        ws.append(["Average heart rate", summary.average_heart_rate])
        ws.append(["Average speed", summary.average_speed])

        self._format_header(ws)
        self._auto_adjust_columns(ws)

    def _add_zones_sheet(self, wb: Workbook):
        ws = wb.create_sheet("Zones")

        ws.append(["Zone", "Name", "Min (bpm)", "Max (bpm)", "Hours", "Percentage"])
        for bucket in self.report.zone_distribution:
            ws.append([bucket.zone, bucket.name, bucket.min, bucket.max, bucket.hours, bucket.percentage])

        polarization = self.report.polarization
        ws.append([])
        ws.append(["Polarization"])
        ws.cell(row=ws.max_row, column=1).font = TITLE_FONT
        ws.append(["Low (%)", round_half_up(polarization.percentages.low, 1)])
        ws.append(["Moderate (%)", round_half_up(polarization.percentages.moderate, 1)])
        ws.append(["High (%)", round_half_up(polarization.percentages.high, 1)])
        ws.append(["Score", polarization.score])
        ws.append(["Focus", polarization.focus])

        self._format_header(ws)
        self._auto_adjust_columns(ws)

    def _add_training_load_sheet(self, wb: Workbook):
        ws = wb.create_sheet("Training Load")
        load = self.report.training_load

        ws.append(["Metric", "Start", "End", "Change"])
        ws.append(["CTL", load.start_ctl, load.end_ctl, load.ctl_change])
        ws.append(["ATL", load.start_atl, load.end_atl, load.atl_change])
        ws.append([])

        ws.append(["Date", "TRIMP", "CTL", "ATL", "TSB"])
        for day in load.history:
            ws.append([day.date.isoformat(), day.trimp, day.ctl, day.atl, day.tsb])

        self._format_header(ws)
        self._auto_adjust_columns(ws)

    def _add_top_activities_sheet(self, wb: Workbook):
        ws = wb.create_sheet("Top Activities")
        top = self.report.top_activities

        for field, title in RANKING_TITLES.items():
            ws.append([title])
            ws.cell(row=ws.max_row, column=1).font = TITLE_FONT
            ws.append(["Date", "Type", "Distance (km)", "Duration", "TRIMP", "Elevation (m)"])
            for activity in getattr(top, field):
                ws.append(self._activity_row(activity))
            ws.append([])

        self._format_header(ws)
        self._auto_adjust_columns(ws)

    @staticmethod
    def _activity_row(activity: ReportActivity) -> list:
        return [
            activity.date.isoformat(),
            activity.type,
            activity.distance / 1000,
            format_duration(activity.duration),
            activity.trimp,
            activity.elevation_gain,
        ]

    def _add_records_sheet(self, wb: Workbook):
        ws = wb.create_sheet("Records")
        records = self.report.records

        ws.append(["Status", "Record", "Type", "Value", "Unit", "Date", "Previous", "Improvement (%)"])
        for status, items in (("New", records.new), ("Improved", records.improved)):
            for record in items:
                ws.append([
                    status,
                    record.record_type_name,
                    record.activity_type,
                    record.value,
                    record.unit,
                    record.achieved_at.isoformat(),
                    record.previous_value,
                    record.improvement,
                ])

        self._format_header(ws)
        self._auto_adjust_columns(ws)

    def _add_by_type_sheet(self, wb: Workbook):
        ws = wb.create_sheet("By Type")

        ws.append(["Type", "Count", "Distance (km)", "Duration (h)", "TRIMP", "Indoor", "Outdoor"])
        for group in self.report.by_type:
            ws.append([
                group.type, group.count, group.distance / 1000, group.duration / 3600,
                group.trimp, group.indoor, group.outdoor,
            ])

        self._format_header(ws)
        self._auto_adjust_columns(ws)

    def _add_monthly_sheet(self, wb: Workbook):
        ws = wb.create_sheet("Monthly")

        ws.append([
            "Month", "Activities", "Distance (km)", "Duration (h)", "Elevation (m)",
            "TRIMP", "Avg speed", "Avg heart rate",
        ])
        for month in self.report.monthly_breakdown:
            ws.append([
                month.month_name, month.activities, month.distance / 1000, month.duration / 3600,
                month.elevation, month.trimp, month.avg_speed, month.avg_heart_rate,
            ])

        self._format_header(ws)
        self._auto_adjust_columns(ws)

    def _format_header(self, ws):
        """Style table header rows (rows whose first cell is a column title)."""
        header_titles = {"Metric", "Zone", "Date", "Status", "Type", "Month"}

        for row in ws.iter_rows(min_row=1, max_row=ws.max_row):
            if row[0].value in header_titles and len([cell for cell in row if cell.value]) > 1:
                for cell in row:
                    if cell.value:
                        cell.fill = HEADER_FILL
                        cell.font = HEADER_FONT
                        cell.alignment = Alignment(horizontal="center")

    def _auto_adjust_columns(self, ws):
        """Auto-adjust column widths based on content."""
        for column in ws.columns:
            max_length = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
            ws.column_dimensions[column[0].column_letter].width = min(max_length + 2, 50)
