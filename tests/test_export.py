"""Tests for report export."""

import json

import pytest
from openpyxl import load_workbook

from training_reports.export.reports import ReportExporter, format_duration
from training_reports.reports.generator import ReportGenerator


@pytest.fixture
def monthly_report(store, sample_activities, record_factory):
    store.activities = sample_activities
    store.records = [record_factory("2024-03-12T10:00:00", 52.4, unit="km/h", record_type="max_speed")]
    return ReportGenerator.from_store(store).generate_monthly_report(1, 3, 2024)


@pytest.fixture
def annual_report(store, sample_activities):
    store.activities = sample_activities
    return ReportGenerator.from_store(store).generate_annual_report(1, 2024)


def test_format_duration():
    assert format_duration(0) == "0:00"
    assert format_duration(5400) == "1:30"
    assert format_duration(25200) == "7:00"


def test_to_dict_uses_camel_case(monthly_report):
    data = ReportExporter(monthly_report).to_dict()

    assert set(data) == {
        "period", "summary", "heartRateZones", "zoneDistribution", "polarization",
        "trainingLoad", "topActivities", "records", "byType", "activitiesCount",
    }
    assert data["period"]["startDate"] == "2024-03-01"
    assert data["summary"]["totalDistance"] == 102100
    assert data["summary"]["indoor"]["activities"] == 3
    assert set(data["topActivities"]) == {"byDistance", "byDuration", "byTrimp", "byElevation"}
    assert data["records"]["new"][0]["recordTypeName"] == "Top speed"
    assert data["trainingLoad"]["history"][0]["date"] == "2024-03-01"


def test_annual_dict_has_monthly_breakdown(annual_report):
    data = ReportExporter(annual_report).to_dict()

    assert len(data["monthlyBreakdown"]) == 12
    assert data["monthlyBreakdown"][0]["monthName"] == "January"


def test_to_json_writes_file(monthly_report, tmp_path):
    output = tmp_path / "reports" / "march.json"

    document = ReportExporter(monthly_report).to_json(str(output))

    assert output.exists()
    assert json.loads(output.read_text(encoding="utf-8")) == json.loads(document)


def test_summary_report(monthly_report):
    text = ReportExporter(monthly_report).generate_summary_report()

    assert "TRAINING REPORT - MARCH 2024" in text
    assert "Activities: 6" in text
    assert "Distance: 102.1 km" in text
    assert "Duration: 7:00" in text
    assert "New: Top speed (Ride) 52.4 km/h" in text
    assert "MONTHLY BREAKDOWN" not in text
    assert "END OF REPORT" in text


def test_annual_summary_report_lists_months(annual_report):
    text = ReportExporter(annual_report).generate_summary_report()

    assert "TRAINING REPORT - YEAR 2024" in text
    assert "MONTHLY BREAKDOWN" in text
    assert "December" in text


def test_export_to_excel(monthly_report, tmp_path):
    output = tmp_path / "march.xlsx"

    path = ReportExporter(monthly_report).export_to_excel(str(output))

    wb = load_workbook(path)
    assert wb.sheetnames == ["Summary", "Zones", "Training Load", "Top Activities", "Records", "By Type"]
    summary = wb["Summary"]
    assert summary["A1"].value == "Metric"
    assert summary["B2"].value == 6


def test_annual_excel_has_monthly_sheet(annual_report, tmp_path):
    path = ReportExporter(annual_report).export_to_excel(str(tmp_path / "year.xlsx"))

    wb = load_workbook(path)
    assert "Monthly" in wb.sheetnames
    assert wb["Monthly"].max_row == 13
