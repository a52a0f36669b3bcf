"""Centralized configuration for the training reports engine."""

import os
from pathlib import Path

# Base paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"

# Database configuration
DATABASE_PATH = os.environ.get(
    "TRAINING_REPORTS_DB_PATH",
    str(DATA_DIR / "training_reports.db")
)

# Export paths
EXPORT_DIR = Path(os.environ.get(
    "TRAINING_REPORTS_EXPORT_DIR",
    str(PROJECT_ROOT / "exports")
))

# Heart rate fallbacks when the user profile is incomplete
DEFAULT_FC_MAX = int(os.environ.get("TRAINING_REPORTS_DEFAULT_FC_MAX", 190))
DEFAULT_FC_REST = int(os.environ.get("TRAINING_REPORTS_DEFAULT_FC_REST", 60))

# Training load model
CTL_DAYS = 42  # Chronic training load (fitness)
ATL_DAYS = 7  # Acute training load (fatigue)

# History fetched before the period start so the CTL/ATL series is seeded.
# Must equal CTL_DAYS: the report slices the model output at this offset.
TRAINING_LOAD_LOOKBACK_DAYS = 42

# Report limits
TOP_ACTIVITIES_LIMIT = 5
RECORDS_LIMIT = 4
MIN_RECORD_IMPROVEMENT_PCT = 2.0

# Record types shown in period reports (heart rate and calorie records excluded)
REPORT_RECORD_TYPES = [
    "max_distance",
    "max_avg_speed",
    "max_speed",
    "max_trimp",
    "max_elevation",
    "longest_duration",
]

# Indoor/outdoor classification
INDOOR_SUB_SPORTS = frozenset({
    "Home Trainer",
    "Virtual",
    "Treadmill",
    "Indoor Rowing",
    "Pool",
})
INDOOR_TYPES = frozenset({"Rowing", "Strength", "Yoga"})
WALKING_TYPE = "Walk"

# Accepted report years (CLI validation)
MIN_REPORT_YEAR = 2000
MAX_REPORT_YEAR = 2100
