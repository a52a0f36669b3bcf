"""SQLite database manager for users, activities and personal records."""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import polars as pl
from sqlalchemy import bindparam, create_engine, text
from sqlalchemy.engine import Engine

from training_reports.analytics.frame import activities_to_frame
from training_reports.config import DATABASE_PATH
from training_reports.errors import UserNotFoundError
from training_reports.models.activity import Activity, PersonalRecord, UserProfile

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"

ACTIVITY_COLUMNS = [
    "id", "user_id", "date", "type", "sub_sport", "distance", "duration",
    "elevation_gain", "trimp", "calories", "avg_heart_rate", "avg_speed", "gps_data",
]

RECORD_COLUMNS = [
    "id", "user_id", "activity_id", "record_type", "activity_type", "value",
    "unit", "achieved_at", "previous_value",
]


def format_timestamp(value: datetime) -> str:
    """Naive UTC, fixed-width timestamp so SQLite string comparison orders correctly.

    Aware values are converted to UTC; naive values are taken as UTC already.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.replace(tzinfo=None).strftime(TIMESTAMP_FORMAT)


class DatabaseManager:
    """Manage SQLite storage and serve the report data lookups."""

    def __init__(self, db_path: str = None):
        """Initialize database manager.

        Args:
            db_path: Path to SQLite database file (uses config default if None)
        """
        self.db_path = Path(db_path if db_path else DATABASE_PATH)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self.engine = self._create_engine()
        self._initialize_database()

    def _create_engine(self) -> Engine:
        """Create SQLAlchemy engine with WAL journaling."""
        engine = create_engine(
            f"sqlite:///{self.db_path}",
            connect_args={
                "check_same_thread": False,
                "timeout": 30,
            },
            pool_pre_ping=True,
            echo=False,
        )

        with engine.connect() as conn:
            conn.execute(text("PRAGMA journal_mode=WAL"))
            conn.execute(text("PRAGMA synchronous=NORMAL"))
            conn.commit()

        return engine

    def _initialize_database(self):
        """Initialize database schema."""
        with self.engine.connect() as conn:
            conn.execute(text("""
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY,
                    fc_max INTEGER,
                    fc_rest INTEGER
                )
            """))

            conn.execute(text("""
                CREATE TABLE IF NOT EXISTS activities (
                    id INTEGER PRIMARY KEY,
                    user_id INTEGER NOT NULL,
                    date TIMESTAMP NOT NULL,
                    type TEXT NOT NULL,
                    sub_sport TEXT,

                    -- Volume
                    distance REAL,
                    duration REAL,
                    elevation_gain REAL,

                    -- Load and energy
                    trimp REAL,
                    calories REAL,

                    -- Averages
                    avg_heart_rate REAL,
                    avg_speed REAL,

                    -- GPS track (JSON)
                    gps_data TEXT
                )
            """))

            conn.execute(text("""
                CREATE TABLE IF NOT EXISTS personal_records (
                    id INTEGER PRIMARY KEY,
                    user_id INTEGER NOT NULL,
                    activity_id INTEGER,
                    record_type TEXT NOT NULL,
                    activity_type TEXT NOT NULL,
                    value REAL NOT NULL,
                    unit TEXT NOT NULL,
                    achieved_at TIMESTAMP NOT NULL,
                    previous_value REAL
                )
            """))

            conn.execute(text("CREATE INDEX IF NOT EXISTS idx_activities_user_date ON activities(user_id, date)"))
            conn.execute(text(
                "CREATE INDEX IF NOT EXISTS idx_records_user_achieved ON personal_records(user_id, achieved_at)"
            ))
            conn.commit()

        logger.info(f"Database initialized at {self.db_path}")

    # Writes

    def save_user(self, user: UserProfile):
        """Insert or replace a user profile."""
        with self.engine.connect() as conn:
            conn.execute(
                text("INSERT OR REPLACE INTO users (id, fc_max, fc_rest) VALUES (:id, :fc_max, :fc_rest)"),
                user.model_dump(),
            )
            conn.commit()

    def save_activities(self, activities: Iterable[Activity], user_id: Optional[int] = None) -> dict:
        """Insert or replace activities.

        Args:
            activities: Activities to store
            user_id: Owner, overriding ``activity.user_id`` when given

        Returns:
            Dictionary with save statistics
        """
        rows = []
        for activity in activities:
            row = activity.model_dump(include=set(ACTIVITY_COLUMNS))
            row["user_id"] = user_id if user_id is not None else activity.user_id
            if row["user_id"] is None:
                raise ValueError(f"Activity {activity.id} has no owner")
            row["date"] = format_timestamp(activity.date)
            rows.append(row)

        return self._upsert("activities", ACTIVITY_COLUMNS, rows)

    def save_personal_records(self, records: Iterable[PersonalRecord], user_id: Optional[int] = None) -> dict:
        """Insert or replace personal records."""
        rows = []
        for record in records:
            row = record.model_dump(include=set(RECORD_COLUMNS))
            row["user_id"] = user_id if user_id is not None else record.user_id
            if row["user_id"] is None:
                raise ValueError(f"Record {record.id} has no owner")
            row["achieved_at"] = format_timestamp(record.achieved_at)
            rows.append(row)

        return self._upsert("personal_records", RECORD_COLUMNS, rows)

    def _upsert(self, table: str, columns: Sequence[str], rows: list[dict]) -> dict:
        if not rows:
            return {"saved": 0, "updated": 0}

        with self.engine.connect() as conn:
            result = conn.execute(
                text(f"SELECT id FROM {table} WHERE id IN :ids").bindparams(bindparam("ids", expanding=True)),
                {"ids": [row["id"] for row in rows]},
            )
            existing_ids = {row[0] for row in result}

            placeholders = ", ".join(f":{column}" for column in columns)
            conn.execute(
                text(f"INSERT OR REPLACE INTO {table} ({', '.join(columns)}) VALUES ({placeholders})"),
                rows,
            )
            conn.commit()

        stats = {
            "saved": sum(1 for row in rows if row["id"] not in existing_ids),
            "updated": sum(1 for row in rows if row["id"] in existing_ids),
        }
        logger.info(f"Saved {stats['saved']} new and updated {stats['updated']} rows in {table}")
        return stats

    # Report lookups

    def find_user(self, user_id: int) -> UserProfile:
        """Return the user's profile.

        Raises:
            UserNotFoundError: if the user does not exist
        """
        with self.engine.connect() as conn:
            row = conn.execute(
                text("SELECT id, fc_max, fc_rest FROM users WHERE id = :id"), {"id": user_id}
            ).mappings().first()

        if row is None:
            raise UserNotFoundError(user_id)
        return UserProfile(**row)

    def query_by_user_and_date_range(self, user_id: int, start: datetime, end: datetime) -> list[Activity]:
        """Activities of ``user_id`` dated within ``[start, end]``, oldest first."""
        query = text(f"""
            SELECT {', '.join(ACTIVITY_COLUMNS)} FROM activities
            WHERE user_id = :user_id AND date >= :start AND date <= :end
            ORDER BY date ASC, id ASC
        """)
        params = {"user_id": user_id, "start": format_timestamp(start), "end": format_timestamp(end)}
        logger.debug(f"Query activities: {params}")

        with self.engine.connect() as conn:
            rows = conn.execute(query, params).mappings().all()

        return [Activity(**{**row, "date": datetime.fromisoformat(row["date"])}) for row in rows]

    def query_by_user_and_date_range_and_types(
        self,
        user_id: int,
        start: datetime,
        end: datetime,
        record_types: Sequence[str],
    ) -> list[PersonalRecord]:
        """Records of the given types achieved within ``[start, end]``, newest first."""
        if not record_types:
            return []

        query = text(f"""
            SELECT {', '.join(RECORD_COLUMNS)} FROM personal_records
            WHERE user_id = :user_id
              AND achieved_at >= :start AND achieved_at <= :end
              AND record_type IN :record_types
            ORDER BY achieved_at DESC, id DESC
        """).bindparams(bindparam("record_types", expanding=True))
        params = {
            "user_id": user_id,
            "start": format_timestamp(start),
            "end": format_timestamp(end),
            "record_types": list(record_types),
        }
        logger.debug(f"Query personal records: {params}")

        with self.engine.connect() as conn:
            rows = conn.execute(query, params).mappings().all()

        return [
            PersonalRecord(**{**row, "achieved_at": datetime.fromisoformat(row["achieved_at"])})
            for row in rows
        ]

    def get_activities_frame(
        self,
        user_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> pl.DataFrame:
        """Activities of a user as a DataFrame (whole history by default)."""
        start = start or datetime(1900, 1, 1)
        end = end or datetime.max
        df = activities_to_frame(self.query_by_user_and_date_range(user_id, start, end))
        logger.info(f"Retrieved {len(df)} activities from database")
        return df
