"""Command-line interface for the training reports engine."""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

from training_reports.config import MAX_REPORT_YEAR, MIN_REPORT_YEAR
from training_reports.errors import InvalidPeriodError, ReportError
from training_reports.export.reports import ReportExporter
from training_reports.models.activity import Activity, PersonalRecord, UserProfile
from training_reports.reports.generator import ReportGenerator
from training_reports.storage.database.manager import DatabaseManager


def validate_year(year: int) -> int:
    if not MIN_REPORT_YEAR <= year <= MAX_REPORT_YEAR:
        raise InvalidPeriodError(f"Year must be between {MIN_REPORT_YEAR} and {MAX_REPORT_YEAR}")
    return year


def validate_month(month: int) -> int:
    if not 1 <= month <= 12:
        raise InvalidPeriodError("Month must be between 1 and 12")
    return month


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='training-reports',
        description='Training Reports - Monthly and annual summaries of your training',
        epilog='For more information on a specific command, run: training-reports <command> --help'
    )
    parser.add_argument(
        '--db',
        help='Path to the SQLite database (default: TRAINING_REPORTS_DB_PATH or data/training_reports.db)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='<command>'
    )

    # Monthly report
    monthly_parser = subparsers.add_parser(
        'monthly',
        help='Generate a monthly report',
        description='Generate the report of one calendar month'
    )
    monthly_parser.add_argument('--user-id', type=int, required=True, help='User identifier')
    monthly_parser.add_argument('--month', type=int, required=True, help='Month (1-12)')
    monthly_parser.add_argument('--year', type=int, required=True, help='Year (YYYY)')
    _add_output_arguments(monthly_parser)

    # Annual report
    annual_parser = subparsers.add_parser(
        'annual',
        help='Generate an annual report',
        description='Generate the report of one calendar year, with a monthly breakdown'
    )
    annual_parser.add_argument('--user-id', type=int, required=True, help='User identifier')
    annual_parser.add_argument('--year', type=int, required=True, help='Year (YYYY)')
    _add_output_arguments(annual_parser)

    # Import
    import_parser = subparsers.add_parser(
        'import',
        help='Import activities and records from JSON files',
        description='Load a user profile, activities and personal records into the database'
    )
    import_parser.add_argument('--user-id', type=int, required=True, help='User identifier')
    import_parser.add_argument('--activities', help='JSON file with a list of activities')
    import_parser.add_argument('--records', help='JSON file with a list of personal records')
    import_parser.add_argument('--fc-max', type=int, help='Maximum heart rate of the user')
    import_parser.add_argument('--fc-rest', type=int, help='Resting heart rate of the user')

    return parser


def _add_output_arguments(subparser: argparse.ArgumentParser):
    subparser.add_argument(
        '--format',
        choices=['text', 'json', 'excel'],
        default='text',
        help='Output format (default: text)'
    )
    subparser.add_argument(
        '--output',
        help='Output file path (excel default: exports/training_report_<period>.xlsx)'
    )


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.command is None:
        parser.print_help()
        return 0

    try:
        if args.command == 'import':
            run_import(args)
        else:
            run_report(args)
    except ReportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def run_report(args):
    """Generate a monthly or annual report and write it out."""
    year = validate_year(args.year)
    db = DatabaseManager(db_path=args.db)
    generator = ReportGenerator.from_store(db)

    if args.command == 'monthly':
        report = generator.generate_monthly_report(args.user_id, validate_month(args.month), year)
    else:
        report = generator.generate_annual_report(args.user_id, year)

    exporter = ReportExporter(report)

    if args.format == 'excel':
        path = exporter.export_to_excel(args.output)
        print(f"Report written to {path}")
    elif args.format == 'json':
        document = exporter.to_json(args.output)
        if not args.output:
            print(document)
    else:
        text = exporter.generate_summary_report()
        if args.output:
            Path(args.output).write_text(text, encoding="utf-8")
            print(f"Report written to {args.output}")
        else:
            print(text)


def run_import(args):
    """Load a user profile, activities and records from JSON files."""
    db = DatabaseManager(db_path=args.db)
    db.save_user(UserProfile(id=args.user_id, fc_max=args.fc_max, fc_rest=args.fc_rest))

    if args.activities:
        activities = _parse_items(Activity, args.activities)
        stats = db.save_activities(activities, user_id=args.user_id)
        print(f"Activities: {stats['saved']} new, {stats['updated']} updated")

    if args.records:
        records = _parse_items(PersonalRecord, args.records)
        stats = db.save_personal_records(records, user_id=args.user_id)
        print(f"Personal records: {stats['saved']} new, {stats['updated']} updated")


def _parse_items(model, path: str) -> list:
    try:
        return [model(**item) for item in _load_json_list(path)]
    except (TypeError, ValidationError) as e:
        raise ReportError(f"Invalid data in {path}: {e}") from e


def _load_json_list(path: str) -> list:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ReportError(f"Cannot read {path}: {e}") from e
    if not isinstance(data, list):
        raise ReportError(f"{path} must contain a JSON list")
    return data


if __name__ == "__main__":
    sys.exit(main())
