"""
main.py
-------
Command-line entry point for the coverage database reader.

Responsibilities:
    - Open the shared connection and build the retrying executor.
    - Resolve a release/report pair and print where its report lives.
    - List recent projects, releases, reports and changelists.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from db.connection import ConnectionManager
from db.errors import DatabaseUnavailableError
from db.executor import QueryExecutor
from repositories.changelist_repo import ChangelistRepository
from repositories.project_repo import ProjectRepository
from repositories.release_repo import ReleaseRepository
from repositories.report_repo import ReportRepository
from services.export_service import to_csv, to_table
from services.report_paths import COVERAGE_TYPES, REPORT_TYPES, get_report_path
from services.report_service import ReportService
from utils.logger import get_logger, set_level

logger = get_logger(__name__)

EXIT_NOT_FOUND = 1
EXIT_UNAVAILABLE = 2


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Look up coverage reports and print their locations."
    )
    parser.add_argument("--release", default="dcn6_0", help="release name")
    parser.add_argument("--report", default="dcn_core_verif_plan", help="merge report name")
    parser.add_argument("--changelist", default="8222907", help="changelist for the report path")
    parser.add_argument("--report-type", default="individual", choices=REPORT_TYPES)
    parser.add_argument("--cov-type", default="func_cov", choices=COVERAGE_TYPES)
    parser.add_argument("--file-name", default="index.html",
                        help="file for the custom report path example")
    parser.add_argument("--limit", type=_non_negative_int, default=5, help="rows per listing")
    parser.add_argument("--csv-dir", type=Path, default=None,
                        help="also write each listing as CSV into this directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def _show(title: str, records, column: str, csv_dir: Optional[Path], csv_name: str) -> None:
    print(f"\n{title}")
    print(to_table(records, column))
    if csv_dir is not None:
        to_csv(records, csv_dir / csv_name, column)


def run(args: argparse.Namespace, executor: QueryExecutor) -> int:
    """Run the lookup flow against an open executor. Returns an exit code."""

    # ── 1. Resolve release and report ─────────────────────
    info = ReportService(executor).get_report_info(args.release, args.report)
    if info is None:
        print("No data found")
        return EXIT_NOT_FOUND

    print(f"Release ID for '{args.release}': {info.release_id}")
    print(f"Report ID for '{args.report}': {info.report_id}")

    # ── 2. Report paths ───────────────────────────────────
    common = (info.project_name, args.release, args.cov_type, args.report,
              args.report_type, args.changelist)
    print(f"Report path for changelist {args.changelist}: {get_report_path(*common)}")
    print(f"Custom report path: {get_report_path(*common, file_name=args.file_name)}")

    # ── 3. Listings ───────────────────────────────────────
    projects = ProjectRepository(executor).get_all(args.limit)
    _show(f"Last {args.limit} Projects (most recent):", projects, "project", args.csv_dir, "projects.csv")

    releases = ReleaseRepository(executor).get_all(args.limit)
    _show(f"Last {args.limit} Releases (most recent):", releases, "release", args.csv_dir, "releases.csv")

    reports = ReportRepository(executor).get_for_release(info.release_id)
    _show(f"All Reports for release '{args.release}' (ID {info.release_id}):",
          reports, "report", args.csv_dir, "reports.csv")

    if reports:
        first = reports[0]
        changelists = ChangelistRepository(executor).get_for_report(
            first.id, args.report_type, args.limit
        )
        _show(f"Last {args.limit} Changelists for report '{first.name}' (ID {first.id}):",
              changelists, "changelist", args.csv_dir, "changelists.csv")

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Parse arguments, open the database and run the lookups."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_level("DEBUG")

    with ConnectionManager() as manager:
        if manager.open() is None:
            logger.error(f"Cannot connect to {manager.describe()}")
            return EXIT_UNAVAILABLE
        executor = QueryExecutor(manager)
        try:
            return run(args, executor)
        except DatabaseUnavailableError as e:
            logger.error(f"Coverage database unavailable: {e}")
            return EXIT_UNAVAILABLE


if __name__ == "__main__":
    sys.exit(main())
