"""
services/report_service.py
--------------------------
Composite report lookups across releases, reports and projects.
"""

from typing import Optional

from db.executor import QueryExecutor
from models.coverage import ReleaseReport, ReleaseReportInfo, ReportInfo
from repositories.release_repo import ReleaseRepository
from repositories.report_repo import ReportRepository
from utils.logger import get_logger

logger = get_logger(__name__)


def _require_name(value: str, what: str) -> str:
    if value is None or not str(value).strip():
        raise ValueError(f"{what} must not be blank")
    return value


class ReportService:
    """
    Resolves report names into the ids and project needed to locate a report.

    Both entry points reject a blank report name with ValueError instead of
    querying, so a missing argument is never reported as "not found".
    """

    def __init__(self, executor: QueryExecutor):
        self.releases = ReleaseRepository(executor)
        self.reports = ReportRepository(executor)

    def get_report_info(self, release_name: str, report_name: str) -> Optional[ReportInfo]:
        """
        Look up a report by release name and report name.

        Two sequential queries: release name -> release id, then
        (release id, report name) -> release report id and project.

        Returns:
            A ReportInfo, or None if either the release or the report is missing.

        Raises:
            ValueError: If either name is blank.
        """
        _require_name(release_name, "release name")
        _require_name(report_name, "report name")

        release_id = self.releases.get_id_by_name(release_name)
        if release_id is None:
            logger.info(f"Release '{release_name}' not found")
            return None

        info = self.reports.get_release_report_info(release_id, report_name)
        if info is None:
            logger.info(f"Report '{report_name}' not found in release '{release_name}'")
            return None

        return ReportInfo(
            release_id=release_id,
            report_id=info.release_report_id,
            project_name=info.project_name,
        )

    def get_release_report_info(
        self, release_id: int, report_name: str
    ) -> Optional[ReleaseReportInfo]:
        """
        Look up a report by release id and report name.

        Raises:
            ValueError: If the report name is blank.
        """
        _require_name(report_name, "report name")
        return self.reports.get_release_report_info(release_id, report_name)

    def get_all_reports_for_release(self, release_name: str) -> list[ReleaseReport]:
        """
        List every report of a release, by release name.

        A listing has an obvious "nothing" shape, so an unknown or blank
        release name returns an empty list instead of raising.

        Returns:
            ReleaseReport rows ordered by release report id descending.
        """
        if release_name is None or not str(release_name).strip():
            return []

        release_id = self.releases.get_id_by_name(release_name)
        if release_id is None:
            logger.info(f"Release '{release_name}' not found")
            return []
        return self.reports.get_with_project_for_release(release_id)
