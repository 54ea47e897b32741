"""
repositories/report_repo.py
---------------------------
Data access layer for release merge reports.
Queries join `rel.coverage_merge_reports` (one row per report in a release)
with `info.merge_reports` (report names) and `project`.
"""

from typing import Optional

from models.coverage import ReleaseReport, ReleaseReportInfo, Report
from repositories.base import BaseRepository
from utils.logger import get_logger

logger = get_logger(__name__)

RELEASE_REPORT_INFO_SQL = """
    SELECT cmr.id, p.project_name FROM rel.coverage_merge_reports cmr
    INNER JOIN project p ON p.project_id = cmr.project_ref
    INNER JOIN info.merge_reports mr ON mr.id = cmr.merge_report_ref
    WHERE release_ref = $1 AND mr.name = $2
"""

REPORTS_FOR_RELEASE_SQL = """
    SELECT cmr.id, mr.name FROM rel.coverage_merge_reports cmr
    INNER JOIN info.merge_reports mr ON mr.id = cmr.merge_report_ref
    WHERE cmr.release_ref = $1
    ORDER BY cmr.id DESC
"""

RELEASE_REPORTS_WITH_PROJECT_SQL = """
    SELECT cmr.id, p.project_name, mr.name FROM rel.coverage_merge_reports cmr
    INNER JOIN project p ON p.project_id = cmr.project_ref
    INNER JOIN info.merge_reports mr ON mr.id = cmr.merge_report_ref
    WHERE cmr.release_ref = $1
    ORDER BY cmr.id DESC
"""


class ReportRepository(BaseRepository):
    """Read-only queries on release merge reports."""

    def get_for_release(self, release_id: int, limit: Optional[int] = None) -> list[Report]:
        """
        Fetch the reports of one release, most recent first.

        Args:
            release_id: Primary key of the release.
            limit: Optional maximum number of reports to return.

        Returns:
            List of Report objects ordered by release report id descending.
        """
        sql, args = self._with_limit(REPORTS_FOR_RELEASE_SQL.rstrip(), (release_id,), limit)
        rows = self._rows(self.executor.select_all(sql, *args))
        logger.debug(f"Fetched {len(rows)} reports for release {release_id}")
        return [Report(id=int(r[0]), name=r[1]) for r in rows]

    def get_release_report_info(
        self, release_id: int, report_name: str
    ) -> Optional[ReleaseReportInfo]:
        """
        Find the release report id and project of a named report.

        Returns:
            A ReleaseReportInfo, or None if the release has no such report.
        """
        row = self.executor.select_first(RELEASE_REPORT_INFO_SQL, release_id, report_name)
        if row is None:
            return None
        return ReleaseReportInfo(release_report_id=int(row[0]), project_name=row[1])

    def get_with_project_for_release(self, release_id: int) -> list[ReleaseReport]:
        """
        Fetch every report of a release together with its project name.

        Returns:
            List of ReleaseReport objects ordered by release report id descending.
        """
        rows = self._rows(self.executor.select_all(RELEASE_REPORTS_WITH_PROJECT_SQL, release_id))
        return [
            ReleaseReport(release_id=release_id, report_id=int(r[0]), project_name=r[1], report_name=r[2])
            for r in rows
        ]
