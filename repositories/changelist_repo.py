"""
repositories/changelist_repo.py
-------------------------------
Data access layer for report changelists.

Individual and accumulated merge runs live in different tables, and the
changelist column is named differently in each.
"""

from typing import Optional

from repositories.base import BaseRepository
from utils.logger import get_logger

logger = get_logger(__name__)

# report type -> (table, changelist column)
CHANGELIST_SOURCES: dict[str, tuple[str, str]] = {
    "individual": ("code_coverage_merge_individuals", "changelist"),
    "accumulate": ("code_coverage_merge_accumulates", "end_changelist"),
}


class ChangelistRepository(BaseRepository):
    """Read-only queries on the merge run tables."""

    def get_for_report(
        self, report_id: int, report_type: str, limit: Optional[int] = None
    ) -> list[str]:
        """
        Fetch the distinct changelists of a release report, newest first.

        Args:
            report_id: Release report id (rel.coverage_merge_reports.id).
            report_type: 'individual' or 'accumulate'.
            limit: Optional maximum number of changelists to return.

        Returns:
            Changelist identifiers as strings, ordered descending.

        Raises:
            ValueError: For an unknown report type.
        """
        if report_type not in CHANGELIST_SOURCES:
            raise ValueError(
                f"Unknown report type {report_type!r}; expected one of {sorted(CHANGELIST_SOURCES)}"
            )
        table, column = CHANGELIST_SOURCES[report_type]

        # Table and column come from the fixed mapping above, never from the caller.
        base = (
            f"SELECT DISTINCT {column} AS changelist FROM {table} "
            f"WHERE coverage_merge_report_ref = $1 "
            f"ORDER BY {column} DESC"
        )
        sql, args = self._with_limit(base, (report_id,), limit)
        rows = self._rows(self.executor.select_all(sql, *args))
        logger.debug(f"Fetched {len(rows)} {report_type} changelists for report {report_id}")
        return [str(r[0]) for r in rows]
