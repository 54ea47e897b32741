"""
repositories/project_repo.py
----------------------------
Data access layer for projects.
All SQL queries related to the `project` table live here.
"""

from typing import Optional

from models.coverage import Project
from repositories.base import BaseRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class ProjectRepository(BaseRepository):
    """Read-only queries on the project table."""

    def get_all(self, limit: Optional[int] = None) -> list[Project]:
        """
        Fetch projects, most recent first.

        Args:
            limit: Optional maximum number of projects to return.

        Returns:
            List of Project objects ordered by project_id descending.
        """
        # project_id stands in for creation time; the table has no timestamp column.
        sql, args = self._with_limit(
            "SELECT project_id, project_name FROM project ORDER BY project_id DESC",
            (), limit,
        )
        rows = self._rows(self.executor.select_all(sql, *args))
        logger.debug(f"Fetched {len(rows)} projects")
        return [self._row_to_project(r) for r in rows]

    @staticmethod
    def _row_to_project(row: tuple) -> Project:
        return Project(id=int(row[0]), name=row[1])
