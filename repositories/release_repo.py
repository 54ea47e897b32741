"""
repositories/release_repo.py
----------------------------
Data access layer for releases.
All SQL queries related to the `release` table live here.
"""

from typing import Optional

from models.coverage import Release
from repositories.base import BaseRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class ReleaseRepository(BaseRepository):
    """Read-only queries on the release table."""

    def get_all(self, limit: Optional[int] = None) -> list[Release]:
        """
        Fetch releases, most recent first.

        Args:
            limit: Optional maximum number of releases to return.

        Returns:
            List of Release objects ordered by release_id descending.
        """
        sql, args = self._with_limit(
            "SELECT release_id, release_name FROM release ORDER BY release_id DESC",
            (), limit,
        )
        rows = self._rows(self.executor.select_all(sql, *args))
        logger.debug(f"Fetched {len(rows)} releases")
        return [Release(id=int(r[0]), name=r[1]) for r in rows]

    def get_id_by_name(self, release_name: str) -> Optional[int]:
        """
        Resolve a release name to its primary key.

        Returns:
            The release_id, or None if no release has that name.
        """
        row = self.executor.select_first(
            "SELECT release_id FROM release WHERE release_name = $1", release_name
        )
        return int(row[0]) if row else None
