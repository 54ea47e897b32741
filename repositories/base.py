"""
repositories/base.py
--------------------
Shared plumbing for the coverage repositories.
"""

from typing import Any, Optional

from db.executor import QueryExecutor


class BaseRepository:
    """Holds the executor and builds LIMIT clauses."""

    def __init__(self, executor: QueryExecutor):
        self.executor = executor

    @staticmethod
    def _with_limit(sql: str, args: tuple, limit: Optional[int]) -> tuple[str, tuple]:
        """
        Append ``LIMIT $n`` with the limit bound as the trailing argument.

        Args:
            sql: Base query whose placeholders use ``$1..$len(args)``.
            args: Arguments already bound by the base query.
            limit: Row ceiling, or None for no ceiling.

        Raises:
            ValueError: If limit is negative.
        """
        if limit is None:
            return sql, args
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        placeholder = len(args) + 1
        return f"{sql} LIMIT ${placeholder}", args + (limit,)

    @staticmethod
    def _rows(rows: Optional[list[Any]]) -> list[Any]:
        """Treat the executor's no-data signal as an empty listing."""
        return rows if rows is not None else []
