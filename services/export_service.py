"""
services/export_service.py
---------------------------
Renders coverage listings (projects, releases, reports, changelists) as
console tables or CSV files.
"""

from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Iterable, Union

import pandas as pd

from utils.logger import get_logger

logger = get_logger(__name__)


def records_frame(records: Iterable[Any], column: str = "value") -> pd.DataFrame:
    """
    Build a DataFrame from dataclass records or plain values.

    Args:
        records: Dataclass instances (one column per field) or scalars.
        column: Column name used when the records are scalars.

    Returns:
        A DataFrame with one row per record.
    """
    rows = [asdict(r) if is_dataclass(r) else {column: r} for r in records]
    return pd.DataFrame(rows)


def to_table(records: Iterable[Any], column: str = "value", empty_text: str = "(none)") -> str:
    """Render records as an aligned text table without the index."""
    df = records_frame(records, column)
    if df.empty:
        return empty_text
    return df.to_string(index=False)


def to_csv(records: Iterable[Any], path: Union[str, Path], column: str = "value") -> Path:
    """
    Write records to a CSV file.

    Returns:
        The path written.
    """
    df = records_frame(records, column)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False, encoding="utf-8")
    logger.info(f"Exported {len(df)} records to {path}")
    return path
