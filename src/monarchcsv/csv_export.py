"""
CSV serialization of Monarch output records.
"""

import logging
from dataclasses import is_dataclass
from pathlib import Path

import pandas as pd

from .models import record_field_names, record_to_dict

logger = logging.getLogger(__name__)

TRANSACTIONS_FILENAME = "monarch_transactions.csv"
BALANCE_HISTORY_FILENAME = "monarch_balance_history.csv"


class FileSavingError(Exception):
    """Exception raised when an export file cannot be written."""


def _to_dataframe(records: list, record_type: type | None = None) -> pd.DataFrame:
    if record_type is None and records:
        record_type = type(records[0])
    if record_type is None or not is_dataclass(record_type):
        raise ValueError("Cannot derive CSV columns: pass a record type for empty data")

    columns = record_field_names(record_type)
    return pd.DataFrame(
        [record_to_dict(record) for record in records],
        columns=columns,
    )


def render_csv(records: list, record_type: type | None = None) -> str:
    """
    Render flat records as CSV text.

    The header row is the record's field names in declaration order.

    Args:
        records: Records of one dataclass type
        record_type: Record class, needed only when records is empty

    Returns:
        CSV text with a header row and one line per record
    """
    return _to_dataframe(records, record_type).to_csv(index=False)


def export_to_csv(
    records: list,
    file_path: str | Path,
    record_type: type | None = None,
) -> Path:
    """Write records to a CSV file and return its path."""
    df = _to_dataframe(records, record_type)
    path = Path(file_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(path, index=False, encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to write {path}: {e}")
        raise FileSavingError(f"Failed to write {path}: {e}") from e

    logger.info(f"Wrote {len(records)} rows to {path}")
    return path
