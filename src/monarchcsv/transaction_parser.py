"""
Row parsing: turns grid rows into typed bank transactions.
"""

import logging
import math

from .column_mapping import validate_column_mapping
from .models import BankTransaction, ColumnMapping

logger = logging.getLogger(__name__)

MIN_ROW_LENGTH = 5


def parse_amount(value: str | None) -> float | None:
    """Parse a plain decimal number; empty, malformed or non-finite text gives None."""
    if not value or "_" in value:
        return None
    try:
        amount = float(value)
    except ValueError:
        return None
    if not math.isfinite(amount):
        return None
    return amount


def _cell(row: list[str], index: int) -> str:
    return row[index] if 0 <= index < len(row) else ""


def parse_transactions(
    data: list[list[str]],
    mapping: ColumnMapping,
    skip_header: bool = True,
) -> list[BankTransaction]:
    """
    Apply a column mapping to grid rows.

    Rows with fewer than five cells are dropped. Debit and credit are None
    when the cell is empty or not a number; balance falls back to 0.

    Args:
        data: Grid of cells as read from the CSV file
        mapping: Complete column mapping
        skip_header: Whether the first row holds column names

    Returns:
        List of BankTransaction objects
    """
    validate_column_mapping(mapping)

    rows = data[1:] if skip_header else data

    transactions = []
    dropped = 0
    for row in rows:
        if len(row) < MIN_ROW_LENGTH:
            dropped += 1
            continue

        transactions.append(
            BankTransaction(
                date=_cell(row, mapping.date),
                transaction=_cell(row, mapping.transaction),
                debit=parse_amount(_cell(row, mapping.debit)),
                credit=parse_amount(_cell(row, mapping.credit)),
                balance=parse_amount(_cell(row, mapping.balance)) or 0.0,
                raw_data=list(row),
            ),
        )

    if dropped:
        logger.debug(f"Dropped {dropped} rows with fewer than {MIN_ROW_LENGTH} cells")

    return transactions
