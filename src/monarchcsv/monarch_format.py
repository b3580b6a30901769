"""
Conversion of bank transactions into Monarch's import layout.
"""

import logging
from datetime import datetime

from .models import (
    BalanceHistory,
    BankTransaction,
    ConversionResult,
    ProcessedTransaction,
)

logger = logging.getLogger(__name__)

# Tried in order; an ambiguous date such as 01/02/2024 resolves to the first match.
DATE_FORMATS = ("%m/%d/%Y", "%Y-%m-%d", "%d/%m/%Y")
OUTPUT_DATE_FORMAT = "%Y-%m-%d"


def normalize_date(value: str) -> str:
    """Reformat a date to YYYY-MM-DD, or return it unchanged if no format fits."""
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).strftime(OUTPUT_DATE_FORMAT)
        except (ValueError, TypeError):
            continue

    logger.debug(f"Could not parse date: {value!r}")
    return value


def calculate_amount(transaction: BankTransaction) -> float:
    """Signed amount: debits are negative, credits positive."""
    if transaction.debit:
        return -abs(transaction.debit)
    return transaction.credit or 0.0


def convert_to_monarch_format(
    transactions: list[BankTransaction],
    account_name: str,
) -> ConversionResult:
    """
    Convert bank transactions into Monarch transactions and balance history.

    Transactions keep their input order. Balance history is sorted by the
    normalized date string, so rows whose date could not be normalized may
    end up out of calendar order.

    Args:
        transactions: Parsed bank transactions
        account_name: Account name written to every output row

    Returns:
        ConversionResult with one row per input transaction in each list
    """
    processed_transactions = []
    balance_history = []

    for transaction in transactions:
        formatted_date = normalize_date(transaction.date)

        processed_transactions.append(
            ProcessedTransaction(
                date=formatted_date,
                merchant=transaction.transaction,
                category="",
                account=account_name,
                originalStatement=transaction.transaction,
                notes="",
                amount=calculate_amount(transaction),
                tags="",
            ),
        )
        balance_history.append(
            BalanceHistory(
                date=formatted_date,
                account=account_name,
                balance=transaction.balance,
            ),
        )

    return ConversionResult(
        transactions=processed_transactions,
        balance_history=sorted(balance_history, key=lambda entry: entry.date),
    )
