"""
Text previews of the grid, parsed transactions and export results.
"""

import logging

from .column_mapping import column_label
from .models import BankTransaction, ColumnMapping, ConversionResult, ExportKind

logger = logging.getLogger(__name__)


class PreviewFormatter:
    """Formats previews of the data at each conversion step."""

    def format_grid(
        self,
        data: list[list[str]],
        mapping: ColumnMapping | None = None,
        has_header_row: bool = False,
        limit: int = 5,
    ) -> str:
        """
        Format the first rows of the grid with their column assignments.

        Args:
            data: Grid of cells as read from the CSV file
            mapping: Current column mapping, if any
            has_header_row: Whether the first row is labelled as header
            limit: Number of rows to show

        Returns:
            Tab-separated preview text
        """
        if not data:
            return "No data to preview"

        headers = ["Row"]
        for index in range(len(data[0])):
            label = column_label(mapping, index)
            headers.append(f"Column {index + 1} ({label})" if label else f"Column {index + 1}")

        lines = ["\t".join(headers)]
        for row_index, row in enumerate(data[:limit]):
            row_label = "Header" if row_index == 0 and has_header_row else f"Row {row_index + 1}"
            lines.append("\t".join([row_label, *row]))

        return "\n".join(lines)

    def format_transactions(
        self,
        transactions: list[BankTransaction],
        limit: int = 5,
    ) -> str:
        """Format parsed transactions as date | description | amount."""
        if not transactions:
            return "No data to preview"

        lines = ["Date | Description | Amount | Balance"]
        for transaction in transactions[:limit]:
            lines.append(
                f"{transaction.date} | {transaction.transaction} | "
                f"{self._format_amount(transaction)} | {transaction.balance}",
            )
        return "\n".join(lines)

    def format_export_preview(
        self,
        transactions: list[BankTransaction],
        kind: ExportKind,
        limit: int = 3,
    ) -> str:
        if not transactions:
            return "No data to preview"

        lines = []
        for transaction in transactions[:limit]:
            if kind is ExportKind.TRANSACTIONS:
                amount = transaction.debit or transaction.credit
                lines.append(f"{transaction.date},{transaction.transaction},{amount}")
            else:
                lines.append(f"{transaction.date},{transaction.balance}")
        return "\n".join(lines)

    def _format_amount(self, transaction: BankTransaction) -> str:
        if transaction.debit:
            return f"-{transaction.debit}"
        return str(transaction.credit)


class SummaryFormatter:
    """Formats summary information."""

    @staticmethod
    def format_summary(result: ConversionResult, account_name: str) -> str:
        """Format a summary of a conversion result."""
        amounts = [t.amount for t in result.transactions]
        total_in = sum(a for a in amounts if a > 0)
        total_out = sum(a for a in amounts if a < 0)

        lines = []
        lines.append("=== Monarch Conversion Summary ===")
        lines.append(f"Account: {account_name}")
        lines.append(f"Transactions converted: {len(result.transactions)}")
        lines.append(f"Balance history entries: {len(result.balance_history)}")
        lines.append(f"Total credits: {total_in:.2f}")
        lines.append(f"Total debits: {abs(total_out):.2f}")
        lines.append(f"Net change: {total_in + total_out:.2f}")

        if result.balance_history:
            first = result.balance_history[0]
            last = result.balance_history[-1]
            lines.append(f"Date range: {first.date} to {last.date}")

        return "\n".join(lines)
