"""
Conversion session that ties the pipeline steps together.
"""

import logging
from enum import Enum
from pathlib import Path

from . import column_mapping
from .column_mapping import IncompleteConfigurationError, detect_column_mapping
from .csv_export import BALANCE_HISTORY_FILENAME, TRANSACTIONS_FILENAME, export_to_csv
from .csv_parser import BankCSVParser
from .models import (
    BalanceHistory,
    BankTransaction,
    ColumnMapping,
    ConversionResult,
    ExportKind,
    MappingField,
    ProcessedTransaction,
)
from .monarch_format import convert_to_monarch_format
from .output_formatter import PreviewFormatter, SummaryFormatter
from .transaction_parser import parse_transactions

logger = logging.getLogger(__name__)


class ExportInProgressError(Exception):
    """Exception raised when an export is started while another one runs."""


class ExportState(Enum):
    IDLE = "idle"
    EXPORTING = "exporting"


class BankCSVConverter:
    """Holds the state of one bank file conversion."""

    def __init__(
        self,
        encoding: str = "utf-8",
        delimiter: str = ",",
    ):
        self.csv_parser = BankCSVParser(encoding=encoding, delimiter=delimiter)
        self.preview_formatter = PreviewFormatter()
        self.summary_formatter = SummaryFormatter()

        self.raw_data: list[list[str]] = []
        self.column_mapping: ColumnMapping | None = None
        self.has_header_row = False
        self.account_name = ""
        self.transactions: list[BankTransaction] = []
        self.export_state = ExportState.IDLE

    @property
    def is_exporting(self) -> bool:
        return self.export_state is ExportState.EXPORTING

    def load_file(self, file_path: str | Path) -> list[list[str]]:
        """
        Read a bank CSV file and reset the column mapping.

        Args:
            file_path: Path to the CSV file

        Returns:
            The grid of cells read from the file
        """
        return self._load(self.csv_parser.parse_file(file_path))

    def load_bytes(self, data: bytes) -> list[list[str]]:
        return self._load(self.csv_parser.parse_bytes(data))

    def _load(self, raw_data: list[list[str]]) -> list[list[str]]:
        self.raw_data = raw_data
        self.column_mapping = ColumnMapping.empty()
        if self.has_header_row:
            self.auto_detect_mapping()
        self._reparse()
        logger.info(f"Loaded {len(raw_data)} rows")
        return raw_data

    def auto_detect_mapping(self) -> ColumnMapping | None:
        """Detect the mapping from the first row; keeps the current one on failure."""
        if not self.raw_data:
            return None
        detected = detect_column_mapping(self.raw_data[0])
        if detected is None:
            logger.info("Could not detect all columns from the header, map them manually")
            return None
        self.update_mapping(detected)
        return detected

    def set_has_header_row(self, has_header_row: bool) -> None:
        self.has_header_row = has_header_row
        self._reparse()

    def set_account_name(self, account_name: str) -> None:
        self.account_name = account_name

    def update_mapping(self, mapping: ColumnMapping) -> None:
        self.column_mapping = mapping
        self._reparse()

    def assign_column(self, mapping_field: MappingField, index: int) -> ColumnMapping:
        """Map a field to a column, unmapping any field that used it before."""
        mapping = self.column_mapping or ColumnMapping.empty()
        self.update_mapping(column_mapping.assign_column(mapping, mapping_field, index))
        return self.column_mapping

    def _reparse(self) -> None:
        if self.column_mapping is None or not self.column_mapping.is_complete():
            self.transactions = []
            return
        self.transactions = parse_transactions(
            self.raw_data,
            self.column_mapping,
            skip_header=self.has_header_row,
        )

    def validate_export(self) -> None:
        """Raise IncompleteConfigurationError unless export can proceed."""
        missing_fields = column_mapping.unassigned_fields(self.column_mapping)
        missing_account = not self.account_name
        if missing_fields or missing_account:
            raise IncompleteConfigurationError(
                missing_fields=missing_fields,
                missing_account=missing_account,
            )

    def convert(self) -> ConversionResult:
        self.validate_export()
        return convert_to_monarch_format(self.transactions, self.account_name)

    def export(
        self,
        kind: ExportKind,
        output_dir: str | Path = ".",
        result: ConversionResult | None = None,
    ) -> Path:
        """
        Convert the loaded transactions and write one Monarch file.

        Args:
            kind: Which file to write
            output_dir: Directory to write the file to
            result: Conversion to write; converted on demand when omitted

        Returns:
            Path of the written file
        """
        if self.is_exporting:
            raise ExportInProgressError("An export is already running")

        self.validate_export()

        self.export_state = ExportState.EXPORTING
        try:
            if result is None:
                result = self.convert()
            if kind is ExportKind.TRANSACTIONS:
                return export_to_csv(
                    result.transactions,
                    Path(output_dir) / TRANSACTIONS_FILENAME,
                    record_type=ProcessedTransaction,
                )
            return export_to_csv(
                result.balance_history,
                Path(output_dir) / BALANCE_HISTORY_FILENAME,
                record_type=BalanceHistory,
            )
        finally:
            self.export_state = ExportState.IDLE

    def format_preview(self) -> str:
        """Format previews of the grid, the parsed rows and both exports."""
        sections = [
            self.preview_formatter.format_grid(
                self.raw_data,
                self.column_mapping,
                self.has_header_row,
            ),
            self.preview_formatter.format_transactions(self.transactions),
        ]
        for kind in ExportKind:
            sections.append(f"{kind.value} export:")
            sections.append(
                self.preview_formatter.format_export_preview(self.transactions, kind),
            )
        return "\n\n".join(sections)

    def format_summary(self, result: ConversionResult) -> str:
        return self.summary_formatter.format_summary(result, self.account_name)
