"""
Monarch CSV - Convert bank CSV exports into Monarch import files.

This package provides tools to read arbitrary bank CSV exports, map their
columns, and write Monarch-compatible transaction and balance history CSVs.
"""

from .column_mapping import (
    IncompleteConfigurationError,
    assign_column,
    detect_column_mapping,
    unassigned_fields,
)
from .converter import BankCSVConverter, ExportInProgressError
from .csv_export import export_to_csv, render_csv
from .csv_parser import BankCSVParser, IngestionError
from .models import (
    BalanceHistory,
    BankTransaction,
    ColumnMapping,
    ConversionResult,
    ExportKind,
    MappingField,
    ProcessedTransaction,
)
from .monarch_format import convert_to_monarch_format, normalize_date
from .transaction_parser import parse_transactions

__version__ = "0.1.0"
__all__ = [
    "BalanceHistory",
    "BankCSVConverter",
    "BankCSVParser",
    "BankTransaction",
    "ColumnMapping",
    "ConversionResult",
    "ExportInProgressError",
    "ExportKind",
    "IncompleteConfigurationError",
    "IngestionError",
    "MappingField",
    "ProcessedTransaction",
    "assign_column",
    "convert_to_monarch_format",
    "detect_column_mapping",
    "export_to_csv",
    "normalize_date",
    "parse_transactions",
    "render_csv",
    "unassigned_fields",
]
