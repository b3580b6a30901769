"""
Command-line interface for converting bank CSV exports to Monarch files.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .column_mapping import IncompleteConfigurationError
from .converter import BankCSVConverter
from .csv_export import FileSavingError
from .csv_parser import IngestionError
from .models import ColumnMapping, ExportKind, MappingField

logger = logging.getLogger(__name__)

EXPORT_CHOICES = ["transactions", "balance", "both"]


def load_config(config_file: str | None) -> dict:
    """Load CLI configuration from JSON file."""
    if not config_file:
        return {}

    config_path = Path(config_file)
    if not config_path.exists():
        logger.debug(f"CLI config file {config_file} does not exist")
        return {}

    try:
        with open(config_path, encoding="utf-8") as f:
            config = json.load(f)
        logger.debug(f"Loaded CLI config from {config_file}")
        return config
    except json.JSONDecodeError as e:
        logger.warning(f"Invalid JSON in CLI config file {config_file}: {e}")
        return {}
    except OSError as e:
        logger.warning(f"Failed to load CLI config from {config_file}: {e}")
        return {}


def parse_mapping_args(assignments: list[str]) -> dict[str, int]:
    """Parse ``FIELD=INDEX`` pairs given on the command line."""
    mapping = {}
    for assignment in assignments:
        name, sep, index = assignment.partition("=")
        name = name.strip().lower()
        if not sep or name not in {f.value for f in MappingField}:
            raise ValueError(
                f"Invalid column assignment '{assignment}', expected FIELD=INDEX "
                f"with FIELD one of {', '.join(f.value for f in MappingField)}",
            )
        try:
            mapping[name] = int(index)
        except ValueError as e:
            raise ValueError(f"Invalid column index in '{assignment}'") from e
    return mapping


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert a bank CSV export into Monarch transaction and balance history files",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging (DEBUG level)",
    )

    parser.add_argument(
        "--config",
        help="Path to CLI configuration file (contains defaults for account, mapping, output)",
    )

    parser.add_argument(
        "csv_file",
        help="Path to the bank CSV file",
    )

    parser.add_argument(
        "--account",
        help="Account name written to every output row",
    )

    parser.add_argument(
        "--header",
        dest="has_header_row",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Whether the first row contains column headers",
    )

    parser.add_argument(
        "--map",
        action="append",
        default=[],
        metavar="FIELD=INDEX",
        help="Assign a zero-based column index to a field (date, transaction, debit, credit, balance)",
    )

    parser.add_argument(
        "--delimiter",
        help="CSV delimiter (default: ',')",
    )

    parser.add_argument(
        "--encoding",
        help="File encoding (default: utf-8)",
    )

    parser.add_argument(
        "--output-dir",
        help="Directory for the exported files (default: current directory)",
    )

    parser.add_argument(
        "--export",
        choices=EXPORT_CHOICES,
        help="Which file(s) to export (default: both)",
    )

    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show a preview of the data and mapping instead of exporting",
    )

    return parser


def main():
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s: %(message)s",
    )

    config = load_config(args.config)

    account_name = args.account if args.account is not None else config.get("account_name", "")
    has_header_row = (
        args.has_header_row
        if args.has_header_row is not None
        else bool(config.get("has_header_row", False))
    )
    output_dir = Path(args.output_dir or config.get("output_dir", "."))
    export_choice = args.export or config.get("export", "both")
    if export_choice not in EXPORT_CHOICES:
        logger.error(f"Error: export must be one of {', '.join(EXPORT_CHOICES)}")
        sys.exit(1)

    try:
        mapping_values = dict(config.get("column_mapping", {}))
        mapping_values.update(parse_mapping_args(args.map))
        ColumnMapping.from_dict(mapping_values)  # rejects unknown fields and bad indices
    except (ValueError, TypeError) as e:
        logger.error(f"Error: {e}")
        sys.exit(1)

    converter = BankCSVConverter(
        encoding=args.encoding or config.get("encoding", "utf-8"),
        delimiter=args.delimiter or config.get("delimiter", ","),
    )
    converter.set_has_header_row(has_header_row)
    converter.set_account_name(account_name)

    try:
        converter.load_file(args.csv_file)
    except IngestionError as e:
        logger.error(f"Error processing file: {e}")
        sys.exit(1)

    for name, index in mapping_values.items():
        converter.assign_column(MappingField(name), int(index))

    if args.preview:
        logger.info(converter.format_preview())
        return

    kinds = (
        list(ExportKind)
        if export_choice == "both"
        else [ExportKind(export_choice)]
    )

    try:
        result = converter.convert()
        for kind in kinds:
            converter.export(kind, output_dir, result=result)
    except IncompleteConfigurationError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)
    except FileSavingError as e:
        logger.error(f"Error writing output: {e}")
        sys.exit(1)

    logger.info(converter.format_summary(result))


if __name__ == "__main__":
    main()
