"""
CSV ingestion for arbitrary bank exports.
"""

import csv
import io
import logging
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)


class IngestionError(ValueError):
    """Exception raised when a file cannot be read as CSV."""


class BankCSVParser:
    """Reads a bank CSV export into a grid of string cells."""

    def __init__(
        self,
        encoding: str = "utf-8",
        delimiter: str = ",",
    ):
        self.encoding = encoding
        self.delimiter = delimiter

    def parse_file(self, file_path: str | Path) -> list[list[str]]:
        """
        Parse a CSV file into rows of cells.

        Args:
            file_path: Path to the CSV file

        Returns:
            List of rows, each a list of the cells present in that record
        """
        try:
            data = Path(file_path).read_bytes()
        except OSError as e:
            raise IngestionError(f"Error parsing CSV file: {e}") from e
        return self.parse_bytes(data)

    def parse_bytes(self, data: bytes) -> list[list[str]]:
        """Parse raw file contents, decoding them with the configured encoding."""
        try:
            text = data.decode(self.encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise IngestionError(f"Error parsing CSV file: {e}") from e
        return self.parse_text(text)

    def parse_text(self, text: str) -> list[list[str]]:
        """
        Parse CSV text into rows of cells.

        Rows keep their own length: a short record is not padded and a long
        one is not truncated. Blank lines are skipped.
        """
        text = text.lstrip("\ufeff")
        if not text.strip():
            return []

        lengths = self._record_lengths(text)
        if not lengths:
            return []
        width = max(lengths)

        try:
            df = pd.read_csv(
                io.StringIO(text),
                sep=self.delimiter,
                header=None,
                names=list(range(width)),
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
            )
        except Exception as e:
            raise IngestionError(f"Error parsing CSV file: {e}") from e

        if len(df) != len(lengths):
            raise IngestionError(
                f"Error parsing CSV file: read {len(df)} rows but found {len(lengths)} records",
            )

        grid = []
        # The reader pads short records up to the grid width.
        for values, length in zip(df.itertuples(index=False, name=None), lengths, strict=True):
            grid.append(list(values[:length]))

        logger.debug(f"Read {len(grid)} rows, up to {width} columns")
        return grid

    def _record_lengths(self, text: str) -> list[int]:
        """Number of fields in each non-blank record, honouring quoted fields."""
        try:
            reader = csv.reader(io.StringIO(text, newline=""), delimiter=self.delimiter)
            return [len(record) for record in reader if not _is_blank(record)]
        except (csv.Error, TypeError) as e:
            raise IngestionError(f"Error parsing CSV file: {e}") from e


def _is_blank(record: list[str]) -> bool:
    return not record or (len(record) == 1 and not record[0].strip())
