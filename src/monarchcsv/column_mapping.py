"""
Column mapping: header detection and manual column assignment.
"""

import logging

from .models import UNASSIGNED, ColumnMapping, MappingField

logger = logging.getLogger(__name__)

HEADER_KEYWORDS: dict[MappingField, tuple[str, ...]] = {
    MappingField.DATE: ("date",),
    MappingField.TRANSACTION: ("description", "transaction"),
    MappingField.DEBIT: ("debit", "withdrawal"),
    MappingField.CREDIT: ("credit", "deposit"),
    MappingField.BALANCE: ("balance",),
}


class IncompleteConfigurationError(Exception):
    """Exception raised when conversion is requested before setup is complete."""

    def __init__(
        self,
        missing_fields: list[str] | None = None,
        missing_account: bool = False,
    ):
        self.missing_fields = missing_fields or []
        self.missing_account = missing_account

        problems = []
        if missing_account:
            problems.append("please provide an account name")
        if self.missing_fields:
            problems.append(
                f"please map the following columns: {', '.join(self.missing_fields)}",
            )
        super().__init__("; ".join(problems) or "configuration is incomplete")


def detect_column_mapping(headers: list[str]) -> ColumnMapping | None:
    """
    Guess the column mapping from a header row.

    Each header is lower-cased and checked for the keywords of every field.
    A later matching column replaces an earlier one for the same field.

    Args:
        headers: Cells of the header row

    Returns:
        The detected mapping, or None if any field found no column
    """
    mapping = ColumnMapping.empty()

    for index, header in enumerate(headers):
        lower_header = header.lower()
        for mapping_field, keywords in HEADER_KEYWORDS.items():
            if any(keyword in lower_header for keyword in keywords):
                mapping = mapping.with_field(mapping_field, index)

    missing = unassigned_fields(mapping)
    if missing:
        logger.debug(f"Could not detect columns from header: {', '.join(missing)}")
        return None

    logger.debug(f"Detected column mapping: {mapping.as_dict()}")
    return mapping


def assign_column(
    mapping: ColumnMapping,
    mapping_field: MappingField,
    index: int,
) -> ColumnMapping:
    """Assign a column to a field, clearing any other field using that column."""
    new_mapping = mapping
    if index != UNASSIGNED:
        for other in MappingField:
            if other is not mapping_field and new_mapping.get(other) == index:
                new_mapping = new_mapping.with_field(other, UNASSIGNED)
    return new_mapping.with_field(mapping_field, index)


def unassigned_fields(mapping: ColumnMapping | None) -> list[str]:
    """Names of the fields without a column, in field order."""
    if mapping is None:
        return [f.value for f in MappingField]
    return [f.value for f in MappingField if mapping.get(f) == UNASSIGNED]


def validate_column_mapping(mapping: ColumnMapping | None) -> ColumnMapping:
    missing = unassigned_fields(mapping)
    if missing:
        raise IncompleteConfigurationError(missing_fields=missing)
    return mapping


def column_label(mapping: ColumnMapping | None, index: int) -> str:
    """Name of the field mapped to a column, or an empty string."""
    if mapping is None:
        return ""
    for mapping_field in MappingField:
        if mapping.get(mapping_field) == index:
            return mapping_field.value
    return ""
