"""
Data models for bank CSV conversion.
"""

from dataclasses import asdict, dataclass, field, fields, replace
from enum import Enum

UNASSIGNED = -1


class MappingField(Enum):
    """The five semantic columns every bank export must provide."""

    DATE = "date"
    TRANSACTION = "transaction"
    DEBIT = "debit"
    CREDIT = "credit"
    BALANCE = "balance"


class ExportKind(Enum):
    """Which of the two output files to export."""

    TRANSACTIONS = "transactions"
    BALANCE = "balance"


@dataclass(frozen=True)
class ColumnMapping:
    """Column index per semantic field; -1 marks an unassigned field."""

    date: int = UNASSIGNED
    transaction: int = UNASSIGNED
    debit: int = UNASSIGNED
    credit: int = UNASSIGNED
    balance: int = UNASSIGNED

    def __post_init__(self):
        for mapping_field in MappingField:
            index = getattr(self, mapping_field.value)
            if index < UNASSIGNED:
                raise ValueError(
                    f"Invalid column index {index} for {mapping_field.value}: "
                    f"expected {UNASSIGNED} or a column number from 0",
                )

    @classmethod
    def empty(cls) -> "ColumnMapping":
        """Mapping with every field unassigned."""
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, int]) -> "ColumnMapping":
        """Create a mapping from a ``{field name: index}`` dict.

        Unknown keys raise ``ValueError``; missing keys stay unassigned.
        """
        values = {}
        for key, index in data.items():
            mapping_field = MappingField(key)
            values[mapping_field.value] = int(index)
        return cls(**values)

    def get(self, mapping_field: MappingField) -> int:
        return getattr(self, mapping_field.value)

    def with_field(self, mapping_field: MappingField, index: int) -> "ColumnMapping":
        return replace(self, **{mapping_field.value: index})

    def as_dict(self) -> dict[str, int]:
        return {f.value: self.get(f) for f in MappingField}

    def is_complete(self) -> bool:
        return all(self.get(f) != UNASSIGNED for f in MappingField)


@dataclass(frozen=True)
class BankTransaction:
    """One source row projected onto the mapped columns."""

    date: str
    transaction: str
    debit: float | None
    credit: float | None
    balance: float
    raw_data: list[str] = field(default_factory=list, compare=False)


@dataclass
class ProcessedTransaction:
    """A transaction row in Monarch's import layout."""

    date: str
    merchant: str
    category: str
    account: str
    originalStatement: str  # noqa: N815 - column name in the Monarch file
    notes: str
    amount: float
    tags: str


@dataclass
class BalanceHistory:
    """A balance snapshot row in Monarch's import layout."""

    date: str
    account: str
    balance: float


@dataclass
class ConversionResult:
    """Both Monarch outputs derived from one set of bank transactions."""

    transactions: list[ProcessedTransaction]
    balance_history: list[BalanceHistory]


def record_field_names(record_type: type) -> list[str]:
    """Column names of a record dataclass, in declaration order."""
    return [f.name for f in fields(record_type)]


def record_to_dict(record) -> dict:
    return asdict(record)
