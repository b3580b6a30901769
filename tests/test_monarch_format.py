"""Unit tests for monarch_format.py."""

from monarchcsv.models import (
    BalanceHistory,
    BankTransaction,
    ConversionResult,
    ProcessedTransaction,
)
from monarchcsv.monarch_format import (
    DATE_FORMATS,
    calculate_amount,
    convert_to_monarch_format,
    normalize_date,
)


def make_transaction(
    date="01/15/2024",
    description="Coffee Shop",
    debit=None,
    credit=None,
    balance=0.0,
) -> BankTransaction:
    return BankTransaction(
        date=date,
        transaction=description,
        debit=debit,
        credit=credit,
        balance=balance,
    )


class TestNormalizeDate:
    """Tests for normalize_date function."""

    def test_format_priority(self):
        """Test that the format list keeps its order."""
        assert DATE_FORMATS == ("%m/%d/%Y", "%Y-%m-%d", "%d/%m/%Y")

    def test_month_day_year(self):
        """Test US style dates."""
        assert normalize_date("01/15/2024") == "2024-01-15"

    def test_single_digit_components_are_padded(self):
        """Test zero padding of month and day."""
        assert normalize_date("1/5/2024") == "2024-01-05"

    def test_iso_date_unchanged(self):
        """Test that ISO dates come back the same."""
        assert normalize_date("2024-01-15") == "2024-01-15"

    def test_day_month_year(self):
        """Test day-first dates that are invalid as month-first."""
        assert normalize_date("15/01/2024") == "2024-01-15"

    def test_ambiguous_date_uses_month_first(self):
        """Test that an ambiguous date resolves to month/day/year."""
        assert normalize_date("01/02/2024") == "2024-01-02"

    def test_unparsable_date_passes_through(self):
        """Test that unknown formats are returned unchanged."""
        assert normalize_date("Jan 15, 2024") == "Jan 15, 2024"
        assert normalize_date("15.01.2024") == "15.01.2024"
        assert normalize_date("") == ""


class TestCalculateAmount:
    """Tests for calculate_amount function."""

    def test_debit_is_negative(self):
        """Test that debits become negative amounts."""
        assert calculate_amount(make_transaction(debit=50.0)) == -50.0

    def test_negative_debit_stays_negative(self):
        """Test that an already negative debit keeps its magnitude."""
        assert calculate_amount(make_transaction(debit=-50.0)) == -50.0

    def test_credit_is_positive(self):
        """Test that credits are used as-is."""
        assert calculate_amount(make_transaction(credit=20.0)) == 20.0

    def test_debit_wins_over_credit(self):
        """Test that a debit takes precedence when both are present."""
        assert calculate_amount(make_transaction(debit=5.0, credit=20.0)) == -5.0

    def test_zero_debit_falls_back_to_credit(self):
        """Test that a zero debit is treated like no debit."""
        assert calculate_amount(make_transaction(debit=0.0, credit=20.0)) == 20.0

    def test_no_amounts(self):
        """Test that a row without debit and credit has amount 0."""
        assert calculate_amount(make_transaction()) == 0.0


class TestConvertToMonarchFormat:
    """Tests for convert_to_monarch_format function."""

    def test_convert_single_debit(self):
        """Test converting a debit transaction."""
        transaction = make_transaction(debit=4.5, balance=1200.0)

        result = convert_to_monarch_format([transaction], "Checking")

        assert result.transactions == [
            ProcessedTransaction(
                date="2024-01-15",
                merchant="Coffee Shop",
                category="",
                account="Checking",
                originalStatement="Coffee Shop",
                notes="",
                amount=-4.5,
                tags="",
            ),
        ]
        assert result.balance_history == [
            BalanceHistory(date="2024-01-15", account="Checking", balance=1200.0),
        ]

    def test_balance_is_not_sign_adjusted(self):
        """Test that balance history keeps the source balance."""
        transaction = make_transaction(debit=10.0, balance=-300.0)

        result = convert_to_monarch_format([transaction], "Card")

        assert result.balance_history[0].balance == -300.0

    def test_transactions_keep_input_order(self):
        """Test that transactions are not reordered."""
        transactions = [
            make_transaction(date="03/01/2024", description="Third"),
            make_transaction(date="01/01/2024", description="First"),
            make_transaction(date="02/01/2024", description="Second"),
        ]

        result = convert_to_monarch_format(transactions, "Checking")

        assert [t.merchant for t in result.transactions] == ["Third", "First", "Second"]

    def test_balance_history_sorted_by_date_string(self):
        """Test that balance history is sorted by the normalized date text."""
        transactions = [
            make_transaction(date="01/20/2024", balance=3.0),
            make_transaction(date="Jan 3", balance=1.0),
            make_transaction(date="2024-01-05", balance=2.0),
        ]

        result = convert_to_monarch_format(transactions, "Checking")

        assert [b.date for b in result.balance_history] == [
            "2024-01-05",
            "2024-01-20",
            "Jan 3",
        ]
        assert sorted(b.balance for b in result.balance_history) == [1.0, 2.0, 3.0]

    def test_balance_history_sort_is_stable(self):
        """Test that entries with the same date keep their input order."""
        transactions = [
            make_transaction(date="01/15/2024", balance=100.0),
            make_transaction(date="01/15/2024", balance=90.0),
        ]

        result = convert_to_monarch_format(transactions, "Checking")

        assert [b.balance for b in result.balance_history] == [100.0, 90.0]

    def test_output_length_matches_input(self):
        """Test one output row per input transaction in both lists."""
        transactions = [make_transaction(credit=float(i)) for i in range(7)]

        result = convert_to_monarch_format(transactions, "Savings")

        assert len(result.transactions) == 7
        assert len(result.balance_history) == 7

    def test_conversion_is_repeatable(self):
        """Test that converting twice gives identical output."""
        transactions = [
            make_transaction(debit=4.5, balance=10.0),
            make_transaction(date="2024-02-01", credit=99.0, balance=109.0),
        ]

        first = convert_to_monarch_format(transactions, "Checking")
        second = convert_to_monarch_format(transactions, "Checking")

        assert first == second

    def test_empty_input(self):
        """Test converting no transactions."""
        assert convert_to_monarch_format([], "Checking") == ConversionResult([], [])


class TestNormalizeDateYearWidth:
    """Tests for the four-digit year requirement."""

    def test_two_digit_year_passes_through(self):
        """Test that two-digit years are not normalized."""
        assert normalize_date("01/15/24") == "01/15/24"
        assert normalize_date("24-01-15") == "24-01-15"
