"""Line codec for entries and budgets.

Each entry is stored as one line:

    E ¦¦ 12.50 ¦¦ Lunch ¦¦ 05/03/24 ¦¦ FOOD

and the budget as one line:

    500.00 ¦¦ 2024-03-01

Encoders always produce this canonical form. Decoders accept anything the
parsers can make sense of and return an explicit result instead of raising,
so a caller can skip a bad line and keep going.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from finbuddy.dates import format_entry_date, parse_entry_date, parse_iso_date
from finbuddy.domain.budget import Budget
from finbuddy.domain.entries import (
    Expense,
    ExpenseCategory,
    FinancialEntry,
    Income,
    IncomeCategory,
    find_category,
    parse_amount,
    quantize_amount,
    validate_entry,
)
from finbuddy.domain.errors import AmountOutOfRangeError, FinanceError, RecordFormatError, UnknownCategoryError
from finbuddy.domain.models import MAX_AMOUNT, Amount, Description

DELIMITER = " ¦¦ "

EXPENSE_TAG = "E"
INCOME_TAG = "I"

ENTRY_FIELD_COUNT = 5
BUDGET_FIELD_COUNT = 2


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of decoding one entry line."""

    entry: FinancialEntry | None
    error: FinanceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class BudgetDecodeResult:
    """Outcome of decoding the budget line."""

    budget: Budget | None
    error: FinanceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class SkippedLine:
    """A stored line that could not be decoded."""

    line_number: int
    line: str
    reason: str


@dataclass
class ScanResult:
    """Everything decoded from an entries file."""

    entries: list[FinancialEntry] = field(default_factory=list)
    expense_count: int = 0
    income_count: int = 0
    skipped: list[SkippedLine] = field(default_factory=list)


def encode_entry(entry: FinancialEntry) -> str:
    """Serialize an entry to its canonical storage line (no newline)."""
    tag = EXPENSE_TAG if isinstance(entry, Expense) else INCOME_TAG
    return DELIMITER.join(
        [
            tag,
            f"{entry.amount:.2f}",
            entry.description,
            format_entry_date(entry.date),
            entry.category.name,
        ]
    )


def encode_budget(budget: Budget) -> str:
    """Serialize a budget to its storage line (no newline)."""
    return DELIMITER.join([f"{budget.amount:.2f}", budget.set_date.isoformat()])


def split_entry_line(line: str) -> list[str]:
    """Split an entry line into its five fields.

    The tag and amount come first and the date and category last; any extra
    fields in between are joined into the description, which validation then
    refuses because it contains the delimiter.

    Raises:
        RecordFormatError: If the line has too few fields.
    """
    tokens = line.split(DELIMITER)
    if len(tokens) < ENTRY_FIELD_COUNT:
        raise RecordFormatError(f"Expected {ENTRY_FIELD_COUNT} fields, found {len(tokens)}")
    if len(tokens) > ENTRY_FIELD_COUNT:
        tokens = tokens[:2] + [DELIMITER.join(tokens[2:-2])] + tokens[-2:]
    return tokens


def _parse_fields(
    tokens: list[str],
    categories: type[ExpenseCategory] | type[IncomeCategory],
    today: date | None,
) -> tuple[Amount, Description, date, ExpenseCategory | IncomeCategory]:
    # amount, category, date, then the validate_entry checks
    amount = parse_amount(tokens[1])
    description = tokens[2]

    category = find_category(categories, tokens[4])
    if category is None:
        raise UnknownCategoryError(f"Unknown category '{tokens[4].strip()}'")

    entry_date = parse_entry_date(tokens[3])
    validate_entry(amount, description, entry_date, today)
    return quantize_amount(amount), Description(description.strip()), entry_date, category


def parse_expense(tokens: list[str], today: date | None = None) -> Expense:
    """Build an expense from the fields of a stored line.

    Args:
        tokens: Fields as returned by split_entry_line. tokens[0] is the tag.
        today: Reference date for the future date check. If None, uses today.

    Returns:
        The expense.

    Raises:
        EntryValidationError: Subclass naming the first violated constraint.
    """
    amount, description, entry_date, category = _parse_fields(tokens, ExpenseCategory, today)
    return Expense(amount, description, entry_date, category)


def parse_income(tokens: list[str], today: date | None = None) -> Income:
    """Build an income from the fields of a stored line.

    Same field layout and errors as parse_expense.
    """
    amount, description, entry_date, category = _parse_fields(tokens, IncomeCategory, today)
    return Income(amount, description, entry_date, category)


def decode_entry(line: str, today: date | None = None) -> DecodeResult:
    """Decode one stored line, dispatching on its leading type tag.

    Never raises for bad input; the failure is returned in the result.
    """
    if line.startswith(EXPENSE_TAG):
        parser = parse_expense
    elif line.startswith(INCOME_TAG):
        parser = parse_income
    else:
        tag = line[:1] or "<empty line>"
        return DecodeResult(None, RecordFormatError(f"Unknown entry type: {tag}"))

    try:
        return DecodeResult(parser(split_entry_line(line), today))
    except FinanceError as e:
        return DecodeResult(None, e)


def decode_budget(line: str) -> BudgetDecodeResult:
    """Decode the stored budget line."""
    tokens = line.split(DELIMITER)
    if len(tokens) < BUDGET_FIELD_COUNT:
        return BudgetDecodeResult(None, RecordFormatError(f"Expected {BUDGET_FIELD_COUNT} fields, found {len(tokens)}"))

    try:
        amount = parse_amount(tokens[0])
        set_date = parse_iso_date(tokens[1])
        if amount > MAX_AMOUNT:
            raise AmountOutOfRangeError(f"Invalid budget amount: {tokens[0].strip()}")
    except FinanceError as e:
        return BudgetDecodeResult(None, e)
    return BudgetDecodeResult(Budget(quantize_amount(amount), set_date))


def scan_entries(lines: Iterable[str], today: date | None = None) -> ScanResult:
    """Decode every line of an entries file, skipping the ones that fail.

    Args:
        lines: Lines of the file, with or without their newlines.
        today: Reference date for the future date check. If None, uses today.

    Returns:
        Decoded entries in file order, per-type counts and the skipped lines.
    """
    result = ScanResult()
    for line_number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        decoded = decode_entry(line, today)

        if not decoded.ok:
            result.skipped.append(SkippedLine(line_number, line, str(decoded.error)))
            continue

        result.entries.append(decoded.entry)
        if isinstance(decoded.entry, Expense):
            result.expense_count += 1
        else:
            result.income_count += 1
    return result
