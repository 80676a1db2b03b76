"""Pure functions and types for financial entries.

This module contains the functional core for expenses and incomes:
- No I/O operations (no files, no console)
- Validation shared by interactive input and stored records
- Easy to test

All amounts are Decimals quantized to cents (Amount type).
"""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import TypeVar

from finbuddy.domain.errors import (
    AmountFormatError,
    AmountOutOfRangeError,
    DateFormatError,
    DescriptionFormatError,
    FutureDateError,
    MissingDescriptionError,
    UnknownCategoryError,
)
from finbuddy.domain.models import CENTS, EARLIEST_DATE, FORBIDDEN_DESCRIPTION_TEXT, MAX_AMOUNT, Amount, Description


class ExpenseCategory(Enum):
    """Categories an expense can belong to."""

    FOOD = "FOOD"
    TRANSPORT = "TRANSPORT"
    UTILITIES = "UTILITIES"
    ENTERTAINMENT = "ENTERTAINMENT"
    EDUCATION = "EDUCATION"
    OTHER = "OTHER"


class IncomeCategory(Enum):
    """Categories an income can belong to."""

    SALARY = "SALARY"
    INVESTMENT = "INVESTMENT"
    GIFT = "GIFT"
    OTHER = "OTHER"


@dataclass(frozen=True)
class Expense:
    """Immutable expense data."""

    amount: Amount
    description: Description
    date: date
    category: ExpenseCategory = ExpenseCategory.OTHER


@dataclass(frozen=True)
class Income:
    """Immutable income data."""

    amount: Amount
    description: Description
    date: date
    category: IncomeCategory = IncomeCategory.OTHER


FinancialEntry = Expense | Income

C = TypeVar("C", ExpenseCategory, IncomeCategory)


def parse_amount(text: str) -> Amount:
    """Parse user or stored text into a non-negative amount.

    Args:
        text: Amount text, e.g. "12.50".

    Returns:
        Parsed amount (not yet range checked or quantized).

    Raises:
        AmountFormatError: If text is not a finite, non-negative number.
    """
    try:
        value = Decimal(text.strip())
    except InvalidOperation:
        raise AmountFormatError(f"Invalid amount: {text!r}") from None

    if not value.is_finite():
        raise AmountFormatError(f"Invalid amount: {text!r}")
    if value < 0:
        raise AmountFormatError("Amount should be non-negative")
    if value == 0:
        value = value.copy_abs()
    return Amount(value)


def quantize_amount(amount: Decimal) -> Amount:
    """Round an amount to whole cents."""
    quantized = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    return Amount(quantized.copy_abs() if quantized == 0 else quantized)


def find_category(categories: type[C], name: str) -> C | None:
    """Look up a category by name, ignoring case and surrounding whitespace.

    Args:
        categories: ExpenseCategory or IncomeCategory.
        name: Category name as typed or stored.

    Returns:
        Matching category or None if unknown.
    """
    return categories.__members__.get(name.strip().upper())


def resolve_category(categories: type[C], name: str | C) -> C:
    """Like find_category, but raises UnknownCategoryError for unknown names."""
    if isinstance(name, categories):
        return name

    category = find_category(categories, str(name))
    if category is None:
        known = ", ".join(categories.__members__)
        raise UnknownCategoryError(f"Unknown category '{name}'. Expected one of: {known}")
    return category


def validate_entry(amount: Decimal, description: str, entry_date: date | None, today: date | None = None) -> None:
    """Check entry fields, raising for the first violated constraint.

    Args:
        amount: Entry amount.
        description: Entry description.
        entry_date: Entry date.
        today: Reference date. If None, uses the current date.

    Raises:
        AmountFormatError: If amount is negative.
        AmountOutOfRangeError: If amount exceeds MAX_AMOUNT.
        MissingDescriptionError: If description is empty.
        DescriptionFormatError: If description contains a line break or the field delimiter.
        DateFormatError: If date is missing or before EARLIEST_DATE.
        FutureDateError: If date is after today.
    """
    if amount < 0:
        raise AmountFormatError("Amount should be non-negative")
    if amount > MAX_AMOUNT:
        raise AmountOutOfRangeError(f"Invalid amount. Amount must be ${MAX_AMOUNT} or less.")
    if description is None or not description.strip():
        raise MissingDescriptionError("Description should not be empty")
    if any(text in description for text in FORBIDDEN_DESCRIPTION_TEXT):
        raise DescriptionFormatError("Description cannot contain line breaks or '¦¦'")
    if entry_date is None:
        raise DateFormatError("Date should not be empty")
    if entry_date < EARLIEST_DATE:
        raise DateFormatError(f"Date cannot be before {EARLIEST_DATE:%d/%m/%Y}.")

    if today is None:
        today = date.today()
    if entry_date > today:
        raise FutureDateError("Date cannot be after current date.")


def make_expense(
    amount: Decimal,
    description: str,
    entry_date: date,
    category: str | ExpenseCategory = ExpenseCategory.OTHER,
    today: date | None = None,
) -> Expense:
    """Build a validated expense.

    Raises:
        EntryValidationError: Subclass naming the first violated constraint.
    """
    resolved = resolve_category(ExpenseCategory, category)
    validate_entry(amount, description, entry_date, today)
    return Expense(quantize_amount(amount), Description(description.strip()), entry_date, resolved)


def make_income(
    amount: Decimal,
    description: str,
    entry_date: date,
    category: str | IncomeCategory = IncomeCategory.OTHER,
    today: date | None = None,
) -> Income:
    """Build a validated income.

    Raises:
        EntryValidationError: Subclass naming the first violated constraint.
    """
    resolved = resolve_category(IncomeCategory, category)
    validate_entry(amount, description, entry_date, today)
    return Income(quantize_amount(amount), Description(description.strip()), entry_date, resolved)


class FinancialList:
    """Ordered collection of entries, kept in insertion order."""

    def __init__(self, entries: list[FinancialEntry] | None = None) -> None:
        self._entries: list[FinancialEntry] = list(entries or [])

    def add_entry(self, entry: FinancialEntry) -> None:
        self._entries.append(entry)

    append = add_entry

    def get_entry(self, index: int) -> FinancialEntry:
        return self._entries[index]

    @property
    def entry_count(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> FinancialEntry:
        return self._entries[index]

    def __iter__(self) -> Iterator[FinancialEntry]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FinancialList):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"FinancialList({self._entries!r})"

    def total_expenses(self) -> Amount:
        """Sum of all expense amounts."""
        return Amount(sum((e.amount for e in self._entries if isinstance(e, Expense)), Decimal("0.00")))

    def total_incomes(self) -> Amount:
        """Sum of all income amounts."""
        return Amount(sum((e.amount for e in self._entries if isinstance(e, Income)), Decimal("0.00")))

    def balance(self) -> Amount:
        """Incomes minus expenses."""
        return Amount(self.total_incomes() - self.total_expenses())
