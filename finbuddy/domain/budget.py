"""Budget record and the holder for the single live budget.

Pure logic, no I/O. A session has exactly one budget, zero until the user sets
one; loading or setting a budget replaces the previous one wholesale.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from finbuddy.domain.entries import quantize_amount
from finbuddy.domain.errors import AmountFormatError, AmountOutOfRangeError
from finbuddy.domain.models import MAX_AMOUNT, Amount


@dataclass(frozen=True)
class Budget:
    """Immutable budget data."""

    amount: Amount
    set_date: date


def zero_budget(today: date | None = None) -> Budget:
    """The budget a first run starts with."""
    return Budget(Amount(Decimal("0.00")), today or date.today())


class BudgetState:
    """Holds the one live budget for a session."""

    def __init__(self, budget: Budget | None = None) -> None:
        self.budget = budget or zero_budget()

    @property
    def is_set(self) -> bool:
        """Whether the user has chosen a budget above zero."""
        return self.budget.amount > 0

    def overwrite(self, budget: Budget) -> None:
        """Replace the current budget with one read from storage."""
        self.budget = budget

    def set_budget(self, amount: Decimal, today: date | None = None) -> Budget:
        """Set a new budget amount dated today.

        Args:
            amount: Budget amount.
            today: Date to record. If None, uses the current date.

        Returns:
            The new budget.

        Raises:
            AmountFormatError: If amount is negative.
            AmountOutOfRangeError: If amount exceeds MAX_AMOUNT.
        """
        if amount < 0:
            raise AmountFormatError("Budget amount should be non-negative")
        if amount > MAX_AMOUNT:
            raise AmountOutOfRangeError(f"Invalid amount. Budget must be ${MAX_AMOUNT} or less.")

        self.budget = Budget(quantize_amount(amount), today or date.today())
        return self.budget

    def remaining(self, spent: Decimal) -> Amount:
        """Budget left after spending."""
        return Amount(self.budget.amount - spent)
