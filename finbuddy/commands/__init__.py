"""Command implementations behind the finbuddy CLI."""

from finbuddy.domain.budget import BudgetState
from finbuddy.domain.entries import FinancialList
from finbuddy.store.storage import Storage


def open_ledger() -> tuple[Storage, FinancialList, BudgetState]:
    """Load the stored entries and budget for a command.

    Raises:
        StorageIOError: If the data files cannot be read.
    """
    storage = Storage.from_config()
    budget_state = BudgetState()
    entries = storage.load(budget_state)
    return storage, entries, budget_state
