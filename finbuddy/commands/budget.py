"""Budget command for showing and setting the budget."""

import sys

from rich.console import Console

from finbuddy.commands import open_ledger
from finbuddy.domain.entries import parse_amount
from finbuddy.domain.errors import EntryValidationError, StorageIOError

console = Console()


def budget_command(set_amount: str | None = None) -> None:
    """Show the budget, or replace it with a new amount dated today.

    Args:
        set_amount: New budget amount in dollars. None just shows the budget.
    """
    try:
        storage, entries, budget_state = open_ledger()
    except StorageIOError as e:
        console.print(f"[red]Storage error: {e}[/red]", style="bold")
        sys.exit(1)

    if set_amount is not None:
        try:
            budget_state.set_budget(parse_amount(set_amount))
        except EntryValidationError as e:
            console.print(f"[red]Invalid budget: {e}[/red]")
            sys.exit(1)

        try:
            storage.persist(entries, budget_state)
        except StorageIOError as e:
            console.print(f"[red]Storage error: {e}[/red]", style="bold")
            sys.exit(1)

        console.print(f"[green]✓[/green] Budget set to ${budget_state.budget.amount:,.2f}")
        return

    budget = budget_state.budget
    if not budget_state.is_set:
        console.print("[yellow]No budget set[/yellow]")
        console.print("[dim]Use 'finbuddy budget --set AMOUNT' to set one[/dim]")
        return

    spent = entries.total_expenses()
    remaining = budget_state.remaining(spent)
    color = "green" if remaining >= 0 else "red"

    console.print(f"Budget:    ${budget.amount:,.2f} (set {budget.set_date.isoformat()})")
    console.print(f"Spent:     ${spent:,.2f}")
    console.print(f"Remaining: [{color}]${remaining:,.2f}[/{color}]")
