"""Entry commands (add expense, add income, list)."""

import sys

from rich.console import Console
from rich.table import Table

from finbuddy.commands import open_ledger
from finbuddy.dates import format_entry_date, parse_user_date
from finbuddy.domain.entries import Expense, FinancialEntry, make_expense, make_income, parse_amount
from finbuddy.domain.errors import EntryValidationError, StorageIOError

console = Console()


def add_entry_command(kind: str, amount: str, description: str, date: str | None, category: str) -> None:
    """Validate a new expense or income and save it.

    Args:
        kind: "expense" or "income".
        amount: Amount in dollars, e.g. "12.50".
        description: Entry description.
        date: Entry date (dd/mm/yy, YYYY-MM-DD, ...). None means today.
        category: Category name, case-insensitive.
    """
    try:
        storage, entries, budget_state = open_ledger()
    except StorageIOError as e:
        console.print(f"[red]Storage error: {e}[/red]", style="bold")
        sys.exit(1)

    try:
        factory = make_expense if kind == "expense" else make_income
        entry = factory(parse_amount(amount), description, parse_user_date(date), category)
    except EntryValidationError as e:
        console.print(f"[red]Invalid {kind}: {e}[/red]")
        sys.exit(1)

    entries.add_entry(entry)

    try:
        storage.persist(entries, budget_state)
    except StorageIOError as e:
        console.print(f"[red]Storage error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] {kind.capitalize()} added:")
    console.print(f"  Date: {format_entry_date(entry.date)}")
    console.print(f"  Description: {entry.description}")
    console.print(f"  Amount: ${entry.amount:,.2f}")
    console.print(f"  Category: {entry.category.name}")


def format_amount(entry: FinancialEntry) -> str:
    """Signed, colored amount for display."""
    if isinstance(entry, Expense):
        return f"[red]-${entry.amount:,.2f}[/red]"
    return f"[green]+${entry.amount:,.2f}[/green]"


def list_command() -> None:
    """List all entries with totals."""
    try:
        _, entries, budget_state = open_ledger()
    except StorageIOError as e:
        console.print(f"[red]Storage error: {e}[/red]", style="bold")
        sys.exit(1)

    if not entries:
        console.print("[yellow]No entries found[/yellow]")
    else:
        table = Table(title=f"Entries (showing {len(entries)})")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Type")
        table.add_column("Date", style="cyan")
        table.add_column("Description", style="white")
        table.add_column("Amount", justify="right")
        table.add_column("Category", style="magenta")

        for index, entry in enumerate(entries, start=1):
            kind = "Expense" if isinstance(entry, Expense) else "Income"
            table.add_row(
                str(index),
                kind,
                format_entry_date(entry.date),
                entry.description,
                format_amount(entry),
                entry.category.name,
            )

        console.print(table)

    console.print(f"Total income:   [green]${entries.total_incomes():,.2f}[/green]")
    console.print(f"Total expenses: [red]${entries.total_expenses():,.2f}[/red]")
    console.print(f"Balance:        ${entries.balance():,.2f}")

    if budget_state.is_set:
        remaining = budget_state.remaining(entries.total_expenses())
        color = "green" if remaining >= 0 else "red"
        console.print(f"Budget left:    [{color}]${remaining:,.2f}[/{color}]")
