"""CLI entry point for finbuddy."""

import typer

from finbuddy.commands.admin import backup_command, init_command
from finbuddy.commands.budget import budget_command
from finbuddy.commands.entries import add_entry_command, list_command
from finbuddy.logs import configure_logging

app = typer.Typer(
    name="finbuddy",
    help="finbuddy - track your expenses, incomes and budget",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show informational log messages"),
) -> None:
    """finbuddy - track your expenses, incomes and budget."""
    configure_logging(verbose)


@app.command(name="add-expense")
def add_expense(
    amount: str,
    description: str,
    date: str = typer.Option(None, "--date", "-d", help="Date of the expense (default: today)"),
    category: str = typer.Option("OTHER", "--category", "-c", help="FOOD, TRANSPORT, UTILITIES, ..."),
) -> None:
    """Record an expense."""
    add_entry_command("expense", amount, description, date, category)


@app.command(name="add-income")
def add_income(
    amount: str,
    description: str,
    date: str = typer.Option(None, "--date", "-d", help="Date of the income (default: today)"),
    category: str = typer.Option("OTHER", "--category", "-c", help="SALARY, INVESTMENT, GIFT or OTHER"),
) -> None:
    """Record an income."""
    add_entry_command("income", amount, description, date, category)


@app.command(name="list")
def list_entries() -> None:
    """List your entries with totals."""
    list_command()


@app.command()
def budget(
    set_amount: str = typer.Option(None, "--set", help="Set your budget (in $)"),
) -> None:
    """Show or set your budget."""
    budget_command(set_amount)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Create the finbuddy configuration file."""
    init_command(force)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: <data dir>/backups)"),
) -> None:
    """Backup your entries and budget files."""
    backup_command(output_dir)


if __name__ == "__main__":
    app()
