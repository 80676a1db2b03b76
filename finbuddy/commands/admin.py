"""Admin commands for init and backup."""

import shutil
import sys
from datetime import datetime
from pathlib import Path

from rich.console import Console

from finbuddy.config import create_default_config, get_config_path, load_storage_config

console = Console()


def init_command(force: bool = False) -> None:
    """Write the default configuration file."""
    config_path = get_config_path()

    if config_path.exists() and not force:
        console.print("[red]Initialization failed:[/red]", style="bold")
        console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'finbuddy init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)

    storage = load_storage_config(config_path)
    console.print("[green]✓[/green] Config file created (permissions: 600)")
    console.print(f"[dim]Entries: {storage.entries_path}[/dim]")
    console.print(f"[dim]Budget: {storage.budget_path}[/dim]")


def backup_command(output_dir: str | None = None) -> None:
    """Copy the entries and budget files to a timestamped backup."""
    storage = load_storage_config()
    sources = [path for path in (storage.entries_path, storage.budget_path) if path.exists()]

    if not sources:
        console.print("[red]No data files found. Add an entry first.[/red]", style="bold")
        sys.exit(1)

    if output_dir:
        backup_dir = Path(output_dir).expanduser()
    else:
        backup_dir = storage.data_dir / "backups"

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    try:
        backup_dir.mkdir(parents=True, exist_ok=True)
        for source in sources:
            target = backup_dir / f"{source.stem}_{timestamp}{source.suffix}"
            shutil.copy2(source, target)
            console.print(f"[green]✓[/green] {source.name} backed up to: {target}")
    except OSError as e:
        console.print(f"[red]Backup failed: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("\n[green]Backup complete![/green]", style="bold")
