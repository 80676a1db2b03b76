"""Load and persist the entry list and budget as plain text files."""

import logging
import os
import stat
import tempfile
from collections.abc import Iterable
from datetime import date
from pathlib import Path

from finbuddy.config import StorageConfig, load_storage_config
from finbuddy.domain.budget import BudgetState
from finbuddy.domain.entries import FinancialList
from finbuddy.domain.errors import StorageIOError
from finbuddy.store.codec import ScanResult, decode_budget, encode_budget, encode_entry, scan_entries
from finbuddy.store.files import StorageFile

logger = logging.getLogger(__name__)


class Storage:
    """Reads and rewrites the entries file and the budget file.

    Usage:
        storage = Storage.from_config()
        entries = storage.load(budget_state)
        ...
        storage.persist(entries, budget_state)
    """

    def __init__(self, entries_path: Path | str, budget_path: Path | str) -> None:
        self.entries_file = StorageFile(entries_path)
        self.budget_file = StorageFile(budget_path)
        self.last_scan: ScanResult | None = None

    @classmethod
    def from_config(cls, config: StorageConfig | None = None) -> "Storage":
        """Build a Storage from configuration (default: the user's config file)."""
        if config is None:
            config = load_storage_config()
        return cls(config.entries_path, config.budget_path)

    def load(self, budget_state: BudgetState, today: date | None = None) -> FinancialList:
        """Load entries, then the budget, from disk.

        Lines that cannot be decoded are logged and skipped. A missing entries
        file gives an empty list. When the budget line loads, both files are
        rewritten straight away so they end up in canonical form.

        Args:
            budget_state: Overwritten in place with the stored budget, if any.
            today: Reference date for the future date check. If None, uses today.

        Returns:
            The loaded entries, in file order.

        Raises:
            StorageIOError: If an existing file cannot be read.
        """
        entries = FinancialList()

        if self.entries_file.exists():
            scan = scan_entries(self._read_lines(self.entries_file.path), today)
            for skipped in scan.skipped:
                logger.warning(
                    "Skipping stored entry on line %d, invalid storage format (%s): %r",
                    skipped.line_number,
                    skipped.reason,
                    skipped.line,
                )
            for entry in scan.entries:
                entries.add_entry(entry)
        else:
            logger.info("No entries file at %s, starting with an empty list", self.entries_file.path)
            scan = ScanResult()
        self.last_scan = scan

        if self._load_budget(budget_state):
            self.persist(entries, budget_state)

        logger.info("Loaded %d expenses and %d incomes from file.", scan.expense_count, scan.income_count)
        return entries

    def _load_budget(self, budget_state: BudgetState) -> bool:
        # Only the first line of the budget file is read
        if not self.budget_file.exists():
            logger.info("No budget file at %s, keeping current budget", self.budget_file.path)
            return False

        line = next(iter(self._read_lines(self.budget_file.path)), "").rstrip("\r\n")
        if not line:
            logger.info("No budget recorded in %s, keeping current budget", self.budget_file.path)
            return False

        decoded = decode_budget(line)
        if not decoded.ok:
            logger.warning("Skipping stored budget, invalid storage format (%s): %r", decoded.error, line)
            return False

        budget_state.overwrite(decoded.budget)
        return True

    def persist(self, entries: FinancialList, budget_state: BudgetState) -> None:
        """Rewrite both files from the current entries and budget.

        Raises:
            StorageIOError: If either file cannot be written.
        """
        self._write_lines(self.entries_file.obtain(), (encode_entry(entry) for entry in entries))
        self._write_lines(self.budget_file.obtain(), [encode_budget(budget_state.budget)])

        logger.info("Updated file with %d entries.", entries.entry_count)

    @staticmethod
    def _read_lines(path: Path) -> list[str]:
        try:
            with open(path, encoding="utf-8", errors="replace") as f:
                return f.readlines()
        except OSError as e:
            raise StorageIOError(f"Could not read storage file ({e.strerror or e})", path) from e

    @staticmethod
    def _write_lines(path: Path, lines: Iterable[str]) -> None:
        # Write beside the real file (through symlinks), then swap it in keeping its mode
        target = path.resolve()
        try:
            mode = stat.S_IMODE(target.stat().st_mode)
            fd, tmp_path = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
        except OSError as e:
            raise StorageIOError(f"Could not write storage file ({e.strerror or e})", path) from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                for line in lines:
                    f.write(line + "\n")
            os.chmod(tmp_path, mode)
            os.replace(tmp_path, target)
        except OSError as e:
            raise StorageIOError(f"Could not write storage file ({e.strerror or e})", path) from e
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
