"""Tests for finbuddy.store.storage."""

import logging
import stat
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from finbuddy.config import StorageConfig
from finbuddy.domain.budget import Budget, BudgetState
from finbuddy.domain.entries import Expense, ExpenseCategory, FinancialList, Income, IncomeCategory
from finbuddy.domain.errors import StorageIOError
from finbuddy.store.storage import Storage


@pytest.fixture
def storage(tmp_path: Path) -> Storage:
    """Storage writing into tmp_path/data."""
    return Storage(tmp_path / "data" / "FinancialList.txt", tmp_path / "data" / "Budget.txt")


@pytest.fixture
def entries() -> FinancialList:
    return FinancialList(
        [
            Expense(Decimal("12.50"), "Lunch", date(2024, 3, 5), ExpenseCategory.FOOD),
            Income(Decimal("2500.00"), "Pay", date(2024, 3, 1), IncomeCategory.SALARY),
            Expense(Decimal("3.20"), "Bus", date(2024, 3, 6), ExpenseCategory.TRANSPORT),
        ]
    )


class TestPersist:
    """Tests for Storage.persist."""

    def test_writes_canonical_lines(self, storage: Storage, entries: FinancialList) -> None:
        """Should write one line per entry in order, then the budget line."""
        storage.persist(entries, BudgetState(Budget(Decimal("800"), date(2024, 3, 1))))

        assert storage.entries_file.path.read_text(encoding="utf-8") == (
            "E ¦¦ 12.50 ¦¦ Lunch ¦¦ 05/03/24 ¦¦ FOOD\n"
            "I ¦¦ 2500.00 ¦¦ Pay ¦¦ 01/03/24 ¦¦ SALARY\n"
            "E ¦¦ 3.20 ¦¦ Bus ¦¦ 06/03/24 ¦¦ TRANSPORT\n"
        )
        assert storage.budget_file.path.read_text(encoding="utf-8") == "800.00 ¦¦ 2024-03-01\n"

    def test_replaces_previous_contents(self, storage: Storage, entries: FinancialList) -> None:
        """Should rewrite the whole file rather than append."""
        storage.persist(entries, BudgetState())
        storage.persist(FinancialList([entries[1]]), BudgetState())

        assert storage.entries_file.path.read_text(encoding="utf-8") == "I ¦¦ 2500.00 ¦¦ Pay ¦¦ 01/03/24 ¦¦ SALARY\n"

    def test_default_budget_writes_zero_line(self, storage: Storage) -> None:
        """Should write a zero budget line when no budget was set."""
        storage.persist(FinancialList(), BudgetState())

        assert storage.budget_file.path.read_text(encoding="utf-8") == f"0.00 ¦¦ {date.today().isoformat()}\n"
        assert storage.entries_file.path.read_text(encoding="utf-8") == ""

    def test_leaves_no_temp_files(self, storage: Storage, entries: FinancialList) -> None:
        """Should only leave the two data files behind."""
        storage.persist(entries, BudgetState())

        assert sorted(p.name for p in storage.entries_file.path.parent.iterdir()) == [
            "Budget.txt",
            "FinancialList.txt",
        ]

    def test_keeps_file_permissions(self, storage: Storage, entries: FinancialList) -> None:
        """Should keep the data file's mode across rewrites."""
        path = storage.entries_file.obtain()
        path.chmod(0o644)

        storage.persist(entries, BudgetState())

        assert stat.S_IMODE(path.stat().st_mode) == 0o644

    def test_writes_through_symlink(self, tmp_path: Path, entries: FinancialList) -> None:
        """Should update the file a symlinked data file points at."""
        real = tmp_path / "synced" / "FinancialList.txt"
        real.parent.mkdir()
        real.write_text("", encoding="utf-8")
        link = tmp_path / "data" / "FinancialList.txt"
        link.parent.mkdir()
        link.symlink_to(real)
        storage = Storage(link, tmp_path / "data" / "Budget.txt")

        storage.persist(entries, BudgetState())

        assert link.is_symlink()
        assert real.read_text(encoding="utf-8").startswith("E ¦¦ 12.50 ¦¦ Lunch")

    def test_reports_write_failure(self, tmp_path: Path, entries: FinancialList) -> None:
        """Should raise StorageIOError when the file cannot be created."""
        (tmp_path / "data").write_text("not a directory")
        storage = Storage(tmp_path / "data" / "FinancialList.txt", tmp_path / "data" / "Budget.txt")

        with pytest.raises(StorageIOError):
            storage.persist(entries, BudgetState())


class TestLoad:
    """Tests for Storage.load."""

    def test_missing_files_give_empty_list(self, storage: Storage, today: date) -> None:
        """Should return an empty list without creating any file."""
        budget_state = BudgetState()

        entries = storage.load(budget_state, today)

        assert len(entries) == 0
        assert budget_state.budget.amount == Decimal("0.00")
        assert not storage.entries_file.path.exists()
        assert not storage.entries_file.path.parent.exists()

    def test_next_persist_creates_files(self, storage: Storage, today: date) -> None:
        """Should create the data directory and files on the next persist."""
        budget_state = BudgetState()
        entries = storage.load(budget_state, today)
        entries.add_entry(Expense(Decimal("1.00"), "Gum", today, ExpenseCategory.FOOD))

        storage.persist(entries, budget_state)

        assert storage.entries_file.path.is_file()
        assert storage.budget_file.path.is_file()

    def test_persist_then_load(self, storage: Storage, entries: FinancialList, today: date) -> None:
        """Should reproduce the same entries, order and budget."""
        budget = Budget(Decimal("800.00"), date(2024, 3, 1))
        storage.persist(entries, BudgetState(budget))

        budget_state = BudgetState()
        loaded = storage.load(budget_state, today)

        assert loaded == entries
        assert budget_state.budget == budget

    def test_tolerates_malformed_lines(
        self, storage: Storage, today: date, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Should load the N valid lines and warn once for each of the M bad ones."""
        path = storage.entries_file.obtain()
        path.write_text(
            "E ¦¦ 12.00 ¦¦ Lunch ¦¦ 05/03/24 ¦¦ FOOD\n"
            "E ¦¦ 1,00 ¦¦ Bad amount ¦¦ 05/03/24 ¦¦ FOOD\n"
            "I ¦¦ 2500.00 ¦¦ Pay ¦¦ 01/03/24 ¦¦ SALARY\n"
            "I ¦¦ 10.00 ¦¦ Bad date ¦¦ 2024-03-01 ¦¦ GIFT\n"
            "E ¦¦ 10.00 ¦¦ Bad category ¦¦ 01/03/24 ¦¦ RENT\n"
            "D ¦¦ 10.00 ¦¦ Bad tag ¦¦ 01/03/24 ¦¦ FOOD\n"
            "E ¦¦ 10.00 ¦¦ Too few\n"
            "E ¦¦ 4.00 ¦¦ Train ¦¦ 07/03/24 ¦¦ TRANSPORT\n",
            encoding="utf-8",
        )

        with caplog.at_level(logging.WARNING, logger="finbuddy"):
            loaded = storage.load(BudgetState(), today)

        assert [e.description for e in loaded] == ["Lunch", "Pay", "Train"]
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 5
        assert storage.last_scan is not None
        assert storage.last_scan.expense_count == 2
        assert storage.last_scan.income_count == 1

    def test_malformed_budget_keeps_current(
        self, storage: Storage, entries: FinancialList, today: date, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Should warn and keep the existing budget when the budget line is bad."""
        storage.persist(entries, BudgetState())
        storage.budget_file.path.write_text("lots ¦¦ yesterday\n", encoding="utf-8")
        current = Budget(Decimal("10.00"), date(2024, 1, 1))
        budget_state = BudgetState(current)

        with caplog.at_level(logging.WARNING, logger="finbuddy"):
            loaded = storage.load(budget_state, today)

        assert loaded == entries
        assert budget_state.budget == current
        assert any("budget" in r.getMessage() for r in caplog.records if r.levelno == logging.WARNING)
        assert storage.budget_file.path.read_text(encoding="utf-8") == "lots ¦¦ yesterday\n"

    def test_loaded_budget_overwrites_current(self, storage: Storage, today: date) -> None:
        """Should replace whatever budget was held before."""
        storage.persist(FinancialList(), BudgetState(Budget(Decimal("300.00"), date(2024, 2, 1))))
        budget_state = BudgetState(Budget(Decimal("1.00"), date(2024, 1, 1)))

        storage.load(budget_state, today)

        assert budget_state.budget == Budget(Decimal("300.00"), date(2024, 2, 1))

    def test_only_first_budget_line_is_read(self, storage: Storage, today: date) -> None:
        """Should ignore anything after the first budget line."""
        storage.budget_file.obtain().write_text("300 ¦¦ 2024-02-01\n400 ¦¦ 2024-03-01\n", encoding="utf-8")
        budget_state = BudgetState()

        storage.load(budget_state, today)

        assert budget_state.budget == Budget(Decimal("300.00"), date(2024, 2, 1))

    def test_unreadable_entries_file(self, storage: Storage, today: date) -> None:
        """Should raise StorageIOError when the entries path cannot be read."""
        storage.entries_file.path.mkdir(parents=True)

        with pytest.raises(StorageIOError):
            storage.load(BudgetState(), today)


class TestSelfHealing:
    """Loading with a budget rewrites both files in canonical form."""

    def test_load_normalizes_files(self, storage: Storage, today: date) -> None:
        """Should drop bad lines and canonicalize valid ones."""
        storage.entries_file.obtain().write_text(
            "E ¦¦ 12.5 ¦¦ Lunch ¦¦ 5/3/24 ¦¦ food\n"
            "garbage\n"
            "I ¦¦ 2500 ¦¦ Pay ¦¦ 01/03/24 ¦¦ Salary\n",
            encoding="utf-8",
        )
        storage.budget_file.obtain().write_text("800 ¦¦ 2024-03-01\n", encoding="utf-8")

        storage.load(BudgetState(), today)

        assert storage.entries_file.path.read_text(encoding="utf-8") == (
            "E ¦¦ 12.50 ¦¦ Lunch ¦¦ 05/03/24 ¦¦ FOOD\n"
            "I ¦¦ 2500.00 ¦¦ Pay ¦¦ 01/03/24 ¦¦ SALARY\n"
        )
        assert storage.budget_file.path.read_text(encoding="utf-8") == "800.00 ¦¦ 2024-03-01\n"

    def test_rewrite_is_fixed_point(self, storage: Storage, today: date) -> None:
        """Should produce byte-identical files on a second load/rewrite cycle."""
        storage.entries_file.obtain().write_text("E ¦¦ 7 ¦¦  Snacks  ¦¦ 1/3/24 ¦¦ Food\n", encoding="utf-8")
        storage.budget_file.obtain().write_text("50.5 ¦¦ 2024-03-01\n", encoding="utf-8")

        storage.load(BudgetState(), today)
        first_entries = storage.entries_file.path.read_bytes()
        first_budget = storage.budget_file.path.read_bytes()

        storage.load(BudgetState(), today)

        assert storage.entries_file.path.read_bytes() == first_entries
        assert storage.budget_file.path.read_bytes() == first_budget
        assert first_entries == "E ¦¦ 7.00 ¦¦ Snacks ¦¦ 01/03/24 ¦¦ FOOD\n".encode()

    def test_heals_without_user_budget(self, storage: Storage, today: date) -> None:
        """Should canonicalize files saved before any budget was set."""
        storage.persist(FinancialList(), BudgetState())
        storage.entries_file.path.write_text("E ¦¦ 12.5 ¦¦ Lunch ¦¦ 5/3/24 ¦¦ food\ngarbage\n", encoding="utf-8")

        storage.load(BudgetState(), today)

        assert storage.entries_file.path.read_text(encoding="utf-8") == "E ¦¦ 12.50 ¦¦ Lunch ¦¦ 05/03/24 ¦¦ FOOD\n"

    def test_no_rewrite_without_budget_file(self, storage: Storage, today: date) -> None:
        """Should leave the entries file as it is when there is no budget file."""
        original = "E ¦¦ 12.5 ¦¦ Lunch ¦¦ 5/3/24 ¦¦ food\n"
        storage.entries_file.obtain().write_text(original, encoding="utf-8")

        storage.load(BudgetState(), today)

        assert storage.entries_file.path.read_text(encoding="utf-8") == original
        assert not storage.budget_file.exists()


class TestFromConfig:
    """Tests for Storage.from_config."""

    def test_uses_config_paths(self, tmp_path: Path) -> None:
        """Should take both paths from the storage config."""
        config = StorageConfig(tmp_path / "e.txt", tmp_path / "b.txt")

        storage = Storage.from_config(config)

        assert storage.entries_file.path == tmp_path / "e.txt"
        assert storage.budget_file.path == tmp_path / "b.txt"

    def test_defaults_to_user_config(self, isolated_env: Path) -> None:
        """Should resolve paths from the environment when no config is given."""
        storage = Storage.from_config()

        assert storage.entries_file.path == isolated_env / "FinancialList.txt"
        assert storage.budget_file.path == isolated_env / "Budget.txt"
