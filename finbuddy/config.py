"""Configuration file management for finbuddy."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_DATA_DIR = "data"
DEFAULT_ENTRIES_FILE = "FinancialList.txt"
DEFAULT_BUDGET_FILE = "Budget.txt"

DATA_DIR_ENV = "FINBUDDY_DATA_DIR"


@dataclass(frozen=True)
class StorageConfig:
    """Where the entries and budget files live."""

    entries_path: Path
    budget_path: Path

    @property
    def data_dir(self) -> Path:
        return self.entries_path.parent


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "finbuddy" / "config.toml"


def default_config() -> dict[str, Any]:
    return {
        "storage": {
            "data_dir": DEFAULT_DATA_DIR,
            "entries_file": DEFAULT_ENTRIES_FILE,
            "budget_file": DEFAULT_BUDGET_FILE,
        },
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)
    save_config(default_config(), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def load_storage_config(config_path: Path | None = None) -> StorageConfig:
    """Resolve the storage file locations.

    Reads the [storage] table of the config file when it exists, then lets
    FINBUDDY_DATA_DIR override the data directory. Missing settings fall back
    to data/FinancialList.txt and data/Budget.txt.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Storage configuration.
    """
    if config_path is None:
        config_path = get_config_path()

    storage: dict[str, Any] = {}
    if config_path.exists():
        storage = load_config(config_path).get("storage", {})

    data_dir = Path(os.environ.get(DATA_DIR_ENV) or storage.get("data_dir", DEFAULT_DATA_DIR)).expanduser()
    return StorageConfig(
        entries_path=data_dir / storage.get("entries_file", DEFAULT_ENTRIES_FILE),
        budget_path=data_dir / storage.get("budget_file", DEFAULT_BUDGET_FILE),
    )
