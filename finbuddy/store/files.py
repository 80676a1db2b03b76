"""Storage file lifecycle: make sure a data file exists before it is used."""

import logging
from pathlib import Path

from finbuddy.domain.errors import StorageIOError

logger = logging.getLogger(__name__)


class StorageFile:
    """A data file that is created, with its directory, on first use."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"StorageFile({str(self.path)!r})"

    def exists(self) -> bool:
        return self.path.exists()

    def obtain(self) -> Path:
        """Return the file path, creating the file and its parents if missing.

        Existing files are left untouched, so repeated calls are no-ops.

        Returns:
            Path to the file.

        Raises:
            StorageIOError: If the directory or file cannot be created.
        """
        if self.path.exists():
            return self.path

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.touch(exist_ok=True)
        except OSError as e:
            raise StorageIOError(f"Could not create storage file ({e.strerror or e})", self.path) from e

        logger.info("Created storage file %s", self.path)
        return self.path
