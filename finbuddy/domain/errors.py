"""Exception hierarchy for finbuddy."""

from pathlib import Path


class FinanceError(Exception):
    """Base class for all finbuddy errors."""


class EntryValidationError(FinanceError):
    """An entry field violates one of its constraints."""


class AmountFormatError(EntryValidationError):
    """Amount is not a non-negative decimal number."""


class AmountOutOfRangeError(EntryValidationError):
    """Amount exceeds the maximum allowed value."""


class UnknownCategoryError(EntryValidationError):
    """Category is not one of the variant's known categories."""


class DateFormatError(EntryValidationError):
    """Date does not match the expected format."""


class FutureDateError(EntryValidationError):
    """Date lies after the current date."""


class MissingDescriptionError(EntryValidationError):
    """Description is empty."""


class DescriptionFormatError(EntryValidationError):
    """Description contains text that cannot be stored on one line."""


class RecordFormatError(FinanceError):
    """A stored line does not have the shape of a record."""


class StorageIOError(FinanceError):
    """A storage file could not be created, read or written."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path
