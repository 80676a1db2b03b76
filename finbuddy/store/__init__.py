"""Storage layer - persists entries and the budget as plain text.

This module re-exports the public storage API for easy importing.
"""

from finbuddy.store.codec import (
    DELIMITER,
    BudgetDecodeResult,
    DecodeResult,
    ScanResult,
    SkippedLine,
    decode_budget,
    decode_entry,
    encode_budget,
    encode_entry,
    parse_expense,
    parse_income,
    scan_entries,
)
from finbuddy.store.files import StorageFile
from finbuddy.store.storage import Storage

__all__ = [
    # Codec
    "DELIMITER",
    "BudgetDecodeResult",
    "DecodeResult",
    "ScanResult",
    "SkippedLine",
    "decode_budget",
    "decode_entry",
    "encode_budget",
    "encode_entry",
    "parse_expense",
    "parse_income",
    "scan_entries",
    # Files
    "StorageFile",
    "Storage",
]
