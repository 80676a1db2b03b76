"""Domain type definitions for finbuddy.

These NewTypes provide semantic clarity and help with type checking:
- Amount: Monetary amount in dollars, held as a Decimal quantized to cents
- Description: Free text describing an entry
"""

from datetime import date
from decimal import Decimal
from typing import NewType

# Amounts are Decimals to avoid floating point errors
Amount = NewType("Amount", Decimal)

# Entry description text
Description = NewType("Description", str)

# Largest amount a single entry or budget may hold
MAX_AMOUNT = Decimal("9999999.00")

CENTS = Decimal("0.01")

# Two-digit stored years cover 1969-2068
EARLIEST_DATE = date(1969, 1, 1)

# Text a description may not contain
FORBIDDEN_DESCRIPTION_TEXT = ("\n", "\r", "¦¦")
