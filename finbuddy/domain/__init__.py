"""Domain models and types for finbuddy.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from storage
"""

from finbuddy.domain.models import MAX_AMOUNT, Amount, Description

__all__ = ["Amount", "Description", "MAX_AMOUNT"]
