"""Date utilities for finbuddy.

Pure functions for converting dates to and from their stored text forms.
"""

from datetime import date, datetime

import pandas as pd

from finbuddy.domain.errors import DateFormatError

# Entry dates are stored as day/month/two-digit-year
ENTRY_DATE_FORMAT = "%d/%m/%y"


def format_entry_date(value: date) -> str:
    """Format a date the way entry lines store it (e.g. "05/03/24")."""
    return value.strftime(ENTRY_DATE_FORMAT)


def parse_entry_date(text: str) -> date:
    """Parse an entry date in dd/mm/yy format.

    Args:
        text: Date text, e.g. "05/03/24".

    Returns:
        Parsed date.

    Raises:
        DateFormatError: If text does not match the format.
    """
    try:
        return datetime.strptime(text.strip(), ENTRY_DATE_FORMAT).date()
    except ValueError:
        raise DateFormatError(f"Invalid date '{text}'. Expected dd/mm/yy.") from None


def parse_iso_date(text: str) -> date:
    """Parse an ISO-8601 calendar date (YYYY-MM-DD).

    Raises:
        DateFormatError: If text is not an ISO date.
    """
    try:
        return date.fromisoformat(text.strip())
    except ValueError:
        raise DateFormatError(f"Invalid date '{text}'. Expected YYYY-MM-DD.") from None


def parse_user_date(text: str | None) -> date:
    """Parse a date typed on the command line.

    Accepts dd/mm/yy, dd/mm/yyyy, YYYY-MM-DD and the other formats pandas
    understands, reading ambiguous dates day first. None means today.

    Raises:
        DateFormatError: If pandas cannot make sense of the text.
    """
    if text is None:
        return date.today()

    try:
        parsed = pd.to_datetime(text, dayfirst=True)
    except (ValueError, TypeError) as e:
        raise DateFormatError(f"Invalid date '{text}': {e}") from None

    if pd.isna(parsed):
        raise DateFormatError(f"Invalid date '{text}'")
    return parsed.date()
