"""Date coercion for applicant answers.

Form input must be exactly YYYY-MM-DD. Dates are stored as epoch
milliseconds at midnight UTC so that persisted documents stay numeric.
"""

import re
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from applicant_data.exceptions import ValueParseError

# ASCII digits only; matched against the whole string
_RE_ISO_DATE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLIS_PER_DAY = 24 * 60 * 60 * 1000


def parse_date(value: str) -> date:
    """Parse a strict YYYY-MM-DD string.

    Raises:
        ValueParseError: If the format is wrong or the date does not exist.
    """
    match = _RE_ISO_DATE.fullmatch(value)
    if not match:
        raise ValueParseError(f"Date must be in YYYY-MM-DD format, got '{value}'")

    year, month, day = (int(g) for g in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise ValueParseError(f"Invalid date '{value}': {e}") from e


def date_to_epoch_millis(value: date) -> int:
    moment = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    return (moment - _EPOCH) // timedelta(milliseconds=1)


def parse_date_to_epoch_millis(value: str) -> int:
    """Parse YYYY-MM-DD and return epoch milliseconds at midnight UTC."""
    return date_to_epoch_millis(parse_date(value))


def epoch_millis_to_date(millis: int) -> date:
    """Convert stored epoch milliseconds back to a calendar date (UTC).

    Raises:
        ValueParseError: If the instant falls outside the representable
            years 1-9999.
    """
    try:
        return (_EPOCH + timedelta(milliseconds=millis)).date()
    except OverflowError as e:
        raise ValueParseError(f"Epoch milliseconds out of date range: {millis}") from e


def date_to_iso(value: Optional[date]) -> Optional[str]:
    """Format a date as YYYY-MM-DD, passing None through."""
    if value is None:
        return None
    return value.isoformat()
