"""Integer coercion for applicant answers."""

import re
from typing import Sequence

from applicant_data.exceptions import ValueParseError

# Optional sign followed by ASCII digits only; matched against the whole string
_RE_LONG = re.compile(r"[+-]?[0-9]+")

LONG_MIN = -(2 ** 63)
LONG_MAX = 2 ** 63 - 1


def parse_long(value: str) -> int:
    """Parse a signed 64-bit integer from form input.

    Raises:
        ValueParseError: If the string is not an integer or is out of range.
    """
    if not _RE_LONG.fullmatch(value):
        raise ValueParseError(f"Not a valid integer: '{value}'")

    number = int(value)
    if number < LONG_MIN or number > LONG_MAX:
        raise ValueParseError(f"Integer out of range: '{value}'")
    return number


def format_long_list(values: Sequence[int]) -> str:
    """Render a list of integers as "[1, 2, 3]"."""
    return "[" + ", ".join(str(v) for v in values) + "]"
