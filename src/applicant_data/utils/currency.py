"""Currency values stored as integer cents.

Accepted dollar input:
- Plain digits: "1234" -> 123400 cents
- Thousands separators: "1,234" -> 123400 cents
- Exactly two decimal digits: "1,234.56" -> 123456 cents

Rejected: negative amounts, one or three decimal digits, misplaced commas,
currency symbols.
"""

import re
from dataclasses import dataclass

from applicant_data.exceptions import ValueParseError

# Either grouped thousands (1,234,567) or ungrouped digits, then optional .NN
_RE_DOLLARS = re.compile(r"([0-9]{1,3}(?:,[0-9]{3})+|[0-9]+)(?:\.([0-9]{2}))?")


@dataclass(frozen=True)
class Currency:
    """An amount of money in cents."""

    cents: int

    @classmethod
    def parse(cls, dollars: str) -> "Currency":
        """Parse a dollars string into a Currency.

        Raises:
            ValueParseError: If the string is not a valid dollar amount.
        """
        match = _RE_DOLLARS.fullmatch(dollars.strip())
        if not match:
            raise ValueParseError(f"Invalid currency amount: '{dollars}'")

        whole = int(match.group(1).replace(",", ""))
        fraction = int(match.group(2)) if match.group(2) else 0
        return cls(whole * 100 + fraction)

    @property
    def dollars(self) -> float:
        return self.cents / 100

    def dollars_string(self) -> str:
        """Format as grouped dollars with two decimals, e.g. "1,234.56"."""
        whole, fraction = divmod(self.cents, 100)
        return f"{whole:,}.{fraction:02d}"

    def __str__(self) -> str:
        return self.dollars_string()
