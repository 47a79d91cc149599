"""Typed scalar coercion between raw form input and stored document values."""

from applicant_data.utils.currency import Currency
from applicant_data.utils.date_parsing import (
    parse_date_to_epoch_millis,
    epoch_millis_to_date,
    date_to_iso,
)
from applicant_data.utils.number_parsing import parse_long, format_long_list

__all__ = [
    "Currency",
    "parse_date_to_epoch_millis",
    "epoch_millis_to_date",
    "date_to_iso",
    "parse_long",
    "format_long_list",
]
