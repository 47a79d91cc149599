"""Scalar leaf names used inside question answers, and their stored types."""

from enum import Enum


class ScalarType(str, Enum):
    """How a scalar is stored in the document."""

    STRING = "string"
    LONG = "long"
    DATE = "date"  # epoch milliseconds at UTC midnight
    CURRENCY_CENTS = "currency_cents"
    LIST_OF_LONGS = "list_of_longs"


class Scalar(str, Enum):
    """Well-known scalar keys appended to a question's path."""

    CITY = "city"
    CURRENCY_CENTS = "currency_cents"
    DATE = "date"
    EMAIL = "email"
    ENTITY_NAME = "entity_name"
    FILE_KEY = "file_key"
    FIRST_NAME = "first_name"
    ID = "id"
    LAST_NAME = "last_name"
    LINE2 = "line2"
    MIDDLE_NAME = "middle_name"
    NUMBER = "number"
    SELECTION = "selection"
    SELECTIONS = "selections"
    STATE = "state"
    STREET = "street"
    TEXT = "text"
    ZIP = "zip"

    @property
    def scalar_type(self) -> ScalarType:
        return SCALAR_TYPES.get(self, ScalarType.STRING)


SCALAR_TYPES = {
    Scalar.CURRENCY_CENTS: ScalarType.CURRENCY_CENTS,
    Scalar.DATE: ScalarType.DATE,
    Scalar.NUMBER: ScalarType.LONG,
    Scalar.SELECTIONS: ScalarType.LIST_OF_LONGS,
}
