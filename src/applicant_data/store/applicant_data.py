"""
Applicant data - the path-addressed answer document for one applicant.

Brokers access to the answer data for a specific applicant across program
versions. The underlying storage format is a single JSON object rooted at
"applicant"; this class presents a read/write interface in terms of Path and
typed values rather than raw JSON.

Reads never raise for missing paths or mismatched types; they return None.
Writes build any missing structure along the way and raise once the
document has been locked.
"""

import json
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Union

from applicant_data import well_known_paths
from applicant_data.config.store_config import get_store_config, validate_locale
from applicant_data.exceptions import (
    DocumentStructureError,
    InvalidDocumentError,
    InvalidPathError,
    JsonPathTypeMismatchError,
    LockedApplicantDataError,
    ValueParseError,
)
from applicant_data.path import Path
from applicant_data.scalars import Scalar, ScalarType
from applicant_data.store import merge
from applicant_data.store.query import JsonPathQueryEngine, QueryEngine
from applicant_data.utils.currency import Currency
from applicant_data.utils.date_parsing import epoch_millis_to_date, parse_date_to_epoch_millis
from applicant_data.utils.number_parsing import format_long_list, parse_long

logger = logging.getLogger(__name__)

EMPTY_APPLICANT_DATA_JSON = json.dumps({well_known_paths.APPLICANT: {}})

# Sentinel for "nothing stored at this path" (distinct from a stored null)
MISSING = object()


def _is_long(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_long_list(value: Any) -> bool:
    return isinstance(value, list) and all(_is_long(v) for v in value)


class ApplicantData:
    """Read/write access to one applicant's answers.

    Args:
        json_data: Persisted JSON object. Defaults to an empty applicant.
        preferred_locale: Optional language tag chosen by the applicant.
        query_engine: Engine used by eval_predicate. A new JsonPathQueryEngine
            is created when omitted.

    Raises:
        InvalidDocumentError: If json_data is not a JSON object.
    """

    def __init__(
        self,
        json_data: Optional[str] = None,
        *,
        preferred_locale: Optional[str] = None,
        query_engine: Optional[QueryEngine] = None,
    ):
        if json_data is None:
            json_data = EMPTY_APPLICANT_DATA_JSON

        try:
            data = json.loads(json_data)
        except json.JSONDecodeError as e:
            raise InvalidDocumentError(f"Applicant data is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise InvalidDocumentError(
                f"Applicant data must be a JSON object, got {type(data).__name__}"
            )

        self._data: Dict[str, Any] = data
        self._locked = False
        self._preferred_locale = (
            validate_locale(preferred_locale) if preferred_locale is not None else None
        )
        self._query_engine = query_engine or JsonPathQueryEngine()

    # ------------------------------------------------------------------
    # Lock and locale
    # ------------------------------------------------------------------

    def lock(self) -> None:
        """Make this document immutable. A locked document cannot be unlocked."""
        self._locked = True

    @property
    def is_locked(self) -> bool:
        return self._locked

    def _check_locked(self) -> None:
        if self._locked:
            raise LockedApplicantDataError()

    def has_preferred_locale(self) -> bool:
        return self._preferred_locale is not None

    @property
    def preferred_locale(self) -> str:
        """The applicant's preferred locale, or the configured default."""
        if self._preferred_locale is not None:
            return self._preferred_locale
        return get_store_config().default_locale

    def set_preferred_locale(self, locale: str) -> None:
        self._check_locked()
        self._preferred_locale = validate_locale(locale)

    # ------------------------------------------------------------------
    # Applicant name
    # ------------------------------------------------------------------

    def get_applicant_name(self) -> str:
        """Return "Last, First", "First", or the anonymous placeholder."""
        first_name = self.read_string(well_known_paths.APPLICANT_FIRST_NAME)
        if first_name is None:
            logger.error("Applicant data does not include an applicant name")
            return get_store_config().anonymous_applicant_name

        last_name = self.read_string(well_known_paths.APPLICANT_LAST_NAME)
        if last_name is not None:
            return f"{last_name}, {first_name}"
        return first_name

    def set_user_name(self, display_name: str) -> None:
        """Split a display name on spaces and store any name parts not yet present.

        Two parts are first/last, three are first/middle/last; anything else
        is stored whole as the first name.
        """
        parts = display_name.split(" ")
        if len(parts) == 2:
            self.set_user_name_parts(parts[0], last_name=parts[1])
        elif len(parts) == 3:
            self.set_user_name_parts(parts[0], middle_name=parts[1], last_name=parts[2])
        else:
            self.set_user_name_parts(display_name)

    def set_user_name_parts(
        self,
        first_name: str,
        middle_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> None:
        if not self.has_path(well_known_paths.APPLICANT_FIRST_NAME):
            self.put_string(well_known_paths.APPLICANT_FIRST_NAME, first_name)
        if middle_name is not None and not self.has_path(well_known_paths.APPLICANT_MIDDLE_NAME):
            self.put_string(well_known_paths.APPLICANT_MIDDLE_NAME, middle_name)
        if last_name is not None and not self.has_path(well_known_paths.APPLICANT_LAST_NAME):
            self.put_string(well_known_paths.APPLICANT_LAST_NAME, last_name)

    # ------------------------------------------------------------------
    # Presence checks
    # ------------------------------------------------------------------

    def _get(self, path: Path) -> Any:
        """Return the raw value at path, or MISSING."""
        node: Any = self._data
        for segment in path.segments():
            if not isinstance(node, dict) or segment.key not in node:
                return MISSING
            node = node[segment.key]
            if segment.index is not None:
                if not isinstance(node, list) or segment.index >= len(node):
                    return MISSING
                node = node[segment.index]
        return node

    def has_path(self, path: Path) -> bool:
        """Return True if anything, including null, is stored at path.

        Semantically, whether the applicant has answered this before.
        """
        return self._get(path) is not MISSING

    def has_value_at_path(self, path: Path) -> bool:
        """Return True if a non-null value is stored at path."""
        value = self._get(path)
        return value is not MISSING and value is not None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def put_string(self, path: Path, value: str) -> None:
        """Write a string. An empty string clears the value at path."""
        if value == "":
            self._clear(path)
        else:
            self._put(path, value)

    def put_long(self, path: Path, value: Union[int, str]) -> None:
        """Write an integer, parsing it first if given as a string.

        An empty string clears the value at path.

        Raises:
            ValueParseError: If the string is not an integer.
        """
        if isinstance(value, str):
            if value == "":
                self._clear(path)
                return
            value = parse_long(value)
        elif not _is_long(value):
            raise ValueParseError(f"Not an integer: {value!r}")
        self._put(path, value)

    def put_date(self, path: Path, date_string: str) -> None:
        """Store a YYYY-MM-DD date as epoch milliseconds. Empty clears the path.

        Raises:
            ValueParseError: If the string is not in YYYY-MM-DD format.
        """
        if date_string == "":
            self._clear(path)
        else:
            self._put(path, parse_date_to_epoch_millis(date_string))

    def put_currency_dollars(self, path: Path, dollars: str) -> None:
        """Store a dollars string (optional commas, optional .NN) as cents.

        Raises:
            ValueParseError: If the string is not a valid dollar amount.
        """
        if dollars == "":
            self._clear(path)
        else:
            self._put(path, Currency.parse(dollars).cents)

    def put_list(self, path: Path, values: Sequence[Union[int, str]]) -> None:
        """Replace the array at path with the given integers.

        The existing array is removed first; an empty sequence leaves no
        array behind.
        """
        self.maybe_clear_array(path.at_index(0))
        for index, value in enumerate(values):
            self.put_long(path.at_index(index), value)

    def put_repeated_entities(self, path: Path, entity_names: Sequence[str]) -> None:
        """Write the names of the repeated entities at path.

        Each element of the array at path is an object holding at least an
        entity_name scalar, possibly alongside nested answers. Only the names
        are written (as given, "" included); other data for those entities
        is left alone. An empty list stores an explicit empty array.
        """
        if not entity_names:
            self._put(path, [])
            return
        for index, name in enumerate(entity_names):
            self._put(path.at_index(index).join(Scalar.ENTITY_NAME), name)

    def _clear(self, path: Path) -> None:
        # Array elements are left in place so indices stay contiguous
        self._check_locked()
        if not path.is_array_element():
            self.maybe_delete(path)

    def _put(self, path: Path, value: Any) -> None:
        """Write value at path, creating missing parents along the way.

        For an array element path, an existing element is replaced, the next
        free index is appended, and any gap before a further index is filled
        with nulls so the array stays contiguous.
        """
        self._check_locked()
        parent = self._materialize_parent(path)
        key = path.key_name()

        if not path.is_array_element():
            parent[key] = value
            return

        array = parent.get(key)
        if array is None:
            array = parent[key] = []
        if not isinstance(array, list):
            raise DocumentStructureError(
                f"Cannot write array element '{path}': '{path.without_array_reference()}' "
                f"holds a {type(array).__name__}"
            )

        index = path.array_index()
        if index < len(array):
            array[index] = value
            return
        while len(array) < index:
            array.append(None)
        array.append(value)

    def _materialize_parent(self, path: Path) -> Dict[str, Any]:
        """Ensure every ancestor of path exists and return the parent object.

        Walks from the root down, creating objects for plain segments and
        arrays for indexed ones. Arrays are padded with empty objects up to
        the addressed index, so an index is never skipped. Stored nulls are
        replaced by the container they should have been.
        """
        node = self._data
        walked = Path.empty()

        for segment in path.parent_path().segments():
            walked = walked.append_segment(segment)
            child = node.get(segment.key)

            if segment.index is None:
                if child is None:
                    child = node[segment.key] = {}
            else:
                if child is None:
                    child = node[segment.key] = []
                if not isinstance(child, list):
                    raise DocumentStructureError(
                        f"Cannot create '{walked}': '{walked.without_array_reference()}' "
                        f"holds a {type(child).__name__}"
                    )
                while len(child) <= segment.index:
                    child.append({})
                if child[segment.index] is None:
                    child[segment.index] = {}
                child = child[segment.index]

            if not isinstance(child, dict):
                raise DocumentStructureError(
                    f"Cannot write below '{walked}': it holds a {type(child).__name__}"
                )
            node = child

        return node

    def _append(self, path: Path, items: Sequence[Any]) -> None:
        """Append items to the existing array at path."""
        self._check_locked()
        array = self._get(path)
        if not isinstance(array, list):
            raise DocumentStructureError(f"No array at '{path}'")
        array.extend(items)

    # ------------------------------------------------------------------
    # Deletes
    # ------------------------------------------------------------------

    def maybe_delete(self, path: Path) -> None:
        """Delete whatever is at path, if anything.

        Raises:
            InvalidPathError: For the root path; the document itself cannot
                be deleted.
        """
        self._check_locked()
        if path.is_empty():
            raise InvalidPathError("Cannot delete the document root")
        if self.has_path(path):
            self._delete(path)

    def maybe_clear_array(self, path: Path) -> None:
        """Remove the whole array ahead of rewriting it, if path is an array element."""
        self._check_locked()
        if path.is_array_element():
            self._materialize_parent(path)
            self.maybe_delete(path.without_array_reference())

    def _delete(self, path: Path) -> None:
        container = self._get(path.parent_path())
        key = path.key_name()
        if path.is_array_element():
            del container[key][path.array_index()]
        else:
            del container[key]

    def delete_repeated_entities(self, path: Path, indices: Sequence[int]) -> bool:
        """Delete the entire repeated entity at each index of the array at path.

        Deletion runs from the highest index down because array deletion is
        positional. Duplicate indices are deleted once.

        Returns:
            True if something was deleted. Only the largest index is checked
            for presence.
        """
        self._check_locked()
        if not indices:
            return False

        reverse_sorted = sorted(set(indices), reverse=True)
        if not self.has_path(path.at_index(reverse_sorted[0])):
            return False

        for index in reverse_sorted:
            self._delete(path.at_index(index))
        return True

    def maybe_clear_repeated_entities(self, path: Path) -> bool:
        """Remove the array at path if it holds no repeated entities.

        Entity data is never deleted through this method; use
        delete_repeated_entities for that.

        Returns:
            True if there are no repeated entities at path anymore.
        """
        self._check_locked()
        if not self.read_repeated_entities(path):
            self.maybe_delete(path.without_array_reference())
            return True
        return False

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _read(self, path: Path, expected: str, matches) -> Any:
        """Return the value at path, or None if absent or null.

        Raises:
            JsonPathTypeMismatchError: If the stored value fails `matches`.
        """
        value = self._get(path)
        if value is MISSING or value is None:
            return None
        if not matches(value):
            raise JsonPathTypeMismatchError(path, expected, value)
        return value

    def read_string(self, path: Path) -> Optional[str]:
        try:
            return self._read(path, "string", lambda v: isinstance(v, str))
        except JsonPathTypeMismatchError:
            return None

    def read_long(self, path: Path) -> Optional[int]:
        try:
            return self._read(path, "long", _is_long)
        except JsonPathTypeMismatchError:
            return None

    def read_date(self, path: Path) -> Optional[date]:
        millis = self.read_long(path)
        if millis is None:
            return None
        try:
            return epoch_millis_to_date(millis)
        except ValueParseError:
            logger.debug(f"Stored value at {path} is not a representable date: {millis}")
            return None

    def read_currency(self, path: Path) -> Optional[Currency]:
        cents = self.read_long(path)
        if cents is None:
            return None
        return Currency(cents)

    def read_list(self, path: Path) -> Optional[List[int]]:
        """Read a list of integers; None if absent or anything else is stored."""
        try:
            value = self._read(path, "list of longs", _is_long_list)
        except JsonPathTypeMismatchError:
            return None
        return list(value) if value is not None else None

    def read_as_string(self, path: Path) -> Optional[str]:
        """Read the value at path as a string; integer lists render as "[1, 2]"."""
        values = self.read_list(path)
        if values is not None:
            return format_long_list(values)
        return self.read_string(path)

    def read_repeated_entities(self, path: Path) -> List[str]:
        """Return entity names for indices 0, 1, 2, ... up to the first absent one.

        An entity without a name contributes "".
        """
        names = []
        index = 0
        while self.has_path(path.at_index(index)):
            names.append(self.read_string(path.at_index(index).join(Scalar.ENTITY_NAME)) or "")
            index += 1
        return names

    # ------------------------------------------------------------------
    # Typed dispatch
    # ------------------------------------------------------------------

    def read_scalar(self, path: Path, scalar_type: ScalarType) -> Any:
        """Read path as the given scalar type."""
        readers = {
            ScalarType.STRING: self.read_string,
            ScalarType.LONG: self.read_long,
            ScalarType.DATE: self.read_date,
            ScalarType.CURRENCY_CENTS: self.read_currency,
            ScalarType.LIST_OF_LONGS: self.read_list,
        }
        return readers[ScalarType(scalar_type)](path)

    def put_scalar(self, path: Path, scalar_type: ScalarType, raw: str) -> None:
        """Parse raw form input as the given scalar type and write it.

        Lists are given as comma-separated integers ("1,2,3").
        """
        scalar_type = ScalarType(scalar_type)
        if scalar_type == ScalarType.STRING:
            self.put_string(path, raw)
        elif scalar_type == ScalarType.LONG:
            self.put_long(path, raw)
        elif scalar_type == ScalarType.DATE:
            self.put_date(path, raw)
        elif scalar_type == ScalarType.CURRENCY_CENTS:
            self.put_currency_dollars(path, raw)
        else:
            items = [item.strip() for item in raw.split(",")] if raw.strip() else []
            self.put_list(path, items)

    # ------------------------------------------------------------------
    # Predicates, merge, serialization
    # ------------------------------------------------------------------

    def eval_predicate(self, predicate) -> bool:
        """Return True if the predicate's query matches any data.

        Args:
            predicate: A JsonPathPredicate, or a raw query string.
        """
        expression = getattr(predicate, "path_predicate", predicate)
        return len(self._query_engine.find(expression, self._data)) > 0

    def merge_from(self, other: "ApplicantData") -> List[Path]:
        """Copy all keys from other, recursively, without overwriting.

        Arrays present in both are concatenated. Differing scalars are left
        as they are in this document.

        Returns:
            Paths whose values could not be copied due to conflicts.
        """
        return merge.merge_tree(self, other._data, Path.empty())

    def as_json_string(self) -> str:
        return json.dumps(self._data, separators=(",", ":"), ensure_ascii=False)

    def __eq__(self, other) -> bool:
        if isinstance(other, ApplicantData):
            return self.as_json_string() == other.as_json_string()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.as_json_string())

    def __repr__(self) -> str:
        state = "locked" if self._locked else "mutable"
        return f"ApplicantData({state}, {self.as_json_string()})"
