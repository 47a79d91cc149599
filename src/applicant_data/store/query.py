"""
Query engine adaptor for predicate evaluation.

The document store depends on the QueryEngine abstraction, not on a JSON
path library directly. Instances are passed to ApplicantData at
construction; there is no process-wide provider.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from jsonpath_ng.exceptions import JSONPathError
from jsonpath_ng.ext import parse as parse_json_path
from jsonpath_ng.ext.filter import Filter
from jsonpath_ng.jsonpath import JSONPath

from applicant_data.exceptions import InvalidQueryError

logger = logging.getLogger(__name__)


class QueryEngine(ABC):
    """
    Abstract interface for JSON path query execution.

    Stateless with respect to documents: accepts (expression + document)
    and returns the matched values.
    """

    @abstractmethod
    def find(self, expression: str, document: Dict[str, Any]) -> List[Any]:
        """
        Run a query expression against a document.

        Args:
            expression: JSON path expression, e.g. "$.applicant.children[?age > 5]"
            document: The document tree to query

        Returns:
            Matched values, empty when nothing matches or the path is absent

        Raises:
            InvalidQueryError: If the expression cannot be parsed
        """
        pass


class _IncomparableAsNoMatch:
    """Filter condition that treats an incomparable element as not matching.

    A stored null (or object) compared with ">" raises TypeError inside the
    library; only that element is dropped from the filter result.
    """

    def __init__(self, condition):
        self.condition = condition

    def find(self, datum):
        try:
            return self.condition.find(datum)
        except TypeError as e:
            logger.debug(f"Filter {self.condition} skipped incomparable value: {e}")
            return []

    def __eq__(self, other):
        return isinstance(other, _IncomparableAsNoMatch) and self.condition == other.condition

    def __repr__(self):
        return repr(self.condition)

    def __str__(self):
        return str(self.condition)


def _guard_filters(node: Any) -> None:
    """Wrap the conditions of every filter in a compiled query, in place."""
    if isinstance(node, _IncomparableAsNoMatch):
        _guard_filters(node.condition)
        return
    if isinstance(node, Filter):
        node.expressions = [
            c if isinstance(c, _IncomparableAsNoMatch) else _IncomparableAsNoMatch(c)
            for c in node.expressions
        ]

    for value in getattr(node, "__dict__", {}).values():
        for child in value if isinstance(value, list) else [value]:
            if isinstance(child, (JSONPath, _IncomparableAsNoMatch)):
                _guard_filters(child)


class JsonPathQueryEngine(QueryEngine):
    """
    Concrete implementation using the jsonpath-ng extended parser.

    Supports filters ("[?field > 5]", "[?name = \"Alice\"]", "&"), wildcards
    and slices. Compiled expressions are cached per engine instance.
    Elements whose value cannot be compared (e.g. a stored null) do not
    match a filter.
    """

    def __init__(self):
        self._compiled: Dict[str, Any] = {}

    def find(self, expression: str, document: Dict[str, Any]) -> List[Any]:
        compiled = self._compile(expression)
        return [match.value for match in compiled.find(document)]

    def _compile(self, expression: str):
        compiled = self._compiled.get(expression)
        if compiled is None:
            try:
                compiled = parse_json_path(expression)
            except JSONPathError as e:
                raise InvalidQueryError(f"Invalid query '{expression}': {e}") from e
            _guard_filters(compiled)
            self._compiled[expression] = compiled
        return compiled
