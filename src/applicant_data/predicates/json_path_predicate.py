"""Pre-compiled query expressions evaluated against applicant data."""

from dataclasses import dataclass

from applicant_data.exceptions import InvalidQueryError
from applicant_data.path import JSON_PATH_ROOT, Path


@dataclass(frozen=True)
class JsonPathPredicate:
    """A JSON path query that is true when it matches at least one element.

    Attributes:
        path_predicate: The query, e.g. '$.applicant.children[?age > 5]'.
    """

    path_predicate: str

    def __post_init__(self):
        if not self.path_predicate.strip().startswith(JSON_PATH_ROOT):
            raise InvalidQueryError(
                f"Query must start with '{JSON_PATH_ROOT}': '{self.path_predicate}'"
            )

    @classmethod
    def create(cls, expression: str) -> "JsonPathPredicate":
        return cls(expression)

    @classmethod
    def exists(cls, path: Path) -> "JsonPathPredicate":
        """Predicate that matches when anything is stored at `path`."""
        return cls(path.to_json_path())

    def __str__(self) -> str:
        return self.path_predicate
