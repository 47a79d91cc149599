"""Error taxonomy for applicant data operations.

Readers never surface type mismatches or missing paths; everything else
propagates to the caller.
"""


class ApplicantDataError(Exception):
    """Base class for all applicant data errors."""
    pass


class InvalidPathError(ApplicantDataError, ValueError):
    """Raised when a path string or segment is not well-formed."""
    pass


class InvalidDocumentError(ApplicantDataError, ValueError):
    """Raised when persisted data cannot be hydrated into a document."""
    pass


class LockedApplicantDataError(ApplicantDataError, RuntimeError):
    """Raised when a locked document is mutated."""

    def __init__(self, message: str = "Cannot change ApplicantData after it has been locked."):
        super().__init__(message)


class ValueParseError(ApplicantDataError, ValueError):
    """Raised when raw form input cannot be coerced to the requested type."""
    pass


class DocumentStructureError(ApplicantDataError):
    """Raised when a write would have to descend through a scalar value."""
    pass


class JsonPathTypeMismatchError(ApplicantDataError):
    """Raised internally when the stored value is not of the requested type."""

    def __init__(self, path, expected: str, actual: object):
        self.path = path
        self.expected = expected
        self.actual_type = type(actual).__name__
        super().__init__(
            f"Expected {expected} at path '{path}', found {self.actual_type}"
        )


class InvalidQueryError(ApplicantDataError, ValueError):
    """Raised when a predicate query expression cannot be parsed."""
    pass
