"""
Applicant Data - a path-addressed, versioned answer store.

Each applicant's answers live in one JSON document. This package provides
typed, path-addressed access to that document, cross-version merging,
predicate evaluation and a one-way lock for submitted snapshots.
"""

__version__ = "0.1.0"

from applicant_data.exceptions import (
    ApplicantDataError,
    InvalidPathError,
    InvalidDocumentError,
    LockedApplicantDataError,
    ValueParseError,
    DocumentStructureError,
    InvalidQueryError,
)
from applicant_data.path import Path
from applicant_data.scalars import Scalar, ScalarType
from applicant_data.store import ApplicantData, merge_versions
from applicant_data.predicates import JsonPathPredicate, PredicateEvaluator, PredicateExpressionNode

__all__ = [
    "ApplicantData",
    "ApplicantDataError",
    "DocumentStructureError",
    "InvalidDocumentError",
    "InvalidPathError",
    "InvalidQueryError",
    "JsonPathPredicate",
    "LockedApplicantDataError",
    "Path",
    "PredicateEvaluator",
    "PredicateExpressionNode",
    "Scalar",
    "ScalarType",
    "ValueParseError",
    "merge_versions",
]
