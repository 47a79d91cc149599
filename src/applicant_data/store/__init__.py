"""Document store for applicant answers.

Components:
1. ApplicantData - path-addressed reads and writes, lock, serialization
2. merge - cross-version copy-forward
3. query - injectable JSON path query engine
"""

from applicant_data.store.applicant_data import ApplicantData
from applicant_data.store.merge import merge_versions
from applicant_data.store.query import QueryEngine, JsonPathQueryEngine

__all__ = [
    "ApplicantData",
    "merge_versions",
    "QueryEngine",
    "JsonPathQueryEngine",
]
