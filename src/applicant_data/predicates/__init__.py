"""Predicate construction and evaluation."""

from applicant_data.predicates.json_path_predicate import JsonPathPredicate
from applicant_data.predicates.expression import (
    PredicateExpressionNode,
    PredicateExpressionNodeType,
)
from applicant_data.predicates.evaluator import PredicateEvaluator

__all__ = [
    "JsonPathPredicate",
    "PredicateExpressionNode",
    "PredicateExpressionNodeType",
    "PredicateEvaluator",
]
