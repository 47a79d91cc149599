"""Evaluates visibility and eligibility predicates against applicant data."""

import logging
from typing import Union

from applicant_data.predicates.expression import (
    PredicateExpressionNode,
    PredicateExpressionNodeType,
)
from applicant_data.predicates.json_path_predicate import JsonPathPredicate
from applicant_data.store.applicant_data import ApplicantData

logger = logging.getLogger(__name__)


class PredicateEvaluator:
    """Evaluates predicates for one applicant's data.

    A missing query path evaluates to False rather than raising.
    """

    def __init__(self, applicant_data: ApplicantData):
        self.applicant_data = applicant_data

    def evaluate(self, predicate: Union[JsonPathPredicate, PredicateExpressionNode]) -> bool:
        if isinstance(predicate, PredicateExpressionNode):
            return self._evaluate_node(predicate)
        return self.applicant_data.eval_predicate(predicate)

    def _evaluate_node(self, node: PredicateExpressionNode) -> bool:
        if node.node_type == PredicateExpressionNodeType.LEAF:
            result = self.applicant_data.eval_predicate(node.predicate)
            logger.debug(f"Predicate {node.predicate} -> {result}")
            return result
        if node.node_type == PredicateExpressionNodeType.AND:
            return all(self._evaluate_node(child) for child in node.children)
        return any(self._evaluate_node(child) for child in node.children)
