"""Boolean trees of JSON path predicates.

Leaves hold a pre-built JsonPathPredicate; AND and OR nodes combine
children. Comparison semantics live in the leaf query strings.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from applicant_data.predicates.json_path_predicate import JsonPathPredicate


class PredicateExpressionNodeType(str, Enum):
    LEAF = "leaf"
    AND = "and"
    OR = "or"


@dataclass(frozen=True)
class PredicateExpressionNode:
    """One node of a predicate tree.

    Use the leaf(), and_() and or_() constructors rather than building
    nodes directly.
    """

    node_type: PredicateExpressionNodeType
    predicate: Optional[JsonPathPredicate] = None
    children: Tuple["PredicateExpressionNode", ...] = ()

    def __post_init__(self):
        if self.node_type == PredicateExpressionNodeType.LEAF:
            if self.predicate is None or self.children:
                raise ValueError("A leaf node holds exactly one predicate and no children")
        elif self.predicate is not None or not self.children:
            raise ValueError(f"An {self.node_type.value} node needs children and no predicate")

    @classmethod
    def leaf(cls, predicate) -> "PredicateExpressionNode":
        if isinstance(predicate, str):
            predicate = JsonPathPredicate.create(predicate)
        return cls(PredicateExpressionNodeType.LEAF, predicate=predicate)

    @classmethod
    def and_(cls, *children: "PredicateExpressionNode") -> "PredicateExpressionNode":
        return cls(PredicateExpressionNodeType.AND, children=tuple(children))

    @classmethod
    def or_(cls, *children: "PredicateExpressionNode") -> "PredicateExpressionNode":
        return cls(PredicateExpressionNodeType.OR, children=tuple(children))

    def leaves(self) -> List[JsonPathPredicate]:
        """All leaf predicates, depth first."""
        if self.node_type == PredicateExpressionNodeType.LEAF:
            return [self.predicate]
        result = []
        for child in self.children:
            result.extend(child.leaves())
        return result
