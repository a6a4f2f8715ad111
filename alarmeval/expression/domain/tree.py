"""Boolean expression tree over alarm sub-expressions."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Union

from alarmeval.expression.domain.sub_expression import AlarmSubExpression


class BooleanOperator(StrEnum):
    AND = "AND"
    OR = "OR"

    def apply(self, left: bool, right: bool) -> bool:
        if self is BooleanOperator.AND:
            return left and right
        return left or right


@dataclass(frozen=True)
class BinaryExpression:
    """An AND/OR node whose children are nodes or sub-expression leaves."""

    operator: BooleanOperator
    left: "ExpressionNode"
    right: "ExpressionNode"

    def operands(self) -> list["ExpressionNode"]:
        """Operands of the chain of this node's operator, flattened left to right."""
        flattened = []
        for child in (self.left, self.right):
            if isinstance(child, BinaryExpression) and child.operator is self.operator:
                flattened.extend(child.operands())
            else:
                flattened.append(child)
        return flattened

    def __str__(self) -> str:
        joined = f" {self.operator.value} ".join(str(operand) for operand in self.operands())
        return f"({joined})"


ExpressionNode = Union[BinaryExpression, AlarmSubExpression]


def iter_leaves(node: ExpressionNode) -> Iterator[AlarmSubExpression]:
    """Yield the leaves of the tree in source order, left to right."""
    if isinstance(node, BinaryExpression):
        yield from iter_leaves(node.left)
        yield from iter_leaves(node.right)
    else:
        yield node


def evaluate_node(node: ExpressionNode, truth: Mapping[AlarmSubExpression, bool]) -> bool:
    """Fold leaf truth values through the tree. Every leaf must be present in ``truth``."""
    if isinstance(node, BinaryExpression):
        left = evaluate_node(node.left, truth)
        right = evaluate_node(node.right, truth)
        return node.operator.apply(left, right)
    return bool(truth[node])
