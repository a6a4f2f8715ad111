"""Parsed alarm expression: a boolean tree over threshold sub-expressions."""

from collections.abc import Mapping
from typing import Self

from alarmeval.expression.application.parser import parse_expression
from alarmeval.expression.domain.exceptions import InvalidArgumentError
from alarmeval.expression.domain.sub_expression import AlarmSubExpression
from alarmeval.expression.domain.tree import ExpressionNode, evaluate_node, iter_leaves


class AlarmExpression:
    """
    An alarm definition's expression, parsed once and immutable afterwards.

    Example:
        expr = AlarmExpression.of("avg(cpu{host=a}, 60) > 90 times 3 or max(mem) >= 95")
        truth = {sub: True for sub in expr.sub_expressions}
        expr.evaluate(truth)  # True
    """

    def __init__(self, expression: str):
        """
        Parse an alarm expression.

        Args:
            expression: Alarm expression text

        Raises:
            ExpressionSyntaxError: If the text is not a valid alarm expression
        """
        self.expression = expression
        self._tree = parse_expression(expression)
        self._sub_expressions = tuple(iter_leaves(self._tree))

    @classmethod
    def of(cls, expression: str) -> Self:
        return cls(expression)

    @property
    def expression_tree(self) -> ExpressionNode:
        return self._tree

    @property
    def sub_expressions(self) -> list[AlarmSubExpression]:
        """Leaves of the expression in the order they appear in the source text."""
        return list(self._sub_expressions)

    def evaluate(self, sub_expression_values: Mapping[AlarmSubExpression, bool]) -> bool:
        """
        Evaluate the expression for the given sub-expression truth values.

        Args:
            sub_expression_values: Truth value for every sub-expression of this expression

        Returns:
            Result of folding the truth values through the expression's AND/OR nodes

        Raises:
            InvalidArgumentError: If a sub-expression of this expression has no truth value
        """
        missing = [
            str(sub_expression)
            for sub_expression in dict.fromkeys(self._sub_expressions)
            if sub_expression not in sub_expression_values
        ]
        if missing:
            raise InvalidArgumentError(missing)

        return evaluate_node(self._tree, sub_expression_values)

    def __str__(self) -> str:
        return str(self._tree)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AlarmExpression):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))
