"""Domain layer for alarm expressions."""

from alarmeval.expression.domain.exceptions import (
    ExpressionException,
    ExpressionSyntaxError,
    InvalidArgumentError,
)
from alarmeval.expression.domain.function import AggregateFunction
from alarmeval.expression.domain.metric import Metric, MetricDefinition
from alarmeval.expression.domain.operator import AlarmOperator
from alarmeval.expression.domain.sub_expression import (
    DEFAULT_PERIOD,
    DEFAULT_PERIODS,
    AlarmSubExpression,
)
from alarmeval.expression.domain.tree import BinaryExpression, BooleanOperator, ExpressionNode

__all__ = [
    "ExpressionException",
    "ExpressionSyntaxError",
    "InvalidArgumentError",
    "AggregateFunction",
    "Metric",
    "MetricDefinition",
    "AlarmOperator",
    "DEFAULT_PERIOD",
    "DEFAULT_PERIODS",
    "AlarmSubExpression",
    "BinaryExpression",
    "BooleanOperator",
    "ExpressionNode",
]
