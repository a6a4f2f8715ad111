"""Alarm expression language package."""

from alarmeval.expression.application import AlarmExpression, parse_expression
from alarmeval.expression.domain import (
    AggregateFunction,
    AlarmOperator,
    AlarmSubExpression,
    ExpressionSyntaxError,
    InvalidArgumentError,
    Metric,
    MetricDefinition,
)

__all__ = [
    "AlarmExpression",
    "parse_expression",
    "AggregateFunction",
    "AlarmOperator",
    "AlarmSubExpression",
    "ExpressionSyntaxError",
    "InvalidArgumentError",
    "Metric",
    "MetricDefinition",
]
