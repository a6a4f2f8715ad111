"""Alarm expression parsing and sliding-window evaluation."""

from alarmeval.expression import (
    AggregateFunction,
    AlarmExpression,
    AlarmOperator,
    AlarmSubExpression,
    ExpressionSyntaxError,
    InvalidArgumentError,
    Metric,
    MetricDefinition,
    parse_expression,
)
from alarmeval.stats import (
    OutOfWindowError,
    SlidingWindowStats,
    StatisticType,
    TimeResolution,
)

__all__ = [
    "AggregateFunction",
    "AlarmExpression",
    "AlarmOperator",
    "AlarmSubExpression",
    "ExpressionSyntaxError",
    "InvalidArgumentError",
    "Metric",
    "MetricDefinition",
    "parse_expression",
    "OutOfWindowError",
    "SlidingWindowStats",
    "StatisticType",
    "TimeResolution",
]
