"""Atomic threshold conditions of an alarm expression."""

import math
from dataclasses import dataclass

from alarmeval.expression.domain.function import AggregateFunction
from alarmeval.expression.domain.metric import MetricDefinition
from alarmeval.expression.domain.operator import AlarmOperator
from alarmeval.stats.domain.statistic import StatisticType

DEFAULT_PERIOD = 60
DEFAULT_PERIODS = 1


@dataclass(frozen=True)
class AlarmSubExpression:
    """
    An atomic alarm condition over one aggregated metric stream.

    Numeric conditions aggregate the stream with ``function`` over ``period`` seconds and
    compare the result to a float threshold. String conditions have no function and match the
    raw values against a textual pattern with LIKE or REGEXP. The condition must hold for
    ``periods`` consecutive periods.
    """

    function: AggregateFunction | None
    metric_definition: MetricDefinition
    operator: AlarmOperator
    threshold: float | str
    period: int = DEFAULT_PERIOD
    periods: int = DEFAULT_PERIODS

    def __post_init__(self):
        if self.operator.is_string_operator:
            if self.function is not None:
                raise ValueError(f"Operator {self.operator} does not take an aggregate function")
            object.__setattr__(self, "threshold", str(self.threshold))
        else:
            if self.function is None:
                raise ValueError(f"Operator {self.operator} requires an aggregate function")
            object.__setattr__(self, "threshold", float(self.threshold))
            if not math.isfinite(self.threshold):
                raise ValueError(f"Threshold must be a finite number, got {self.threshold}")

        if self.period <= 0 or self.periods <= 0:
            raise ValueError(
                f"Period and periods must be positive, got {self.period} and {self.periods}"
            )

    @property
    def statistic_type(self) -> StatisticType:
        if self.function is None:
            return StatisticType.CONCAT
        return self.function.statistic_type

    def evaluate(self, value: float | str | None) -> bool:
        """Compare an aggregated value against the threshold."""
        return self.operator.evaluate(value, self.threshold)

    @property
    def expression(self) -> str:
        """Canonical textual form, parseable back into an equal sub-expression."""
        metric = self.metric_definition.to_expression()

        if self.function is None:
            escaped = self.threshold.replace('"', '\\"')
            text = f'{metric} {self.operator.value} "{escaped}"'
        else:
            period = f", {self.period}" if self.period != DEFAULT_PERIOD else ""
            text = f"{self.function.value}({metric}{period}) {self.operator.value} {self.threshold!r}"

        if self.periods != DEFAULT_PERIODS:
            text += f" times {self.periods}"
        return text

    def __str__(self) -> str:
        return self.expression
