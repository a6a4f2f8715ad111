"""Aggregate functions of numeric alarm sub-expressions."""

from enum import StrEnum

from alarmeval.stats.domain.statistic import StatisticType


class AggregateFunction(StrEnum):
    """Aggregation applied to a metric stream over each period."""

    MIN = "min"
    MAX = "max"
    SUM = "sum"
    COUNT = "count"
    AVG = "avg"

    @classmethod
    def from_json(cls, text: str) -> "AggregateFunction":
        return cls(text.lower())

    @classmethod
    def get_regex_pattern(cls) -> str:
        return "|".join(function.value for function in cls)

    @property
    def statistic_type(self) -> StatisticType:
        return _STATISTIC_TYPES[self]


_STATISTIC_TYPES = {
    AggregateFunction.MIN: StatisticType.MIN,
    AggregateFunction.MAX: StatisticType.MAX,
    AggregateFunction.SUM: StatisticType.SUM,
    AggregateFunction.COUNT: StatisticType.COUNT,
    AggregateFunction.AVG: StatisticType.AVERAGE,
}
