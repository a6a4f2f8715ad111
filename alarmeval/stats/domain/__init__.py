"""Domain layer for windowed statistics."""

from alarmeval.stats.domain.exceptions import OutOfWindowError, StatsException
from alarmeval.stats.domain.resolution import TimeResolution
from alarmeval.stats.domain.statistic import (
    Average,
    Concat,
    Count,
    Max,
    Min,
    Statistic,
    StatisticType,
    Sum,
)

__all__ = [
    "OutOfWindowError",
    "StatsException",
    "TimeResolution",
    "Average",
    "Concat",
    "Count",
    "Max",
    "Min",
    "Statistic",
    "StatisticType",
    "Sum",
]
