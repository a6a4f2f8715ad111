"""Sliding window statistics package."""

from alarmeval.stats.domain import (
    OutOfWindowError,
    Statistic,
    StatisticType,
    TimeResolution,
)
from alarmeval.stats.infrastructure import SlidingWindowStats

__all__ = [
    "OutOfWindowError",
    "Statistic",
    "StatisticType",
    "TimeResolution",
    "SlidingWindowStats",
]
