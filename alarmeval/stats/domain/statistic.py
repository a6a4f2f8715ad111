"""Incremental statistics held by sliding window slots."""

import math
from abc import ABC, abstractmethod
from enum import StrEnum
from typing import Any, Callable, Generic, TypeVar

from river import stats

T = TypeVar("T")


class Statistic(ABC, Generic[T]):
    """
    A value aggregated incrementally from samples.

    Subclasses accept numeric or textual samples, expose the current value and can be reset
    to their neutral starting state so a slot can reuse them.
    """

    def __init__(self):
        self.initialized = False
        self.reset()

    @abstractmethod
    def add_value(self, value: float | str) -> None:
        """Add a sample to the statistic."""
        ...

    @abstractmethod
    def value(self) -> T:
        """Return the current value of the statistic."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Restore the neutral starting state."""
        ...

    def is_initialized(self) -> bool:
        return self.initialized

    def __str__(self) -> str:
        return str(self.value())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.value()!r})"


class NumericStatistic(Statistic[float]):
    """Statistic backed by a river univariate statistic. Strings are parsed as floats."""

    river_stat: Callable[[], Any]

    def add_value(self, value: float | str) -> None:
        if isinstance(value, str):
            try:
                value = float(value)
            except ValueError:
                return
        self._update(value)
        self.initialized = True

    def _update(self, value: float) -> None:
        self._stat.update(value)

    def value(self) -> float:
        if not self.initialized:
            return math.nan
        return float(self._stat.get())

    def reset(self) -> None:
        self.initialized = False
        self._stat = self.river_stat()


class Sum(NumericStatistic):
    river_stat = stats.Sum


class Average(NumericStatistic):
    """Running sum divided by the number of accepted samples."""

    river_stat = stats.Sum

    def _update(self, value: float) -> None:
        super()._update(value)
        self._count += 1

    def value(self) -> float:
        if not self.initialized:
            return math.nan
        return float(self._stat.get()) / self._count

    def reset(self) -> None:
        super().reset()
        self._count = 0


class Max(NumericStatistic):
    river_stat = stats.Max


class Min(NumericStatistic):
    river_stat = stats.Min


class Count(NumericStatistic):
    river_stat = stats.Count


class Concat(Statistic[str | None]):
    """Appends textual samples in arrival order, without a separator."""

    def add_value(self, value: float | str) -> None:
        if not isinstance(value, str):
            value = str(value)
        if not self.initialized:
            self.initialized = True
            self._value = value
        else:
            self._value += value

    def value(self) -> str | None:
        return self._value if self.initialized else None

    def reset(self) -> None:
        self.initialized = False
        self._value = ""


class StatisticType(StrEnum):
    """Available statistic strategies."""

    SUM = "sum"
    AVERAGE = "average"
    MAX = "max"
    MIN = "min"
    COUNT = "count"
    CONCAT = "concat"

    def create(self) -> Statistic:
        return _STATISTICS[self]()

    @classmethod
    def get_available_statistics(cls) -> list[str]:
        return [stat.value for stat in cls]


_STATISTICS: dict[StatisticType, type[Statistic]] = {
    StatisticType.SUM: Sum,
    StatisticType.AVERAGE: Average,
    StatisticType.MAX: Max,
    StatisticType.MIN: Min,
    StatisticType.COUNT: Count,
    StatisticType.CONCAT: Concat,
}
