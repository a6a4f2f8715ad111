import pytest

from alarmeval.config import EvaluatorConfig
from alarmeval.stats.domain.resolution import TimeResolution
from alarmeval.stats.domain.statistic import StatisticType
from alarmeval.stats.infrastructure.sliding_window import SlidingWindowStats


@pytest.fixture
def sum_window():
    """Three view slots of width 3 ending at 15, plus two future slots: [6, 21)."""
    return SlidingWindowStats(
        statistic_factory=StatisticType.SUM.create,
        time_resolution=TimeResolution.ABSOLUTE,
        slot_width=3,
        num_view_slots=3,
        num_future_slots=2,
        view_end_timestamp=15,
    )


@pytest.fixture
def evaluator_config(monkeypatch):
    for name in (
        "ALARM_EVALUATOR_FUTURE_SLOTS",
        "ALARM_EVALUATOR_PERIOD_UNIT_MS",
        "ALARM_EVALUATOR_TIME_RESOLUTION",
        "ALARM_EVALUATOR_SKIP_INVALID_ALARMS",
    ):
        monkeypatch.delenv(name, raising=False)
    return EvaluatorConfig(future_slots=2, period_unit_ms=1000)


@pytest.fixture
def cpu_alarm():
    return {
        "id": "cpu-high",
        "tenant_id": "t1",
        "name": "CPU high",
        "expression": "avg(cpu{host=a}, 60) > 90 times 2",
    }
