"""Infrastructure layer for the alarm evaluator."""

from alarmeval.evaluator.infrastructure.alarm_loader import DictAlarmLoader
from alarmeval.evaluator.infrastructure.event_sink import CSVEventSink, InMemoryEventSink
from alarmeval.evaluator.infrastructure.logging import (
    LoggingContext,
    configure_logging,
    get_logging_context,
    log_with_context,
)

__all__ = [
    "DictAlarmLoader",
    "CSVEventSink",
    "InMemoryEventSink",
    "LoggingContext",
    "configure_logging",
    "get_logging_context",
    "log_with_context",
]
