"""Streaming alarm evaluator package."""

from alarmeval.evaluator.application import AlarmEvaluator, create_evaluator_from_loader
from alarmeval.evaluator.domain import AlarmDefinition, AlarmState, AlarmStateTransitionedEvent
from alarmeval.evaluator.infrastructure import (
    CSVEventSink,
    DictAlarmLoader,
    InMemoryEventSink,
    LoggingContext,
    configure_logging,
)

__all__ = [
    "AlarmEvaluator",
    "create_evaluator_from_loader",
    "AlarmDefinition",
    "AlarmState",
    "AlarmStateTransitionedEvent",
    "CSVEventSink",
    "DictAlarmLoader",
    "InMemoryEventSink",
    "LoggingContext",
    "configure_logging",
]
