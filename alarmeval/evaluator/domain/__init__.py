"""Domain layer for the alarm evaluator."""

from alarmeval.evaluator.domain.models import (
    AlarmDefinition,
    AlarmState,
    AlarmStateTransitionedEvent,
)
from alarmeval.evaluator.domain.protocols import AlarmLoader, EventSink

__all__ = [
    "AlarmDefinition",
    "AlarmState",
    "AlarmStateTransitionedEvent",
    "AlarmLoader",
    "EventSink",
]
