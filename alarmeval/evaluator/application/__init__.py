"""Application layer for the alarm evaluator."""

from alarmeval.evaluator.application.alarm_evaluator import (
    AlarmEvaluator,
    create_evaluator_from_loader,
)
from alarmeval.evaluator.application.sub_alarm import Alarm, SubAlarm

__all__ = ["AlarmEvaluator", "create_evaluator_from_loader", "Alarm", "SubAlarm"]
