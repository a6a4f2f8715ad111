"""Runtime state of alarms and of the sub-expressions they are built from."""

import math

from loguru import logger

from alarmeval.config import EvaluatorConfig
from alarmeval.evaluator.domain.models import (
    AlarmDefinition,
    AlarmState,
    AlarmStateTransitionedEvent,
)
from alarmeval.expression.application.alarm_expression import AlarmExpression
from alarmeval.expression.domain.sub_expression import AlarmSubExpression
from alarmeval.stats.infrastructure.sliding_window import SlidingWindowStats


class SubAlarm:
    """
    A sub-expression bound to the sliding window that aggregates its metric stream.

    The window has one view slot per required period, so the sub-alarm is in ALARM only when
    the condition holds for ``periods`` consecutive periods.
    """

    def __init__(self, sub_expression: AlarmSubExpression, config: EvaluatorConfig, view_end_timestamp: int):
        self.sub_expression = sub_expression
        self.state = AlarmState.UNDETERMINED
        self.stats = SlidingWindowStats(
            statistic_factory=sub_expression.statistic_type.create,
            time_resolution=config.time_resolution,
            slot_width=sub_expression.period * config.period_unit_ms,
            num_view_slots=sub_expression.periods,
            num_future_slots=config.future_slots,
            view_end_timestamp=view_end_timestamp,
        )

    def add_sample(self, timestamp: int, value: float | str) -> bool:
        return self.stats.add_value(value, timestamp)

    def evaluate(self, now: int) -> AlarmState:
        """Slide the window to ``now`` and derive the state from the view values."""
        self.stats.slide_view_to(now)
        values = self.stats.get_view_values()
        present = [value for value in values if not _is_missing(value)]

        if len(present) == len(values) and all(self.sub_expression.evaluate(v) for v in values):
            self.state = AlarmState.ALARM
        elif any(not self.sub_expression.evaluate(value) for value in present):
            self.state = AlarmState.OK
        else:
            self.state = AlarmState.UNDETERMINED

        return self.state

    def __repr__(self) -> str:
        return f"SubAlarm({self.sub_expression}, state={self.state})"


class Alarm:
    """An alarm definition with its parsed expression and one sub-alarm per distinct leaf."""

    def __init__(self, definition: AlarmDefinition, config: EvaluatorConfig, view_end_timestamp: int):
        """
        Compile an alarm definition.

        Raises:
            ExpressionSyntaxError: If the definition's expression cannot be parsed
        """
        self.definition = definition
        self.expression = AlarmExpression(definition.expression)
        self.state = AlarmState.UNDETERMINED
        self.sub_alarms = [
            SubAlarm(sub_expression, config, view_end_timestamp)
            for sub_expression in dict.fromkeys(self.expression.sub_expressions)
        ]

    def evaluate(self, now: int) -> AlarmStateTransitionedEvent | None:
        """
        Evaluate every sub-alarm at ``now`` and fold them through the expression.

        Returns:
            The transition event when the alarm changed state, else None
        """
        for sub_alarm in self.sub_alarms:
            sub_alarm.evaluate(now)

        truth = {s.sub_expression: s.state is AlarmState.ALARM for s in self.sub_alarms}
        if self.expression.evaluate(truth):
            new_state = AlarmState.ALARM
        elif any(s.state is AlarmState.UNDETERMINED for s in self.sub_alarms):
            new_state = AlarmState.UNDETERMINED
        else:
            new_state = AlarmState.OK

        if new_state is self.state:
            return None

        event = AlarmStateTransitionedEvent(
            tenant_id=self.definition.tenant_id,
            alarm_id=self.definition.id,
            alarm_name=self.definition.name,
            old_state=self.state,
            new_state=new_state,
            state_change_reason=self._state_change_reason(new_state),
            timestamp=now,
            metadata={"expression": str(self.expression)},
        )
        logger.debug(f"Alarm {self.definition.id} transitioned {self.state} -> {new_state}")
        self.state = new_state
        return event

    def _state_change_reason(self, state: AlarmState) -> str:
        if state is AlarmState.ALARM:
            exceeded = [str(s.sub_expression) for s in self.sub_alarms if s.state is AlarmState.ALARM]
            return f"Thresholds were exceeded for the sub-alarms: {exceeded}"
        if state is AlarmState.UNDETERMINED:
            no_data = [
                str(s.sub_expression) for s in self.sub_alarms if s.state is AlarmState.UNDETERMINED
            ]
            return f"No data was present for the sub-alarms: {no_data}"
        return "The alarm threshold(s) have not been exceeded"


def _is_missing(value: float | str | None) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))
