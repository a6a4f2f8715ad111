"""Application layer for alarm expressions."""

from alarmeval.expression.application.alarm_expression import AlarmExpression
from alarmeval.expression.application.parser import AlarmExpressionParser, parse_expression

__all__ = ["AlarmExpression", "AlarmExpressionParser", "parse_expression"]
