"""Recursive descent parser for alarm expressions.

Grammar::

    expression := and_term (("or" | "||") and_term)*
    and_term   := clause (("and" | "&&") clause)*
    clause     := "(" expression ")" | leaf
    leaf       := function "(" metric ["," period] ")" operator number ["times" periods]
                | metric ("like" | "regexp") quoted_string ["times" periods]
    metric     := name ["{" [dimension ("," dimension)*] "}"]
    dimension  := key "=" (quoted_string | bare_value)

Keywords are case-insensitive. Quoted dimension values keep their quotes.
"""

import re

from loguru import logger

from alarmeval.expression.domain.exceptions import ExpressionSyntaxError
from alarmeval.expression.domain.function import AggregateFunction
from alarmeval.expression.domain.metric import MetricDefinition
from alarmeval.expression.domain.operator import AlarmOperator
from alarmeval.expression.domain.sub_expression import (
    DEFAULT_PERIOD,
    DEFAULT_PERIODS,
    AlarmSubExpression,
)
from alarmeval.expression.domain.tree import BinaryExpression, BooleanOperator, ExpressionNode

_WHITESPACE = re.compile(r"\s*")
_FUNCTION = re.compile(rf"({AggregateFunction.get_regex_pattern()})\s*\(", re.IGNORECASE)
_METRIC_NAME = re.compile(r'[^\s,{}()="<>!&|]+')
_DIMENSION_TOKEN = re.compile(r'[^\s,{}()="]+')
_QUOTED = re.compile(r'"(?:[^"\\]|\\.)*"')
_INTEGER = re.compile(r"\d+")
_NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_OPERATOR = re.compile(
    r"<=|>=|==|!=|<|>|(?:lte|gte|lt|gt|eq|neq|ne|like|regexp)\b", re.IGNORECASE
)
_AND = re.compile(r"and\b|&&", re.IGNORECASE)
_OR = re.compile(r"or\b|\|\|", re.IGNORECASE)
_TIMES = re.compile(r"times\b", re.IGNORECASE)

_OPERATORS = {
    "<": AlarmOperator.LT,
    "<=": AlarmOperator.LTE,
    ">": AlarmOperator.GT,
    ">=": AlarmOperator.GTE,
    "==": AlarmOperator.EQ,
    "!=": AlarmOperator.NEQ,
    "lt": AlarmOperator.LT,
    "lte": AlarmOperator.LTE,
    "gt": AlarmOperator.GT,
    "gte": AlarmOperator.GTE,
    "eq": AlarmOperator.EQ,
    "ne": AlarmOperator.NEQ,
    "neq": AlarmOperator.NEQ,
    "like": AlarmOperator.LIKE,
    "regexp": AlarmOperator.REGEXP,
}


class AlarmExpressionParser:
    """Parses one alarm expression text into an expression tree."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def parse(self) -> ExpressionNode:
        """
        Parse the whole text.

        Returns:
            Root of the expression tree, a sub-expression when the text has a single leaf

        Raises:
            ExpressionSyntaxError: If the text is not a valid alarm expression
        """
        node = self._expression()
        self._skip_whitespace()
        if self.pos != len(self.text):
            raise self._error(f"unexpected input {self.text[self.pos:self.pos + 20]!r}")
        return node

    def _expression(self) -> ExpressionNode:
        node = self._and_term()
        while self._accept(_OR):
            node = BinaryExpression(BooleanOperator.OR, node, self._and_term())
        return node

    def _and_term(self) -> ExpressionNode:
        node = self._clause()
        while self._accept(_AND):
            node = BinaryExpression(BooleanOperator.AND, node, self._clause())
        return node

    def _clause(self) -> ExpressionNode:
        if self._accept_literal("("):
            node = self._expression()
            self._expect_literal(")")
            return node
        return self._leaf()

    def _leaf(self) -> AlarmSubExpression:
        start = self._skip_whitespace()
        function_match = self._accept(_FUNCTION)
        period = DEFAULT_PERIOD

        if function_match:
            function = AggregateFunction.from_json(function_match.group(1))
            metric = self._metric()
            if self._accept_literal(","):
                period = int(self._expect(_INTEGER, "period").group())
            self._expect_literal(")")

            operator = self._operator()
            if operator.is_string_operator:
                raise self._error(f"operator '{operator}' cannot be applied to {function}()")
            threshold = float(self._expect(_NUMBER, "numeric threshold").group())
        else:
            function = None
            metric = self._metric()
            operator = self._operator()
            if not operator.is_string_operator:
                raise self._error(f"operator '{operator}' requires an aggregate function")
            threshold = _unquote(self._expect(_QUOTED, "quoted pattern").group())

        periods = DEFAULT_PERIODS
        if self._accept(_TIMES):
            periods = int(self._expect(_INTEGER, "number of periods").group())

        try:
            return AlarmSubExpression(function, metric, operator, threshold, period, periods)
        except ValueError as e:
            raise ExpressionSyntaxError(self.text, start, str(e)) from e

    def _metric(self) -> MetricDefinition:
        name = self._expect(_METRIC_NAME, "metric name").group()
        dimensions: dict[str, str] = {}

        if self._accept_literal("{") and not self._accept_literal("}"):
            while True:
                key_pos = self._skip_whitespace()
                key = self._expect(_DIMENSION_TOKEN, "dimension name").group()
                self._expect_literal("=")
                value = self._accept(_QUOTED) or self._expect(_DIMENSION_TOKEN, "dimension value")

                if key in dimensions:
                    raise ExpressionSyntaxError(self.text, key_pos, f"duplicate dimension '{key}'")
                dimensions[key] = value.group()

                if self._accept_literal("}"):
                    break
                self._expect_literal(",")

        return MetricDefinition(name, dimensions)

    def _operator(self) -> AlarmOperator:
        return _OPERATORS[self._expect(_OPERATOR, "comparison operator").group().lower()]

    def _skip_whitespace(self) -> int:
        self.pos = _WHITESPACE.match(self.text, self.pos).end()
        return self.pos

    def _accept(self, pattern: re.Pattern) -> re.Match | None:
        self._skip_whitespace()
        match = pattern.match(self.text, self.pos)
        if match:
            self.pos = match.end()
        return match

    def _expect(self, pattern: re.Pattern, description: str) -> re.Match:
        match = self._accept(pattern)
        if not match:
            raise self._error(f"expected {description}")
        return match

    def _accept_literal(self, literal: str) -> bool:
        self._skip_whitespace()
        if self.text.startswith(literal, self.pos):
            self.pos += len(literal)
            return True
        return False

    def _expect_literal(self, literal: str) -> None:
        if not self._accept_literal(literal):
            raise self._error(f"expected '{literal}'")

    def _error(self, reason: str) -> ExpressionSyntaxError:
        return ExpressionSyntaxError(self.text, self.pos, reason)


def _unquote(quoted: str) -> str:
    return quoted[1:-1].replace('\\"', '"')


def parse_expression(text: str) -> ExpressionNode:
    """Parse alarm expression text into an expression tree."""
    tree = AlarmExpressionParser(text).parse()
    logger.debug(f"Parsed alarm expression: {tree}")
    return tree
