"""Alarm comparison operators."""

import re
from enum import Enum


class AlarmOperator(Enum):
    """Comparison between an aggregated metric value and a threshold."""

    LT = "<"
    LTE = "<="
    GT = ">"
    GTE = ">="
    EQ = "=="
    NEQ = "!="
    LIKE = "like"
    REGEXP = "regexp"

    @classmethod
    def from_json(cls, text: str) -> "AlarmOperator":
        return cls[text.upper()]

    @staticmethod
    def reverse(op: "AlarmOperator") -> "AlarmOperator":
        return _REVERSED.get(op, AlarmOperator.LTE)

    @property
    def is_string_operator(self) -> bool:
        return self in (AlarmOperator.LIKE, AlarmOperator.REGEXP)

    def evaluate(self, lhs: float | str | None, rhs: float | str | None) -> bool:
        """Compare numerically when both operands are numbers, textually otherwise."""
        if _is_number(lhs) and _is_number(rhs):
            return self.evaluate_numeric(lhs, rhs)
        return self.evaluate_string(
            None if lhs is None else str(lhs),
            None if rhs is None else str(rhs),
        )

    def evaluate_numeric(self, lhs: float, rhs: float) -> bool:
        match self:
            case AlarmOperator.LT:
                return lhs < rhs
            case AlarmOperator.LTE:
                return lhs <= rhs
            case AlarmOperator.GT:
                return lhs > rhs
            case AlarmOperator.GTE:
                return lhs >= rhs
            case AlarmOperator.EQ:
                return lhs == rhs
            case AlarmOperator.NEQ:
                return lhs != rhs
            case _:
                return False

    def evaluate_string(self, lhs: str | None, rhs: str | None) -> bool:
        match self:
            case AlarmOperator.EQ:
                if lhs is None:
                    return rhs is None
                return rhs is not None and _equals_ignore_case(lhs, rhs)
            case AlarmOperator.NEQ:
                if lhs is None:
                    return rhs is not None
                return rhs is None or not _equals_ignore_case(lhs, rhs)
            case AlarmOperator.LIKE:
                return lhs is not None and rhs is not None and rhs in lhs
            case AlarmOperator.REGEXP:
                if lhs is None or rhs is None:
                    return False
                lhs_pattern = compile_pattern(lhs)
                rhs_pattern = compile_pattern(rhs)
                # Either side may hold the pattern; an invalid one on either side never matches
                if lhs_pattern is None or rhs_pattern is None:
                    return False
                return lhs_pattern.fullmatch(rhs) is not None or rhs_pattern.fullmatch(lhs) is not None
            case _:
                return False

    def __str__(self) -> str:
        return self.value


_REVERSED = {
    AlarmOperator.LT: AlarmOperator.GT,
    AlarmOperator.GT: AlarmOperator.LT,
    AlarmOperator.LTE: AlarmOperator.GTE,
    AlarmOperator.EQ: AlarmOperator.NEQ,
    AlarmOperator.NEQ: AlarmOperator.EQ,
}


def compile_pattern(pattern: str) -> re.Pattern | None:
    """Compile a regular expression, returning None when it is not a valid pattern."""
    try:
        return re.compile(pattern)
    except re.error:
        return None


def _equals_ignore_case(lhs: str, rhs: str) -> bool:
    """Character-wise case-insensitive equality; no multi-character case folding."""
    if len(lhs) != len(rhs):
        return False
    return all(
        a == b or a.upper() == b.upper() or a.lower() == b.lower() for a, b in zip(lhs, rhs)
    )


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
