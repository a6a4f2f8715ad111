import pytest

from alarmeval.expression.domain.function import AggregateFunction
from alarmeval.expression.domain.operator import AlarmOperator, compile_pattern
from alarmeval.stats.domain.statistic import StatisticType


class TestNumericComparison:
    @pytest.mark.parametrize(
        "operator,lhs,rhs,expected",
        [
            (AlarmOperator.LT, 1, 2, True),
            (AlarmOperator.LT, 2, 2, False),
            (AlarmOperator.LTE, 2, 2, True),
            (AlarmOperator.GT, 3.5, 2, True),
            (AlarmOperator.GT, 2, 2, False),
            (AlarmOperator.GTE, 2.0, 2, True),
            (AlarmOperator.EQ, 2.0, 2, True),
            (AlarmOperator.NEQ, 2.0, 2, False),
            (AlarmOperator.NEQ, 1.0, 2, True),
        ],
    )
    def test_evaluate(self, operator, lhs, rhs, expected):
        assert operator.evaluate(lhs, rhs) is expected

    def test_nan_never_exceeds_threshold(self):
        assert not AlarmOperator.GT.evaluate(float("nan"), 1.0)
        assert not AlarmOperator.LT.evaluate(float("nan"), 1.0)


class TestStringComparison:
    @pytest.mark.parametrize(
        "operator,lhs,rhs,expected",
        [
            (AlarmOperator.EQ, "abc", "ABC", True),
            (AlarmOperator.EQ, "abc", "abd", False),
            (AlarmOperator.EQ, None, None, True),
            (AlarmOperator.EQ, None, "a", False),
            (AlarmOperator.NEQ, "a", "A", False),
            (AlarmOperator.NEQ, None, "a", True),
            (AlarmOperator.NEQ, "a", None, True),
            (AlarmOperator.NEQ, None, None, False),
            (AlarmOperator.LIKE, "hello world", "lo w", True),
            (AlarmOperator.LIKE, "abc", "B", False),
            (AlarmOperator.LIKE, None, "a", False),
            (AlarmOperator.GT, "b", "a", False),
            (AlarmOperator.LT, "a", "b", False),
        ],
    )
    def test_evaluate(self, operator, lhs, rhs, expected):
        assert operator.evaluate(lhs, rhs) is expected

    @pytest.mark.parametrize(
        "lhs,rhs,expected",
        [
            ("straße", "STRASSE", False),
            ("ÀBC", "àbc", True),
            ("abc", "abcd", False),
        ],
    )
    def test_case_insensitive_equality_is_per_character(self, lhs, rhs, expected):
        assert AlarmOperator.EQ.evaluate(lhs, rhs) is expected
        assert AlarmOperator.NEQ.evaluate(lhs, rhs) is not expected

    def test_mixed_operands_compare_as_strings(self):
        assert AlarmOperator.EQ.evaluate("5.0", 5.0)
        assert AlarmOperator.LIKE.evaluate("value 12.5 ms", 12.5)


class TestRegexp:
    @pytest.mark.parametrize(
        "lhs,rhs,expected",
        [
            ("^[a-z]$", "a", True),
            ("^[a-z]$", "A", False),
            ("^[a-z]$", "ab", False),
            ("a", "^[a-z]$", True),
            ("error: disk full", "error.*", True),
            ("error.*", "warning: disk full", False),
        ],
    )
    def test_matches_either_direction(self, lhs, rhs, expected):
        assert AlarmOperator.REGEXP.evaluate(lhs, rhs) is expected

    def test_invalid_patterns_do_not_match(self):
        assert not AlarmOperator.REGEXP.evaluate("[unclosed", "x")
        assert not AlarmOperator.REGEXP.evaluate("x", "(bad")

    @pytest.mark.parametrize("lhs,rhs", [("(", r"\("), (r"\(", "(")])
    def test_invalid_pattern_on_either_side_never_matches(self, lhs, rhs):
        assert not AlarmOperator.REGEXP.evaluate(lhs, rhs)

    def test_missing_operand(self):
        assert not AlarmOperator.REGEXP.evaluate(None, "a")
        assert not AlarmOperator.REGEXP.evaluate("a", None)

    def test_compile_pattern(self):
        assert compile_pattern("a+b").fullmatch("aaab")
        assert compile_pattern("(") is None


class TestOperatorLookup:
    @pytest.mark.parametrize(
        "operator,reversed_operator",
        [
            (AlarmOperator.LT, AlarmOperator.GT),
            (AlarmOperator.GT, AlarmOperator.LT),
            (AlarmOperator.LTE, AlarmOperator.GTE),
            (AlarmOperator.GTE, AlarmOperator.LTE),
            (AlarmOperator.EQ, AlarmOperator.NEQ),
            (AlarmOperator.NEQ, AlarmOperator.EQ),
            (AlarmOperator.LIKE, AlarmOperator.LTE),
            (AlarmOperator.REGEXP, AlarmOperator.LTE),
        ],
    )
    def test_reverse(self, operator, reversed_operator):
        assert AlarmOperator.reverse(operator) is reversed_operator

    @pytest.mark.parametrize("text", ["gt", "GT", "Gt"])
    def test_from_json(self, text):
        assert AlarmOperator.from_json(text) is AlarmOperator.GT

    def test_from_json_unknown(self):
        with pytest.raises(KeyError):
            AlarmOperator.from_json("between")

    def test_str(self):
        assert str(AlarmOperator.GTE) == ">="
        assert str(AlarmOperator.REGEXP) == "regexp"

    def test_string_operators(self):
        assert AlarmOperator.LIKE.is_string_operator
        assert AlarmOperator.REGEXP.is_string_operator
        assert not AlarmOperator.EQ.is_string_operator


class TestAggregateFunction:
    @pytest.mark.parametrize(
        "function,stat_type",
        [
            (AggregateFunction.MIN, StatisticType.MIN),
            (AggregateFunction.MAX, StatisticType.MAX),
            (AggregateFunction.SUM, StatisticType.SUM),
            (AggregateFunction.COUNT, StatisticType.COUNT),
            (AggregateFunction.AVG, StatisticType.AVERAGE),
        ],
    )
    def test_statistic_type(self, function, stat_type):
        assert function.statistic_type is stat_type

    def test_from_json(self):
        assert AggregateFunction.from_json("AVG") is AggregateFunction.AVG

    def test_regex_pattern(self):
        assert AggregateFunction.get_regex_pattern() == "min|max|sum|count|avg"
