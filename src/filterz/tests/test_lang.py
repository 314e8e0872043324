"""
单个条件编解码测试
"""

import pytest

from filterz.filter.errors import MalformedConditionError, UnknownComparatorError
from filterz.filter.lang import (
    decode_condition,
    detect_combination_mode,
    encode_condition,
    match_condition,
    parse_condition,
)
from filterz.filter.model import Condition


class TestDecodeCondition:
    """测试单个条件的解析"""

    def test_greater_than(self):
        assert decode_condition("GT([StartTime], 1582142365)") == Condition(
            field="[StartTime]", option="Greater than", query="1582142365"
        )

    def test_less_than_or_equal(self):
        assert decode_condition("LTE([StartTime], 1582142365)") == Condition(
            "[StartTime]", "Less than or equal to", "1582142365"
        )

    def test_field_reference_value(self):
        assert decode_condition("LTE([StartTime], [EndTime])") == Condition(
            "[StartTime]", "Less than or equal to", "[EndTime]"
        )

    def test_matches_contains(self):
        assert decode_condition("MATCHES([StartTime], [.*foo.*])") == Condition(
            "[StartTime]", "Text contains", "foo"
        )

    def test_matches_starts_with(self):
        assert decode_condition("MATCHES([name], [^firstName.*])") == Condition(
            "[name]", "Text starts with", "firstName"
        )

    def test_matches_ends_with(self):
        assert decode_condition("MATCHES([name], [.*firstName$])") == Condition(
            "[name]", "Text ends with", "firstName"
        )

    def test_matches_plain(self):
        assert decode_condition("MATCHES([name], abc)") == Condition("[name]", "Matches", "abc")

    def test_explicit_string_tokens(self):
        assert decode_condition("STRING_STARTSWITH([StartTime], [^foo.*])") == Condition(
            "[StartTime]", "Text starts with", "foo"
        )
        assert decode_condition("STRING_ENDSWITH([StartTime], [.*foo$])") == Condition(
            "[StartTime]", "Text ends with", "foo"
        )
        assert decode_condition("STRING_EQUALS([name], bob)") == Condition(
            "[name]", "Text is exactly", "bob"
        )

    def test_value_keeps_inner_parentheses(self):
        assert decode_condition("EQ([a], f(x))") == Condition("[a]", "Is equal to", "f(x)")

    def test_value_keeps_tabs(self):
        assert decode_condition("EQ([a], x\ty)").query == "x\ty"

    def test_surrounding_text_ignored(self):
        assert decode_condition("  GT([a], 1)  ") == Condition("[a]", "Greater than", "1")

    @pytest.mark.parametrize("text", [
        "",
        "GT",
        "GT(StartTime, 1)",
        "GT([Start Time], 1)",
        "GT([a],1)",
        "GT([a], )",
        "([a], 1)",
    ])
    def test_malformed_returns_none(self, text):
        assert decode_condition(text) is None

    def test_unknown_token_raises(self):
        with pytest.raises(UnknownComparatorError):
            decode_condition("BETWEEN([a], 1)")

    def test_match_condition_parts(self):
        assert match_condition("MATCHES([name], [^x.*])") == ("MATCHES", "[name]", "[^x.*]")


class TestParseCondition:
    """测试严格解析"""

    def test_valid(self):
        assert parse_condition("NE([a], 2)").option == "Is not equal to"

    def test_malformed_raises(self):
        with pytest.raises(MalformedConditionError) as excinfo:
            parse_condition("not a condition")
        assert excinfo.value.segment == "not a condition"

    def test_malformed_is_value_error(self):
        with pytest.raises(ValueError):
            parse_condition("GT([a],1)")


class TestEncodeCondition:
    """测试单个条件的编码"""

    def test_plain(self):
        assert encode_condition(Condition("[StartTime]", "Greater than", "1582142365")) == (
            "GT([StartTime], 1582142365)"
        )

    @pytest.mark.parametrize("option,expected", [
        ("Text contains", "MATCHES([name], [.*x.*])"),
        ("Text starts with", "MATCHES([name], [^x.*])"),
        ("Text ends with", "MATCHES([name], [.*x$])"),
        ("Matches", "MATCH([name], x)"),
    ])
    def test_text_patterns(self, option, expected):
        assert encode_condition(Condition("[name]", option, "x")) == expected

    def test_dict_input(self):
        assert encode_condition({"field": "[a]", "option": "Is equal to", "query": 5}) == "EQ([a], 5)"

    def test_legacy_string_token(self):
        condition = Condition("[name]", "Text is exactly", "bob")
        assert encode_condition(condition) == "MATCHES([name], bob)"
        assert encode_condition(condition, legacy_string_tokens=False) == "STRING_EQUALS([name], bob)"

    def test_non_legacy_round_trip(self):
        for option in ("Text does not contain", "Text is exactly",
                       "Text length is less than", "Text length is greater than"):
            condition = Condition("[name]", option, "7")
            wire = encode_condition(condition, legacy_string_tokens=False)
            assert decode_condition(wire) == condition

    def test_unknown_label_raises(self):
        with pytest.raises(UnknownComparatorError):
            encode_condition(Condition("[a]", "Roughly", "1"))

    def test_none_raises(self):
        with pytest.raises(MalformedConditionError):
            encode_condition(None)


class TestDetectCombinationMode:
    """测试组合方式检测"""

    def test_and(self):
        assert detect_combination_mode("function AND function") == "AND"

    def test_or(self):
        assert detect_combination_mode("function OR function") == "OR"

    def test_none(self):
        assert detect_combination_mode("function function") is None

    def test_requires_whitespace(self):
        assert detect_combination_mode("ANDROID([a], 1)") is None
        assert detect_combination_mode("GT([ORDER], 1)") is None

    def test_first_wins(self):
        assert detect_combination_mode("a OR b AND c") == "OR"
