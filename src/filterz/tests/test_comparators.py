"""
比较运算符注册表测试
"""

import pytest

from filterz.filter.comparators import (
    COMPARATORS,
    MATCHES,
    REGISTRY,
    ComparatorDefinition,
    ComparatorRegistry,
    call_name_for,
    label_to_token,
    list_comparators,
    lookup_by_label,
    lookup_by_token,
    resolve_match_variant,
    token_to_label,
)
from filterz.filter.errors import UnknownComparatorError


class TestRegistry:
    """测试注册表查找"""

    def test_all_tokens_registered(self):
        tokens = [c.token for c in COMPARATORS]
        assert tokens == [
            "LTE", "LT", "GT", "GTE", "EQ", "NE", "MATCH",
            "STRING_CONTAINS", "STRING_NOTCONTAINS", "STRING_STARTSWITH",
            "STRING_ENDSWITH", "STRING_EQUALS", "STRING_LENGTH_LT", "STRING_LENGTH_GT",
        ]
        assert len(REGISTRY) == 14

    def test_tokens_and_labels_unique(self):
        assert len({c.token for c in COMPARATORS}) == len(COMPARATORS)
        assert len({c.label for c in COMPARATORS}) == len(COMPARATORS)

    def test_lookup_by_token(self):
        assert lookup_by_token("GT").label == "Greater than"
        assert lookup_by_token("STRING_LENGTH_GT").label == "Text length is greater than"

    def test_lookup_by_label(self):
        assert lookup_by_label("Less than or equal to").token == "LTE"
        assert lookup_by_label("Text does not contain").token == "STRING_NOTCONTAINS"

    def test_converters(self):
        assert token_to_label("NE") == "Is not equal to"
        assert label_to_token("Matches") == "MATCH"

    def test_unknown_token(self):
        with pytest.raises(UnknownComparatorError) as excinfo:
            lookup_by_token("BETWEEN")
        assert excinfo.value.key == "BETWEEN"
        assert excinfo.value.kind == "token"

    def test_unknown_label_is_lookup_error(self):
        with pytest.raises(LookupError):
            lookup_by_label("Roughly equal to")

    def test_indexes_are_read_only(self):
        with pytest.raises(TypeError):
            REGISTRY.by_token["XX"] = COMPARATORS[0]
        with pytest.raises(TypeError):
            REGISTRY.by_label["XX"] = COMPARATORS[0]

    def test_duplicate_rejected(self):
        with pytest.raises(ValueError):
            ComparatorRegistry([
                ComparatorDefinition("GT", "Greater than"),
                ComparatorDefinition("GT", "Bigger than"),
            ])
        with pytest.raises(ValueError):
            ComparatorRegistry([
                ComparatorDefinition("GT", "Greater than"),
                ComparatorDefinition("GT2", "Greater than"),
            ])

    def test_list_comparators(self):
        items = list_comparators()
        assert items[0] == {"token": "LTE", "label": "Less than or equal to", "call_name": "LTE"}
        assert {"token": "STRING_CONTAINS", "label": "Text contains", "call_name": "MATCHES"} in items


class TestValueCodecs:
    """测试值的编码/解码"""

    def test_identity(self):
        gt = lookup_by_token("GT")
        assert gt.encode_value("1582142365") == "1582142365"
        assert gt.decode_value("[EndTime]") == "[EndTime]"

    @pytest.mark.parametrize("token,wire", [
        ("STRING_CONTAINS", "[.*foo.*]"),
        ("STRING_STARTSWITH", "[^foo.*]"),
        ("STRING_ENDSWITH", "[.*foo$]"),
    ])
    def test_text_patterns(self, token, wire):
        definition = lookup_by_token(token)
        assert definition.encode_value("foo") == wire
        assert definition.decode_value(wire) == "foo"
        assert definition.call_name == MATCHES


class TestMatchVariants:
    """测试 MATCHES 的实际运算符判定"""

    @pytest.mark.parametrize("value,token", [
        ("[.*foo.*]", "STRING_CONTAINS"),
        ("[^foo.*]", "STRING_STARTSWITH"),
        ("[.*foo$]", "STRING_ENDSWITH"),
        ("foo", "MATCH"),
        ("[name]", "MATCH"),
    ])
    def test_resolve(self, value, token):
        assert resolve_match_variant(value) == token

    def test_contains_wins_over_ends_with(self):
        # 同时满足多个模式时按固定顺序取第一个
        assert resolve_match_variant("[.*a.*]$]") == "STRING_CONTAINS"


class TestCallName:
    """测试编码时的函数名"""

    def test_plain_token(self):
        assert call_name_for(lookup_by_token("GTE")) == "GTE"

    def test_legacy_string_tokens(self):
        for token in ("STRING_EQUALS", "STRING_NOTCONTAINS", "STRING_LENGTH_LT", "STRING_LENGTH_GT"):
            assert call_name_for(lookup_by_token(token)) == MATCHES
            assert call_name_for(lookup_by_token(token), legacy_string_tokens=False) == token

    def test_text_pattern_flag(self):
        patterns = {c.token for c in COMPARATORS if c.is_text_pattern}
        assert patterns == {"STRING_CONTAINS", "STRING_STARTSWITH", "STRING_ENDSWITH"}

    def test_patterns_always_matches(self):
        definition = lookup_by_token("STRING_STARTSWITH")
        assert call_name_for(definition, legacy_string_tokens=False) == MATCHES
