"""Filter module for filterz - translates filter sets to and from wire expressions."""

from .comparators import (
    COMPARATORS,
    ComparatorDefinition,
    label_to_token,
    list_comparators,
    lookup_by_label,
    lookup_by_token,
    token_to_label,
)
from .errors import (
    FilterCodecError,
    MalformedConditionError,
    UnbalancedParenthesesError,
    UnknownComparatorError,
)
from .lang import decode_condition, detect_combination_mode, encode_condition, parse_condition
from .model import Condition, FilterSet, InclusionType
from .parens import text_inside_parentheses
from .translator import decode_filter_set, encode_filter_set, validate_expression

__all__ = [
    # 比较运算符
    "COMPARATORS",
    "ComparatorDefinition",
    "lookup_by_token",
    "lookup_by_label",
    "token_to_label",
    "label_to_token",
    "list_comparators",
    # 数据模型
    "Condition",
    "FilterSet",
    "InclusionType",
    # 编解码
    "decode_condition",
    "parse_condition",
    "encode_condition",
    "detect_combination_mode",
    "text_inside_parentheses",
    "decode_filter_set",
    "encode_filter_set",
    "validate_expression",
    # 异常
    "FilterCodecError",
    "MalformedConditionError",
    "UnknownComparatorError",
    "UnbalancedParenthesesError",
]
