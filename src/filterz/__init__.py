"""filterz - translate filter sets to and from the wire expressions of a remote filtering API.

Conditions such as "[StartTime] greater than 1582142365" travel as compact
calls like ``(GT([StartTime], 1582142365)) ?: false``.
"""

__version__ = "0.1.0"
__author__ = "filterz contributors"

from loguru import logger

from .filter import (
    Condition,
    FilterSet,
    InclusionType,
    decode_condition,
    decode_filter_set,
    detect_combination_mode,
    encode_condition,
    encode_filter_set,
    validate_expression,
)

# 作为库使用时默认静默，CLI 中通过 setup_logger 开启
logger.disable("filterz")

__all__ = [
    "Condition",
    "FilterSet",
    "InclusionType",
    "decode_condition",
    "decode_filter_set",
    "detect_combination_mode",
    "encode_condition",
    "encode_filter_set",
    "validate_expression",
]
