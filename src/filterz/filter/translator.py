"""
Filter set <-> wire expression translation

使用示例:
    fs = decode_filter_set("(GT([StartTime], 1582142365)) ?: false")
    fs.filters[0].option   # "Greater than"

    encode_filter_set({
        "inclusionType": "AND",
        "includesAbsentFieldNames": True,
        "filters": [{"field": "[name]", "option": "Text contains", "query": "foo"}],
    })
    # "(IS_NULL([name])) OR ((MATCHES([name], [.*foo.*])) ?: false)"
"""

from typing import Any, Dict, Optional, Union

from loguru import logger

from .errors import FilterCodecError, MalformedConditionError
from .lang import decode_condition, detect_combination_mode, encode_condition
from .model import FilterSet, InclusionType
from .wrappers import (
    includes_absent_field_names,
    strip_null_checks,
    strip_sentinel,
    wrap_with_null_checks,
    wrap_with_sentinel,
)


def decode_filter_set(text: Optional[str], strict: bool = False) -> FilterSet:
    """
    将 API 返回的过滤字符串解析为 FilterSet

    Args:
        text: Wire expression, or None when the API has no filter
        strict: Raise on malformed segments instead of keeping None entries

    Returns:
        FilterSet. Segments that are not a valid condition show up as None
        in ``filters`` unless ``strict`` is set.

    Raises:
        MalformedConditionError: strict mode, a segment is not a condition
        UnknownComparatorError: a call token is not registered
    """
    # 去除首尾空白，例如末尾换行
    text = (text or "").strip()
    if not text:
        return FilterSet(InclusionType.AND, False, ())

    absent = includes_absent_field_names(text)
    body = strip_null_checks(text) if absent else text
    body = strip_sentinel(body)

    inclusion_type = detect_combination_mode(body) or InclusionType.AND
    segments = [s for s in body.split(f" {inclusion_type} ") if s]

    filters = []
    for segment in segments:
        condition = decode_condition(segment)
        if condition is None:
            if strict:
                raise MalformedConditionError(segment)
            logger.warning(f"Keeping malformed segment as None: {segment!r}")
        filters.append(condition)

    logger.debug(
        f"Decoded {len(filters)} condition(s), inclusion={inclusion_type}, absent={absent}"
    )
    return FilterSet(inclusion_type, absent, tuple(filters))


def encode_filter_set(
    filter_set: Union[FilterSet, Dict[str, Any]],
    legacy_string_tokens: bool = True,
) -> Optional[str]:
    """
    将 FilterSet 转换为 API 需要的过滤字符串

    Args:
        filter_set: FilterSet or its dict form
        legacy_string_tokens: Send every ``STRING_*`` comparator as ``MATCHES``
            like the deployed API expects

    Returns:
        Wire expression, or None for an empty filter set (the API expects
        null rather than an empty string)

    Raises:
        UnknownComparatorError: a condition option label is not registered
    """
    if isinstance(filter_set, dict):
        filter_set = FilterSet.from_dict(filter_set)

    # 无组合方式时按 AND 处理
    inclusion_type = filter_set.inclusion_type or InclusionType.AND
    text = f" {inclusion_type} ".join(
        encode_condition(condition, legacy_string_tokens)
        for condition in filter_set.filters
    )
    if not text:
        return None

    text = wrap_with_sentinel(text)
    if filter_set.includes_absent_field_names:
        text = wrap_with_null_checks(text, filter_set.filters)
    return text


# ============ 表达式验证 ============

def validate_expression(text: Optional[str]) -> Dict[str, Any]:
    """
    验证过滤字符串

    Returns:
        {
            "valid": bool,
            "error": str | None,
            "normalized": Dict | None  # FilterSet 的 JSON 形式
        }
    """
    result = {
        "valid": False,
        "error": None,
        "normalized": None,
    }

    try:
        filter_set = decode_filter_set(text, strict=True)
    except FilterCodecError as e:
        result["error"] = str(e)
        return result

    result["normalized"] = filter_set.to_dict()
    result["valid"] = True
    return result


__all__ = [
    "decode_filter_set",
    "encode_filter_set",
    "validate_expression",
]
