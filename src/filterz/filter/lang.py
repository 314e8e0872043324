"""Single condition grammar using pyparsing.

A condition on the wire is a call of the form ``TOKEN([field], value)``::

    GT([StartTime], 1582142365)
    LTE([StartTime], [EndTime])
    MATCHES([name], [^firstName.*])
"""

import re
from typing import Optional, Union

from loguru import logger
from pyparsing import (
    Combine,
    Literal,
    ParserElement,
    Regex,
    Suppress,
    Word,
    alphanums,
)

from .comparators import (
    MATCHES,
    call_name_for,
    lookup_by_label,
    lookup_by_token,
    resolve_match_variant,
)
from .errors import MalformedConditionError
from .model import Condition


_COMBINER_RE = re.compile(r"\s(AND|OR)\s")


def create_parser() -> ParserElement:
    """Create the ``TOKEN([field], value)`` grammar."""
    token = Word(alphanums + "_")("token")
    field_ref = Combine(Literal("[") + Word(alphanums + "_") + Literal("]"))("field")
    # 贪婪匹配到最后一个右括号之前
    value = Regex(r".+(?=\))")("query")

    condition = (
        token
        + Suppress("(")
        + field_ref
        + Suppress(Regex(r",\s"))
        + value
        + Suppress(")")
    )
    return condition.leave_whitespace().parse_with_tabs()


# Create a global parser instance
_parser = create_parser()


def match_condition(text: str) -> Optional[tuple[str, str, str]]:
    """Find the first ``TOKEN([field], value)`` call in ``text``.

    Returns:
        ``(token, field, value)`` or None if nothing matches
    """
    for tokens, _start, _end in _parser.scan_string(text, max_matches=1):
        return tokens["token"], tokens["field"], tokens["query"]
    return None


def decode_condition(text: str) -> Optional[Condition]:
    """Decode one wire call into a Condition.

    Returns None when ``text`` is not a single condition. A ``MATCHES`` call
    is mapped back to contains / starts-with / ends-with / plain match by
    looking at the value pattern.

    Raises:
        UnknownComparatorError: If the call token is not registered
    """
    match = match_condition(text)
    if match is None:
        logger.debug(f"Not a condition: {text!r}")
        return None

    token, field_ref, query = match
    if token == MATCHES:
        token = resolve_match_variant(query)

    definition = lookup_by_token(token)
    return Condition(
        field=field_ref,
        option=definition.label,
        query=definition.decode_value(query),
    )


def parse_condition(text: str) -> Condition:
    """Like ``decode_condition`` but raises on malformed input.

    Raises:
        MalformedConditionError: If ``text`` is not a single condition
    """
    condition = decode_condition(text)
    if condition is None:
        raise MalformedConditionError(text)
    return condition


def encode_condition(
    condition: Union[Condition, dict],
    legacy_string_tokens: bool = True,
) -> str:
    """Encode a Condition as ``NAME(field, value)``.

    Raises:
        UnknownComparatorError: If the condition's option label is not registered
    """
    if condition is None:
        raise MalformedConditionError("None")
    if isinstance(condition, dict):
        condition = Condition.from_dict(condition)

    definition = lookup_by_label(condition.option)
    name = call_name_for(definition, legacy_string_tokens)
    if name != definition.call_name:
        logger.warning(
            f"{definition.token} is sent as {name}; it will decode as a different comparator"
        )
    return f"{name}({condition.field}, {definition.encode_value(condition.query)})"


def detect_combination_mode(text: str) -> Optional[str]:
    """Return the first standalone ``AND``/``OR`` in ``text``, or None."""
    match = _COMBINER_RE.search(text)
    return match.group(1) if match else None


__all__ = [
    "create_parser",
    "match_condition",
    "decode_condition",
    "parse_condition",
    "encode_condition",
    "detect_combination_mode",
]
