"""Guard clauses wrapped around the joined conditions.

Two wrappers exist on the wire:

* the sentinel ``(<conditions>) ?: false``, so the remote evaluator gets a
  literal ``false`` instead of an error when the inner expression is undefined;
* the absent-field guard ``(IS_NULL([a]) AND IS_NULL([b])) OR (<sentinel>)``,
  which also lets through records where the filtered fields are missing.
"""

from typing import Iterable, Union

from .comparators import IS_NULL
from .model import Condition
from .parens import text_inside_parentheses


SENTINEL_SUFFIX = ") ?: false"
GUARD_SEPARATOR = " OR "


def wrap_with_sentinel(text: str) -> str:
    return f"({text}{SENTINEL_SUFFIX}"


def strip_sentinel(text: str) -> str:
    """Recover ``<inner>`` from ``(<inner>) ?: false``.

    Surrounding whitespace is ignored. Text without that shape is returned
    trimmed but otherwise unchanged. The inner text must not itself contain
    ``) ?: false``; condition values never do.
    """
    text = text.strip()
    if text.startswith("(") and text.endswith(SENTINEL_SUFFIX):
        return text[1:-len(SENTINEL_SUFFIX)]
    return text


def includes_absent_field_names(text: str) -> bool:
    return IS_NULL in text


def wrap_with_null_checks(text: str, filters: Iterable[Union[Condition, dict]]) -> str:
    """Prepend the ``IS_NULL`` guard for every filtered field.

    The guard is always AND-joined, whatever the main expression uses.
    """
    fields = [f.field if isinstance(f, Condition) else f["field"] for f in filters]
    null_checks = " AND ".join(f"{IS_NULL}({name})" for name in fields)
    return f"({null_checks}){GUARD_SEPARATOR}({text})"


def strip_null_checks(text: str) -> str:
    """Remove the ``IS_NULL`` guard and return the sentinel-wrapped body.

    The guard must be the first top-level disjunct. Only the first
    ``" OR "`` is split on, so an OR-combined body stays intact.
    """
    _guard, _, rest = text.strip().partition(GUARD_SEPARATOR)
    return text_inside_parentheses(rest)


__all__ = [
    "SENTINEL_SUFFIX",
    "wrap_with_sentinel",
    "strip_sentinel",
    "includes_absent_field_names",
    "wrap_with_null_checks",
    "strip_null_checks",
]
