"""Comparator registry.

Every comparator the remote API understands is declared once in
``COMPARATORS``. Two read-only indexes are built from that tuple at import
time: one keyed by wire token (``GT``) and one keyed by the label shown to
users ("Greater than").

Three text comparators (contains / starts with / ends with) do not travel
under their own token. They are sent as ``MATCHES`` with a bracketed pattern
as the value, and the pattern tells them apart again on the way back.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Optional

from .errors import UnknownComparatorError


MATCHES = "MATCHES"
IS_NULL = "IS_NULL"

# Prefix shared by every text comparator token
STRING_PREFIX = "STRING_"

ValueCodec = Callable[[str], str]


def _identity(value: str) -> str:
    return value


def _strip(value: str, prefix: str, suffix: str) -> str:
    """Remove a fixed prefix and suffix when present."""
    if value.startswith(prefix):
        value = value[len(prefix):]
    if value.endswith(suffix):
        value = value[:-len(suffix)]
    return value


@dataclass(frozen=True)
class ComparatorDefinition:
    """A single comparator known to the remote API."""

    token: str
    label: str
    encode_value: ValueCodec = field(default=_identity, repr=False, compare=False)
    decode_value: ValueCodec = field(default=_identity, repr=False, compare=False)
    # 编码时使用的函数名；None 表示直接使用 token
    wire_name: Optional[str] = None

    @property
    def call_name(self) -> str:
        """Call name written on the wire when encoding."""
        return self.wire_name or self.token

    @property
    def is_text_pattern(self) -> bool:
        return self.wire_name == MATCHES

    @property
    def is_text_comparator(self) -> bool:
        return STRING_PREFIX in self.token

    def to_dict(self) -> dict:
        return {
            "token": self.token,
            "label": self.label,
            "call_name": self.call_name,
        }


def _pattern(token: str, label: str, prefix: str, suffix: str) -> ComparatorDefinition:
    return ComparatorDefinition(
        token=token,
        label=label,
        encode_value=lambda value: f"{prefix}{value}{suffix}",
        decode_value=lambda value: _strip(value, prefix, suffix),
        wire_name=MATCHES,
    )


COMPARATORS: tuple[ComparatorDefinition, ...] = (
    ComparatorDefinition("LTE", "Less than or equal to"),
    ComparatorDefinition("LT", "Less than"),
    ComparatorDefinition("GT", "Greater than"),
    ComparatorDefinition("GTE", "Greater than or equal to"),
    ComparatorDefinition("EQ", "Is equal to"),
    ComparatorDefinition("NE", "Is not equal to"),
    ComparatorDefinition("MATCH", "Matches"),
    _pattern("STRING_CONTAINS", "Text contains", "[.*", ".*]"),
    ComparatorDefinition("STRING_NOTCONTAINS", "Text does not contain"),
    _pattern("STRING_STARTSWITH", "Text starts with", "[^", ".*]"),
    _pattern("STRING_ENDSWITH", "Text ends with", "[.*", "$]"),
    ComparatorDefinition("STRING_EQUALS", "Text is exactly"),
    ComparatorDefinition("STRING_LENGTH_LT", "Text length is less than"),
    ComparatorDefinition("STRING_LENGTH_GT", "Text length is greater than"),
)


# Order matters: the first pattern that matches a MATCHES value wins.
MATCH_VARIANTS: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"\[\.\*.*\.\*\]"), "STRING_CONTAINS"),
    (re.compile(r"\[\^.*\.\*\]"), "STRING_STARTSWITH"),
    (re.compile(r"\[.*\$\]"), "STRING_ENDSWITH"),
)


class ComparatorRegistry:
    """Read-only lookup tables over a fixed set of comparators."""

    def __init__(self, definitions: Iterable[ComparatorDefinition]):
        by_token: dict[str, ComparatorDefinition] = {}
        by_label: dict[str, ComparatorDefinition] = {}
        for definition in definitions:
            if definition.token in by_token:
                raise ValueError(f"Duplicate comparator token: {definition.token}")
            if definition.label in by_label:
                raise ValueError(f"Duplicate comparator label: {definition.label}")
            by_token[definition.token] = definition
            by_label[definition.label] = definition
        self._by_token: Mapping[str, ComparatorDefinition] = MappingProxyType(by_token)
        self._by_label: Mapping[str, ComparatorDefinition] = MappingProxyType(by_label)

    @property
    def by_token(self) -> Mapping[str, ComparatorDefinition]:
        return self._by_token

    @property
    def by_label(self) -> Mapping[str, ComparatorDefinition]:
        return self._by_label

    def __iter__(self):
        return iter(self._by_token.values())

    def __len__(self) -> int:
        return len(self._by_token)

    def lookup_by_token(self, token: str) -> ComparatorDefinition:
        try:
            return self._by_token[token]
        except KeyError:
            raise UnknownComparatorError(token, "token") from None

    def lookup_by_label(self, label: str) -> ComparatorDefinition:
        try:
            return self._by_label[label]
        except KeyError:
            raise UnknownComparatorError(label, "label") from None


REGISTRY = ComparatorRegistry(COMPARATORS)


def lookup_by_token(token: str) -> ComparatorDefinition:
    """Return the comparator registered under a wire token.

    Raises:
        UnknownComparatorError: If the token is not registered
    """
    return REGISTRY.lookup_by_token(token)


def lookup_by_label(label: str) -> ComparatorDefinition:
    """Return the comparator registered under a human-readable label.

    Raises:
        UnknownComparatorError: If the label is not registered
    """
    return REGISTRY.lookup_by_label(label)


def token_to_label(token: str) -> str:
    return lookup_by_token(token).label


def label_to_token(label: str) -> str:
    return lookup_by_label(label).token


def resolve_match_variant(value: str) -> str:
    """Pick the comparator token hidden behind a ``MATCHES`` call.

    Contains, starts-with and ends-with are recognised from the bracket
    pattern of the value; anything else is a plain ``MATCH``.
    """
    for pattern, token in MATCH_VARIANTS:
        if pattern.search(value):
            return token
    return "MATCH"


def call_name_for(definition: ComparatorDefinition, legacy_string_tokens: bool = True) -> str:
    """Call name used when encoding ``definition``.

    The deployed API expects every ``STRING_*`` comparator to be sent as
    ``MATCHES``. Only contains / starts-with / ends-with can be recovered
    from such a call, so the legacy behaviour is lossy for the others.
    """
    if definition.is_text_pattern:
        return MATCHES
    if legacy_string_tokens and definition.is_text_comparator:
        return MATCHES
    return definition.token


def list_comparators() -> list[dict]:
    """List all registered comparators in declaration order."""
    return [definition.to_dict() for definition in REGISTRY]


__all__ = [
    "MATCHES",
    "IS_NULL",
    "ComparatorDefinition",
    "ComparatorRegistry",
    "COMPARATORS",
    "REGISTRY",
    "lookup_by_token",
    "lookup_by_label",
    "token_to_label",
    "label_to_token",
    "resolve_match_variant",
    "call_name_for",
    "list_comparators",
]
