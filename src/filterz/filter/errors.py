"""Exceptions raised by the filter expression codec."""


class FilterCodecError(ValueError):
    """Base class for all filterz codec errors."""


class MalformedConditionError(FilterCodecError):
    """A segment does not have the ``TOKEN([field], value)`` shape."""

    def __init__(self, segment: str):
        super().__init__(f"Malformed condition: {segment!r}")
        self.segment = segment


class UnknownComparatorError(FilterCodecError, LookupError):
    """A comparator token or label has no registry entry."""

    def __init__(self, key: str, kind: str = "token"):
        super().__init__(f"Unknown comparator {kind}: {key!r}")
        self.key = key
        self.kind = kind


class UnbalancedParenthesesError(FilterCodecError):
    """Text handed to the parenthesis extractor is not a complete group."""
