"""Value types exchanged with callers of the codec."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional


class InclusionType:
    """How the conditions of a filter set are combined."""
    AND = "AND"
    OR = "OR"

    ALL = (AND, OR)


@dataclass(frozen=True)
class Condition:
    """One field/comparator/value condition.

    ``option`` is the comparator label (e.g. "Greater than"), ``query`` the raw
    value as the user typed it.
    """
    field: str
    option: str
    query: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "option": self.option, "query": self.query}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Condition":
        return cls(field=data["field"], option=data["option"], query=str(data["query"]))


@dataclass(frozen=True)
class FilterSet:
    """A complete filter query: conditions plus how they combine."""
    inclusion_type: Optional[str] = InclusionType.AND
    includes_absent_field_names: bool = False
    # 解码失败的条件以 None 保留
    filters: tuple[Optional[Condition], ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.filters, tuple):
            object.__setattr__(self, "filters", tuple(self.filters))

    @property
    def is_empty(self) -> bool:
        return not self.filters

    @property
    def malformed_count(self) -> int:
        return sum(1 for f in self.filters if f is None)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase JSON shape used by the API consumers."""
        return {
            "inclusionType": self.inclusion_type,
            "includesAbsentFieldNames": self.includes_absent_field_names,
            "filters": [f.to_dict() if f is not None else None for f in self.filters],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FilterSet":
        """Build a FilterSet from its JSON shape.

        Both the camelCase keys produced by ``to_dict`` and snake_case keys
        are accepted.
        """
        inclusion_type = _pick(data, "inclusionType", "inclusion_type", InclusionType.AND)
        absent = _pick(data, "includesAbsentFieldNames", "includes_absent_field_names", False)
        filters: Iterable = data.get("filters") or []
        return cls(
            inclusion_type=inclusion_type.upper() if isinstance(inclusion_type, str) else inclusion_type,
            includes_absent_field_names=bool(absent),
            filters=tuple(Condition.from_dict(f) if f is not None else None for f in filters),
        )


def _pick(data: Dict[str, Any], camel: str, snake: str, default: Any) -> Any:
    if camel in data:
        return data[camel]
    return data.get(snake, default)


__all__ = ["InclusionType", "Condition", "FilterSet"]
