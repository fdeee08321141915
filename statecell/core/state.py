"""
State snapshot model.

State is an immutable mapping from field name to value. It is only ever
replaced wholesale; with_fields() builds a new snapshot.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping


def _freeze(values: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(values))


@dataclass(frozen=True)
class State:
    """
    Immutable state snapshot.

    Fields:
        fields: Read-only mapping of field name -> value

    Usage:
        s0 = State.of(count=0)
        s1 = s0.with_fields(count=s0["count"] + 1)
    """
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Copy so callers cannot mutate the snapshot through their own dict
        object.__setattr__(self, "fields", _freeze(self.fields))

    @staticmethod
    def of(**values: Any) -> "State":
        return State(fields=values)

    def get(self, name: str, default: Any = None) -> Any:
        """
        Get field value by name.

        Returns:
            Field value or default if not present
        """
        return self.fields.get(name, default)

    def __getitem__(self, name: str) -> Any:
        return self.fields[name]

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, State):
            return NotImplemented
        return dict(self.fields) == dict(other.fields)

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.fields.items(), key=lambda kv: kv[0])))

    def with_fields(self, **changes: Any) -> "State":
        """
        Create new state with the given fields replaced.

        Since State is immutable, this returns a new State instance.

        Args:
            **changes: Field name -> new value

        Returns:
            New State with changes applied
        """
        merged = dict(self.fields)
        merged.update(changes)
        return State(fields=merged)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.fields)

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v!r}" for k, v in self.fields.items())
        return f"State({inner})"
