"""Structured values for GraphQL responses.

Response bodies are mapped into a closed set of value classes
(``NullValue``, ``ScalarValue``, ``ListValue``, ``ObjectValue``) so the
caller can match on them exhaustively instead of poking at raw dicts.
Mapping is purely structural: no schema lookups and no scalar coercion.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Union

Primitive = Union[str, int, float, bool]


@dataclass(frozen=True)
class NullValue:
    """JSON ``null``."""

    def to_python(self) -> None:
        return None


@dataclass(frozen=True)
class ScalarValue:
    """A JSON string, number or boolean, exactly as decoded."""
    value: Primitive

    def to_python(self) -> Primitive:
        return self.value


@dataclass(frozen=True)
class ListValue:
    """A JSON array."""
    items: tuple[Value, ...] = ()

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True)
class ObjectValue:
    """A JSON object; ``entries`` keeps the source property order."""
    entries: tuple[tuple[str, Value], ...] = ()

    def __getitem__(self, key: str) -> Value:
        for name, value in self.entries:
            if name == key:
                return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return any(name == key for name, _ in self.entries)

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, key: str, default: Value | None = None) -> Value | None:
        try:
            return self[key]
        except KeyError:
            return default

    def keys(self) -> list[str]:
        return [name for name, _ in self.entries]

    def items(self) -> tuple[tuple[str, Value], ...]:
        return self.entries

    def to_python(self) -> dict[str, Any]:
        return {name: value.to_python() for name, value in self.entries}


Value = Union[NullValue, ScalarValue, ListValue, ObjectValue]


def to_value(document: Any) -> Value:
    """Map a decoded JSON document to a ``Value``.

    Raises:
        TypeError: If ``document`` holds something JSON cannot express
    """
    if document is None:
        return NullValue()
    if isinstance(document, dict):
        return ObjectValue(tuple((str(k), to_value(v)) for k, v in document.items()))
    if isinstance(document, (list, tuple)):
        return ListValue(tuple(to_value(item) for item in document))
    if isinstance(document, (str, int, float, bool)):
        return ScalarValue(document)
    raise TypeError(f"Cannot map {type(document).__name__} to a GraphQL value")


def to_python(value: Value) -> Any:
    """Convert a ``Value`` back into plain dicts, lists and primitives."""
    return value.to_python()
