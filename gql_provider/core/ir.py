"""Intermediate Representation (IR) for introspected GraphQL schemas.

This module defines dataclasses that mirror the type nodes a GraphQL
service reports about itself through introspection. Named types carry a
unique name; List and NonNull wrappers only point at the type they wrap.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class TypeKind(str, Enum):
    """The ``__TypeKind`` values of the introspection system."""
    SCALAR = "SCALAR"
    OBJECT = "OBJECT"
    INTERFACE = "INTERFACE"
    UNION = "UNION"
    ENUM = "ENUM"
    INPUT_OBJECT = "INPUT_OBJECT"
    LIST = "LIST"
    NON_NULL = "NON_NULL"


@dataclass(frozen=True)
class IRNamedRef:
    """Reference to a named type from a field, argument or wrapper."""
    name: str


@dataclass(frozen=True)
class IRList:
    """List wrapper ([T])."""
    of_type: "IRTypeRef"


@dataclass(frozen=True)
class IRNonNull:
    """NonNull wrapper (T!)."""
    of_type: "IRTypeRef"


IRTypeRef = Union[IRNamedRef, IRList, IRNonNull]


def named_type(ref: IRTypeRef) -> str:
    """Return the name of the innermost named type of a reference."""
    while not isinstance(ref, IRNamedRef):
        ref = ref.of_type
    return ref.name


@dataclass
class IRArgument:
    """Represents a field argument or an input object field."""
    name: str
    type: IRTypeRef
    default_value: str | None = None  # GraphQL literal, as reported
    description: str | None = None


@dataclass
class IRField:
    """Represents a field of an object or interface type."""
    name: str
    type: IRTypeRef
    description: str | None = None
    arguments: list[IRArgument] = field(default_factory=list)
    is_deprecated: bool = False
    deprecation_reason: str | None = None


@dataclass
class IREnumValue:
    """Represents a single value in a GraphQL enum."""
    name: str
    description: str | None = None
    is_deprecated: bool = False
    deprecation_reason: str | None = None


@dataclass
class IRScalar:
    """Represents a GraphQL scalar type."""
    name: str
    description: str | None = None
    kind = TypeKind.SCALAR


@dataclass
class IRObject:
    """Represents a GraphQL object type."""
    name: str
    fields: list[IRField] = field(default_factory=list)
    interfaces: list[str] = field(default_factory=list)
    description: str | None = None
    kind = TypeKind.OBJECT


@dataclass
class IRInterface:
    """Represents a GraphQL interface type."""
    name: str
    fields: list[IRField] = field(default_factory=list)
    possible_types: list[str] = field(default_factory=list)
    description: str | None = None
    kind = TypeKind.INTERFACE


@dataclass
class IRUnion:
    """Represents a GraphQL union type."""
    name: str
    members: list[str] = field(default_factory=list)
    description: str | None = None
    kind = TypeKind.UNION


@dataclass
class IREnum:
    """Represents a GraphQL enum type."""
    name: str
    values: list[IREnumValue] = field(default_factory=list)
    description: str | None = None
    kind = TypeKind.ENUM


@dataclass
class IRInputObject:
    """Represents a GraphQL input object type."""
    name: str
    fields: list[IRArgument] = field(default_factory=list)
    description: str | None = None
    kind = TypeKind.INPUT_OBJECT


IRNamedType = Union[IRScalar, IRObject, IRInterface, IRUnion, IREnum, IRInputObject]


@dataclass
class IRSchema:
    """Complete intermediate representation of an introspected schema.

    ``types`` keeps the order in which the service listed its types;
    compilation walks them in that order.
    """
    types: list[IRNamedType] = field(default_factory=list)
    query_type: str | None = None
    mutation_type: str | None = None
    subscription_type: str | None = None

    def get_type_by_name(self, name: str) -> IRNamedType | None:
        """Look up a named type."""
        for ir_type in self.types:
            if ir_type.name == name:
                return ir_type
        return None

    @property
    def type_names(self) -> list[str]:
        return [t.name for t in self.types]

    @property
    def root_types(self) -> dict[str, str]:
        """Return the root operation type names keyed by operation."""
        roots = {
            "query": self.query_type,
            "mutation": self.mutation_type,
            "subscription": self.subscription_type,
        }
        return {op: name for op, name in roots.items() if name}
