"""Compiles an introspected schema into a registry of native type descriptors.

Schemas are graphs, not trees: ``Person.friend`` may point back at
``Person``, and ``A -> B -> A`` chains are common. Compilation therefore
runs in two passes:

1. Stub pass: every schema type name is reserved in discovery order
   before any field is looked at.
2. Fill pass: each reserved type gets its body. Field types are resolved
   to a ``FieldType`` (innermost type name plus List/NonNull modifiers)
   and checked against the reserved names, so a reference to a type
   still being built never triggers another compilation.

Compiled types refer to each other by name only; ``TypeRegistry.resolve``
turns a ``FieldType`` back into the one ``CompiledType`` for that name.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping

from .errors import CompilationError
from .ir import (
    IRArgument,
    IREnum,
    IRField,
    IRInputObject,
    IRInterface,
    IRNamedRef,
    IRNamedType,
    IRNonNull,
    IRObject,
    IRSchema,
    IRTypeRef,
    IRUnion,
    TypeKind,
)
from .scalars import BUILTIN_SCALARS

logger = logging.getLogger(__name__)


class Modifier(str, Enum):
    """A wrapping modifier around a named type."""
    LIST = "LIST"
    NON_NULL = "NON_NULL"


@dataclass(frozen=True)
class FieldType:
    """Resolved type of a field or argument.

    ``modifiers`` are listed outermost first, so ``[Person!]!`` is
    ``FieldType("Person", (NON_NULL, LIST, NON_NULL))``.
    """
    type_name: str
    modifiers: tuple[Modifier, ...] = ()

    @property
    def is_optional(self) -> bool:
        """True if the outermost value may be null."""
        return not self.modifiers or self.modifiers[0] is not Modifier.NON_NULL

    @property
    def is_list(self) -> bool:
        return Modifier.LIST in self.modifiers

    def __str__(self) -> str:
        rendered = self.type_name
        for modifier in reversed(self.modifiers):
            rendered = f"[{rendered}]" if modifier is Modifier.LIST else f"{rendered}!"
        return rendered


@dataclass(frozen=True)
class CompiledField:
    """A field (or argument / input field) of a compiled type."""
    name: str
    type: FieldType
    description: str | None = None
    arguments: tuple["CompiledField", ...] = ()
    default_value: str | None = None
    is_deprecated: bool = False


@dataclass(frozen=True, eq=False)
class CompiledType:
    """Native counterpart of one named schema type.

    Compared by identity: a registry holds exactly one instance per name.
    """
    name: str
    kind: TypeKind
    description: str | None = None
    fields: tuple[CompiledField, ...] = ()
    interfaces: tuple[str, ...] = ()
    members: tuple[str, ...] = ()
    values: tuple[str, ...] = ()
    python_type: type | None = None  # Set for known (native) scalars only

    @property
    def is_builtin(self) -> bool:
        return self.python_type is not None

    def field(self, name: str) -> CompiledField:
        """Look up a field by name."""
        for compiled_field in self.fields:
            if compiled_field.name == name:
                return compiled_field
        raise KeyError(f"{self.name} has no field {name!r}")

    @property
    def shape(self) -> tuple[tuple[str, str], ...]:
        """``(field name, GraphQL type string)`` pairs, for comparisons."""
        return tuple((f.name, str(f.type)) for f in self.fields)


class TypeRegistry(Mapping[str, CompiledType]):
    """Read-only mapping from type name to its CompiledType."""

    def __init__(
        self,
        types: Mapping[str, CompiledType],
        *,
        query_type: str | None = None,
        mutation_type: str | None = None,
        subscription_type: str | None = None,
    ):
        self._types = MappingProxyType(dict(types))
        self.query_type = query_type
        self.mutation_type = mutation_type
        self.subscription_type = subscription_type

    def __getitem__(self, name: str) -> CompiledType:
        return self._types[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        return f"TypeRegistry({len(self._types)} types)"

    def resolve(self, field_type: FieldType) -> CompiledType:
        """Return the CompiledType a field's innermost named type refers to."""
        return self._types[field_type.type_name]

    def generated(self) -> list[CompiledType]:
        """Schema-derived types, in discovery order (built-ins excluded)."""
        return [t for t in self._types.values() if not t.is_builtin]

    def by_kind(self, kind: TypeKind) -> list[CompiledType]:
        return [t for t in self.generated() if t.kind is kind]

    def shape(self) -> dict[str, tuple[tuple[str, str], ...]]:
        """Name to field shape for every type, handy for equality checks."""
        return {name: compiled.shape for name, compiled in self._types.items()}


def field_type_of(ref: IRTypeRef) -> FieldType:
    """Unwrap List/NonNull around the innermost named type."""
    modifiers = []
    while not isinstance(ref, IRNamedRef):
        modifiers.append(Modifier.NON_NULL if isinstance(ref, IRNonNull) else Modifier.LIST)
        ref = ref.of_type
    return FieldType(ref.name, tuple(modifiers))


class TypeCompiler:
    """Compiles an IRSchema into a TypeRegistry.

    Example:
        registry = TypeCompiler().compile(schema)
        person = registry["Person"]
        friend = registry.resolve(person.field("friend").type)
        assert friend is person
    """

    def __init__(
        self,
        known_types: Mapping[str, type] = BUILTIN_SCALARS,
        *,
        include_meta_types: bool = False,
    ):
        """Initialize the compiler.

        Args:
            known_types: Scalar name to native Python type; these seed the
                registry and are never regenerated from the schema
            include_meta_types: Also compile the ``__Schema``/``__Type``
                introspection types
        """
        self.known_types = known_types
        self.include_meta_types = include_meta_types

    def compile(self, schema: IRSchema) -> TypeRegistry:
        """Compile every named type of ``schema`` exactly once."""
        compiled: dict[str, CompiledType] = {
            name: CompiledType(name=name, kind=TypeKind.SCALAR, python_type=py_type)
            for name, py_type in self.known_types.items()
        }

        # Stub pass: reserve names before looking at any field
        reserved: dict[str, IRNamedType] = {}
        for ir_type in schema.types:
            if ir_type.name in compiled or ir_type.name in reserved:
                continue
            if ir_type.name.startswith("__") and not self.include_meta_types:
                continue
            reserved[ir_type.name] = ir_type

        # Fill pass
        known = compiled.keys() | reserved.keys()
        for name, ir_type in reserved.items():
            compiled[name] = self._fill(ir_type, known)

        for op, root in schema.root_types.items():
            if root not in compiled:
                raise CompilationError(f"Root {op} type {root!r} is not defined in the schema")

        logger.info(
            "Compiled %d schema types (%d known types)",
            len(reserved),
            len(self.known_types),
        )
        return TypeRegistry(
            compiled,
            query_type=schema.query_type,
            mutation_type=schema.mutation_type,
            subscription_type=schema.subscription_type,
        )

    def _fill(self, ir_type: IRNamedType, known: set[str]) -> CompiledType:
        """Build the body of one reserved type."""
        if isinstance(ir_type, (IRObject, IRInterface)):
            fields = tuple(self._compile_field(ir_type.name, f, known) for f in ir_type.fields)
            if isinstance(ir_type, IRObject):
                related = ir_type.interfaces
            else:
                related = ir_type.possible_types
            self._check_names(ir_type.name, related, known)
            return CompiledType(
                name=ir_type.name,
                kind=ir_type.kind,
                description=ir_type.description,
                fields=fields,
                interfaces=tuple(ir_type.interfaces) if isinstance(ir_type, IRObject) else (),
                members=tuple(related) if isinstance(ir_type, IRInterface) else (),
            )
        if isinstance(ir_type, IRInputObject):
            return CompiledType(
                name=ir_type.name,
                kind=ir_type.kind,
                description=ir_type.description,
                fields=tuple(self._compile_input(ir_type.name, f, known) for f in ir_type.fields),
            )
        if isinstance(ir_type, IRUnion):
            self._check_names(ir_type.name, ir_type.members, known)
            return CompiledType(
                name=ir_type.name,
                kind=ir_type.kind,
                description=ir_type.description,
                members=tuple(ir_type.members),
            )
        if isinstance(ir_type, IREnum):
            return CompiledType(
                name=ir_type.name,
                kind=ir_type.kind,
                description=ir_type.description,
                values=tuple(v.name for v in ir_type.values),
            )
        # Custom scalar: no native type, values stay untyped
        return CompiledType(name=ir_type.name, kind=ir_type.kind, description=ir_type.description)

    def _compile_field(self, owner: str, ir_field: IRField, known: set[str]) -> CompiledField:
        return CompiledField(
            name=ir_field.name,
            type=self._resolve(owner, ir_field.name, ir_field.type, known),
            description=ir_field.description,
            arguments=tuple(
                self._compile_input(f"{owner}.{ir_field.name}", a, known)
                for a in ir_field.arguments
            ),
            is_deprecated=ir_field.is_deprecated,
        )

    def _compile_input(self, owner: str, argument: IRArgument, known: set[str]) -> CompiledField:
        return CompiledField(
            name=argument.name,
            type=self._resolve(owner, argument.name, argument.type, known),
            description=argument.description,
            default_value=argument.default_value,
        )

    @staticmethod
    def _resolve(owner: str, name: str, ref: IRTypeRef, known: set[str]) -> FieldType:
        field_type = field_type_of(ref)
        if field_type.type_name not in known:
            raise CompilationError(
                f"{owner}.{name} references unknown type {field_type.type_name!r}"
            )
        return field_type

    @staticmethod
    def _check_names(owner: str, names: list[str], known: set[str]) -> None:
        missing = [n for n in names if n not in known]
        if missing:
            raise CompilationError(f"{owner} references unknown types: {', '.join(missing)}")


def compile_schema(
    schema: IRSchema, known_types: Mapping[str, type] = BUILTIN_SCALARS
) -> TypeRegistry:
    """Shortcut for ``TypeCompiler(known_types).compile(schema)``."""
    return TypeCompiler(known_types).compile(schema)
