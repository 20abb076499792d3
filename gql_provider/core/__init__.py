"""Core modules: schema fetching, type compilation and query execution."""

from .auth import ApiKeyAuth, Auth, BearerAuth, HeaderAuth, NoAuth
from .compiler import (
    CompiledField,
    CompiledType,
    FieldType,
    Modifier,
    TypeCompiler,
    TypeRegistry,
    compile_schema,
)
from .errors import (
    CompilationError,
    GraphQLProviderError,
    ProtocolError,
    TransportError,
)
from .executor import (
    ErrorDetail,
    Failure,
    QueryExecutor,
    QueryResult,
    Success,
    result_from_response,
)
from .generator import CodeGenerator
from .introspection import INTROSPECTION_QUERY, SchemaFetcher, parse_introspection_response
from .ir import (
    IRArgument,
    IREnum,
    IREnumValue,
    IRField,
    IRInputObject,
    IRInterface,
    IRList,
    IRNamedRef,
    IRNonNull,
    IRObject,
    IRScalar,
    IRSchema,
    IRUnion,
    TypeKind,
)
from .provider import GraphQLProvider
from .scalars import BUILTIN_SCALARS, extend_known_types
from .validator import BoundQuery, QueryValidator
from .values import (
    ListValue,
    NullValue,
    ObjectValue,
    ScalarValue,
    Value,
    to_python,
    to_value,
)

__all__ = [
    # Auth
    "Auth",
    "ApiKeyAuth",
    "BearerAuth",
    "HeaderAuth",
    "NoAuth",
    # Errors
    "GraphQLProviderError",
    "TransportError",
    "ProtocolError",
    "CompilationError",
    # IR types
    "IRArgument",
    "IREnum",
    "IREnumValue",
    "IRField",
    "IRInputObject",
    "IRInterface",
    "IRList",
    "IRNamedRef",
    "IRNonNull",
    "IRObject",
    "IRScalar",
    "IRSchema",
    "IRUnion",
    "TypeKind",
    # Schema fetching
    "INTROSPECTION_QUERY",
    "SchemaFetcher",
    "parse_introspection_response",
    # Compiler
    "BUILTIN_SCALARS",
    "extend_known_types",
    "CompiledField",
    "CompiledType",
    "FieldType",
    "Modifier",
    "TypeCompiler",
    "TypeRegistry",
    "compile_schema",
    # Values
    "Value",
    "NullValue",
    "ScalarValue",
    "ListValue",
    "ObjectValue",
    "to_value",
    "to_python",
    # Execution
    "ErrorDetail",
    "Success",
    "Failure",
    "QueryResult",
    "QueryExecutor",
    "result_from_response",
    # Validation
    "BoundQuery",
    "QueryValidator",
    # Provider
    "GraphQLProvider",
    # Code generation
    "CodeGenerator",
]
