"""Schema fetching via GraphQL introspection.

Requests the standard introspection query from a live endpoint (or reads
a saved response from disk) and produces an IRSchema.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx
from graphql import get_introspection_query
from pydantic import BaseModel, ConfigDict, Field

from .auth import Auth, NoAuth
from .errors import ProtocolError, TransportError, format_errors
from .ir import (
    IRArgument,
    IREnum,
    IREnumValue,
    IRField,
    IRInputObject,
    IRInterface,
    IRList,
    IRNamedRef,
    IRNamedType,
    IRNonNull,
    IRObject,
    IRScalar,
    IRSchema,
    IRTypeRef,
    IRUnion,
    TypeKind,
)
from .transport import request_json

logger = logging.getLogger(__name__)

INTROSPECTION_QUERY = get_introspection_query(descriptions=True)


# Wire models for the ``__schema`` document. Only what the IR needs is
# declared; everything else is ignored.

class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class WireTypeRef(_WireModel):
    kind: TypeKind
    name: str | None = None
    of_type: WireTypeRef | None = Field(default=None, alias="ofType")


class WireInputValue(_WireModel):
    name: str
    description: str | None = None
    type: WireTypeRef
    default_value: str | None = Field(default=None, alias="defaultValue")


class WireField(_WireModel):
    name: str
    description: str | None = None
    args: list[WireInputValue] = Field(default_factory=list)
    type: WireTypeRef
    is_deprecated: bool = Field(default=False, alias="isDeprecated")
    deprecation_reason: str | None = Field(default=None, alias="deprecationReason")


class WireEnumValue(_WireModel):
    name: str
    description: str | None = None
    is_deprecated: bool = Field(default=False, alias="isDeprecated")
    deprecation_reason: str | None = Field(default=None, alias="deprecationReason")


class WireType(_WireModel):
    kind: TypeKind
    name: str
    description: str | None = None
    fields: list[WireField] | None = None
    input_fields: list[WireInputValue] | None = Field(default=None, alias="inputFields")
    interfaces: list[WireTypeRef] | None = None
    enum_values: list[WireEnumValue] | None = Field(default=None, alias="enumValues")
    possible_types: list[WireTypeRef] | None = Field(default=None, alias="possibleTypes")


class WireRootType(_WireModel):
    name: str


class WireSchema(_WireModel):
    query_type: WireRootType | None = Field(default=None, alias="queryType")
    mutation_type: WireRootType | None = Field(default=None, alias="mutationType")
    subscription_type: WireRootType | None = Field(default=None, alias="subscriptionType")
    types: list[WireType] = Field(default_factory=list)


def _type_ref(ref: WireTypeRef) -> IRTypeRef:
    if ref.kind in (TypeKind.LIST, TypeKind.NON_NULL):
        if ref.of_type is None:
            raise ValueError(f"{ref.kind.value} type reference without ofType")
        inner = _type_ref(ref.of_type)
        return IRList(inner) if ref.kind is TypeKind.LIST else IRNonNull(inner)
    if not ref.name:
        raise ValueError(f"{ref.kind.value} type reference without a name")
    return IRNamedRef(ref.name)


def _argument(value: WireInputValue) -> IRArgument:
    return IRArgument(
        name=value.name,
        type=_type_ref(value.type),
        default_value=value.default_value,
        description=value.description,
    )


def _field(wire: WireField) -> IRField:
    return IRField(
        name=wire.name,
        type=_type_ref(wire.type),
        description=wire.description,
        arguments=[_argument(a) for a in wire.args],
        is_deprecated=wire.is_deprecated,
        deprecation_reason=wire.deprecation_reason,
    )


def _names(refs: list[WireTypeRef] | None) -> list[str]:
    return [r.name for r in refs or [] if r.name]


def _named_type(wire: WireType) -> IRNamedType:
    if wire.kind is TypeKind.SCALAR:
        return IRScalar(name=wire.name, description=wire.description)
    if wire.kind is TypeKind.OBJECT:
        return IRObject(
            name=wire.name,
            fields=[_field(f) for f in wire.fields or []],
            interfaces=_names(wire.interfaces),
            description=wire.description,
        )
    if wire.kind is TypeKind.INTERFACE:
        return IRInterface(
            name=wire.name,
            fields=[_field(f) for f in wire.fields or []],
            possible_types=_names(wire.possible_types),
            description=wire.description,
        )
    if wire.kind is TypeKind.UNION:
        return IRUnion(
            name=wire.name,
            members=_names(wire.possible_types),
            description=wire.description,
        )
    if wire.kind is TypeKind.ENUM:
        return IREnum(
            name=wire.name,
            values=[
                IREnumValue(
                    name=v.name,
                    description=v.description,
                    is_deprecated=v.is_deprecated,
                    deprecation_reason=v.deprecation_reason,
                )
                for v in wire.enum_values or []
            ],
            description=wire.description,
        )
    if wire.kind is TypeKind.INPUT_OBJECT:
        return IRInputObject(
            name=wire.name,
            fields=[_argument(f) for f in wire.input_fields or []],
            description=wire.description,
        )
    raise ValueError(f"Named type {wire.name!r} has wrapping kind {wire.kind.value}")


def schema_from_introspection(schema: dict[str, Any]) -> IRSchema:
    """Convert a ``__schema`` object into an IRSchema.

    Raises:
        ValueError: If the document does not have the introspection shape
            (pydantic's ValidationError is a ValueError)
    """
    wire = WireSchema.model_validate(schema)
    return IRSchema(
        types=[_named_type(t) for t in wire.types],
        query_type=wire.query_type.name if wire.query_type else None,
        mutation_type=wire.mutation_type.name if wire.mutation_type else None,
        subscription_type=wire.subscription_type.name if wire.subscription_type else None,
    )


def parse_introspection_response(document: Any) -> IRSchema:
    """Extract the IRSchema from a decoded introspection response.

    Accepts either a full response (``{"data": {"__schema": ...}}``) or
    a response body with only ``{"__schema": ...}``.

    Raises:
        ProtocolError: If the response carries a top-level ``errors`` key
        TransportError: If the body is not an introspection response
    """
    if not isinstance(document, dict):
        raise TransportError(
            f"Expected a JSON object response, got {type(document).__name__}"
        )
    if "errors" in document:
        errors = document["errors"]
        raise ProtocolError(
            f"Introspection failed: {format_errors(errors if isinstance(errors, list) else [errors])}",
            errors,
        )

    data = document.get("data", document)
    schema = data.get("__schema") if isinstance(data, dict) else None
    if not isinstance(schema, dict):
        raise TransportError("Response has no data.__schema object")

    try:
        return schema_from_introspection(schema)
    except ValueError as e:
        raise TransportError(f"Malformed introspection schema: {e}") from e


class SchemaFetcher:
    """Fetches a service's schema through introspection.

    Example:
        fetcher = SchemaFetcher(auth=BearerAuth(token))
        schema = await fetcher.fetch("https://api.example.com/graphql")
    """

    def __init__(
        self,
        auth: Auth | None = None,
        *,
        timeout: float | None = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.auth = auth or NoAuth()
        self.timeout = timeout
        self.transport = transport

    async def fetch(self, url: str) -> IRSchema:
        """GET ``url`` with the introspection query and parse the schema.

        Raises:
            ProtocolError: If the service answers with errors
            TransportError: On any HTTP or decoding failure
        """
        document = await request_json(
            "GET",
            url,
            params={"query": INTROSPECTION_QUERY},
            auth=self.auth,
            timeout=self.timeout,
            transport=self.transport,
        )
        schema = parse_introspection_response(document)
        logger.info("Fetched %d types from %s", len(schema.types), url)
        return schema

    @staticmethod
    def load(path: str | Path) -> IRSchema:
        """Read a saved introspection response from a JSON file."""
        path = Path(path)
        try:
            text = path.read_text()
        except OSError as e:
            raise TransportError(f"Could not read {path}: {e}") from e
        try:
            document = json.loads(text)
        except ValueError as e:
            raise TransportError(f"{path} is not valid JSON: {e}") from e
        schema = parse_introspection_response(document)
        logger.info("Loaded %d types from %s", len(schema.types), path)
        return schema
