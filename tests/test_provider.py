"""Tests for the two-call compile/bind entry point."""

import asyncio
import json

import httpx
import pytest

from gql_provider.core.auth import ApiKeyAuth
from gql_provider.core.errors import CompilationError, ProtocolError, TransportError
from gql_provider.core.executor import Success
from gql_provider.core.provider import GraphQLProvider
from gql_provider.core.values import ScalarValue

from introspection_data import URL


def create(service, **kwargs):
    return asyncio.run(GraphQLProvider.create(URL, transport=service.transport, **kwargs))


class TestCreate:
    """Tests for GraphQLProvider.create."""

    def test_fetches_and_compiles(self, service):
        provider = create(service)

        assert provider.url == URL
        assert provider.registry.query_type == "Query"
        assert "Human" in provider.registry
        assert [r.method for r in service.requests] == ["GET"]

    def test_auth_headers_sent(self, service):
        create(service, auth=ApiKeyAuth("secret"))
        assert service.requests[0].headers["x-api-key"] == "secret"

    def test_from_schema_file(self, service, tmp_path, starwars_doc):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps({"data": {"__schema": starwars_doc}}))

        provider = create(service, schema_file=path)
        assert "Droid" in provider.registry
        assert service.requests == []

    def test_missing_schema_file_is_fatal(self, service, tmp_path):
        with pytest.raises(CompilationError) as exc_info:
            create(service, schema_file=tmp_path / "missing.json")
        assert isinstance(exc_info.value.__cause__, TransportError)
        assert service.requests == []

    def test_introspection_errors_are_fatal(self):
        errors = [{"message": "introspection disabled"}]
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"errors": errors}))

        with pytest.raises(CompilationError) as exc_info:
            asyncio.run(GraphQLProvider.create(URL, transport=transport))
        assert exc_info.value.errors == errors
        assert isinstance(exc_info.value.__cause__, ProtocolError)

    def test_transport_failure_is_fatal(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(CompilationError) as exc_info:
            asyncio.run(GraphQLProvider.create(URL, transport=httpx.MockTransport(handler)))
        assert isinstance(exc_info.value.__cause__, TransportError)


class TestBindQueries:
    """Tests for bind_query and bind_queries."""

    def test_bind_and_call(self, service):
        provider = create(service)
        hero = asyncio.run(provider.bind_query("{ hero { name } }"))

        result = asyncio.run(hero())
        assert isinstance(result, Success)
        assert result.data["hero"]["name"] == ScalarValue("R2-D2")

    def test_bind_many(self, service):
        provider = create(service)
        bound = asyncio.run(provider.bind_queries({
            "anon": "{ hero { name } }",
            "named": "query HeroName { hero { name } }",
        }))
        assert list(bound) == ["anon", "named"]
        assert bound["named"].name == "named"

    def test_one_rejection_aborts_all(self, service):
        provider = create(service)
        with pytest.raises(CompilationError):
            asyncio.run(provider.bind_queries({
                "ok": "{ hero { name } }",
                "bad": "{ villain }",
                "never": "query HeroName { hero { name } }",
            }))
        # Preflight stops at the first rejection
        assert len(service.posts) == 2
