"""Shared fixtures: schemas and a mock GraphQL endpoint."""

import json

import httpx
import pytest

from gql_provider.core.introspection import schema_from_introspection

from introspection_data import person_schema, starwars_schema


class FakeService:
    """In-memory GraphQL endpoint behind an httpx.MockTransport.

    ``answers`` maps query text to the JSON body returned for it; unknown
    queries get a GraphQL validation error.
    """

    def __init__(self, schema_doc, answers=None):
        self.schema_doc = schema_doc
        self.answers = dict(answers or {})
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "GET":
            return httpx.Response(200, json={"data": {"__schema": self.schema_doc}})
        query = json.loads(request.content)["query"]
        if query in self.answers:
            return httpx.Response(200, json=self.answers[query])
        return httpx.Response(
            200,
            json={"errors": [{"message": "Cannot query field", "locations": [{"line": 1, "column": 3}]}]},
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def posts(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]


@pytest.fixture
def person_doc():
    return person_schema()


@pytest.fixture
def starwars_doc():
    return starwars_schema()


@pytest.fixture
def person_ir(person_doc):
    return schema_from_introspection(person_doc)


@pytest.fixture
def starwars_ir(starwars_doc):
    return schema_from_introspection(starwars_doc)


@pytest.fixture
def service(starwars_doc):
    return FakeService(
        starwars_doc,
        answers={
            "{ hero { name } }": {"data": {"hero": {"name": "R2-D2"}}},
            "query HeroName { hero { name } }": {"data": {"hero": {"name": "R2-D2"}}},
        },
    )
