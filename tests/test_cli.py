"""Tests for the command-line interface."""

import ast
import json

import pytest
from click.testing import CliRunner

from gql_provider import __version__
from gql_provider.cli import build_auth, main
from gql_provider.core.auth import BearerAuth, HeaderAuth, NoAuth

from introspection_data import URL


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def schema_file(tmp_path, starwars_doc):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps({"data": {"__schema": starwars_doc}}))
    return str(path)


class TestBuildAuth:
    """Tests for choosing the auth handler from options."""

    def test_defaults_to_no_auth(self):
        assert isinstance(build_auth(None, ()), NoAuth)

    def test_bearer(self):
        auth = build_auth("token", ())
        assert isinstance(auth, BearerAuth)
        assert auth.get_headers() == {"Authorization": "Bearer token"}

    def test_headers(self):
        auth = build_auth(None, ("X-Tenant:acme",))
        assert isinstance(auth, HeaderAuth)
        assert auth.get_headers() == {"X-Tenant": "acme"}


class TestTypesCommand:
    """Tests for `gql-provider types`."""

    def test_summary_from_schema_file(self, runner, schema_file):
        result = runner.invoke(main, ["types", URL, "--schema-file", schema_file])

        assert result.exit_code == 0, result.output
        assert "  Objects: 6" in result.output
        assert "  Interfaces: 1" in result.output
        assert "  Input Objects: 1" in result.output
        assert "Done! 11 types compiled." in result.output

    def test_verbose_lists_fields(self, runner, schema_file):
        result = runner.invoke(main, ["types", URL, "--schema-file", schema_file, "-v"])

        assert result.exit_code == 0, result.output
        assert "OBJECT Starship" in result.output
        assert "    pilot: Human" in result.output

    def test_bad_header_rejected(self, runner, schema_file):
        result = runner.invoke(
            main, ["types", URL, "--schema-file", schema_file, "--header", "nocolon"]
        )
        assert result.exit_code == 2
        assert "Name:Value" in result.output

    def test_bearer_and_header_conflict(self, runner, schema_file):
        result = runner.invoke(
            main,
            ["types", URL, "--schema-file", schema_file, "--bearer", "t", "--header", "A:b"],
        )
        assert result.exit_code == 2


class TestCheckCommand:
    """Tests for `gql-provider check`."""

    def test_requires_exactly_one_query_source(self, runner):
        result = runner.invoke(main, ["check", URL])
        assert result.exit_code == 2
        assert "exactly one of --query or --query-file" in result.output

    def test_syntax_error_fails(self, runner):
        result = runner.invoke(main, ["check", URL, "-q", "{ hero {"])
        assert result.exit_code == 1
        assert "Invalid GraphQL query" in result.output


class TestGenerateCommand:
    """Tests for `gql-provider generate`."""

    def test_writes_models(self, runner, schema_file, tmp_path):
        output = tmp_path / "client" / "models.py"
        result = runner.invoke(
            main, ["generate", URL, "-o", str(output), "--schema-file", schema_file]
        )

        assert result.exit_code == 0, result.output
        assert "Done! Generated models in" in result.output
        tree = ast.parse(output.read_text())
        names = [node.name for node in tree.body if isinstance(node, ast.ClassDef)]
        assert "Starship" in names

    def test_bad_query_file_option(self, runner, schema_file, tmp_path):
        result = runner.invoke(
            main,
            ["generate", URL, "-o", str(tmp_path / "m.py"), "--schema-file", schema_file,
             "-f", "missing-equals"],
        )
        assert result.exit_code == 2
        assert "NAME=PATH" in result.output

    def test_missing_query_file(self, runner, schema_file, tmp_path):
        missing = tmp_path / "missing.graphql"
        result = runner.invoke(
            main,
            ["generate", URL, "-o", str(tmp_path / "m.py"), "--schema-file", schema_file,
             "-f", f"hero={missing}"],
        )
        assert result.exit_code == 2
        assert "Cannot read query file" in result.output
        assert not (tmp_path / "m.py").exists()


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
